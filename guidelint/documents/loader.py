"""
Guide Loader

Discovers Markdown guides on disk and loads them into GuideDocument
instances with parsed frontmatter and document structure.
"""

import fnmatch
import hashlib
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple

import yaml

from guidelint.documents.parser import DocumentStructure, scan_markdown

logger = logging.getLogger(__name__)


class GuideParseError(Exception):
    """Raised when a guide file cannot be read or parsed."""

    pass


MARKDOWN_SUFFIXES = (".md", ".markdown")

# Checked in order; the first platform with a matching filename token wins.
PLATFORM_KEYWORDS: List[Tuple[str, Tuple[str, ...]]] = [
    ("cross-platform", ("cross", "crossplatform", "react-native", "reactnative", "flutter", "xamarin")),
    ("android", ("android", "kotlin")),
    ("ios", ("ios", "swift", "swiftui")),
    ("web", ("web", "frontend", "react", "vue", "angular")),
    ("backend", ("backend", "server", "api")),
    ("database", ("database", "db", "sql", "postgres", "mysql")),
    ("devops", ("devops", "kubernetes", "k8s", "docker", "ci", "cicd", "infrastructure")),
]


@dataclass
class GuideDocument:
    """
    A loaded Markdown guide.

    ``body`` is the content without frontmatter; ``body_offset`` is the
    number of lines the frontmatter occupied, so structure line numbers
    refer to the file on disk.
    """

    path: Path
    title: str
    content: str
    body: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    structure: DocumentStructure = field(default_factory=DocumentStructure)
    platform: Optional[str] = None
    body_offset: int = 0

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def normalized_body(self) -> str:
        return " ".join(self.body.split())

    @property
    def content_hash(self) -> str:
        return hashlib.sha256(self.normalized_body.encode("utf-8")).hexdigest()

    @property
    def anchors(self) -> Set[str]:
        """Heading anchors, with GitHub's ``-1``, ``-2`` suffixes for repeats."""
        seen: Dict[str, int] = {}
        anchors: Set[str] = set()
        for heading in self.structure.headings:
            slug = heading.slug
            count = seen.get(slug, 0)
            anchors.add(slug if count == 0 else f"{slug}-{count}")
            seen[slug] = count + 1
        return anchors

    def to_dict(self) -> Dict[str, Any]:
        """Convert guide to dictionary."""
        return {
            "path": str(self.path),
            "title": self.title,
            "platform": self.platform,
            "headings": len(self.structure.headings),
            "fences": len(self.structure.fences),
            "links": len(self.structure.links),
            "lines": self.structure.line_count + self.body_offset,
            "content_hash": self.content_hash,
        }


@dataclass
class LoadError:
    """A file that could not be loaded."""

    path: Path
    message: str


@dataclass
class GuideSet:
    """All guides loaded from a set of roots, plus load failures."""

    guides: List[GuideDocument] = field(default_factory=list)
    errors: List[LoadError] = field(default_factory=list)
    roots: List[Path] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.guides)

    def __iter__(self):
        return iter(self.guides)

    def by_path(self, path: Path) -> Optional[GuideDocument]:
        resolved = Path(path).resolve()
        for guide in self.guides:
            if guide.path.resolve() == resolved:
                return guide
        return None

    def root_for(self, path: Path) -> Optional[Path]:
        """The directory of the deepest root containing path; file roots give their parent."""
        resolved = Path(path).resolve()
        best: Optional[Path] = None
        for root in self.roots:
            base = root.resolve()
            if base.is_file():
                base = base.parent
            if base == resolved or base in resolved.parents:
                if best is None or len(base.parts) > len(best.parts):
                    best = base
        return best

    def find_index(self, index_names: Sequence[str]) -> Optional[GuideDocument]:
        """
        Find the index document.

        Names are tried in order; for each name the shallowest match wins.
        """
        for name in index_names:
            matches = [g for g in self.guides if g.path.name == name]
            if matches:
                matches.sort(key=lambda g: (len(g.path.parts), str(g.path)))
                return matches[0]
        return None


def parse_frontmatter(content: str) -> Tuple[Dict[str, Any], str, int]:
    """
    Parse YAML frontmatter from markdown content.

    Args:
        content: Full markdown content with optional frontmatter

    Returns:
        Tuple of (frontmatter_dict, body_content, body_line_offset)

    Raises:
        GuideParseError: If the frontmatter is not valid YAML or not a mapping
    """
    if content.startswith("\ufeff"):
        content = content[1:]
    lines = content.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != "---":
        return {}, content, 0

    end_index = None
    for index in range(1, len(lines)):
        if lines[index].rstrip() in ("---", "..."):
            end_index = index
            break
    if end_index is None:
        return {}, content, 0

    frontmatter_str = "".join(lines[1:end_index])
    body = "".join(lines[end_index + 1 :])

    try:
        frontmatter = yaml.safe_load(frontmatter_str) or {}
    except yaml.YAMLError as e:
        raise GuideParseError(f"Invalid YAML frontmatter: {e}")

    if not isinstance(frontmatter, dict):
        raise GuideParseError(
            f"Frontmatter must be a mapping, got {type(frontmatter).__name__}"
        )

    return frontmatter, body, end_index + 1


def infer_platform(path: Path) -> Optional[str]:
    """Infer the platform a guide covers from its filename."""
    stem = path.stem.lower()
    tokens = set(re.split(r"[-_.\s]+", stem))
    joined = "-".join(t for t in re.split(r"[-_.\s]+", stem) if t)

    for platform, keywords in PLATFORM_KEYWORDS:
        for keyword in keywords:
            if "-" in keyword:
                if keyword in joined:
                    return platform
            elif keyword in tokens:
                return platform
    return None


def _title_from_filename(path: Path) -> str:
    return path.stem.replace("_", " ").replace("-", " ").title()


def load_guide(path: Path) -> GuideDocument:
    """
    Load a guide from a Markdown file.

    Args:
        path: Path to the guide file

    Returns:
        Loaded GuideDocument

    Raises:
        GuideParseError: If file cannot be read or parsed
    """
    path = Path(path)
    if not path.exists():
        raise GuideParseError(f"Guide file not found: {path}")

    try:
        content = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise GuideParseError(f"Cannot read guide file {path}: {e}")

    frontmatter, body, offset = parse_frontmatter(content)
    structure = scan_markdown(body, line_offset=offset)

    title = frontmatter.get("title")
    if not isinstance(title, str) or not title.strip():
        title = next(
            (h.text for h in structure.headings if h.level == 1 and h.text),
            _title_from_filename(path),
        )

    platform = frontmatter.get("platform")
    if isinstance(platform, str) and platform.strip():
        platform = platform.strip().lower()
    else:
        platform = infer_platform(path)

    return GuideDocument(
        path=path,
        title=title.strip(),
        content=content,
        body=body,
        metadata=frontmatter,
        structure=structure,
        platform=platform,
        body_offset=offset,
    )


def _is_hidden_path(path: Path) -> bool:
    return any(part.startswith(".") and part not in (".", "..") for part in path.parts)


def _is_excluded(relative: Path, exclude: Sequence[str]) -> bool:
    posix = relative.as_posix()
    for pattern in exclude:
        if fnmatch.fnmatch(posix, pattern) or fnmatch.fnmatch(relative.name, pattern):
            return True
    return False


def discover_guides(
    root: Path,
    recursive: bool = True,
    exclude: Sequence[str] = (),
) -> List[Path]:
    """
    Find Markdown guides under a root.

    Args:
        root: Directory to search, or a single Markdown file
        recursive: Whether to search subdirectories
        exclude: Glob patterns matched against relative paths and filenames

    Returns:
        Sorted list of guide paths
    """
    root = Path(root)
    if root.is_file():
        return [root] if root.suffix.lower() in MARKDOWN_SUFFIXES else []
    if not root.is_dir():
        return []

    glob_method = root.rglob if recursive else root.glob
    files: List[Path] = []
    for path in glob_method("*"):
        if not path.is_file() or path.suffix.lower() not in MARKDOWN_SUFFIXES:
            continue
        relative = path.relative_to(root)
        if _is_hidden_path(relative):
            continue
        if _is_excluded(relative, exclude):
            continue
        files.append(path)

    files.sort()
    logger.debug(f"Discovered {len(files)} guides under {root}")
    return files


def load_guide_set(
    paths: Iterable[Path],
    recursive: bool = True,
    exclude: Sequence[str] = (),
) -> GuideSet:
    """
    Load every guide under the given paths.

    Files that fail to load are recorded in ``GuideSet.errors`` instead of
    aborting the load. The same file reached through two roots is loaded once.

    Args:
        paths: Directories and/or Markdown files
        recursive: Whether to search subdirectories
        exclude: Glob patterns to skip

    Returns:
        GuideSet with loaded guides and load errors
    """
    guide_set = GuideSet()
    seen: Set[Path] = set()

    for root in paths:
        root = Path(root)
        guide_set.roots.append(root)
        if not root.exists():
            guide_set.errors.append(LoadError(path=root, message=f"Path not found: {root}"))
            continue

        for path in discover_guides(root, recursive=recursive, exclude=exclude):
            resolved = path.resolve()
            if resolved in seen:
                continue
            seen.add(resolved)
            try:
                guide_set.guides.append(load_guide(path))
            except GuideParseError as e:
                logger.debug(f"Failed to load {path}: {e}")
                guide_set.errors.append(LoadError(path=path, message=str(e)))

    return guide_set

