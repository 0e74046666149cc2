"""
Markdown Structure Scanner

Line-oriented scan of a Markdown document into headings, fenced code
blocks and links. Only the structure the lint rules need is recognised;
this is not a renderer.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import unquote, urlsplit

_FENCE_OPEN_RE = re.compile(r"^( {0,3})(`{3,}|~{3,})(.*)$")
_ATX_HEADING_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?[ \t]*$")
_ATX_CLOSING_RE = re.compile(r"(?:^|[ \t]+)#+[ \t]*$")
_SETEXT_H1_RE = re.compile(r"^ {0,3}=+[ \t]*$")
_SETEXT_H2_RE = re.compile(r"^ {0,3}-+[ \t]*$")
_THEMATIC_BREAK_RE = re.compile(r"^ {0,3}(?:(?:-[ \t]*){3,}|(?:\*[ \t]*){3,}|(?:_[ \t]*){3,})$")
_BLOCK_START_RE = re.compile(r"^ {0,3}(?:[-+*][ \t]|\d{1,9}[.)][ \t]|>)")
_CODE_SPAN_RE = re.compile(r"(`+)(?:.+?)\1")
_INLINE_LINK_RE = re.compile(
    r"(!?)\[((?:[^\[\]]|\[[^\[\]]*\])*)\]\(\s*(?:<([^<>\n]*)>|([^\s()<>]*(?:\([^\s()]*\)[^\s()<>]*)*))"
    r"(?:\s+(?:\"[^\"]*\"|'[^']*'|\([^)]*\)))?\s*\)"
)
_REFERENCE_DEF_RE = re.compile(r"^ {0,3}\[([^\]]+)\]:[ \t]*<?([^\s>]+)>?(?:[ \t]+.*)?$")
_SLUG_STRIP_RE = re.compile(r"[^\w\- ]", re.UNICODE)


@dataclass
class Heading:
    """A heading found in a document."""

    level: int
    text: str
    line: int
    style: str = "atx"

    @property
    def slug(self) -> str:
        return slugify(self.text)


@dataclass
class CodeFence:
    """A fenced code block. ``end_line`` is None when the fence never closes."""

    marker: str
    length: int
    info: str
    start_line: int
    end_line: Optional[int] = None

    @property
    def closed(self) -> bool:
        return self.end_line is not None

    @property
    def language(self) -> str:
        return self.info.split()[0] if self.info.strip() else ""


@dataclass
class Link:
    """An inline link, image or reference definition."""

    text: str
    target: str
    line: int
    is_image: bool = False

    @property
    def is_external(self) -> bool:
        if self.target.startswith("//"):
            return True
        return bool(re.match(r"^[a-zA-Z][a-zA-Z0-9+.-]*:", self.target))

    @property
    def is_anchor(self) -> bool:
        return self.target.startswith("#")

    @property
    def path_part(self) -> str:
        """Target without fragment or query, URL-unquoted."""
        parts = urlsplit(self.target)
        return unquote(parts.path)

    @property
    def fragment(self) -> str:
        return unquote(urlsplit(self.target).fragment)


@dataclass
class DocumentStructure:
    """Structural model of one Markdown document."""

    headings: List[Heading] = field(default_factory=list)
    fences: List[CodeFence] = field(default_factory=list)
    links: List[Link] = field(default_factory=list)
    line_count: int = 0

    @property
    def unclosed_fences(self) -> List[CodeFence]:
        return [f for f in self.fences if not f.closed]


def slugify(text: str) -> str:
    """
    Build a GitHub-style anchor slug for a heading.

    Args:
        text: Heading text

    Returns:
        Lowercase slug with punctuation dropped and spaces turned into hyphens
    """
    slug = text.strip().lower()
    slug = _SLUG_STRIP_RE.sub("", slug)
    return slug.replace(" ", "-")


def _strip_atx_closing(content: str) -> str:
    return _ATX_CLOSING_RE.sub("", content).strip()


def _mask_code_spans(line: str) -> str:
    return _CODE_SPAN_RE.sub(lambda m: " " * len(m.group(0)), line)


def _extract_links(line: str, line_no: int) -> List[Link]:
    links: List[Link] = []
    ref_match = _REFERENCE_DEF_RE.match(line)
    if ref_match:
        links.append(Link(text=ref_match.group(1), target=ref_match.group(2), line=line_no))
        return links

    masked = _mask_code_spans(line)
    for match in _INLINE_LINK_RE.finditer(masked):
        target = match.group(3) if match.group(3) is not None else match.group(4)
        if not target:
            continue
        links.append(
            Link(
                text=match.group(2),
                target=target,
                line=line_no,
                is_image=match.group(1) == "!",
            )
        )
    return links


def _closes_fence(line: str, fence: CodeFence) -> bool:
    stripped = line.lstrip(" ")
    if len(line) - len(stripped) > 3:
        return False
    run = len(stripped) - len(stripped.lstrip(fence.marker))
    if run < fence.length:
        return False
    return stripped[run:].strip() == ""


def scan_markdown(text: str, line_offset: int = 0) -> DocumentStructure:
    """
    Scan Markdown text into a DocumentStructure.

    Nothing inside a fenced code block is treated as a heading or link.

    Args:
        text: Markdown source (without frontmatter)
        line_offset: Added to every reported line number

    Returns:
        DocumentStructure with 1-based line numbers
    """
    lines = text.splitlines()
    structure = DocumentStructure(line_count=len(lines))

    open_fence: Optional[CodeFence] = None
    paragraph: List[str] = []
    paragraph_start = 0
    # Inside a list item or blockquote, unindented lines are lazy continuations.
    in_container = False

    for index, line in enumerate(lines):
        line_no = index + 1 + line_offset

        if open_fence is not None:
            if _closes_fence(line, open_fence):
                open_fence.end_line = line_no
                open_fence = None
            continue

        fence_match = _FENCE_OPEN_RE.match(line)
        if fence_match:
            run, info = fence_match.group(2), fence_match.group(3).strip()
            if not (run[0] == "`" and "`" in info):
                open_fence = CodeFence(
                    marker=run[0],
                    length=len(run),
                    info=info,
                    start_line=line_no,
                )
                structure.fences.append(open_fence)
                paragraph = []
                continue

        if not line.strip():
            paragraph = []
            in_container = False
            continue

        if paragraph and _SETEXT_H1_RE.match(line):
            structure.headings.append(
                Heading(level=1, text=" ".join(paragraph), line=paragraph_start, style="setext")
            )
            paragraph = []
            continue

        if paragraph and _SETEXT_H2_RE.match(line):
            structure.headings.append(
                Heading(level=2, text=" ".join(paragraph), line=paragraph_start, style="setext")
            )
            paragraph = []
            continue

        atx_match = _ATX_HEADING_RE.match(line)
        if atx_match:
            content = _strip_atx_closing(atx_match.group(2) or "")
            structure.headings.append(
                Heading(level=len(atx_match.group(1)), text=content, line=line_no)
            )
            structure.links.extend(_extract_links(content, line_no))
            paragraph = []
            in_container = False
            continue

        if _THEMATIC_BREAK_RE.match(line):
            paragraph = []
            in_container = False
            continue

        structure.links.extend(_extract_links(line, line_no))

        if _BLOCK_START_RE.match(line):
            paragraph = []
            in_container = True
            continue

        if in_container or line.startswith("    ") or line.startswith("\t"):
            paragraph = []
            continue

        if not paragraph:
            paragraph_start = line_no
        paragraph.append(line.strip())

    return structure
