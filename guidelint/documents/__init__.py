"""
Guidelint Documents

Discovery, loading and structural scanning of Markdown guides.
"""

from guidelint.documents.loader import (
    MARKDOWN_SUFFIXES,
    GuideDocument,
    GuideParseError,
    GuideSet,
    LoadError,
    discover_guides,
    infer_platform,
    load_guide,
    load_guide_set,
    parse_frontmatter,
)
from guidelint.documents.parser import (
    CodeFence,
    DocumentStructure,
    Heading,
    Link,
    scan_markdown,
    slugify,
)

__all__ = [
    "CodeFence",
    "DocumentStructure",
    "GuideDocument",
    "GuideParseError",
    "GuideSet",
    "Heading",
    "Link",
    "LoadError",
    "MARKDOWN_SUFFIXES",
    "discover_guides",
    "infer_platform",
    "load_guide",
    "load_guide_set",
    "parse_frontmatter",
    "scan_markdown",
    "slugify",
]
