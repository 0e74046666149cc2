"""
Parser Tests

Tests for the Markdown structure scanner.
"""

import pytest

from guidelint.documents.parser import Link, scan_markdown, slugify


class TestHeadings:
    """Tests for heading recognition."""

    def test_atx_levels(self) -> None:
        structure = scan_markdown("# One\n\n## Two\n\n###### Six\n")

        assert [(h.level, h.text, h.line) for h in structure.headings] == [
            (1, "One", 1),
            (2, "Two", 3),
            (6, "Six", 5),
        ]

    def test_atx_closing_sequence_stripped(self) -> None:
        structure = scan_markdown("## Setup ##\n")

        assert structure.headings[0].text == "Setup"

    def test_hash_inside_text_kept(self) -> None:
        structure = scan_markdown("# Using C#\n")

        assert structure.headings[0].text == "Using C#"

    def test_requires_space_after_hashes(self) -> None:
        structure = scan_markdown("#hashtag\n")

        assert structure.headings == []

    def test_seven_hashes_is_not_heading(self) -> None:
        structure = scan_markdown("####### Too deep\n")

        assert structure.headings == []

    def test_four_space_indent_is_not_heading(self) -> None:
        structure = scan_markdown("    # indented code\n")

        assert structure.headings == []

    def test_empty_heading(self) -> None:
        structure = scan_markdown("# Title\n##\n")

        assert structure.headings[1].level == 2
        assert structure.headings[1].text == ""

    def test_setext_headings(self) -> None:
        structure = scan_markdown("Title\n=====\n\nSection\n-------\n")

        assert [(h.level, h.text, h.line, h.style) for h in structure.headings] == [
            (1, "Title", 1, "setext"),
            (2, "Section", 4, "setext"),
        ]

    def test_thematic_break_is_not_heading(self) -> None:
        structure = scan_markdown("# Title\n\n---\n\nText\n")

        assert len(structure.headings) == 1

    def test_list_item_then_dashes_is_not_heading(self) -> None:
        structure = scan_markdown("- item\n---\n")

        assert structure.headings == []

    def test_lazy_list_continuation_then_dashes_is_not_heading(self) -> None:
        structure = scan_markdown("# T\n\n- item\ncontinuation\n---\n")

        assert [(h.level, h.text) for h in structure.headings] == [(1, "T")]

    def test_lazy_blockquote_continuation_then_equals_is_not_heading(self) -> None:
        structure = scan_markdown("> quoted\nmore\n===\n")

        assert structure.headings == []

    def test_setext_after_list_and_blank_line(self) -> None:
        structure = scan_markdown("- item\n\nSection\n---\n")

        assert [(h.level, h.text, h.line) for h in structure.headings] == [(2, "Section", 3)]

    def test_heading_inside_fence_ignored(self) -> None:
        structure = scan_markdown("# Real\n\n```bash\n# comment\n```\n")

        assert [h.text for h in structure.headings] == ["Real"]

    def test_line_offset(self) -> None:
        structure = scan_markdown("# Title\n", line_offset=4)

        assert structure.headings[0].line == 5


class TestFences:
    """Tests for fenced code blocks."""

    def test_closed_fence(self) -> None:
        structure = scan_markdown("```python\nx = 1\n```\n")

        fence = structure.fences[0]
        assert fence.closed is True
        assert fence.start_line == 1
        assert fence.end_line == 3
        assert fence.language == "python"
        assert structure.unclosed_fences == []

    def test_unclosed_fence(self) -> None:
        structure = scan_markdown("# T\n\n```yaml\nkey: value\n")

        assert len(structure.unclosed_fences) == 1
        assert structure.unclosed_fences[0].start_line == 3
        assert structure.unclosed_fences[0].end_line is None

    def test_shorter_run_does_not_close(self) -> None:
        structure = scan_markdown("````md\n```\ninner\n```\n````\n")

        assert len(structure.fences) == 1
        assert structure.fences[0].end_line == 5

    def test_tilde_fence_not_closed_by_backticks(self) -> None:
        structure = scan_markdown("~~~\ncode\n```\n")

        assert structure.fences[0].closed is False

    def test_closing_fence_with_text_does_not_close(self) -> None:
        structure = scan_markdown("```\ncode\n``` not a close\n")

        assert structure.fences[0].closed is False

    def test_backtick_in_info_string_is_not_fence(self) -> None:
        structure = scan_markdown("``` foo`bar\n")

        assert structure.fences == []

    def test_links_inside_fence_ignored(self) -> None:
        structure = scan_markdown("```\n[x](missing.md)\n```\n")

        assert structure.links == []


class TestLinks:
    """Tests for link extraction."""

    def test_inline_link(self) -> None:
        structure = scan_markdown("See [the guide](guide.md) first.\n")

        link = structure.links[0]
        assert link.text == "the guide"
        assert link.target == "guide.md"
        assert link.line == 1
        assert link.is_image is False

    def test_link_with_title(self) -> None:
        structure = scan_markdown('[a](b.md "Title")\n')

        assert structure.links[0].target == "b.md"

    def test_image(self) -> None:
        structure = scan_markdown("![diagram](img/arch.png)\n")

        assert structure.links[0].is_image is True
        assert structure.links[0].target == "img/arch.png"

    def test_multiple_links_on_line(self) -> None:
        structure = scan_markdown("[a](a.md) and [b](b.md)\n")

        assert [l.target for l in structure.links] == ["a.md", "b.md"]

    def test_code_span_ignored(self) -> None:
        structure = scan_markdown("Write `[x](y.md)` literally.\n")

        assert structure.links == []

    def test_reference_definition(self) -> None:
        structure = scan_markdown("[android]: ./android.md\n")

        assert structure.links[0].text == "android"
        assert structure.links[0].target == "./android.md"

    def test_link_in_list_item(self) -> None:
        structure = scan_markdown("- [iOS](ios.md)\n")

        assert structure.links[0].target == "ios.md"

    def test_angle_bracket_target_with_spaces(self) -> None:
        structure = scan_markdown("[x](<my guide.md>)\n")

        assert structure.links[0].target == "my guide.md"
        assert structure.links[0].path_part == "my guide.md"

    def test_angle_bracket_target_with_title(self) -> None:
        structure = scan_markdown('[x](<my guide.md#setup> "Setup")\n')

        assert structure.links[0].target == "my guide.md#setup"
        assert structure.links[0].fragment == "setup"


class TestLinkProperties:
    """Tests for Link helpers."""

    @pytest.mark.parametrize(
        "target,external",
        [
            ("https://example.com", True),
            ("mailto:team@example.com", True),
            ("//cdn.example.com/x.js", True),
            ("guide.md", False),
            ("../docs/guide.md", False),
        ],
    )
    def test_is_external(self, target: str, external: bool) -> None:
        assert Link(text="", target=target, line=1).is_external is external

    def test_anchor(self) -> None:
        link = Link(text="", target="#setup", line=1)

        assert link.is_anchor is True
        assert link.fragment == "setup"
        assert link.path_part == ""

    def test_path_and_fragment(self) -> None:
        link = Link(text="", target="my%20guide.md#Setup", line=1)

        assert link.path_part == "my guide.md"
        assert link.fragment == "Setup"


class TestSlugify:
    """Tests for anchor slugs."""

    def test_punctuation_removed(self) -> None:
        assert slugify("Hello, World!") == "hello-world"

    def test_code_and_hyphens(self) -> None:
        assert slugify("Set up `npm` scripts") == "set-up-npm-scripts"

    def test_underscores_kept(self) -> None:
        assert slugify("snake_case Names") == "snake_case-names"
