import pytest

from zelkova.markdown.block import (
    BlockKind,
    detect_blocks,
    is_closing_fence,
    is_table_separator,
    is_thematic_break,
    parse_atx_heading,
    parse_code_fence,
    parse_footnote_def,
    parse_list_marker,
)
from zelkova.markdown.nodes import ListMarker, MarkerKind


def test_detect_heading():
    slices = detect_blocks(["# Hello", "## World"])
    assert len(slices) == 2
    assert slices[0].kind is BlockKind.HEADING and slices[0].level == 1
    assert slices[1].kind is BlockKind.HEADING and slices[1].level == 2


def test_detect_code_block():
    slices = detect_blocks(["```rust", "fn main() {}", "```"])
    assert len(slices) == 1
    assert slices[0].kind is BlockKind.CODE_BLOCK
    assert slices[0].language == "rust"
    assert slices[0].start == 0
    assert slices[0].end == 2


def test_unclosed_code_block_runs_to_last_line():
    slices = detect_blocks(["```", "a", "b"])
    assert len(slices) == 1
    assert slices[0].end == 2
    assert slices[0].language is None


def test_detect_thematic_break():
    slices = detect_blocks(["---", "***", "___"])
    assert len(slices) == 3
    assert all(s.kind is BlockKind.THEMATIC_BREAK for s in slices)


def test_detect_list():
    slices = detect_blocks(["- item 1", "- item 2", "  continuation"])
    assert len(slices) == 1
    assert slices[0].kind is BlockKind.LIST
    assert slices[0].first_marker == ListMarker(MarkerKind.DASH)
    assert slices[0].end == 2


def test_detect_block_quote():
    slices = detect_blocks(["> quoted", "> still quoted"])
    assert len(slices) == 1
    assert slices[0].kind is BlockKind.BLOCK_QUOTE


def test_detect_table():
    slices = detect_blocks(["| a | b |", "| --- | --- |", "| 1 | 2 |"])
    assert len(slices) == 1
    assert slices[0].kind is BlockKind.TABLE
    assert (slices[0].start, slices[0].end) == (0, 2)


def test_detect_paragraph():
    slices = detect_blocks(["Hello world", "", "Second paragraph"])
    assert len(slices) == 2
    assert slices[0].kind is BlockKind.PARAGRAPH
    assert slices[1].kind is BlockKind.PARAGRAPH


def test_paragraph_interrupted_by_heading():
    slices = detect_blocks(["text", "more", "# Head"])
    assert [s.kind for s in slices] == [BlockKind.PARAGRAPH, BlockKind.HEADING]
    assert slices[0].end == 1


def test_detect_math_block():
    slices = detect_blocks(["$$", "E = mc^2", "$$"])
    assert len(slices) == 1
    assert slices[0].kind is BlockKind.MATH_BLOCK
    assert slices[0].end == 2


def test_detect_footnote_definition():
    slices = detect_blocks(["[^note]: first", "second", "", "after"])
    assert slices[0].kind is BlockKind.FOOTNOTE_DEF
    assert slices[0].label == "note"
    assert slices[0].end == 1
    assert slices[1].kind is BlockKind.PARAGRAPH


def test_detect_html_block():
    slices = detect_blocks(["<div>", "inner", "</div>"])
    assert len(slices) == 1
    assert slices[0].kind is BlockKind.HTML_BLOCK


def test_empty_input_gives_no_slices():
    assert detect_blocks([]) == []
    assert detect_blocks(["", "   "]) == []


def test_parse_list_marker_variants():
    assert parse_list_marker("- item") == ListMarker(MarkerKind.DASH)
    assert parse_list_marker("* item") == ListMarker(MarkerKind.STAR)
    assert parse_list_marker("+ item") == ListMarker(MarkerKind.PLUS)
    assert parse_list_marker("1. item") == ListMarker(MarkerKind.NUMBER, 1)
    assert parse_list_marker("plain text") is None


@pytest.mark.parametrize("line", ["a. item", "-1. item", ". item", "1.item"])
def test_parse_list_marker_rejects_non_numbers(line):
    assert parse_list_marker(line) is None


def test_parse_atx_heading():
    assert parse_atx_heading("### Three") == 3
    assert parse_atx_heading("#") == 1
    assert parse_atx_heading("#NoSpace") is None
    assert parse_atx_heading("####### seven") is None


def test_parse_code_fence_and_closing():
    fence = parse_code_fence("~~~~ python ")
    assert fence.marker == "~~~~"
    assert fence.language == "python"
    assert parse_code_fence("``not") is None
    assert is_closing_fence("~~~", fence.marker)
    assert not is_closing_fence("```", fence.marker)
    assert not is_closing_fence("```", "")


def test_thematic_break_rules():
    assert is_thematic_break("- - -")
    assert not is_thematic_break("--")
    assert not is_thematic_break("-*-")


def test_table_separator_rules():
    assert is_table_separator("| --- | :-: |")
    assert is_table_separator("| :- | -: |")
    assert not is_table_separator("| a | b |")
    assert not is_table_separator("| x- |")


def test_parse_footnote_def():
    assert parse_footnote_def("[^label]: text") == "label"
    assert parse_footnote_def("[^label] text") is None
    assert parse_footnote_def("[label]: text") is None