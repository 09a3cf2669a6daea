"""Detection of block boundaries in the lines of a Markdown document."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto

from zelkova.markdown.nodes import ListMarker, MarkerKind

_U32_MAX = 0xFFFFFFFF
_NUMBER_RE = re.compile(r"\+?[0-9]+")
_SEPARATOR_CELLS = {":", "-:", ":-:", ":-"}


class BlockKind(Enum):
    """The kind of block a slice of lines forms."""

    HEADING = auto()
    PARAGRAPH = auto()
    CODE_BLOCK = auto()
    LIST = auto()
    BLOCK_QUOTE = auto()
    TABLE = auto()
    THEMATIC_BREAK = auto()
    MATH_BLOCK = auto()
    HTML_BLOCK = auto()
    FOOTNOTE_DEF = auto()


@dataclass
class BlockSlice:
    """An inclusive range of lines forming one block, with its kind's data."""

    start: int
    end: int
    kind: BlockKind
    level: int | None = None
    language: str | None = None
    first_marker: ListMarker | None = None
    label: str | None = None


@dataclass
class FenceInfo:
    """The opening marker of a code fence and its info string."""

    marker: str
    language: str | None = None


def _is_blank(line: str) -> bool:
    return not line.strip()


def _interrupts_paragraph(line: str) -> bool:
    return (
        parse_atx_heading(line) is not None
        or parse_code_fence(line) is not None
        or is_thematic_break(line)
        or line.startswith(">")
        or parse_list_marker(line) is not None
    )


def detect_blocks(lines: Sequence[str]) -> list[BlockSlice]:
    """Split the lines of a document into block slices."""
    lines = list(lines)
    n = len(lines)
    slices: list[BlockSlice] = []
    i = 0

    while i < n:
        line = lines[i]

        if _is_blank(line):
            i += 1
            continue

        level = parse_atx_heading(line)
        if level is not None:
            slices.append(BlockSlice(i, i, BlockKind.HEADING, level=level))
            i += 1
            continue

        fence = parse_code_fence(line)
        if fence is not None:
            start = i
            i += 1
            while i < n and not is_closing_fence(lines[i], fence.marker):
                i += 1
            slices.append(
                BlockSlice(start, min(i, n - 1), BlockKind.CODE_BLOCK, language=fence.language)
            )
            i += 1
            continue

        if line.strip() == "$$":
            start = i
            i += 1
            while i < n and lines[i].strip() != "$$":
                i += 1
            slices.append(BlockSlice(start, min(i, n - 1), BlockKind.MATH_BLOCK))
            i += 1
            continue

        if is_thematic_break(line):
            slices.append(BlockSlice(i, i, BlockKind.THEMATIC_BREAK))
            i += 1
            continue

        if i + 1 < n and is_table_separator(lines[i + 1]) and is_table_row(line):
            start = i
            i += 2
            while i < n and is_table_row(lines[i]):
                i += 1
            slices.append(BlockSlice(start, i - 1, BlockKind.TABLE))
            continue

        if line.startswith(">"):
            start = i
            while i < n and lines[i].startswith(">"):
                i += 1
            slices.append(BlockSlice(start, i - 1, BlockKind.BLOCK_QUOTE))
            continue

        marker = parse_list_marker(line)
        if marker is not None:
            start = i
            while i < n and not _is_blank(lines[i]):
                current = lines[i]
                if parse_list_marker(current) is not None or current.startswith((" ", "\t")):
                    i += 1
                else:
                    break
            slices.append(BlockSlice(start, i - 1, BlockKind.LIST, first_marker=marker))
            continue

        label = parse_footnote_def(line)
        if label is not None:
            start = i
            i += 1
            while i < n and not _is_blank(lines[i]):
                i += 1
            slices.append(BlockSlice(start, i - 1, BlockKind.FOOTNOTE_DEF, label=label))
            continue

        if line.lstrip().startswith("<"):
            start = i
            while i < n and not _is_blank(lines[i]):
                i += 1
            slices.append(BlockSlice(start, i - 1, BlockKind.HTML_BLOCK))
            continue

        start = i
        while i < n and not _is_blank(lines[i]):
            i += 1
            if i < n and _interrupts_paragraph(lines[i]):
                break
        slices.append(BlockSlice(start, i - 1, BlockKind.PARAGRAPH))

    return slices


def _leading_run(text: str, char: str) -> int:
    return len(text) - len(text.lstrip(char))


def parse_atx_heading(line: str) -> int | None:
    """Return the level of an ATX heading line, or None."""
    trimmed = line.lstrip()
    level = _leading_run(trimmed, "#")
    if 1 <= level <= 6:
        rest = trimmed[level:]
        if not rest or rest.startswith(" "):
            return level
    return None


def parse_code_fence(line: str) -> FenceInfo | None:
    """Return the fence marker and language of an opening code fence, or None."""
    trimmed = line.strip()
    if trimmed.startswith("```"):
        marker_char = "`"
    elif trimmed.startswith("~~~"):
        marker_char = "~"
    else:
        return None
    marker_len = _leading_run(trimmed, marker_char)
    lang = trimmed[marker_len:].strip()
    return FenceInfo(marker=marker_char * marker_len, language=lang or None)


def is_closing_fence(line: str, marker: str) -> bool:
    """True when the line closes a fence opened with the given marker."""
    if not marker:
        return False
    trimmed = line.strip()
    fence_char = marker[0]
    if not trimmed.startswith(fence_char):
        return False
    return _leading_run(trimmed, fence_char) >= 3


def is_thematic_break(line: str) -> bool:
    """True for a line of three or more '-', '*' or '_' with optional blanks."""
    trimmed = line.strip()
    if not trimmed:
        return False
    first = trimmed[0]
    if first not in "-*_":
        return False
    return trimmed.count(first) >= 3 and all(c in (first, " ", "\t") for c in trimmed)


def is_table_row(line: str) -> bool:
    """True when the line starts or ends with a pipe."""
    trimmed = line.strip()
    return trimmed.startswith("|") or trimmed.endswith("|")


def is_table_separator(line: str) -> bool:
    """True for the separator line under a table header."""
    trimmed = line.strip()
    if "-" not in trimmed:
        return False
    for cell in trimmed.split("|"):
        cell = cell.strip()
        if not cell or cell in _SEPARATOR_CELLS:
            continue
        if not all(c == "-" for c in cell):
            return False
    return True


def parse_list_marker(line: str) -> ListMarker | None:
    """Return the list marker that opens the line, or None."""
    trimmed = line.lstrip()
    if trimmed.startswith("- "):
        return ListMarker(MarkerKind.DASH)
    if trimmed.startswith("* "):
        return ListMarker(MarkerKind.STAR)
    if trimmed.startswith("+ "):
        return ListMarker(MarkerKind.PLUS)
    dot_pos = trimmed.find(". ")
    if dot_pos == -1:
        return None
    num_str = trimmed[:dot_pos]
    if not _NUMBER_RE.fullmatch(num_str):
        return None
    number = int(num_str)
    if number > _U32_MAX:
        return None
    return ListMarker(MarkerKind.NUMBER, number)


def parse_footnote_def(line: str) -> str | None:
    """Return the label of a footnote definition line, or None."""
    trimmed = line.strip()
    if not trimmed.startswith("[^"):
        return None
    end = trimmed.find("]:")
    if end == -1:
        return None
    return trimmed[2:end]