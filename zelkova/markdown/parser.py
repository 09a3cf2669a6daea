"""Parsing of a whole Markdown document into a syntax tree."""

from __future__ import annotations

from collections.abc import Sequence

from zelkova.markdown.block import BlockKind, BlockSlice, detect_blocks, parse_list_marker
from zelkova.markdown.inline import parse_inline
from zelkova.markdown.nodes import (
    Block,
    BlockQuote,
    CodeBlock,
    FootnoteDefinition,
    Heading,
    HtmlBlock,
    Inline,
    ListBlock,
    ListItem,
    MarkdownDoc,
    MathBlock,
    Paragraph,
    Table,
    TableAlign,
    ThematicBreak,
)

_INDENTS = ("  ", "\t")


def parse(text: str) -> MarkdownDoc:
    """Parse a Markdown string into a document with frontmatter and blocks."""
    frontmatter, body = split_frontmatter(text)
    lines = _split_lines(body)
    blocks = [_build_block(lines, piece) for piece in detect_blocks(lines)]
    return MarkdownDoc(frontmatter=frontmatter, blocks=blocks)


def split_frontmatter(text: str) -> tuple[str | None, str]:
    """Separate a leading '---' delimited frontmatter section from the body.

    Returns the trimmed frontmatter (or None) and the remaining body.
    """
    trimmed = text.lstrip()
    if not trimmed.startswith("---"):
        return None, text
    rest = trimmed[3:]
    end = rest.find("---")
    if end == -1:
        return None, text
    return rest[:end].strip(), rest[end + 3 :].lstrip()


def _split_lines(text: str) -> list[str]:
    """Split on '\\n', dropping a final empty line and trailing '\\r'."""
    if not text:
        return []
    parts = text.split("\n")
    if text.endswith("\n"):
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def _join(lines: Sequence[str]) -> str:
    return "\n".join(lines)


def _build_block(lines: list[str], piece: BlockSlice) -> Block:
    start, end = piece.start, piece.end
    kind = piece.kind

    if kind is BlockKind.HEADING:
        text = lines[start].lstrip().lstrip("#").lstrip()
        return Heading(level=piece.level or 1, children=parse_inline(text))

    if kind is BlockKind.PARAGRAPH:
        return Paragraph(parse_inline(_join(lines[start : end + 1])))

    if kind is BlockKind.CODE_BLOCK:
        return CodeBlock(language=piece.language, code=_code_body(lines, start, end))

    if kind is BlockKind.LIST:
        return ListBlock(items=_parse_list_items(lines, start, end))

    if kind is BlockKind.BLOCK_QUOTE:
        inner = _join(_unquote(line) for line in lines[start : end + 1])
        return BlockQuote(parse(inner).blocks)

    if kind is BlockKind.TABLE:
        return _parse_table(lines, start, end)

    if kind is BlockKind.THEMATIC_BREAK:
        return ThematicBreak()

    if kind is BlockKind.MATH_BLOCK:
        content = _join(lines[start + 1 : end]) if end > start + 1 else ""
        return MathBlock(content=content)

    if kind is BlockKind.HTML_BLOCK:
        return HtmlBlock(content=_join(lines[start : end + 1]))

    if kind is BlockKind.FOOTNOTE_DEF:
        first = lines[start]
        pos = first.find("]:")
        content_text = (first[pos + 2 :] if pos != -1 else "").strip()
        if end > start:
            content_text += "\n" + _join(lines[start + 1 : end + 1])
        return FootnoteDefinition(label=piece.label or "", content=parse(content_text).blocks)

    raise ValueError(f"unknown block kind: {kind}")


def _unquote(line: str) -> str:
    if line.startswith("> "):
        return line[2:]
    if line.startswith(">"):
        return line[1:]
    return line


def _is_fence_line(line: str) -> bool:
    trimmed = line.strip()
    return trimmed.startswith("```") or trimmed.startswith("~~~")


def _code_body(lines: list[str], start: int, end: int) -> str:
    code_start = start + 1
    code_end = end if end > start else start + 1
    if code_end > code_start and _is_fence_line(lines[code_end]):
        actual_end = code_end
    else:
        actual_end = code_end + 1
    if code_start < actual_end and code_start < len(lines):
        return _join(lines[code_start : min(actual_end, len(lines))])
    return ""


def _parse_list_items(lines: list[str], start: int, end: int) -> list[ListItem]:
    items: list[ListItem] = []
    i = start
    while i <= end:
        line = lines[i]
        marker = parse_list_marker(line)
        if marker is None:
            i += 1
            continue

        children = parse_inline(_extract_list_text(line))

        item_end = i + 1
        while (
            item_end <= end
            and parse_list_marker(lines[item_end]) is None
            and lines[item_end].strip()
        ):
            item_end += 1

        sub_items: list[ListItem] = []
        j = i + 1
        while j < item_end:
            candidate = lines[j]
            if candidate.startswith(_INDENTS) and parse_list_marker(candidate.lstrip()) is not None:
                sub_start = j
                while j < item_end and (
                    parse_list_marker(lines[j].lstrip()) is not None
                    or lines[j].startswith(_INDENTS)
                ):
                    j += 1
                sub_items.extend(_parse_list_items(lines, sub_start, j - 1))
                continue
            j += 1

        items.append(ListItem(marker=marker, children=children, sub_items=sub_items))
        i = item_end
    return items


def _extract_list_text(line: str) -> str:
    trimmed = line.lstrip()
    pos = trimmed.find(" ")
    if pos != -1:
        return trimmed[pos + 1 :]
    pos = trimmed.find(". ")
    if pos != -1:
        return trimmed[pos + 2 :]
    return trimmed


def _table_cells(line: str) -> list[str]:
    return [cell.strip() for cell in line.strip().strip("|").split("|")]


def _parse_table(lines: list[str], start: int, end: int) -> Table:
    headers = _parse_table_row(lines[start])
    aligns = [_cell_align(cell) for cell in _table_cells(lines[start + 1])]
    rows = [_parse_table_row(line) for line in lines[start + 2 : end + 1]]
    return Table(headers=headers, aligns=aligns, rows=rows)


def _parse_table_row(line: str) -> list[list[Inline]]:
    return [parse_inline(cell) for cell in _table_cells(line)]


def _cell_align(cell: str) -> TableAlign | None:
    if cell.startswith(":") and cell.endswith(":"):
        return TableAlign.CENTER
    if cell.endswith(":"):
        return TableAlign.RIGHT
    if cell.startswith(":"):
        return TableAlign.LEFT
    return None