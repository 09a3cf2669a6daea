"""Parsing of inline Markdown elements."""

from __future__ import annotations

from zelkova.markdown.nodes import (
    Bold,
    Code,
    FootnoteRef,
    HardBreak,
    HtmlTag,
    Image,
    Inline,
    Italic,
    Link,
    Math,
    SoftBreak,
    Strikethrough,
    Text,
)

_SPECIAL = frozenset("*_`[!$~<\n\\")


def _find(text: str, needle: str, start: int) -> int | None:
    pos = text.find(needle, start)
    return None if pos == -1 else pos


def _count_run(text: str, start: int, char: str) -> int:
    end = start
    while end < len(text) and text[end] == char:
        end += 1
    return end - start


def _parse_link_or_image(text: str, start: int) -> tuple[str, str, int] | None:
    """Parse ``label](url)`` from start; return label, url and the index after ')'."""
    close = _find(text, "]", start)
    if close is None:
        return None
    label = text[start:close]
    paren = close + 1
    if paren >= len(text) or text[paren] != "(":
        return None
    url_end = _find(text, ")", paren + 1)
    if url_end is None:
        return None
    return label, text[paren + 1 : url_end], url_end + 1


def parse_inline(text: str) -> list[Inline]:
    """Parse emphasis, code, links, images, math, footnote refs, tags and breaks."""
    result: list[Inline] = []
    n = len(text)
    i = 0

    while i < n:
        c = text[i]
        nxt = text[i + 1] if i + 1 < n else ""

        if c == "\\" and nxt == "\n":
            result.append(HardBreak())
            i += 2
            continue
        if c == " " and text.startswith("  \n", i):
            result.append(HardBreak())
            i += 3
            continue

        if c == "\n":
            result.append(SoftBreak())
            i += 1
            continue

        if c in "*_" and nxt == c:
            end = _find(text, c * 2, i + 2)
            if end is not None:
                result.append(Bold(parse_inline(text[i + 2 : end])))
                i = end + 2
                continue

        if c == "~" and nxt == "~":
            end = _find(text, "~~", i + 2)
            if end is not None:
                result.append(Strikethrough(parse_inline(text[i + 2 : end])))
                i = end + 2
                continue

        if c in "*_":
            end = _find(text, c, i + 1)
            if end is not None:
                result.append(Italic(parse_inline(text[i + 1 : end])))
                i = end + 1
                continue

        if c == "`":
            count = _count_run(text, i, "`")
            end = _find(text, "`" * count, i + count)
            if end is not None:
                result.append(Code(text[i + count : end]))
                i = end + count
                continue

        if c == "!" and nxt == "[":
            parsed = _parse_link_or_image(text, i + 2)
            if parsed is not None:
                alt, url, i = parsed
                result.append(Image(alt, url))
                continue

        if c == "[":
            parsed = _parse_link_or_image(text, i + 1)
            if parsed is not None:
                label, url, i = parsed
                result.append(Link(parse_inline(label), url))
                continue

        if c == "$":
            end = _find(text, "$", i + 1)
            if end is not None:
                result.append(Math(text[i + 1 : end]))
                i = end + 1
                continue

        if c == "[" and nxt == "^":
            end = _find(text, "]", i + 2)
            if end is not None:
                result.append(FootnoteRef(text[i + 2 : end]))
                i = end + 1
                continue

        if c == "<":
            end = _find(text, ">", i)
            if end is not None:
                result.append(HtmlTag(text[i : end + 1]))
                i = end + 1
                continue

        start = i
        while i < n and text[i] not in _SPECIAL:
            i += 1
        if i > start:
            result.append(Text(text[start:i]))
        else:
            result.append(Text(c))
            i += 1

    return result