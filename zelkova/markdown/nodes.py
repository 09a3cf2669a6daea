"""Node types of the recursive Markdown syntax tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

_U32_MAX = 0xFFFFFFFF


class MarkerKind(Enum):
    """The character or form that opens a list item."""

    DASH = "-"
    PLUS = "+"
    STAR = "*"
    NUMBER = "number"


@dataclass(frozen=True)
class ListMarker:
    """A list item marker; numbered markers carry their number."""

    kind: MarkerKind
    number: int | None = None

    def __post_init__(self) -> None:
        if self.kind is MarkerKind.NUMBER:
            if self.number is None:
                raise ValueError("a numbered list marker needs a number")
            if not 0 <= self.number <= _U32_MAX:
                raise ValueError(f"list number out of range: {self.number}")
        elif self.number is not None:
            raise ValueError(f"a {self.kind.name.lower()} marker takes no number")


class TableAlign(Enum):
    """Column alignment of a table."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


# Inline nodes


@dataclass
class Text:
    text: str


@dataclass
class Bold:
    children: list[Inline] = field(default_factory=list)


@dataclass
class Italic:
    children: list[Inline] = field(default_factory=list)


@dataclass
class Strikethrough:
    children: list[Inline] = field(default_factory=list)


@dataclass
class Code:
    code: str


@dataclass
class Link:
    text: list[Inline]
    url: str
    title: str | None = None


@dataclass
class Image:
    alt: str
    url: str
    title: str | None = None


@dataclass
class Math:
    content: str


@dataclass
class FootnoteRef:
    label: str


@dataclass
class HtmlTag:
    tag: str


@dataclass
class HardBreak:
    pass


@dataclass
class SoftBreak:
    pass


Inline = Union[
    Text,
    Bold,
    Italic,
    Strikethrough,
    Code,
    Link,
    Image,
    Math,
    FootnoteRef,
    HtmlTag,
    HardBreak,
    SoftBreak,
]


# Block nodes


@dataclass
class ListItem:
    marker: ListMarker
    children: list[Inline] = field(default_factory=list)
    sub_items: list[ListItem] = field(default_factory=list)


@dataclass
class Heading:
    level: int
    children: list[Inline] = field(default_factory=list)


@dataclass
class Paragraph:
    children: list[Inline] = field(default_factory=list)


@dataclass
class CodeBlock:
    language: str | None
    code: str


@dataclass
class ListBlock:
    items: list[ListItem] = field(default_factory=list)


@dataclass
class BlockQuote:
    blocks: list[Block] = field(default_factory=list)


@dataclass
class Table:
    headers: list[list[Inline]] = field(default_factory=list)
    aligns: list[TableAlign | None] = field(default_factory=list)
    rows: list[list[list[Inline]]] = field(default_factory=list)


@dataclass
class ThematicBreak:
    pass


@dataclass
class MathBlock:
    content: str


@dataclass
class HtmlBlock:
    content: str


@dataclass
class FootnoteDefinition:
    label: str
    content: list[Block] = field(default_factory=list)


Block = Union[
    Heading,
    Paragraph,
    CodeBlock,
    ListBlock,
    BlockQuote,
    Table,
    ThematicBreak,
    MathBlock,
    HtmlBlock,
    FootnoteDefinition,
]


@dataclass
class MarkdownDoc:
    """A parsed document: optional raw frontmatter and its blocks."""

    frontmatter: str | None = None
    blocks: list[Block] = field(default_factory=list)