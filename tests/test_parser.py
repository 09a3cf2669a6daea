from zelkova.markdown.nodes import (
    Bold,
    BlockQuote,
    CodeBlock,
    FootnoteDefinition,
    Heading,
    HtmlBlock,
    ListBlock,
    ListMarker,
    MarkdownDoc,
    MarkerKind,
    MathBlock,
    Paragraph,
    SoftBreak,
    Table,
    TableAlign,
    Text,
    ThematicBreak,
)
from zelkova.markdown.parser import parse, split_frontmatter


def test_parse_heading():
    doc = parse("# Hello World")
    assert len(doc.blocks) == 1
    assert doc.blocks[0] == Heading(level=1, children=[Text("Hello World")])


def test_parse_heading_level_two():
    doc = parse("## Sub")
    assert doc.blocks == [Heading(level=2, children=[Text("Sub")])]


def test_parse_paragraph():
    doc = parse("Hello world\nSecond line")
    assert len(doc.blocks) == 1
    assert doc.blocks[0] == Paragraph(
        [Text("Hello world"), SoftBreak(), Text("Second line")]
    )


def test_parse_code_block():
    doc = parse("```rust\nfn main() {}\n```")
    assert len(doc.blocks) == 1
    block = doc.blocks[0]
    assert isinstance(block, CodeBlock)
    assert block.language == "rust"
    assert "fn main()" in block.code
    assert block.code == "fn main() {}"


def test_parse_unclosed_code_block():
    doc = parse("```\ncode")
    assert doc.blocks == [CodeBlock(language=None, code="code")]


def test_parse_list():
    doc = parse("- item 1\n- item 2\n- item 3")
    assert len(doc.blocks) == 1
    block = doc.blocks[0]
    assert isinstance(block, ListBlock)
    assert len(block.items) == 3
    assert block.items[0].children == [Text("item 1")]
    assert block.items[2].marker == ListMarker(MarkerKind.DASH)


def test_parse_numbered_list():
    doc = parse("1. one\n2. two")
    block = doc.blocks[0]
    assert isinstance(block, ListBlock)
    assert [item.marker for item in block.items] == [
        ListMarker(MarkerKind.NUMBER, 1),
        ListMarker(MarkerKind.NUMBER, 2),
    ]
    assert block.items[1].children == [Text("two")]


def test_indented_marker_lines_become_items():
    doc = parse("- a\n  - b\n- c")
    block = doc.blocks[0]
    assert isinstance(block, ListBlock)
    assert [item.children for item in block.items] == [[Text("a")], [Text("b")], [Text("c")]]
    assert all(item.sub_items == [] for item in block.items)


def test_parse_block_quote():
    doc = parse("> quoted text")
    assert len(doc.blocks) == 1
    assert doc.blocks[0] == BlockQuote([Paragraph([Text("quoted text")])])


def test_parse_table():
    doc = parse("| a | b |\n| --- | --- |\n| 1 | 2 |")
    assert len(doc.blocks) == 1
    block = doc.blocks[0]
    assert isinstance(block, Table)
    assert len(block.headers) == 2
    assert len(block.rows) == 1
    assert block.headers[0] == [Text("a")]
    assert block.rows[0][1] == [Text("2")]
    assert block.aligns == [None, None]


def test_parse_table_aligns():
    doc = parse("| a | b | c |\n|:-|:-:|-:|")
    block = doc.blocks[0]
    assert isinstance(block, Table)
    assert block.aligns == [TableAlign.LEFT, TableAlign.CENTER, TableAlign.RIGHT]
    assert block.rows == []


def test_parse_math_block():
    doc = parse("$$\nE = mc^2\n$$")
    assert len(doc.blocks) == 1
    assert doc.blocks[0] == MathBlock(content="E = mc^2")


def test_parse_frontmatter():
    doc = parse("---\ntitle: Test\n---\n\n# Hello")
    assert doc.frontmatter == "title: Test"
    assert len(doc.blocks) == 1
    assert isinstance(doc.blocks[0], Heading)


def test_parse_mixed():
    doc = parse("# Title\n\nParagraph with **bold**.\n\n- list item\n\n```\ncode\n```")
    assert len(doc.blocks) == 4
    assert [type(block) for block in doc.blocks] == [Heading, Paragraph, ListBlock, CodeBlock]
    assert doc.blocks[1] == Paragraph(
        [Text("Paragraph with "), Bold([Text("bold")]), Text(".")]
    )
    assert doc.blocks[3] == CodeBlock(language=None, code="code")


def test_parse_thematic_break():
    doc = parse("---")
    assert doc.frontmatter is None
    assert doc.blocks == [ThematicBreak()]


def test_parse_footnote_definition():
    doc = parse("[^1]: note text")
    assert doc.blocks == [
        FootnoteDefinition(label="1", content=[Paragraph([Text("note text")])])
    ]


def test_parse_html_block():
    doc = parse("<div>\nhi\n</div>")
    assert doc.blocks == [HtmlBlock(content="<div>\nhi\n</div>")]


def test_parse_crlf_lines():
    doc = parse("a\r\nb\r\n")
    assert doc.blocks == [Paragraph([Text("a"), SoftBreak(), Text("b")])]


def test_parse_empty():
    assert parse("") == MarkdownDoc(frontmatter=None, blocks=[])


def test_split_frontmatter_present():
    assert split_frontmatter("---\na: 1\n---\nbody") == ("a: 1", "body")


def test_split_frontmatter_absent():
    assert split_frontmatter("hello") == (None, "hello")


def test_split_frontmatter_unclosed():
    assert split_frontmatter("---\na: 1") == (None, "---\na: 1")