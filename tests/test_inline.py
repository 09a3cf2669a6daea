from zelkova.markdown.inline import parse_inline
from zelkova.markdown.nodes import (
    Bold,
    Code,
    FootnoteRef,
    HardBreak,
    HtmlTag,
    Image,
    Italic,
    Link,
    Math,
    SoftBreak,
    Strikethrough,
    Text,
)


def test_parse_plain_text():
    assert parse_inline("hello world") == [Text("hello world")]


def test_parse_bold():
    result = parse_inline("**bold**")
    assert result == [Bold([Text("bold")])]
    assert len(result[0].children) == 1


def test_parse_bold_underscores():
    assert parse_inline("__b__") == [Bold([Text("b")])]


def test_parse_italic():
    assert parse_inline("*italic*") == [Italic([Text("italic")])]


def test_parse_code():
    assert parse_inline("`code`") == [Code("code")]


def test_parse_double_backtick_code():
    assert parse_inline("``a`b``") == [Code("a`b")]


def test_parse_link():
    result = parse_inline("[text](http://example.com)")
    assert isinstance(result[0], Link)
    assert result[0].url == "http://example.com"
    assert result[0].text == [Text("text")]
    assert result[0].title is None


def test_parse_image():
    assert parse_inline("![alt](image.png)") == [Image("alt", "image.png")]


def test_parse_strikethrough():
    assert parse_inline("~~deleted~~") == [Strikethrough([Text("deleted")])]


def test_parse_math():
    assert parse_inline("$E=mc^2$") == [Math("E=mc^2")]


def test_parse_mixed():
    result = parse_inline("hello **bold** and *italic* world")
    assert len(result) >= 5
    assert result == [
        Text("hello "),
        Bold([Text("bold")]),
        Text(" and "),
        Italic([Text("italic")]),
        Text(" world"),
    ]


def test_parse_footnote_ref():
    assert parse_inline("[^label]") == [FootnoteRef("label")]


def test_parse_html_tag():
    assert parse_inline("<br>x") == [HtmlTag("<br>"), Text("x")]


def test_soft_break():
    assert parse_inline("a\nb") == [Text("a"), SoftBreak(), Text("b")]


def test_backslash_hard_break():
    assert parse_inline("a\\\nb") == [Text("a"), HardBreak(), Text("b")]


def test_space_hard_break_at_token_start():
    assert parse_inline("*x*  \ny") == [Italic([Text("x")]), HardBreak(), Text("y")]


def test_unclosed_bold_falls_back_to_empty_italic():
    assert parse_inline("**x") == [Italic([]), Text("x")]


def test_lone_special_character_is_text():
    assert parse_inline("a ! b") == [Text("a "), Text("!"), Text(" b")]


def test_nested_emphasis_in_link_text():
    result = parse_inline("[**b**](u)")
    assert result == [Link([Bold([Text("b")])], "u")]


def test_empty_input():
    assert parse_inline("") == []