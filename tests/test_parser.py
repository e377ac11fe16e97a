import pytest

from MarkdownParser import markdown_parser
from MarkdownParser.grammar import ParseNode, Rule
from MarkdownParser.model import (
    BlockQuote,
    Bold,
    CodeFence,
    EscapedChar,
    Heading,
    Image,
    InlineCode,
    Italic,
    Link,
    ListItem,
    OrderedList,
    Paragraph,
    Strikethrough,
    Text,
    ThematicBreak,
    Underline,
    UnorderedList,
)


def _item(text: str) -> ListItem:
    return ListItem(content=[Text(text)])


def test_parse_blocks_and_inline():
    md_text = """
# Introduction

Text with *italic*, **bold** and `code`.

- First item
- Second item

![Diagram](diagram.png)

```py
print("Hello World!")
```
***
"""
    document = markdown_parser.build_from_text(md_text)
    assert [type(block) for block in document.blocks] == [
        Heading,
        Paragraph,
        UnorderedList,
        Paragraph,
        CodeFence,
        ThematicBreak,
    ]
    assert document.blocks[1].content == [
        Text("Text with "),
        Italic([Text("italic")]),
        Text(", "),
        Bold([Text("bold")]),
        Text(" and "),
        InlineCode("code"),
        Text("."),
    ]
    assert document.blocks[3].content == [Image(alt="Diagram", url="diagram.png")]
    assert document.blocks[4] == CodeFence(language="py", lines=['print("Hello World!")'])


@pytest.mark.parametrize("level", range(1, 7))
def test_heading_levels(level):
    document = markdown_parser.build_from_text("#" * level + " Title")
    assert document.blocks == [Heading(level=level, content=[Text("Title")])]


def test_nested_formatting_builds_children():
    document = markdown_parser.build_from_text("**bold *and italic***")
    assert document.blocks == [Paragraph([Bold([Text("bold "), Italic([Text("and italic")])])])]


def test_underline_strikethrough_and_underscore_italic():
    document = markdown_parser.build_from_text("__u__ ~~s~~ _i_ snake_case_name")
    assert document.blocks[0].content == [
        Underline([Text("u")]),
        Text(" "),
        Strikethrough([Text("s")]),
        Text(" "),
        Italic([Text("i")]),
        Text(" snake_case_name"),
    ]


def test_link_text_keeps_escapes_and_url_is_unescaped():
    document = markdown_parser.build_from_text("[a\\]b](u\\)v)")
    assert document.blocks[0].content == [Link(text=[Text("a"), EscapedChar("]"), Text("b")], url="u)v")]


def test_inline_code_is_literal():
    document = markdown_parser.build_from_text("`*x*`")
    assert document.blocks[0].content == [InlineCode("*x*")]


def test_paragraph_lines_are_joined_with_a_space():
    document = markdown_parser.build_from_text("one\ntwo")
    assert document.blocks == [Paragraph([Text("one"), Text(" "), Text("two")])]


def test_blockquote_holds_blocks():
    document = markdown_parser.build_from_text("> quote\n> more\n>\n> # Title")
    assert document.blocks == [
        BlockQuote(
            [
                Paragraph([Text("quote"), Text(" "), Text("more")]),
                Heading(level=1, content=[Text("Title")]),
            ]
        )
    ]


def test_nested_blockquote():
    document = markdown_parser.build_from_text("> > inner")
    assert document.blocks == [BlockQuote([BlockQuote([Paragraph([Text("inner")])])])]


def test_code_fence_without_language():
    document = markdown_parser.build_from_text("```\n**x**\n\n```")
    assert document.blocks == [CodeFence(language=None, lines=["**x**", ""])]


def test_consecutive_items_form_one_list():
    document = markdown_parser.build_from_text("- a\n- b\n- c")
    assert document.blocks == [UnorderedList(items=[_item("a"), _item("b"), _item("c")])]


def test_blank_line_terminates_list():
    document = markdown_parser.build_from_text("- a\n- b\n\n- c")
    assert document.blocks == [
        UnorderedList(items=[_item("a"), _item("b")]),
        UnorderedList(items=[_item("c")]),
    ]


def test_marker_switch_starts_new_list():
    document = markdown_parser.build_from_text("- a\n* b\n1. c\n2. d\n- e")
    assert document.blocks == [
        UnorderedList(items=[_item("a")]),
        UnorderedList(items=[_item("b")]),
        OrderedList(start=1, items=[_item("c"), _item("d")]),
        UnorderedList(items=[_item("e")]),
    ]


def test_ordered_list_start_is_first_numeral():
    document = markdown_parser.build_from_text("3. x\n4. y")
    assert document.blocks == [OrderedList(start=3, items=[_item("x"), _item("y")])]


def test_non_list_block_flushes_list():
    document = markdown_parser.build_from_text("- a\ntext\n---")
    assert document.blocks == [
        UnorderedList(items=[_item("a")]),
        Paragraph([Text("text")]),
        ThematicBreak(),
    ]


def test_list_items_parse_inline_content():
    document = markdown_parser.build_from_text("- **a** b")
    assert document.blocks == [UnorderedList(items=[ListItem(content=[Bold([Text("a")]), Text(" b")])])]


def test_build_document_requires_document_root():
    with pytest.raises(ValueError):
        markdown_parser.build_document(ParseNode(Rule.PARAGRAPH, 0, 0))
