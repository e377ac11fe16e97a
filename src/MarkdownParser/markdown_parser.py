from __future__ import annotations

import logging
from typing import Iterable, List

from .grammar import DEFAULT_MAX_DEPTH, ParseNode, Rule, match
from .list_state import ListStateMachine
from .model import (
    Block,
    BlockQuote,
    Bold,
    CodeFence,
    Document,
    EscapedChar,
    Heading,
    Image,
    InlineCode,
    InlineElement,
    Italic,
    Link,
    ListItem,
    Paragraph,
    Strikethrough,
    Text,
    ThematicBreak,
    Underline,
)

logger = logging.getLogger(__name__)

_SPAN_TYPES = {
    Rule.BOLD: Bold,
    Rule.ITALIC: Italic,
    Rule.STRIKETHROUGH: Strikethrough,
    Rule.UNDERLINE: Underline,
}


def build_from_text(text: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Document:
    return build_document(match(text, max_depth=max_depth))


def build_document(tree: ParseNode) -> Document:
    if tree.rule is not Rule.DOCUMENT:
        raise ValueError(f"Expected a document node, got {tree.rule.value}")
    blocks = _build_blocks(tree.children)
    logger.debug("Built document with %d blocks", len(blocks))
    return Document(blocks=blocks)


def _build_blocks(nodes: Iterable[ParseNode]) -> List[Block]:
    blocks: List[Block] = []
    lists = ListStateMachine()
    for node in nodes:
        if node.rule is Rule.UNORDERED_ITEM:
            closed = lists.feed_unordered(node.value, ListItem(content=_build_inlines(node.children)))
        elif node.rule is Rule.ORDERED_ITEM:
            closed = lists.feed_ordered(int(node.value), ListItem(content=_build_inlines(node.children)))
        else:
            closed = lists.flush()
        if closed is not None:
            blocks.append(closed)
        if node.rule in (Rule.UNORDERED_ITEM, Rule.ORDERED_ITEM, Rule.BLANK_LINE):
            continue
        blocks.append(_build_block(node))
    closed = lists.flush()
    if closed is not None:
        blocks.append(closed)
    return blocks


def _build_block(node: ParseNode) -> Block:
    if node.rule is Rule.HEADING:
        return Heading(level=len(node.value), content=_build_inlines(node.children))
    if node.rule is Rule.PARAGRAPH:
        return Paragraph(content=_join_paragraph_lines(node.children))
    if node.rule is Rule.BLOCKQUOTE:
        return BlockQuote(content=_build_blocks(node.children))
    if node.rule is Rule.CODE_FENCE:
        return CodeFence(language=node.value, lines=[line.value for line in node.children])
    if node.rule is Rule.THEMATIC_BREAK:
        return ThematicBreak()
    raise ValueError(f"Unexpected block rule: {node.rule.value}")


def _join_paragraph_lines(lines: Iterable[ParseNode]) -> List[InlineElement]:
    content: List[InlineElement] = []
    for idx, line in enumerate(lines):
        if idx:
            content.append(Text(" "))
        content.extend(_build_inlines(line.children))
    return content


def _build_inlines(nodes: Iterable[ParseNode]) -> List[InlineElement]:
    return [_build_inline(node) for node in nodes]


def _build_inline(node: ParseNode) -> InlineElement:
    if node.rule is Rule.PLAIN_TEXT:
        return Text(node.value)
    if node.rule in _SPAN_TYPES:
        return _SPAN_TYPES[node.rule](children=_build_inlines(node.children))
    if node.rule is Rule.INLINE_CODE:
        return InlineCode(code=node.value)
    if node.rule is Rule.LINK:
        return Link(text=_build_inlines(node.children), url=node.value)
    if node.rule is Rule.IMAGE:
        return Image(alt=node.children[0].value, url=node.value)
    if node.rule is Rule.ESCAPE:
        return EscapedChar(char=node.value)
    raise ValueError(f"Unexpected inline rule: {node.rule.value}")
