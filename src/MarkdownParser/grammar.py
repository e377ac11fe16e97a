"""Ordered-choice grammar for the supported Markdown subset.

Block rules are tried line by line and inline rules character by character,
always in the priority order of ``_BLOCK_RULES`` / ``_INLINE_RULES``; the
first rule that matches wins. The result is a generic tree of ``ParseNode``
objects carrying absolute source offsets, which ``markdown_parser`` turns into
the typed model.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Sequence, Tuple

from markdown_it.common.utils import isMdAsciiPunct

from .exceptions import NestingDepthError, ParseError

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 32
# Deepest nesting the recursive matchers can reach under the default
# interpreter recursion limit.
MAX_DEPTH_LIMIT = 100


class Rule(str, Enum):
    DOCUMENT = "document"
    BLANK_LINE = "blank_line"
    HEADING = "heading"
    BLOCKQUOTE = "blockquote"
    CODE_FENCE = "code_fence"
    CODE_LINE = "code_line"
    UNORDERED_ITEM = "unordered_list_item"
    ORDERED_ITEM = "ordered_list_item"
    THEMATIC_BREAK = "thematic_break"
    PARAGRAPH = "paragraph"
    PARAGRAPH_LINE = "paragraph_line"
    IMAGE = "image"
    LINK = "link"
    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    UNDERLINE = "underline"
    INLINE_CODE = "inline_code"
    ESCAPE = "escape_sequence"
    PLAIN_TEXT = "plain_text"


@dataclass(frozen=True)
class ParseNode:
    """One rule match. ``value`` holds the rule's captured payload, if any."""

    rule: Rule
    start: int
    end: int
    value: str | None = None
    children: Tuple["ParseNode", ...] = ()


@dataclass(frozen=True)
class _Line:
    start: int
    text: str

    @property
    def end(self) -> int:
        return self.start + len(self.text)


@dataclass
class MatchState:
    source: str
    max_depth: int = DEFAULT_MAX_DEPTH
    memo: Dict[tuple, Tuple[ParseNode, int] | None] = field(default_factory=dict)
    position: int = 0

    def fail(self, position: int, expected: str) -> ParseError:
        return ParseError(position, expected, source=self.source)

    def enter(self, depth: int, position: int, rule: Rule) -> int:
        if depth > self.max_depth:
            raise NestingDepthError(position, rule.value, self.max_depth, source=self.source)
        self.position = position
        return depth


def match(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> ParseNode:
    """Match ``source`` against the document grammar.

    Raises ``ParseError`` when no rule accepts the input (for example an
    unterminated code fence) and ``NestingDepthError`` when quotes or inline
    spans nest deeper than ``max_depth``.
    """
    state = MatchState(source=source, max_depth=max_depth)
    try:
        blocks = _match_blocks(state, _split_lines(source), 0)
    except RecursionError as exc:
        raise NestingDepthError(state.position, "document", max_depth, source=source) from exc
    logger.debug("Matched %d block nodes in %d chars", len(blocks), len(source))
    return ParseNode(Rule.DOCUMENT, 0, len(source), children=blocks)


def _split_lines(source: str) -> List[_Line]:
    lines: List[_Line] = []
    offset = 0
    for raw in source.split("\n"):
        lines.append(_Line(offset, raw[:-1] if raw.endswith("\r") else raw))
        offset += len(raw) + 1
    return lines


# Block level

_HEADING_RE = re.compile(r"(#{1,6})[ \t]+(\S.*?)[ \t]*$")
_QUOTE_PREFIX_RE = re.compile(r">[ ]?")
_FENCE = "```"
_UNORDERED_RE = re.compile(r"([-*])(?:[ \t]+(.*?))?[ \t]*$")
_ORDERED_RE = re.compile(r"(\d{1,9})\.(?:[ \t]+(.*?))?[ \t]*$")
_THEMATIC_BREAK_RE = re.compile(r"[ ]{0,3}([-*_])(?:[ \t]*\1){2,}[ \t]*$")

_BlockMatch = Tuple[ParseNode, int] | None


def _match_blocks(state: MatchState, lines: Sequence[_Line], depth: int) -> Tuple[ParseNode, ...]:
    nodes: List[ParseNode] = []
    index = 0
    while index < len(lines):
        line = lines[index]
        if not line.text.strip():
            nodes.append(ParseNode(Rule.BLANK_LINE, line.start, line.end))
            index += 1
            continue
        for rule in _BLOCK_RULES:
            matched = rule(state, lines, index, depth)
            if matched is not None:
                node, index = matched
                nodes.append(node)
                break
        else:
            raise state.fail(line.start, "block")
    return tuple(nodes)


def _match_heading(state: MatchState, lines: Sequence[_Line], index: int, depth: int) -> _BlockMatch:
    line = lines[index]
    m = _HEADING_RE.match(line.text)
    if m is None:
        return None
    content = _match_inlines(state, m.group(2), line.start + m.start(2), depth)
    return ParseNode(Rule.HEADING, line.start, line.end, value=m.group(1), children=content), index + 1


def _match_blockquote(state: MatchState, lines: Sequence[_Line], index: int, depth: int) -> _BlockMatch:
    inner: List[_Line] = []
    cursor = index
    while cursor < len(lines) and lines[cursor].text.startswith(">"):
        line = lines[cursor]
        prefix = _QUOTE_PREFIX_RE.match(line.text).end()
        inner.append(_Line(line.start + prefix, line.text[prefix:]))
        cursor += 1
    if not inner:
        return None
    start = lines[index].start
    children = _match_blocks(state, inner, state.enter(depth + 1, start, Rule.BLOCKQUOTE))
    return ParseNode(Rule.BLOCKQUOTE, start, inner[-1].end, children=children), cursor


def _match_code_fence(state: MatchState, lines: Sequence[_Line], index: int, depth: int) -> _BlockMatch:
    opening = lines[index]
    if not opening.text.startswith(_FENCE):
        return None
    language = opening.text[len(_FENCE):].strip()
    body: List[ParseNode] = []
    for cursor in range(index + 1, len(lines)):
        line = lines[cursor]
        if line.text.strip() == _FENCE:
            node = ParseNode(Rule.CODE_FENCE, opening.start, line.end, value=language or None, children=tuple(body))
            return node, cursor + 1
        body.append(ParseNode(Rule.CODE_LINE, line.start, line.end, value=line.text))
    # the fence commits once opened
    raise state.fail(opening.start, "closing code fence")


def _match_list_item(
    state: MatchState, line: _Line, m: re.Match | None, rule: Rule, depth: int
) -> ParseNode | None:
    if m is None:
        return None
    content = m.group(2) or ""
    children = _match_inlines(state, content, line.start + (m.start(2) if m.group(2) else m.end()), depth)
    return ParseNode(rule, line.start, line.end, value=m.group(1), children=children)


def _match_unordered_item(state: MatchState, lines: Sequence[_Line], index: int, depth: int) -> _BlockMatch:
    line = lines[index]
    if _THEMATIC_BREAK_RE.match(line.text):
        return None
    node = _match_list_item(state, line, _UNORDERED_RE.match(line.text), Rule.UNORDERED_ITEM, depth)
    return None if node is None else (node, index + 1)


def _match_ordered_item(state: MatchState, lines: Sequence[_Line], index: int, depth: int) -> _BlockMatch:
    line = lines[index]
    node = _match_list_item(state, line, _ORDERED_RE.match(line.text), Rule.ORDERED_ITEM, depth)
    return None if node is None else (node, index + 1)


def _match_thematic_break(state: MatchState, lines: Sequence[_Line], index: int, depth: int) -> _BlockMatch:
    line = lines[index]
    if not _THEMATIC_BREAK_RE.match(line.text):
        return None
    return ParseNode(Rule.THEMATIC_BREAK, line.start, line.end, value=line.text.strip()), index + 1


def _opens_block(text: str) -> bool:
    return bool(
        _HEADING_RE.match(text)
        or text.startswith(">")
        or text.startswith(_FENCE)
        or _UNORDERED_RE.match(text)
        or _ORDERED_RE.match(text)
        or _THEMATIC_BREAK_RE.match(text)
    )


def _match_paragraph(state: MatchState, lines: Sequence[_Line], index: int, depth: int) -> _BlockMatch:
    children: List[ParseNode] = []
    cursor = index
    while cursor < len(lines):
        line = lines[cursor]
        if not line.text.strip() or (cursor > index and _opens_block(line.text)):
            break
        stripped = line.text.strip()
        base = line.start + (len(line.text) - len(line.text.lstrip()))
        inlines = _match_inlines(state, stripped, base, depth)
        children.append(ParseNode(Rule.PARAGRAPH_LINE, line.start, line.end, children=inlines))
        cursor += 1
    if not children:
        return None
    return ParseNode(Rule.PARAGRAPH, lines[index].start, lines[cursor - 1].end, children=tuple(children)), cursor


_BLOCK_RULES = (
    _match_heading,
    _match_blockquote,
    _match_code_fence,
    _match_unordered_item,
    _match_ordered_item,
    _match_thematic_break,
    _match_paragraph,
)


# Inline level

_PLAIN_TEXT_RE = re.compile(r"[^*_~\[!`\\]+")
_INLINE_CODE_RE = re.compile(r"`([^`]+)`")
_LINK_BODY = r"\[((?:\\.|[^\]\\])*)\]\(((?:\\.|[^)\s\\])*)\)"
_LINK_RE = re.compile(_LINK_BODY)
_IMAGE_RE = re.compile("!" + _LINK_BODY)
_ESCAPED_PUNCT_RE = re.compile(r"\\([!-/:-@\[-`{-~])")

_InlineMatch = Tuple[ParseNode, int] | None


def _match_inlines(state: MatchState, text: str, base: int, depth: int) -> Tuple[ParseNode, ...]:
    nodes: List[ParseNode] = []
    pos = 0
    while pos < len(text):
        node, pos = _match_inline(state, text, pos, base, depth)
        nodes.append(node)
    return _merge_plain_text(nodes)


def _match_inline(state: MatchState, text: str, pos: int, base: int, depth: int) -> Tuple[ParseNode, int]:
    for rule in _INLINE_RULES:
        matched = rule(state, text, pos, base, depth)
        if matched is not None:
            return matched
    raise state.fail(base + pos, "inline")


def _merge_plain_text(nodes: Sequence[ParseNode]) -> Tuple[ParseNode, ...]:
    merged: List[ParseNode] = []
    for node in nodes:
        if merged and node.rule is Rule.PLAIN_TEXT and merged[-1].rule is Rule.PLAIN_TEXT:
            previous = merged.pop()
            node = ParseNode(Rule.PLAIN_TEXT, previous.start, node.end, value=previous.value + node.value)
        merged.append(node)
    return tuple(merged)


def _unescape(text: str) -> str:
    return _ESCAPED_PUNCT_RE.sub(r"\1", text)


def _match_image(state: MatchState, text: str, pos: int, base: int, depth: int) -> _InlineMatch:
    m = _IMAGE_RE.match(text, pos)
    if m is None:
        return None
    alt = ParseNode(Rule.PLAIN_TEXT, base + m.start(1), base + m.end(1), value=_unescape(m.group(1)))
    node = ParseNode(Rule.IMAGE, base + pos, base + m.end(), value=_unescape(m.group(2)), children=(alt,))
    return node, m.end()


def _match_link(state: MatchState, text: str, pos: int, base: int, depth: int) -> _InlineMatch:
    m = _LINK_RE.match(text, pos)
    if m is None:
        return None
    inner = state.enter(depth + 1, base + pos, Rule.LINK)
    children = _match_inlines(state, m.group(1), base + m.start(1), inner)
    node = ParseNode(Rule.LINK, base + pos, base + m.end(), value=_unescape(m.group(2)), children=children)
    return node, m.end()


def _opens_span(text: str, pos: int, delimiter: str) -> bool:
    if not text.startswith(delimiter, pos):
        return False
    after = pos + len(delimiter)
    if after >= len(text) or text[after].isspace():
        return False
    if len(delimiter) == 1:
        if text[after] == delimiter:
            return False
        if delimiter == "_" and pos > 0 and text[pos - 1].isalnum():
            return False
    return True


def _closes_span(text: str, pos: int, delimiter: str) -> bool:
    return text.startswith(delimiter, pos) and not text[pos - 1].isspace()


def _match_span(
    state: MatchState, text: str, pos: int, base: int, depth: int, rule: Rule, delimiter: str
) -> _InlineMatch:
    if not _opens_span(text, pos, delimiter):
        return None
    key = (base, len(text), pos, delimiter)
    if key in state.memo:
        return state.memo[key]
    inner = state.enter(depth + 1, base + pos, rule)
    cursor = pos + len(delimiter)
    children: List[ParseNode] = []
    while cursor < len(text) and not (children and _closes_span(text, cursor, delimiter)):
        node, cursor = _match_inline(state, text, cursor, base, inner)
        children.append(node)
    result: _InlineMatch = None
    if children and cursor < len(text):
        end = cursor + len(delimiter)
        node = ParseNode(rule, base + pos, base + end, value=delimiter, children=_merge_plain_text(children))
        result = (node, end)
    state.memo[key] = result
    return result


def _match_bold(state: MatchState, text: str, pos: int, base: int, depth: int) -> _InlineMatch:
    return _match_span(state, text, pos, base, depth, Rule.BOLD, "**")


def _match_italic(state: MatchState, text: str, pos: int, base: int, depth: int) -> _InlineMatch:
    return _match_span(state, text, pos, base, depth, Rule.ITALIC, "*") or _match_span(
        state, text, pos, base, depth, Rule.ITALIC, "_"
    )


def _match_strikethrough(state: MatchState, text: str, pos: int, base: int, depth: int) -> _InlineMatch:
    return _match_span(state, text, pos, base, depth, Rule.STRIKETHROUGH, "~~")


def _match_underline(state: MatchState, text: str, pos: int, base: int, depth: int) -> _InlineMatch:
    return _match_span(state, text, pos, base, depth, Rule.UNDERLINE, "__")


def _match_inline_code(state: MatchState, text: str, pos: int, base: int, depth: int) -> _InlineMatch:
    m = _INLINE_CODE_RE.match(text, pos)
    if m is None:
        return None
    return ParseNode(Rule.INLINE_CODE, base + pos, base + m.end(), value=m.group(1)), m.end()


def _match_escape(state: MatchState, text: str, pos: int, base: int, depth: int) -> _InlineMatch:
    if text[pos] != "\\" or pos + 1 >= len(text) or not isMdAsciiPunct(ord(text[pos + 1])):
        return None
    return ParseNode(Rule.ESCAPE, base + pos, base + pos + 2, value=text[pos + 1]), pos + 2


def _match_plain_text(state: MatchState, text: str, pos: int, base: int, depth: int) -> _InlineMatch:
    m = _PLAIN_TEXT_RE.match(text, pos)
    # a special character that opened nothing is literal text
    end = m.end() if m is not None else pos + 1
    return ParseNode(Rule.PLAIN_TEXT, base + pos, base + end, value=text[pos:end]), end


_INLINE_RULES = (
    _match_image,
    _match_link,
    _match_bold,
    _match_italic,
    _match_strikethrough,
    _match_underline,
    _match_inline_code,
    _match_escape,
    _match_plain_text,
)
