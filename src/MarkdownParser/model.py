from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Block:
    """Base class for block-level nodes."""


@dataclass(frozen=True)
class Document:
    blocks: List[Block] = field(default_factory=list)


@dataclass(frozen=True)
class InlineElement:
    """Base class for inline nodes."""


@dataclass(frozen=True)
class Heading(Block):
    level: int
    content: List[InlineElement]

    def __post_init__(self) -> None:
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be in 1..6, got {self.level}")


@dataclass(frozen=True)
class Paragraph(Block):
    content: List[InlineElement]


@dataclass(frozen=True)
class BlockQuote(Block):
    content: List[Block]


@dataclass(frozen=True)
class CodeFence(Block):
    language: str | None
    lines: List[str]


@dataclass(frozen=True)
class ListItem:
    content: List[InlineElement]


@dataclass(frozen=True)
class UnorderedList(Block):
    items: List[ListItem]


@dataclass(frozen=True)
class OrderedList(Block):
    start: int
    items: List[ListItem]


@dataclass(frozen=True)
class ThematicBreak(Block):
    """Horizontal rule / thematic break."""


@dataclass(frozen=True)
class Text(InlineElement):
    text: str


@dataclass(frozen=True)
class Bold(InlineElement):
    children: List[InlineElement]


@dataclass(frozen=True)
class Italic(InlineElement):
    children: List[InlineElement]


@dataclass(frozen=True)
class Strikethrough(InlineElement):
    children: List[InlineElement]


@dataclass(frozen=True)
class Underline(InlineElement):
    children: List[InlineElement]


@dataclass(frozen=True)
class InlineCode(InlineElement):
    code: str


@dataclass(frozen=True)
class Link(InlineElement):
    text: List[InlineElement]
    url: str


@dataclass(frozen=True)
class Image(InlineElement):
    alt: str
    url: str


@dataclass(frozen=True)
class EscapedChar(InlineElement):
    char: str


BLOCK_TYPES = (Heading, Paragraph, BlockQuote, CodeFence, UnorderedList, OrderedList, ThematicBreak)
INLINE_TYPES = (Text, Bold, Italic, Strikethrough, Underline, InlineCode, Link, Image, EscapedChar)
