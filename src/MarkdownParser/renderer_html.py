from __future__ import annotations

from typing import Iterable, List

from markdown_it.common.utils import escapeHtml

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
    OrderedList,
    Paragraph,
    Strikethrough,
    Text,
    ThematicBreak,
    Underline,
    UnorderedList,
)

_SPAN_TAGS = {
    Bold: "strong",
    Italic: "em",
    Strikethrough: "del",
    Underline: "u",
}


def render_document(doc: Document) -> List[str]:
    """Render one HTML line per top-level block."""
    return [_dispatch_block(block) for block in doc.blocks]


def _dispatch_block(block: Block) -> str:
    if isinstance(block, Heading):
        return f"<h{block.level}>{_render_inlines(block.content)}</h{block.level}>"
    elif isinstance(block, Paragraph):
        return f"<p>{_render_inlines(block.content)}</p>"
    elif isinstance(block, BlockQuote):
        inner = "".join(_dispatch_block(child) for child in block.content)
        return f"<blockquote>{inner}</blockquote>"
    elif isinstance(block, CodeFence):
        return _render_code_fence(block)
    elif isinstance(block, UnorderedList):
        return f"<ul>{_render_items(block.items)}</ul>"
    elif isinstance(block, OrderedList):
        return f'<ol start="{block.start}">{_render_items(block.items)}</ol>'
    elif isinstance(block, ThematicBreak):
        return "<hr>"
    raise TypeError(f"Cannot render block of type {type(block).__name__}")


def _render_code_fence(block: CodeFence) -> str:
    lang_attr = f' class="language-{escapeHtml(block.language)}"' if block.language else ""
    code = "\n".join(escapeHtml(line) for line in block.lines)
    return f"<pre><code{lang_attr}>{code}</code></pre>"


def _render_items(items: Iterable[ListItem]) -> str:
    return "".join(f"<li>{_render_inlines(item.content)}</li>" for item in items)


def _render_inlines(inlines: Iterable[InlineElement]) -> str:
    return "".join(_render_inline(inline) for inline in inlines)


def _render_inline(inline: InlineElement) -> str:
    if isinstance(inline, Text):
        return escapeHtml(inline.text)
    elif isinstance(inline, EscapedChar):
        return escapeHtml(inline.char)
    elif type(inline) in _SPAN_TAGS:
        tag = _SPAN_TAGS[type(inline)]
        return f"<{tag}>{_render_inlines(inline.children)}</{tag}>"
    elif isinstance(inline, InlineCode):
        return f"<code>{escapeHtml(inline.code)}</code>"
    elif isinstance(inline, Link):
        return f'<a href="{escapeHtml(inline.url)}">{_render_inlines(inline.text)}</a>'
    elif isinstance(inline, Image):
        return f'<img src="{escapeHtml(inline.url)}" alt="{escapeHtml(inline.alt)}">'
    raise TypeError(f"Cannot render inline of type {type(inline).__name__}")
