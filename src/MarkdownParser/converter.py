"""Entry points that tie the grammar, builder and renderer together."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from . import markdown_parser, renderer_html
from .config import ParserConfig
from .grammar import ParseNode, match
from .model import Document
from .utils import read_markdown, write_html

logger = logging.getLogger(__name__)


def parse_markdown(text: str, config: ParserConfig | None = None) -> ParseNode:
    """Return the generic parse tree for ``text``; raises ``ParseError``."""
    config = config or ParserConfig()
    return match(text, max_depth=config.max_nesting_depth)


def markdown_to_document(text: str, config: ParserConfig | None = None) -> Document:
    return markdown_parser.build_document(parse_markdown(text, config))


def str_to_html(text: str, config: ParserConfig | None = None) -> List[str]:
    document = markdown_to_document(text, config)
    lines = renderer_html.render_document(document)
    logger.debug("Rendered %d HTML lines", len(lines))
    return lines


def convert_file_to_html(
    input_path: str | Path, output_path: str | Path, config: ParserConfig | None = None
) -> None:
    config = config or ParserConfig()
    input_path, output_path = Path(input_path), Path(output_path)
    text = read_markdown(input_path, encoding=config.encoding)
    # nothing is written unless the whole document converts
    html_lines = str_to_html(text, config)
    write_html(output_path, html_lines, encoding=config.encoding)
    logger.debug("Wrote %d lines to %s", len(html_lines), output_path)


def print_html_to_console(text: str, config: ParserConfig | None = None) -> None:
    for line in str_to_html(text, config):
        print(line)
