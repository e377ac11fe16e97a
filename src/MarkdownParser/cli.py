from __future__ import annotations

import argparse
import logging
from pathlib import Path

from . import converter
from .config import ParserConfig, load_config
from .exceptions import MarkdownError
from .utils import configure_logging, read_markdown, resolve_output_path

__version__ = "0.1.0"

INFO_TEXT = f"""\
MarkdownParser v{__version__}
Markdown to HTML converter

Features:
  - Headings (# to ######), paragraphs and block quotes
  - Bold, italic, strikethrough, underline and inline code
  - Links, images and backslash escapes
  - Ordered and unordered lists, fenced code blocks, thematic breaks
  - HTML output with proper escaping

Usage examples:
  markdown-parser convert -i document.md -o document.html
  markdown-parser parse -t "# Hello **World**"
  markdown-parser info"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="markdown-parser",
        description="Convert Markdown documents to HTML.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", type=str, help="Path to a YAML configuration file")
    commands = parser.add_subparsers(dest="command", required=True)

    convert = commands.add_parser("convert", help="Convert a Markdown file to an HTML file")
    convert.add_argument("-i", "--input", required=True, help="Path to the input Markdown file")
    convert.add_argument("-o", "--output", help="Output HTML path (defaults to the input name with .html)")

    parse = commands.add_parser("parse", help="Convert Markdown text or a file and print the HTML")
    source = parse.add_mutually_exclusive_group(required=True)
    source.add_argument("-t", "--text", help="Markdown text to convert")
    source.add_argument("-i", "--input", help="Path to a Markdown file to convert")

    commands.add_parser("info", help="Display application information")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)
    try:
        config = load_config(args.config) if args.config else ParserConfig()
        if args.command == "convert":
            _convert(args, config)
        elif args.command == "parse":
            _parse(args, config)
        else:
            print(INFO_TEXT)
    except MarkdownError as exc:
        logging.error("%s", exc)
        return 1
    return 0


def _convert(args: argparse.Namespace, config: ParserConfig) -> None:
    input_path = Path(args.input).expanduser()
    output_path = resolve_output_path(input_path, args.output)
    logging.info("Converting %s to %s", input_path, output_path)
    converter.convert_file_to_html(input_path, output_path, config)
    logging.info("Done. Saved to %s", output_path)


def _parse(args: argparse.Namespace, config: ParserConfig) -> None:
    if args.input:
        markdown_text = read_markdown(Path(args.input).expanduser(), encoding=config.encoding)
    else:
        markdown_text = args.text
    logging.debug("Markdown length: %d chars", len(markdown_text))
    converter.print_html_to_console(markdown_text, config)


if __name__ == "__main__":
    raise SystemExit(main())
