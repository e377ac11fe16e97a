from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .exceptions import IoError


def configure_logging(verbose: bool = False) -> None:
    """Configure a simple console logger."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(message)s",
    )


def resolve_output_path(input_path: Path, output: str | None) -> Path:
    if output:
        out_path = Path(output)
        if out_path.is_dir():
            out_path = out_path / f"{input_path.stem}.html"
        return out_path
    return input_path.with_suffix(".html")


def read_markdown(path: Path, encoding: str = "utf-8") -> str:
    try:
        return path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError, LookupError) as exc:
        raise IoError(path, getattr(exc, "strerror", None) or str(exc)) from exc


def write_html(path: Path, lines: Iterable[str], encoding: str = "utf-8") -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding=encoding) as handle:
            for line in lines:
                handle.write(line + "\n")
    except OSError as exc:
        raise IoError(path, exc.strerror or str(exc)) from exc
