from __future__ import annotations

import codecs
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from .exceptions import ConfigError, IoError
from .grammar import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT


@dataclass(frozen=True)
class ParserConfig:
    max_nesting_depth: int = DEFAULT_MAX_DEPTH
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        depth = self.max_nesting_depth
        if isinstance(depth, bool) or not isinstance(depth, int) or depth < 1:
            raise ConfigError(f"max_nesting_depth must be a positive integer, got {depth!r}")
        if depth > MAX_DEPTH_LIMIT:
            raise ConfigError(f"max_nesting_depth must be at most {MAX_DEPTH_LIMIT}, got {depth}")
        if not isinstance(self.encoding, str) or not self.encoding:
            raise ConfigError(f"encoding must be a non-empty string, got {self.encoding!r}")
        try:
            codecs.lookup(self.encoding)
        except LookupError as exc:
            raise ConfigError(f"Unknown encoding: {self.encoding!r}") from exc


def parse_config(text: str) -> ParserConfig:
    """Parse a YAML mapping of known settings into a ParserConfig."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in configuration: {exc}") from exc
    if data is None:
        return ParserConfig()
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a mapping of settings.")
    known = {f.name for f in fields(ParserConfig)}
    unknown = sorted(str(key) for key in data if key not in known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
    return ParserConfig(**data)


def load_config(path: str | Path) -> ParserConfig:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise IoError(path, exc.strerror or str(exc)) from exc
    return parse_config(text)
