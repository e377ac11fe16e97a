import textwrap

import pytest

from MarkdownParser.config import ParserConfig, load_config, parse_config
from MarkdownParser.exceptions import ConfigError, IoError
from MarkdownParser.grammar import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT


def test_parse_config_reads_known_settings():
    config = parse_config(
        textwrap.dedent(
            """
            max_nesting_depth: 8
            encoding: latin-1
            """
        )
    )
    assert config == ParserConfig(max_nesting_depth=8, encoding="latin-1")


def test_empty_config_uses_defaults():
    assert parse_config("") == ParserConfig()
    assert ParserConfig().max_nesting_depth == DEFAULT_MAX_DEPTH


@pytest.mark.parametrize(
    "text, message",
    [
        ("- a\n- b\n", "mapping"),
        ("colour: blue\n", "colour"),
        ("max_nesting_depth: 0\n", "positive"),
        ("max_nesting_depth: true\n", "positive"),
        ("encoding: ''\n", "encoding"),
        ("encoding: no-such-codec\n", "Unknown encoding"),
        ("max_nesting_depth: 10000\n", "at most"),
        ("max_nesting_depth: [\n", "Invalid YAML"),
    ],
)
def test_invalid_config_is_rejected(text, message):
    with pytest.raises(ConfigError, match=message):
        parse_config(text)


def test_config_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse_config("colour: blue\n")


def test_load_config_from_file(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("max_nesting_depth: 4\n", encoding="utf-8")
    assert load_config(path).max_nesting_depth == 4


def test_load_missing_config_raises_io_error(tmp_path):
    with pytest.raises(IoError):
        load_config(tmp_path / "absent.yaml")


def test_depth_ceiling_is_accepted():
    assert ParserConfig(max_nesting_depth=MAX_DEPTH_LIMIT).max_nesting_depth == MAX_DEPTH_LIMIT
    with pytest.raises(ConfigError):
        ParserConfig(max_nesting_depth=MAX_DEPTH_LIMIT + 1)


def test_encoding_aliases_are_accepted():
    assert ParserConfig(encoding="latin-1").encoding == "latin-1"
