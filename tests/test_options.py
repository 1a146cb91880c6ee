import textwrap
from pathlib import Path

import pytest

from MarkdownCard.cards import DEFAULT_SCHEMA
from MarkdownCard.options import CardOptions, load_card_options, parse_card_options


def test_parse_yaml_options():
    yaml_text = textwrap.dedent(
        """
        version: "1.6"
        $schema: "https://example.com/schema.json"
        fallbackText: "Card unavailable"
        lang: de
        indent: 4
        """
    )
    options = parse_card_options(yaml_text)
    assert options == CardOptions(
        version="1.6",
        schema="https://example.com/schema.json",
        lang="de",
        fallback_text="Card unavailable",
        indent=4,
    )


def test_values_override_base_and_keep_the_rest():
    base = CardOptions(lang="en", indent=None)
    options = parse_card_options("version: '1.4'\n", base=base)
    assert options.version == "1.4"
    assert options.lang == "en"
    assert options.indent is None
    assert options.schema == DEFAULT_SCHEMA


def test_empty_yaml_gives_defaults():
    assert parse_card_options("") == CardOptions()


def test_unknown_keys_are_ignored():
    assert parse_card_options("title: Report\n") == CardOptions()


def test_root_must_be_a_mapping():
    with pytest.raises(ValueError):
        parse_card_options("- version\n- 1.5\n")


@pytest.mark.parametrize("yaml_text", ["indent: -1\n", "indent: yes\n", "indent: wide\n", "version: [1, 5]\n"])
def test_bad_values_are_rejected(yaml_text):
    with pytest.raises(ValueError):
        parse_card_options(yaml_text)


def test_load_card_options_from_file(tmp_path: Path):
    config = tmp_path / "card.yaml"
    config.write_text("version: '1.3'\nindent: null\n", encoding="utf-8")
    options = load_card_options(config)
    assert options.version == "1.3"
    assert options.indent is None


def test_load_missing_config_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_card_options(tmp_path / "missing.yaml")


def test_malformed_yaml_is_a_value_error():
    with pytest.raises(ValueError, match="not valid YAML"):
        parse_card_options("foo: [unclosed\n")


def test_unquoted_version_is_rejected():
    with pytest.raises(ValueError, match="quoted"):
        parse_card_options("version: 1.10\n")
