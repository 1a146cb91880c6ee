from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from .cards import DEFAULT_SCHEMA, DEFAULT_VERSION

_KEY_ALIASES = {
    "version": "version",
    "schema": "schema",
    "$schema": "schema",
    "lang": "lang",
    "fallback_text": "fallback_text",
    "fallbackText": "fallback_text",
    "indent": "indent",
}


@dataclass(frozen=True)
class CardOptions:
    version: str = DEFAULT_VERSION
    schema: str = DEFAULT_SCHEMA
    lang: str | None = None
    fallback_text: str | None = None
    indent: int | None = 2


def parse_card_options(text: str, base: CardOptions | None = None) -> CardOptions:
    """Parse a YAML mapping of card options on top of ``base``."""
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Card options are not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("YAML root must be a mapping of card options.")
    return options_from_mapping(data, base)


def load_card_options(path: str | Path, base: CardOptions | None = None) -> CardOptions:
    path = Path(path).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    logging.debug("Loading card options from %s", path)
    return parse_card_options(path.read_text(encoding="utf-8"), base)


def options_from_mapping(data: Mapping[str, Any], base: CardOptions | None = None) -> CardOptions:
    base = base or CardOptions()
    changes: dict[str, Any] = {}
    for key, value in data.items():
        name = _KEY_ALIASES.get(str(key))
        if name is None:
            logging.debug("Ignoring unknown card option %r", key)
            continue
        changes[name] = _coerce(name, value)
    return replace(base, **changes)


def _coerce(name: str, value: Any) -> Any:
    if name == "indent":
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"Option 'indent' must be a non-negative integer or null, got {value!r}")
        return value
    if name in {"lang", "fallback_text"} and value is None:
        return None
    if name == "version" and isinstance(value, float):
        raise ValueError(f"Option 'version' must be quoted, YAML read {value!r} as a number")
    if isinstance(value, (dict, list, bool)) or value is None:
        raise ValueError(f"Option '{name}' must be a string, got {value!r}")
    return str(value)
