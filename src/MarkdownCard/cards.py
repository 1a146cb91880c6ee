"""Adaptive Card element model and its JSON serialization.

Elements are plain dataclasses mutated while a card is being built; only
``to_dict`` knows about the wire format (camelCase keys, ``type`` tags,
unset attributes omitted).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, List

DEFAULT_SCHEMA = "http://adaptivecards.io/schemas/adaptive-card.json"
DEFAULT_VERSION = "1.5"


class Spacing(str, Enum):
    NONE = "None"
    EXTRA_SMALL = "ExtraSmall"
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"
    EXTRA_LARGE = "ExtraLarge"


SPACING_LADDER = (
    Spacing.NONE,
    Spacing.EXTRA_SMALL,
    Spacing.SMALL,
    Spacing.MEDIUM,
    Spacing.LARGE,
    Spacing.EXTRA_LARGE,
)


class TextSize(str, Enum):
    SMALL = "Small"
    DEFAULT = "Default"
    MEDIUM = "Medium"
    LARGE = "Large"
    EXTRA_LARGE = "ExtraLarge"


class TextWeight(str, Enum):
    LIGHTER = "Lighter"
    DEFAULT = "Default"
    BOLDER = "Bolder"


class TextColor(str, Enum):
    DEFAULT = "Default"
    ACCENT = "Accent"


class FontType(str, Enum):
    DEFAULT = "Default"
    MONOSPACE = "Monospace"


class ContainerStyle(str, Enum):
    DEFAULT = "default"
    EMPHASIS = "emphasis"


def escalate_spacing(current: Spacing | None) -> Spacing:
    """Return the next spacing step; unset counts as the bottom of the ladder."""
    if current is None:
        current = SPACING_LADDER[0]
    index = SPACING_LADDER.index(current)
    return SPACING_LADDER[min(index + 1, len(SPACING_LADDER) - 1)]


def _compact(data: dict[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, Enum):
            value = value.value
        result[key] = value
    return result


@dataclass
class OpenUrlAction:
    url: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "Action.OpenUrl", "url": self.url}


@dataclass
class TextRun:
    text: str
    weight: TextWeight | None = None
    italic: bool | None = None
    strikethrough: bool | None = None
    font_type: FontType | None = None
    color: TextColor | None = None
    size: TextSize | None = None
    select_action: OpenUrlAction | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "type": "TextRun",
                "text": self.text,
                "size": self.size,
                "weight": self.weight,
                "color": self.color,
                "fontType": self.font_type,
                "italic": self.italic,
                "strikethrough": self.strikethrough,
                "selectAction": self.select_action.to_dict() if self.select_action else None,
            }
        )


@dataclass
class CardElement:
    """Base class for body elements; carries the attributes shared by all of them."""

    spacing: Spacing | None = field(default=None, kw_only=True)
    separator: bool = field(default=False, kw_only=True)

    type: ClassVar[str] = "CardElement"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        data.update(_compact(self._properties()))
        if self.spacing is not None:
            data["spacing"] = self.spacing.value
        if self.separator:
            data["separator"] = True
        return data

    def _properties(self) -> dict[str, Any]:
        return {}


@dataclass
class TextBlock(CardElement):
    text: str
    wrap: bool | None = None
    size: TextSize | None = None
    weight: TextWeight | None = None

    type: ClassVar[str] = "TextBlock"

    def _properties(self) -> dict[str, Any]:
        return {"text": self.text, "wrap": self.wrap, "size": self.size, "weight": self.weight}


@dataclass
class RichTextBlock(CardElement):
    inlines: List[TextRun] = field(default_factory=list)

    type: ClassVar[str] = "RichTextBlock"

    def _properties(self) -> dict[str, Any]:
        return {"inlines": [run.to_dict() for run in self.inlines]}


@dataclass
class CodeBlock(CardElement):
    code_snippet: str
    language: str | None = None

    type: ClassVar[str] = "CodeBlock"

    def _properties(self) -> dict[str, Any]:
        return {"codeSnippet": self.code_snippet, "language": self.language}


@dataclass
class Container(CardElement):
    items: List[CardElement] = field(default_factory=list)
    show_border: bool | None = None

    type: ClassVar[str] = "Container"

    def _properties(self) -> dict[str, Any]:
        return {"items": [item.to_dict() for item in self.items], "showBorder": self.show_border}


@dataclass
class Image(CardElement):
    url: str
    alt_text: str | None = None

    type: ClassVar[str] = "Image"

    def _properties(self) -> dict[str, Any]:
        return {"url": self.url, "altText": self.alt_text}


@dataclass
class ColumnDefinition:
    """Table column; no per-column configuration unless ``width`` is set."""

    width: int | str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({"width": self.width})


@dataclass
class TableCell(CardElement):
    items: List[CardElement] = field(default_factory=list)

    type: ClassVar[str] = "TableCell"

    def _properties(self) -> dict[str, Any]:
        return {"items": [item.to_dict() for item in self.items]}


@dataclass
class TableRow(CardElement):
    cells: List[TableCell] = field(default_factory=list)
    style: ContainerStyle | None = None

    type: ClassVar[str] = "TableRow"

    def _properties(self) -> dict[str, Any]:
        return {"cells": [cell.to_dict() for cell in self.cells], "style": self.style}


@dataclass
class Table(CardElement):
    columns: List[ColumnDefinition] = field(default_factory=list)
    rows: List[TableRow] = field(default_factory=list)

    type: ClassVar[str] = "Table"

    def _properties(self) -> dict[str, Any]:
        return {
            "columns": [column.to_dict() for column in self.columns],
            "rows": [row.to_dict() for row in self.rows],
        }


@dataclass
class AdaptiveCard:
    body: List[CardElement] = field(default_factory=list)
    version: str = DEFAULT_VERSION
    schema: str = DEFAULT_SCHEMA
    lang: str | None = None
    fallback_text: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "type": "AdaptiveCard",
                "$schema": self.schema,
                "version": self.version,
                "lang": self.lang,
                "fallbackText": self.fallback_text,
                "body": [element.to_dict() for element in self.body],
            }
        )


def serialize_card(card: AdaptiveCard, indent: int | None = 2) -> str:
    """Serialize a card to JSON text; ``indent=None`` gives compact output."""
    return json.dumps(card.to_dict(), indent=indent, ensure_ascii=False)
