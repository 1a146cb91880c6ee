"""Entry points that take Markdown text and return an Adaptive Card.

``convert_markdown`` is the boundary used by embedding callers: it never
raises for conversion or option errors and returns the message instead.
"""

from __future__ import annotations

import logging

from . import markdown_parser, renderer_card
from .cards import AdaptiveCard, serialize_card
from .errors import CardConversionError
from .model import Document
from .options import CardOptions, parse_card_options


def markdown_to_card(text: str, options: CardOptions | None = None) -> AdaptiveCard:
    """Tokenize ``text`` and transduce it into a card.

    Options given in the document's YAML front matter override ``options``.
    """
    card, _ = _convert(text, options)
    return card


def markdown_to_card_json(text: str, options: CardOptions | None = None) -> str:
    card, options = _convert(text, options)
    return serialize_card(card, indent=options.indent)


def convert_markdown(text: str, options: CardOptions | None = None) -> str:
    """Return the card JSON for ``text``, or ``"Error: ..."`` when it cannot be converted."""
    try:
        return markdown_to_card_json(text, options)
    except (CardConversionError, ValueError) as exc:
        logging.debug("Conversion failed: %s", exc)
        return f"Error: {exc}"


def _convert(text: str, options: CardOptions | None) -> tuple[AdaptiveCard, CardOptions]:
    document, options = _parse_with_options(text, options)
    logging.debug("Rendering %d block nodes", len(document.blocks))
    return renderer_card.render_document(document, options), options


def _parse_with_options(text: str, options: CardOptions | None) -> tuple[Document, CardOptions]:
    document = markdown_parser.parse_markdown(text)
    options = options or CardOptions()
    front_matter = (document.metadata or {}).get("front_matter")
    if front_matter:
        options = parse_card_options(front_matter, base=options)
    return document, options
