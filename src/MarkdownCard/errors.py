"""Errors raised while converting Markdown into an Adaptive Card.

- CardConversionError (base)

  - UnsupportedBlockError (block node kind with no card mapping)
  - UnsupportedInlineError (inline node kind with no text run mapping)

"""

from __future__ import annotations


class CardConversionError(Exception):
    """Base class for conversion failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedBlockError(CardConversionError):
    """Raised when a block node of an unknown kind reaches the renderer.

    The conversion is aborted; no partial card is produced.
    """

    def __init__(self, kind: str, raw: str):
        super().__init__(f"Unsupported block node '{kind}': {raw!r}")
        self.kind = kind
        self.raw = raw


class UnsupportedInlineError(CardConversionError):
    """Raised when an inline node of an unknown kind reaches the run converter."""

    def __init__(self, kind: str, raw: str):
        super().__init__(f"Unsupported inline node '{kind}': {raw!r}")
        self.kind = kind
        self.raw = raw
