from __future__ import annotations

from typing import Callable, Iterable, List

from .cards import FontType, OpenUrlAction, TextColor, TextRun, TextWeight
from .errors import UnsupportedInlineError
from .model import (
    Emphasis,
    InlineCode,
    InlineElement,
    InlineEscape,
    InlineHtml,
    InlineImage,
    InlineLink,
    InlineText,
    Strikethrough,
    Strong,
    node_kind,
)


def convert_inlines(inlines: Iterable[InlineElement]) -> List[TextRun]:
    """Map inline nodes to text runs, in order.

    Formatting nodes with children are converted recursively and their style
    is added to every run produced for the children.
    """
    runs: List[TextRun] = []
    for inline in inlines:
        runs.extend(_convert_inline(inline))
    return runs


def _convert_inline(inline: InlineElement) -> List[TextRun]:
    if isinstance(inline, (InlineText, InlineEscape)):
        return [TextRun(inline.text)]
    elif isinstance(inline, Strikethrough):
        return _styled(inline.text, inline.children, _strike)
    elif isinstance(inline, Strong):
        return _styled(inline.text, inline.children, _bold)
    elif isinstance(inline, Emphasis):
        return _styled(inline.text, inline.children, _italic)
    elif isinstance(inline, InlineLink):
        action = OpenUrlAction(inline.url)
        return _styled(inline.text, inline.children, lambda run: _link(run, action))
    elif isinstance(inline, (InlineCode, InlineHtml)):
        return [TextRun(inline.text, font_type=FontType.MONOSPACE)]
    elif isinstance(inline, InlineImage):
        text = inline.title if inline.title is not None else (inline.alt or "")
        return convert_inlines([InlineLink(text=text, url=inline.src, raw=inline.raw)])
    raise UnsupportedInlineError(node_kind(inline), inline.raw)


def _styled(text: str, children: List[InlineElement], apply: Callable[[TextRun], None]) -> List[TextRun]:
    runs = convert_inlines(children) if children else [TextRun(text)]
    for run in runs:
        apply(run)
    return runs


def _strike(run: TextRun) -> None:
    run.strikethrough = True


def _bold(run: TextRun) -> None:
    run.weight = TextWeight.BOLDER


def _italic(run: TextRun) -> None:
    run.italic = True


def _link(run: TextRun, action: OpenUrlAction) -> None:
    run.color = TextColor.ACCENT
    run.select_action = action
