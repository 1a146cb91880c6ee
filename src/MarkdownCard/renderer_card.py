from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .cards import (
    AdaptiveCard,
    CardElement,
    CodeBlock as CardCodeBlock,
    ColumnDefinition,
    Container,
    ContainerStyle,
    Image,
    RichTextBlock,
    Table,
    TableCell,
    TableRow,
    TextBlock,
    TextSize,
    TextWeight,
    escalate_spacing,
)
from .errors import UnsupportedBlockError
from .inline_runs import convert_inlines
from .model import (
    Block,
    Blockquote,
    Cell,
    CodeBlock,
    Document,
    Heading,
    HorizontalRule,
    HtmlBlock,
    ImageBlock,
    InlineLink,
    LinkDefinition,
    ListBlock,
    Paragraph,
    Space,
    TableBlock,
    node_kind,
)
from .options import CardOptions

HEADING_SIZES = {
    1: TextSize.EXTRA_LARGE,
    2: TextSize.LARGE,
    3: TextSize.MEDIUM,
    4: TextSize.DEFAULT,
}


@dataclass
class RenderState:
    needs_separator: bool = False
    last_element: CardElement | None = None


def render_document(doc: Document, options: CardOptions | None = None) -> AdaptiveCard:
    return render_blocks(doc.blocks, options)


def render_blocks(blocks: Sequence[Block], options: CardOptions | None = None) -> AdaptiveCard:
    """Build a fresh card from a block sequence in a single pass.

    Raises UnsupportedBlockError / UnsupportedInlineError on the first node
    that has no mapping; nothing is returned in that case.
    """
    options = options or CardOptions()
    card = AdaptiveCard(
        version=options.version,
        schema=options.schema,
        lang=options.lang,
        fallback_text=options.fallback_text,
    )
    state = RenderState()
    _render_sequence(blocks, card.body, state)
    _finalize(card.body, state)
    return card


def _render_sequence(blocks: Sequence[Block], body: List[CardElement], state: RenderState) -> None:
    for block in blocks:
        _dispatch_block(block, body, state)


def _dispatch_block(block: Block, body: List[CardElement], state: RenderState) -> None:
    if isinstance(block, Space):
        _add_space(body, state)
    elif isinstance(block, HorizontalRule):
        state.needs_separator = True
    elif isinstance(block, Heading):
        _append(body, _render_heading(block), state)
    elif isinstance(block, Paragraph):
        _append(body, RichTextBlock(convert_inlines(block.inline)), state)
    elif isinstance(block, ListBlock):
        _append(body, TextBlock(block.raw, wrap=True), state)
    elif isinstance(block, CodeBlock):
        _append(body, _render_code_block(block), state)
    elif isinstance(block, TableBlock):
        _append(body, _render_table(block), state)
    elif isinstance(block, Blockquote):
        container, trailing_separator = _render_blockquote(block)
        _append(body, container, state)
        # a rule closing the quote separates it from whatever follows
        if trailing_separator:
            state.needs_separator = True
    elif isinstance(block, ImageBlock):
        alt_text = block.title if block.title is not None else block.alt
        _append(body, Image(block.src, alt_text=alt_text), state)
    elif isinstance(block, HtmlBlock):
        _append(body, TextBlock(block.raw, wrap=True), state)
    elif isinstance(block, LinkDefinition):
        link = InlineLink(text=block.title or block.label, url=block.url, raw=block.raw)
        _append(body, RichTextBlock(convert_inlines([link])), state)
    else:
        raise UnsupportedBlockError(node_kind(block), block.raw)


def _append(body: List[CardElement], element: CardElement, state: RenderState) -> None:
    if state.needs_separator:
        element.separator = True
        state.needs_separator = False
    body.append(element)
    state.last_element = element


def _add_space(body: List[CardElement], state: RenderState) -> None:
    # a pending separator stays pending; it belongs to the element after the rule
    target = state.last_element
    if target is None:
        target = Container()
        _append(body, target, state)
    target.spacing = escalate_spacing(target.spacing)


def _finalize(body: List[CardElement], state: RenderState) -> None:
    if state.needs_separator:
        body.append(Container(show_border=True, separator=True))
        state.needs_separator = False


def _render_heading(heading: Heading) -> RichTextBlock:
    size = HEADING_SIZES.get(heading.level, TextSize.SMALL)
    runs = convert_inlines(heading.inline)
    for run in runs:
        run.size = size
        run.weight = TextWeight.BOLDER
    return RichTextBlock(runs)


def _render_code_block(block: CodeBlock) -> CardCodeBlock:
    element = CardCodeBlock(block.code)
    if block.language:
        element.language = block.language
    return element


def _render_table(block: TableBlock) -> Table:
    header = TableRow(cells=[_render_cell(cell) for cell in block.header], style=ContainerStyle.EMPHASIS)
    rows = [TableRow(cells=[_render_cell(cell) for cell in row]) for row in block.rows]
    columns = [ColumnDefinition() for _ in block.header]
    return Table(columns=columns, rows=[header, *rows])


def _render_cell(cell: Cell) -> TableCell:
    return TableCell(items=[RichTextBlock(convert_inlines(cell.inline))])


def _render_blockquote(block: Blockquote) -> tuple[Container, bool]:
    nested = RenderState()
    items: List[CardElement] = []
    _render_sequence(block.blocks, items, nested)
    return Container(items=items, show_border=True), nested.needs_separator
