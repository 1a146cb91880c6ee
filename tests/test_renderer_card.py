import pytest

from MarkdownCard.cards import (
    CodeBlock as CardCodeBlock,
    Container,
    ContainerStyle,
    Image,
    RichTextBlock,
    Spacing,
    Table,
    TextBlock,
    TextSize,
    TextWeight,
)
from MarkdownCard.errors import UnsupportedBlockError, UnsupportedInlineError
from MarkdownCard.model import (
    Blockquote,
    Cell,
    CodeBlock,
    Document,
    Heading,
    HorizontalRule,
    HtmlBlock,
    ImageBlock,
    InlineText,
    LinkDefinition,
    ListBlock,
    Paragraph,
    Space,
    TableBlock,
    UnknownBlock,
    UnknownInline,
)
from MarkdownCard.options import CardOptions
from MarkdownCard.renderer_card import render_blocks, render_document


def para(text):
    return Paragraph(inline=[InlineText(text)], raw=text)


def texts(element):
    return [run.text for run in element.inlines]


def test_separator_lands_on_next_element():
    card = render_blocks([para("A"), HorizontalRule(raw="---"), para("B")])
    assert len(card.body) == 2
    first, second = card.body
    assert texts(first) == ["A"] and first.separator is False
    assert texts(second) == ["B"] and second.separator is True


def test_heading_spacing_escalates_before_paragraph():
    card = render_blocks(
        [
            Heading(level=1, inline=[InlineText("Title")]),
            Space(),
            Space(),
            para("Body"),
        ]
    )
    heading, body = card.body
    assert heading.spacing == Spacing.SMALL
    assert heading.inlines[0].size == TextSize.EXTRA_LARGE
    assert heading.inlines[0].weight == TextWeight.BOLDER
    assert body.spacing is None
    assert texts(body) == ["Body"]


def test_spacing_saturates_at_extra_large():
    card = render_blocks([para("A")] + [Space()] * 9)
    assert card.body[0].spacing == Spacing.EXTRA_LARGE


@pytest.mark.parametrize("spaces", range(0, 8))
def test_spacing_steps_are_capped(spaces):
    card = render_blocks([para("A")] + [Space()] * spaces)
    spacing = card.body[0].spacing
    steps = 0 if spacing is None else list(Spacing).index(spacing)
    assert steps == min(spaces, 5)


def test_trailing_rule_appends_bordered_placeholder():
    card = render_blocks([para("A"), HorizontalRule()])
    assert len(card.body) == 2
    placeholder = card.body[-1]
    assert isinstance(placeholder, Container)
    assert placeholder.items == []
    assert placeholder.show_border is True
    assert placeholder.separator is True


def test_space_does_not_consume_pending_separator():
    card = render_blocks([para("A"), HorizontalRule(), Space(), para("B")])
    first, second = card.body
    assert first.separator is False
    assert first.spacing == Spacing.EXTRA_SMALL
    assert second.separator is True


def test_space_before_any_element_creates_placeholder():
    card = render_blocks([Space(), para("A")])
    placeholder, paragraph = card.body
    assert isinstance(placeholder, Container)
    assert placeholder.spacing == Spacing.EXTRA_SMALL
    assert texts(paragraph) == ["A"]


def test_empty_input_gives_empty_body():
    card = render_blocks([])
    assert card.body == []
    assert card.to_dict()["body"] == []


@pytest.mark.parametrize(
    "level, size",
    [
        (1, TextSize.EXTRA_LARGE),
        (2, TextSize.LARGE),
        (3, TextSize.MEDIUM),
        (4, TextSize.DEFAULT),
        (5, TextSize.SMALL),
        (6, TextSize.SMALL),
    ],
)
def test_heading_size_by_level(level, size):
    card = render_blocks([Heading(level=level, inline=[InlineText("a"), InlineText("b")])])
    assert [run.size for run in card.body[0].inlines] == [size, size]
    assert all(run.weight == TextWeight.BOLDER for run in card.body[0].inlines)


def test_list_and_raw_markup_are_echoed_verbatim():
    raw_list = "- one\n- two"
    card = render_blocks([ListBlock(ordered=False, raw=raw_list), HtmlBlock(raw="<b>hi</b>")])
    list_element, html_element = card.body
    assert isinstance(list_element, TextBlock) and list_element.text == raw_list
    assert isinstance(html_element, TextBlock) and html_element.text == "<b>hi</b>"


def test_code_language_only_when_given():
    card = render_blocks([CodeBlock(language="python", code="x = 1"), CodeBlock(language=None, code="y")])
    with_lang, without_lang = card.body
    assert isinstance(with_lang, CardCodeBlock)
    assert with_lang.to_dict() == {"type": "CodeBlock", "codeSnippet": "x = 1", "language": "python"}
    assert "language" not in without_lang.to_dict()


def test_table_shape_matches_header():
    header = [Cell(inline=[InlineText(name)]) for name in ("a", "b", "c")]
    rows = [[Cell(inline=[InlineText(f"{r}{c}")]) for c in range(3)] for r in range(2)]
    card = render_blocks([TableBlock(header=header, rows=rows)])
    table = card.body[0]
    assert isinstance(table, Table)
    assert len(table.columns) == 3
    assert all(column.to_dict() == {} for column in table.columns)
    assert len(table.rows) == 3
    assert all(len(row.cells) == 3 for row in table.rows)
    assert table.rows[0].style == ContainerStyle.EMPHASIS
    assert table.rows[1].style is None
    assert texts(table.rows[2].cells[1].items[0]) == ["11"]


def test_blockquote_wraps_mapped_children_in_bordered_container():
    quote = Blockquote(blocks=[para("one"), Space(), para("two"), HorizontalRule()])
    card = render_blocks([quote, para("after")])
    container, after = card.body
    assert isinstance(container, Container)
    assert container.show_border is True
    assert len(container.items) == 2
    assert container.items[0].spacing == Spacing.EXTRA_SMALL
    assert container.separator is False
    assert after.separator is True


def test_nested_blockquotes_recurse():
    inner = Blockquote(blocks=[para("deep")])
    card = render_blocks([Blockquote(blocks=[para("outer"), inner])])
    outer = card.body[0]
    assert isinstance(outer.items[1], Container)
    assert texts(outer.items[1].items[0]) == ["deep"]


def test_image_alt_text_prefers_title():
    card = render_blocks(
        [
            ImageBlock(src="a.png", alt="alt a", title="Title a"),
            ImageBlock(src="b.png", alt="alt b"),
        ]
    )
    titled, untitled = card.body
    assert isinstance(titled, Image)
    assert titled.to_dict() == {"type": "Image", "url": "a.png", "altText": "Title a"}
    assert untitled.alt_text == "alt b"


def test_link_definition_renders_as_link():
    card = render_blocks(
        [
            LinkDefinition(label="home", url="https://example.com", title="Home"),
            LinkDefinition(label="docs", url="https://example.com/docs"),
        ]
    )
    titled, untitled = card.body
    assert isinstance(titled, RichTextBlock)
    assert texts(titled) == ["Home"]
    assert titled.inlines[0].select_action.url == "https://example.com"
    assert texts(untitled) == ["docs"]


@pytest.mark.parametrize("position", [0, 1, 2])
def test_unsupported_block_fails_anywhere(position):
    blocks = [para("A"), para("B")]
    blocks.insert(position, UnknownBlock(kind="footnote", raw="[^1]: note"))
    with pytest.raises(UnsupportedBlockError) as excinfo:
        render_blocks(blocks)
    assert excinfo.value.kind == "footnote"
    assert excinfo.value.raw == "[^1]: note"


def test_unsupported_block_inside_blockquote_fails():
    with pytest.raises(UnsupportedBlockError):
        render_blocks([Blockquote(blocks=[UnknownBlock(kind="math_block", raw="$$x$$")])])


def test_unsupported_inline_in_paragraph_fails():
    with pytest.raises(UnsupportedInlineError):
        render_blocks([Paragraph(inline=[UnknownInline(kind="math_inline", raw="$x$")])])


def test_options_fill_card_envelope():
    options = CardOptions(version="1.6", lang="en", fallback_text="Open in Teams")
    data = render_document(Document(blocks=[para("A")]), options).to_dict()
    assert data["type"] == "AdaptiveCard"
    assert data["version"] == "1.6"
    assert data["lang"] == "en"
    assert data["fallbackText"] == "Open in Teams"
    assert data["$schema"] == "http://adaptivecards.io/schemas/adaptive-card.json"


def test_rendering_is_repeatable_by_value():
    blocks = [
        Heading(level=2, inline=[InlineText("T")]),
        Space(),
        HorizontalRule(),
        para("A"),
        TableBlock(header=[Cell(inline=[])], rows=[[Cell(inline=[InlineText("x")])]]),
    ]
    first = render_blocks(blocks)
    second = render_blocks(blocks)
    assert first is not second
    assert first.to_dict() == second.to_dict()


def test_serialized_element_carries_shared_attributes():
    card = render_blocks([para("A"), Space(), HorizontalRule(), para("B")])
    body = card.to_dict()["body"]
    assert body[0]["spacing"] == "ExtraSmall"
    assert "separator" not in body[0]
    assert body[1]["separator"] is True
    assert body[1]["inlines"] == [{"type": "TextRun", "text": "B"}]
