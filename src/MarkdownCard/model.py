from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, List, Sequence


@dataclass
class Block:
    """Base class for block-level nodes."""

    raw: str = field(default="", kw_only=True)


@dataclass
class Document:
    blocks: List[Block]
    metadata: dict[str, Any] | None = None


@dataclass
class Space(Block):
    """Blank line between two sibling blocks."""

    kind: ClassVar[str] = "space"


@dataclass
class HorizontalRule(Block):
    """Horizontal rule / thematic break."""

    kind: ClassVar[str] = "hr"


@dataclass
class Heading(Block):
    level: int
    inline: List["InlineElement"]

    kind: ClassVar[str] = "heading"


@dataclass
class Paragraph(Block):
    inline: List["InlineElement"]

    kind: ClassVar[str] = "paragraph"


@dataclass
class ListBlock(Block):
    ordered: bool

    kind: ClassVar[str] = "list"


@dataclass
class CodeBlock(Block):
    language: str | None
    code: str

    kind: ClassVar[str] = "code"


@dataclass
class Cell:
    inline: List["InlineElement"]


@dataclass
class TableBlock(Block):
    header: Sequence[Cell]
    rows: Sequence[Sequence[Cell]]

    kind: ClassVar[str] = "table"


@dataclass
class Blockquote(Block):
    blocks: List[Block]

    kind: ClassVar[str] = "blockquote"


@dataclass
class ImageBlock(Block):
    src: str
    alt: str | None = None
    title: str | None = None

    kind: ClassVar[str] = "image"


@dataclass
class HtmlBlock(Block):
    """Raw markup, kept verbatim in ``raw``."""

    kind: ClassVar[str] = "html"


@dataclass
class LinkDefinition(Block):
    label: str
    url: str
    title: str | None = None

    kind: ClassVar[str] = "def"


@dataclass
class UnknownBlock(Block):
    """Block the tokenizer could not map to any known node."""

    kind: str


@dataclass
class InlineElement:
    """Base class for inline nodes."""

    raw: str = field(default="", kw_only=True)


@dataclass
class InlineText(InlineElement):
    text: str

    kind: ClassVar[str] = "text"


@dataclass
class InlineEscape(InlineElement):
    text: str

    kind: ClassVar[str] = "escape"


@dataclass
class Strikethrough(InlineElement):
    text: str
    children: List[InlineElement] = field(default_factory=list)

    kind: ClassVar[str] = "del"


@dataclass
class Strong(InlineElement):
    text: str
    children: List[InlineElement] = field(default_factory=list)

    kind: ClassVar[str] = "strong"


@dataclass
class Emphasis(InlineElement):
    text: str
    children: List[InlineElement] = field(default_factory=list)

    kind: ClassVar[str] = "em"


@dataclass
class InlineLink(InlineElement):
    text: str
    url: str
    title: str | None = None
    children: List[InlineElement] = field(default_factory=list)

    kind: ClassVar[str] = "link"


@dataclass
class InlineCode(InlineElement):
    text: str

    kind: ClassVar[str] = "codespan"


@dataclass
class InlineHtml(InlineElement):
    text: str

    kind: ClassVar[str] = "html"


@dataclass
class InlineImage(InlineElement):
    src: str
    alt: str | None = None
    title: str | None = None

    kind: ClassVar[str] = "image"


@dataclass
class UnknownInline(InlineElement):
    kind: str
    text: str = ""


def node_kind(node: Block | InlineElement) -> str:
    """Kind tag of a node, falling back to the class name for foreign subclasses."""
    return getattr(node, "kind", type(node).__name__)
