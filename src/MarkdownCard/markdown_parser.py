from __future__ import annotations

import logging
import re
from typing import Iterable, List, Sequence

import yaml
from markdown_it import MarkdownIt
from mdit_py_plugins.front_matter import front_matter_plugin

from .model import (
    Block,
    Blockquote,
    Cell,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    HorizontalRule,
    HtmlBlock,
    ImageBlock,
    InlineCode,
    InlineElement,
    InlineEscape,
    InlineHtml,
    InlineImage,
    InlineLink,
    InlineText,
    LinkDefinition,
    ListBlock,
    Paragraph,
    Space,
    Strikethrough,
    Strong,
    TableBlock,
    UnknownBlock,
    UnknownInline,
)

_QUOTE_MARKER = re.compile(r"^ {0,3}> ?")

_INLINE_CONTAINERS = {
    "strong_open": Strong,
    "em_open": Emphasis,
    "s_open": Strikethrough,
}
_INLINE_CLOSERS = {"strong_close", "em_close", "s_close", "link_close"}


def build_markdown_it(front_matter: bool = True) -> MarkdownIt:
    md = MarkdownIt("commonmark", {"inline_definitions": True}).enable(["table", "strikethrough"])
    if front_matter:
        md.use(front_matter_plugin)
    return md


def parse_markdown(text: str) -> Document:
    tokens = build_markdown_it().parse(text)
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    metadata = None
    start = 0
    if tokens and tokens[0].type == "front_matter":
        if _is_front_matter(tokens[0].content):
            metadata = {"front_matter": tokens[0].content}
            start = 1
        else:
            # a leading `---` pair around plain text is two thematic breaks
            tokens = build_markdown_it(front_matter=False).parse(text)
    blocks, _ = _parse_blocks(tokens, start, stop_types=set(), lines=lines)
    logging.debug("Parsed %d block nodes", len(blocks))
    return Document(blocks=blocks, metadata=metadata)


def _is_front_matter(content: str) -> bool:
    """A YAML mapping, or broken YAML the options loader should report."""
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError:
        return True
    return isinstance(data, dict)


def _parse_blocks(tokens, index: int, stop_types: set[str], lines: List[str]) -> tuple[list, int]:
    blocks: List[Block] = []
    prev_end: int | None = None
    after_rule = False
    i = index
    while i < len(tokens):
        tok = tokens[i]
        if tok.type in stop_types:
            break
        if tok.map:
            # blank lines after a rule belong to the rule
            if prev_end is not None and not after_rule:
                blocks.extend(_spaces_between(lines, prev_end, tok.map[0]))
            prev_end = _content_end(lines, tok.map)
            after_rule = tok.type == "hr"
        raw = _raw(lines, tok.map)

        if tok.type == "heading_open":
            inline = tokens[i + 1]
            blocks.append(Heading(level=int(tok.tag[1]), inline=_parse_inline(inline.children or []), raw=raw))
            i += 3
        elif tok.type == "paragraph_open":
            inline_elements = _parse_inline(tokens[i + 1].children or [])
            if len(inline_elements) == 1 and isinstance(inline_elements[0], InlineImage):
                image = inline_elements[0]
                blocks.append(ImageBlock(src=image.src, alt=image.alt, title=image.title, raw=raw))
            else:
                blocks.append(Paragraph(inline=inline_elements, raw=raw))
            i += 3
        elif tok.type in ("bullet_list_open", "ordered_list_open"):
            blocks.append(ListBlock(ordered=tok.type == "ordered_list_open", raw=raw))
            i = _find_close(tokens, i) + 1
        elif tok.type in ("fence", "code_block"):
            blocks.append(CodeBlock(language=_fence_language(tok.info), code=tok.content.rstrip("\n"), raw=raw))
            i += 1
        elif tok.type == "hr":
            blocks.append(HorizontalRule(raw=raw))
            i += 1
        elif tok.type == "table_open":
            table_block, i = _parse_table(tokens, i)
            table_block.raw = raw
            blocks.append(table_block)
        elif tok.type == "blockquote_open":
            inner_lines = _strip_quote_markers(lines, tok.map)
            children, i = _parse_blocks(tokens, i + 1, stop_types={"blockquote_close"}, lines=inner_lines)
            blocks.append(Blockquote(blocks=children, raw=raw))
            i += 1  # skip blockquote_close
        elif tok.type == "html_block":
            blocks.append(HtmlBlock(raw=tok.content.rstrip("\n")))
            i += 1
        elif tok.type == "definition":
            meta = tok.meta or {}
            blocks.append(
                LinkDefinition(
                    label=meta.get("label") or meta.get("id") or "",
                    url=meta.get("url") or "",
                    title=meta.get("title") or None,
                    raw=raw,
                )
            )
            i += 1
        elif tok.nesting == 1:
            kind = tok.type[: -len("_open")] if tok.type.endswith("_open") else tok.type
            blocks.append(UnknownBlock(kind=kind, raw=raw))
            i = _find_close(tokens, i) + 1
        elif tok.nesting == 0:
            blocks.append(UnknownBlock(kind=tok.type, raw=raw or tok.content))
            i += 1
        else:
            i += 1
    return blocks, i


def _parse_table(tokens, index: int) -> tuple[TableBlock, int]:
    header: list[Cell] = []
    rows: list[list[Cell]] = []
    i = index + 1
    while i < len(tokens):
        tok = tokens[i]
        if tok.type == "thead_open":
            i += 1
            while tokens[i].type != "thead_close":
                if tokens[i].type == "th_open":
                    inline = tokens[i + 1]
                    header.append(Cell(inline=_parse_inline(inline.children or [])))
                    i += 3  # skip th_open, inline, th_close
                else:
                    i += 1
            i += 1
        elif tok.type == "tbody_open":
            i += 1
            while tokens[i].type != "tbody_close":
                if tokens[i].type == "tr_open":
                    row: list[Cell] = []
                    i += 1
                    while tokens[i].type != "tr_close":
                        if tokens[i].type in {"td_open", "th_open"}:
                            inline = tokens[i + 1]
                            row.append(Cell(inline=_parse_inline(inline.children or [])))
                            i += 3
                        else:
                            i += 1
                    rows.append(row)
                    i += 1  # skip tr_close
                else:
                    i += 1
            i += 1
        elif tok.type == "table_close":
            break
        else:
            i += 1
    return TableBlock(header=header, rows=rows), i + 1


def _parse_inline(children: Iterable) -> List[InlineElement]:
    result: List[InlineElement] = []
    stack: list[tuple[InlineElement, List[InlineElement]]] = []
    current = result
    for tok in children:
        if tok.type == "text":
            _append_text(current, tok.content)
        elif tok.type in ("softbreak", "hardbreak"):
            _append_text(current, "\n")
        elif tok.type == "text_special":
            current.append(InlineEscape(tok.content, raw=tok.markup or tok.content))
        elif tok.type in _INLINE_CONTAINERS:
            node = _INLINE_CONTAINERS[tok.type](text="", raw=tok.markup)
            current.append(node)
            stack.append((node, current))
            current = node.children
        elif tok.type == "link_open":
            node = InlineLink(text="", url=str(tok.attrGet("href") or ""), title=_attr_or_none(tok, "title"))
            current.append(node)
            stack.append((node, current))
            current = node.children
        elif tok.type in _INLINE_CLOSERS:
            if stack:
                node, current = stack.pop()
                _close_container(node)
        elif tok.type == "code_inline":
            current.append(InlineCode(tok.content, raw=f"{tok.markup}{tok.content}{tok.markup}"))
        elif tok.type == "html_inline":
            current.append(InlineHtml(tok.content, raw=tok.content))
        elif tok.type == "image":
            src = str(tok.attrGet("src") or "")
            alt = tok.content or _attr_or_none(tok, "alt")
            current.append(InlineImage(src=src, alt=alt, title=_attr_or_none(tok, "title"), raw=f"![{alt or ''}]({src})"))
        else:
            current.append(UnknownInline(kind=tok.type, text=tok.content, raw=tok.content or tok.markup))
    return result


def _close_container(node: InlineElement) -> None:
    text = _plain_text(node.children)
    node.text = text
    if isinstance(node, InlineLink):
        node.raw = f"[{text}]({node.url})"
    else:
        node.raw = f"{node.raw}{text}{node.raw}"


def _append_text(current: List[InlineElement], content: str) -> None:
    if not content:
        return
    if current and type(current[-1]) is InlineText:
        current[-1].text += content
        current[-1].raw += content
    else:
        current.append(InlineText(content, raw=content))


def _plain_text(inlines: Sequence[InlineElement]) -> str:
    parts: list[str] = []
    for inline in inlines:
        if isinstance(inline, InlineImage):
            parts.append(inline.alt or "")
        else:
            parts.append(getattr(inline, "text", ""))
    return "".join(parts)


def _attr_or_none(tok, name: str) -> str | None:
    value = tok.attrGet(name)
    return None if value is None else str(value)


def _fence_language(info: str) -> str | None:
    words = (info or "").split()
    return words[0] if words else None


def _find_close(tokens, index: int) -> int:
    level = tokens[index].level
    for j in range(index + 1, len(tokens)):
        if tokens[j].nesting == -1 and tokens[j].level == level:
            return j
    return len(tokens) - 1


def _spaces_between(lines: List[str], start: int, end: int) -> list[Space]:
    blank = sum(1 for line in lines[start:end] if not line.strip())
    return [Space(raw="\n") for _ in range(blank)]


def _content_end(lines: List[str], span: Sequence[int]) -> int:
    start, end = span
    while end > start and not lines[end - 1].strip():
        end -= 1
    return end


def _raw(lines: List[str], span: Sequence[int] | None) -> str:
    if not span:
        return ""
    return "\n".join(lines[span[0] : _content_end(lines, span)])


def _strip_quote_markers(lines: List[str], span: Sequence[int]) -> List[str]:
    inner = list(lines)
    for n in range(span[0], min(span[1], len(inner))):
        inner[n] = _QUOTE_MARKER.sub("", inner[n], count=1)
    return inner
