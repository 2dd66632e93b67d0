"""Tree -> markdown renderer.

Rendering is a depth-first walk that concatenates each child's output in
document order. All list and link bookkeeping lives in a `RenderContext`
created per `render()` call.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator

from h2md.errors import MissingAttributeError
from h2md.nodes import Node, NodeKind
from h2md.tables import (
    HEADER_TAGS,
    TABLE_CELL_TAGS,
    TABLE_SECTION_TAGS,
    TRAILING_NEWLINE_TAGS,
    WRAP_TAGS,
)

LINK_STYLES = ("inline", "reference")


@dataclass
class RenderOptions:
    """Per-call rendering settings.

    strict: raise MissingAttributeError instead of substituting "" when a
        required attribute (href, src, alt, type, value) is missing.
    indent: string repeated once per nested list level.
    link_style: "inline" for [text](url), "reference" for text [n] plus a
        References block at the end.
    clean: run the markdown cleanup pass after rendering. render() ignores
        it; only convert.html_to_markdown reads it.
    """

    strict: bool = False
    indent: str = "\t"
    link_style: str = "inline"
    clean: bool = False

    def __post_init__(self) -> None:
        if self.link_style not in LINK_STYLES:
            raise ValueError(
                f"link_style must be one of {LINK_STYLES}, got {self.link_style!r}"
            )


@dataclass
class RenderContext:
    options: RenderOptions
    depth: int = 0
    counters: list[int] = field(default_factory=list)
    parent: str = ""
    references: dict[str, int] = field(default_factory=dict)

    @contextmanager
    def list_scope(self) -> Iterator[None]:
        """Open a new list level with its own counter starting at 1."""
        self.counters.append(1)
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1
            self.counters.pop()

    @contextmanager
    def within(self, name: str) -> Iterator[None]:
        previous = self.parent
        self.parent = name
        try:
            yield
        finally:
            self.parent = previous

    def next_number(self) -> int:
        number = self.counters[-1]
        self.counters[-1] += 1
        return number

    def reference(self, url: str) -> int:
        if url not in self.references:
            self.references[url] = len(self.references) + 1
        return self.references[url]

    def attribute(self, node: Node, name: str) -> str:
        value = node.attributes.get(name)
        if value is None:
            if self.options.strict:
                raise MissingAttributeError(node.name, name)
            return ""
        return value


def render(tree: Node, options: RenderOptions | None = None) -> str:
    """Render the children of `tree` (normally the ROOT node) as markdown."""
    context = RenderContext(options or RenderOptions())
    markdown = _render_children(tree, context)
    if context.references:
        markdown += _references_block(context.references)
    return markdown


def _render_children(node: Node, context: RenderContext) -> str:
    parts = []
    with context.within(node.name):
        for child in node.children:
            if child.kind is NodeKind.TEXT:
                parts.append(child.text)
            elif child.kind is NodeKind.ELEMENT:
                parts.append(_render_element(child, context))
    return "".join(parts)


def _is_hidden(node: Node) -> bool:
    return node.attributes.get("class") == "hidden"


def _render_element(node: Node, context: RenderContext) -> str:
    if _is_hidden(node):
        return ""

    if node.name in WRAP_TAGS:
        prefix, suffix = WRAP_TAGS[node.name]
        markdown = prefix + _render_children(node, context) + suffix
        if node.name in TRAILING_NEWLINE_TAGS:
            markdown += "\n"
        return markdown

    if node.name in HEADER_TAGS:
        return _render_header(node, context)

    handler = _HANDLERS.get(node.name)
    if handler is not None:
        return handler(node, context)

    return _render_children(node, context)


def _render_link(node: Node, context: RenderContext) -> str:
    href = context.attribute(node, "href")
    inner_text = _render_children(node, context)

    if context.options.link_style == "reference" and href and not href.startswith("#"):
        number = context.reference(href)
        if inner_text.strip():
            return f"{inner_text} [{number}]"
        return f"[{number}]"

    if not inner_text:
        return href
    return f"[{inner_text}]({href})"


def _render_list(node: Node, context: RenderContext) -> str:
    with context.list_scope():
        return "\n" + _render_children(node, context)


def _render_list_item(node: Node, context: RenderContext) -> str:
    # top-level lists are not indented
    indent = context.options.indent * max(context.depth - 1, 0)
    if context.parent == "ol":
        marker = f"{context.next_number()}. "
    else:
        marker = "- "
    return f"\n{indent}{marker}{_render_children(node, context)}"


def _render_image(node: Node, context: RenderContext) -> str:
    src = context.attribute(node, "src")
    alt = context.attribute(node, "alt")
    return f"![{alt}]({src})\n"


def _render_code(node: Node, context: RenderContext) -> str:
    # <pre> handles its own fencing
    if context.parent == "pre":
        return _render_children(node, context)
    return f"```{_render_children(node, context)}```\n"


def _render_header(node: Node, context: RenderContext) -> str:
    level = int(node.name[1])
    return f"\n{'#' * level} {_render_children(node, context)}\n"


def _render_input(node: Node, context: RenderContext) -> str:
    return f"\n\n[input: {context.attribute(node, 'type')}]\n\n"


def _render_label(node: Node, context: RenderContext) -> str:
    return f"\n\n[label: {context.attribute(node, 'value')}]\n\n"


def _render_table(node: Node, context: RenderContext) -> str:
    """Lay out a table as caption, header, separator, body, footer.

    The order is fixed regardless of where sections appear in the source.
    Rows directly under <table> count as body rows.
    """
    caption = ""
    header_rows: list[str] = []
    separator_rows: list[str] = []
    body_rows: list[str] = []
    footer_rows: list[str] = []

    for child in node.elements():
        if _is_hidden(child):
            continue

        if child.name == "tr":
            body_rows.append(_render_row(child, context)[0])

        elif child.name in TABLE_SECTION_TAGS:
            for row in child.elements("tr"):
                if _is_hidden(row):
                    continue
                row_text, cell_count = _render_row(row, context)
                if child.name == "thead":
                    header_rows.append(row_text)
                    separator_rows.append("|---" * cell_count + "|\n")
                elif child.name == "tfoot":
                    footer_rows.append(row_text)
                else:
                    body_rows.append(row_text)

        elif child.name == "caption":
            caption = f"\n**{_render_children(child, context)}**\n"

    return caption + "".join(header_rows + separator_rows + body_rows + footer_rows)


def _render_row(row: Node, context: RenderContext) -> tuple[str, int]:
    cells = [
        cell for cell in row.elements(*TABLE_CELL_TAGS) if not _is_hidden(cell)
    ]
    row_text = "".join("|" + _render_children(cell, context) for cell in cells)
    return row_text + "|\n", len(cells)


def _references_block(references: dict[str, int]) -> str:
    lines = ["", "## References", ""]
    for url, number in sorted(references.items(), key=lambda item: item[1]):
        lines.append(f"[{number}] {url}")
    return "\n" + "\n".join(lines) + "\n"


_HANDLERS: dict[str, Callable[[Node, RenderContext], str]] = {
    "a": _render_link,
    "li": _render_list_item,
    "ol": _render_list,
    "ul": _render_list,
    "img": _render_image,
    "code": _render_code,
    "input": _render_input,
    "label": _render_label,
    "table": _render_table,
}
