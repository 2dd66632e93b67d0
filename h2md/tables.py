"""Static tag and entity tables shared by the parser and renderer."""

from __future__ import annotations

# Tags converted by plain prefix/suffix wrapping of their rendered children.
WRAP_TAGS: dict[str, tuple[str, str]] = {
    "p": ("\n\n", ""),
    "strong": ("**", "**"),
    "b": ("**", "**"),
    "em": ("_", "_"),
    "i": ("_", "_"),
    "del": ("~~", "~~"),
    "ins": ("__", "__"),
    "br": ("\n", ""),
    "hr": ("\n\n_________________\n\n", ""),
    "form": ("\n\n[form]\n\n", ""),
    "blockquote": ("\n> ", ""),
}

# Wrapped tags that get an extra newline after their suffix.
TRAILING_NEWLINE_TAGS = frozenset({"p", "hr"})

# Tags whose whole body is dropped without being parsed.
RAW_TEXT_TAGS = frozenset({"script", "style", "title"})

# Tags with no closing counterpart; they never receive children.
VOID_TAGS = frozenset({
    "area", "base", "br", "col", "command", "embed", "hr", "img", "input",
    "keygen", "link", "meta", "param", "source", "track", "wbr",
})

# Decoded in a single left-to-right pass (see parser.decode_entities).
ENTITIES: dict[str, str] = {
    "&quot;": '"',
    "&apos;": "'",
    "&amp;": "&",
    "&lt;": "<",
    "&nbsp;": " ",
    "&gt;": ">",
}

HEADER_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})

TABLE_SECTION_TAGS = frozenset({"thead", "tbody", "tfoot"})
TABLE_CELL_TAGS = frozenset({"td", "th"})

# Substrings whose presence makes the driver treat input as HTML: the
# common structural tags plus every tag the renderer formats.
_STRUCTURAL_TAGS = (
    "html", "head", "body", "div", "p", "a", "img", "span", "table", "tr",
    "td", "ul", "li", "h1", "h2", "h3", "h4", "h5", "h6",
    "ol", "th", "thead", "tbody", "tfoot", "caption", "code", "pre",
    "input", "label", *WRAP_TAGS,
)
HTML_MARKERS: tuple[str, ...] = tuple(
    f"<{tag}" for tag in _STRUCTURAL_TAGS
) + tuple(f"</{tag}" for tag in _STRUCTURAL_TAGS)
