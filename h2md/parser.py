"""Stack-based HTML tree builder.

This is deliberately not an HTML5 parser. It scans the input once, left to
right, keeping a stack of open elements seeded with the root node, and fails
fast on anything structurally broken:

- a `<` with no closing `>`
- a comment with no closing `-->`
- a raw-text tag (`<script>`, `<style>`, `<title>`) with no closing tag
- a closing tag that does not match the innermost open element
- elements still open when the input ends
"""

from __future__ import annotations

import re

from h2md.errors import ErrorKind, ParseError
from h2md.nodes import Node
from h2md.tables import ENTITIES, RAW_TEXT_TAGS, VOID_TAGS

_ENTITY_RE = re.compile("|".join(re.escape(entity) for entity in ENTITIES))
_WHITESPACE_RE = re.compile(r"\s")


def decode_entities(text: str) -> str:
    """Replace known entity spellings in one non-overlapping pass.

    Decoded output is never scanned again, so "&amp;lt;" becomes "&lt;".
    """
    return _ENTITY_RE.sub(lambda match: ENTITIES[match.group(0)], text)


def parse_tag(tag: str) -> tuple[str, str]:
    """Split a tag body into its name and raw attribute string."""
    match = _WHITESPACE_RE.search(tag)
    if match is None:
        return tag, ""
    return tag[:match.start()], tag[match.end():].strip(" \t\n\r")


def parse_attributes(attributes: str) -> dict[str, str]:
    """Parse whitespace separated `key=value` pairs.

    Double quotes around a value are removed. Tokens without `=` are
    dropped and a repeated key keeps its last value.
    """
    attribute_map: dict[str, str] = {}
    for token in attributes.split():
        if "=" not in token:
            continue
        key, value = token.split("=", 1)
        if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
            value = value[1:-1]
        attribute_map[key] = value
    return attribute_map


def _strip_self_closing(body: str) -> tuple[str, bool]:
    """Detect XHTML style `<br/>` and `<img src="x" />`.

    An unquoted attribute value ending in `/` (`href=http://e.com/`) is
    left alone.
    """
    if not body.endswith("/"):
        return body, False
    inner = body[:-1]
    if not _WHITESPACE_RE.search(inner) or inner.endswith(('"', " ", "\t", "\n", "\r")):
        return inner.rstrip(), True
    return body, False


def parse(html: str) -> Node:
    """Parse HTML text into a tree rooted at a ROOT node.

    Raises:
        ParseError: on any structural problem; no partial tree is returned.
    """
    root = Node.root()
    stack = [root]
    pos = 0
    length = len(html)

    while pos < length:
        if html[pos] != "<":
            end = html.find("<", pos)
            if end == -1:
                end = length
            stack[-1].children.append(Node.text_node(decode_entities(html[pos:end])))
            pos = end
            continue

        if html.startswith("<!--", pos):
            end = html.find("-->", pos + 2)
            if end == -1:
                raise ParseError(
                    ErrorKind.UNTERMINATED_COMMENT, "comment is never closed", pos,
                )
            pos = end + 3
            continue

        close = html.find(">", pos)
        if close == -1:
            raise ParseError(
                ErrorKind.UNTERMINATED_TAG, "tag is missing its closing '>'", pos,
            )
        body = html[pos + 1:close]

        # <!DOCTYPE ...> and <?xml ...?> carry no content
        if body.startswith(("!", "?")):
            pos = close + 1
            continue

        if body.startswith("/"):
            name, _ = parse_tag(body[1:])
            top = stack[-1]
            if len(stack) == 1 or top.name != name:
                expected = f"</{top.name}>" if len(stack) > 1 else "no closing tag"
                raise ParseError(
                    ErrorKind.MISMATCHED_TAG,
                    f"found </{name}> but expected {expected}",
                    pos,
                    tag=name,
                )
            stack.pop()
            pos = close + 1
            continue

        body, self_closing = _strip_self_closing(body)
        name, raw_attributes = parse_tag(body)

        if name in RAW_TEXT_TAGS:
            if self_closing:
                pos = close + 1
                continue
            end_tag = f"</{name}>"
            end = html.find(end_tag, close + 1)
            if end == -1:
                raise ParseError(
                    ErrorKind.UNTERMINATED_TAG,
                    f"<{name}> body is never closed",
                    pos,
                    tag=name,
                )
            pos = end + len(end_tag)
            continue

        node = Node.element(name)
        if raw_attributes:
            node.attributes = parse_attributes(raw_attributes)
        stack[-1].children.append(node)
        if not self_closing and name not in VOID_TAGS:
            stack.append(node)
        pos = close + 1

    if len(stack) > 1:
        unclosed = stack[-1].name
        raise ParseError(
            ErrorKind.UNCLOSED_ELEMENT_AT_EOF,
            f"<{unclosed}> is never closed",
            length,
            tag=unclosed,
        )

    return root
