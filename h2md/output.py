"""File writers: markdown and parsed-tree JSON."""

from __future__ import annotations

from pathlib import Path

import orjson

from h2md.nodes import Node


def save_markdown(content: str, output_path: Path) -> None:
    """Save markdown content to file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")


def dump_tree(tree: Node) -> bytes:
    """Serialize a parsed tree as indented JSON."""
    return orjson.dumps(tree.to_dict(), option=orjson.OPT_INDENT_2)


def save_tree(tree: Node, output_path: Path) -> None:
    """Save the JSON dump of a parsed tree to file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(dump_tree(tree))
