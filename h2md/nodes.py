"""Document tree produced by the parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class NodeKind(str, Enum):
    ROOT = "root"
    TEXT = "text"
    ELEMENT = "element"


@dataclass
class Node:
    """A tree node.

    `name` is only meaningful for elements and `text` only for text nodes.
    Children are kept in document order; there are no parent links since
    rendering walks strictly top-down.
    """

    kind: NodeKind
    name: str = ""
    text: str = ""
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)

    @classmethod
    def root(cls) -> Node:
        return cls(NodeKind.ROOT)

    @classmethod
    def element(cls, name: str, attributes: dict[str, str] | None = None) -> Node:
        return cls(NodeKind.ELEMENT, name=name, attributes=attributes or {})

    @classmethod
    def text_node(cls, text: str) -> Node:
        return cls(NodeKind.TEXT, text=text)

    @property
    def is_element(self) -> bool:
        return self.kind is NodeKind.ELEMENT

    def elements(self, *names: str) -> list[Node]:
        """Direct element children, optionally filtered by tag name."""
        return [
            child for child in self.children
            if child.is_element and (not names or child.name in names)
        ]

    def to_dict(self) -> dict:
        """JSON-friendly view of the subtree (used by `h2md --tree`)."""
        if self.kind is NodeKind.TEXT:
            return {"kind": self.kind.value, "text": self.text}
        data: dict = {"kind": self.kind.value}
        if self.kind is NodeKind.ELEMENT:
            data["name"] = self.name
            if self.attributes:
                data["attributes"] = dict(self.attributes)
        data["children"] = [child.to_dict() for child in self.children]
        return data
