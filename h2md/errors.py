"""Error kinds raised while converting HTML."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    UNTERMINATED_TAG = "unterminated_tag"
    UNTERMINATED_COMMENT = "unterminated_comment"
    MISMATCHED_TAG = "mismatched_tag"
    UNCLOSED_ELEMENT_AT_EOF = "unclosed_element_at_eof"
    MISSING_ATTRIBUTE = "missing_attribute"


class ConversionError(Exception):
    """Base class for everything the driver falls back on."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


class ParseError(ConversionError):
    """Structural problem in the HTML input. No partial tree is kept."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        position: int,
        tag: str | None = None,
    ):
        super().__init__(kind, f"{message} (at offset {position})")
        self.position = position
        self.tag = tag


class MissingAttributeError(ConversionError):
    """Raised by strict rendering when a required attribute is absent."""

    def __init__(self, tag: str, attribute: str):
        super().__init__(
            ErrorKind.MISSING_ATTRIBUTE,
            f"<{tag}> is missing required attribute '{attribute}'",
        )
        self.tag = tag
        self.attribute = attribute
