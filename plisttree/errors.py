"""Exception classes."""

from __future__ import annotations

from typing_extensions import override


class DecodeError(Exception):
    """
    Base class for all errors raised while decoding a property list.

    Decoding never returns partial results: any subclass of this error aborts
    the whole document.
    """


class DocumentError(DecodeError):
    """Raised when the XML document itself is malformed or rejected by the XML parser."""


class StructuralError(DecodeError):
    """
    Raised when the element tree does not have the shape of a property list.

    For example: a ``<dict>`` whose children do not alternate ``<key>`` and value elements.
    """


class UnsupportedTypeError(DecodeError):
    """Raised when an element tag is not one of the recognized property list tags."""

    def __init__(self, tag: str) -> None:
        """Initialize the error with the offending tag name."""
        super().__init__(tag)
        self.tag = tag

    @override
    def __str__(self) -> str:
        return f"Unsupported property list element: <{self.tag}>"


class FormatError(DecodeError):
    """Raised when the text of a scalar element cannot be parsed as the type its tag demands."""

    def __init__(self, tag: str, text: str, reason: str | None = None) -> None:
        """Initialize the error with the element tag, its raw text and an optional reason."""
        super().__init__(tag, text, reason)
        self.tag = tag
        self.text = text
        self.reason = reason

    @override
    def __str__(self) -> str:
        msg = f"Invalid <{self.tag}> content: {self.text!r}"
        if self.reason:
            msg += f" ({self.reason})"
        return msg
