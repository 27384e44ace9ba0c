"""
Decoder that turns a property list node tree into :class:`~plisttree.values.Value` objects.

The decoder walks the tree recursively. Container elements (``<dict>``, ``<array>``)
recurse into their children, scalar elements recurse into their single text node and
then parse that text according to their tag.
"""

from __future__ import annotations

import base64
import logging
import re
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from .errors import FormatError, StructuralError, UnsupportedTypeError
from .nodes import NodeKind, PlistNode, from_element
from .values import Array, Boolean, Data, Date, Dictionary, Integer, IntegerWidth, Real, String

if TYPE_CHECKING:
    from collections.abc import Callable

    from .nodes import ElementLike
    from .values import Value

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 128
"""Default limit on the number of nested containers in a single document."""

_INTEGER_RE = re.compile(r"\s*[+-]?[0-9]+\s*", re.ASCII)
_DATE_RE = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}"
    r"(?:T[0-9]{2}:[0-9]{2}:[0-9]{2}(?:\.[0-9]{3}(?:[0-9]{3})?)?(?:Z|[+-][0-9]{2}:[0-9]{2})?)?",
    re.ASCII,
)


def parse_integer(text: str) -> Integer:
    """
    Parse the text of an ``<integer>`` element.

    The value is given the narrowest width that holds it, trying signed 32-bit,
    signed 64-bit and unsigned 64-bit in that order.
    """
    if _INTEGER_RE.fullmatch(text) is None:
        raise FormatError("integer", text, "not a decimal integer")

    try:
        value = int(text)
    except ValueError as e:
        # longer than the interpreter's int conversion limit
        raise FormatError("integer", text, "does not fit in 64 bits") from e

    width = IntegerWidth.narrowest(value)
    if width is None:
        raise FormatError("integer", text, "does not fit in 64 bits")
    return Integer(value, width)


def parse_real(text: str) -> Real:
    """Parse the text of a ``<real>`` element as a 64-bit float."""
    # float() accepts digit separators, property lists don't
    if "_" in text:
        raise FormatError("real", text, "not a floating point number")

    try:
        return Real(float(text))
    except ValueError as e:
        raise FormatError("real", text, "not a floating point number") from e


def parse_date(text: str) -> Date:
    """
    Parse the text of a ``<date>`` element.

    Property lists store dates as ISO-8601 in UTC, e.g. ``2024-05-01T12:00:00Z``.
    Only the extended calendar format is accepted, with optional milli- or microseconds.
    Dates without a timezone are assumed to be UTC.
    """
    stripped = text.strip()
    # fromisoformat accepts more shapes on newer interpreters
    if _DATE_RE.fullmatch(stripped) is None:
        raise FormatError("date", text, "not an ISO-8601 date-time")

    # datetime.fromisoformat only understands the "Z" suffix on Python 3.11+
    if stripped.endswith("Z"):
        stripped = stripped[:-1] + "+00:00"

    try:
        dt = datetime.fromisoformat(stripped)
    except ValueError as e:
        raise FormatError("date", text, str(e)) from e

    if dt.tzinfo is None:
        logger.warning("Date %r is timezone-naive. Assuming UTC.", text)
        dt = dt.replace(tzinfo=timezone.utc)
    return Date(dt)


def parse_data(text: str) -> Data:
    """Decode the base64 text of a ``<data>`` element. Whitespace and line breaks are ignored."""
    try:
        return Data(base64.b64decode("".join(text.split()), validate=True))
    except ValueError as e:
        raise FormatError("data", text, "invalid base64") from e


_SCALAR_PARSERS: dict[NodeKind, Callable[[str], Value]] = {
    NodeKind.STRING: String,
    NodeKind.INTEGER: parse_integer,
    NodeKind.REAL: parse_real,
    NodeKind.DATE: parse_date,
    NodeKind.DATA: parse_data,
}


class PlistDecoder:
    """
    Decoder for property list node trees.

    A decoder only holds its configuration, so a single instance can be reused for
    any number of documents.
    """

    def __init__(self, *, max_depth: int | None = DEFAULT_MAX_DEPTH) -> None:
        """
        Initialize the decoder.

        :param max_depth: Maximum number of nested ``<dict>`` / ``<array>`` elements.
                          Deeper documents raise :class:`StructuralError`.
                          Set to None to disable the limit.
        """
        if max_depth is not None and max_depth < 1:
            msg = f"max_depth must be positive or None, got {max_depth}"
            raise ValueError(msg)

        self._max_depth = max_depth

    @property
    def max_depth(self) -> int | None:
        """Maximum container nesting depth, or None if unlimited."""
        return self._max_depth

    def decode(self, node: PlistNode) -> Value:
        """
        Decode a single node and all of its descendants.

        :raises DecodeError: If the tree is not a valid property list.
        """
        return self._decode(node, 0)

    def decode_document(self, root: PlistNode | ElementLike) -> Value:
        """
        Decode a whole property list document.

        ``root`` must be the ``<plist>`` element, either as a :class:`PlistNode` or as an
        ElementTree-compatible element. Only the first element inside it is decoded.
        """
        if not isinstance(root, PlistNode):
            try:
                root = from_element(root)
            except RecursionError as e:
                msg = "document is nested too deeply"
                raise StructuralError(msg) from e

        if root.kind is not NodeKind.PLIST:
            msg = f"expected <plist> root element, found <{root.tag}>"
            raise StructuralError(msg)

        elements = [child for child in root.children if child.kind is not NodeKind.TEXT]
        if not elements:
            msg = "plist document is empty"
            raise StructuralError(msg)
        if len(elements) > 1:
            logger.warning(
                "Ignoring %d element(s) after top-level <%s>",
                len(elements) - 1,
                elements[0].tag,
            )

        logger.debug("Decoding plist document with top-level <%s>", elements[0].tag)
        return self.decode(elements[0])

    def _decode(self, node: PlistNode, depth: int) -> Value:
        if node.has_children:
            return self._decode_branch(node, depth)
        return self._decode_leaf(node)

    def _decode_branch(self, node: PlistNode, depth: int) -> Value:
        kind = node.kind

        if kind is NodeKind.DICT:
            return self._decode_dict(node, self._enter(depth))
        if kind is NodeKind.ARRAY:
            return self._decode_array(node, self._enter(depth))
        if kind is NodeKind.STRING:
            # pass-through: the decoded text node already is a String
            return self._decode(self._text_child(node), depth)
        if kind in _SCALAR_PARSERS:
            return _SCALAR_PARSERS[kind](self._raw_text(node))
        if kind in (NodeKind.TRUE, NodeKind.FALSE):
            return Boolean(kind is NodeKind.TRUE)

        raise self._misplaced(node)

    def _decode_leaf(self, node: PlistNode) -> Value:
        kind = node.kind

        if kind is NodeKind.TEXT:
            return String(node.text or "")
        if kind in (NodeKind.TRUE, NodeKind.FALSE):
            return Boolean(kind is NodeKind.TRUE)
        if kind is NodeKind.DICT:
            return Dictionary()
        if kind is NodeKind.ARRAY:
            return Array()
        if kind in _SCALAR_PARSERS:
            return _SCALAR_PARSERS[kind]("")

        raise self._misplaced(node)

    def _decode_dict(self, node: PlistNode, depth: int) -> Dictionary:
        items: dict[str, Value] = {}
        children = node.children

        pos = 0
        while pos < len(children):
            key_node = children[pos]
            if key_node.kind is not NodeKind.KEY:
                msg = f"non-key element found in dictionary: <{key_node.tag}>"
                raise StructuralError(msg)
            if pos + 1 >= len(children):
                msg = "dictionary property value missing"
                raise StructuralError(msg)
            if children[pos + 1].kind is NodeKind.KEY:
                msg = "dictionary property value missing: <key> found in value position"
                raise StructuralError(msg)

            key = self._raw_text(key_node)
            if key in items:
                logger.debug("Duplicate dictionary key %r, keeping the last value", key)
            items[key] = self._decode(children[pos + 1], depth)

            pos += 2

        return Dictionary(items)

    def _decode_array(self, node: PlistNode, depth: int) -> Array:
        return Array([self._decode(child, depth) for child in node.children])

    def _raw_text(self, node: PlistNode) -> str:
        if not node.has_children:
            return ""
        return str(self._decode(self._text_child(node), 0).value)

    def _text_child(self, node: PlistNode) -> PlistNode:
        if len(node.children) != 1 or node.children[0].kind is not NodeKind.TEXT:
            msg = f"<{node.tag}> element must only contain text"
            raise StructuralError(msg)
        return node.children[0]

    def _enter(self, depth: int) -> int:
        depth += 1
        if self._max_depth is not None and depth > self._max_depth:
            msg = f"document is nested deeper than {self._max_depth} containers"
            raise StructuralError(msg)
        return depth

    @staticmethod
    def _misplaced(node: PlistNode) -> Exception:
        if node.kind is NodeKind.KEY:
            return StructuralError("<key> element found outside of a dictionary")
        if node.kind is NodeKind.PLIST:
            return StructuralError("nested <plist> element")
        return UnsupportedTypeError(node.tag)
