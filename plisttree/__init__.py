"""A package for decoding XML property lists into typed values."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from . import decoder, errors, nodes, values
from .decoder import PlistDecoder
from .errors import (
    DecodeError,
    DocumentError,
    FormatError,
    StructuralError,
    UnsupportedTypeError,
)
from .nodes import NodeKind, PlistNode, from_element
from .util.files import read_data_xml
from .util.parsers import parse_xml
from .values import (
    Array,
    Boolean,
    Data,
    Date,
    Dictionary,
    Integer,
    IntegerWidth,
    Real,
    String,
    Value,
)

if TYPE_CHECKING:
    import io
    from pathlib import Path

logger = logging.getLogger(__name__)


def loads(data: bytes | str, *, max_depth: int | None = decoder.DEFAULT_MAX_DEPTH) -> Value:
    """
    Decode an XML property list document.

    :param data:        The XML document.
    :param max_depth:   See :class:`PlistDecoder`.

    :returns:           The decoded top-level value.
    :raises DecodeError: If the document is not a valid XML property list.
    """
    root = parse_xml(data)
    return PlistDecoder(max_depth=max_depth).decode_document(root)


def load(
    src: str | Path | bytes | io.BufferedIOBase,
    *,
    max_depth: int | None = decoder.DEFAULT_MAX_DEPTH,
) -> Value:
    """
    Decode an XML property list document from a file.

    :param src: If str or Path, the path to the document. If a binary stream, the stream
                to read the document from. Raw bytes are decoded directly.
    """
    data = read_data_xml(src)
    logger.debug("Read %d bytes of XML", len(data))
    return loads(data, max_depth=max_depth)


__all__ = (
    "Array",
    "Boolean",
    "Data",
    "Date",
    "DecodeError",
    "DocumentError",
    "Dictionary",
    "FormatError",
    "Integer",
    "IntegerWidth",
    "NodeKind",
    "PlistDecoder",
    "PlistNode",
    "Real",
    "String",
    "StructuralError",
    "UnsupportedTypeError",
    "Value",
    "decoder",
    "errors",
    "from_element",
    "load",
    "loads",
    "nodes",
    "values",
)
