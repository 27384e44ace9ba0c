"""Parsers for the raw XML underneath property list documents."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from xml.etree.ElementTree import ParseError

from defusedxml import ElementTree
from defusedxml.common import DefusedXmlException

from plisttree.errors import DocumentError

if TYPE_CHECKING:
    from xml.etree.ElementTree import Element

logger = logging.getLogger(__name__)


def parse_xml(data: bytes | str) -> Element:
    """
    Parse an XML document and return its root element.

    Parsing goes through ``defusedxml``, so documents that declare entity
    expansions or reference external resources are rejected.
    """
    try:
        root = ElementTree.fromstring(data)
    except ParseError as e:
        msg = f"Malformed XML document: {e}"
        raise DocumentError(msg) from e
    except DefusedXmlException as e:
        msg = f"Refusing to parse unsafe XML document: {e}"
        raise DocumentError(msg) from e

    logger.debug("Parsed XML document with root element <%s>", root.tag)
    return root
