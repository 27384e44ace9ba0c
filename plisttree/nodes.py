"""
Node tree consumed by the decoder.

XML libraries disagree on how they expose text content and comments, so element trees are
first converted into :class:`PlistNode` trees. The kind of every node is resolved once, at
conversion time, into the closed :class:`NodeKind` enumeration.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Protocol

from typing_extensions import override

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class ElementLike(Protocol):
    """The subset of the ElementTree element interface that nodes can be built from."""

    @property
    def tag(self) -> object: ...  # noqa: D102

    @property
    def text(self) -> str | None: ...  # noqa: D102

    @property
    def tail(self) -> str | None: ...  # noqa: D102

    def __iter__(self) -> Iterator[ElementLike]: ...  # noqa: D105


class NodeKind(Enum):
    """Enum of node kinds. Every tag that is not part of a property list maps to UNKNOWN."""

    PLIST = "plist"
    DICT = "dict"
    KEY = "key"
    ARRAY = "array"
    STRING = "string"
    INTEGER = "integer"
    REAL = "real"
    DATE = "date"
    DATA = "data"
    TRUE = "true"
    FALSE = "false"

    TEXT = "#text"
    UNKNOWN = "#unknown"

    @classmethod
    def from_tag(cls, tag: str) -> NodeKind:
        """Resolve the node kind for an element tag."""
        try:
            kind = cls(tag)
        except ValueError:
            return cls.UNKNOWN

        # never produced by an XML parser
        if kind in (cls.TEXT, cls.UNKNOWN):
            return cls.UNKNOWN
        return kind

    @property
    def is_container(self) -> bool:
        """Whether nodes of this kind hold other elements rather than text."""
        return self in (NodeKind.PLIST, NodeKind.DICT, NodeKind.ARRAY)


class PlistNode:
    """
    A single node in a property list tree.

    Element nodes carry their tag and child nodes. Text content is represented by a
    separate child node of kind :attr:`NodeKind.TEXT`, so ``<integer>1</integer>``
    is an INTEGER node with a single TEXT child whose text is ``"1"``.
    """

    def __init__(
        self,
        kind: NodeKind,
        tag: str,
        children: Iterable[PlistNode] = (),
        text: str | None = None,
    ) -> None:
        """Initialize a node. Prefer :meth:`element` and :meth:`text_node`."""
        self._kind = kind
        self._tag = tag
        self._children: tuple[PlistNode, ...] = tuple(children)
        self._text = text

    @classmethod
    def element(cls, tag: str, *children: PlistNode | str) -> PlistNode:
        """
        Create an element node.

        String arguments are wrapped in text nodes, so ``PlistNode.element("string", "hi")``
        mirrors ``<string>hi</string>``.
        """
        nodes = [cls.text_node(c) if isinstance(c, str) else c for c in children]
        return cls(NodeKind.from_tag(tag), tag, nodes)

    @classmethod
    def text_node(cls, text: str) -> PlistNode:
        """Create a text node."""
        return cls(NodeKind.TEXT, "#text", (), text)

    @property
    def kind(self) -> NodeKind:
        """Kind of this node."""
        return self._kind

    @property
    def tag(self) -> str:
        """Tag name of this node, without any XML namespace."""
        return self._tag

    @property
    def children(self) -> tuple[PlistNode, ...]:
        """Child nodes, in document order."""
        return self._children

    @property
    def has_children(self) -> bool:
        """Whether this node has any child nodes."""
        return len(self._children) > 0

    @property
    def text(self) -> str | None:
        """Text content of a text node. Always None for element nodes."""
        return self._text

    @override
    def __repr__(self) -> str:
        if self._kind is NodeKind.TEXT:
            return f"PlistNode.text_node({self._text!r})"
        return f"PlistNode.element({self._tag!r}, {len(self._children)} children)"


def _local_name(tag: str) -> str:
    # "{namespace}name" -> "name"
    if tag.startswith("{"):
        return tag.rpartition("}")[2]
    return tag


def from_element(element: ElementLike) -> PlistNode:
    """
    Convert an ElementTree-compatible element and its descendants into a :class:`PlistNode`.

    Works with :mod:`xml.etree.ElementTree`, ``defusedxml`` and ``lxml`` elements.
    Comments and processing instructions are dropped, as is whitespace between the
    children of container elements.
    """
    if not isinstance(element.tag, str):
        msg = f"Cannot build a node from a non-element: {element!r}"
        raise TypeError(msg)

    tag = _local_name(element.tag)
    kind = NodeKind.from_tag(tag)

    children: list[PlistNode] = []
    text_parts = [element.text or ""]
    for child in element:
        if isinstance(child.tag, str):
            children.append(from_element(child))
        elif child.tail:
            # text following a skipped comment still belongs to this element
            text_parts.append(child.tail)

    text = "".join(text_parts)
    if not children and not kind.is_container and text:
        children.append(PlistNode.text_node(text))

    return PlistNode(kind, tag, children)
