"""
Typed values produced by decoding a property list.

Every decoded element becomes exactly one :class:`Value`. The concrete classes form a
closed tagged union: :class:`Dictionary` and :class:`Array` are containers, all other
classes wrap a single scalar.
"""

from __future__ import annotations

import base64
import math
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Mapping, Sequence
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Generic, TypeVar, overload

from typing_extensions import override

from plisttree.util.abc import Serializable
from plisttree.util.files import save_and_return_json

if TYPE_CHECKING:
    import io
    from datetime import datetime
    from pathlib import Path

    from plisttree.util.types import JsonValue, NativeValue

_S = TypeVar("_S")


class Value(Serializable["JsonValue"], ABC):
    """ABC for a decoded property list value."""

    @property
    @abstractmethod
    def value(self) -> Any:  # noqa: ANN401
        """The wrapped payload."""
        raise NotImplementedError

    @abstractmethod
    def to_python(self) -> NativeValue:
        """Recursively convert this value to plain Python objects."""
        raise NotImplementedError

    @abstractmethod
    def _json_data(self) -> JsonValue:
        raise NotImplementedError

    @override
    def to_json(self, dst: str | Path | io.TextIOBase | None = None, /) -> JsonValue:
        return save_and_return_json(self._json_data(), dst)

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented

        return type(self) is type(other) and self.value == other.value

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"


class _Scalar(Value, Generic[_S]):
    def __init__(self, value: _S) -> None:
        self._value = value

    @property
    @override
    def value(self) -> _S:
        return self._value

    @override
    def to_python(self) -> NativeValue:
        return self._value  # type: ignore[return-value]

    @override
    def _json_data(self) -> JsonValue:
        return self._value  # type: ignore[return-value]

    @override
    def __hash__(self) -> int:
        return hash((type(self), self._value))


class String(_Scalar[str]):
    """A text scalar."""

    @override
    def __str__(self) -> str:
        return self._value


class Boolean(_Scalar[bool]):
    """A boolean scalar, written as ``<true/>`` or ``<false/>``."""

    def __bool__(self) -> bool:
        """Truthiness of the wrapped boolean."""
        return self._value


class IntegerWidth(Enum):
    """
    Integer representations, ordered from narrowest to widest.

    Iterating over the enum yields the widths in the order in which they are tried
    when inferring the width of a decoded integer.
    """

    INT32 = (-(2**31), 2**31 - 1)
    INT64 = (-(2**63), 2**63 - 1)
    UINT64 = (0, 2**64 - 1)

    @property
    def min(self) -> int:
        """Smallest value representable in this width."""
        return self.value[0]

    @property
    def max(self) -> int:
        """Largest value representable in this width."""
        return self.value[1]

    def fits(self, value: int) -> bool:
        """Whether ``value`` can be represented losslessly in this width."""
        return self.min <= value <= self.max

    @classmethod
    def narrowest(cls, value: int) -> IntegerWidth | None:
        """Return the narrowest width that can hold ``value``, or None if none can."""
        return next((width for width in cls if width.fits(value)), None)


class Integer(_Scalar[int]):
    """An integer scalar together with the width class it was decoded as."""

    def __init__(self, value: int, width: IntegerWidth | None = None) -> None:
        """
        Initialize an Integer.

        :param value: The integer value.
        :param width: Width class of the value. Defaults to the narrowest width that fits.
        """
        if width is None:
            width = IntegerWidth.narrowest(value)
            if width is None:
                msg = f"Integer {value} does not fit in 64 bits"
                raise ValueError(msg)
        elif not width.fits(value):
            msg = f"Integer {value} does not fit in {width.name}"
            raise ValueError(msg)

        super().__init__(value)
        self._width = width

    @property
    def width(self) -> IntegerWidth:
        """Width class of this integer."""
        return self._width

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Integer):
            return super().__eq__(other)

        return self._value == other._value and self._width is other._width

    @override
    def __hash__(self) -> int:
        return hash((Integer, self._value, self._width))

    def __int__(self) -> int:
        """The wrapped integer."""
        return self._value

    @override
    def __repr__(self) -> str:
        return f"Integer({self._value!r}, {self._width})"


class Real(_Scalar[float]):
    """
    A 64-bit floating point scalar.

    NaN compares equal to NaN, so that decoding the same document twice yields equal values.
    In JSON exports, non-finite values are written as the strings ``"nan"``, ``"inf"`` and
    ``"-inf"``.
    """

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Real):
            return super().__eq__(other)

        if math.isnan(self._value):
            return math.isnan(other._value)
        return self._value == other._value

    @override
    def __hash__(self) -> int:
        if math.isnan(self._value):
            return hash((Real, "nan"))
        return hash((Real, self._value))

    @override
    def _json_data(self) -> JsonValue:
        if math.isfinite(self._value):
            return self._value
        return repr(self._value)

    def __float__(self) -> float:
        """The wrapped float."""
        return self._value


class Date(_Scalar["datetime"]):
    """A date-time instant."""

    @override
    def _json_data(self) -> JsonValue:
        return self._value.isoformat()


class Data(_Scalar[bytes]):
    """A raw byte blob, base64-encoded in the source document."""

    @override
    def _json_data(self) -> JsonValue:
        return base64.b64encode(self._value).decode("ascii")

    def __bytes__(self) -> bytes:
        """The wrapped bytes."""
        return self._value


class Dictionary(Value, Mapping[str, Value]):
    """
    An ordered, read-only mapping of string keys to values.

    Keys keep the order in which they appeared in the document. Two dictionaries
    are only equal if their entries are equal and in the same order.
    """

    def __init__(self, items: Mapping[str, Value] | Iterable[tuple[str, Value]] = ()) -> None:
        """Initialize a Dictionary from a mapping or an iterable of key/value pairs."""
        self._items: dict[str, Value] = dict(items)

    @property
    @override
    def value(self) -> Mapping[str, Value]:
        return MappingProxyType(self._items)

    @override
    def __getitem__(self, key: str) -> Value:
        return self._items[key]

    @override
    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    @override
    def __len__(self) -> int:
        return len(self._items)

    @override
    def to_python(self) -> dict[str, Any]:
        return {key: value.to_python() for key, value in self._items.items()}

    @override
    def _json_data(self) -> JsonValue:
        return {key: value._json_data() for key, value in self._items.items()}  # noqa: SLF001

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dictionary):
            return super().__eq__(other)

        # order is part of the document
        return list(self._items.items()) == list(other._items.items())

    __hash__ = None  # type: ignore[assignment]


class Array(Value, Sequence[Value]):
    """An ordered, read-only sequence of values of any type."""

    def __init__(self, items: Iterable[Value] = ()) -> None:
        """Initialize an Array from an iterable of values."""
        self._items: tuple[Value, ...] = tuple(items)

    @property
    @override
    def value(self) -> tuple[Value, ...]:
        return self._items

    @overload
    def __getitem__(self, index: int) -> Value: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[Value]: ...

    @override
    def __getitem__(self, index: int | slice) -> Value | Sequence[Value]:
        return self._items[index]

    @override
    def __len__(self) -> int:
        return len(self._items)

    @override
    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self._items]

    @override
    def _json_data(self) -> JsonValue:
        return [item._json_data() for item in self._items]  # noqa: SLF001

    __hash__ = None  # type: ignore[assignment]
