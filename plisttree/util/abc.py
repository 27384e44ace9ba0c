"""Various utility ABCs for internal and external classes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    import io
    from pathlib import Path

_T = TypeVar("_T")


class Serializable(ABC, Generic[_T]):
    """ABC for classes that can be exported to JSON."""

    @abstractmethod
    def to_json(self, dst: str | Path | io.TextIOBase | None = None, /) -> _T:
        """
        Export the object as JSON-serializable data.

        If an argument is provided, the output will also be written to that file.

        The output of this method is guaranteed to be JSON-serializable. Types that
        JSON cannot represent natively are converted to text: bytes become base64,
        dates become ISO-8601 strings and non-finite floats become "nan", "inf" or "-inf".
        """
        raise NotImplementedError
