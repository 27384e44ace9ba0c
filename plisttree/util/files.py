"""Utilities to simplify reading and writing data from and to files."""

from __future__ import annotations

import io
import json
from pathlib import Path
from typing import TypeVar

_T = TypeVar("_T")


def save_and_return_json(data: _T, dst: str | Path | io.TextIOBase | None) -> _T:
    """Save and return a JSON-serializable data structure."""
    if dst is None:
        return data

    if isinstance(dst, str):
        dst = Path(dst)

    if isinstance(dst, io.IOBase):
        json.dump(data, dst, indent=4, ensure_ascii=False)
    elif isinstance(dst, Path):
        dst.write_text(json.dumps(data, indent=4, ensure_ascii=False), encoding="utf-8")

    return data


def read_data_xml(val: str | Path | bytes | io.BufferedIOBase) -> bytes:
    """
    Read raw XML document bytes.

    A str or Path is treated as a path to a file, bytes are returned as-is
    and binary streams are read until EOF.
    """
    if isinstance(val, str):
        val = Path(val)

    if isinstance(val, Path):
        return val.read_bytes()

    if isinstance(val, io.IOBase):
        return val.read()

    if isinstance(val, (bytes, bytearray)):
        return bytes(val)

    msg = f"Cannot read XML data from {type(val).__name__}"
    raise TypeError(msg)
