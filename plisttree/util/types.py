"""Utility types."""

from datetime import datetime
from typing import Any, TypeAlias

NativeValue: TypeAlias = dict[str, Any] | list[Any] | str | bool | int | float | datetime | bytes
"""Plain Python object produced by :meth:`Value.to_python`."""

JsonValue: TypeAlias = dict[str, Any] | list[Any] | str | bool | int | float
"""JSON-serializable object produced by :meth:`Value.to_json`."""
