"""Utility functions and classes. Intended for internal use."""

from . import abc, files, parsers, types

__all__ = (
    "abc",
    "files",
    "parsers",
    "types",
)
