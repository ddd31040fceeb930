# fileseen/rules/filename.py
"""
Filename shape rules.

A valid filename looks like ``head.tail``:

- the whole name is not blank and contains at least one dot;
- the first two dot-separated segments are both non-blank;
- the first segment does not end with a space and the second does not start with one.

Acceptance looks only at the first two segments, while extraction splits on
the *last* dot, so ``a.b.c.pdf`` has stem ``a.b.c`` and extension ``pdf``.
"""
from __future__ import annotations

from typing import Tuple

from ..errors import FileNameError
from .primitives import is_blank

__all__ = ["is_valid_file_name", "split_file_name", "file_ext", "file_stem"]


def _valid_part(part: str, head: bool) -> bool:
    if is_blank(part):
        return False
    edge = part[-1] if head else part[0]
    return edge != " "


def is_valid_file_name(filename: str) -> bool:
    if not isinstance(filename, str) or is_blank(filename):
        return False
    if "." not in filename:
        return False
    parts = filename.split(".")
    return len(parts) >= 2 and _valid_part(parts[0], head=True) and _valid_part(parts[1], head=False)


def split_file_name(filename: str) -> Tuple[str, str]:
    """
    Return ``(stem, ext)`` split on the last dot.

    Raises
    ------
    FileNameError
        If ``filename`` is not a valid ``head.tail`` name.
    """
    if not is_valid_file_name(filename):
        raise FileNameError(f"invalid filename: {filename!r}")
    stem, _, ext = filename.rpartition(".")
    return stem, ext


def file_ext(filename: str) -> str:
    return split_file_name(filename)[1]


def file_stem(filename: str) -> str:
    return split_file_name(filename)[0]
