# fileseen/rules/primitives.py
"""
Field-level predicates used by the line validator.

All of them are pure and total: they answer False for anything they do not
like and never raise.
"""
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from ..io.record import INT64_MAX, INT64_MIN, Disposition

__all__ = [
    "is_uuid",
    "is_whole_number",
    "is_disposition_code",
    "fits_int64",
    "is_blank",
]

_UUID_RE = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)
_INT_RE = re.compile(r"[-+]?[0-9]+")
_NOT_WHITESPACE = frozenset("\u00a0\u2007\u202f\u0085")


def is_blank(s: str) -> bool:
    """
    True for the empty string and for strings made only of whitespace.

    No-break spaces (U+00A0, U+2007, U+202F) and NEL (U+0085) are content,
    not whitespace, so ``"\\u00a0"`` is not blank.
    """
    return not s or (s.isspace() and not any(c in _NOT_WHITESPACE for c in s))


def is_uuid(s: str) -> bool:
    """Canonical hyphenated 8-4-4-4-12 hex form, either case."""
    return isinstance(s, str) and _UUID_RE.fullmatch(s) is not None


def is_whole_number(s: str) -> bool:
    """
    True if the numeric literal has no fractional part marker.

    Sign and digits are not inspected here; the tokenizer only hands over
    well-formed JSON number literals.
    """
    return "." not in s


def is_disposition_code(s: str) -> bool:
    """True if ``s`` is an integer literal naming a known disposition (1, 2 or 3)."""
    if not isinstance(s, str) or _INT_RE.fullmatch(s) is None:
        return False
    return Disposition.from_label(int(s)) is not None


def fits_int64(s: str) -> bool:
    """
    True if the numeric literal denotes an integral value in the signed 64-bit range.
    Exponent forms count when they are integral (``1e5``), not otherwise (``1e-1``).
    """
    try:
        d = Decimal(s)
    except (InvalidOperation, TypeError, ValueError):
        return False
    if not d.is_finite() or d.adjusted() > 18:
        return False
    if d != d.to_integral_value():
        return False
    return INT64_MIN <= int(d) <= INT64_MAX
