# fileseen/rules/line_validator.py
"""
Streaming validation of one input line against the file-record schema.

The walk consumes the token stream of the line once and keeps three pieces of
scratch state, all local to the call:

- ``depth``: open containers (only ``{`` is legal, and only at the top level);
- ``key_counts``: occurrences of each object name seen so far;
- ``prev_key``: the most recent name, which decides how the next value is typed.

It stops at the first offending token. A line is accepted when the walk
reaches the end of the document with no open container and exactly the nine
record keys seen, each once.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..errors import ShapeError
from ..io.record import DISPOSITION_KEY, FILENAME_KEY, NUMBER_KEYS, UUID_KEYS, VALID_KEYS
from .filename import is_valid_file_name
from .primitives import fits_int64, is_blank, is_disposition_code, is_uuid, is_whole_number
from .tokenizer import Token, iter_tokens

log = logging.getLogger(__name__)

__all__ = ["LineVerdict", "check_line", "validate_line"]


@dataclass(frozen=True)
class LineVerdict:
    accepted: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.accepted


ACCEPTED = LineVerdict(True)


def _reject(reason: str) -> LineVerdict:
    return LineVerdict(False, reason)


def _check_number(prev_key: str, literal: str) -> Optional[str]:
    if prev_key not in NUMBER_KEYS:
        return f"unexpected number for key {prev_key!r}"
    if not is_whole_number(literal):
        return f"key {prev_key!r} must be a whole number, got {literal}"
    if prev_key == DISPOSITION_KEY and not is_disposition_code(literal):
        return f"unknown disposition code {literal}"
    if not fits_int64(literal):
        return f"key {prev_key!r} is out of the 64-bit integer range: {literal}"
    return None


def _check_string(prev_key: str, value: str) -> Optional[str]:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return f"key {prev_key!r} is not valid Unicode"
    if prev_key in NUMBER_KEYS:
        return f"key {prev_key!r} must be a number, got a string"
    if prev_key in UUID_KEYS and not is_uuid(value):
        return f"key {prev_key!r} is not a UUID: {value!r}"
    if prev_key == FILENAME_KEY and not is_valid_file_name(value):
        return f"invalid filename {value!r}"
    if is_blank(value):
        return f"key {prev_key!r} must not be blank"
    return None


def check_line(line: str) -> LineVerdict:
    """Walk ``line`` and return whether it is an acceptable record, with the reason if not."""
    depth: List[str] = []
    key_counts: Dict[str, int] = {}
    prev_key = ""

    try:
        for token, text in iter_tokens(line):
            if token is Token.END_DOCUMENT:
                break

            if token is Token.BEGIN_OBJECT:
                if depth:
                    return _reject(f"nested object under key {prev_key!r}")
                depth.append("{")

            elif token is Token.END_OBJECT:
                if not depth or depth[-1] != "{":
                    return _reject("unbalanced '}'")
                depth.pop()

            elif token is Token.NAME:
                count = key_counts.get(text, 0) + 1
                if count > 1:
                    return _reject(f"duplicate key {text!r}")
                if text not in VALID_KEYS:
                    return _reject(f"unknown key {text!r}")
                key_counts[text] = count
                prev_key = text

            elif token is Token.NUMBER:
                problem = _check_number(prev_key, text)
                if problem:
                    return _reject(problem)

            elif token is Token.STRING:
                problem = _check_string(prev_key, text)
                if problem:
                    return _reject(problem)

            else:
                return _reject(f"unexpected {token.value} for key {prev_key!r}")
    except ShapeError as e:
        return _reject(f"malformed JSON: {e}")
    except Exception as e:  # tokenizer bug or exotic input; never let it escape
        log.warning("unexpected error while validating line: %s", e)
        return _reject(f"unreadable line: {e}")

    if depth:
        return _reject("unterminated object")
    if len(key_counts) != len(VALID_KEYS):
        missing = sorted(VALID_KEYS - key_counts.keys())
        return _reject(f"missing keys: {', '.join(missing)}")
    return ACCEPTED


def validate_line(line: str) -> bool:
    """True iff ``line`` is exactly one well-formed file record."""
    return check_line(line).accepted
