# fileseen/rules/tokenizer.py
"""
Pull-style JSON tokenizer for a single line.

``iter_tokens(text)`` yields ``(Token, text_or_None)`` pairs lazily, so a
consumer can stop at the first token it dislikes without scanning the rest of
the line. Names and strings are yielded decoded; numbers are yielded as their
literal source text (``"1e5"`` stays ``"1e5"``).

Grammar is strict RFC 8259: one top-level value, no trailing content, no
comments, no single quotes or unquoted names. Any violation raises
:class:`~fileseen.errors.ShapeError` at the point it is found.

Usage:
    for tok, val in iter_tokens('{"a": 1}'):
        ...   # (BEGIN_OBJECT, None), (NAME, 'a'), (NUMBER, '1'), (END_OBJECT, None), (END_DOCUMENT, None)
"""
from __future__ import annotations

import json
import re
from enum import Enum
from json.decoder import scanstring
from typing import Iterator, List, Optional, Tuple

from ..errors import ShapeError

__all__ = ["Token", "iter_tokens"]


class Token(str, Enum):
    BEGIN_OBJECT = "begin_object"
    END_OBJECT = "end_object"
    BEGIN_ARRAY = "begin_array"
    END_ARRAY = "end_array"
    NAME = "name"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    END_DOCUMENT = "end_document"


# Same literal grammar the stdlib scanner uses
_NUMBER_RE = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][-+]?[0-9]+)?")
_WS_RE = re.compile(r"[ \t\n\r]*")
_LITERALS = (("true", Token.BOOLEAN), ("false", Token.BOOLEAN), ("null", Token.NULL))

# parser states
_VALUE = 0          # a value must follow
_VALUE_OR_END = 1   # just after '[': value or ']'
_KEY_OR_END = 2     # just after '{': name or '}'
_KEY = 3            # after ',' inside an object
_COLON = 4          # after a name
_AFTER_VALUE = 5    # after a value inside a container: ',' or closer
_DONE = 6           # top-level value complete

_CLOSERS = {"{": ("}", Token.END_OBJECT), "[": ("]", Token.END_ARRAY)}


def _scan_string(text: str, pos: int) -> Tuple[str, int]:
    try:
        return scanstring(text, pos + 1, True)
    except json.JSONDecodeError as e:
        raise ShapeError(f"malformed string at column {pos + 1}: {e.msg}") from e


def _after_value(stack: List[str]) -> int:
    return _AFTER_VALUE if stack else _DONE


def iter_tokens(text: str) -> Iterator[Tuple[Token, Optional[str]]]:
    """Yield the tokens of one JSON document held in ``text``."""
    stack: List[str] = []
    state = _VALUE
    pos = 0
    n = len(text)

    while True:
        pos = _WS_RE.match(text, pos).end()

        if state == _DONE:
            if pos != n:
                raise ShapeError(f"unexpected trailing data at column {pos + 1}")
            yield Token.END_DOCUMENT, None
            return

        if pos >= n:
            raise ShapeError("unexpected end of input")
        ch = text[pos]

        if state in (_KEY_OR_END, _KEY):
            if ch == "}" and state == _KEY_OR_END:
                stack.pop()
                pos += 1
                state = _after_value(stack)
                yield Token.END_OBJECT, None
                continue
            if ch != '"':
                raise ShapeError(f"expected object name at column {pos + 1}")
            name, pos = _scan_string(text, pos)
            state = _COLON
            yield Token.NAME, name
            continue

        if state == _COLON:
            if ch != ":":
                raise ShapeError(f"expected ':' at column {pos + 1}")
            pos += 1
            state = _VALUE
            continue

        if state == _AFTER_VALUE:
            top = stack[-1]
            closer, end_token = _CLOSERS[top]
            if ch == ",":
                pos += 1
                state = _KEY if top == "{" else _VALUE
                continue
            if ch == closer:
                stack.pop()
                pos += 1
                state = _after_value(stack)
                yield end_token, None
                continue
            raise ShapeError(f"expected ',' or '{closer}' at column {pos + 1}")

        # _VALUE / _VALUE_OR_END
        if ch == "]" and state == _VALUE_OR_END:
            stack.pop()
            pos += 1
            state = _after_value(stack)
            yield Token.END_ARRAY, None
            continue
        if ch == "{":
            stack.append("{")
            pos += 1
            state = _KEY_OR_END
            yield Token.BEGIN_OBJECT, None
            continue
        if ch == "[":
            stack.append("[")
            pos += 1
            state = _VALUE_OR_END
            yield Token.BEGIN_ARRAY, None
            continue
        if ch == '"':
            value, pos = _scan_string(text, pos)
            state = _after_value(stack)
            yield Token.STRING, value
            continue

        for word, token in _LITERALS:
            if text.startswith(word, pos):
                pos += len(word)
                state = _after_value(stack)
                yield token, word
                break
        else:
            m = _NUMBER_RE.match(text, pos)
            if m is None:
                raise ShapeError(f"unexpected character {ch!r} at column {pos + 1}")
            pos = m.end()
            state = _after_value(stack)
            yield Token.NUMBER, m.group(0)
