# fileseen/rules/schema_check.py
"""
JSON Schema diagnostics for rejected lines.

The token walk in ``line_validator`` decides acceptance. This module only
explains a rejection in schema terms, one message per problem, which is what
a person fixing an upstream producer wants to read. It parses the whole line,
so it is not used on the hot path.
"""
from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, List, Tuple

from jsonschema import Draft202012Validator

__all__ = ["SCHEMA_RESOURCE", "load_schema", "explain_line"]

SCHEMA_RESOURCE = "file-record.schema.json"


class _DuplicateKey(ValueError):
    pass


@lru_cache(maxsize=1)
def load_schema() -> Dict[str, Any]:
    """Return the packaged file-record JSON Schema."""
    text = resources.files("fileseen").joinpath("schemas").joinpath(SCHEMA_RESOURCE).read_text(encoding="utf-8")
    return json.loads(text)


@lru_cache(maxsize=1)
def _validator() -> Draft202012Validator:
    schema = load_schema()
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def _no_duplicates(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    seen: Dict[str, Any] = {}
    for key, value in pairs:
        if key in seen:
            raise _DuplicateKey(key)
        seen[key] = value
    return seen


def explain_line(line: str) -> List[str]:
    """
    Return human-readable problems with ``line``; empty if the schema finds none.

    Messages are prefixed with the offending key when there is one, e.g.
    ``"si: 'invalid-uuid' does not match ..."``.
    """
    try:
        obj = json.loads(line, object_pairs_hook=_no_duplicates)
    except _DuplicateKey as e:
        return [f"duplicate key {e.args[0]!r}"]
    except ValueError as e:
        return [f"not valid JSON: {e}"]

    messages: List[str] = []
    for err in sorted(_validator().iter_errors(obj), key=lambda e: [str(p) for p in e.absolute_path]):
        where = "/".join(str(p) for p in err.absolute_path)
        messages.append(f"{where}: {err.message}" if where else err.message)
    return messages
