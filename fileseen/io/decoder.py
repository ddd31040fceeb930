# fileseen/io/decoder.py
from __future__ import annotations

import json
from decimal import Decimal
from typing import Any

from pydantic import ValidationError

from ..errors import ContractError
from ..rules.line_validator import check_line
from .record import FileRecord

__all__ = ["decode_line", "encode_record"]


def _integral(literal: str) -> Any:
    # Only exponent forms reach here; the validator has already refused fractions.
    d = Decimal(literal)
    if d != d.to_integral_value():
        raise ContractError(f"non-integral number {literal}")
    return int(d)


def decode_line(line: str, *, recheck: bool = True) -> FileRecord:
    """
    Bind a validated JSON line to a :class:`FileRecord`.

    Calling this on a line that ``validate_line`` rejects is a caller bug and
    raises :class:`ContractError`. Callers that have just validated the line
    may pass ``recheck=False`` to skip the second walk.
    """
    verdict = check_line(line) if recheck else None
    if verdict is not None and not verdict.accepted:
        raise ContractError(f"cannot decode rejected line: {verdict.reason}")
    try:
        obj = json.loads(line, parse_float=_integral)
        return FileRecord.model_validate(obj)
    except (ValueError, ValidationError) as e:
        raise ContractError(f"line does not bind to FileRecord: {e}") from e


def encode_record(record: FileRecord) -> str:
    """Serialize ``record`` to a compact JSON line using the wire keys."""
    return json.dumps(record.to_wire(), ensure_ascii=False, separators=(",", ":"))
