#!/usr/bin/env python3
"""
File observation record (Pydantic v2)

One JSON object per input line describes a file seen by an upstream agent.
Wire keys are short; the model exposes readable field names and binds the
wire keys as aliases:

    ts   timestamp        epoch seconds
    pt   processing_time
    si   session_id       UUID
    uu   user_id          UUID
    bg   business_id      UUID
    sha  sha              content hash
    nm   file_name        ``head.tail``
    ph   file_path
    dp   disposition      1 malicious, 2 clean, 3 unknown

The key sets below drive the line validator; the model is only ever fed lines
the validator accepted.
"""

from __future__ import annotations

from enum import IntEnum
from typing import FrozenSet, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "VALID_KEYS",
    "NUMBER_KEYS",
    "UUID_KEYS",
    "FILENAME_KEY",
    "DISPOSITION_KEY",
    "INT64_MIN",
    "INT64_MAX",
    "Disposition",
    "FileRecord",
]

VALID_KEYS: FrozenSet[str] = frozenset({"ts", "pt", "si", "uu", "bg", "sha", "nm", "ph", "dp"})
NUMBER_KEYS: FrozenSet[str] = frozenset({"ts", "pt", "dp"})
UUID_KEYS: FrozenSet[str] = frozenset({"si", "uu", "bg"})
FILENAME_KEY = "nm"
DISPOSITION_KEY = "dp"

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class Disposition(IntEnum):
    """Verdict for an observed file; the integer value is the wire label."""
    MALICIOUS = 1
    CLEAN = 2
    UNKNOWN = 3

    @property
    def label(self) -> int:
        return int(self.value)

    @classmethod
    def from_label(cls, label: int) -> Optional["Disposition"]:
        """Return the variant for ``label``, or None if the label is not one of 1, 2, 3."""
        for dis in cls:
            if dis.value == label:
                return dis
        return None


class FileRecord(BaseModel):
    """Immutable, typed view of one accepted input line."""
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    timestamp: int = Field(..., alias="ts", ge=INT64_MIN, le=INT64_MAX, description="Epoch seconds")
    processing_time: int = Field(..., alias="pt", ge=INT64_MIN, le=INT64_MAX)
    session_id: UUID = Field(..., alias="si")
    user_id: UUID = Field(..., alias="uu")
    business_id: UUID = Field(..., alias="bg")
    sha: str = Field(..., alias="sha", min_length=1)
    file_name: str = Field(..., alias="nm", min_length=1)
    file_path: str = Field(..., alias="ph", min_length=1)
    disposition: Disposition = Field(..., alias="dp")

    def to_wire(self) -> dict:
        """Return the record as a dict keyed by wire names, JSON-ready."""
        return self.model_dump(mode="json", by_alias=True)
