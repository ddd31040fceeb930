# fileseen/stats/hourly.py
"""
Occurrences of each content hash per hour of day.

The hour is taken from the record timestamp (epoch seconds) rendered in a
calendar zone. ``tz=None`` means the process's local zone, which makes the
report depend on where it runs; pass an explicit zone for reproducible output.
"""
from __future__ import annotations

from collections import Counter, defaultdict
from datetime import datetime, tzinfo
from typing import Dict, Iterator, Optional, Tuple

from ..errors import ContractError
from ..io.record import FileRecord

__all__ = ["HourlyHashIndex", "hour_of_day", "ingest_hourly_hash", "report_hourly_hash_counts"]


def hour_of_day(epoch_seconds: int, tz: Optional[tzinfo] = None) -> int:
    """Hour (0-23) of ``epoch_seconds`` in zone ``tz`` (local zone when None)."""
    try:
        return datetime.fromtimestamp(epoch_seconds, tz).hour
    except (OverflowError, OSError, ValueError) as e:
        raise ContractError(f"timestamp {epoch_seconds} is outside the supported calendar range") from e


class HourlyHashIndex:
    """Hour of day -> hash -> count."""

    def __init__(self, tz: Optional[tzinfo] = None) -> None:
        self.tz = tz
        self._hours: Dict[int, Counter] = defaultdict(Counter)

    def add(self, hour: int, sha: str, count: int = 1) -> None:
        self._hours[hour][sha] += count

    def ingest(self, record: FileRecord) -> None:
        self.add(hour_of_day(record.timestamp, self.tz), record.sha)

    def hours(self) -> Iterator[int]:
        return iter(self._hours)

    def counts(self) -> Iterator[Tuple[int, Iterator[Tuple[str, int]]]]:
        for hour, shas in self._hours.items():
            yield hour, iter(shas.items())

    def as_dict(self) -> Dict[int, Dict[str, int]]:
        return {hour: dict(shas) for hour, shas in self._hours.items()}

    def __len__(self) -> int:
        return len(self._hours)


def ingest_hourly_hash(record: FileRecord, index: HourlyHashIndex) -> None:
    index.ingest(record)


def report_hourly_hash_counts(index: HourlyHashIndex) -> Iterator[Tuple[int, Iterator[Tuple[str, int]]]]:
    """Yield ``(hour, iterable of (sha, count))`` in no particular order."""
    return index.counts()
