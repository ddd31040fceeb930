# fileseen/stats/extensions.py
from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterator, Set, Tuple

from ..io.record import FileRecord
from ..rules.filename import split_file_name

__all__ = ["ExtensionIndex", "ingest_extension", "report_extension_counts"]


class ExtensionIndex:
    """
    Extension -> set of distinct filename stems.

    ``a.pdf`` seen twice counts once for ``pdf``; ``a.pdf`` and ``b.pdf`` count twice.
    """

    def __init__(self) -> None:
        self._stems: Dict[str, Set[str]] = defaultdict(set)

    def add(self, ext: str, stem: str) -> None:
        self._stems[ext].add(stem)

    def ingest(self, record: FileRecord) -> None:
        stem, ext = split_file_name(record.file_name)
        self.add(ext, stem)

    def stems(self, ext: str) -> Set[str]:
        return set(self._stems.get(ext, ()))

    def counts(self) -> Iterator[Tuple[str, int]]:
        for ext, stems in self._stems.items():
            yield ext, len(stems)

    def as_dict(self) -> Dict[str, int]:
        return dict(self.counts())

    def __len__(self) -> int:
        return len(self._stems)

    def __contains__(self, ext: object) -> bool:
        return ext in self._stems


def ingest_extension(record: FileRecord, index: ExtensionIndex) -> None:
    index.ingest(record)


def report_extension_counts(index: ExtensionIndex) -> Iterator[Tuple[str, int]]:
    """Yield ``(extension, distinct stem count)`` pairs in no particular order."""
    return index.counts()
