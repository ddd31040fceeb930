# tests/test_extensions.py
from __future__ import annotations

import itertools

from fileseen.io.record import Disposition, FileRecord
from fileseen.stats.extensions import ExtensionIndex, ingest_extension, report_extension_counts

_ID = "b3a4c6de-1f2a-4b5c-8d9e-0a1b2c3d4e5f"


def rec(name: str, sha: str = "abc", ts: int = 0) -> FileRecord:
    return FileRecord(
        timestamp=ts,
        processing_time=1,
        session_id=_ID,
        user_id=_ID,
        business_id=_ID,
        sha=sha,
        file_name=name,
        file_path=f"/tmp/{name}",
        disposition=Disposition.CLEAN,
    )


def counts(index: ExtensionIndex) -> dict:
    return dict(report_extension_counts(index))


def test_empty_index_reports_nothing():
    assert counts(ExtensionIndex()) == {}


def test_same_name_twice_counts_once():
    idx = ExtensionIndex()
    ingest_extension(rec("a.pdf"), idx)
    ingest_extension(rec("a.pdf", sha="other"), idx)
    assert counts(idx) == {"pdf": 1}


def test_distinct_stems_are_counted():
    idx = ExtensionIndex()
    for name in ("a.pdf", "b.pdf", "c.exe"):
        ingest_extension(rec(name), idx)
    assert counts(idx) == {"pdf": 2, "exe": 1}
    assert "pdf" in idx
    assert len(idx) == 2


def test_extension_is_taken_after_the_last_dot():
    idx = ExtensionIndex()
    ingest_extension(rec("archive.tar.gz"), idx)
    ingest_extension(rec("backup.tar.gz"), idx)
    assert counts(idx) == {"gz": 2}
    assert idx.stems("gz") == {"archive.tar", "backup.tar"}


def test_extensions_are_case_sensitive():
    idx = ExtensionIndex()
    ingest_extension(rec("a.PDF"), idx)
    ingest_extension(rec("a.pdf"), idx)
    assert counts(idx) == {"PDF": 1, "pdf": 1}


def test_order_of_ingestion_does_not_matter():
    names = ["a.pdf", "b.pdf", "a.pdf", "x.tar.gz", "c.exe"]
    results = set()
    for perm in itertools.permutations(names):
        idx = ExtensionIndex()
        for name in perm:
            idx.ingest(rec(name))
        results.add(tuple(sorted(idx.as_dict().items())))
    assert len(results) == 1


def test_stems_returns_a_copy():
    idx = ExtensionIndex()
    idx.add("pdf", "a")
    idx.stems("pdf").add("b")
    assert idx.stems("pdf") == {"a"}
    assert idx.stems("missing") == set()
