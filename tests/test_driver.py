# tests/test_driver.py
from __future__ import annotations

import gzip
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List

import pytest

from fileseen import driver
from fileseen.config import ScanConfig
from fileseen.driver import RunStats, process_lines, run_extension_report, run_hourly_report, run_reports
from fileseen.io.record import FileRecord

_ID = "b3a4c6de-1f2a-4b5c-8d9e-0a1b2c3d4e5f"


def good(nm: str = "a.pdf", ts: int = 0, sha: str = "h1") -> str:
    return json.dumps({
        "ts": ts, "pt": 1, "si": _ID, "uu": _ID, "bg": _ID,
        "sha": sha, "nm": nm, "ph": f"/x/{nm}", "dp": 2,
    })


UTC = ScanConfig(timezone="UTC")


def test_process_lines_counts_and_routes():
    seen: List[FileRecord] = []
    lines = [good("a.pdf"), "{invalid}", "", good("b.exe"), good("c")]
    stats = process_lines(lines, seen.append)
    assert stats == RunStats(lines=5, accepted=2, rejected=3, skipped=0)
    assert stats.ingested == 2
    assert [r.file_name for r in seen] == ["a.pdf", "b.exe"]


def test_rejected_lines_are_logged_with_their_number(caplog):
    caplog.set_level(logging.WARNING, logger="fileseen.driver")
    process_lines([good(), "{invalid}"], lambda r: None)
    msgs = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert len(msgs) == 1
    assert msgs[0].startswith("skipping invalid line 2:")


def test_explain_adds_schema_diagnostics_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="fileseen.driver")
    bad = good().replace(f'"si": "{_ID}"', '"si": "invalid-uuid"')
    process_lines([bad], lambda r: None, explain=True)
    debug = [r.getMessage() for r in caplog.records if r.levelno == logging.DEBUG]
    assert any(m.startswith("line 1: si:") for m in debug)


def test_sink_contract_error_skips_only_that_record(caplog):
    from fileseen.stats.hourly import HourlyHashIndex

    idx = HourlyHashIndex(tz=timezone.utc)
    stats = process_lines([good(ts=2 ** 62), good(ts=3600)], idx.ingest)
    assert stats.accepted == 2
    assert stats.skipped == 1
    assert stats.ingested == 1
    assert idx.as_dict() == {1: {"h1": 1}}


def test_extension_report_from_file(tmp_path: Path):
    src = tmp_path / "seen.log"
    src.write_text("\n".join([good("a.pdf"), good("a.pdf"), good("b.pdf"), "junk", good("c.exe")]) + "\n")
    idx = run_extension_report(src)
    assert idx is not None
    assert idx.as_dict() == {"pdf": 2, "exe": 1}


def test_hourly_report_uses_configured_zone(tmp_path: Path):
    src = tmp_path / "seen.log"
    src.write_text("\n".join([good(ts=0, sha="h1"), good(ts=60, sha="h1"), good(ts=3600, sha="h2")]))
    idx = run_hourly_report(src, UTC)
    assert idx is not None
    assert idx.as_dict() == {0: {"h1": 2}, 1: {"h2": 1}}


def test_missing_file_is_logged_and_returns_none(tmp_path: Path, caplog):
    caplog.set_level(logging.ERROR, logger="fileseen.driver")
    missing = tmp_path / "nope.log"
    assert run_extension_report(missing) is None
    assert any("Unable to read file" in r.getMessage() for r in caplog.records)


def test_one_bad_source_does_not_stop_the_other(tmp_path: Path):
    src = tmp_path / "seen.log"
    src.write_text(good("a.pdf", ts=7200) + "\n")
    ext_idx, hourly_idx = run_reports(tmp_path / "missing.log", src, UTC)
    assert ext_idx is None
    assert hourly_idx is not None
    assert hourly_idx.as_dict() == {2: {"h1": 1}}

    ext_idx, hourly_idx = run_reports(src, tmp_path / "missing.log", UTC)
    assert ext_idx is not None and ext_idx.as_dict() == {"pdf": 1}
    assert hourly_idx is None


def test_run_reports_skips_unrequested_sources(tmp_path: Path):
    src = tmp_path / "seen.log"
    src.write_text(good() + "\n")
    ext_idx, hourly_idx = run_reports(src, None, UTC)
    assert ext_idx is not None
    assert hourly_idx is None


def test_gzip_source_and_crlf_lines(tmp_path: Path):
    src = tmp_path / "seen.log.gz"
    with gzip.open(src, "wt", encoding="utf-8", newline="") as f:
        f.write(good("a.pdf") + "\r\n" + good("b.pdf") + "\r\n")
    idx = run_extension_report(src, UTC)
    assert idx is not None
    assert idx.as_dict() == {"pdf": 2}


def test_undecodable_bytes_are_an_io_failure(tmp_path: Path):
    src = tmp_path / "seen.log"
    src.write_bytes(b"\xff\xfe\xfa\n")
    assert run_extension_report(src) is None


def test_mixed_extensions_end_to_end(tmp_path: Path):
    names = ["f1.ext1", "f.ext4", "f2.ext4", "f2.ext6", "f2.ext1", "f3.ext1", "f1.ext3"]
    src = tmp_path / "seen.log"
    src.write_text("\n".join(good(nm) for nm in names) + "\n")
    idx = run_extension_report(src)
    assert idx is not None
    assert idx.as_dict() == {"ext1": 3, "ext4": 2, "ext6": 1, "ext3": 1}


def test_hourly_end_to_end_in_local_zone(tmp_path: Path):
    stamps = [int(datetime(2024, 3, 5, 14, m).timestamp()) for m in (5, 30, 59)]
    src = tmp_path / "seen.log"
    src.write_text("\n".join(good(ts=ts, sha=sha) for ts, sha in zip(stamps, "aab")) + "\n")
    idx = run_hourly_report(src, ScanConfig())
    assert idx is not None
    assert idx.as_dict() == {14: {"a": 2, "b": 1}}


def test_source_is_closed_when_a_sink_fails(monkeypatch):
    state = {"closed": False}

    def fake_read_lines(path, *, encoding="utf-8"):
        try:
            yield good()
            yield good("b.pdf")
        finally:
            state["closed"] = True

    def failing_sink(record):
        raise RuntimeError("sink failed")

    monkeypatch.setattr(driver, "read_lines", fake_read_lines)
    with pytest.raises(RuntimeError) as excinfo:
        driver._run("seen.log", failing_sink, ScanConfig(), "extension")
    assert excinfo.value.args == ("sink failed",)
    assert state["closed"]
