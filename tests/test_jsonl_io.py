# tests/test_jsonl_io.py
from __future__ import annotations

import gzip
import io
import json
from pathlib import Path

import pytest

from fileseen.io.decoder import decode_line, encode_record
from fileseen.io.jsonl_io import iter_lines, read_lines, write_lines

_ID = "b3a4c6de-1f2a-4b5c-8d9e-0a1b2c3d4e5f"
REC = {"ts": 1, "pt": 2, "si": _ID, "uu": _ID, "bg": _ID, "sha": "h", "nm": "a.pdf", "ph": "/a.pdf", "dp": 3}


def test_iter_lines_strips_terminators_only():
    fp = io.StringIO("a\nb\r\n\n  c  \nd")
    assert list(iter_lines(fp)) == ["a", "b", "", "  c  ", "d"]


def test_write_and_read_plain(tmp_path: Path):
    out = tmp_path / "sub" / "x.log"
    assert write_lines(out, ["one", "two"]) == 2
    assert out.read_text() == "one\ntwo\n"
    assert list(read_lines(out)) == ["one", "two"]


def test_write_and_read_gzip(tmp_path: Path):
    out = tmp_path / "x.log.gz"
    write_lines(out, ["one", "two"])
    with gzip.open(out, "rt", encoding="utf-8") as f:
        assert f.read() == "one\ntwo\n"
    assert list(read_lines(out)) == ["one", "two"]


def test_non_atomic_write(tmp_path: Path):
    out = tmp_path / "x.log"
    write_lines(out, ["a"], atomic=False)
    assert out.read_text() == "a\n"


def test_failed_atomic_write_leaves_no_temp_and_keeps_target(tmp_path: Path):
    out = tmp_path / "x.log"
    out.write_text("old\n")

    def boom():
        yield "new"
        raise RuntimeError("producer failed")

    with pytest.raises(RuntimeError):
        write_lines(out, boom())
    assert out.read_text() == "old\n"
    assert [p.name for p in tmp_path.iterdir()] == ["x.log"]


def test_read_missing_file_raises_oserror(tmp_path: Path):
    with pytest.raises(OSError):
        list(read_lines(tmp_path / "missing.log"))


def test_lone_carriage_return_does_not_split_a_line(tmp_path: Path):
    out = tmp_path / "x.log"
    out.write_bytes(b"a\rb\nc\n")
    assert list(read_lines(out)) == ["a\rb", "c"]


def test_encoded_records_written_as_lines_read_back(tmp_path: Path):
    rec = decode_line(json.dumps(REC))
    out = tmp_path / "recs.log.gz"
    assert write_lines(out, [encode_record(rec), json.dumps(dict(REC, nm="b.exe"))]) == 2
    assert [decode_line(line).file_name for line in read_lines(out)] == ["a.pdf", "b.exe"]
