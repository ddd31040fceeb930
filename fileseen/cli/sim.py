#!/usr/bin/env python3
"""
fileseen: Input simulator CLI

Generates synthetic file observation logs, one JSON record per line, with a
controllable share of deliberately broken lines. Output is reproducible for a
given --seed.

Examples
--------
  fileseen-sim --records 1000 --out data/seen.log
  fileseen-sim --records 200 --invalid-rate 0.1 --seed 7 --out data/seen.log.gz
  fileseen-sim --records 50 --start 2025-09-12T10:00:00Z --step 90 --stdout

Notes
-----
- Filenames and hashes are drawn from small pools so the reports have repeats.
- Broken lines cover each rejection rule: missing/extra/duplicate keys,
  wrong value types, bad UUIDs, bad filenames, unknown dispositions and
  malformed JSON.
"""

# fileseen/cli/sim.py
from __future__ import annotations

import argparse
import datetime as dt
import hashlib
import json
import random
import sys
import traceback
import uuid
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional

from ..io.jsonl_io import write_lines
from ..io.record import Disposition

EXIT_OK = 0
EXIT_BAD_ARGS = 2
EXIT_RUNTIME = 1

STEMS = ["report", "invoice", "setup", "photo", "notes", "archive.2024", "build", "readme"]
EXTS = ["pdf", "exe", "docx", "jpg", "zip", "txt", "dll"]
DIRS = ["C:\\Users\\alice\\Downloads", "/home/bob/tmp", "/var/spool/mail", "D:\\shared"]


# ----------------------- helpers -----------------------

def _parse_iso_utc(s: Optional[str]) -> dt.datetime:
    """Parse ISO8601; default to now (UTC). Always return an aware UTC dt."""
    if not s or s.lower() == "now":
        return dt.datetime.now(dt.timezone.utc)
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    d = dt.datetime.fromisoformat(s)
    if d.tzinfo is None:
        d = d.replace(tzinfo=dt.timezone.utc)
    return d.astimezone(dt.timezone.utc)


def _uuid(rng: random.Random) -> str:
    return str(uuid.UUID(int=rng.getrandbits(128), version=4))


def _sha_pool(rng: random.Random, size: int) -> List[str]:
    return [hashlib.sha256(rng.getrandbits(64).to_bytes(8, "big")).hexdigest() for _ in range(size)]


def gen_record(ts: int, rng: random.Random, shas: List[str]) -> Dict[str, Any]:
    """One valid record, keyed by wire names."""
    name = f"{rng.choice(STEMS)}.{rng.choice(EXTS)}"
    folder = rng.choice(DIRS)
    sep = "\\" if "\\" in folder else "/"
    return {
        "ts": ts,
        "pt": rng.randint(1, 5000),
        "si": _uuid(rng),
        "uu": _uuid(rng),
        "bg": _uuid(rng),
        "sha": rng.choice(shas),
        "nm": name,
        "ph": f"{folder}{sep}{name}",
        "dp": rng.choice(list(Disposition)).label,
    }


def _dumps(rec: Dict[str, Any]) -> str:
    return json.dumps(rec, ensure_ascii=False)


def _drop_key(rec: Dict[str, Any], rng: random.Random) -> str:
    rec.pop(rng.choice(sorted(rec)))
    return _dumps(rec)


def _extra_key(rec: Dict[str, Any], rng: random.Random) -> str:
    rec["extra"] = "value"
    return _dumps(rec)


def _duplicate_key(rec: Dict[str, Any], rng: random.Random) -> str:
    line = _dumps(rec)
    return line[:-1] + ', "sha": "' + rec["sha"] + '"}'


def _ts_as_string(rec: Dict[str, Any], rng: random.Random) -> str:
    rec["ts"] = str(rec["ts"])
    return _dumps(rec)


def _bad_uuid(rec: Dict[str, Any], rng: random.Random) -> str:
    rec[rng.choice(["si", "uu", "bg"])] = "invalid-uuid"
    return _dumps(rec)


def _bad_filename(rec: Dict[str, Any], rng: random.Random) -> str:
    rec["nm"] = rng.choice(["..", "invalid", "invalid.", ".hidden", "a. b"])
    return _dumps(rec)


def _bad_disposition(rec: Dict[str, Any], rng: random.Random) -> str:
    rec["dp"] = rng.choice([0, 4, "1"])
    return _dumps(rec)


def _blank_sha(rec: Dict[str, Any], rng: random.Random) -> str:
    rec["sha"] = rng.choice(["", "   "])
    return _dumps(rec)


def _truncated(rec: Dict[str, Any], rng: random.Random) -> str:
    return _dumps(rec)[:-1]


CORRUPTIONS: List[Callable[[Dict[str, Any], random.Random], str]] = [
    _drop_key,
    _extra_key,
    _duplicate_key,
    _ts_as_string,
    _bad_uuid,
    _bad_filename,
    _bad_disposition,
    _blank_sha,
    _truncated,
]


def generate_lines(
    n: int,
    *,
    start: dt.datetime,
    step_seconds: int,
    rng: random.Random,
    invalid_rate: float = 0.0,
    hash_pool: int = 12,
) -> Iterator[str]:
    """Yield ``n`` lines; roughly ``invalid_rate`` of them are broken."""
    shas = _sha_pool(rng, max(1, hash_pool))
    t0 = int(start.timestamp())
    for i in range(n):
        rec = gen_record(t0 + i * step_seconds, rng, shas)
        if invalid_rate > 0 and rng.random() < invalid_rate:
            yield rng.choice(CORRUPTIONS)(rec, rng)
        else:
            yield _dumps(rec)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="fileseen-sim",
        description="Generate synthetic file observation logs (JSON Lines).",
    )
    p.add_argument("--records", type=int, default=100, help="Number of lines. Default: %(default)s")
    p.add_argument("--start", default="now", help="First timestamp, ISO 8601 (default: now, UTC).")
    p.add_argument("--step", type=int, default=60, help="Seconds between records. Default: %(default)s")
    p.add_argument("--invalid-rate", dest="invalid_rate", type=float, default=0.0,
                   help="Share of lines to corrupt, 0..1. Default: %(default)s")
    p.add_argument("--hash-pool", dest="hash_pool", type=int, default=12,
                   help="Number of distinct content hashes to draw from. Default: %(default)s")
    p.add_argument("--seed", type=int, default=None, help="RNG seed for reproducible output.")
    out = p.add_mutually_exclusive_group(required=True)
    out.add_argument("--out", dest="outfile", help="Output path (.gz compresses).")
    out.add_argument("--stdout", action="store_true", help="Write lines to stdout.")
    p.add_argument("--overwrite", action="store_true", help="Allow replacing an existing output file.")
    p.add_argument("--verbose", action="store_true", help="Verbose tracebacks on errors.")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    if args.records < 0 or args.step < 0 or not 0.0 <= args.invalid_rate <= 1.0:
        print("ERROR: --records and --step must be >= 0 and --invalid-rate within 0..1", file=sys.stderr)
        return EXIT_BAD_ARGS

    try:
        start_utc = _parse_iso_utc(args.start)
    except ValueError as e:
        if args.verbose:
            traceback.print_exc()
        print(f"ERROR: bad --start value: {e}", file=sys.stderr)
        return EXIT_BAD_ARGS

    out_path: Optional[Path] = None
    if not args.stdout:
        out_path = Path(args.outfile).expanduser()
        if out_path.exists() and not args.overwrite:
            print(f"ERROR: output exists: {out_path}. Use --overwrite to replace.", file=sys.stderr)
            return EXIT_BAD_ARGS

    rng = random.Random(args.seed)
    lines = generate_lines(
        args.records,
        start=start_utc,
        step_seconds=args.step,
        rng=rng,
        invalid_rate=args.invalid_rate,
        hash_pool=args.hash_pool,
    )

    try:
        if out_path is None:
            for line in lines:
                sys.stdout.write(line + "\n")
            sys.stdout.flush()
        else:
            count = write_lines(out_path, lines)
            print(f"Wrote {count} lines to {out_path}")
    except OSError as e:
        if args.verbose:
            traceback.print_exc()
        print(f"ERROR: generation failed: {e}", file=sys.stderr)
        return EXIT_RUNTIME

    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
