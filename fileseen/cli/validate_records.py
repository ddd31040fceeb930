#!/usr/bin/env python3
"""
Validate a file observation log line by line.
Usage:
  fileseen-validate --in data/seen.log
  fileseen-validate --in data/seen.log.gz --explain
"""
from __future__ import annotations

import argparse
import sys
from contextlib import closing
from typing import List, Optional

from ..config import configure_logging
from ..io.jsonl_io import read_lines
from ..rules.line_validator import check_line
from ..rules.schema_check import explain_line

EXIT_OK = 0
EXIT_RUNTIME = 1


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(prog="fileseen-validate", description="Check each line against the file-record schema.")
    ap.add_argument("--in", dest="inp", required=True, help="Input log file (.gz accepted).")
    ap.add_argument("--encoding", default="utf-8")
    ap.add_argument("--explain", action="store_true", help="Add JSON Schema diagnostics under each rejected line.")
    ap.add_argument("--quiet", action="store_true", help="Only print the summary.")
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging("WARNING")

    errs = 0
    n = 0
    try:
        with closing(read_lines(args.inp, encoding=args.encoding)) as lines:
            for i, line in enumerate(lines, 1):
                n += 1
                verdict = check_line(line)
                if verdict.accepted:
                    continue
                errs += 1
                if args.quiet:
                    continue
                print(f"Line {i}: {verdict.reason}")
                if args.explain:
                    for msg in explain_line(line):
                        print(f"  -> {msg}")
    except (OSError, UnicodeDecodeError) as e:
        print(f"ERROR: cannot read {args.inp}: {e}", file=sys.stderr)
        return EXIT_RUNTIME

    if errs:
        print(f"Validation failed: {errs} invalid line(s) across {n} lines.", file=sys.stderr)
        return EXIT_RUNTIME
    print(f"Validation OK: {n} lines")
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
