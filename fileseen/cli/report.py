#!/usr/bin/env python3
"""
fileseen: Report CLI

Reads file observation logs (one JSON record per line) and prints either the
number of distinct filenames per extension, or the number of times each
content hash was seen per hour of day.

Examples
--------
  fileseen-report extensions --in data/seen.log
  fileseen-report hourly --in data/seen.log --tz UTC --format json
  fileseen-report all --extensions data/a.log --hourly data/b.log.gz --config fileseen.yaml

Notes
-----
Invalid lines are skipped with a warning on stderr. A file that cannot be
read is reported on stderr; with `all`, the other file is still processed.
"""

# fileseen/cli/report.py
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from typing import Dict, List, Optional, TextIO

from ..config import ScanConfig, check_log_level, configure_logging, load_config, resolve_timezone
from ..driver import run_reports
from ..errors import ConfigError
from ..stats.extensions import ExtensionIndex, report_extension_counts
from ..stats.hourly import HourlyHashIndex, report_hourly_hash_counts

EXIT_OK = 0
EXIT_BAD_ARGS = 2
EXIT_RUNTIME = 1


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", help="YAML/JSON settings file (timezone, log_level, encoding, explain_rejections).")
    common.add_argument("--format", choices=("text", "json"), default="text", help="Output format. Default: %(default)s")
    common.add_argument("--log-level", dest="log_level", help="Override the configured log level (e.g. DEBUG).")
    common.add_argument("--explain", action="store_true", help="Log JSON Schema diagnostics for rejected lines (needs DEBUG).")

    p = argparse.ArgumentParser(
        prog="fileseen-report",
        description="Aggregate reports over file observation logs.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    sub = p.add_subparsers(dest="mode", required=True)

    ext = sub.add_parser("extensions", parents=[common], help="Distinct filenames per extension.")
    ext.add_argument("--in", dest="in_path", required=True, help="Input log file (.gz accepted).")

    hourly = sub.add_parser("hourly", parents=[common], help="Hash occurrences per hour of day.")
    hourly.add_argument("--in", dest="in_path", required=True, help="Input log file (.gz accepted).")
    hourly.add_argument("--tz", help="Zone for hour of day: local (default), UTC, or an IANA name.")

    both = sub.add_parser("all", parents=[common], help="Both reports, each from its own file.")
    both.add_argument("--extensions", dest="ext_path", required=True, help="Input for the extension report.")
    both.add_argument("--hourly", dest="hourly_path", required=True, help="Input for the hourly report.")
    both.add_argument("--tz", help="Zone for hour of day: local (default), UTC, or an IANA name.")

    return p.parse_args(argv)


def _effective_config(args: argparse.Namespace) -> ScanConfig:
    cfg = load_config(args.config)
    if getattr(args, "tz", None):
        resolve_timezone(args.tz)
        cfg = replace(cfg, timezone=args.tz)
    if args.log_level:
        cfg = replace(cfg, log_level=check_log_level(args.log_level))
    if args.explain:
        cfg = replace(cfg, explain_rejections=True)
    return cfg


def _extensions_payload(index: ExtensionIndex) -> Dict[str, int]:
    return dict(sorted(report_extension_counts(index)))


def _hourly_payload(index: HourlyHashIndex) -> Dict[str, Dict[str, int]]:
    return {
        str(hour): dict(sorted(shas))
        for hour, shas in sorted(report_hourly_hash_counts(index), key=lambda item: item[0])
    }


def write_extensions(index: ExtensionIndex, fmt: str, out: TextIO) -> None:
    payload = _extensions_payload(index)
    if fmt == "json":
        out.write(json.dumps(payload, ensure_ascii=False) + "\n")
        return
    for ext, count in payload.items():
        out.write(f"{ext}: {count}\n")


def write_hourly(index: HourlyHashIndex, fmt: str, out: TextIO) -> None:
    payload = _hourly_payload(index)
    if fmt == "json":
        out.write(json.dumps(payload, ensure_ascii=False) + "\n")
        return
    for hour, shas in payload.items():
        pairs = " ".join(f"{sha}={count}" for sha, count in shas.items())
        out.write(f"{int(hour):02d}: {pairs}\n")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        cfg = _effective_config(args)
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_BAD_ARGS

    configure_logging(cfg.log_level)
    out = sys.stdout
    ext_path = args.in_path if args.mode == "extensions" else getattr(args, "ext_path", None)
    hourly_path = args.in_path if args.mode == "hourly" else getattr(args, "hourly_path", None)
    ext_index, hourly_index = run_reports(ext_path, hourly_path, cfg)
    headers = args.mode == "all" and args.format == "text"

    status = EXIT_OK
    if ext_path is not None:
        if ext_index is None:
            status = EXIT_RUNTIME
        else:
            if headers:
                out.write("# extensions\n")
            write_extensions(ext_index, args.format, out)
    if hourly_path is not None:
        if hourly_index is None:
            status = EXIT_RUNTIME
        else:
            if headers:
                out.write("# hourly\n")
            write_hourly(hourly_index, args.format, out)

    out.flush()
    return status


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
