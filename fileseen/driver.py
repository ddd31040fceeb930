# fileseen/driver.py
"""
Run the two reports over line sources.

Each source is processed on its own: lines are pulled in order, validated,
decoded and routed to one aggregator. Rejected lines are logged and skipped.
A source that cannot be opened or read is logged and abandoned without
affecting any other source.

Usage:
    index = run_extension_report("seen.log")
    if index is not None:
        for ext, n in report_extension_counts(index):
            print(f"{ext}: {n}")
"""
from __future__ import annotations

import logging
from contextlib import closing
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple

from .config import ScanConfig
from .errors import ContractError
from .io.decoder import decode_line
from .io.jsonl_io import PathLike, read_lines
from .io.record import FileRecord
from .rules.line_validator import check_line
from .rules.schema_check import explain_line
from .stats.extensions import ExtensionIndex
from .stats.hourly import HourlyHashIndex

log = logging.getLogger(__name__)

__all__ = [
    "RunStats",
    "process_lines",
    "run_extension_report",
    "run_hourly_report",
    "run_reports",
]

Sink = Callable[[FileRecord], None]


@dataclass
class RunStats:
    lines: int = 0
    accepted: int = 0
    rejected: int = 0
    skipped: int = 0

    @property
    def ingested(self) -> int:
        return self.accepted - self.skipped


def process_lines(lines: Iterable[str], sink: Sink, *, explain: bool = False) -> RunStats:
    """
    Validate each line, decode the accepted ones and hand them to ``sink``.

    ``sink`` raising :class:`ContractError` (e.g. a timestamp the calendar
    cannot represent) skips that record only. ``OSError`` from the line
    source propagates.
    """
    stats = RunStats()
    for line_no, line in enumerate(lines, 1):
        stats.lines += 1
        verdict = check_line(line)
        if not verdict.accepted:
            stats.rejected += 1
            log.warning("skipping invalid line %d: %s", line_no, verdict.reason)
            if explain and log.isEnabledFor(logging.DEBUG):
                for msg in explain_line(line):
                    log.debug("line %d: %s", line_no, msg)
            continue

        stats.accepted += 1
        try:
            sink(decode_line(line, recheck=False))
        except ContractError as e:
            stats.skipped += 1
            log.warning("skipping line %d: %s", line_no, e)
    return stats


def _run(path: PathLike, sink: Sink, config: ScanConfig, what: str) -> Optional[RunStats]:
    try:
        with closing(read_lines(path, encoding=config.encoding)) as lines:
            stats = process_lines(lines, sink, explain=config.explain_rejections)
    except (OSError, UnicodeDecodeError) as e:
        log.error("Unable to read file %s: %s", path, e)
        return None
    log.info(
        "%s report for %s: %d lines, %d accepted, %d rejected, %d skipped",
        what, path, stats.lines, stats.accepted, stats.rejected, stats.skipped,
    )
    return stats


def run_extension_report(path: PathLike, config: Optional[ScanConfig] = None) -> Optional[ExtensionIndex]:
    """Build the extension index from ``path``; None if the source could not be read."""
    config = config or ScanConfig()
    index = ExtensionIndex()
    if _run(path, index.ingest, config, "extension") is None:
        return None
    return index


def run_hourly_report(path: PathLike, config: Optional[ScanConfig] = None) -> Optional[HourlyHashIndex]:
    """Build the hour-of-day hash index from ``path``; None if the source could not be read."""
    config = config or ScanConfig()
    index = HourlyHashIndex(tz=config.tz)
    if _run(path, index.ingest, config, "hourly") is None:
        return None
    return index


def run_reports(
    extension_path: Optional[PathLike],
    hourly_path: Optional[PathLike],
    config: Optional[ScanConfig] = None,
) -> Tuple[Optional[ExtensionIndex], Optional[HourlyHashIndex]]:
    """Run both reports, each from its own source; a failed source yields None for its report."""
    config = config or ScanConfig()
    ext_index = run_extension_report(extension_path, config) if extension_path is not None else None
    hourly_index = run_hourly_report(hourly_path, config) if hourly_path is not None else None
    return ext_index, hourly_index
