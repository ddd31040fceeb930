# fileseen/__init__.py
"""
fileseen
Validation and aggregate reports for line-delimited file observation records.
"""

from __future__ import annotations

import logging as _logging
from importlib import metadata as _metadata

__all__ = ["__version__", "get_version"]

def get_version() -> str:
    """
    Resolve the installed distribution version (PEP 440) if available,
    otherwise fall back to the in-tree default.
    """
    try:
        return _metadata.version("fileseen-toolkit")
    except _metadata.PackageNotFoundError:
        # Fallback for source checkouts before packaging:
        return "0.3.0"

__version__ = get_version()

# Prevent "No handler found" warnings if users import without configuring logging.
_logging.getLogger(__name__).addHandler(_logging.NullHandler())

from .errors import ContractError, FileNameError, ShapeError  # noqa: E402
from .io.decoder import decode_line, encode_record  # noqa: E402
from .io.record import Disposition, FileRecord  # noqa: E402
from .rules.filename import split_file_name  # noqa: E402
from .rules.line_validator import check_line, validate_line  # noqa: E402
from .stats.extensions import ExtensionIndex, ingest_extension, report_extension_counts  # noqa: E402
from .stats.hourly import HourlyHashIndex, ingest_hourly_hash, report_hourly_hash_counts  # noqa: E402

__all__ += [
    "ShapeError",
    "ContractError",
    "FileNameError",
    "FileRecord",
    "Disposition",
    "validate_line",
    "check_line",
    "decode_line",
    "encode_record",
    "split_file_name",
    "ExtensionIndex",
    "ingest_extension",
    "report_extension_counts",
    "HourlyHashIndex",
    "ingest_hourly_hash",
    "report_hourly_hash_counts",
]
