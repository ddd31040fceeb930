"""
Aggregate reports over accepted file records.

Exports:
    ExtensionIndex   -> extension -> distinct filename stems
    HourlyHashIndex  -> hour of day -> content hash -> occurrences
"""
from .extensions import ExtensionIndex, ingest_extension, report_extension_counts
from .hourly import HourlyHashIndex, hour_of_day, ingest_hourly_hash, report_hourly_hash_counts

__all__ = [
    "ExtensionIndex",
    "ingest_extension",
    "report_extension_counts",
    "HourlyHashIndex",
    "hour_of_day",
    "ingest_hourly_hash",
    "report_hourly_hash_counts",
]
