"""
Shared data schemas

This package contains the record schema used across all services.
"""

from .record import Record, RecordList, RecordPayloadError, parse_records, dump_records

__all__ = [
    "Record",
    "RecordList",
    "RecordPayloadError",
    "parse_records",
    "dump_records",
]
