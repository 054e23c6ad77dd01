from __future__ import annotations

from .csv_reader import ApplicationBatch, parse_application_rows, read_applications_csv, read_raw_rows

__all__ = [
    "ApplicationBatch",
    "parse_application_rows",
    "read_applications_csv",
    "read_raw_rows",
]
