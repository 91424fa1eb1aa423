from __future__ import annotations

from .formatter import format_summary_table
from .generator import (
    ExposureReport,
    ExposureRow,
    ExposureSummary,
    format_coin,
    generate_report,
)
from .publisher import publish_report, write_csv

__all__ = [
    "ExposureReport",
    "ExposureRow",
    "ExposureSummary",
    "format_coin",
    "format_summary_table",
    "generate_report",
    "publish_report",
    "write_csv",
]
