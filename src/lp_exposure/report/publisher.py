from __future__ import annotations

import csv
import logging
from pathlib import Path

from rich.console import Console

from .formatter import format_summary_table
from .generator import ExposureReport

logger = logging.getLogger(__name__)

FLAG_COLUMNS = ["holder", "liquidity_provider", "farmer"]


def csv_header(report: ExposureReport) -> list[str]:
    return ["address", *(symbol.lower() for symbol in report.symbols), *FLAG_COLUMNS]


def write_csv(report: ExposureReport, path: Path) -> int:
    """Write one row per account to ``path``, replacing any existing file.

    Returns:
        Number of rows written (excluding the header)
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(csv_header(report))
        for row in report.rows:
            writer.writerow(
                [
                    row.address,
                    *(row.coins[symbol] for symbol in report.symbols),
                    str(row.holder).lower(),
                    str(row.liquidity_provider).lower(),
                    str(row.farmer).lower(),
                ]
            )
    logger.info("Wrote %d rows to %s", len(report.rows), path)
    return len(report.rows)


def publish_report(
    report: ExposureReport,
    output_path: Path,
    dry_run: bool = False,
    console: Console | None = None,
) -> None:
    """Print the summary and, unless ``dry_run``, write the CSV table."""
    format_summary_table(report, console=console)
    if dry_run:
        logger.info("Dry run: not writing %s", output_path)
        return
    write_csv(report, output_path)
