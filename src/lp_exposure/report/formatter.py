"""Rich console formatter for exposure summaries."""

from __future__ import annotations

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table

from .generator import ExposureReport, ExposureSummary


def _format_amount(amount: int) -> str:
    """Format an integer amount with comma separators."""
    return f"{amount:,}"


def _build_counts_table(summary: ExposureSummary) -> Table:
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Key", style="dim")
    table.add_column("Value", style="cyan", justify="right")
    table.add_row("# of Holders", str(summary.holders))
    table.add_row("# of Liquidity Providers", str(summary.liquidity_providers))
    table.add_row("# of Farmers", str(summary.farmers))
    table.add_row("# of Accounts", str(summary.accounts))
    table.add_row("Share Conversions", str(summary.conversions))
    return table


def _build_reconciliation_table(report: ExposureReport) -> Table:
    summary = report.summary
    table = Table(expand=True, show_lines=False)
    table.add_column("Asset", style="cyan", no_wrap=True)
    table.add_column("Supply", justify="right", style="dim")
    table.add_column("Accounted", justify="right", style="green")
    table.add_column("Residual", justify="right", style="yellow")
    table.add_column("Fee Withheld", justify="right", style="dim")

    if summary is None:
        return table
    for symbol in report.symbols:
        table.add_row(
            symbol,
            _format_amount(summary.supply[symbol]),
            _format_amount(summary.totals[symbol]),
            _format_amount(summary.residuals[symbol]),
            _format_amount(summary.fee_withheld[symbol]),
        )
    return table


def format_summary_table(report: ExposureReport, console: Console | None = None) -> None:
    """Print the summary counts and reconciliation residuals.

    Args:
        report: The exposure report to format
        console: Console to print to (defaults to stdout)
    """
    console = console or Console()
    summary = report.summary
    if summary is None:
        raise ValueError("Report has no summary; generate_report() must build it")

    counts_panel = Panel(
        _build_counts_table(summary), title="[bold]Result[/]", border_style="blue"
    )
    status = "[green]within rounding bound[/]" if summary.balanced else "[red]out of bound[/]"
    reconciliation_panel = Panel(
        _build_reconciliation_table(report),
        title=f"[bold]Reconciliation[/] ({status})",
        border_style="green" if summary.balanced else "red",
    )

    console.print()
    console.print(
        Panel(
            Group(counts_panel, "", reconciliation_panel),
            title="[bold white]LP Exposure[/]",
            border_style="white",
            padding=(1, 2),
        )
    )
    console.print()
