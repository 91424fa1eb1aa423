"""Report generation."""

from __future__ import annotations

from ..report import generate_report
from ..report import publish_report as publish_report_impl
from .context import PipelineContext


def build_report(ctx: PipelineContext) -> None:
    """Generate the exposure report.

    Args:
        ctx: Pipeline context containing exposures and reconciliation

    Sets the report in the context.
    """
    log = ctx.state.logger
    log.info("Generating report...")
    ctx.report = generate_report(
        ctx.exposure_config_required.target_denoms,
        ctx.exposures_required,
        ctx.reconciliation_required,
    )


def publish_report(ctx: PipelineContext) -> None:
    """Print the summary and write the CSV unless running dry."""
    s = ctx.state.settings
    ctx.state.logger.info("Publishing report (dry_run=%s)...", s.dry_run)
    publish_report_impl(ctx.report_required, s.output_path, dry_run=s.dry_run)
