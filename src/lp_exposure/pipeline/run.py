"""High-level pipeline orchestration."""

from __future__ import annotations

from ..state import AppState
from .context import PipelineContext
from .exposure import compute_exposures
from .pools import index_pools, load_state
from .report import build_report, publish_report


def run_report(state: AppState) -> PipelineContext:
    """Execute the complete exposure pipeline.

    This is a thin orchestrator that sequences the pipeline steps:
    1. Snapshot loading
    2. Pool indexing and reserve account classification
    3. Exposure aggregation and reconciliation
    4. Report generation
    5. Publishing (summary always, CSV unless dry-run)

    Args:
        state: Application state containing settings and logger

    Returns:
        The populated pipeline context
    """
    s = state.settings
    log = state.logger

    log.info(
        "Starting report",
        extra={"snapshot": str(s.snapshot_path), "dry_run": s.dry_run},
    )

    ctx = PipelineContext(state=state)
    load_state(ctx)
    index_pools(ctx)
    compute_exposures(ctx)
    build_report(ctx)
    publish_report(ctx)

    log.info("Report completed", extra={"snapshot": str(s.snapshot_path)})
    return ctx
