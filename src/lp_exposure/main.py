"""CLI entrypoint for lp-exposure."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Annotated, Any

import typer

from .constants import CONFIG_ENV_VAR
from .logger import get_logger, setup_logging
from .settings import ExposureSettings, FeePolicy
from .state import AppState

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    add_help_option=True,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
    rich_markup_mode="rich",
    help="Per-account exposure to target assets held directly, as pool shares, or staked.",
)


def _build_logger() -> logging.Logger:
    """Build a logger instance."""
    return get_logger("lp_exposure")


@app.command()
def report(
    snapshot: Annotated[
        Path | None,
        typer.Argument(help="Exported genesis JSON to read the snapshot from."),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to a TOML config file (can include [lp_exposure] table).",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="CSV file to write the per-account table to."),
    ] = None,
    fee_policy: Annotated[
        FeePolicy | None,
        typer.Option(
            "--fee-policy",
            help="Value pool shares at book value or net of the pool withdraw fee.",
        ),
    ] = None,
    dry_run: Annotated[
        bool | None,
        typer.Option(
            "--dry-run/--write",
            help="Print the summary without writing the CSV file.",
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Override logging verbosity (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).",
        ),
    ] = None,
    show_config: Annotated[
        bool,
        typer.Option(
            "--show-config",
            help="Print effective config and exit.",
        ),
    ] = False,
):
    """Compute per-account exposure from a snapshot and write the result table.

    This is the default command that loads configuration, validates settings,
    and executes the exposure pipeline.
    """
    if config_path:
        os.environ[CONFIG_ENV_VAR] = str(config_path)

    init_kwargs: dict[str, Any] = {}
    if snapshot is not None:
        init_kwargs["snapshot_path"] = snapshot
    if output is not None:
        init_kwargs["output_path"] = output
    if fee_policy is not None:
        init_kwargs["fee_policy"] = fee_policy
    if dry_run is not None:
        init_kwargs["dry_run"] = dry_run
    if log_level is not None:
        init_kwargs["log_level"] = log_level.upper()

    settings = ExposureSettings(**init_kwargs)

    if show_config:
        typer.echo(json.dumps(settings.as_dict(), indent=2))
        raise typer.Exit(code=0)

    setup_logging(settings.log_level)
    state = AppState(settings=settings, logger=_build_logger())

    if state.settings.snapshot_path is None:
        raise typer.BadParameter(
            "snapshot must be configured",
            param_hint=["SNAPSHOT", "LP_EXPOSURE_SNAPSHOT_PATH"],
        )

    from .pipeline.run import run_report

    ctx = run_report(state)
    if not ctx.reconciliation_required.balanced:
        state.logger.warning("Reconciliation residual exceeds the rounding bound")


def run() -> None:
    """Entrypoint used by the console script."""
    app()


if __name__ == "__main__":
    run()
