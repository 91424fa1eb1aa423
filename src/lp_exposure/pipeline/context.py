from __future__ import annotations

from dataclasses import dataclass

from ..domain import Snapshot
from ..processors import (
    ExposureConfig,
    ExposureResult,
    PoolIndex,
    ReconciliationResult,
)
from ..report import ExposureReport
from ..state import AppState


@dataclass
class PipelineContext:
    state: AppState
    snapshot: Snapshot | None = None
    pool_index: PoolIndex | None = None
    reserve_accounts: frozenset[str] | None = None
    exposure_config: ExposureConfig | None = None
    exposures: ExposureResult | None = None
    reconciliation: ReconciliationResult | None = None
    report: ExposureReport | None = None

    @property
    def snapshot_required(self) -> Snapshot:
        if self.snapshot is None:
            raise RuntimeError(
                "Snapshot has not been loaded. Ensure load_state() is called before accessing this property."
            )
        return self.snapshot

    @property
    def pool_index_required(self) -> PoolIndex:
        if self.pool_index is None:
            raise RuntimeError(
                "Pool index has not been built. Ensure index_pools() is called before accessing this property."
            )
        return self.pool_index

    @property
    def reserve_accounts_required(self) -> frozenset[str]:
        if self.reserve_accounts is None:
            raise RuntimeError(
                "Reserve accounts have not been collected. Ensure index_pools() is called before accessing this property."
            )
        return self.reserve_accounts

    @property
    def exposure_config_required(self) -> ExposureConfig:
        if self.exposure_config is None:
            raise RuntimeError(
                "Exposure config has not been set. Ensure index_pools() is called before accessing this property."
            )
        return self.exposure_config

    @property
    def exposures_required(self) -> ExposureResult:
        if self.exposures is None:
            raise RuntimeError(
                "Exposures have not been computed. Ensure compute_exposures() is called before accessing this property."
            )
        return self.exposures

    @property
    def reconciliation_required(self) -> ReconciliationResult:
        if self.reconciliation is None:
            raise RuntimeError(
                "Reconciliation has not run. Ensure compute_exposures() is called before accessing this property."
            )
        return self.reconciliation

    @property
    def report_required(self) -> ExposureReport:
        if self.report is None:
            raise RuntimeError(
                "Report has not been set. Ensure build_report() is called before accessing this property."
            )
        return self.report
