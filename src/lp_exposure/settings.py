"""Settings module with unified configuration precedence: CLI > ENV > CONFIG FILE."""

from __future__ import annotations

import os
import tomllib
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .constants import (
    CONFIG_ENV_VAR,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_TARGET_DENOMS,
    LOCAL_CONFIG_FILE,
)

load_dotenv()


class FeePolicy(str, Enum):
    """How pool shares are valued when converted into reserves."""

    BOOK = "book"  # no fee, proportional share of reserves
    WITHDRAWAL = "withdrawal"  # deduct the pool's withdraw fee


class TomlConfigSource(PydanticBaseSettingsSource):
    """Lowest-precedence source reading a TOML file (top-level or [lp_exposure])."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None):
        super().__init__(settings_cls)
        self._path = path

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return None, "", False

    def _resolve_path(self) -> Path | None:
        if self._path:
            if not self._path.exists():
                raise FileNotFoundError(f"Config file not found: {self._path}")
            return self._path

        local_config = Path(LOCAL_CONFIG_FILE)
        user_config = Path.home() / ".config" / "lp-exposure" / "config.toml"
        if local_config.exists():
            return local_config
        if user_config.exists():
            return user_config
        return None

    def __call__(self) -> dict[str, Any]:
        path = self._resolve_path()
        if path is None:
            return {}

        with path.open("rb") as f:
            data = tomllib.load(f)
        body = data.get("lp_exposure", data)
        if not isinstance(body, dict):
            return {}
        return body


class ExposureSettings(BaseSettings):
    """Single source of truth for configuration. Values may come from:
    - CLI (init kwargs)
    - ENV / .env (prefixed with LP_EXPOSURE_)
    - Config file (TOML), lowest precedence

    Do not read os.environ or files elsewhere in the codebase.
    """

    # --- input / output ---
    snapshot_path: Path | None = None
    output_path: Path = Path(DEFAULT_OUTPUT_FILE)
    dry_run: bool = False

    # --- tracked assets ---
    target_denoms: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_TARGET_DENOMS),
        description="Symbol to denomination of each asset whose exposure is computed.",
    )
    pool_coin_denoms: list[str] | None = Field(
        default=None,
        description="Pool-share denominations to convert. Derived from the pairs when unset.",
    )

    # --- infrastructure accounts ---
    staking_reserve_addresses: dict[str, str] = Field(
        default_factory=dict,
        description="Staking coin denomination to its farming staking reserve address.",
    )
    extra_reserve_addresses: list[str] = Field(default_factory=list)

    # --- valuation ---
    fee_policy: FeePolicy = FeePolicy.BOOK

    # --- logging ---
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="LP_EXPOSURE_",
        env_file=".env",
        extra="ignore",  # ignore unknown keys in env/config file
    )

    @field_validator("target_denoms")
    @classmethod
    def validate_target_denoms(cls, v: dict[str, str]) -> dict[str, str]:
        if not v:
            raise ValueError("target_denoms must name at least one asset")
        denoms = list(v.values())
        if len(set(denoms)) != len(denoms):
            raise ValueError(f"target_denoms contains duplicate denominations: {denoms}")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Custom config-file source with explicit precedence: CLI > ENV > FILE."""
        env_cfg = os.environ.get(CONFIG_ENV_VAR)
        cfg_path = Path(env_cfg) if env_cfg else None

        return (
            init_settings,  # CLI (highest)
            env_settings,  # ENV
            dotenv_settings,  # .env
            TomlConfigSource(settings_cls, cfg_path),  # CONFIG (lowest)
        )

    def as_dict(self) -> dict[str, Any]:
        """Return the config as a JSON-serialisable dict."""
        return self.model_dump(mode="json")

    @property
    def snapshot_path_required(self) -> Path:
        """Get snapshot_path, raising ValueError if not set."""
        if self.snapshot_path is None:
            raise ValueError("snapshot_path must be configured")
        return self.snapshot_path

    def fee_rate(self, withdraw_fee_rate: Decimal) -> Decimal:
        """Fee rate applied to share conversions under the configured policy."""
        if self.fee_policy is FeePolicy.WITHDRAWAL:
            return withdraw_fee_rate
        return Decimal(0)
