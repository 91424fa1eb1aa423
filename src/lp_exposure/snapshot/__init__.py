from __future__ import annotations

from .loader import load_snapshot, parse_app_state

__all__ = [
    "load_snapshot",
    "parse_app_state",
]
