"""Reconstruct per-account exposure to target assets from a chain snapshot."""

from __future__ import annotations

__version__ = "0.1.0"
