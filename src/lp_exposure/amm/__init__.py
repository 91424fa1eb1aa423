from __future__ import annotations

from .pool import BasicPoolModel, new_pool, withdraw

__all__ = [
    "BasicPoolModel",
    "new_pool",
    "withdraw",
]
