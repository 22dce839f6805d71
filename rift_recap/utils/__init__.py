"""Shared helpers."""

from .concurrency import ItemResult, bounded_map
from .statistics import (
    clamp,
    kda_ratio,
    normalize,
    percent_change,
    safe_divide,
    safe_mean,
    win_rate,
)

__all__ = [
    "ItemResult",
    "bounded_map",
    "clamp",
    "kda_ratio",
    "normalize",
    "percent_change",
    "safe_divide",
    "safe_mean",
    "win_rate",
]
