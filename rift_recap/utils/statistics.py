"""Statistical utility functions for safe calculations."""

import statistics
from typing import List


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """
    Safely divide two numbers, returning default if denominator is zero.

    Args:
        numerator: The numerator
        denominator: The denominator
        default: Value to return if denominator is zero

    Returns:
        Result of division or default value
    """
    return numerator / denominator if denominator > 0 else default


def safe_mean(values: List[float], default: float = 0.0) -> float:
    """
    Safely calculate mean of values, returning default if list is empty.

    Args:
        values: List of numeric values
        default: Value to return if list is empty

    Returns:
        Mean of values or default value
    """
    return statistics.mean(values) if values else default


def kda_ratio(kills: float, deaths: float, assists: float) -> float:
    """(kills + assists) / deaths, or kills + assists when deathless."""
    if deaths > 0:
        return (kills + assists) / deaths
    return float(kills + assists)


def win_rate(wins: int, games: int) -> float:
    """Win rate in percent, clamped to [0, 100]."""
    return clamp(safe_divide(wins, games) * 100, 0.0, 100.0)


def percent_change(before: float, after: float) -> float:
    """Relative change from ``before`` to ``after`` in percent, 0 if before is 0."""
    if before == 0:
        return 0.0
    return (after - before) / before * 100


def normalize(value: float, ceiling: float) -> float:
    """Scale ``value`` onto 0..100 against a fixed ceiling."""
    return clamp(safe_divide(value, ceiling) * 100, 0.0, 100.0)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))
