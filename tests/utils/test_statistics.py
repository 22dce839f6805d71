"""
Tests for statistical helpers.
"""

from rift_recap.utils.statistics import (
    kda_ratio,
    normalize,
    percent_change,
    safe_divide,
    win_rate,
)


def test_kda_ratio():
    assert kda_ratio(3, 2, 2) == 2.5
    # Deathless games count kills plus assists
    assert kda_ratio(4, 0, 6) == 10.0


def test_win_rate_is_clamped_percent():
    assert win_rate(7, 12) == 7 / 12 * 100
    assert win_rate(0, 0) == 0.0
    assert win_rate(5, 4) == 100.0


def test_safe_divide_default():
    assert safe_divide(5, 0) == 0.0
    assert safe_divide(5, 0, default=1.0) == 1.0


def test_percent_change():
    assert percent_change(100, 120) == 20.0
    assert percent_change(0, 50) == 0.0


def test_normalize_caps_at_hundred():
    assert normalize(2.5, 5) == 50.0
    assert normalize(12, 10) == 100.0


def test_kda_sample_games():
    games = [(5, 2, 3), (0, 5, 0), (10, 1, 2)]

    assert [kda_ratio(*g) for g in games] == [4.0, 0.0, 12.0]
    totals = [sum(values) for values in zip(*games)]
    assert kda_ratio(*totals) == 2.5
