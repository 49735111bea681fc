"""Tests for subworth.utils.time_utils."""

from __future__ import annotations

from datetime import date, timezone

from subworth.utils.time_utils import (
    is_current_month,
    is_upcoming_this_month,
    month_label,
    utcnow,
)


def test_utcnow_is_aware():
    assert utcnow().tzinfo == timezone.utc


def test_is_current_month():
    now = date(2024, 12, 15)
    assert is_current_month(date(2024, 12, 1), now)
    assert is_current_month(date(2024, 12, 31), now)
    assert not is_current_month(date(2025, 1, 1), now)
    assert not is_current_month(date(2023, 12, 15), now)


def test_is_upcoming_this_month():
    now = date(2024, 12, 15)
    assert is_upcoming_this_month(date(2024, 12, 15), now)
    assert is_upcoming_this_month(date(2024, 12, 31), now)
    assert not is_upcoming_this_month(date(2024, 12, 14), now)
    assert not is_upcoming_this_month(date(2025, 1, 1), now)


def test_month_label():
    assert month_label(date(2024, 12, 26)) == "December 2024"
