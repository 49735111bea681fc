"""
Time and date utilities for month-scoped verdicts.

Key concepts:
  - Verdict month: every verdict belongs to one calendar month; catalogs,
    reports and savings are all keyed by (year, month).
  - Freshness: a release counts as "fresh" while it is in the current month
    and not yet in the past.
"""

from __future__ import annotations

from datetime import date, datetime, timezone


def utcnow() -> datetime:
    """Return the current UTC datetime (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def is_current_month(check_date: date, now: date) -> bool:
    """True if ``check_date`` falls in the same calendar month/year as ``now``."""
    return check_date.year == now.year and check_date.month == now.month


def is_upcoming_this_month(release_date: date, now: date) -> bool:
    """True if ``release_date`` is later this month (today included)."""
    return is_current_month(release_date, now) and release_date >= now


def month_label(d: date) -> str:
    """Human month label, e.g. ``"December 2024"``."""
    return d.strftime("%B %Y")

