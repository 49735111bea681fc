"""
Shared pytest fixtures for the SubWorth test suite.

Provides:
  - ``ref_date``: the fixed "today" (2024-12-01) the committed catalog is
    written against.
  - ``make_content`` / ``make_platform``: factories with sensible defaults so
    each test only spells out the fields it cares about.
  - ``catalog_platforms``: the committed ``config/platforms/platforms.json``.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Callable

import pytest

from subworth.catalog.seed_loader import load_platforms
from subworth.models.catalog import Content, Platform
from subworth.taxonomy.content_taxonomy import ContentType

PROJECT_ROOT = Path(__file__).parent.parent
CATALOG_PATH = PROJECT_ROOT / "config" / "platforms" / "platforms.json"


@pytest.fixture
def ref_date() -> date:
    return date(2024, 12, 1)


@pytest.fixture
def make_content() -> Callable[..., Content]:
    """Factory for ``Content`` with a December 2024 release by default."""
    counter = {"n": 0}

    def _make(
        genre: list[str] | None = None,
        rating: float | None = 8.0,
        release_date: date = date(2024, 12, 20),
        type: ContentType = ContentType.SERIES,
        title: str | None = None,
        id: str | None = None,
    ) -> Content:
        counter["n"] += 1
        return Content(
            id=id or f"c{counter['n']}",
            title=title or f"Title {counter['n']}",
            type=type,
            genre=genre if genre is not None else ["drama"],
            release_date=release_date,
            rating=rating,
        )

    return _make


@pytest.fixture
def make_platform() -> Callable[..., Platform]:
    """Factory for ``Platform``; content defaults to an empty month."""

    def _make(
        content: list[Content] | None = None,
        base_score: float = 6.0,
        monthly_price: float = 10.0,
        id: str = "p1",
        name: str = "TestFlix",
        slug: str | None = None,
    ) -> Platform:
        return Platform(
            id=id,
            name=name,
            slug=slug or f"{name.lower()}-{id}",
            monthly_price=monthly_price,
            base_score=base_score,
            this_month_content=content or [],
        )

    return _make


@pytest.fixture
def catalog_platforms() -> list[Platform]:
    """The six platforms of the committed December 2024 catalog."""
    return load_platforms(CATALOG_PATH)
