"""
Platform catalog models.

``Content`` is a single release on a streaming platform this month: a movie,
series, documentary, live event or special.

``Platform`` is a streaming service with its monthly price, a hand-assigned
base quality score and the list of ``Content`` released this month.

Both models are frozen and accept the camelCase field names used by the
JSON catalog and the web client (``releaseDate``, ``monthlyPrice``,
``thisMonthContent`` ...) as well as the snake_case attribute names.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from subworth.taxonomy.content_taxonomy import ContentType


class Content(BaseModel):
    """A title released on a platform this month.

    Attributes:
        id: Catalog identifier, e.g. ``"n1"`` or ``"tmdb-movie-550"``.
        title: Display title.
        type: Kind of release from ``ContentType``.
        genre: Free-text genre tags, e.g. ``["thriller", "kdrama"]``.
        release_date: Calendar date the title becomes available.
        rating: Critic/audience rating in [0, 10], or ``None`` if unrated.
        description: One-line synopsis.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    type: ContentType
    genre: list[str] = Field(default_factory=list)
    release_date: date = Field(
        validation_alias=AliasChoices("release_date", "releaseDate"),
    )
    rating: Optional[float] = None
    description: str = ""

    @field_validator("rating")
    @classmethod
    def validate_rating_range(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and not 0.0 <= v <= 10.0:
            raise ValueError(f"rating must be in [0, 10], got {v}.")
        return v

    @field_validator("genre")
    @classmethod
    def strip_genre_tags(cls, v: list[str]) -> list[str]:
        return [g.strip() for g in v if g and g.strip()]


class Platform(BaseModel):
    """A streaming platform and its catalog for the current month.

    Attributes:
        id: Platform identifier.
        name: Display name, e.g. ``"Netflix"``.
        slug: URL-safe identifier, e.g. ``"netflix"``.
        monthly_price: Price of one month's subscription. Must be >= 0.
        yearly_price: Price of an annual plan, if offered.
        currency: Currency symbol used for display.
        base_score: Hand-assigned quality score in [0, 10].
        categories: Broad categories the platform is known for.
        this_month_content: Releases this month (may be empty).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    slug: str
    monthly_price: float = Field(
        validation_alias=AliasChoices("monthly_price", "monthlyPrice"),
    )
    yearly_price: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("yearly_price", "yearlyPrice"),
    )
    currency: str = "$"
    base_score: float = Field(
        validation_alias=AliasChoices("base_score", "baseScore"),
    )
    categories: list[str] = Field(default_factory=list)
    this_month_content: list[Content] = Field(
        default_factory=list,
        validation_alias=AliasChoices("this_month_content", "thisMonthContent"),
    )

    @field_validator("monthly_price")
    @classmethod
    def validate_monthly_price(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"monthly_price must be non-negative, got {v}.")
        return v

    @field_validator("base_score")
    @classmethod
    def validate_base_score(cls, v: float) -> float:
        if not 0.0 <= v <= 10.0:
            raise ValueError(f"base_score must be in [0, 10], got {v}.")
        return v

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("slug must not be empty.")
        return v


def normalize_interests(interests: Iterable[str]) -> list[str]:
    """Lowercase and de-duplicate interest strings, dropping blanks.

    Order of first appearance is preserved.  A blank interest would
    substring-match every genre tag, so it is discarded here rather than
    letting it mark the whole catalog as relevant.
    """
    seen: list[str] = []
    for raw in interests:
        value = (raw or "").strip().lower()
        if value and value not in seen:
            seen.append(value)
    return seen
