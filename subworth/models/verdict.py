"""
Verdict output models.

``ScoreBreakdown`` holds the additive components of a platform's score.
``PlatformScore`` is the scorer's complete answer for one platform: total,
verdict, breakdown, matched content and potential savings.

Scores are recomputed on demand and never treated as authoritative state;
``to_record()`` produces the camelCase dict the web client and the JSON
report consume.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from subworth.models.catalog import Content
from subworth.taxonomy.content_taxonomy import SAVINGS_VERDICTS, Verdict


class ScoreBreakdown(BaseModel):
    """Additive components of a platform score, each rounded to one decimal.

    Attributes:
        base_score: The platform's hand-assigned quality score (0–10).
        relevance_bonus: Bonus for content matching user interests (0–3).
        freshness_bonus: Bonus for releases still to come this month (0–2).
        value_adjustment: Price-to-content correction (-1 to +1).
        event_bonus: Bonus for relevant live events and premieres (0–1).
    """

    model_config = ConfigDict(frozen=True)

    base_score: float
    relevance_bonus: float
    freshness_bonus: float
    value_adjustment: float
    event_bonus: float


class PlatformScore(BaseModel):
    """Scored recommendation for a single platform.

    Attributes:
        platform_id: ``Platform.id`` this score belongs to.
        total_score: Clamped total in [0, 10], rounded to one decimal.
        verdict: ``Verdict`` derived from the total.
        breakdown: Component breakdown.
        matched_content: Content whose genres matched the user's interests.
        potential_savings: Monthly price when the verdict is pause/skip, else 0.
    """

    model_config = ConfigDict(frozen=True)

    platform_id: str
    total_score: float
    verdict: Verdict
    breakdown: ScoreBreakdown
    matched_content: list[Content] = []
    potential_savings: float = 0.0

    @field_validator("total_score")
    @classmethod
    def validate_total_range(cls, v: float) -> float:
        if not 0.0 <= v <= 10.0:
            raise ValueError(f"total_score must be in [0, 10], got {v}.")
        return v

    @property
    def is_savings_candidate(self) -> bool:
        return self.verdict in SAVINGS_VERDICTS

    def to_record(self) -> dict[str, Any]:
        """Serialize with the camelCase keys used by the web client."""
        return {
            "platformId": self.platform_id,
            "totalScore": self.total_score,
            "verdict": self.verdict.value,
            "breakdown": {
                "baseScore": self.breakdown.base_score,
                "relevanceBonus": self.breakdown.relevance_bonus,
                "freshnessBonus": self.breakdown.freshness_bonus,
                "valueAdjustment": self.breakdown.value_adjustment,
                "eventBonus": self.breakdown.event_bonus,
            },
            "matchedContent": [
                {
                    "id": c.id,
                    "title": c.title,
                    "type": c.type.value,
                    "genre": list(c.genre),
                    "releaseDate": c.release_date.isoformat(),
                    "rating": c.rating,
                    "description": c.description,
                }
                for c in self.matched_content
            ],
            "potentialSavings": self.potential_savings,
        }
