"""
Verdict ranker: scores a list of platforms for one user and aggregates the
results for the dashboard.

Usage flow
----------
1. score_all_platforms(platforms, interests)
   -> list[PlatformScore]  (sorted by total_score, highest first)

2. filter_subscribed(scores, subscribed_ids)
   -> list[PlatformScore]  (only the platforms the user pays for)

3. calculate_total_savings(scores) / group_by_verdict(scores)
   -> savings tracker total / dashboard filter buckets
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Iterable

from subworth.models.catalog import Platform
from subworth.models.verdict import PlatformScore
from subworth.recommendations.scorer import score_platform
from subworth.taxonomy.content_taxonomy import Verdict

logger = logging.getLogger(__name__)


def score_all_platforms(
    platforms: list[Platform],
    interests: Iterable[str],
    now:       date | datetime | None = None,
) -> list[PlatformScore]:
    """Score every platform and sort by total score, highest first.

    The sort is stable: platforms with equal totals keep their input order.

    Args:
        platforms: Platforms to score.
        interests: User interest strings, shared across all platforms.
        now:       Reference date for the freshness bonus.

    Returns:
        One PlatformScore per platform, descending by ``total_score``.
    """
    wanted = list(interests)
    scores = [score_platform(p, wanted, now) for p in platforms]
    scores.sort(key=lambda s: s.total_score, reverse=True)
    logger.debug(
        "Scored %d platforms for %d interests; top=%s",
        len(scores), len(wanted), scores[0].platform_id if scores else None,
    )
    return scores


def calculate_total_savings(scores: Iterable[PlatformScore]) -> float:
    """Sum of ``potential_savings`` across all scores (zeros included)."""
    return sum((s.potential_savings for s in scores), 0.0)


def group_by_verdict(scores: Iterable[PlatformScore]) -> dict[Verdict, list[PlatformScore]]:
    """Bucket scores by verdict, preserving the input order within each bucket.

    Every verdict is present as a key, with an empty list when unused, so the
    dashboard filters can render all four tabs.
    """
    groups: dict[Verdict, list[PlatformScore]] = defaultdict(list)
    for s in scores:
        groups[s.verdict].append(s)
    return {v: groups.get(v, []) for v in Verdict}


def filter_subscribed(
    scores:       Iterable[PlatformScore],
    platform_ids: Iterable[str],
) -> list[PlatformScore]:
    """Keep only scores for platforms the user currently subscribes to."""
    subscribed = set(platform_ids)
    return [s for s in scores if s.platform_id in subscribed]
