"""
Verdict scoring: converts one Platform + a user's interests into a
PlatformScore with total, verdict, breakdown and potential savings.

Score formula (additive, clamped to 0–10)
-----------------------------------------
    total = clamp(
        base_score                # hand-assigned platform quality, 0–10
        + relevance_bonus         # 0–3,  content matching user interests
        + freshness_bonus         # 0–2,  releases still to come this month
        + value_adjustment        # -1–+1, content quality per unit of price
        + event_bonus             # 0–1,  relevant live events / premieres
    , 0, 10)

Component explanations
----------------------
relevance_bonus (0–3):
    A content item matches when any genre tag and any interest contain one
    another (case-insensitive).  Each match adds 0.5 * rating / 10, with an
    unrated item counted as 7.

freshness_bonus (0–2):
    0.4 per item released in the current calendar month on or after today.

value_adjustment (-1 to +1):
    value_ratio = (avg_rating / 10 * content_count) / (monthly_price / 500)
    mapped through a fixed step table: >=2 -> +1, >=1 -> +0.5, >=0.5 -> 0,
    >=0.25 -> -0.5, else -1.  The breakpoints are hand-tuned; keep them.

event_bonus (0–1):
    +0.5 per live item whose genre appears inside an interest string,
    +0.25 per item rated 8.5 or higher.

Verdict thresholds (on the unrounded total)
-------------------------------------------
    BUY      : total >= 7.5
    CONTINUE : total >= 5.5
    PAUSE    : total >= 4.0
    SKIP     : everything else

Potential savings equal the monthly price for PAUSE and SKIP, else 0.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Iterable

from subworth.models.catalog import Content, Platform, normalize_interests
from subworth.models.verdict import PlatformScore, ScoreBreakdown
from subworth.taxonomy.content_taxonomy import SAVINGS_VERDICTS, ContentType, Verdict
from subworth.utils.time_utils import is_upcoming_this_month

MAX_RELEVANCE_BONUS = 3.0
MAX_FRESHNESS_BONUS = 2.0
MAX_EVENT_BONUS = 1.0

RELEVANCE_WEIGHT = 0.5
FRESHNESS_PER_RELEASE = 0.4
LIVE_EVENT_BONUS = 0.5
PREMIERE_BONUS = 0.25
PREMIERE_MIN_RATING = 8.5

DEFAULT_RATING = 7.0
PRICE_NORMALIZER = 500.0

# (min value_ratio, adjustment); first match wins
VALUE_STEPS: tuple[tuple[float, float], ...] = (
    (2.0,   1.0),
    (1.0,   0.5),
    (0.5,   0.0),
    (0.25, -0.5),
)
VALUE_FLOOR = -1.0

# (min total, verdict); first match wins
VERDICT_THRESHOLDS: tuple[tuple[float, Verdict], ...] = (
    (7.5, Verdict.BUY),
    (5.5, Verdict.CONTINUE),
    (4.0, Verdict.PAUSE),
)


def calculate_relevance_bonus(
    platform:  Platform,
    interests: Iterable[str],
) -> tuple[float, list[Content]]:
    """Score how much of this month's catalog matches the user's interests.

    Args:
        platform:  Platform whose ``this_month_content`` is scanned.
        interests: Free-text interest strings (any case).

    Returns:
        ``(bonus, matched_content)`` with bonus clamped to 0–3 and matches in
        catalog order.
    """
    wanted = normalize_interests(interests)
    if not wanted:
        return 0.0, []

    matched: list[Content] = []
    relevance = 0.0
    for content in platform.this_month_content:
        if _genre_matches(content, wanted):
            matched.append(content)
            relevance += RELEVANCE_WEIGHT * (content.rating or DEFAULT_RATING) / 10.0

    return min(relevance, MAX_RELEVANCE_BONUS), matched


def calculate_freshness_bonus(
    platform: Platform,
    now:      date | datetime | None = None,
) -> float:
    """0.4 per release later this month (today included), capped at 2."""
    today = _as_date(now)
    upcoming = sum(
        1 for c in platform.this_month_content
        if is_upcoming_this_month(c.release_date, today)
    )
    return min(upcoming * FRESHNESS_PER_RELEASE, MAX_FRESHNESS_BONUS)


def calculate_value_adjustment(platform: Platform) -> float:
    """Map content quality per unit of price onto the -1..+1 step table."""
    content = platform.this_month_content
    count = len(content)
    if count:
        avg_rating = sum(c.rating or DEFAULT_RATING for c in content) / count
    else:
        avg_rating = DEFAULT_RATING

    content_value = (avg_rating / 10.0) * count
    price_factor = platform.monthly_price / PRICE_NORMALIZER
    if price_factor > 0:
        value_ratio = content_value / price_factor
    else:
        # Free platform: any content is infinitely good value, none is worthless.
        value_ratio = math.inf if content_value > 0 else 0.0

    for threshold, adjustment in VALUE_STEPS:
        if value_ratio >= threshold:
            return adjustment
    return VALUE_FLOOR


def calculate_event_bonus(
    platform:  Platform,
    interests: Iterable[str],
) -> float:
    """Bonus for relevant live events and highly rated premieres, capped at 1."""
    wanted = normalize_interests(interests)
    bonus = 0.0
    for content in platform.this_month_content:
        if content.type == ContentType.LIVE and any(
            g.lower() in interest for g in content.genre for interest in wanted
        ):
            bonus += LIVE_EVENT_BONUS
        if (content.rating or 0.0) >= PREMIERE_MIN_RATING:
            bonus += PREMIERE_BONUS
    return min(bonus, MAX_EVENT_BONUS)


def determine_verdict(total_score: float) -> Verdict:
    """Map a total score onto a verdict.

    Boundaries are inclusive: 7.5 is BUY, 5.5 is CONTINUE, 4.0 is PAUSE.
    """
    for threshold, verdict in VERDICT_THRESHOLDS:
        if total_score >= threshold:
            return verdict
    return Verdict.SKIP


def calculate_potential_savings(platform: Platform, verdict: Verdict) -> float:
    """Money saved this month by acting on a PAUSE or SKIP verdict."""
    if verdict in SAVINGS_VERDICTS:
        return platform.monthly_price
    return 0.0


def score_platform(
    platform:  Platform,
    interests: Iterable[str],
    now:       date | datetime | None = None,
) -> PlatformScore:
    """Compute the full recommendation score for one platform.

    Args:
        platform:  Platform with its monthly catalog.
        interests: User interest strings; may be empty.
        now:       Reference date for the freshness bonus. Defaults to today.

    Returns:
        PlatformScore with total rounded to one decimal and breakdown
        components rounded the same way.
    """
    wanted = normalize_interests(interests)

    relevance_bonus, matched = calculate_relevance_bonus(platform, wanted)
    freshness_bonus  = calculate_freshness_bonus(platform, now)
    value_adjustment = calculate_value_adjustment(platform)
    event_bonus      = calculate_event_bonus(platform, wanted)

    total = _clamp(
        platform.base_score
        + relevance_bonus
        + freshness_bonus
        + value_adjustment
        + event_bonus,
        0.0,
        10.0,
    )

    verdict = determine_verdict(total)

    return PlatformScore(
        platform_id=platform.id,
        total_score=_round1(total),
        verdict=verdict,
        breakdown=ScoreBreakdown(
            base_score=platform.base_score,
            relevance_bonus=_round1(relevance_bonus),
            freshness_bonus=_round1(freshness_bonus),
            value_adjustment=_round1(value_adjustment),
            event_bonus=_round1(event_bonus),
        ),
        matched_content=matched,
        potential_savings=calculate_potential_savings(platform, verdict),
    )


def build_reasoning(score: PlatformScore, platform: Platform) -> str:
    """Assemble a human-readable reason string for the verdict details view.

    Returns a semicolon-separated list of explanation tokens such as:
        "3 releases match your interests (Squid Game Season 2, ...);
        Strong value for $15.49/month; Worth subscribing this month"
    """
    reasons: list[str] = []
    b = score.breakdown

    matched = score.matched_content
    if matched:
        titles = ", ".join(c.title for c in matched[:3])
        more = f" and {len(matched) - 3} more" if len(matched) > 3 else ""
        noun = "release matches" if len(matched) == 1 else "releases match"
        reasons.append(f"{len(matched)} {noun} your interests ({titles}{more})")
    else:
        reasons.append("Nothing this month matches your interests")

    if b.freshness_bonus > 0:
        reasons.append("New releases still to come this month")

    price = f"{platform.currency}{platform.monthly_price:.2f}/month"
    if b.value_adjustment >= 1.0:
        reasons.append(f"Strong value for {price}")
    elif b.value_adjustment <= -1.0:
        reasons.append(f"Poor value for {price}")
    elif b.value_adjustment < 0:
        reasons.append(f"Thin catalog for {price}")

    if b.event_bonus > 0:
        reasons.append("Live events or standout premieres")

    if score.verdict == Verdict.BUY:
        reasons.append("Worth subscribing this month")
    elif score.verdict == Verdict.CONTINUE:
        reasons.append("Keep it if you already subscribe")
    elif score.verdict == Verdict.PAUSE:
        reasons.append(f"Pause to save {platform.currency}{score.potential_savings:.2f}")
    else:
        reasons.append(f"Skip to save {platform.currency}{score.potential_savings:.2f}")

    return "; ".join(reasons)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _genre_matches(content: Content, interests: list[str]) -> bool:
    for tag in content.genre:
        g = tag.lower()
        for interest in interests:
            if interest in g or g in interest:
                return True
    return False


def _as_date(now: date | datetime | None) -> date:
    if now is None:
        return date.today()
    if isinstance(now, datetime):
        return now.date()
    return now


def _round1(value: float) -> float:
    # Half-up; built-in round() is half-even.
    return math.floor(value * 10.0 + 0.5) / 10.0


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
