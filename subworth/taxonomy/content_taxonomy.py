"""
Content and verdict taxonomy for the subscription advisor.

Three vocabularies describe everything the scorer reasons about:
  - ``ContentType``      — the *what*: what kind of release is this?
  - ``Verdict``          — the *so what*: buy, continue, pause or skip.
  - ``InterestCategory`` — the whitelisted interest strings a user can pick.

The scorer accepts free-text interests; ``InterestCategory`` is only used
by input validation helpers and the taste-profile mapping.

Usage example::

    from subworth.taxonomy.content_taxonomy import ContentType, Verdict

    kind    = ContentType.LIVE
    verdict = Verdict.PAUSE

This module has NO imports from any other ``subworth`` package.
"""

from enum import StrEnum


class ContentType(StrEnum):
    """Kind of release listed in a platform's monthly catalog."""

    MOVIE = "movie"
    SERIES = "series"
    DOCUMENTARY = "documentary"

    LIVE = "live"
    """Live events (sports, concerts); earn the event bonus when relevant."""

    SPECIAL = "special"
    """One-off specials: stand-up, award shows, holiday episodes."""


class Verdict(StrEnum):
    """Categorical recommendation derived from a platform's total score.

    Thresholds (inclusive lower bounds) live in
    ``subworth.recommendations.scorer.VERDICT_THRESHOLDS``.
    """

    BUY = "buy"
    """High value this month; subscribe if you are not already."""

    CONTINUE = "continue"
    """Keep paying if already subscribed."""

    PAUSE = "pause"
    """Limited value; consider pausing for a month."""

    SKIP = "skip"
    """Not worth the money this month."""


# Verdicts whose monthly price counts towards potential savings.
SAVINGS_VERDICTS: frozenset[Verdict] = frozenset({Verdict.PAUSE, Verdict.SKIP})


class InterestCategory(StrEnum):
    """Interest strings accepted from the onboarding and settings forms."""

    MOVIES = "movies"
    SERIES = "series"
    ANIME = "anime"
    SPORTS = "sports"
    KDRAMA = "kdrama"
    DOCUMENTARY = "documentary"
    COMEDY = "comedy"
    THRILLER = "thriller"
    SCI_FI = "sci-fi"
    FANTASY = "fantasy"
    ACTION = "action"
    DRAMA = "drama"
    HORROR = "horror"
    ROMANCE = "romance"
    CRIME = "crime"
    FAMILY = "family"
    MUSICAL = "musical"
    SUPERHERO = "superhero"
    REALITY = "reality"


VALID_INTERESTS: frozenset[str] = frozenset(c.value for c in InterestCategory)

MAX_INTERESTS = 10


def validate_interest_selection(interests: list[str]) -> list[str]:
    """Validate a user's interest selection against the whitelist.

    Args:
        interests: Raw interest strings from a form submission.

    Returns:
        Lowercased, de-duplicated interests in submission order.

    Raises:
        ValueError: If the selection is empty, too long, or contains an
            unknown interest.
    """
    cleaned: list[str] = []
    for raw in interests:
        value = raw.strip().lower()
        if value not in VALID_INTERESTS:
            raise ValueError(f"Invalid interest category '{raw}'.")
        if value not in cleaned:
            cleaned.append(value)

    if not cleaned:
        raise ValueError("Select at least one interest.")
    if len(cleaned) > MAX_INTERESTS:
        raise ValueError(f"Maximum {MAX_INTERESTS} interests allowed, got {len(cleaned)}.")
    return cleaned
