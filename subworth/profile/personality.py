"""
Personality copy for the dashboard header.

Pure functions over a ``TasteProfile``: a one-line "hook" that reflects the
user's dominant taste, a time-of-day greeting and a tone modifier by age.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Optional

from subworth.models.profile import TasteProfile

Tone = Literal["bold", "warm", "intelligent", "playful", "passionate", "curious"]


@dataclass(frozen=True)
class PersonalityHook:
    """A short line that makes the user feel understood, plus its tone."""

    line: str
    tone: Tone


_GENRE_HOOKS: dict[str, PersonalityHook] = {
    "Action":        PersonalityHook("You live for the adrenaline rush", "bold"),
    "Romance":       PersonalityHook("You believe in the power of connection", "warm"),
    "Thriller":      PersonalityHook("You love unraveling mysteries", "intelligent"),
    "Comedy":        PersonalityHook("Laughter is your love language", "playful"),
    "Sci-Fi":        PersonalityHook("You're fascinated by what's possible", "curious"),
    "Horror":        PersonalityHook("You embrace the thrill of fear", "bold"),
    "Fantasy":       PersonalityHook("You believe in magic and wonder", "passionate"),
    "Drama":         PersonalityHook("You appreciate stories that move you", "warm"),
    "Crime":         PersonalityHook("You're drawn to the darker side of human nature", "intelligent"),
    "Slice of Life": PersonalityHook("You find beauty in everyday moments", "warm"),
}

_CONTENT_HOOKS: dict[str, PersonalityHook] = {
    "Anime":         PersonalityHook("You appreciate art that tells bold stories", "passionate"),
    "Documentaries": PersonalityHook("You're curious about the real world", "curious"),
    "Reality Shows": PersonalityHook("You love watching real human drama unfold", "playful"),
    "Web Series":    PersonalityHook("You're always ahead of the curve", "curious"),
    "Movies":        PersonalityHook("You appreciate cinematic storytelling", "passionate"),
}

DEFAULT_HOOK = PersonalityHook("You have unique taste in entertainment", "warm")


def generate_personality_hook(profile: TasteProfile) -> PersonalityHook:
    """Pick a hook from the dominant genre, then content type, then default."""
    if profile.genres:
        hook = _GENRE_HOOKS.get(profile.genres[0])
        if hook is not None:
            return hook
    if profile.content_types:
        hook = _CONTENT_HOOKS.get(profile.content_types[0])
        if hook is not None:
            return hook
    return DEFAULT_HOOK


def get_personalized_greeting(
    full_name: Optional[str],
    now:       Optional[datetime] = None,
) -> str:
    """Time-of-day greeting: morning before 12:00, afternoon before 18:00."""
    hour = (now or datetime.now()).hour
    name = full_name or "there"

    if hour < 12:
        return f"Good morning, {name}"
    if hour < 18:
        return f"Good afternoon, {name}"
    return f"Good evening, {name}"


def get_age_appropriate_modifier(
    age: Optional[int],
) -> Literal["casual", "professional", "friendly"]:
    if not age:
        return "friendly"
    if age < 25:
        return "casual"
    if age < 45:
        return "friendly"
    return "professional"
