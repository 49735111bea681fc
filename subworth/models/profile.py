"""
Taste profile captured by the onboarding wizard.

Only the data shape lives here; the wizard itself is a UI concern.
``TasteProfile.interests()`` bridges the onboarding vocabulary (title-case
genres and content types) and the lowercase interest strings the scorer
matches against genre tags.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

ContentPreference = Literal[
    "Movies", "Web Series", "Anime", "Documentaries", "Reality Shows",
]
Genre = Literal[
    "Action", "Drama", "Thriller", "Romance", "Comedy",
    "Sci-Fi", "Horror", "Fantasy", "Crime", "Slice of Life",
]
Language = Literal[
    "English", "Hindi", "Korean", "Japanese", "Regional", "International",
]
WatchBehavior = Literal[
    "Binge watch",
    "Casual weekends",
    "Only trending shows",
    "Only specific genres",
    "Watch 1-2 shows/month",
]
ConfidenceLevel = Literal["low", "medium", "high"]

# Onboarding labels that do not lowercase cleanly onto an interest string.
_CONTENT_TO_INTEREST: dict[str, str] = {
    "Movies":        "movies",
    "Web Series":    "series",
    "Anime":         "anime",
    "Documentaries": "documentary",
    "Reality Shows": "reality",
}
_LANGUAGE_TO_INTEREST: dict[str, str] = {
    "Korean": "kdrama",
}


class FavoriteShow(BaseModel):
    """A show the user picked as a favourite during onboarding."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    img: Optional[str] = None


class TasteProfile(BaseModel):
    """Viewing preferences collected during onboarding.

    Keys may be snake_case or the camelCase the onboarding flow exports.

    Attributes:
        user_name: Display name, if given.
        user_age: Age in years, if given.
        content_types: Preferred formats, most preferred first.
        genres: Preferred genres, most preferred first.
        languages: Preferred languages.
        favorite_shows: Up to a handful of favourite titles.
        behavior: Self-described watching habit.
        confidence: How confident the wizard is in the profile.
        onboarding_completed: Whether the wizard was finished.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    user_name: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("user_name", "userName"),
    )
    user_age: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("user_age", "userAge"),
    )
    content_types: list[ContentPreference] = Field(
        default_factory=list, validation_alias=AliasChoices("content_types", "contentTypes"),
    )
    genres: list[Genre] = Field(default_factory=list)
    languages: list[Language] = Field(default_factory=list)
    favorite_shows: list[FavoriteShow] = Field(
        default_factory=list, validation_alias=AliasChoices("favorite_shows", "favoriteShows"),
    )
    behavior: Optional[WatchBehavior] = None
    confidence: ConfidenceLevel = "low"
    onboarding_completed: bool = Field(
        default=False,
        validation_alias=AliasChoices("onboarding_completed", "onboardingCompleted"),
    )

    @field_validator("user_age")
    @classmethod
    def validate_age(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and not 0 < v < 130:
            raise ValueError(f"user_age must be in (0, 130), got {v}.")
        return v

    def interests(self) -> list[str]:
        """Derive scorer interests from genres, content types and languages.

        Genres come first so the user's strongest signals lead the list.
        """
        out: list[str] = []
        candidates = (
            [g.lower() for g in self.genres]
            + [_CONTENT_TO_INTEREST[c] for c in self.content_types]
            + [_LANGUAGE_TO_INTEREST[lang] for lang in self.languages
               if lang in _LANGUAGE_TO_INTEREST]
        )
        for value in candidates:
            if value not in out:
                out.append(value)
        return out
