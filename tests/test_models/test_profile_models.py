"""Tests for subworth.models.profile."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from subworth.models.profile import TasteProfile


class TestTasteProfile:
    def test_defaults(self):
        profile = TasteProfile()
        assert profile.confidence == "low"
        assert profile.onboarding_completed is False
        assert profile.interests() == []

    def test_unknown_genre_rejected(self):
        with pytest.raises(ValidationError):
            TasteProfile(genres=["Western"])

    @pytest.mark.parametrize("age", [0, 130, -5])
    def test_age_bounds(self, age):
        with pytest.raises(ValidationError):
            TasteProfile(user_age=age)

    def test_parses_json(self):
        profile = TasteProfile.model_validate_json(
            '{"user_name": "Sam", "genres": ["Thriller"], "favorite_shows": '
            '[{"id": "1", "title": "Dark"}]}'
        )
        assert profile.favorite_shows[0].title == "Dark"

    def test_parses_onboarding_camel_case(self):
        profile = TasteProfile.model_validate_json(
            '{"userName": "Sam", "userAge": 31, "contentTypes": ["Anime"], '
            '"genres": ["Thriller"], "languages": [], "favoriteShows": '
            '[{"id": "7", "title": "Dark"}], "behavior": null, '
            '"confidence": "medium", "onboardingCompleted": true}'
        )
        assert profile.user_name == "Sam"
        assert profile.user_age == 31
        assert profile.content_types == ["Anime"]
        assert profile.favorite_shows[0].title == "Dark"
        assert profile.onboarding_completed is True
        assert profile.interests() == ["thriller", "anime"]


class TestInterests:
    def test_genres_lead(self):
        profile = TasteProfile(
            genres=["Sci-Fi", "Comedy"],
            content_types=["Anime"],
        )
        assert profile.interests() == ["sci-fi", "comedy", "anime"]

    def test_content_types_mapped(self):
        profile = TasteProfile(content_types=["Web Series", "Documentaries", "Reality Shows"])
        assert profile.interests() == ["series", "documentary", "reality"]

    def test_korean_language_adds_kdrama(self):
        profile = TasteProfile(genres=["Drama"], languages=["Korean", "English"])
        assert profile.interests() == ["drama", "kdrama"]

    def test_duplicates_removed(self):
        profile = TasteProfile(genres=["Drama", "Drama"])
        assert profile.interests() == ["drama"]
