"""
Tests for subworth/recommendations/scorer.py.

What we test
------------
calculate_relevance_bonus():
  - Matching is a case-insensitive substring test in either direction.
  - Unrated (or zero-rated) items count as 7.
  - Capped at 3; empty interests give 0 and no matches.

calculate_freshness_bonus():
  - Only releases in the current month on or after today count.
  - Capped at 2.

calculate_value_adjustment():
  - Step table boundaries are inclusive.
  - Empty catalog and free platforms.

calculate_event_bonus():
  - Live items match only when the genre sits inside an interest string.
  - Premieres rated 8.5+ add 0.25 regardless of interests.
  - Capped at 1.

determine_verdict():
  - Inclusive thresholds 7.5 / 5.5 / 4.0.

score_platform():
  - The reference scenario (Netflix-like platform, one matching premiere today).
  - Clamping to 10, verdict on the unrounded total, savings.

build_reasoning():
  - Mentions matched titles and the verdict-specific action.
"""

from __future__ import annotations

from datetime import date, datetime

import pytest

from subworth.recommendations.scorer import (
    build_reasoning,
    calculate_event_bonus,
    calculate_freshness_bonus,
    calculate_potential_savings,
    calculate_relevance_bonus,
    calculate_value_adjustment,
    determine_verdict,
    score_platform,
)
from subworth.taxonomy.content_taxonomy import ContentType, Verdict

TODAY = date(2024, 12, 15)


# ── calculate_relevance_bonus ────────────────────────────────────────────────

class TestRelevanceBonus:
    def test_exact_genre_match(self, make_platform, make_content):
        p = make_platform([make_content(["thriller"], rating=9.2)])
        bonus, matched = calculate_relevance_bonus(p, ["thriller"])
        assert bonus == pytest.approx(0.46)
        assert [c.id for c in matched] == [p.this_month_content[0].id]

    def test_interest_inside_genre(self, make_platform, make_content):
        p = make_platform([make_content(["sci-fi"], rating=10.0)])
        bonus, matched = calculate_relevance_bonus(p, ["sci"])
        assert bonus == pytest.approx(0.5)
        assert len(matched) == 1

    def test_genre_inside_interest(self, make_platform, make_content):
        p = make_platform([make_content(["drama"], rating=10.0)])
        bonus, _ = calculate_relevance_bonus(p, ["kdrama"])
        assert bonus == pytest.approx(0.5)

    def test_case_insensitive(self, make_platform, make_content):
        p = make_platform([make_content(["Thriller"], rating=10.0)])
        bonus, _ = calculate_relevance_bonus(p, ["THRILLER"])
        assert bonus == pytest.approx(0.5)

    def test_unrated_counts_as_seven(self, make_platform, make_content):
        p = make_platform([make_content(["comedy"], rating=None)])
        bonus, _ = calculate_relevance_bonus(p, ["comedy"])
        assert bonus == pytest.approx(0.35)

    def test_zero_rating_counts_as_seven(self, make_platform, make_content):
        p = make_platform([make_content(["comedy"], rating=0.0)])
        bonus, _ = calculate_relevance_bonus(p, ["comedy"])
        assert bonus == pytest.approx(0.35)

    def test_capped_at_three(self, make_platform, make_content):
        p = make_platform([make_content(["action"], rating=10.0) for _ in range(10)])
        bonus, matched = calculate_relevance_bonus(p, ["action"])
        assert bonus == pytest.approx(3.0)
        assert len(matched) == 10

    def test_empty_interests_match_nothing(self, make_platform, make_content):
        p = make_platform([make_content(["action"])])
        assert calculate_relevance_bonus(p, []) == (0.0, [])

    def test_blank_interest_is_ignored(self, make_platform, make_content):
        p = make_platform([make_content(["action"])])
        bonus, matched = calculate_relevance_bonus(p, ["", "   "])
        assert bonus == 0.0
        assert matched == []

    def test_item_counted_once_for_several_matches(self, make_platform, make_content):
        p = make_platform([make_content(["action", "thriller"], rating=10.0)])
        bonus, matched = calculate_relevance_bonus(p, ["action", "thriller"])
        assert bonus == pytest.approx(0.5)
        assert len(matched) == 1

    def test_matches_keep_catalog_order(self, make_platform, make_content):
        a = make_content(["comedy"], id="a")
        b = make_content(["horror"], id="b")
        c = make_content(["comedy"], id="c")
        _, matched = calculate_relevance_bonus(make_platform([a, b, c]), ["comedy"])
        assert [m.id for m in matched] == ["a", "c"]


# ── calculate_freshness_bonus ────────────────────────────────────────────────

class TestFreshnessBonus:
    def test_only_upcoming_releases_this_month(self, make_platform, make_content):
        p = make_platform([
            make_content(release_date=date(2024, 12, 14)),   # past
            make_content(release_date=date(2024, 12, 15)),   # today
            make_content(release_date=date(2024, 12, 31)),   # later this month
            make_content(release_date=date(2025, 1, 2)),     # next month
        ])
        assert calculate_freshness_bonus(p, TODAY) == pytest.approx(0.8)

    def test_release_today_counts(self, make_platform, make_content):
        p = make_platform([make_content(release_date=TODAY)])
        assert calculate_freshness_bonus(p, TODAY) == pytest.approx(0.4)

    def test_same_month_previous_year_excluded(self, make_platform, make_content):
        p = make_platform([make_content(release_date=date(2023, 12, 20))])
        assert calculate_freshness_bonus(p, TODAY) == 0.0

    def test_accepts_datetime(self, make_platform, make_content):
        p = make_platform([make_content(release_date=TODAY)])
        assert calculate_freshness_bonus(p, datetime(2024, 12, 15, 23, 59)) == pytest.approx(0.4)

    def test_capped_at_two(self, make_platform, make_content):
        p = make_platform([make_content(release_date=date(2024, 12, 20)) for _ in range(6)])
        assert calculate_freshness_bonus(p, TODAY) == pytest.approx(2.0)

    def test_empty_catalog(self, make_platform):
        assert calculate_freshness_bonus(make_platform([]), TODAY) == 0.0


# ── calculate_value_adjustment ───────────────────────────────────────────────

class TestValueAdjustment:
    # One item rated 10 gives content_value 1.0, so value_ratio = 500 / price.

    @pytest.mark.parametrize(
        "price, expected",
        [
            (250.0,  1.0),    # ratio 2.0
            (400.0,  0.5),    # ratio 1.25
            (500.0,  0.5),    # ratio 1.0
            (1000.0, 0.0),    # ratio 0.5
            (2000.0, -0.5),   # ratio 0.25
            (4000.0, -1.0),   # ratio 0.125
        ],
    )
    def test_step_table(self, make_platform, make_content, price, expected):
        p = make_platform([make_content(rating=10.0)], monthly_price=price)
        assert calculate_value_adjustment(p) == pytest.approx(expected)

    def test_empty_catalog_is_poor_value(self, make_platform):
        assert calculate_value_adjustment(make_platform([], monthly_price=9.99)) == -1.0

    def test_free_platform_with_content(self, make_platform, make_content):
        p = make_platform([make_content(rating=5.0)], monthly_price=0.0)
        assert calculate_value_adjustment(p) == 1.0

    def test_free_platform_without_content(self, make_platform):
        assert calculate_value_adjustment(make_platform([], monthly_price=0.0)) == -1.0

    def test_unrated_items_average_as_seven(self, make_platform, make_content):
        # 2 * 0.7 = 1.4 content value; 1.4 / (700 / 500) = 1.0
        p = make_platform(
            [make_content(rating=None), make_content(rating=None)], monthly_price=700.0
        )
        assert calculate_value_adjustment(p) == pytest.approx(0.5)


# ── calculate_event_bonus ────────────────────────────────────────────────────

class TestEventBonus:
    def test_relevant_live_event(self, make_platform, make_content):
        p = make_platform([make_content(["football"], rating=7.0, type=ContentType.LIVE)])
        assert calculate_event_bonus(p, ["football"]) == pytest.approx(0.5)

    def test_live_genre_inside_interest(self, make_platform, make_content):
        p = make_platform([make_content(["football"], rating=7.0, type=ContentType.LIVE)])
        assert calculate_event_bonus(p, ["american football"]) == pytest.approx(0.5)

    def test_live_interest_inside_genre_does_not_match(self, make_platform, make_content):
        p = make_platform([make_content(["football"], rating=7.0, type=ContentType.LIVE)])
        assert calculate_event_bonus(p, ["foot"]) == 0.0

    def test_non_live_item_gets_no_live_bonus(self, make_platform, make_content):
        p = make_platform([make_content(["football"], rating=7.0, type=ContentType.SERIES)])
        assert calculate_event_bonus(p, ["football"]) == 0.0

    def test_premiere_threshold_inclusive(self, make_platform, make_content):
        p = make_platform([make_content(rating=8.5)])
        assert calculate_event_bonus(p, []) == pytest.approx(0.25)

    def test_below_premiere_threshold(self, make_platform, make_content):
        p = make_platform([make_content(rating=8.4)])
        assert calculate_event_bonus(p, []) == 0.0

    def test_unrated_is_not_a_premiere(self, make_platform, make_content):
        p = make_platform([make_content(rating=None)])
        assert calculate_event_bonus(p, []) == 0.0

    def test_live_and_premiere_stack(self, make_platform, make_content):
        p = make_platform([make_content(["nba"], rating=9.0, type=ContentType.LIVE)])
        assert calculate_event_bonus(p, ["nba"]) == pytest.approx(0.75)

    def test_capped_at_one(self, make_platform, make_content):
        p = make_platform(
            [make_content(["f1"], rating=9.0, type=ContentType.LIVE) for _ in range(3)]
        )
        assert calculate_event_bonus(p, ["f1"]) == pytest.approx(1.0)


# ── determine_verdict / savings ──────────────────────────────────────────────

class TestDetermineVerdict:
    @pytest.mark.parametrize(
        "total, expected",
        [
            (10.0, Verdict.BUY),
            (7.5,  Verdict.BUY),
            (7.49, Verdict.CONTINUE),
            (5.5,  Verdict.CONTINUE),
            (5.49, Verdict.PAUSE),
            (4.0,  Verdict.PAUSE),
            (3.99, Verdict.SKIP),
            (0.0,  Verdict.SKIP),
        ],
    )
    def test_thresholds(self, total, expected):
        assert determine_verdict(total) == expected


class TestPotentialSavings:
    def test_pause_and_skip_save_the_price(self, make_platform):
        p = make_platform(monthly_price=13.99)
        assert calculate_potential_savings(p, Verdict.PAUSE) == pytest.approx(13.99)
        assert calculate_potential_savings(p, Verdict.SKIP) == pytest.approx(13.99)

    def test_buy_and_continue_save_nothing(self, make_platform):
        p = make_platform(monthly_price=13.99)
        assert calculate_potential_savings(p, Verdict.BUY) == 0.0
        assert calculate_potential_savings(p, Verdict.CONTINUE) == 0.0


# ── score_platform ───────────────────────────────────────────────────────────

class TestScorePlatform:
    def test_reference_scenario(self, make_platform, make_content):
        today = date(2024, 12, 26)
        p = make_platform(
            [make_content(["thriller", "drama"], rating=9.2, release_date=today)],
            base_score=7.5,
            monthly_price=15.49,
        )
        s = score_platform(p, ["thriller"], today)

        assert s.total_score == pytest.approx(9.6)
        assert s.verdict == Verdict.BUY
        assert s.potential_savings == 0.0
        assert s.breakdown.base_score == pytest.approx(7.5)
        assert s.breakdown.relevance_bonus == pytest.approx(0.5)
        assert s.breakdown.freshness_bonus == pytest.approx(0.4)
        assert s.breakdown.value_adjustment == pytest.approx(1.0)
        assert s.breakdown.event_bonus == pytest.approx(0.3)
        assert len(s.matched_content) == 1

    def test_total_clamped_at_ten(self, catalog_platforms, ref_date):
        netflix = catalog_platforms[0]
        s = score_platform(netflix, ["thriller"], ref_date)
        assert s.total_score == 10.0
        assert s.verdict == Verdict.BUY
        assert [c.id for c in s.matched_content] == ["n1", "n2", "n4"]

    def test_total_clamped_at_zero(self, make_platform):
        s = score_platform(make_platform([], base_score=0.0), [], TODAY)
        assert s.total_score == 0.0
        assert s.verdict == Verdict.SKIP
        assert s.breakdown.value_adjustment == -1.0

    def test_verdict_uses_unrounded_total(self, make_platform, make_content):
        # 7.21 + 0.25 premiere = 7.46: displays as 7.5 but stays CONTINUE.
        p = make_platform(
            [make_content(rating=9.2, release_date=date(2024, 11, 1))],
            base_score=7.21,
            monthly_price=600.0,
        )
        s = score_platform(p, [], TODAY)
        assert s.total_score == pytest.approx(7.5)
        assert s.verdict == Verdict.CONTINUE

    def test_empty_catalog(self, make_platform):
        s = score_platform(make_platform([], base_score=6.0), ["drama"], TODAY)
        assert s.total_score == pytest.approx(5.0)
        assert s.verdict == Verdict.PAUSE
        assert s.matched_content == []
        assert s.potential_savings == pytest.approx(10.0)

    def test_no_interests_still_scores(self, make_platform, make_content):
        s = score_platform(make_platform([make_content(rating=7.0)]), [], TODAY)
        assert s.breakdown.relevance_bonus == 0.0
        assert s.matched_content == []

    def test_score_is_deterministic(self, catalog_platforms, ref_date):
        a = score_platform(catalog_platforms[2], ["sci-fi"], ref_date)
        b = score_platform(catalog_platforms[2], ["sci-fi"], ref_date)
        assert a == b


# ── build_reasoning ──────────────────────────────────────────────────────────

class TestBuildReasoning:
    def test_mentions_matched_titles(self, make_platform, make_content):
        p = make_platform(
            [make_content(["crime"], title="The Penguin", rating=8.7)], base_score=7.8
        )
        s = score_platform(p, ["crime"], TODAY)
        reason = build_reasoning(s, p)
        assert "1 release matches your interests (The Penguin)" in reason

    def test_truncates_long_match_lists(self, make_platform, make_content):
        p = make_platform([make_content(["comedy"]) for _ in range(5)])
        s = score_platform(p, ["comedy"], TODAY)
        assert "and 2 more" in build_reasoning(s, p)

    def test_skip_reason_names_savings(self, make_platform):
        p = make_platform([], base_score=1.0, monthly_price=13.99)
        s = score_platform(p, [], TODAY)
        reason = build_reasoning(s, p)
        assert "Nothing this month matches your interests" in reason
        assert "Poor value" in reason
        assert reason.endswith("Skip to save $13.99")

    def test_buy_reason(self, make_platform, make_content):
        p = make_platform(
            [make_content(["drama"], rating=9.0, release_date=TODAY)], base_score=8.0
        )
        reason = build_reasoning(score_platform(p, ["drama"], TODAY), p)
        assert "New releases still to come this month" in reason
        assert reason.endswith("Worth subscribing this month")
