"""
Unit tests for deterministic vibe scoring and the reference tables.

Tests keyword matching, category bonuses, clamping and the budget/vibe
lookups used by every fallback.
"""

import math

import pytest
from pydantic import ValidationError

from tripsearch.search.scoring import (
    ACTIVITY_RULE,
    DINING_RULE,
    LODGING_RULE,
    score_activity,
    score_dining,
    score_lodging,
    score_text,
)
from tripsearch.shared.contracts.results import clamp_vibe_score
from tripsearch.shared.reference import (
    BUDGET_RANGES,
    VIBE_KEYWORDS,
    budget_info,
    dining_price_range_for,
    keywords_for_vibes,
    price_levels_for,
    star_ratings_for,
)
from tripsearch.tests.fakes import (
    make_activity_candidate,
    make_dining_candidate,
    make_lodging_candidate,
)


class TestClampVibeScore:
    """Tests for clamp_vibe_score."""

    def test_values_in_range_are_kept(self):
        assert clamp_vibe_score(0) == 0
        assert clamp_vibe_score(55) == 55
        assert clamp_vibe_score(100) == 100

    def test_out_of_range_values_are_clamped(self):
        assert clamp_vibe_score(-5) == 0
        assert clamp_vibe_score(150) == 100

    def test_fractions_are_rounded(self):
        assert clamp_vibe_score(72.6) == 73
        assert clamp_vibe_score("42") == 42

    def test_missing_and_nan_become_zero(self):
        assert clamp_vibe_score(None) == 0
        assert clamp_vibe_score(math.nan) == 0

    def test_infinities_are_clamped(self):
        assert clamp_vibe_score(math.inf) == 100
        assert clamp_vibe_score(-math.inf) == 0

    def test_non_numeric_raises(self):
        with pytest.raises(ValueError):
            clamp_vibe_score("very good")
        with pytest.raises(ValueError):
            clamp_vibe_score(True)

    def test_result_models_clamp_on_validation(self):
        """Scores outside [0, 100] from generated output are clamped, not rejected."""
        assert make_lodging_candidate(vibe_score=140).vibe_score == 100
        assert make_dining_candidate(vibe_score=-3).vibe_score == 0

    def test_result_models_reject_non_numeric(self):
        with pytest.raises(ValidationError):
            make_activity_candidate(vibe_score="excellent")


class TestScoreText:
    """Tests for the shared keyword matcher."""

    def test_activity_base_is_zero(self):
        assert score_text("", ["foodie"], ACTIVITY_RULE).score == 0

    def test_one_point_block_per_matched_keyword(self):
        result = score_text("museum of history", ["cultural"], ACTIVITY_RULE)
        assert result.score == 30
        assert result.matched_vibes == ["cultural"]

    def test_matching_is_case_insensitive(self):
        lower = score_text("MUSEUM", ["Cultural"], ACTIVITY_RULE)
        assert lower.score == 15
        assert lower.matched_vibes == ["Cultural"]

    def test_duplicate_vibes_count_once(self):
        once = score_text("market", ["foodie"], DINING_RULE)
        twice = score_text("market", ["foodie", "foodie"], DINING_RULE)
        assert once == twice

    def test_case_variant_vibes_count_once(self):
        scored = score_text("market", ["Foodie", "foodie"], ACTIVITY_RULE)
        assert scored.score == 15
        assert scored.matched_vibes == ["Foodie"]

    def test_unknown_vibes_match_nothing(self):
        result = score_text("museum", ["underwater basket weaving"], LODGING_RULE)
        assert result.score == LODGING_RULE.base
        assert result.matched_vibes == []

    def test_matched_vibes_follow_request_order(self):
        result = score_text("spa and museum", ["relaxation", "cultural"], ACTIVITY_RULE)
        assert result.matched_vibes == ["relaxation", "cultural"]

    def test_score_is_clamped(self):
        text = (
            "heritage museum history art traditional local architecture historical "
            "spa beach wellness peaceful quiet relaxing retreat massage"
        )
        assert score_text(text, ["cultural", "relaxation"], LODGING_RULE).score == 100


class TestCategoryScoring:
    """Tests for the per-category scoring rules and bonuses."""

    def test_lodging_romantic_boutique_bonus(self):
        hotel = make_lodging_candidate(
            name="Boutique House", description="Small hotel", amenities=[]
        )
        result = score_lodging(hotel, ["Romantic"])
        assert result.score == 70
        assert result.matched_vibes == []

    def test_lodging_relaxation_spa_bonus(self):
        hotel = make_lodging_candidate(
            name="Spa Retreat", description="Calm hotel", amenities=[]
        )
        # spa + retreat keywords (+20) and the spa bonus (+25)
        assert score_lodging(hotel, ["relaxation"]).score == 95

    def test_lodging_amenities_are_scored(self):
        hotel = make_lodging_candidate(
            name="Plain Hotel", description="", amenities=["fitness center"]
        )
        # fitness keyword (+10) and the wellness bonus (+20)
        assert score_lodging(hotel, ["wellness"]).score == 80

    def test_activity_category_is_scored(self):
        activity = make_activity_candidate(
            name="Sunset Sailing", description="On the river", category="tour"
        )
        result = score_activity(activity, ["adventure"])
        assert result.score == 15
        assert result.matched_vibes == ["adventure"]

    def test_dining_foodie_bonus_needs_no_keyword(self):
        restaurant = make_dining_candidate(
            name="Casa", description="", cuisine_types=["Portuguese"]
        )
        assert score_dining(restaurant, ["foodie"]).score == 65

    def test_dining_cultural_traditional_bonus(self):
        restaurant = make_dining_candidate(
            name="Casa", description="traditional fado house", cuisine_types=[]
        )
        # traditional keyword (+12) and the traditional bonus (+20)
        assert score_dining(restaurant, ["cultural"]).score == 82

    def test_no_vibes_scores_base(self):
        assert score_lodging(make_lodging_candidate(), []).score == 50
        assert score_activity(make_activity_candidate(), []).score == 0
        assert score_dining(make_dining_candidate(), []).score == 50


class TestReferenceTables:
    """Tests for budget and vibe lookups."""

    def test_budget_info_known_tiers(self):
        assert budget_info("budget")["lodging"] == {"min": 30, "max": 100}
        assert budget_info("luxury")["daily"] == 500

    def test_unknown_tier_defaults_to_moderate(self):
        assert budget_info("unheard-of") == BUDGET_RANGES["moderate"]
        assert star_ratings_for("unheard-of") == [3, 4]
        assert dining_price_range_for("unheard-of") == "moderate"

    def test_luxury_maps_to_upscale_dining(self):
        assert dining_price_range_for("luxury") == "upscale"
        assert price_levels_for("upscale") == [3, 4]

    def test_keywords_for_vibes_flattens_in_order(self):
        keywords = keywords_for_vibes(["Foodie", "cultural"])
        assert keywords == VIBE_KEYWORDS["foodie"] + VIBE_KEYWORDS["cultural"]

    def test_unknown_vibes_have_no_keywords(self):
        assert keywords_for_vibes(["mystery"]) == []
