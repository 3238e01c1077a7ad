"""
Tests for the itinerary aggregator and the fallback composer.

The fallback composer is a pure function of the plan and results, so its
distribution rules are tested exactly.
"""

from datetime import date

from tripsearch.aggregate.aggregator import ItineraryAggregator, choose_lodging
from tripsearch.aggregate.fallback import (
    FALLBACK_TIPS,
    compose_fallback_itinerary,
)
from tripsearch.aggregate.schemas import GeneratedDay, GeneratedItinerary, GeneratedTimeBlock
from tripsearch.config import SearchConfig
from tripsearch.tests.fakes import (
    FakeGenerator,
    all_result_ids,
    make_activity,
    make_dining,
    make_lodging,
    make_plan,
)


def _make_results():
    lodging = [
        make_lodging("lodging_1", vibe_score=80, price_per_night=150.0),
        make_lodging("lodging_2", vibe_score=60, price_per_night=90.0),
    ]
    activities = [
        make_activity("a1", "morning", vibe_score=90),
        make_activity("a2", "morning", vibe_score=85),
        make_activity("a3", "afternoon", vibe_score=80),
        make_activity("a4", "evening", vibe_score=75),
        make_activity("a5", "any", vibe_score=70),
    ]
    dining = [
        make_dining("d1", meal_types=("breakfast",), price_level=1),
        make_dining("d2", meal_types=("lunch",), price_level=2),
        make_dining("d3", meal_types=("dinner",), price_level=3),
        make_dining("d4", meal_types=("lunch", "dinner"), price_level=2),
    ]
    return lodging, activities, dining


def _assert_no_dangling_refs(days, activities, dining):
    activity_ids = all_result_ids(activities)
    dining_ids = all_result_ids(dining)
    for day in days:
        assert set(day.activity_ids()) <= activity_ids
        assert set(day.meal_ids()) <= dining_ids


def _ids(block):
    return [a.id for a in block.activities]


class TestFallbackComposer:
    """Tests for compose_fallback_itinerary."""

    def test_one_day_per_night_plus_one(self):
        lodging, activities, dining = _make_results()
        itinerary = compose_fallback_itinerary(make_plan(), lodging, activities, dining)

        assert itinerary.fallback is True
        assert [d.day_number for d in itinerary.days] == [1, 2, 3, 4]
        assert [d.date for d in itinerary.days] == [
            date(2026, 3, 1),
            date(2026, 3, 2),
            date(2026, 3, 3),
            date(2026, 3, 4),
        ]

    def test_activities_distributed_two_per_bucket_without_wraparound(self):
        lodging, activities, dining = _make_results()
        days = compose_fallback_itinerary(make_plan(), lodging, activities, dining).days

        # morning bucket: a1, a2, a5 ("any" joins every bucket)
        assert [_ids(d.morning) for d in days] == [["a1", "a2"], ["a5"], [], []]
        # afternoon bucket: a3, a5
        assert [_ids(d.afternoon) for d in days] == [["a3", "a5"], [], [], []]
        # evening bucket: a4, a5
        assert [_ids(d.evening) for d in days] == [["a4", "a5"], [], [], []]

    def test_meals_rotate_modulo_candidates(self):
        lodging, activities, dining = _make_results()
        days = compose_fallback_itinerary(make_plan(), lodging, activities, dining).days

        assert [d.morning.meal.id for d in days] == ["d1", "d1", "d1", "d1"]
        assert [d.afternoon.meal.id for d in days] == ["d2", "d4", "d2", "d4"]
        assert [d.evening.meal.id for d in days] == ["d3", "d4", "d3", "d4"]

    def test_missing_meal_type_leaves_block_without_meal(self):
        lodging, activities, _ = _make_results()
        dining = [make_dining("d9", meal_types=("dinner",))]
        days = compose_fallback_itinerary(make_plan(), lodging, activities, dining).days

        assert all(d.morning.meal is None for d in days)
        assert all(d.afternoon.meal is None for d in days)
        assert all(d.evening.meal.id == "d9" for d in days)

    def test_no_dangling_references(self):
        lodging, activities, dining = _make_results()
        days = compose_fallback_itinerary(make_plan(), lodging, activities, dining).days
        _assert_no_dangling_refs(days, activities, dining)

    def test_deterministic(self):
        lodging, activities, dining = _make_results()
        first = compose_fallback_itinerary(make_plan(), lodging, activities, dining)
        second = compose_fallback_itinerary(make_plan(), lodging, activities, dining)
        assert first.model_dump() == second.model_dump()

    def test_static_title_summary_and_tips(self):
        lodging, activities, dining = _make_results()
        day = compose_fallback_itinerary(make_plan(), lodging, activities, dining).days[0]

        assert day.title == "Day 1 in Lisbon"
        assert "Lisbon" in day.summary
        assert day.tips == FALLBACK_TIPS
        assert len(day.tips) == 2

    def test_top_lodging_chosen(self):
        lodging, activities, dining = _make_results()
        itinerary = compose_fallback_itinerary(make_plan(), lodging, activities, dining)

        assert itinerary.chosen_lodging.id == "lodging_1"
        assert all(d.lodging.id == "lodging_1" for d in itinerary.days)

    def test_last_day_has_no_lodging_cost(self):
        lodging, activities, dining = _make_results()
        days = compose_fallback_itinerary(make_plan(), lodging, activities, dining).days

        # Last day: no activities left, breakfast d1 ($15), lunch and dinner d4 ($30 each)
        assert days[-1].estimated_cost == 75.0
        # First day adds the nightly rate, six activity slots and three meals
        assert days[0].estimated_cost == 150.0 + 6 * 20.0 + 15.0 + 30.0 + 60.0

    def test_empty_activities(self):
        lodging, _, dining = _make_results()
        itinerary = compose_fallback_itinerary(make_plan(), lodging, [], dining)

        assert len(itinerary.days) == 4
        for day in itinerary.days:
            assert day.activity_ids() == []
            assert len(day.meal_ids()) == 3
            assert day.lodging is not None

    def test_no_results_at_all(self):
        itinerary = compose_fallback_itinerary(make_plan(), [], [], [])

        assert len(itinerary.days) == 4
        assert itinerary.chosen_lodging is None
        assert all(d.estimated_cost == 0 for d in itinerary.days)

    def test_same_day_trip(self):
        lodging, activities, dining = _make_results()
        plan = make_plan(end_date=date(2026, 3, 1))
        itinerary = compose_fallback_itinerary(plan, lodging, activities, dining)

        assert len(itinerary.days) == 1
        # No night, no lodging cost
        assert itinerary.days[0].estimated_cost == 6 * 20.0 + 15.0 + 30.0 + 60.0


class TestChooseLodging:
    """Tests for choose_lodging."""

    def test_nominated_id_wins(self):
        lodging, _, _ = _make_results()
        assert choose_lodging("lodging_2", lodging).id == "lodging_2"

    def test_invalid_nomination_defaults_to_top(self):
        lodging, _, _ = _make_results()
        assert choose_lodging("lodging_404", lodging).id == "lodging_1"
        assert choose_lodging(None, lodging).id == "lodging_1"

    def test_no_lodging(self):
        assert choose_lodging("lodging_1", []) is None


class TestItineraryAggregator:
    """Tests for ItineraryAggregator.aggregate."""

    def _generated(self):
        return GeneratedItinerary(
            top_lodging_id="lodging_2",
            days=[
                GeneratedDay(
                    day_number=2,
                    date="1999-01-01",
                    title="Belem day",
                    afternoon=GeneratedTimeBlock(activity_ids=["a3"], meal_id="d4"),
                ),
                GeneratedDay(
                    day_number=1,
                    title="Arrival",
                    summary="Settle in",
                    morning=GeneratedTimeBlock(activity_ids=["a1", "ghost", "a1"], meal_id="ghost"),
                    evening=GeneratedTimeBlock(activity_ids=["a4"], meal_id="d3"),
                    estimated_cost=-5,
                    tips=["Wear comfortable shoes"],
                ),
            ],
        )

    def test_generation_failure_uses_fallback(self):
        lodging, activities, dining = _make_results()
        itinerary = ItineraryAggregator(FakeGenerator()).aggregate(
            make_plan(), lodging, activities, dining
        )

        assert itinerary.fallback is True
        assert len(itinerary.days) == 4
        # Every bucket with candidates gets a meal every day
        for day in itinerary.days:
            assert all(block.meal is not None for block in day.blocks())

    def test_generated_days_resolved_by_id(self):
        lodging, activities, dining = _make_results()
        generator = FakeGenerator({GeneratedItinerary: self._generated()})
        itinerary = ItineraryAggregator(generator).aggregate(
            make_plan(), lodging, activities, dining
        )

        assert itinerary.fallback is False
        assert itinerary.chosen_lodging.id == "lodging_2"

        first, second = itinerary.days[0], itinerary.days[1]
        assert first.title == "Arrival"
        # Unknown and repeated ids are dropped
        assert _ids(first.morning) == ["a1"]
        # Unknown meal id is dropped; a missing one gets the first lunch place
        assert first.morning.meal is None
        assert first.afternoon.meal.id == "d2"
        assert first.evening.meal.id == "d3"
        assert first.estimated_cost == 0
        assert first.tips == ["Wear comfortable shoes"]

        assert second.title == "Belem day"
        assert _ids(second.afternoon) == ["a3"]
        assert second.afternoon.meal.id == "d4"

    def test_dates_and_numbers_follow_plan(self):
        lodging, activities, dining = _make_results()
        generator = FakeGenerator({GeneratedItinerary: self._generated()})
        itinerary = ItineraryAggregator(generator).aggregate(
            make_plan(), lodging, activities, dining
        )

        assert [d.day_number for d in itinerary.days] == [1, 2, 3, 4]
        assert itinerary.days[1].date == date(2026, 3, 2)

    def test_missing_days_filled(self):
        lodging, activities, dining = _make_results()
        generator = FakeGenerator({GeneratedItinerary: self._generated()})
        itinerary = ItineraryAggregator(generator).aggregate(
            make_plan(), lodging, activities, dining
        )

        assert len(itinerary.days) == 4
        assert itinerary.days[2].tips == FALLBACK_TIPS
        assert itinerary.days[3].date == date(2026, 3, 4)
        assert all(d.lodging.id == "lodging_2" for d in itinerary.days)

    def test_extra_days_dropped(self):
        lodging, activities, dining = _make_results()
        generated = GeneratedItinerary(
            days=[GeneratedDay(day_number=n, title=f"Day {n}") for n in range(1, 8)]
        )
        itinerary = ItineraryAggregator(FakeGenerator({GeneratedItinerary: generated})).aggregate(
            make_plan(), lodging, activities, dining
        )

        assert len(itinerary.days) == 4
        assert itinerary.chosen_lodging.id == "lodging_1"

    def test_unknown_meal_id_is_not_replaced(self):
        lodging, activities, _ = _make_results()
        dining = [make_dining("d1", meal_types=("breakfast",))]
        generated = GeneratedItinerary(
            days=[GeneratedDay(day_number=1, morning=GeneratedTimeBlock(meal_id="ghost"))]
        )
        itinerary = ItineraryAggregator(FakeGenerator({GeneratedItinerary: generated})).aggregate(
            make_plan(), lodging, activities, dining
        )

        assert itinerary.days[0].morning.meal is None
        # The composed days still use the breakfast place
        assert itinerary.days[1].morning.meal.id == "d1"

    def test_no_dangling_references(self):
        lodging, activities, dining = _make_results()
        generator = FakeGenerator({GeneratedItinerary: self._generated()})
        itinerary = ItineraryAggregator(generator).aggregate(
            make_plan(), lodging, activities, dining
        )
        _assert_no_dangling_refs(itinerary.days, activities, dining)

    def test_prompt_summarizes_top_items_only(self):
        lodging, activities, dining = _make_results()
        generator = FakeGenerator()
        config = SearchConfig(aggregate_top_activity=2)
        ItineraryAggregator(generator, config).aggregate(make_plan(), lodging, activities, dining)

        [instruction] = generator.instructions_for(GeneratedItinerary)
        assert '"a1"' in instruction and '"a2"' in instruction
        assert '"a5"' not in instruction
        assert "4-day itinerary for Lisbon" in instruction
