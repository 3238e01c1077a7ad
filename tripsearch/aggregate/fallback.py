"""
Fallback itinerary composer.

Builds a day-by-day itinerary from the search results without any
generative call. Given the same plan and results it always produces the
same days, and every activity or meal it places comes from the input
lists.

Distribution rules:
- Activities are bucketed by best time of day; "any" joins every bucket.
- Each bucket hands out two activities per day starting at offset
  ``day_index * 2``. A drained bucket leaves later days empty.
- Meals rotate through each meal type's candidates with
  ``candidates[day_index % len(candidates)]``.
"""

from datetime import timedelta
from typing import Dict, List, Optional

from tripsearch.shared.contracts.itinerary import Itinerary, SuggestedDay, TimeBlock
from tripsearch.shared.contracts.results import (
    ActivityResult,
    DiningResult,
    LodgingResult,
)
from tripsearch.shared.contracts.search_plan import SearchPlan
from tripsearch.shared.reference import MEAL_COST_BY_PRICE_LEVEL


TIME_BLOCKS = ("morning", "afternoon", "evening")

BLOCK_MEAL_TYPES: Dict[str, str] = {
    "morning": "breakfast",
    "afternoon": "lunch",
    "evening": "dinner",
}

ACTIVITIES_PER_BLOCK = 2

FALLBACK_TIPS = [
    "Book popular attractions in advance",
    "Check opening hours before visiting",
]

DEFAULT_CURRENCY = "USD"


def bucket_activities(activities: List[ActivityResult]) -> Dict[str, List[ActivityResult]]:
    """Group activities by time block, keeping input order within each."""
    return {
        block: [a for a in activities if a.best_time_of_day in (block, "any")]
        for block in TIME_BLOCKS
    }


def bucket_meals(dining: List[DiningResult]) -> Dict[str, List[DiningResult]]:
    """Group restaurants by the meal type each time block needs."""
    return {
        block: [d for d in dining if meal_type in d.meal_types]
        for block, meal_type in BLOCK_MEAL_TYPES.items()
    }


def activities_for_day(bucket: List[ActivityResult], day_index: int) -> List[ActivityResult]:
    start = day_index * ACTIVITIES_PER_BLOCK
    return bucket[start:start + ACTIVITIES_PER_BLOCK]


def meal_for_day(candidates: List[DiningResult], day_index: int) -> Optional[DiningResult]:
    if not candidates:
        return None
    return candidates[day_index % len(candidates)]


def estimate_day_cost(
    blocks: Dict[str, TimeBlock],
    lodging: Optional[LodgingResult],
    includes_night: bool,
) -> float:
    """
    Rough per-person cost for one day.

    Lodging is counted only on days followed by a night; the last day of
    the trip has none.
    """
    cost = 0.0
    if lodging is not None and includes_night:
        cost += lodging.price_per_night
    for block in blocks.values():
        cost += sum(a.price for a in block.activities)
        if block.meal is not None:
            cost += MEAL_COST_BY_PRICE_LEVEL.get(block.meal.price_level, 0.0)
    return round(cost, 2)


class FallbackComposer:
    """
    Deterministic day composer over one set of search results.

    Buckets are computed once so single days can be composed on demand,
    e.g. to fill days the generative aggregator left out.
    """

    def __init__(
        self,
        plan: SearchPlan,
        lodging: Optional[LodgingResult],
        activities: List[ActivityResult],
        dining: List[DiningResult],
    ):
        self.plan = plan
        self.lodging = lodging
        self.activity_buckets = bucket_activities(activities)
        self.meal_buckets = bucket_meals(dining)

    def compose_day(self, day_index: int) -> SuggestedDay:
        """Compose the day at ``day_index`` (0-based)."""
        blocks = {
            block: TimeBlock(
                activities=activities_for_day(self.activity_buckets[block], day_index),
                meal=meal_for_day(self.meal_buckets[block], day_index),
            )
            for block in TIME_BLOCKS
        }
        destination = self.plan.destination

        return SuggestedDay(
            day_number=day_index + 1,
            date=self.plan.dates.start + timedelta(days=day_index),
            title=f"Day {day_index + 1} in {destination}",
            summary=f"Explore {destination} with a mix of activities and dining.",
            lodging=self.lodging,
            morning=blocks["morning"],
            afternoon=blocks["afternoon"],
            evening=blocks["evening"],
            estimated_cost=estimate_day_cost(
                blocks, self.lodging, includes_night=day_index < self.plan.dates.nights
            ),
            currency=self.lodging.currency if self.lodging else DEFAULT_CURRENCY,
            tips=list(FALLBACK_TIPS),
        )

    def compose(self) -> List[SuggestedDay]:
        return [self.compose_day(i) for i in range(self.plan.day_count)]


def compose_fallback_itinerary(
    plan: SearchPlan,
    lodging: List[LodgingResult],
    activities: List[ActivityResult],
    dining: List[DiningResult],
) -> Itinerary:
    """
    Compose a complete itinerary without the generative service.

    Args:
        plan: The search plan (dates drive the day count)
        lodging: Lodging results, best first
        activities: Activity results, best first
        dining: Dining results, best first

    Returns:
        Itinerary with ``nights + 1`` days and ``fallback=True``
    """
    chosen = lodging[0] if lodging else None
    composer = FallbackComposer(plan, chosen, activities, dining)
    return Itinerary(days=composer.compose(), chosen_lodging=chosen, fallback=True)
