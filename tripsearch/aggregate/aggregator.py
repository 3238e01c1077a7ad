"""
Itinerary aggregator.

Folds the plan and the three result lists into a day-by-day itinerary.
The generative service arranges the top results by id; the aggregator
resolves ids back to result objects and drops anything that does not
resolve. If generation fails, the deterministic fallback composer builds
the whole itinerary instead.
"""

import logging
from datetime import timedelta
from typing import Dict, List, Optional

from tripsearch.aggregate.fallback import (
    BLOCK_MEAL_TYPES,
    FallbackComposer,
    compose_fallback_itinerary,
)
from tripsearch.aggregate.prompts import AGGREGATE_SYSTEM_PROMPT, build_aggregate_prompt
from tripsearch.aggregate.schemas import (
    GeneratedDay,
    GeneratedItinerary,
    GeneratedTimeBlock,
)
from tripsearch.config import SearchConfig, DEFAULT_CONFIG
from tripsearch.search.providers.base import rank_by_vibe_score
from tripsearch.shared.contracts.itinerary import Itinerary, SuggestedDay, TimeBlock
from tripsearch.shared.contracts.results import (
    ActivityResult,
    DiningResult,
    LodgingResult,
)
from tripsearch.shared.contracts.search_plan import SearchPlan
from tripsearch.shared.llm.client import GenerativeService


logger = logging.getLogger(__name__)


def choose_lodging(
    nominated_id: Optional[str],
    lodging: List[LodgingResult],
) -> Optional[LodgingResult]:
    """Nominated lodging if it resolves, otherwise the top-ranked one."""
    if nominated_id:
        for item in lodging:
            if item.id == nominated_id:
                return item
    return lodging[0] if lodging else None


class _ResultIndex:
    """Id lookup over the provider result collections."""

    def __init__(self, activities: List[ActivityResult], dining: List[DiningResult]):
        self.activities: Dict[str, ActivityResult] = {a.id: a for a in activities}
        self.dining: Dict[str, DiningResult] = {d.id: d for d in dining}
        self.dining_list = dining

    def resolve_activities(self, ids: List[str]) -> List[ActivityResult]:
        resolved: List[ActivityResult] = []
        seen = set()
        for activity_id in ids:
            activity = self.activities.get(activity_id)
            if activity is None or activity_id in seen:
                continue
            seen.add(activity_id)
            resolved.append(activity)
        return resolved

    def resolve_meal(self, meal_id: Optional[str], block: str) -> Optional[DiningResult]:
        """
        Resolve a meal id. An unknown id is dropped; only a missing id falls
        back to the first restaurant serving the block's meal type.
        """
        if meal_id:
            return self.dining.get(meal_id)
        meal_type = BLOCK_MEAL_TYPES[block]
        for restaurant in self.dining_list:
            if meal_type in restaurant.meal_types:
                return restaurant
        return None

    def resolve_block(self, generated: GeneratedTimeBlock, block: str) -> TimeBlock:
        return TimeBlock(
            activities=self.resolve_activities(generated.activity_ids),
            meal=self.resolve_meal(generated.meal_id, block),
        )


class ItineraryAggregator:
    """Builds the day-by-day itinerary from all search results."""

    def __init__(self, generator: GenerativeService, config: Optional[SearchConfig] = None):
        self.generator = generator
        self.config = config or DEFAULT_CONFIG

    def aggregate(
        self,
        plan: SearchPlan,
        lodging: List[LodgingResult],
        activities: List[ActivityResult],
        dining: List[DiningResult],
        search_id: str = "unknown",
    ) -> Itinerary:
        """
        Aggregate results into an itinerary with ``nights + 1`` days.

        Never raises for generation problems; those switch to the
        fallback composer.
        """
        _log = f"[search={search_id}] [stage=aggregate] "
        logger.info(
            f"{_log}Aggregating | days={plan.day_count}, lodging={len(lodging)}, "
            f"activity={len(activities)}, dining={len(dining)}"
        )

        prompt = build_aggregate_prompt(
            plan,
            rank_by_vibe_score(lodging)[: self.config.aggregate_top_lodging],
            rank_by_vibe_score(activities)[: self.config.aggregate_top_activity],
            rank_by_vibe_score(dining)[: self.config.aggregate_top_dining],
        )

        try:
            generated = self.generator.generate(
                prompt,
                GeneratedItinerary,
                system=AGGREGATE_SYSTEM_PROMPT,
            )
        except Exception as e:
            logger.exception(f"{_log}Aggregation failed, composing fallback itinerary: {e}")
            return compose_fallback_itinerary(plan, lodging, activities, dining)

        itinerary = self._build_itinerary(plan, generated, lodging, activities, dining, _log)
        logger.info(
            f"{_log}Itinerary built | days={len(itinerary.days)}, "
            f"lodging={itinerary.chosen_lodging.name if itinerary.chosen_lodging else 'none'}"
        )
        return itinerary

    def _build_itinerary(
        self,
        plan: SearchPlan,
        generated: GeneratedItinerary,
        lodging: List[LodgingResult],
        activities: List[ActivityResult],
        dining: List[DiningResult],
        _log: str,
    ) -> Itinerary:
        chosen = choose_lodging(generated.top_lodging_id, lodging)
        index = _ResultIndex(activities, dining)
        composer = FallbackComposer(plan, chosen, activities, dining)

        generated_days = sorted(generated.days, key=lambda d: d.day_number)
        days: List[SuggestedDay] = []
        filled = 0
        for day_index in range(plan.day_count):
            if day_index < len(generated_days):
                days.append(
                    self._resolve_day(plan, day_index, generated_days[day_index], chosen, index)
                )
            else:
                days.append(composer.compose_day(day_index))
                filled += 1

        if filled or len(generated_days) > plan.day_count:
            logger.warning(
                f"{_log}Generated {len(generated_days)} days for a {plan.day_count}-day trip; "
                f"filled={filled}"
            )

        return Itinerary(days=days, chosen_lodging=chosen, fallback=False)

    def _resolve_day(
        self,
        plan: SearchPlan,
        day_index: int,
        generated: GeneratedDay,
        chosen: Optional[LodgingResult],
        index: _ResultIndex,
    ) -> SuggestedDay:
        # Numbering and dates follow the plan, not the generated output
        return SuggestedDay(
            day_number=day_index + 1,
            date=plan.dates.start + timedelta(days=day_index),
            title=generated.title or f"Day {day_index + 1} in {plan.destination}",
            summary=generated.summary,
            lodging=chosen,
            morning=index.resolve_block(generated.morning, "morning"),
            afternoon=index.resolve_block(generated.afternoon, "afternoon"),
            evening=index.resolve_block(generated.evening, "evening"),
            estimated_cost=max(0.0, generated.estimated_cost),
            currency=generated.currency or "USD",
            tips=list(generated.tips),
        )
