"""
Plan deriver.

Turns a ``SearchInput`` into a ``SearchPlan`` with one generative call.
Any generation failure falls back to a deterministic plan built from the
reference tables, so ``derive_plan`` never raises.
"""

import logging

from tripsearch.plan.prompts import PLAN_SYSTEM_PROMPT, build_plan_prompt
from tripsearch.shared.contracts.search_input import SearchInput
from tripsearch.shared.contracts.search_plan import (
    ActivityCriteria,
    DiningCriteria,
    LodgingCriteria,
    PlanDates,
    PriceRange,
    SearchPlan,
    VibeInterpretation,
)
from tripsearch.shared.llm.client import GenerativeService
from tripsearch.shared.reference import (
    MAX_INTERESTS,
    budget_info,
    dining_price_range_for,
    keywords_for_vibes,
    star_ratings_for,
)


logger = logging.getLogger(__name__)


def plan_dates_for(search_input: SearchInput) -> PlanDates:
    return PlanDates(
        start=search_input.start_date,
        end=search_input.end_date,
        nights=search_input.nights,
    )


def build_default_plan(search_input: SearchInput) -> SearchPlan:
    """
    Build the deterministic plan used when generation fails.

    Price band and star ratings come straight from the budget table,
    activity interests are the first vibe keywords, pace is moderate and
    there are no avoid keywords.

    Args:
        search_input: The user's trip request

    Returns:
        A usable plan flagged with ``fallback=True``
    """
    budget = budget_info(search_input.budget)
    vibe_keywords = keywords_for_vibes(search_input.vibes)

    return SearchPlan(
        destination=search_input.destination,
        country="",
        dates=plan_dates_for(search_input),
        search_priorities=["lodging", "activity", "dining"],
        lodging_criteria=LodgingCriteria(
            price_range=PriceRange(**budget["lodging"]),
            star_ratings=star_ratings_for(search_input.budget),
            amenities=["wifi", "breakfast"],
            neighborhoods=[],
        ),
        activity_criteria=ActivityCriteria(
            categories=list(search_input.vibes),
            pace_preference="moderate",
            must_see=[],
            interests=vibe_keywords[:MAX_INTERESTS],
        ),
        dining_criteria=DiningCriteria(
            cuisine_types=["local"],
            price_range=dining_price_range_for(search_input.budget),
            dietary_needs=[],
            meal_priorities=["dinner", "lunch", "breakfast"],
        ),
        vibe_interpretation=VibeInterpretation(
            vibes=list(search_input.vibes),
            search_keywords=vibe_keywords,
            avoid_keywords=[],
        ),
        fallback=True,
    )


class PlanDeriver:
    """Derives the shared search plan for a trip request."""

    def __init__(self, generator: GenerativeService):
        self.generator = generator

    def derive_plan(self, search_input: SearchInput, search_id: str = "unknown") -> SearchPlan:
        """
        Derive a search plan, falling back to the default plan on failure.

        Destination and dates are always taken from the input, whatever the
        generated plan says.
        """
        _log = f"[search={search_id}] [stage=plan] "
        logger.info(
            f"{_log}Deriving plan | destination={search_input.destination}, "
            f"nights={search_input.nights}, vibes={search_input.vibes}, "
            f"budget={search_input.budget}"
        )

        try:
            plan = self.generator.generate(
                build_plan_prompt(search_input),
                SearchPlan,
                system=PLAN_SYSTEM_PROMPT,
            )
        except Exception as e:
            logger.exception(f"{_log}Plan generation failed, using default plan: {e}")
            return build_default_plan(search_input)

        plan = plan.model_copy(
            update={
                "destination": search_input.destination,
                "dates": plan_dates_for(search_input),
                "fallback": False,
            }
        )
        logger.info(
            f"{_log}Plan derived | country={plan.country or 'N/A'}, "
            f"priorities={plan.search_priorities}, "
            f"vibes={plan.vibe_interpretation.vibes}"
        )
        return plan
