"""
Prompt templates and builders for the itinerary aggregator.
"""

import json
from typing import List

from tripsearch.shared.contracts.results import (
    ActivityResult,
    DiningResult,
    LodgingResult,
)
from tripsearch.shared.contracts.search_plan import SearchPlan


AGGREGATE_SYSTEM_PROMPT = """You are a travel itinerary planner. Your job is to take search results (lodging, activities, dining) and organize them into a coherent day-by-day itinerary.

Consider:
1. Geographic proximity - group nearby activities together
2. Time of day - morning activities before afternoon ones
3. Meal timing - breakfast spots for morning, lunch for afternoon, dinner for evening
4. Pacing - don't overload each day
5. Vibe scores - prioritize higher-scoring options
6. Practical logistics - opening hours, booking requirements

Output should reference items by their IDs only and organize them into a sensible flow."""


AGGREGATE_USER_PROMPT_TEMPLATE = """Create a {day_count}-day itinerary for {destination} using these search results.

**Trip Dates:** {start} to {end}
**Vibes:** {vibes}
**Pace:** {pace}

**Available Lodging (pick the best match):**
{lodging}

**Available Activities (assign to days by best time):**
{activities}

**Available Dining (assign breakfast/lunch/dinner):**
{dining}

Create an itinerary that:
1. Picks the best lodging based on vibeScore and value
2. Spreads activities across days (2-4 per day based on pace)
3. Assigns appropriate meals to each time slot
4. Gives each day a fun title and summary
5. Estimates daily cost
6. Includes helpful tips

Reference items by their IDs. Morning activities should be morning/any time, afternoon activities in afternoon, etc."""


def summarize_lodging(lodging: List[LodgingResult]) -> List[dict]:
    return [
        {
            "id": h.id,
            "name": h.name,
            "price": h.price_per_night,
            "rating": h.user_rating,
            "vibeScore": h.vibe_score,
            "neighborhood": h.location.neighborhood or h.location.name,
        }
        for h in lodging
    ]


def summarize_activities(activities: List[ActivityResult]) -> List[dict]:
    return [
        {
            "id": a.id,
            "name": a.name,
            "category": a.category,
            "duration": a.duration,
            "price": a.price,
            "bestTime": a.best_time_of_day,
            "vibeScore": a.vibe_score,
            "bookingRequired": a.booking_required,
        }
        for a in activities
    ]


def summarize_dining(dining: List[DiningResult]) -> List[dict]:
    return [
        {
            "id": d.id,
            "name": d.name,
            "cuisine": ", ".join(d.cuisine_types),
            "priceLevel": d.price_level,
            "mealTypes": list(d.meal_types),
            "vibeScore": d.vibe_score,
        }
        for d in dining
    ]


def build_aggregate_prompt(
    plan: SearchPlan,
    lodging: List[LodgingResult],
    activities: List[ActivityResult],
    dining: List[DiningResult],
) -> str:
    """
    Build the aggregation instruction from condensed result summaries.

    Callers pass only the top-N items per category.
    """
    return AGGREGATE_USER_PROMPT_TEMPLATE.format(
        day_count=plan.day_count,
        destination=plan.destination,
        start=plan.dates.start.isoformat(),
        end=plan.dates.end.isoformat(),
        vibes=", ".join(plan.vibe_interpretation.vibes) or "none specified",
        pace=plan.activity_criteria.pace_preference,
        lodging=json.dumps(summarize_lodging(lodging), indent=2),
        activities=json.dumps(summarize_activities(activities), indent=2),
        dining=json.dumps(summarize_dining(dining), indent=2),
    )
