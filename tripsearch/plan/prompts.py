"""
Prompt templates and builders for the plan deriver.
"""

from tripsearch.shared.contracts.search_input import SearchInput
from tripsearch.shared.reference import budget_info, keywords_for_vibes


PLAN_SYSTEM_PROMPT = """You are a travel planning expert. Your job is to analyze user travel preferences and create a detailed search plan that will be used by specialized agents to find lodging, activities, and dining options.

Consider:
1. The destination and what it's known for
2. Travel dates and trip duration
3. Who is traveling (solo, couple, family, etc.)
4. Their selected "vibes" (adventure, relaxation, cultural, etc.)
5. Budget constraints

Output a comprehensive search plan with specific criteria for lodging, activities, and dining that match the user's preferences."""


PLAN_USER_PROMPT_TEMPLATE = """Create a search plan for this trip:

**Destination:** {destination}
**Dates:** {start_date} to {end_date} ({nights} nights)
**Travelers:** {travelers} people, {traveler_type} travel
**Vibes:** {vibes}
**Budget:** {budget}

Budget guidelines:
- Lodging: ${lodging_min} - ${lodging_max} per night
- Daily activities/food: ~${daily} per person

Keywords associated with their vibes: {keywords}

Create a detailed search plan with:
1. Best neighborhoods to stay in {destination}
2. Lodging amenities that match their vibes
3. Activity categories and must-see attractions
4. Cuisine types and dining style preferences
5. Keywords to search for and avoid based on their preferences"""


def build_plan_prompt(search_input: SearchInput) -> str:
    """
    Build the plan instruction for a search input.

    Args:
        search_input: The user's trip request

    Returns:
        Formatted instruction string
    """
    budget = budget_info(search_input.budget)
    keywords = keywords_for_vibes(search_input.vibes)

    return PLAN_USER_PROMPT_TEMPLATE.format(
        destination=search_input.destination,
        start_date=search_input.start_date.isoformat(),
        end_date=search_input.end_date.isoformat(),
        nights=search_input.nights,
        travelers=search_input.travelers,
        traveler_type=search_input.traveler_type or "general",
        vibes=", ".join(search_input.vibes) or "none specified",
        budget=search_input.budget,
        lodging_min=budget["lodging"]["min"],
        lodging_max=budget["lodging"]["max"],
        daily=budget["daily"],
        keywords=", ".join(keywords) or "none",
    )
