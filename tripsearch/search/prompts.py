"""
Prompt templates and builders for the search providers.

Each builder reads only the plan's criteria block for its category plus
the shared vibe interpretation.
"""

from tripsearch.shared.contracts.search_plan import SearchPlan
from tripsearch.shared.reference import price_levels_for


# =============================================================================
# Lodging
# =============================================================================

LODGING_SYSTEM_PROMPT = """You are a hotel booking expert. Generate realistic lodging recommendations for travelers.

For each property, provide:
1. Real hotel names that exist at the destination (use actual hotel names)
2. Accurate star ratings and typical user ratings
3. Realistic nightly pricing based on star rating and location
4. Common amenities for that hotel tier
5. Location in a popular neighborhood
6. How well it matches the traveler's preferences

Use realistic affiliate URLs in format:
- https://booking.com/hotel/[country-code]/[hotel-slug]
- https://hotels.com/ho[id]/[hotel-name]

Price ranges by star rating (per night):
- 2-star: $40-80
- 3-star: $80-150
- 4-star: $150-300
- 5-star: $300-800+"""

LODGING_USER_PROMPT_TEMPLATE = """Generate {count} real lodging recommendations for {destination}.

**Stay Details:**
- {nights} nights ({start} to {end})
- Price range: ${price_min} - ${price_max} per night
- Preferred star ratings: {star_ratings}-star
- Desired amenities: {amenities}
- Preferred neighborhoods: {neighborhoods}

**Vibes to match:** {vibes}
**Avoid:** {avoid}

Generate lodging matching these criteria:
- Include actual hotel names that exist in {destination}
- Calculate total price (nights x nightly rate)
- Score each property 0-100 on how well it matches the traveler's vibes
- List in vibe_match only vibes from the list above
- Include a mix of star ratings within the price range

For vibes like:
- "Romantic" -> boutique hotels, luxury properties
- "Adventure" -> hotels near outdoor activities
- "Cultural" -> historic hotels, local character
- "Relaxation" -> spa hotels, beach resorts"""


def build_lodging_prompt(plan: SearchPlan, count: int) -> str:
    criteria = plan.lodging_criteria
    return LODGING_USER_PROMPT_TEMPLATE.format(
        count=count,
        destination=plan.destination,
        nights=plan.dates.nights,
        start=plan.dates.start.isoformat(),
        end=plan.dates.end.isoformat(),
        price_min=criteria.price_range.min,
        price_max=criteria.price_range.max,
        star_ratings=", ".join(str(s) for s in criteria.star_ratings) or "any",
        amenities=", ".join(criteria.amenities) or "wifi, breakfast",
        neighborhoods=", ".join(criteria.neighborhoods) or "central/popular areas",
        vibes=", ".join(plan.vibe_interpretation.vibes) or "none specified",
        avoid=", ".join(plan.vibe_interpretation.avoid_keywords) or "nothing specific",
    )


# =============================================================================
# Activities
# =============================================================================

ACTIVITY_SYSTEM_PROMPT = """You are a travel activities expert. Generate realistic, bookable activities and attractions for the destination.

For each activity, provide:
1. Real attraction/tour names that exist at the destination
2. Accurate descriptions of what visitors will experience
3. Realistic pricing (use Viator/GetYourGuide as reference)
4. Appropriate duration estimates in minutes
5. Best time of day to visit (morning, afternoon, evening or any)
6. How well it matches the traveler's vibes

Generate diverse options across categories like:
- Sightseeing & landmarks
- Tours (walking, food, history)
- Museums & cultural sites
- Outdoor activities
- Unique local experiences

Use realistic affiliate URLs (format: https://viator.com/tour/[destination-slug] or https://getyourguide.com/[destination]/[activity])"""

ACTIVITY_USER_PROMPT_TEMPLATE = """Generate {count} bookable activities and attractions for {destination}.

**Trip Details:**
- Duration: {nights} nights
- Pace: {pace}
- Categories: {categories}
- Must-see: {must_see}
- Interests: {interests}

**Vibes to match:** {vibes}
**Keywords to incorporate:** {keywords}
**Avoid:** {avoid}

Generate a diverse mix of:
- 3-4 iconic must-see attractions
- 3-4 guided tours (walking, food, cultural)
- 2-3 outdoor/nature activities
- 2-3 unique local experiences
- 2-3 evening activities

Score each activity 0-100 on how well it matches the traveler's vibes.
List in vibe_match only vibes from the list above."""


def build_activity_prompt(plan: SearchPlan, count: int) -> str:
    criteria = plan.activity_criteria
    vibe_info = plan.vibe_interpretation
    return ACTIVITY_USER_PROMPT_TEMPLATE.format(
        count=count,
        destination=plan.destination,
        nights=plan.dates.nights,
        pace=criteria.pace_preference,
        categories=", ".join(criteria.categories) or "varied",
        must_see=", ".join(criteria.must_see) or "popular attractions",
        interests=", ".join(criteria.interests) or "general sightseeing",
        vibes=", ".join(vibe_info.vibes) or "none specified",
        keywords=", ".join(vibe_info.search_keywords[:10]) or "none",
        avoid=", ".join(vibe_info.avoid_keywords) or "nothing specific",
    )


# =============================================================================
# Dining
# =============================================================================

DINING_SYSTEM_PROMPT = """You are a food and restaurant expert. Generate realistic restaurant recommendations for travelers.

For each restaurant, provide:
1. Real restaurant names that exist at the destination (or realistic-sounding names)
2. Accurate cuisine types and pricing
3. Typical ratings and review counts
4. Which meals they're best for (breakfast, lunch, dinner)
5. How well the atmosphere matches the traveler's vibes

Price levels:
- 1 ($): Budget, ~$10-20/person
- 2 ($$): Moderate, ~$20-40/person
- 3 ($$$): Upscale, ~$40-80/person
- 4 ($$$$): Fine dining, ~$80+/person

Include common dietary options if applicable (vegetarian, vegan, gluten-free, halal, kosher).

For reservation URLs, use format: https://opentable.com/r/[restaurant-slug] or leave empty if not needed."""

DINING_USER_PROMPT_TEMPLATE = """Generate {count} restaurant recommendations for {destination}.

**Dining Preferences:**
- {days} days of dining
- Price range: {price_range} (levels {price_levels})
- Cuisine interests: {cuisines}
- Dietary needs: {dietary}
- Meal priorities: {meal_priorities}

**Vibes to match:** {vibes}
**Avoid:** {avoid}

Generate a diverse mix of:
- 3-4 breakfast/brunch spots
- 4-5 lunch options
- 4-5 dinner restaurants
- Include both local favorites and hidden gems
- Mix of price levels within the range

For vibes like:
- "Foodie" -> renowned restaurants, food markets, unique experiences
- "Romantic" -> intimate settings, fine dining, scenic views
- "Cultural" -> traditional local cuisine, historic restaurants
- "Nightlife" -> late-night spots, rooftop bars with food
- "Wellness" -> healthy options, organic, farm-to-table

Score each restaurant 0-100 on how well it matches the traveler's vibes.
List in vibe_match only vibes from the list above."""


def build_dining_prompt(plan: SearchPlan, count: int) -> str:
    criteria = plan.dining_criteria
    levels = price_levels_for(criteria.price_range)
    return DINING_USER_PROMPT_TEMPLATE.format(
        count=count,
        destination=plan.destination,
        days=plan.day_count,
        price_range=criteria.price_range,
        price_levels="-".join(str(level) for level in levels),
        cuisines=", ".join(criteria.cuisine_types) or "local cuisine",
        dietary=", ".join(criteria.dietary_needs) or "none specified",
        meal_priorities=", ".join(criteria.meal_priorities) or "breakfast, lunch, dinner",
        vibes=", ".join(plan.vibe_interpretation.vibes) or "none specified",
        avoid=", ".join(plan.vibe_interpretation.avoid_keywords) or "nothing specific",
    )
