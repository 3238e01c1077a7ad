"""
Static vibe and budget reference tables.

These lookups feed the prompt builders and every deterministic fallback
(default plan, vibe scoring, fallback itinerary costs).
"""

from typing import Dict, List, Iterable


# Keywords associated with each vibe, used for prompt hints and scoring
VIBE_KEYWORDS: Dict[str, List[str]] = {
    "adventure": ["hiking", "outdoor", "extreme", "sports", "thrill", "adventure", "excursion", "tour"],
    "relaxation": ["spa", "beach", "wellness", "peaceful", "quiet", "relaxing", "retreat", "massage"],
    "cultural": ["museum", "history", "art", "heritage", "traditional", "local", "architecture", "historical"],
    "foodie": ["culinary", "food tour", "cooking class", "market", "restaurant", "tasting", "michelin", "local cuisine"],
    "nightlife": ["bar", "club", "nightclub", "cocktail", "live music", "entertainment", "rooftop", "lounge"],
    "romantic": ["couples", "romantic", "sunset", "candlelit", "intimate", "luxury", "scenic", "private"],
    "nature": ["park", "garden", "wildlife", "nature", "scenic", "landscape", "trail", "forest", "mountain"],
    "shopping": ["shopping", "mall", "boutique", "market", "souvenir", "fashion", "outlet", "vintage"],
    "wellness": ["yoga", "meditation", "spa", "fitness", "health", "detox", "wellness", "healing"],
    "photography": ["viewpoint", "scenic", "landmark", "instagram", "photogenic", "iconic", "panoramic", "sunrise"],
}

# Nightly lodging band and daily per-person spend by budget tier (USD)
BUDGET_RANGES: Dict[str, Dict] = {
    "budget": {"lodging": {"min": 30, "max": 100}, "daily": 100},
    "moderate": {"lodging": {"min": 100, "max": 250}, "daily": 200},
    "luxury": {"lodging": {"min": 250, "max": 1000}, "daily": 500},
}

DEFAULT_BUDGET_TIER = "moderate"

STAR_RATINGS: Dict[str, List[int]] = {
    "budget": [2, 3],
    "moderate": [3, 4],
    "luxury": [4, 5],
}

# Budget tier -> dining price range
DINING_PRICE_RANGES: Dict[str, str] = {
    "budget": "budget",
    "moderate": "moderate",
    "luxury": "upscale",
}

# Dining price range -> acceptable price levels
DINING_PRICE_LEVELS: Dict[str, List[int]] = {
    "budget": [1, 2],
    "moderate": [2, 3],
    "upscale": [3, 4],
}

# Approximate cost per person for one meal at each price level (USD)
MEAL_COST_BY_PRICE_LEVEL: Dict[int, float] = {
    1: 15.0,
    2: 30.0,
    3: 60.0,
    4: 100.0,
}

# Number of vibe keywords that become plan interests
MAX_INTERESTS = 10


def normalize_vibe(vibe: str) -> str:
    """Lower-case and strip a vibe tag for table lookups."""
    return vibe.strip().lower()


def keywords_for_vibe(vibe: str) -> List[str]:
    """Return the keyword list for a single vibe (empty if unknown)."""
    return VIBE_KEYWORDS.get(normalize_vibe(vibe), [])


def keywords_for_vibes(vibes: Iterable[str]) -> List[str]:
    """
    Flatten the keyword lists for several vibes.

    Order follows the vibe order, then the table order within each vibe.
    Duplicates are kept so the list mirrors the table exactly.

    Args:
        vibes: Vibe tags in any case

    Returns:
        Flattened keyword list
    """
    keywords: List[str] = []
    for vibe in vibes:
        keywords.extend(keywords_for_vibe(vibe))
    return keywords


def budget_info(tier: str) -> Dict:
    """Return the budget table entry for a tier, defaulting to moderate."""
    return BUDGET_RANGES.get(tier, BUDGET_RANGES[DEFAULT_BUDGET_TIER])


def star_ratings_for(tier: str) -> List[int]:
    return list(STAR_RATINGS.get(tier, STAR_RATINGS[DEFAULT_BUDGET_TIER]))


def dining_price_range_for(tier: str) -> str:
    return DINING_PRICE_RANGES.get(tier, DINING_PRICE_RANGES[DEFAULT_BUDGET_TIER])


def price_levels_for(price_range: str) -> List[int]:
    return list(DINING_PRICE_LEVELS.get(price_range, DINING_PRICE_LEVELS["moderate"]))
