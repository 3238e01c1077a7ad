"""
Itinerary aggregator.

Combines the search plan and all provider results into a day-by-day
itinerary, with a deterministic composer for when generation fails.
"""

from tripsearch.aggregate.aggregator import ItineraryAggregator
from tripsearch.aggregate.fallback import compose_fallback_itinerary

__all__ = ["ItineraryAggregator", "compose_fallback_itinerary"]
