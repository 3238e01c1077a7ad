"""
Search providers and their coordinator.

The lodging, activity and dining providers turn a search plan into
ranked result lists; the coordinator runs them concurrently.
"""

from tripsearch.search.coordinator import SearchCoordinator
from tripsearch.search.providers import (
    SearchProvider,
    LodgingProvider,
    ActivityProvider,
    DiningProvider,
)

__all__ = [
    "SearchCoordinator",
    "SearchProvider",
    "LodgingProvider",
    "ActivityProvider",
    "DiningProvider",
]
