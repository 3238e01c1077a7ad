"""Lodging, activity and dining search providers."""

from tripsearch.search.providers.base import SearchProvider
from tripsearch.search.providers.lodging import LodgingProvider
from tripsearch.search.providers.activity import ActivityProvider
from tripsearch.search.providers.dining import DiningProvider

__all__ = ["SearchProvider", "LodgingProvider", "ActivityProvider", "DiningProvider"]
