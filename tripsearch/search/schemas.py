"""
Generation schemas for the search providers.

The generative service returns an object wrapping the candidate list;
ids are assigned afterwards by the provider.
"""

from typing import List

from pydantic import BaseModel, Field

from tripsearch.shared.contracts.results import (
    ActivityCandidate,
    DiningCandidate,
    LodgingCandidate,
)


class LodgingList(BaseModel):
    lodging: List[LodgingCandidate] = Field(default_factory=list)


class ActivityList(BaseModel):
    activities: List[ActivityCandidate] = Field(default_factory=list)


class DiningList(BaseModel):
    restaurants: List[DiningCandidate] = Field(default_factory=list)
