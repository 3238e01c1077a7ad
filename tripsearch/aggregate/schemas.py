"""
Generation schemas for the itinerary aggregator.

The generative service references search results by id only; the
aggregator resolves ids back to full result objects.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class GeneratedTimeBlock(BaseModel):
    activity_ids: List[str] = Field(default_factory=list)
    meal_id: Optional[str] = Field(default=None)


class GeneratedDay(BaseModel):
    day_number: int = Field(description="Day number (1-indexed)")
    date: Optional[str] = Field(default=None, description="YYYY-MM-DD")
    title: str = Field(default="")
    summary: str = Field(default="")
    morning: GeneratedTimeBlock = Field(default_factory=GeneratedTimeBlock)
    afternoon: GeneratedTimeBlock = Field(default_factory=GeneratedTimeBlock)
    evening: GeneratedTimeBlock = Field(default_factory=GeneratedTimeBlock)
    estimated_cost: float = Field(default=0)
    currency: str = Field(default="USD")
    tips: List[str] = Field(default_factory=list)


class GeneratedItinerary(BaseModel):
    days: List[GeneratedDay] = Field(default_factory=list)
    top_lodging_id: Optional[str] = Field(
        default=None, description="Id of the lodging chosen for the whole stay"
    )
