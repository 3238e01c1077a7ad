"""
Itinerary contract.

Days reference full result objects taken from the provider result
collections, never copies invented by the aggregator.
"""

import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from tripsearch.shared.contracts.results import (
    ActivityResult,
    DiningResult,
    LodgingResult,
)


class TimeBlock(BaseModel):
    """Morning, afternoon or evening slot of a day."""

    activities: List[ActivityResult] = Field(default_factory=list)
    meal: Optional[DiningResult] = Field(default=None)


class SuggestedDay(BaseModel):
    """A single day in the suggested itinerary."""

    day_number: int = Field(ge=1, description="Day number (1-indexed)")
    date: datetime.date = Field(description="Calendar date of this day")
    title: str
    summary: str
    lodging: Optional[LodgingResult] = Field(default=None)
    morning: TimeBlock = Field(default_factory=TimeBlock)
    afternoon: TimeBlock = Field(default_factory=TimeBlock)
    evening: TimeBlock = Field(default_factory=TimeBlock)
    estimated_cost: float = Field(default=0, ge=0)
    currency: str = Field(default="USD")
    tips: List[str] = Field(default_factory=list)

    def blocks(self) -> List[TimeBlock]:
        """The three time blocks in chronological order."""
        return [self.morning, self.afternoon, self.evening]

    def activity_ids(self) -> List[str]:
        return [a.id for block in self.blocks() for a in block.activities]

    def meal_ids(self) -> List[str]:
        return [block.meal.id for block in self.blocks() if block.meal is not None]


class Itinerary(BaseModel):
    """Aggregator output: the days plus the lodging chosen for the stay."""

    days: List[SuggestedDay] = Field(default_factory=list)
    chosen_lodging: Optional[LodgingResult] = Field(default=None)
    fallback: bool = Field(
        default=False, description="True if composed without the generative service"
    )
