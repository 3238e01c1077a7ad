"""
Search input contract.

The raw trip request as submitted by the user. Immutable once a search
has started.
"""

from datetime import date
from typing import List, Optional, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


TravelerType = Literal["solo", "couple", "family", "friends", "business"]
BudgetTier = Literal["budget", "moderate", "luxury"]


class SearchInput(BaseModel):
    """A user's trip search request."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "destination": "Lisbon",
                "start_date": "2026-03-01",
                "end_date": "2026-03-04",
                "travelers": 2,
                "traveler_type": "couple",
                "vibes": ["foodie", "cultural"],
                "budget": "moderate",
            }
        },
    )

    destination: str = Field(min_length=1, description="Trip destination")
    start_date: date = Field(description="First day of the trip")
    end_date: date = Field(description="Last day of the trip (>= start_date)")
    travelers: int = Field(default=2, ge=1, description="Number of travelers")
    traveler_type: Optional[TravelerType] = Field(
        default=None, description="Who is traveling"
    )
    vibes: List[str] = Field(
        default_factory=list, description="Free-text preference tags"
    )
    budget: BudgetTier = Field(default="moderate", description="Budget tier")
    user_id: Optional[str] = Field(default=None, description="Requesting user")

    @model_validator(mode="after")
    def _check_date_range(self) -> "SearchInput":
        if self.end_date < self.start_date:
            raise ValueError(
                f"end_date {self.end_date} is before start_date {self.start_date}"
            )
        return self

    @property
    def nights(self) -> int:
        """Number of nights between start and end date."""
        return (self.end_date - self.start_date).days
