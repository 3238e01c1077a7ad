"""
Search result contracts.

Each category has a ``*Candidate`` model (the shape requested from the
generative service) and a ``*Result`` model (candidate plus the id the
provider assigns).
"""

import math
from typing import Any, List, Optional, Literal

from pydantic import BaseModel, Field, field_validator

from tripsearch.shared.contracts.search_plan import MealType


TimeOfDay = Literal["morning", "afternoon", "evening", "any"]

MIN_VIBE_SCORE = 0
MAX_VIBE_SCORE = 100


def clamp_vibe_score(value: Any) -> int:
    """
    Coerce a vibe score to an integer in [0, 100].

    None and NaN become 0. Fractional values are rounded.

    Raises:
        ValueError: If the value is not numeric
    """
    if value is None:
        return MIN_VIBE_SCORE
    if isinstance(value, bool):
        raise ValueError("vibe score must be numeric, not bool")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"vibe score must be numeric, got {value!r}")
    if math.isnan(number):
        return MIN_VIBE_SCORE
    if math.isinf(number):
        return MAX_VIBE_SCORE if number > 0 else MIN_VIBE_SCORE
    return max(MIN_VIBE_SCORE, min(MAX_VIBE_SCORE, int(round(number))))


class LocationInfo(BaseModel):
    """Where a result is located."""

    name: str = Field(description="Place name")
    address: str = Field(default="", description="Street address")
    lat: float = Field(default=0.0, description="Latitude")
    lng: float = Field(default=0.0, description="Longitude")
    neighborhood: Optional[str] = Field(default=None, description="Neighborhood")


class _VibeScored(BaseModel):
    """Fields common to every result variant."""

    name: str = Field(description="Display name")
    description: str = Field(default="", description="Short description")
    location: LocationInfo
    images: List[str] = Field(default_factory=list, description="Image URLs")
    vibe_score: int = Field(
        default=0,
        ge=MIN_VIBE_SCORE,
        le=MAX_VIBE_SCORE,
        description="How well this matches the requested vibes (0-100)",
    )
    vibe_match: List[str] = Field(
        default_factory=list, description="Requested vibes this result matches"
    )

    @field_validator("vibe_score", mode="before")
    @classmethod
    def _clamp_vibe_score(cls, value: Any) -> int:
        return clamp_vibe_score(value)


class LodgingCandidate(_VibeScored):
    star_rating: float = Field(ge=1, le=5, description="Hotel star rating")
    user_rating: float = Field(default=0, ge=0, le=10, description="Guest rating out of 10")
    review_count: int = Field(default=0, ge=0)
    price_per_night: float = Field(ge=0, description="Nightly price")
    total_price: float = Field(default=0, ge=0, description="Price for the whole stay")
    currency: str = Field(default="USD")
    amenities: List[str] = Field(default_factory=list)
    affiliate_url: str = Field(default="", description="Booking link")
    affiliate_partner: str = Field(default="", description="Booking partner")


class ActivityCandidate(_VibeScored):
    category: str = Field(description="Activity category")
    duration: float = Field(default=120, ge=0, description="Duration in minutes")
    price: float = Field(default=0, ge=0)
    currency: str = Field(default="USD")
    rating: float = Field(default=0, ge=0, le=5)
    review_count: int = Field(default=0, ge=0)
    best_time_of_day: TimeOfDay = Field(default="any")
    booking_required: bool = Field(default=False)
    affiliate_url: str = Field(default="", description="Booking link")
    affiliate_partner: str = Field(default="", description="Booking partner")


class DiningCandidate(_VibeScored):
    cuisine_types: List[str] = Field(default_factory=list)
    price_level: int = Field(default=2, ge=1, le=4, description="1 ($) to 4 ($$$$)")
    rating: float = Field(default=0, ge=0, le=5)
    review_count: int = Field(default=0, ge=0)
    meal_types: List[MealType] = Field(default_factory=list)
    dietary_options: List[str] = Field(default_factory=list)
    reservation_url: Optional[str] = Field(default=None)
    affiliate_partner: Optional[str] = Field(default=None)


class LodgingResult(LodgingCandidate):
    id: str = Field(description="Unique result id")


class ActivityResult(ActivityCandidate):
    id: str = Field(description="Unique result id")


class DiningResult(DiningCandidate):
    id: str = Field(description="Unique result id")
