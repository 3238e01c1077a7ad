"""
Search plan contract.

The plan is derived once per search and is the only thing the three
search providers see. It decouples them from the raw user input.
"""

from datetime import date
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field


SearchCategory = Literal["lodging", "activity", "dining"]
PacePreference = Literal["relaxed", "moderate", "packed"]
DiningPriceRange = Literal["budget", "moderate", "upscale"]
MealType = Literal["breakfast", "lunch", "dinner"]


class PriceRange(BaseModel):
    """Nightly price band in USD."""

    model_config = ConfigDict(frozen=True)

    min: float = Field(ge=0, description="Minimum nightly price")
    max: float = Field(ge=0, description="Maximum nightly price")


class PlanDates(BaseModel):
    """Normalized date range with computed night count."""

    model_config = ConfigDict(frozen=True)

    start: date = Field(description="Check-in / first day")
    end: date = Field(description="Check-out / last day")
    nights: int = Field(ge=0, description="Number of nights")


class LodgingCriteria(BaseModel):
    model_config = ConfigDict(frozen=True)

    price_range: PriceRange = Field(description="Nightly price band")
    star_ratings: List[int] = Field(
        default_factory=list, description="Acceptable star ratings"
    )
    amenities: List[str] = Field(default_factory=list, description="Desired amenities")
    neighborhoods: List[str] = Field(
        default_factory=list, description="Preferred neighborhoods"
    )


class ActivityCriteria(BaseModel):
    model_config = ConfigDict(frozen=True)

    categories: List[str] = Field(default_factory=list, description="Activity categories")
    pace_preference: PacePreference = Field(
        default="moderate", description="How full each day should be"
    )
    must_see: List[str] = Field(default_factory=list, description="Must-see attractions")
    interests: List[str] = Field(default_factory=list, description="Interest keywords")


class DiningCriteria(BaseModel):
    model_config = ConfigDict(frozen=True)

    cuisine_types: List[str] = Field(default_factory=list, description="Cuisines to favor")
    price_range: DiningPriceRange = Field(default="moderate", description="Price tier")
    dietary_needs: List[str] = Field(default_factory=list, description="Dietary needs")
    meal_priorities: List[MealType] = Field(
        default_factory=list, description="Meals in order of importance"
    )


class VibeInterpretation(BaseModel):
    model_config = ConfigDict(frozen=True)

    vibes: List[str] = Field(default_factory=list, description="Canonical vibe list")
    search_keywords: List[str] = Field(
        default_factory=list, description="Keywords to search for"
    )
    avoid_keywords: List[str] = Field(
        default_factory=list, description="Keywords to avoid"
    )


class SearchPlan(BaseModel):
    """
    Structured search criteria shared by every downstream stage.

    ``fallback`` is set by the plan deriver when the deterministic default
    plan was used instead of a generated one.
    """

    model_config = ConfigDict(frozen=True)

    destination: str = Field(description="Trip destination")
    country: str = Field(default="", description="Destination country")
    dates: PlanDates = Field(description="Normalized trip dates")
    search_priorities: List[SearchCategory] = Field(
        default_factory=lambda: ["lodging", "activity", "dining"],
        description="Categories in priority order",
    )
    lodging_criteria: LodgingCriteria
    activity_criteria: ActivityCriteria
    dining_criteria: DiningCriteria
    vibe_interpretation: VibeInterpretation
    fallback: bool = Field(
        default=False, description="True if the deterministic plan was used"
    )

    @property
    def day_count(self) -> int:
        """Number of itinerary days (nights + 1)."""
        return self.dates.nights + 1
