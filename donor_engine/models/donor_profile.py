"""
Pydantic models for the derived donor profile.

The profile is a value object: the engine rebuilds it from the raw source
collections on every refresh and never patches it in place.
"""

from datetime import datetime
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .donation_event import DonationEvent


class TierInfo(BaseModel):
    """Donor tier and progress through the current band."""

    tier: str = Field(..., description="Current tier name (e.g., 'Bronze')")
    progress_pct: float = Field(..., ge=0, le=100, description="Progress through the current band, 0-100")
    next_tier: Optional[str] = Field(None, description="Next tier name, None at the top tier")
    donations_to_next_tier: Optional[int] = Field(
        None, ge=0, description="Completed donations still needed for next_tier"
    )

    model_config = ConfigDict(frozen=True)


class AchievementInfo(BaseModel):
    """Badges and impact counters derived from the ledger and payments."""

    # Counts
    blood_donations: int = Field(0, ge=0, description="Approved/completed hospital donations")
    successful_money_donations: int = Field(0, ge=0, description="Payments with status SUCCESS")
    total_lives_impacted: int = Field(0, ge=0)

    # Impact split (proportional estimate, not real categorization)
    emergency_surgeries: int = Field(0, ge=0)
    cancer_patients: int = Field(0, ge=0)
    accident_victims: int = Field(0, ge=0)

    # Badges
    has_first_donation: bool = False
    has_five_lives: bool = False
    is_regular_donor: bool = False
    has_twenty_donations: bool = False
    donations_to_twenty: int = Field(0, ge=0)

    # Totals
    total_points: int = Field(0, ge=0)
    total_units: int = Field(0, ge=0)
    total_amount_donated: float = Field(0.0, ge=0)
    days_since_last_donation: Optional[int] = Field(None, ge=0)

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "blood_donations": 2,
                "successful_money_donations": 3,
                "total_lives_impacted": 5,
                "emergency_surgeries": 1,
                "cancer_patients": 2,
                "accident_victims": 1,
                "has_first_donation": True,
                "has_five_lives": True,
                "is_regular_donor": True,
                "has_twenty_donations": False,
                "donations_to_twenty": 15,
            }
        },
    )


class DerivedDonorProfile(BaseModel):
    """
    Everything the presentation layer needs about one donor.

    Built in one pass by DonorProfileEngine.compute(); two calls with the
    same inputs and the same `now` produce identical profiles.
    """

    ledger: List[DonationEvent] = Field(default_factory=list, description="Newest first")
    next_eligible_date: Union[Literal["now"], datetime] = Field(
        "now", description="'now' or the first date the donor may give blood again"
    )
    days_until_eligible: int = Field(0, ge=0)
    tier: TierInfo
    achievements: AchievementInfo
    computed_at: datetime = Field(..., description="The 'now' the profile was computed against")

    model_config = ConfigDict(frozen=True)

    @property
    def is_eligible_now(self) -> bool:
        return self.next_eligible_date == "now"

    def flatten(self) -> dict[str, Any]:
        """Profile as a flat dict, achievement fields lifted to the top level."""
        flat = self.model_dump(mode="json", exclude={"achievements", "tier"})
        flat["tier"] = self.tier.tier
        flat["tier_progress_pct"] = self.tier.progress_pct
        flat["next_tier"] = self.tier.next_tier
        flat["donations_to_next_tier"] = self.tier.donations_to_next_tier
        flat.update(self.achievements.model_dump(mode="json"))
        return flat
