"""
Pydantic models for normalized donor activity.

Each source adapter turns its origin's raw record shape into one of these
models, so everything downstream of the adapters works on a single typed
shape instead of per-source dictionaries.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ..constants import (
    ACTIVE_REGISTRATION_POINTS,
    HOSPITAL_DONATION_POINTS,
    SUCCESSFUL_PAYMENT_STATUS,
    UNKNOWN_BLOOD_TYPE,
)


class EventSource(str, Enum):
    """Origin of a donation event."""

    HOSPITAL_DONATION = "HospitalDonation"
    DONOR_REGISTRATION = "DonorRegistration"
    MONETARY_PAYMENT = "MonetaryPayment"


class EventStatus(str, Enum):
    """Normalized lifecycle status shared by all sources."""

    PENDING = "Pending"
    APPROVED = "Approved"
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    COMPLETED = "Completed"


# Statuses that make a hospital appointment a real donation
COUNTED_DONATION_STATUSES = frozenset({EventStatus.APPROVED, EventStatus.COMPLETED})

# Same-instant ordering in the ledger (lower sorts first)
SOURCE_PRIORITY = {
    EventSource.HOSPITAL_DONATION: 0,
    EventSource.DONOR_REGISTRATION: 1,
    EventSource.MONETARY_PAYMENT: 2,
}


def points_for(source: EventSource, status: EventStatus) -> int:
    """Points awarded for an event, a pure function of source and status."""
    if source == EventSource.HOSPITAL_DONATION and status in COUNTED_DONATION_STATUSES:
        return HOSPITAL_DONATION_POINTS
    if source == EventSource.DONOR_REGISTRATION and status == EventStatus.ACTIVE:
        return ACTIVE_REGISTRATION_POINTS
    return 0


class DonationEvent(BaseModel):
    """One donor-activity occurrence from any origin."""

    id: str = Field(..., description="Identifier, unique within its source")
    source: EventSource = Field(..., description="Which adapter produced the event")
    occurred_at: datetime = Field(..., description="When the activity happened (UTC)")
    timestamp_inferred: bool = Field(
        default=False, description="True when the raw timestamp was missing or unparsable"
    )
    blood_type: str = Field(default=UNKNOWN_BLOOD_TYPE)
    units: int = Field(default=0, ge=0, description="Whole-blood units (450 ml each)")
    status: EventStatus = Field(default=EventStatus.PENDING)
    location: Optional[str] = Field(None, description="Donation center, hospital events only")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "65a1f0c2e4b0a1b2c3d4e5f6",
                "source": "HospitalDonation",
                "occurred_at": "2024-01-15T10:30:00Z",
                "timestamp_inferred": False,
                "blood_type": "O+",
                "units": 1,
                "status": "Completed",
                "location": "City Hospital",
            }
        },
    )

    @computed_field
    @property
    def points(self) -> int:
        return points_for(self.source, self.status)

    @property
    def counts_as_donation(self) -> bool:
        """Approved or completed hospital donation."""
        return self.source == EventSource.HOSPITAL_DONATION and self.status in COUNTED_DONATION_STATUSES


class PaymentRecord(BaseModel):
    """Monetary payment, passed through with its gateway status untouched."""

    transaction_id: str
    amount: float = Field(default=0.0, ge=0)
    status: str = Field(default="PENDING", description="SUCCESS, PENDING, FAILED, CANCELLED or REFUNDED")
    created_at: Optional[datetime] = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_successful(self) -> bool:
        return self.status == SUCCESSFUL_PAYMENT_STATUS
