"""Typed models shared across the engine."""

from .donation_event import (
    COUNTED_DONATION_STATUSES,
    SOURCE_PRIORITY,
    DonationEvent,
    EventSource,
    EventStatus,
    PaymentRecord,
    points_for,
)
from .donor_profile import AchievementInfo, DerivedDonorProfile, TierInfo
from .raw_records import RawDonorRegistration, RawHospitalDonation, RawPayment

__all__ = [
    "COUNTED_DONATION_STATUSES",
    "SOURCE_PRIORITY",
    "DonationEvent",
    "EventSource",
    "EventStatus",
    "PaymentRecord",
    "points_for",
    "AchievementInfo",
    "DerivedDonorProfile",
    "TierInfo",
    "RawDonorRegistration",
    "RawHospitalDonation",
    "RawPayment",
]
