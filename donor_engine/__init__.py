"""Donor activity reconciliation and eligibility engine."""

from donor_engine.models import AchievementInfo, DerivedDonorProfile, DonationEvent, TierInfo
from donor_engine.services import DonorProfileEngine, compute_donor_profile

__all__ = [
    "AchievementInfo",
    "DerivedDonorProfile",
    "DonationEvent",
    "TierInfo",
    "DonorProfileEngine",
    "compute_donor_profile",
]
