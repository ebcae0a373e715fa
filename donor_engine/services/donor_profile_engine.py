"""
Donor Profile Engine - raw activity collections to a DerivedDonorProfile.

Reads (already fetched by the caller):
- hospital donation appointments
- emergency-donor registrations
- monetary payments

Produces:
- DerivedDonorProfile with the merged ledger, eligibility, tier and
  achievements, recomputed from scratch on every call

A source whose fetch failed is passed as None or [] and the profile is
built from the remaining sources.
"""

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Optional

from ..adapters import adapt_donor_registrations, adapt_hospital_donations, adapt_payments
from ..adapters.base import ensure_utc
from ..config import EngineSettings, get_settings
from ..models.donor_profile import DerivedDonorProfile
from ..models.raw_records import RawDonorRegistration, RawHospitalDonation, RawPayment
from ..scorers.tier_classifier import classify_tier
from ..utils.logger import EngineLogger
from .achievement_evaluator import evaluate_achievements
from .eligibility_calculator import days_until_eligible, next_eligible_date
from .ledger_merger import merge_ledgers


class DonorProfileEngine:
    """
    Builds donor profiles from the three activity sources.

    Holds settings and a logger only; no state carries over between calls,
    so one instance can serve every view. The logger's tracked warnings,
    errors and data issues describe the most recent call.
    """

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        logger: Optional[EngineLogger] = None,
    ):
        self.settings = settings or get_settings()
        self.logger = logger or EngineLogger(name="donor_engine")

    def compute(
        self,
        hospital_records: Optional[Iterable[RawHospitalDonation]],
        registration_records: Optional[Iterable[RawDonorRegistration]],
        payment_records: Optional[Iterable[RawPayment]],
        now: Optional[datetime] = None,
    ) -> DerivedDonorProfile:
        """
        Compute the profile for one donor.

        Args:
            hospital_records: Hospital donation records, None if unavailable
            registration_records: Donor registration records, None if unavailable
            payment_records: Payment records, None if unavailable
            now: Reference time; pass it explicitly for reproducible output

        Returns:
            DerivedDonorProfile

        Raises:
            TypeError: If a collection argument is not a list of records or None
        """
        now = ensure_utc(now) if now is not None else datetime.now(timezone.utc)
        start_time = datetime.now()
        self.logger.clear_tracking()

        with self.logger.time_operation("adapt sources"):
            hospital_events = adapt_hospital_donations(hospital_records, now, self.logger)
            registration_events = adapt_donor_registrations(registration_records, now, self.logger)
            payments = adapt_payments(payment_records, self.logger)

        ledger = merge_ledgers([hospital_events, registration_events])

        next_date = next_eligible_date(ledger, now)
        achievements = evaluate_achievements(ledger, payments, now, self.settings.impact_split)
        tier = classify_tier(achievements.blood_donations, self.settings.tiers)

        profile = DerivedDonorProfile(
            ledger=ledger,
            next_eligible_date=next_date,
            days_until_eligible=days_until_eligible(ledger, now),
            tier=tier,
            achievements=achievements,
            computed_at=now,
        )

        self.logger.log_profile_computed(
            ledger_size=len(ledger),
            payments=len(payments),
            tier=tier.tier,
            eligible_now=profile.is_eligible_now,
            duration_seconds=(datetime.now() - start_time).total_seconds(),
        )
        return profile


def compute_donor_profile(
    hospital_records: Optional[Iterable[RawHospitalDonation]],
    registration_records: Optional[Iterable[RawDonorRegistration]],
    payment_records: Optional[Iterable[RawPayment]],
    now: Optional[datetime] = None,
    settings: Optional[EngineSettings] = None,
) -> DerivedDonorProfile:
    """Convenience wrapper: one-off DonorProfileEngine(settings).compute(...)."""
    return DonorProfileEngine(settings=settings).compute(
        hospital_records, registration_records, payment_records, now=now
    )
