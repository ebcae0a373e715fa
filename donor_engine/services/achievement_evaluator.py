"""
Achievement Evaluator - badges and impact counters.

Counts:
- blood donations: approved/completed hospital events in the ledger
- money donations: payments whose status is exactly SUCCESS
- lives impacted: the sum of both

The per-category split of lives impacted is a fixed proportional estimate
taken from the settings, not a real categorization of recipients.
"""

import math
from collections.abc import Iterable
from datetime import datetime
from typing import Optional

from ..adapters.base import ensure_utc
from ..config import ImpactSplit, get_settings
from ..constants import (
    FIRST_DONATION_THRESHOLD,
    FIVE_LIVES_THRESHOLD,
    REGULAR_DONOR_THRESHOLD,
    TWENTY_DONATIONS_THRESHOLD,
)
from ..models.donation_event import DonationEvent, PaymentRecord
from ..models.donor_profile import AchievementInfo
from .eligibility_calculator import SECONDS_PER_DAY, last_qualifying_donation


# Absorbs float error so 30 * 0.3 floors to 9, not 8
FLOOR_EPSILON = 1e-9


def _floor_share(total: int, fraction: float) -> int:
    return math.floor(total * fraction + FLOOR_EPSILON)


def split_impact(total: int, split: ImpactSplit) -> dict[str, int]:
    """Floor each category's share of total."""
    return {
        "emergency_surgeries": _floor_share(total, split.emergency_surgeries),
        "cancer_patients": _floor_share(total, split.cancer_patients),
        "accident_victims": _floor_share(total, split.accident_victims),
    }


def evaluate_achievements(
    ledger: Iterable[DonationEvent],
    payments: Iterable[PaymentRecord],
    now: datetime,
    impact_split: Optional[ImpactSplit] = None,
) -> AchievementInfo:
    """
    Derive badges and counters.

    Args:
        ledger: Merged ledger
        payments: Adapted payments
        now: Reference time for days_since_last_donation
        impact_split: Category fractions; defaults to the configured split

    Returns:
        AchievementInfo
    """
    if impact_split is None:
        impact_split = get_settings().impact_split

    ledger = list(ledger)
    donations = [event for event in ledger if event.counts_as_donation]
    successful_payments = [payment for payment in payments if payment.is_successful]

    blood_donations = len(donations)
    money_donations = len(successful_payments)
    total = blood_donations + money_donations

    days_since_last = None
    last = last_qualifying_donation(donations)
    if last is not None:
        elapsed = (ensure_utc(now) - last.occurred_at).total_seconds()
        days_since_last = max(0, math.floor(elapsed / SECONDS_PER_DAY))

    return AchievementInfo(
        blood_donations=blood_donations,
        successful_money_donations=money_donations,
        total_lives_impacted=total,
        **split_impact(total, impact_split),
        has_first_donation=total >= FIRST_DONATION_THRESHOLD,
        has_five_lives=total >= FIVE_LIVES_THRESHOLD,
        is_regular_donor=(
            blood_donations >= REGULAR_DONOR_THRESHOLD or money_donations >= REGULAR_DONOR_THRESHOLD
        ),
        has_twenty_donations=total >= TWENTY_DONATIONS_THRESHOLD,
        donations_to_twenty=max(0, TWENTY_DONATIONS_THRESHOLD - total),
        total_points=sum(event.points for event in ledger),
        total_units=sum(event.units for event in donations),
        total_amount_donated=round(sum(payment.amount for payment in successful_payments), 2),
        days_since_last_donation=days_since_last,
    )
