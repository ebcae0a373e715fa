"""
Eligibility Calculator - when may the donor give blood again?

Only approved or completed hospital donations start the waiting window.
Registrations and payments never affect eligibility. The interval is
ELIGIBILITY_INTERVAL_DAYS and is not adjustable per donor here.
"""

import math
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from typing import Literal, Optional, Union

from ..adapters.base import ensure_utc
from ..constants import ELIGIBILITY_INTERVAL_DAYS, ELIGIBLE_NOW
from ..models.donation_event import DonationEvent

ELIGIBILITY_INTERVAL = timedelta(days=ELIGIBILITY_INTERVAL_DAYS)

# Window end for donations dated too close to datetime.max to add the interval
LATEST_ELIGIBLE_DATE = datetime.max.replace(tzinfo=timezone.utc)

SECONDS_PER_DAY = 24 * 60 * 60


def last_qualifying_donation(ledger: Iterable[DonationEvent]) -> Optional[DonationEvent]:
    """Most recent approved/completed hospital donation, regardless of ledger order."""
    latest = None
    for event in ledger:
        if not event.counts_as_donation:
            continue
        if latest is None or event.occurred_at > latest.occurred_at:
            latest = event
    return latest


def next_eligible_date(ledger: Iterable[DonationEvent], now: datetime) -> Union[Literal["now"], datetime]:
    """
    Next date the donor may donate.

    Args:
        ledger: Merged ledger (any order)
        now: Reference time

    Returns:
        "now" if no qualifying donation exists or its window has passed,
        otherwise last donation + 56 days
    """
    last = last_qualifying_donation(ledger)
    if last is None:
        return ELIGIBLE_NOW

    try:
        candidate = last.occurred_at + ELIGIBILITY_INTERVAL
    except OverflowError:
        candidate = LATEST_ELIGIBLE_DATE
    if candidate <= ensure_utc(now):
        return ELIGIBLE_NOW
    return candidate


def days_until_eligible(ledger: Iterable[DonationEvent], now: datetime) -> int:
    """Whole days until eligible, rounded up; 0 when eligible now."""
    next_date = next_eligible_date(ledger, now)
    if next_date == ELIGIBLE_NOW:
        return 0
    remaining = (next_date - ensure_utc(now)).total_seconds()
    return math.ceil(remaining / SECONDS_PER_DAY)


def is_eligible(ledger: Iterable[DonationEvent], now: datetime) -> bool:
    return next_eligible_date(ledger, now) == ELIGIBLE_NOW
