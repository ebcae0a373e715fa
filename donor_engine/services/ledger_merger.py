"""
Ledger Merger - combines adapter outputs into one newest-first ledger.

Ordering:
1. occurred_at, newest first
2. same instant: events with a real timestamp before inferred ones
3. then source priority HospitalDonation > DonorRegistration > MonetaryPayment
4. then input order (sorted() is stable)
"""

import logging
from collections.abc import Iterable
from typing import Optional

from ..models.donation_event import SOURCE_PRIORITY, DonationEvent

logger = logging.getLogger(__name__)


def ledger_sort_key(event: DonationEvent) -> tuple:
    return (-event.occurred_at.timestamp(), event.timestamp_inferred, SOURCE_PRIORITY[event.source])


def merge_ledgers(event_lists: Iterable[Optional[Iterable[DonationEvent]]]) -> list[DonationEvent]:
    """
    Concatenate event lists and sort them into a ledger.

    Args:
        event_lists: One list per source; None entries are treated as empty

    Returns:
        New list containing every input event exactly once, newest first
    """
    combined: list[DonationEvent] = []
    for events in event_lists:
        if events is None:
            continue
        combined.extend(events)

    ledger = sorted(combined, key=ledger_sort_key)
    logger.debug(f"Merged ledger with {len(ledger)} events")
    return ledger
