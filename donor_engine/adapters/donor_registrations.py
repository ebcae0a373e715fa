"""
Emergency-donor registration adapter.

A registration is a standing offer to donate, not a donation: it yields
exactly one event with zero units whose status reflects isActive.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any, Optional

from ..models.donation_event import DonationEvent, EventSource, EventStatus
from ..models.raw_records import RawDonorRegistration
from ..utils.logger import EngineLogger
from .base import (
    ensure_collection,
    fallback_timestamp,
    first_timestamp,
    normalize_blood_type,
    record_id,
    report_issue,
)

SOURCE = EventSource.DONOR_REGISTRATION.value

TIMESTAMP_KEYS = ("registeredAt", "createdAt")


def _is_active(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def _blood_type(record: Mapping) -> Any:
    blood_info = record.get("bloodInfo")
    if isinstance(blood_info, Mapping):
        return blood_info.get("bloodType")
    if isinstance(blood_info, str):
        return blood_info
    return record.get("bloodType")


def adapt_donor_registration(
    record: RawDonorRegistration,
    index: int,
    now: datetime,
    logger: Optional[EngineLogger] = None,
) -> DonationEvent:
    rec_id = record_id(record, "_id", SOURCE, index)

    occurred_at = first_timestamp(record, TIMESTAMP_KEYS)
    timestamp_inferred = occurred_at is None
    if timestamp_inferred:
        report_issue(logger, SOURCE, rec_id, "missing or unparsable timestamp")
        occurred_at = fallback_timestamp(now)

    return DonationEvent(
        id=rec_id,
        source=EventSource.DONOR_REGISTRATION,
        occurred_at=occurred_at,
        timestamp_inferred=timestamp_inferred,
        blood_type=normalize_blood_type(_blood_type(record)),
        units=0,
        status=EventStatus.ACTIVE if _is_active(record.get("isActive")) else EventStatus.INACTIVE,
    )


def adapt_donor_registrations(
    records: Optional[Iterable[RawDonorRegistration]],
    now: datetime,
    logger: Optional[EngineLogger] = None,
) -> list[DonationEvent]:
    """Normalize donor registrations, one event per mapping record."""
    events = []
    for index, record in enumerate(ensure_collection(records, "registration records")):
        if not isinstance(record, Mapping):
            report_issue(logger, SOURCE, f"{SOURCE}-{index}", "record is not a mapping")
            continue
        events.append(adapt_donor_registration(record, index, now, logger))
    return events
