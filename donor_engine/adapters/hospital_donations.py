"""
Hospital donation adapter - appointment records to DonationEvents.

Status mapping:
- pending -> Pending
- approved -> Approved
- completed -> Completed
- rejected, cancelled -> Inactive (terminal, never counted)
- anything else -> Pending, so an unknown state can never grant points
  or start an eligibility window
"""

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Optional

from ..constants import DEFAULT_DONATION_ML, ML_PER_UNIT
from ..models.donation_event import DonationEvent, EventSource, EventStatus
from ..models.raw_records import RawHospitalDonation
from ..utils.logger import EngineLogger
from .base import (
    clamp_non_negative,
    ensure_collection,
    fallback_timestamp,
    first_timestamp,
    normalize_blood_type,
    record_id,
    report_issue,
    round_half_up,
    to_number,
)

SOURCE = EventSource.HOSPITAL_DONATION.value

HOSPITAL_STATUS_MAP = {
    "pending": EventStatus.PENDING,
    "approved": EventStatus.APPROVED,
    "completed": EventStatus.COMPLETED,
    "rejected": EventStatus.INACTIVE,
    "cancelled": EventStatus.INACTIVE,
    "canceled": EventStatus.INACTIVE,
}

TIMESTAMP_KEYS = ("submittedAt", "createdAt")


def map_hospital_status(raw_status) -> Optional[EventStatus]:
    """Mapped status, or None when the raw value is not a known hospital status."""
    if not isinstance(raw_status, str):
        return None
    return HOSPITAL_STATUS_MAP.get(raw_status.strip().lower())


def quantity_to_units(quantity_ml) -> int:
    """Milliliters to whole units, rounded to nearest; bad values give 0."""
    return round_half_up(clamp_non_negative(to_number(quantity_ml)) / ML_PER_UNIT)


def _donation_center(record: Mapping) -> Optional[str]:
    center = record.get("donationCenter")
    if not center:
        details = record.get("appointmentDetails")
        if isinstance(details, Mapping):
            center = details.get("donationCenter")
    if isinstance(center, str) and center.strip():
        return center.strip()
    return None


def adapt_hospital_donation(
    record: RawHospitalDonation,
    index: int,
    now: datetime,
    logger: Optional[EngineLogger] = None,
) -> DonationEvent:
    """Normalize one hospital donation record."""
    rec_id = record_id(record, "_id", SOURCE, index)

    status = map_hospital_status(record.get("status"))
    if status is None:
        report_issue(logger, SOURCE, rec_id, "unrecognized status", status=record.get("status"))
        status = EventStatus.PENDING

    occurred_at = first_timestamp(record, TIMESTAMP_KEYS)
    timestamp_inferred = occurred_at is None
    if timestamp_inferred:
        report_issue(logger, SOURCE, rec_id, "missing or unparsable timestamp")
        occurred_at = fallback_timestamp(now)

    blood_info = record.get("bloodInfo")
    if not isinstance(blood_info, Mapping):
        blood_info = {}

    quantity = blood_info.get("quantity", DEFAULT_DONATION_ML)
    if quantity is None:
        quantity = DEFAULT_DONATION_ML
    number = to_number(quantity)
    if number is None or number < 0:
        report_issue(logger, SOURCE, rec_id, "invalid quantity", quantity=quantity)

    return DonationEvent(
        id=rec_id,
        source=EventSource.HOSPITAL_DONATION,
        occurred_at=occurred_at,
        timestamp_inferred=timestamp_inferred,
        blood_type=normalize_blood_type(blood_info.get("bloodType")),
        units=quantity_to_units(quantity),
        status=status,
        location=_donation_center(record),
    )


def adapt_hospital_donations(
    records: Optional[Iterable[RawHospitalDonation]],
    now: datetime,
    logger: Optional[EngineLogger] = None,
) -> list[DonationEvent]:
    """
    Normalize hospital donation records into DonationEvents.

    Args:
        records: Raw records from the data-fetch layer, None if the fetch failed
        now: Reference time for records without a usable timestamp
        logger: Optional engine logger for data-issue tracking

    Returns:
        One event per mapping record; non-mapping entries are skipped
    """
    events = []
    for index, record in enumerate(ensure_collection(records, "hospital records")):
        if not isinstance(record, Mapping):
            report_issue(logger, SOURCE, f"{SOURCE}-{index}", "record is not a mapping")
            continue
        events.append(adapt_hospital_donation(record, index, now, logger))
    return events
