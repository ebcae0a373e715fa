"""
Field-level normalization shared by the source adapters.

Every helper here is total: malformed values are repaired to a safe
default, never raised. Only a collection argument of the wrong kind
(see ensure_collection) is treated as a caller bug.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any, Optional

from ..constants import UNKNOWN_BLOOD_TYPE, VALID_BLOOD_TYPES
from ..utils.logger import EngineLogger

logger = logging.getLogger(__name__)


def ensure_collection(records: Any, name: str) -> list:
    """
    Normalize a source collection argument to a list.

    None means the fetch for that source failed or returned nothing and is
    treated as empty.

    Raises:
        TypeError: If records is a string, a mapping or not iterable
    """
    if records is None:
        return []
    if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Iterable):
        raise TypeError(f"{name} must be a list of records or None, got {type(records).__name__}")
    return list(records)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp as sent by the backend.

    Returns:
        UTC datetime, or None if the value is missing or unparsable
    """
    if isinstance(value, datetime):
        try:
            return ensure_utc(value)
        except OverflowError:
            return None
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    # fromisoformat() before 3.11 rejects the trailing Z
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return ensure_utc(datetime.fromisoformat(text))
    except (ValueError, OverflowError):
        # Out-of-range dates (e.g. year 1 with a positive offset) overflow on UTC conversion
        return None


def fallback_timestamp(now: datetime) -> datetime:
    """
    Timestamp for records whose own timestamp is unusable.

    Start of the UTC day of `now`: every real event of the same day sorts
    ahead of it, and it can never jump to the top of the ledger.
    """
    return ensure_utc(now).replace(hour=0, minute=0, second=0, microsecond=0)


def first_timestamp(record: Mapping, keys: tuple[str, ...]) -> Optional[datetime]:
    """First parsable timestamp among record[keys], in order."""
    for key in keys:
        parsed = parse_timestamp(record.get(key))
        if parsed is not None:
            return parsed
    return None


def to_number(value: Any) -> Optional[float]:
    """Coerce ints, floats and numeric strings; None for anything else."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except (ValueError, OverflowError):
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def round_half_up(value: float) -> int:
    """Round to nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def clamp_non_negative(value: Optional[float]) -> float:
    if value is None or value < 0:
        return 0.0
    return value


def normalize_blood_type(value: Any) -> str:
    """Canonical ABO/Rh type ('a+' -> 'A+'), or 'Unknown'."""
    if not isinstance(value, str):
        return UNKNOWN_BLOOD_TYPE
    candidate = value.strip().upper().replace(" ", "")
    if candidate in VALID_BLOOD_TYPES:
        return candidate
    return UNKNOWN_BLOOD_TYPE


def record_id(record: Mapping, key: str, source: str, index: int) -> str:
    """Record's own id, or a positional id that is stable across refreshes."""
    value = record.get(key)
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        try:
            text = str(value).strip()
        except ValueError:
            # int beyond the interpreter's str conversion limit
            text = ""
        if text:
            return text
    return f"{source}-{index}"


def report_issue(
    engine_logger: Optional[EngineLogger],
    source: str,
    rec_id: str,
    issue: str,
    **kwargs,
) -> None:
    """Report a repaired record to the engine logger, or the module logger if none."""
    if engine_logger is not None:
        engine_logger.log_data_issue(source, rec_id, issue, **kwargs)
    else:
        logger.debug(f"Repaired {source} record {rec_id}: {issue}")
