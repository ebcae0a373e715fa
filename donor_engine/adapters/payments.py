"""
Monetary payment adapter.

Payments feed the achievement counters only; they are not merged into the
ledger that drives eligibility. The gateway status is kept verbatim and
only an exact "SUCCESS" counts.
"""

from collections.abc import Iterable, Mapping
from typing import Optional

from ..models.donation_event import EventSource, PaymentRecord
from ..models.raw_records import RawPayment
from ..utils.logger import EngineLogger
from .base import clamp_non_negative, ensure_collection, parse_timestamp, record_id, report_issue, to_number

SOURCE = EventSource.MONETARY_PAYMENT.value


def adapt_payment(record: RawPayment, index: int, logger: Optional[EngineLogger] = None) -> PaymentRecord:
    rec_id = record_id(record, "transactionId", SOURCE, index)

    amount = to_number(record.get("amount"))
    if amount is None or amount < 0:
        report_issue(logger, SOURCE, rec_id, "invalid amount", amount=record.get("amount"))

    status = record.get("status")
    if not isinstance(status, str):
        report_issue(logger, SOURCE, rec_id, "missing status")
        status = "PENDING"

    return PaymentRecord(
        transaction_id=rec_id,
        amount=clamp_non_negative(amount),
        status=status,
        created_at=parse_timestamp(record.get("createdAt")),
    )


def adapt_payments(
    records: Optional[Iterable[RawPayment]],
    logger: Optional[EngineLogger] = None,
) -> list[PaymentRecord]:
    """Normalize payment records, skipping entries that are not mappings."""
    payments = []
    for index, record in enumerate(ensure_collection(records, "payment records")):
        if not isinstance(record, Mapping):
            report_issue(logger, SOURCE, f"{SOURCE}-{index}", "record is not a mapping")
            continue
        payments.append(adapt_payment(record, index, logger))
    return payments
