"""Tests for the 56-day donation eligibility window."""

from datetime import datetime, timedelta, timezone

import pytest

from donor_engine.models import DonationEvent, EventSource, EventStatus
from donor_engine.services.eligibility_calculator import (
    LATEST_ELIGIBLE_DATE,
    days_until_eligible,
    is_eligible,
    last_qualifying_donation,
    next_eligible_date,
)

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def _hospital(event_id: str, days_ago: float, status=EventStatus.COMPLETED) -> DonationEvent:
    return DonationEvent(
        id=event_id,
        source=EventSource.HOSPITAL_DONATION,
        occurred_at=NOW - timedelta(days=days_ago),
        status=status,
        units=1,
    )


def _registration(days_ago: float) -> DonationEvent:
    return DonationEvent(
        id="reg",
        source=EventSource.DONOR_REGISTRATION,
        occurred_at=NOW - timedelta(days=days_ago),
        status=EventStatus.ACTIVE,
    )


class TestNextEligibleDate:
    def test_empty_ledger_is_eligible_now(self):
        assert next_eligible_date([], NOW) == "now"

    def test_recent_completed_donation(self):
        ledger = [_hospital("h1", days_ago=10)]
        assert next_eligible_date(ledger, NOW) == NOW + timedelta(days=46)

    def test_approved_counts(self):
        ledger = [_hospital("h1", days_ago=1, status=EventStatus.APPROVED)]
        assert next_eligible_date(ledger, NOW) == NOW + timedelta(days=55)

    @pytest.mark.parametrize("status", [EventStatus.PENDING, EventStatus.INACTIVE])
    def test_non_qualifying_statuses_ignored(self, status):
        assert next_eligible_date([_hospital("h1", days_ago=1, status=status)], NOW) == "now"

    def test_registrations_ignored(self):
        assert next_eligible_date([_registration(days_ago=1)], NOW) == "now"

    def test_window_elapsed(self):
        assert next_eligible_date([_hospital("h1", days_ago=60)], NOW) == "now"

    def test_exactly_56_days_is_now(self):
        """candidate <= now counts as eligible."""
        assert next_eligible_date([_hospital("h1", days_ago=56)], NOW) == "now"

    def test_uses_most_recent_qualifying_donation(self):
        ledger = [
            _hospital("pending", days_ago=1, status=EventStatus.PENDING),
            _hospital("old", days_ago=40),
            _hospital("recent", days_ago=20),
        ]
        assert last_qualifying_donation(ledger).id == "recent"
        assert next_eligible_date(ledger, NOW) == NOW + timedelta(days=36)

    def test_never_more_than_56_days_after_last_donation(self):
        ledger = [_hospital("a", days_ago=d) for d in (0, 3, 30, 70)]
        result = next_eligible_date(ledger, NOW)
        last = last_qualifying_donation(ledger)
        assert result - last.occurred_at <= timedelta(days=56)

    def test_naive_now_treated_as_utc(self):
        ledger = [_hospital("h1", days_ago=10)]
        assert next_eligible_date(ledger, NOW.replace(tzinfo=None)) == NOW + timedelta(days=46)

    def test_window_past_datetime_max_is_capped(self):
        """A donation dated in the last days of year 9999 cannot have 56 days added."""
        donation = DonationEvent(
            id="far",
            source=EventSource.HOSPITAL_DONATION,
            occurred_at=datetime(9999, 12, 31, tzinfo=timezone.utc),
            status=EventStatus.COMPLETED,
            units=1,
        )
        assert next_eligible_date([donation], NOW) == LATEST_ELIGIBLE_DATE
        assert days_until_eligible([donation], NOW) > 0
        assert is_eligible([donation], NOW) is False


class TestDaysUntilEligible:
    def test_zero_when_eligible(self):
        assert days_until_eligible([], NOW) == 0
        assert is_eligible([], NOW) is True

    def test_whole_days_remaining(self):
        assert days_until_eligible([_hospital("h1", days_ago=10)], NOW) == 46
        assert is_eligible([_hospital("h1", days_ago=10)], NOW) is False

    def test_partial_day_rounds_up(self):
        assert days_until_eligible([_hospital("h1", days_ago=10.5)], NOW) == 46
