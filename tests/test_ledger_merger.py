"""Tests for merging adapter outputs into a newest-first ledger."""

from datetime import datetime, timedelta, timezone

from donor_engine.adapters import adapt_donor_registrations, adapt_hospital_donations
from donor_engine.models import DonationEvent, EventSource, EventStatus
from donor_engine.services.ledger_merger import merge_ledgers

T0 = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)


def _event(event_id: str, source=EventSource.HOSPITAL_DONATION, at=T0, inferred=False) -> DonationEvent:
    return DonationEvent(
        id=event_id,
        source=source,
        occurred_at=at,
        timestamp_inferred=inferred,
        status=EventStatus.COMPLETED if source == EventSource.HOSPITAL_DONATION else EventStatus.ACTIVE,
    )


class TestMergeLedgers:
    def test_completeness(self, hospital_records, registration_records, now):
        """No events dropped or duplicated."""
        hospital = adapt_hospital_donations(hospital_records, now)
        registrations = adapt_donor_registrations(registration_records, now)

        ledger = merge_ledgers([hospital, registrations])

        assert len(ledger) == len(hospital) + len(registrations)
        assert sorted(e.id for e in ledger) == sorted(e.id for e in hospital + registrations)

    def test_newest_first(self, hospital_records, registration_records, now):
        ledger = merge_ledgers(
            [adapt_hospital_donations(hospital_records, now), adapt_donor_registrations(registration_records, now)]
        )

        assert [e.id for e in ledger] == ["hd-3", "hd-1", "reg-1", "hd-2"]
        for newer, older in zip(ledger, ledger[1:]):
            assert newer.occurred_at >= older.occurred_at

    def test_same_instant_hospital_before_registration(self):
        registration = _event("reg", source=EventSource.DONOR_REGISTRATION)
        hospital = _event("hosp")

        ledger = merge_ledgers([[registration], [hospital]])

        assert [e.id for e in ledger] == ["hosp", "reg"]

    def test_same_instant_same_source_keeps_input_order(self):
        ledger = merge_ledgers([[_event("a"), _event("b")], [_event("c")]])
        assert [e.id for e in ledger] == ["a", "b", "c"]

    def test_inferred_timestamp_sorts_after_real_same_day_events(self, now):
        """A record with a bad timestamp cannot jump to the top of its day."""
        real_morning = _event("real", at=now.replace(hour=0, minute=0) + timedelta(minutes=1))
        bad = adapt_hospital_donations([{"_id": "bad", "status": "completed"}], now)[0]
        yesterday = _event("yesterday", at=now - timedelta(days=1))

        ledger = merge_ledgers([[bad, yesterday], [real_morning]])

        assert [e.id for e in ledger] == ["real", "bad", "yesterday"]

    def test_inferred_loses_tie_at_midnight(self, now):
        midnight = now.replace(hour=0, minute=0)
        real = _event("real", at=midnight)
        inferred = _event("inferred", at=midnight, inferred=True)

        assert [e.id for e in merge_ledgers([[inferred], [real]])] == ["real", "inferred"]

    def test_missing_sources_are_empty(self):
        assert merge_ledgers([None, [], None]) == []
        assert [e.id for e in merge_ledgers([None, [_event("only")]])] == ["only"]

    def test_does_not_mutate_inputs(self):
        older = _event("older", at=T0 - timedelta(days=3))
        newer = _event("newer")
        inputs = [older, newer]

        merge_ledgers([inputs])

        assert [e.id for e in inputs] == ["older", "newer"]
