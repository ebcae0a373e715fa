"""Shared fixtures for donor engine tests.

Raw records mirror what the backend API returns: camelCase keys and
ISO-8601 strings.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add project root to path so tests run without an install
sys.path.insert(0, str(Path(__file__).parent.parent))

from donor_engine.config import SETTINGS_ENV_VAR, clear_cache  # noqa: E402


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch):
    """Every test starts from the repository settings file."""
    monkeypatch.delenv(SETTINGS_ENV_VAR, raising=False)
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def now():
    return datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def hospital_records():
    return [
        {
            "_id": "hd-1",
            "status": "completed",
            "bloodInfo": {"bloodType": "O+", "quantity": 450},
            "submittedAt": "2024-01-15T10:30:00.000Z",
            "appointmentDetails": {"donationCenter": "City Hospital"},
        },
        {
            "_id": "hd-2",
            "status": "approved",
            "bloodInfo": {"bloodType": "O+", "quantity": 900},
            "submittedAt": "2023-11-10T09:00:00.000Z",
            "donationCenter": "Community Center",
        },
        {
            "_id": "hd-3",
            "status": "pending",
            "bloodInfo": {"bloodType": "O+", "quantity": 450},
            "createdAt": "2024-02-20T08:00:00.000Z",
        },
    ]


@pytest.fixture
def registration_records():
    return [
        {
            "_id": "reg-1",
            "isActive": True,
            "registeredAt": "2023-12-01T00:00:00.000Z",
            "bloodInfo": {"bloodType": "O+"},
        }
    ]


@pytest.fixture
def payment_records():
    return [
        {"transactionId": "TXN-1", "amount": 500, "status": "SUCCESS", "createdAt": "2024-01-02T00:00:00Z"},
        {"transactionId": "TXN-2", "amount": 1000, "status": "FAILED", "createdAt": "2024-01-03T00:00:00Z"},
        {"transactionId": "TXN-3", "amount": 250, "status": "SUCCESS", "createdAt": "2024-01-04T00:00:00Z"},
    ]
