"""Source adapters: raw records from each origin to typed models."""

from .donor_registrations import adapt_donor_registrations
from .hospital_donations import adapt_hospital_donations
from .payments import adapt_payments

__all__ = [
    "adapt_donor_registrations",
    "adapt_hospital_donations",
    "adapt_payments",
]
