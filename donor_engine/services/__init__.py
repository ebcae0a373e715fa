"""Ledger, eligibility and achievement services."""

from .achievement_evaluator import evaluate_achievements, split_impact
from .donor_profile_engine import DonorProfileEngine, compute_donor_profile
from .eligibility_calculator import days_until_eligible, is_eligible, next_eligible_date
from .ledger_merger import merge_ledgers

__all__ = [
    "evaluate_achievements",
    "split_impact",
    "DonorProfileEngine",
    "compute_donor_profile",
    "days_until_eligible",
    "is_eligible",
    "next_eligible_date",
    "merge_ledgers",
]
