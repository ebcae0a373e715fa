"""Deterministic scoring modules for donor profiles."""

from .tier_classifier import classify_tier, tier_index, tier_rank

__all__ = [
    "classify_tier",
    "tier_index",
    "tier_rank",
]
