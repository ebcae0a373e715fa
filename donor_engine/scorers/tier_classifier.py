"""Tier Classifier - completed donation count to donor tier and progress.

Default bands (inclusive lower bound):

    New [0,5) -> Bronze [5,15) -> Silver [15,25) -> Gold [25,50) -> Platinum [50,inf)

A count equal to a band's lower bound belongs to that band, so 5 is Bronze.
Progress is the share of the current band already completed, 0-100. The
top band has no upper bound and always reports 100.

Usage:
    from donor_engine.scorers.tier_classifier import classify_tier

    classify_tier(24)  # TierInfo(tier="Silver", progress_pct=90.0, next_tier="Gold", ...)
"""

from typing import Optional, Sequence

from ..config import TierBand, get_settings
from ..models.donor_profile import TierInfo


def tier_index(completed_count: int, tiers: Sequence[TierBand]) -> int:
    """Index of the band containing completed_count."""
    index = 0
    for i, band in enumerate(tiers):
        if completed_count >= band.min_donations:
            index = i
        else:
            break
    return index


def classify_tier(completed_count: int, tiers: Optional[Sequence[TierBand]] = None) -> TierInfo:
    """
    Classify a completed donation count.

    Args:
        completed_count: Approved/completed hospital donations
        tiers: Bands to use; defaults to the configured bands

    Raises:
        TypeError: If completed_count is not an int
        ValueError: If completed_count is negative
    """
    if isinstance(completed_count, bool) or not isinstance(completed_count, int):
        raise TypeError(f"completed_count must be an int, got {type(completed_count).__name__}")
    if completed_count < 0:
        raise ValueError(f"completed_count must be >= 0, got {completed_count}")

    if tiers is None:
        tiers = get_settings().tiers

    index = tier_index(completed_count, tiers)
    current = tiers[index]

    if index == len(tiers) - 1:
        return TierInfo(tier=current.name, progress_pct=100.0, next_tier=None, donations_to_next_tier=None)

    upcoming = tiers[index + 1]
    band_width = upcoming.min_donations - current.min_donations
    progress = (completed_count - current.min_donations) * 100 / band_width

    return TierInfo(
        tier=current.name,
        progress_pct=round(progress, 2),
        next_tier=upcoming.name,
        donations_to_next_tier=upcoming.min_donations - completed_count,
    )


def tier_rank(tier_name: str, tiers: Optional[Sequence[TierBand]] = None) -> int:
    """Position of a tier name in the band order (0 = lowest).

    Raises:
        ValueError: If the name is not a configured tier
    """
    if tiers is None:
        tiers = get_settings().tiers
    for i, band in enumerate(tiers):
        if band.name == tier_name:
            return i
    raise ValueError(f"Unknown tier: {tier_name}")
