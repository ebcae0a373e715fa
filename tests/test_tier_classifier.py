"""Tests for donor tier classification."""

import pytest

from donor_engine.config import TierBand
from donor_engine.scorers.tier_classifier import classify_tier, tier_rank


class TestClassifyTier:
    """Default bands: New 0, Bronze 5, Silver 15, Gold 25, Platinum 50."""

    @pytest.mark.parametrize(
        "count,tier,progress,next_tier",
        [
            (0, "New", 0.0, "Bronze"),
            (4, "New", 80.0, "Bronze"),
            (5, "Bronze", 0.0, "Silver"),
            (14, "Bronze", 90.0, "Silver"),
            (15, "Silver", 0.0, "Gold"),
            (24, "Silver", 90.0, "Gold"),
            (25, "Gold", 0.0, "Platinum"),
            (49, "Gold", 96.0, "Platinum"),
            (50, "Platinum", 100.0, None),
            (500, "Platinum", 100.0, None),
        ],
    )
    def test_boundaries(self, count, tier, progress, next_tier):
        info = classify_tier(count)
        assert info.tier == tier
        assert info.progress_pct == pytest.approx(progress)
        assert info.next_tier == next_tier

    def test_donations_to_next_tier(self):
        assert classify_tier(12).donations_to_next_tier == 3
        assert classify_tier(50).donations_to_next_tier is None

    def test_monotonic(self):
        """A higher count never lands in a lower tier."""
        ranks = [tier_rank(classify_tier(count).tier) for count in range(0, 80)]
        assert ranks == sorted(ranks)

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            classify_tier(-1)

    @pytest.mark.parametrize("count", [None, 2.5, "5", True])
    def test_non_int_rejected(self, count):
        with pytest.raises(TypeError):
            classify_tier(count)

    def test_custom_bands(self):
        tiers = [TierBand(name="Starter", min_donations=0), TierBand(name="Hero", min_donations=2)]
        assert classify_tier(1, tiers).progress_pct == pytest.approx(50.0)
        assert classify_tier(2, tiers).tier == "Hero"
        assert classify_tier(2, tiers).next_tier is None

    def test_unknown_tier_rank(self):
        with pytest.raises(ValueError):
            tier_rank("Diamond")
