"""Unit tests for domain.recall module."""

import random

import pytest

from pharmarisk.domain.recall import (
    RECALL_BANDS,
    band_midpoint_probability,
    jittered_band_probability,
)
from pharmarisk.schemas.batch import BatchRiskLevel


class TestJitteredBandProbability:
    """Test probability draws stay inside each level's band."""

    @pytest.mark.parametrize("level", list(BatchRiskLevel))
    def test_draw_within_band(self, level):
        rng = random.Random(7)
        low, width = RECALL_BANDS[level]
        for _ in range(200):
            p = jittered_band_probability(level, 0.5, rng)
            assert low <= p < low + width

    def test_expected_bands(self):
        assert RECALL_BANDS[BatchRiskLevel.RECALL_RECOMMENDED] == (0.85, 0.10)
        assert RECALL_BANDS[BatchRiskLevel.POTENTIAL_RISK] == (0.50, 0.20)
        assert RECALL_BANDS[BatchRiskLevel.MONITORING] == (0.15, 0.15)
        assert RECALL_BANDS[BatchRiskLevel.SAFE] == (0.0, 0.05)

    def test_seeded_draws_repeat(self):
        a = [jittered_band_probability(BatchRiskLevel.MONITORING, 0.3, random.Random(1)) for _ in range(3)]
        b = [jittered_band_probability(BatchRiskLevel.MONITORING, 0.3, random.Random(1)) for _ in range(3)]
        assert a == b


class TestBandMidpointProbability:
    """Test the deterministic band model."""

    def test_midpoints(self):
        rng = random.Random()
        assert band_midpoint_probability(BatchRiskLevel.SAFE, 0.0, rng) == pytest.approx(0.025)
        assert band_midpoint_probability(BatchRiskLevel.MONITORING, 0.3, rng) == pytest.approx(0.225)
        assert band_midpoint_probability(BatchRiskLevel.POTENTIAL_RISK, 0.6, rng) == pytest.approx(0.6)
        assert band_midpoint_probability(BatchRiskLevel.RECALL_RECOMMENDED, 0.9, rng) == pytest.approx(0.9)
