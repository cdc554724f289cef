"""Recall-probability mapping.

The bands below are placeholders, not a calibrated curve: each risk level
maps to a fixed probability band and a value is drawn uniformly inside it.
The mapping is a plain callable so a calibrated model can replace it without
touching the scorer.

Usage:
    from pharmarisk.domain.recall import jittered_band_probability

    p = jittered_band_probability(BatchRiskLevel.POTENTIAL_RISK, 0.52, rng)
"""

import random
from typing import Callable, Dict, Tuple

from pharmarisk.schemas.batch import BatchRiskLevel

# (low, width): probability is drawn from [low, low + width)
RECALL_BANDS: Dict[BatchRiskLevel, Tuple[float, float]] = {
    BatchRiskLevel.RECALL_RECOMMENDED: (0.85, 0.10),
    BatchRiskLevel.POTENTIAL_RISK: (0.50, 0.20),
    BatchRiskLevel.MONITORING: (0.15, 0.15),
    BatchRiskLevel.SAFE: (0.0, 0.05),
}

RecallProbabilityModel = Callable[[BatchRiskLevel, float, random.Random], float]


def jittered_band_probability(
    level: BatchRiskLevel,
    risk_score: float,
    rng: random.Random,
) -> float:
    """Draw a recall probability from the band for ``level``.

    ``risk_score`` is accepted for interface compatibility and ignored.
    """
    low, width = RECALL_BANDS[level]
    return low + rng.random() * width


def band_midpoint_probability(
    level: BatchRiskLevel,
    risk_score: float,
    rng: random.Random,
) -> float:
    """Deterministic alternative: the centre of the level's band.

    >>> band_midpoint_probability(BatchRiskLevel.POTENTIAL_RISK, 0.6, random.Random())
    0.6
    """
    low, width = RECALL_BANDS[level]
    return low + width / 2
