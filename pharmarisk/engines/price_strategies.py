"""Interchangeable price anomaly scoring strategies.

Each strategy turns (price, reference profile) into an anomaly score in
[0, 1].  Classification is strategy-independent, so call sites choose a
strategy explicitly via ``StrategyKind`` and get the same result shape.
"""

import logging
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from pharmarisk.domain.scoring import (
    clamp,
    isolation_correction,
    isolation_depth,
    range_signal,
    z_component,
    z_score,
)
from pharmarisk.schemas.reference import DrugPriceReference

logger = logging.getLogger(__name__)

JITTER_WIDTH = 0.1


class StrategyKind(str, Enum):
    ISOLATION_DEPTH = "isolation_depth"
    ZSCORE_SIGMOID = "zscore_sigmoid"
    IQR = "iqr"


class PriceAnomalyStrategy(Protocol):
    """Protocol for anomaly scoring implementations."""

    kind: StrategyKind

    def score(self, price: float, reference: DrugPriceReference) -> float:
        """
        Score how anomalous ``price`` is for the referenced drug.

        Returns:
            Anomaly score in [0, 1]; higher is more anomalous.
        """
        ...


@dataclass(frozen=True)
class SignalWeights:
    """
    Weights for the combined isolation-depth score.

    Default weights:
    - Isolation depth: 40%
    - Z-score: 30%
    - Range breach: 30%
    """
    isolation: float = 0.4
    z: float = 0.3
    range: float = 0.3


class IsolationDepthStrategy:
    """Isolation-forest-style score blended with z-score and range signals.

    For each of ``num_trees`` trials the price is jittered slightly and placed
    among the reference history plus average/min/max; its gap to the nearest
    neighbour gives a pseudo isolation depth.  The mean depth is normalised
    with ``c(n)`` into ``2^(-depth/c(n))``.

    Scores are statistically stable but not bit-exact across calls unless
    the injected ``rng`` is seeded identically.
    """

    kind = StrategyKind.ISOLATION_DEPTH

    def __init__(
        self,
        rng: random.Random,
        num_trees: int = 100,
        weights: SignalWeights = SignalWeights(),
    ):
        if num_trees < 1:
            raise ValueError(f"num_trees must be >= 1, got {num_trees}")
        self.rng = rng
        self.num_trees = num_trees
        self.weights = weights

    def isolation_score(self, price: float, ref: DrugPriceReference) -> float:
        base = [*ref.price_history, ref.average_price, ref.min_price, ref.max_price]
        total_depth = 0.0
        for _ in range(self.num_trees):
            jittered = price + (self.rng.random() - 0.5) * JITTER_WIDTH
            ordered = sorted(base + [jittered])
            total_depth += isolation_depth(jittered, ordered, ref.min_price, ref.max_price)

        avg_depth = total_depth / self.num_trees
        c_n = isolation_correction(len(ref.price_history) + 3)
        return 2 ** (-avg_depth / c_n)

    def score(self, price: float, reference: DrugPriceReference) -> float:
        iso = self.isolation_score(price, reference)
        z = z_score(price, reference.average_price, reference.std_deviation)
        rng_signal = range_signal(
            price, reference.min_price, reference.max_price, reference.average_price
        )
        combined = (
            iso * self.weights.isolation
            + z_component(z) * self.weights.z
            + rng_signal * self.weights.range
        )
        logger.debug(
            "isolation=%.4f z=%.3f range=%.4f combined=%.4f (%s @ %s)",
            iso, z, rng_signal, combined, reference.generic_name, price,
        )
        return clamp(combined)


class ZScoreSigmoidStrategy:
    """Sigmoid of the population z-score against the price history.

    Returns 0 with fewer than two history points or zero spread.
    """

    kind = StrategyKind.ZSCORE_SIGMOID

    def score(self, price: float, reference: DrugPriceReference) -> float:
        history = reference.price_history
        if len(history) < 2:
            return 0.0
        mean = sum(history) / len(history)
        variance = sum((p - mean) ** 2 for p in history) / len(history)
        std = math.sqrt(variance)
        if std == 0:
            return 0.0
        z = abs((price - mean) / std)
        return 1 / (1 + math.exp(-z + 2))


class IqrStrategy:
    """Relative deviation from the history mean plus IQR-outlier penalties."""

    kind = StrategyKind.IQR

    OUTLIER_PENALTY = 0.3
    DEEP_DISCOUNT_PENALTY = 0.4
    DEEP_DISCOUNT_FACTOR = 0.3

    def score(self, price: float, reference: DrugPriceReference) -> float:
        history = sorted(reference.price_history)
        if not history:
            return 0.0
        n = len(history)
        mean = sum(history) / n
        q1 = history[math.floor(n * 0.25)]
        q3 = history[math.floor(n * 0.75)]
        iqr = q3 - q1

        score = abs(price - mean) / mean if mean != 0 else 0.0
        if price < q1 - 1.5 * iqr or price > q3 + 1.5 * iqr:
            score += self.OUTLIER_PENALTY
        if price < mean * self.DEEP_DISCOUNT_FACTOR:
            score += self.DEEP_DISCOUNT_PENALTY
        return min(score, 1.0)


def build_strategy(
    kind: "StrategyKind | str",
    rng: random.Random,
    num_trees: int = 100,
) -> PriceAnomalyStrategy:
    """Construct the strategy named by ``kind``.

    Raises:
        ValueError: If ``kind`` is not a known strategy.
    """
    kind = StrategyKind(kind)
    if kind is StrategyKind.ISOLATION_DEPTH:
        return IsolationDepthStrategy(rng, num_trees=num_trees)
    if kind is StrategyKind.ZSCORE_SIGMOID:
        return ZScoreSigmoidStrategy()
    return IqrStrategy()
