"""All scoring formulas — price signals and batch composite risk.

Every function here is pure and stateless.  Engines compose them; nothing
else should re-implement a formula.

Usage:
    from pharmarisk.domain.scoring import z_score, composite_risk_score

    z = z_score(3000, mean=12000, std=1200)  # -7.5
    risk = composite_risk_score(7, {"mild": 1, "moderate": 4, "severe": 2}, [7], 5)
"""

import math
from typing import Dict, Mapping, Sequence

EULER_GAMMA = 0.5772156649

SEVERITY_WEIGHTS: Dict[str, float] = {"mild": 0.1, "moderate": 0.3, "severe": 0.6}


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clip ``value`` into ``[low, high]``.

    >>> clamp(1.7)
    1.0
    >>> clamp(-0.2)
    0.0
    """
    return max(low, min(high, value))


# ── price signals ────────────────────────────────────────────────────


def z_score(price: float, mean: float, std: float) -> float:
    """Standard score of ``price``; 0 when the spread is degenerate.

    >>> z_score(13200, 12000, 1200)
    1.0
    >>> z_score(500, 100, 0)
    0.0
    """
    if std == 0:
        return 0.0
    return (price - mean) / std


def z_component(z: float) -> float:
    """Z-score contribution to the combined anomaly score, in [0, 1].

    >>> z_component(2.5)
    0.5
    >>> z_component(-12.0)
    1.0
    """
    return min(abs(z) / 5, 1.0)


def range_signal(price: float, low: float, high: float, average: float) -> float:
    """Fractional distance outside ``[low, high]`` relative to the average.

    Returns 0 inside the range (or when the average is 0), capped at 1.

    >>> range_signal(12500, 10800, 14400, 12000)
    0.0
    >>> range_signal(4800, 10800, 14400, 12000)
    0.5
    >>> range_signal(100000, 10800, 14400, 12000)
    1.0
    """
    if average == 0:
        return 0.0
    if price < low:
        return min((low - price) / average, 1.0)
    if price > high:
        return min((price - high) / average, 1.0)
    return 0.0


def isolation_correction(n: int) -> float:
    """Average path length of an unsuccessful BST search, ``c(n)``.

    The standard isolation-forest normaliser:
        c(n) = 2·(ln(n−1) + γ) − 2(n−1)/n

    >>> round(isolation_correction(8), 4)
    3.2963
    """
    if n <= 1:
        return 1.0
    return 2 * (math.log(n - 1) + EULER_GAMMA) - (2 * (n - 1)) / n


def isolation_depth(price: float, sorted_prices: Sequence[float], low: float, high: float) -> float:
    """Pseudo isolation depth of ``price`` within ``sorted_prices``.

    ``price`` must be an element of ``sorted_prices``.  Points far from their
    nearest neighbour (relative to the average gap across ``[low, high]``)
    isolate at shallower depth.
    """
    size = len(sorted_prices)
    idx = sorted_prices.index(price)

    below = abs(price - sorted_prices[idx - 1]) if idx > 0 else math.inf
    above = abs(sorted_prices[idx + 1] - price) if idx < size - 1 else math.inf
    nearest = min(below, above)

    avg_gap = (high - low) / size
    gap_ratio = nearest / max(avg_gap, 0.01)

    max_depth = math.ceil(math.log2(size))
    return min(max_depth, max(1, max_depth - math.log2(gap_ratio + 1)))


def percentile_rank(price: float, history: Sequence[float]) -> float:
    """Share of ``history`` at or below ``price``, as 0–100.

    >>> percentile_rank(12000, [11400, 11760, 12000, 12600, 12000])
    80.0
    >>> percentile_rank(5, [])
    0.0
    """
    if not history:
        return 0.0
    at_or_below = sum(1 for p in history if p <= price)
    return at_or_below / len(history) * 100


# ── batch composite ──────────────────────────────────────────────────


def count_score(n: int) -> float:
    """Complaint volume, saturating at ten reports, scaled to a 0.3 share.

    >>> round(count_score(7), 2)
    0.21
    """
    return min(n / 10, 1.0) * 0.3


def severity_score(distribution: Mapping[str, int], n: int) -> float:
    """Weighted mean complaint severity, scaled to a 0.3 share.

    >>> round(severity_score({"mild": 1, "moderate": 4, "severe": 2}, 7), 4)
    0.1071
    >>> severity_score({"mild": 0, "moderate": 0, "severe": 0}, 0)
    0.0
    """
    if n == 0:
        return 0.0
    weighted = sum(SEVERITY_WEIGHTS.get(sev, 0.0) * cnt for sev, cnt in distribution.items())
    return weighted / n * 0.3


def trend_score(temporal: Sequence[int]) -> float:
    """Growth between the last two monthly buckets, scaled to a 0.2 share.

    Zero unless the latest bucket exceeds the previous one.

    >>> round(trend_score([2, 6]), 2)
    0.6
    >>> trend_score([6, 2])
    0.0
    >>> trend_score([4])
    0.0
    """
    if len(temporal) < 2:
        return 0.0
    previous, latest = temporal[-2], temporal[-1]
    if latest > previous:
        return 0.2 * (latest / max(previous, 1))
    return 0.0


def diversity_score(unique_symptoms: int) -> float:
    """Symptom variety, saturating at five distinct symptoms, scaled to 0.2."""
    return min(unique_symptoms / 5, 1.0) * 0.2


def composite_risk_score(
    n: int,
    distribution: Mapping[str, int],
    temporal: Sequence[int],
    unique_symptoms: int,
) -> float:
    """Batch recall-risk score in [0, 1].

    Formula:
        risk = count + severity + trend + diversity, clipped to [0, 1]

    Every term is 0 for an empty complaint set.

    >>> round(composite_risk_score(7, {"mild": 1, "moderate": 4, "severe": 2}, [7], 5), 4)
    0.5171
    >>> composite_risk_score(0, {"mild": 0, "moderate": 0, "severe": 0}, [], 0)
    0.0
    """
    total = (
        count_score(n)
        + severity_score(distribution, n)
        + trend_score(temporal)
        + diversity_score(unique_symptoms)
    )
    return clamp(total)


def change_rate(temporal: Sequence[int]) -> float:
    """Relative change between the last two monthly buckets.

    >>> change_rate([2, 5])
    1.5
    >>> change_rate([0, 3])
    3.0
    >>> change_rate([4])
    0.0
    """
    if len(temporal) < 2:
        return 0.0
    previous, latest = temporal[-2], temporal[-1]
    return (latest - previous) / max(previous, 1)


def is_increasing(temporal: Sequence[int]) -> bool:
    return len(temporal) >= 2 and temporal[-1] > temporal[-2]
