"""Risk classification rules — the core business logic.

Maps raw scores onto the categorical verdicts shown to users, together with
the fixed message / recommendation templates for each category.

Usage:
    from pharmarisk.domain.classification import classify_price, classify_batch_risk

    verdict = classify_price(3000, reference, z=-7.5, is_anomaly=True)
    level, advice = classify_batch_risk(0.52)
"""

import math
from typing import NamedTuple

from pharmarisk.schemas.batch import BatchRiskLevel
from pharmarisk.schemas.price import AnomalyType, PriceRiskLevel
from pharmarisk.schemas.reference import DrugPriceReference

# Price bands, as multiples of the reference min / max
EXTREME_LOW_FACTOR = 0.5
SUSPICIOUS_LOW_FACTOR = 0.75
EXTREME_HIGH_FACTOR = 1.5
SUSPICIOUS_HIGH_FACTOR = 1.2
Z_SCORE_FLAG = 2.0

# Batch risk thresholds, checked high to low
RECALL_THRESHOLD = 0.7
POTENTIAL_RISK_THRESHOLD = 0.5
MONITORING_THRESHOLD = 0.25

BATCH_RECOMMENDATIONS = {
    BatchRiskLevel.RECALL_RECOMMENDED: (
        "HIGH RISK: This batch shows patterns consistent with contamination or defect. "
        "Recommend immediate investigation and potential recall."
    ),
    BatchRiskLevel.POTENTIAL_RISK: (
        "ELEVATED RISK: Complaint patterns are concerning. Enhanced monitoring and "
        "investigation recommended. This batch may be recalled within 3 weeks."
    ),
    BatchRiskLevel.MONITORING: (
        "MODERATE CONCERN: Some complaints detected. Continue monitoring for emerging patterns."
    ),
    BatchRiskLevel.SAFE: (
        "LOW RISK: No significant complaint patterns detected. Batch appears safe."
    ),
}


class PriceVerdict(NamedTuple):
    anomaly_type: AnomalyType
    risk_level: PriceRiskLevel
    message: str
    recommendation: str


def _pct(value: float) -> int:
    """Round half up to a whole percentage."""
    return math.floor(value * 100 + 0.5)


def classify_price(
    price: float,
    reference: DrugPriceReference,
    z: float,
    is_anomaly: bool,
) -> PriceVerdict:
    """Classify a price against its reference profile.

    Rules are checked in priority order; the first match wins:
      1. price < 0.5·min   → EXTREME_LOW / DANGER
      2. price < 0.75·min  → SUSPICIOUS_LOW / WARNING
      3. price > 1.5·max   → EXTREME_HIGH / WARNING
      4. price > 1.2·max   → SUSPICIOUS_HIGH / CAUTION
      5. anomaly and |z| > 2 → SUSPICIOUS_LOW/HIGH (by sign of z) / CAUTION
      6. otherwise         → NORMAL / SAFE

    Args:
        price: Observed price.
        reference: Price profile for the drug.
        z: Z-score of the price against the reference.
        is_anomaly: Whether the anomaly score exceeded the contamination level.

    Returns:
        PriceVerdict with type, level and user-facing text.

    Examples:
        >>> ref = DrugPriceReference(drug_id="d", generic_name="Trimol", average_price=12000,
        ...     min_price=10800, max_price=14400, std_deviation=1200)
        >>> classify_price(3000, ref, z=-7.5, is_anomaly=True).anomaly_type
        <AnomalyType.EXTREME_LOW: 'extreme_low'>
        >>> classify_price(12500, ref, z=0.4, is_anomaly=False).risk_level
        <PriceRiskLevel.SAFE: 'safe'>
    """
    avg = reference.average_price
    below = _pct(1 - price / avg) if avg else 0
    above = _pct(price / avg - 1) if avg else 0

    if price < reference.min_price * EXTREME_LOW_FACTOR:
        return PriceVerdict(
            AnomalyType.EXTREME_LOW,
            PriceRiskLevel.DANGER,
            f"Price is {below}% below average. Extreme deviation may indicate counterfeit medication.",
            "Do NOT purchase. This price is dangerously low and may indicate fake or expired "
            "medication. Report to authorities.",
        )
    if price < reference.min_price * SUSPICIOUS_LOW_FACTOR:
        return PriceVerdict(
            AnomalyType.SUSPICIOUS_LOW,
            PriceRiskLevel.WARNING,
            f"Price is significantly below market rate ({below}% below average).",
            "Exercise caution. Verify pharmacy credentials and check medication packaging "
            "carefully before use.",
        )
    if price > reference.max_price * EXTREME_HIGH_FACTOR:
        return PriceVerdict(
            AnomalyType.EXTREME_HIGH,
            PriceRiskLevel.WARNING,
            f"Price is {above}% above average. This may be price gouging.",
            "Shop around for better prices. This pharmacy may be overcharging significantly.",
        )
    if price > reference.max_price * SUSPICIOUS_HIGH_FACTOR:
        return PriceVerdict(
            AnomalyType.SUSPICIOUS_HIGH,
            PriceRiskLevel.CAUTION,
            f"Price is above typical market range ({above}% above average).",
            "Consider comparing prices at other pharmacies before purchasing.",
        )
    if is_anomaly and abs(z) > Z_SCORE_FLAG:
        return PriceVerdict(
            AnomalyType.SUSPICIOUS_LOW if z < 0 else AnomalyType.SUSPICIOUS_HIGH,
            PriceRiskLevel.CAUTION,
            f"Price deviates from typical patterns (z-score: {z:.2f}).",
            "Price is unusual for this medication. Verify with pharmacist.",
        )
    return PriceVerdict(
        AnomalyType.NORMAL,
        PriceRiskLevel.SAFE,
        "Price is within expected market range.",
        "This appears to be a fair market price for this medication.",
    )


def classify_batch_risk(risk_score: float) -> tuple[BatchRiskLevel, str]:
    """Map a composite batch risk score onto a level and its recommendation.

    >>> classify_batch_risk(0.72)[0]
    <BatchRiskLevel.RECALL_RECOMMENDED: 'recall_recommended'>
    >>> classify_batch_risk(0.25)[0]
    <BatchRiskLevel.MONITORING: 'monitoring'>
    >>> classify_batch_risk(0.0)[0]
    <BatchRiskLevel.SAFE: 'safe'>
    """
    if risk_score >= RECALL_THRESHOLD:
        level = BatchRiskLevel.RECALL_RECOMMENDED
    elif risk_score >= POTENTIAL_RISK_THRESHOLD:
        level = BatchRiskLevel.POTENTIAL_RISK
    elif risk_score >= MONITORING_THRESHOLD:
        level = BatchRiskLevel.MONITORING
    else:
        level = BatchRiskLevel.SAFE
    return level, BATCH_RECOMMENDATIONS[level]
