"""Price anomaly scorer: flags prices that suggest counterfeit stock or gouging.

Never raises: missing reference data, invalid prices and unexpected scoring
failures all degrade to a ``caution`` result with an explanatory message.
"""

import logging
import math
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from pharmarisk.domain.classification import classify_price
from pharmarisk.domain.currency import format_price
from pharmarisk.domain.scoring import percentile_rank, z_score
from pharmarisk.engines.price_strategies import PriceAnomalyStrategy
from pharmarisk.repositories.reference_store import ReferenceStore
from pharmarisk.schemas.price import (
    AnomalyType,
    BulkPriceEntry,
    ExpectedRange,
    PharmacyOffer,
    PriceAnalysis,
    PriceAnomalyResult,
    PriceRiskLevel,
    RankedOffer,
)
from pharmarisk.schemas.reference import DrugPriceReference

logger = logging.getLogger(__name__)

NO_REFERENCE_MESSAGE = "No price reference data available for this medication"
INVALID_PRICE_MESSAGE = "Price must be a finite, non-negative number"
UNAVAILABLE_MESSAGE = "Price analysis is temporarily unavailable for this medication"
COMPARE_RECOMMENDATION = "Compare with multiple pharmacies before purchasing"

SUSPICIOUS_LEVELS = (PriceRiskLevel.WARNING, PriceRiskLevel.DANGER)

OfferLike = Union[PharmacyOffer, Mapping[str, Any], Tuple[str, float]]


def _coerce_offer(offer: OfferLike) -> PharmacyOffer:
    if isinstance(offer, PharmacyOffer):
        return offer
    if isinstance(offer, Mapping):
        return PharmacyOffer.model_validate(offer)
    pharmacy, price = offer
    return PharmacyOffer(pharmacy=pharmacy, price=price)


class PriceAnomalyScorer:
    """Scores observed prices against per-drug reference profiles.

    Pipeline per price:
    1. Resolve the reference profile (fuzzy name match)
    2. Score with the configured strategy
    3. Compare the score with the contamination threshold
    4. Classify into anomaly type / risk level
    5. Attach z-score and percentile rank
    """

    def __init__(
        self,
        reference_store: ReferenceStore,
        strategy: PriceAnomalyStrategy,
        contamination: float = 0.1,
    ):
        self.references = reference_store
        self.strategy = strategy
        self.contamination = contamination

    # ── main entry points ────────────────────────────────────────────

    def score_price(self, drug_name: str, price: float) -> PriceAnomalyResult:
        if not self._valid_price(price):
            logger.warning("Rejected price %r for %s", price, drug_name)
            return self._neutral(price, INVALID_PRICE_MESSAGE)

        reference = self.references.resolve_price_reference(drug_name)
        if reference is None:
            logger.info("No price reference for %r", drug_name)
            return self._neutral(price, NO_REFERENCE_MESSAGE)

        return self._score_against(reference, price)

    def score_bulk(self, drug_name: str, offers: Iterable[OfferLike]) -> List[BulkPriceEntry]:
        """Score each offer independently; output order follows input order."""
        return [
            BulkPriceEntry(pharmacy=o.pharmacy, price=o.price, analysis=self.score_price(drug_name, o.price))
            for o in map(_coerce_offer, offers)
        ]

    def compare_offers(self, drug_name: str, offers: Iterable[OfferLike]) -> List[RankedOffer]:
        """Score offers and rank them for display.

        Offers rated warning or danger are suspicious and sort after the rest;
        within each group, cheaper offers come first.
        """
        ranked: List[RankedOffer] = []
        for offer in map(_coerce_offer, offers):
            analysis = self.score_price(drug_name, offer.price)
            suspicious = analysis.risk_level in SUSPICIOUS_LEVELS
            ranked.append(RankedOffer(
                pharmacy=offer.pharmacy,
                price=offer.price,
                distance=offer.distance,
                verified=offer.verified,
                is_suspicious=suspicious,
                suspicion_reason=analysis.message if suspicious else None,
                anomaly_score=analysis.anomaly_score,
                analysis=analysis,
            ))
        ranked.sort(key=lambda r: (r.is_suspicious, r.price))
        return ranked

    # ── helpers ──────────────────────────────────────────────────────

    def _score_against(self, ref: DrugPriceReference, price: float) -> PriceAnomalyResult:
        try:
            anomaly_score = self.strategy.score(price, ref)
        except Exception as exc:
            logger.exception("Anomaly scoring failed for %s @ %s: %s", ref.generic_name, price, exc)
            return self._neutral(price, UNAVAILABLE_MESSAGE)

        z = z_score(price, ref.average_price, ref.std_deviation)
        is_anomaly = anomaly_score > self.contamination
        verdict = classify_price(price, ref, z, is_anomaly)

        return PriceAnomalyResult(
            is_anomaly=is_anomaly,
            anomaly_score=anomaly_score,
            anomaly_type=verdict.anomaly_type,
            risk_level=verdict.risk_level,
            message=verdict.message,
            recommendation=verdict.recommendation,
            price_analysis=PriceAnalysis(
                input_price=price,
                currency=ref.currency,
                formatted_price=format_price(price, ref.currency),
                expected_range=ExpectedRange(min=ref.min_price, max=ref.max_price),
                average_price=ref.average_price,
                z_score=z,
                percentile_rank=percentile_rank(price, ref.price_history),
            ),
        )

    @staticmethod
    def _valid_price(price: Optional[float]) -> bool:
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            return False
        return math.isfinite(price) and price >= 0

    @staticmethod
    def _neutral(price: Any, message: str) -> PriceAnomalyResult:
        numeric = isinstance(price, (int, float)) and not isinstance(price, bool)
        echoed = float(price) if numeric and math.isfinite(price) else 0.0
        return PriceAnomalyResult(
            is_anomaly=False,
            anomaly_score=0.0,
            anomaly_type=AnomalyType.NORMAL,
            risk_level=PriceRiskLevel.CAUTION,
            message=message,
            recommendation=COMPARE_RECOMMENDATION,
            price_analysis=PriceAnalysis(input_price=echoed),
        )
