"""Risk query facade — single entry point for all external interfaces.

The HTTP API, the CLI script and the mobile app's orchestration step all go
through this class instead of wiring scorers up directly.  If the internal
engines change only the container and this file need updating.

Usage::

    facade = RiskQueryFacade()                  # uses Settings() from .env
    result = facade.score_price("Trimol", 3000)
    batch = facade.score_batch("A93KD881")
    facade.close()
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from dependency_injector import providers

from pharmarisk.config import Settings
from pharmarisk.container import AppContainer
from pharmarisk.engines.price_anomaly_scorer import OfferLike
from pharmarisk.logging_config import get_logger
from pharmarisk.schemas.batch import BatchRiskAnalysis
from pharmarisk.schemas.complaint import BatchComplaint, Severity
from pharmarisk.schemas.price import BulkPriceEntry, PriceAnomalyResult, RankedOffer

logger = get_logger(__name__)


class RiskQueryFacade:
    """High-level API for price and batch risk queries.

    Hides all internal wiring (stores, strategies, scorers).  Returns only
    immutable pydantic records.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        container: Optional[AppContainer] = None,
    ):
        if container is None:
            container = AppContainer()
            if settings is not None:
                container.settings.override(providers.Object(settings))
        self._container = container
        self._container.init_resources()

        self._references = container.reference_store()
        self._complaints = container.complaint_log()
        self._prices = container.price_scorer()
        self._batches = container.batch_scorer()

        logger.info(
            "facade_initialized",
            reference_version=self._references.version,
            complaints=self._complaints.count(),
            strategy=self._prices.strategy.kind.value,
        )

    # ══════════════════════════════════════════════════════════════════
    # PRICE QUERIES
    # ══════════════════════════════════════════════════════════════════

    def score_price(self, drug_name: str, price: float) -> PriceAnomalyResult:
        result = self._prices.score_price(drug_name, price)
        logger.info(
            "price_scored",
            drug_name=drug_name,
            price=price,
            anomaly_type=result.anomaly_type.value,
            risk_level=result.risk_level.value,
            anomaly_score=round(result.anomaly_score, 4),
        )
        return result

    def score_bulk(self, drug_name: str, offers: Iterable[OfferLike]) -> List[BulkPriceEntry]:
        entries = self._prices.score_bulk(drug_name, offers)
        logger.info("bulk_prices_scored", drug_name=drug_name, offers=len(entries))
        return entries

    def compare_offers(self, drug_name: str, offers: Iterable[OfferLike]) -> List[RankedOffer]:
        ranked = self._prices.compare_offers(drug_name, offers)
        logger.info(
            "offers_compared",
            drug_name=drug_name,
            offers=len(ranked),
            suspicious=sum(1 for r in ranked if r.is_suspicious),
        )
        return ranked

    # ══════════════════════════════════════════════════════════════════
    # BATCH QUERIES
    # ══════════════════════════════════════════════════════════════════

    def score_batch(self, batch_number: str) -> BatchRiskAnalysis:
        analysis = self._batches.score_batch(batch_number)
        logger.info(
            "batch_scored",
            batch_number=batch_number,
            risk_level=analysis.risk_level.value,
            risk_score=round(analysis.risk_score, 4),
            complaints=analysis.complaint_count,
        )
        return analysis

    def high_risk_batches(self) -> List[BatchRiskAnalysis]:
        batches = self._batches.high_risk_batches()
        logger.info("high_risk_batches_listed", count=len(batches))
        return batches

    def submit_complaint(
        self,
        batch_number: str,
        drug_id: str,
        symptom: str,
        severity: Union[Severity, str],
    ) -> BatchComplaint:
        """Append a complaint; raises InvalidComplaintError on bad input."""
        complaint = self._batches.submit_complaint(batch_number, drug_id, symptom, severity)
        logger.info(
            "complaint_submitted",
            complaint_id=complaint.id,
            batch_number=complaint.batch_number,
            severity=complaint.severity.value,
            known_batch=self._references.get_batch(complaint.batch_number) is not None,
        )
        return complaint

    # ══════════════════════════════════════════════════════════════════
    # REFERENCE DATA
    # ══════════════════════════════════════════════════════════════════

    @property
    def reference_version(self) -> str:
        return self._references.version

    def reference_stats(self) -> Dict[str, Any]:
        return {
            "version": self._references.version,
            "drugs": len(self._references.price_references()),
            "batches": len(self._references.list_batches()),
        }

    def complaint_count(self) -> int:
        return self._complaints.count()

    def reload_reference(self, path: Optional[Union[str, Path]] = None) -> str:
        """Reload reference data; raises CatalogLoadError and keeps the old data on failure."""
        source = path if path is not None else self._container.settings().catalog_path
        version = self._references.reload_from_file(source)
        logger.info("reference_reloaded", version=version)
        return version

    # ── lifecycle ─────────────────────────────────────────────────────

    def close(self) -> None:
        """Release container resources (clears the in-memory complaint log)."""
        self._container.shutdown_resources()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
