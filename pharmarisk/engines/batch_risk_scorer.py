"""Batch recall-risk scorer.

Scores are recomputed from the current complaint log on every call; nothing
derived is cached between calls.
"""

import logging
import random
from typing import List

from pharmarisk.domain import scoring
from pharmarisk.domain.classification import classify_batch_risk
from pharmarisk.domain.recall import RecallProbabilityModel, jittered_band_probability
from pharmarisk.engines.complaint_pattern_analyzer import ComplaintPatternAnalyzer
from pharmarisk.repositories.complaint_log import ComplaintLog
from pharmarisk.repositories.reference_store import ReferenceStore
from pharmarisk.schemas.batch import BatchRiskAnalysis, BatchRiskLevel, TrendAnalysis
from pharmarisk.schemas.complaint import BatchComplaint, Severity

logger = logging.getLogger(__name__)

BATCH_NOT_FOUND = "Batch not found in database"
ELEVATED_LEVELS = (BatchRiskLevel.POTENTIAL_RISK, BatchRiskLevel.RECALL_RECOMMENDED)


class BatchRiskScorer:
    """Combines a batch's complaint pattern into a recall-risk assessment."""

    def __init__(
        self,
        reference_store: ReferenceStore,
        complaint_log: ComplaintLog,
        analyzer: ComplaintPatternAnalyzer,
        rng: random.Random,
        recall_model: RecallProbabilityModel = jittered_band_probability,
    ):
        self.references = reference_store
        self.complaints = complaint_log
        self.analyzer = analyzer
        self.rng = rng
        self.recall_model = recall_model

    # ── main entry points ────────────────────────────────────────────

    def score_batch(self, batch_number: str) -> BatchRiskAnalysis:
        batch = self.references.get_batch(batch_number)
        if batch is None:
            logger.info("Batch %r not in reference dataset", batch_number)
            return BatchRiskAnalysis(
                batch_number=batch_number,
                drug_name="Unknown",
                risk_level=BatchRiskLevel.SAFE,
                risk_score=0.0,
                recommendation=BATCH_NOT_FOUND,
                predicted_recall_probability=0.0,
            )

        complaints = self.complaints.for_batch(batch_number)
        pattern = self.analyzer.analyze(complaints)
        n = len(complaints)

        risk_score = scoring.composite_risk_score(
            n,
            pattern.severity_distribution,
            pattern.temporal_pattern,
            len(pattern.symptom_frequency),
        )
        level, recommendation = classify_batch_risk(risk_score)
        probability = scoring.clamp(self.recall_model(level, risk_score, self.rng))

        logger.debug(
            "Batch %s: %d complaints, score=%.4f, level=%s",
            batch_number, n, risk_score, level.value,
        )

        return BatchRiskAnalysis(
            batch_number=batch_number,
            drug_name=batch.drug_name,
            risk_level=level,
            risk_score=risk_score,
            complaint_count=n,
            unique_symptoms=pattern.unique_symptoms,
            trend_analysis=TrendAnalysis(
                is_increasing=scoring.is_increasing(pattern.temporal_pattern),
                change_rate=scoring.change_rate(pattern.temporal_pattern),
                days_monitored=self._days_monitored(complaints),
            ),
            recommendation=recommendation,
            predicted_recall_probability=probability,
        )

    def high_risk_batches(self) -> List[BatchRiskAnalysis]:
        """Every known batch at potential_risk or above, riskiest first."""
        analyses = [self.score_batch(b.batch_number) for b in self.references.list_batches()]
        elevated = [a for a in analyses if a.risk_level in ELEVATED_LEVELS]
        return sorted(elevated, key=lambda a: a.risk_score, reverse=True)

    def submit_complaint(
        self,
        batch_number: str,
        drug_id: str,
        symptom: str,
        severity: "Severity | str",
    ) -> BatchComplaint:
        return self.complaints.submit(batch_number, drug_id, symptom, severity)

    # ── helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _days_monitored(complaints: List[BatchComplaint]) -> int:
        """Inclusive span between the first and last report dates."""
        if not complaints:
            return 0
        dates = [c.report_date for c in complaints]
        return (max(dates) - min(dates)).days + 1
