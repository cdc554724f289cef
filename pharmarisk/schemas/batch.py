"""Batch recall-risk schemas."""

from enum import Enum

from pydantic import Field

from pharmarisk.schemas.base import Record


class BatchRiskLevel(str, Enum):
    SAFE = "safe"
    MONITORING = "monitoring"
    POTENTIAL_RISK = "potential_risk"
    RECALL_RECOMMENDED = "recall_recommended"


class TrendAnalysis(Record):
    is_increasing: bool = False
    change_rate: float = 0.0
    days_monitored: int = 0


class BatchRiskAnalysis(Record):
    """Recall-risk assessment for one production batch."""

    batch_number: str
    drug_name: str
    risk_level: BatchRiskLevel
    risk_score: float = Field(ge=0.0, le=1.0)
    complaint_count: int = 0
    unique_symptoms: tuple[str, ...] = ()
    trend_analysis: TrendAnalysis = TrendAnalysis()
    recommendation: str
    predicted_recall_probability: float = Field(ge=0.0, le=1.0)
