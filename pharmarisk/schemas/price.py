"""Price anomaly schemas and supporting enums."""

from enum import Enum
from typing import Optional

from pydantic import Field

from pharmarisk.schemas.base import Record


class AnomalyType(str, Enum):
    NORMAL = "normal"
    SUSPICIOUS_LOW = "suspicious_low"
    SUSPICIOUS_HIGH = "suspicious_high"
    EXTREME_LOW = "extreme_low"
    EXTREME_HIGH = "extreme_high"


class PriceRiskLevel(str, Enum):
    SAFE = "safe"
    CAUTION = "caution"
    WARNING = "warning"
    DANGER = "danger"


class ExpectedRange(Record):
    min: float = 0.0
    max: float = 0.0


class PriceAnalysis(Record):
    """Where a price sits against its reference profile.

    ``formatted_price`` renders the input in the reference currency; both
    currency fields stay empty when there is no reference.
    """

    input_price: float
    currency: Optional[str] = None
    formatted_price: Optional[str] = None
    expected_range: ExpectedRange = ExpectedRange()
    average_price: float = 0.0
    z_score: float = 0.0
    percentile_rank: float = 0.0


class PriceAnomalyResult(Record):
    """Verdict for one observed price."""

    is_anomaly: bool
    anomaly_score: float = Field(ge=0.0, le=1.0)
    anomaly_type: AnomalyType
    risk_level: PriceRiskLevel
    message: str
    recommendation: str
    price_analysis: PriceAnalysis


class PharmacyOffer(Record):
    """A price quoted by one pharmacy."""

    pharmacy: str
    price: float
    distance: Optional[str] = None
    verified: bool = True


class BulkPriceEntry(Record):
    pharmacy: str
    price: float
    analysis: PriceAnomalyResult


class RankedOffer(Record):
    """A pharmacy offer annotated for side-by-side comparison."""

    pharmacy: str
    price: float
    distance: Optional[str] = None
    verified: bool = True
    is_suspicious: bool
    suspicion_reason: Optional[str] = None
    anomaly_score: float
    analysis: PriceAnomalyResult
