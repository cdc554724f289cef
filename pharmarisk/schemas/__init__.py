"""Pydantic schemas for engine records and request validation."""

from pharmarisk.schemas.batch import BatchRiskAnalysis, BatchRiskLevel, TrendAnalysis
from pharmarisk.schemas.complaint import BatchComplaint, ComplaintPattern, Severity
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
from pharmarisk.schemas.reference import (
    BatchInfo,
    DrugCatalogEntry,
    DrugPriceReference,
    ReferenceDataset,
)

__all__ = [
    "BatchInfo", "DrugCatalogEntry", "DrugPriceReference", "ReferenceDataset",
    "BatchComplaint", "ComplaintPattern", "Severity",
    "AnomalyType", "PriceRiskLevel", "ExpectedRange", "PriceAnalysis",
    "PriceAnomalyResult", "PharmacyOffer", "BulkPriceEntry", "RankedOffer",
    "BatchRiskAnalysis", "BatchRiskLevel", "TrendAnalysis",
]
