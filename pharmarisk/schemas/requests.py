"""Pydantic schemas for HTTP request bodies.

Provides request validation for the price and complaint endpoints.
"""

from typing import List, Optional

from pydantic import Field, field_validator

from pharmarisk.schemas.base import Record
from pharmarisk.schemas.complaint import Severity


class PriceCheckRequest(Record):
    """Request model for a single price check."""

    drug_name: str = Field(..., min_length=1, max_length=200, examples=["Trimol"])
    price: float = Field(..., description="Observed price in the reference currency", examples=[3000])


class OfferIn(Record):
    pharmacy: str = Field(..., min_length=1, max_length=200)
    price: float
    distance: Optional[str] = None
    verified: bool = True


class BulkPriceRequest(Record):
    """Request model for bulk checks and offer comparison."""

    drug_name: str = Field(..., min_length=1, max_length=200)
    offers: List[OfferIn] = Field(..., max_length=100)


class ComplaintSubmitRequest(Record):
    """Request model for reporting an adverse event against a batch."""

    drug_id: str = Field(..., min_length=1, max_length=100)
    symptom: str = Field(..., min_length=1, max_length=500)
    severity: Severity

    @field_validator("symptom")
    @classmethod
    def validate_symptom(cls, v: str) -> str:
        """Reject symptoms that are only whitespace.

        Raises:
            ValueError: If the symptom is blank.
        """
        v = v.strip()
        if not v:
            raise ValueError("Symptom cannot be empty")
        return v
