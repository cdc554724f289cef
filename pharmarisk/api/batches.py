"""Batch endpoints for recall-risk checks and complaint submission.

Provides API endpoints for:
- Scoring a single production batch
- Listing every batch at elevated risk
- Reporting an adverse event against a batch
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from pharmarisk.dependencies import get_facade
from pharmarisk.facade import RiskQueryFacade
from pharmarisk.logging_config import get_logger
from pharmarisk.repositories.complaint_log import InvalidComplaintError
from pharmarisk.schemas.batch import BatchRiskAnalysis
from pharmarisk.schemas.complaint import BatchComplaint
from pharmarisk.schemas.requests import ComplaintSubmitRequest

logger = get_logger(__name__)
router = APIRouter()


# Declared before /{batch_number} so "high-risk" is not captured as a batch number
@router.get("/high-risk", response_model=List[BatchRiskAnalysis])
def list_high_risk_batches(
    facade: RiskQueryFacade = Depends(get_facade),
) -> List[BatchRiskAnalysis]:
    """Every known batch at potential_risk or recall_recommended, riskiest first."""
    return facade.high_risk_batches()


@router.get("/{batch_number}", response_model=BatchRiskAnalysis)
def get_batch_risk(
    batch_number: str,
    facade: RiskQueryFacade = Depends(get_facade),
) -> BatchRiskAnalysis:
    """Score a batch from its current complaint history.

    Unknown batches return a zero-score ``safe`` analysis, not 404.
    """
    return facade.score_batch(batch_number)


@router.post(
    "/{batch_number}/complaints",
    response_model=BatchComplaint,
    status_code=status.HTTP_201_CREATED,
)
def submit_complaint(
    batch_number: str,
    request: ComplaintSubmitRequest,
    facade: RiskQueryFacade = Depends(get_facade),
) -> BatchComplaint:
    """Report an adverse event against a batch.

    Args:
        batch_number: Batch the complaint concerns.
        request: Drug id, symptom and severity.
        facade: Shared risk query facade.

    Returns:
        The stored complaint, including its generated id and report date.

    Raises:
        HTTPException: 422 if the complaint is rejected.
    """
    try:
        return facade.submit_complaint(
            batch_number, request.drug_id, request.symptom, request.severity
        )
    except InvalidComplaintError as e:
        logger.warning("complaint_rejected", batch_number=batch_number, error=str(e))
        raise HTTPException(status_code=422, detail=str(e))
