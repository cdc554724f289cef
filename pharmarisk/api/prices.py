"""Price endpoints: single and bulk price checks, plus offer ranking.

Scoring never fails for data reasons (unknown drugs come back as ``caution``
results), so these endpoints only return 422 on malformed request bodies.
"""

from typing import List

from fastapi import APIRouter, Depends

from pharmarisk.dependencies import get_facade
from pharmarisk.facade import RiskQueryFacade
from pharmarisk.logging_config import get_logger
from pharmarisk.schemas.price import BulkPriceEntry, PharmacyOffer, PriceAnomalyResult, RankedOffer
from pharmarisk.schemas.requests import BulkPriceRequest, PriceCheckRequest

logger = get_logger(__name__)
router = APIRouter()


def _offers(request: BulkPriceRequest) -> List[PharmacyOffer]:
    return [
        PharmacyOffer(pharmacy=o.pharmacy, price=o.price, distance=o.distance, verified=o.verified)
        for o in request.offers
    ]


@router.post("/score", response_model=PriceAnomalyResult)
def score_price(
    request: PriceCheckRequest,
    facade: RiskQueryFacade = Depends(get_facade),
) -> PriceAnomalyResult:
    """Check one observed price for a drug.

    Args:
        request: Drug name and observed price.
        facade: Shared risk query facade.

    Returns:
        Anomaly verdict with price analysis.
    """
    return facade.score_price(request.drug_name, request.price)


@router.post("/bulk", response_model=List[BulkPriceEntry])
def score_bulk(
    request: BulkPriceRequest,
    facade: RiskQueryFacade = Depends(get_facade),
) -> List[BulkPriceEntry]:
    """Check several pharmacies' prices for one drug, in request order."""
    return facade.score_bulk(request.drug_name, _offers(request))


@router.post("/compare", response_model=List[RankedOffer])
def compare_offers(
    request: BulkPriceRequest,
    facade: RiskQueryFacade = Depends(get_facade),
) -> List[RankedOffer]:
    """Rank offers for display: trustworthy offers first, cheapest first."""
    ranked = facade.compare_offers(request.drug_name, _offers(request))
    logger.info("offers_ranked", drug_name=request.drug_name, offers=len(ranked))
    return ranked
