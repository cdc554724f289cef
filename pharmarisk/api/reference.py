"""Reference-data endpoints: inspect and reload the active dataset.

Reloads always read the configured catalog (``CATALOG_PATH``, or the bundled
catalog when unset); the request cannot choose a file.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from pharmarisk.dependencies import get_facade
from pharmarisk.facade import RiskQueryFacade
from pharmarisk.logging_config import get_logger
from pharmarisk.repositories.reference_store import CatalogLoadError

logger = get_logger(__name__)
router = APIRouter()

RELOAD_FAILED_DETAIL = "Reload failed: reference dataset is invalid"


@router.get("/version")
def reference_version(facade: RiskQueryFacade = Depends(get_facade)) -> Dict[str, Any]:
    return {"version": facade.reference_version}


@router.post("/reload")
def reload_reference(facade: RiskQueryFacade = Depends(get_facade)) -> Dict[str, Any]:
    """Reload reference data from the configured catalog.

    Raises:
        HTTPException: 400 if the dataset cannot be loaded; the previous
            dataset stays active.
    """
    previous = facade.reference_version
    try:
        version = facade.reload_reference()
    except CatalogLoadError as e:
        logger.error("reference_reload_failed", error=str(e))
        raise HTTPException(status_code=400, detail=RELOAD_FAILED_DETAIL)
    return {"status": "reloaded", "previous_version": previous, "version": version}
