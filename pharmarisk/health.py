"""Health check endpoints with dependency checking.

Provides health checks for:
- Reference data availability (drug catalog, price profiles, batches)
- Complaint log availability
- Application status
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from pharmarisk import __version__
from pharmarisk.dependencies import get_facade
from pharmarisk.facade import RiskQueryFacade
from pharmarisk.logging_config import get_logger

router = APIRouter()
logger = get_logger(__name__)


def check_reference_data(facade: RiskQueryFacade) -> Dict[str, Any]:
    """Check that a reference dataset with price profiles is loaded.

    Args:
        facade: Shared risk query facade.

    Returns:
        Dict with status and optional error message.
    """
    try:
        stats = facade.reference_stats()
        if stats["drugs"] == 0:
            return {"healthy": False, "message": "Reference catalog has no drugs"}
        return {
            "healthy": True,
            "message": f"Reference data {stats['version']} loaded",
            **stats,
        }
    except Exception as e:
        logger.error("reference_health_check_failed", error=str(e))
        return {"healthy": False, "message": f"Reference data error: {str(e)}"}


def check_complaint_log(facade: RiskQueryFacade) -> Dict[str, Any]:
    """Check the complaint log answers queries.

    Args:
        facade: Shared risk query facade.

    Returns:
        Dict with status and the number of stored complaints.
    """
    try:
        return {"healthy": True, "message": "Complaint log available", "complaints": facade.complaint_count()}
    except Exception as e:
        logger.error("complaint_log_health_check_failed", error=str(e))
        return {"healthy": False, "message": f"Complaint log error: {str(e)}"}


@router.get("/health")
def health_check() -> Dict[str, Any]:
    """Basic health check - just app status.

    Returns:
        Simple health status.
    """
    return {"status": "healthy", "service": "pharmarisk", "version": __version__}


@router.get("/health/detailed")
def detailed_health_check(facade: RiskQueryFacade = Depends(get_facade)) -> Dict[str, Any]:
    """Detailed health check with dependency status.

    Checks:
    - Application status
    - Reference data
    - Complaint log

    Returns:
        Health status for all dependencies.
    """
    checks = {
        "reference_data": check_reference_data(facade),
        "complaint_log": check_complaint_log(facade),
    }

    all_healthy = all(check["healthy"] for check in checks.values())
    overall_status = "healthy" if all_healthy else "degraded"

    logger.info(
        "health_check_performed",
        status=overall_status,
        reference_data=checks["reference_data"]["healthy"],
        complaint_log=checks["complaint_log"]["healthy"],
    )

    return {
        "status": overall_status,
        "service": "pharmarisk",
        "version": __version__,
        "checks": checks,
    }


@router.get("/health/ready")
def readiness_check(facade: RiskQueryFacade = Depends(get_facade)) -> Dict[str, Any]:
    """Kubernetes-style readiness probe.

    Returns 200 once reference data is loaded, 503 otherwise.
    """
    if not check_reference_data(facade)["healthy"]:
        raise HTTPException(status_code=503, detail={"ready": False, "reason": "Reference data unavailable"})
    return {"ready": True}


@router.get("/health/live")
def liveness_check() -> Dict[str, Any]:
    """Kubernetes-style liveness probe.

    Returns:
        Live status.
    """
    return {"alive": True}
