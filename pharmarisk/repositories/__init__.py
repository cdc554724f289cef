"""Data-access layer: reference dataset and complaint log."""

from pharmarisk.repositories.complaint_log import ComplaintLog, InvalidComplaintError
from pharmarisk.repositories.reference_store import (
    CatalogLoadError,
    ReferenceStore,
    load_dataset,
)

__all__ = [
    "CatalogLoadError",
    "ComplaintLog",
    "InvalidComplaintError",
    "ReferenceStore",
    "load_dataset",
]
