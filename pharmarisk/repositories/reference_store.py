"""Read-only lookup surface over the versioned reference dataset."""

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from pydantic import ValidationError

from pharmarisk.schemas.complaint import BatchComplaint
from pharmarisk.schemas.reference import (
    BatchInfo,
    DrugCatalogEntry,
    DrugPriceReference,
    ReferenceDataset,
)
from pharmarisk.utils.drug_names import lookup_candidates

logger = logging.getLogger(__name__)

BUNDLED_CATALOG = Path(__file__).resolve().parent.parent / "data" / "reference_catalog.json"

# Multiples of the catalog price used to derive each price profile
MIN_FACTOR = 0.9
MAX_FACTOR = 1.2
STD_FACTOR = 0.1
HISTORY_FACTORS = (0.95, 0.98, 1.0, 1.05, 1.0)


class CatalogLoadError(ValueError):
    """Raised when a reference dataset cannot be read or validated."""


def load_dataset(path: Optional[Union[str, Path]] = None) -> ReferenceDataset:
    """Read and validate a reference dataset JSON file.

    Args:
        path: Dataset file; the bundled catalog when omitted.

    Returns:
        The validated dataset.

    Raises:
        CatalogLoadError: If the file is unreadable or fails validation.
    """
    source = Path(path) if path else BUNDLED_CATALOG
    try:
        return ReferenceDataset.model_validate_json(source.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as exc:
        raise CatalogLoadError(f"Could not load reference dataset from {source}: {exc}") from exc


def derive_price_reference(entry: DrugCatalogEntry) -> DrugPriceReference:
    """Build a price profile from a catalog entry's list price.

    The brand name is the lookup key.

    >>> ref = derive_price_reference(DrugCatalogEntry(id="uz_med_001", name="Trimol", price=12000))
    >>> (ref.min_price, ref.max_price, ref.std_deviation)
    (10800.0, 14400.0, 1200.0)
    """
    p = entry.price
    return DrugPriceReference(
        drug_id=entry.id,
        generic_name=entry.name,
        average_price=p,
        min_price=p * MIN_FACTOR,
        max_price=p * MAX_FACTOR,
        std_deviation=p * STD_FACTOR,
        price_history=tuple(p * f for f in HISTORY_FACTORS),
        currency=entry.currency,
    )


@dataclass(frozen=True)
class _Snapshot:
    dataset: ReferenceDataset
    price_references: Tuple[DrugPriceReference, ...]
    batches: Dict[str, BatchInfo] = field(default_factory=dict)


class ReferenceStore:
    """Holds drug price profiles and batch metadata.

    The whole dataset is swapped in one assignment on reload, so readers see
    either the old or the new version, never a mix.
    """

    def __init__(self, dataset: ReferenceDataset):
        self._reload_lock = threading.Lock()
        self._snapshot = self._build(dataset)

    @classmethod
    def from_file(cls, path: Optional[Union[str, Path]] = None) -> "ReferenceStore":
        return cls(load_dataset(path))

    @staticmethod
    def _build(dataset: ReferenceDataset) -> _Snapshot:
        return _Snapshot(
            dataset=dataset,
            price_references=tuple(derive_price_reference(d) for d in dataset.drugs),
            batches={b.batch_number: b for b in dataset.batches},
        )

    # ── reads ────────────────────────────────────────────────────────

    @property
    def version(self) -> str:
        return self._snapshot.dataset.version

    def price_references(self) -> List[DrugPriceReference]:
        return list(self._snapshot.price_references)

    def find_price_reference(self, name: str) -> Optional[DrugPriceReference]:
        """Case-insensitive, two-way substring match on the reference key.

        First match in catalog order wins; blank names never match.
        """
        needle = name.strip().lower()
        if not needle:
            return None
        for ref in self._snapshot.price_references:
            key = ref.generic_name.lower()
            if needle in key or key in needle:
                return ref
        return None

    def resolve_price_reference(self, drug_name: str) -> Optional[DrugPriceReference]:
        """Find a price profile, falling back from the cleaned name to single words."""
        for candidate in lookup_candidates(drug_name):
            ref = self.find_price_reference(candidate)
            if ref is not None:
                return ref
        return None

    def get_batch(self, batch_number: str) -> Optional[BatchInfo]:
        return self._snapshot.batches.get(batch_number)

    def list_batches(self) -> List[BatchInfo]:
        return list(self._snapshot.batches.values())

    def seed_complaints(self) -> List[BatchComplaint]:
        return list(self._snapshot.dataset.complaints)

    # ── reload ───────────────────────────────────────────────────────

    def reload(self, dataset: ReferenceDataset) -> str:
        """Replace the dataset; returns the new version."""
        snapshot = self._build(dataset)
        with self._reload_lock:
            previous = self._snapshot.dataset.version
            self._snapshot = snapshot
        logger.info("Reference dataset reloaded: %s -> %s", previous, dataset.version)
        return dataset.version

    def reload_from_file(self, path: Optional[Union[str, Path]] = None) -> str:
        """Load and install a dataset file; the current dataset stays on failure."""
        return self.reload(load_dataset(path))
