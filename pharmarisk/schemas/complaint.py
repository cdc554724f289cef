"""Adverse-event complaint schemas."""

from datetime import date
from enum import Enum

from pharmarisk.schemas.base import FrozenCounts, Record


class Severity(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class BatchComplaint(Record):
    """One adverse-event report tied to a production batch."""

    id: str
    batch_number: str
    drug_id: str
    report_date: date
    symptom: str
    severity: Severity
    verified: bool = False


class ComplaintPattern(Record):
    """Aggregated view of a batch's complaints.

    ``temporal_pattern`` holds one count per calendar month that has at least
    one complaint, oldest first; ``temporal_buckets`` carries the matching
    ``YYYY-MM`` labels.
    """

    symptom_frequency: FrozenCounts
    severity_distribution: FrozenCounts
    temporal_pattern: tuple[int, ...]
    temporal_buckets: tuple[str, ...] = ()

    @property
    def unique_symptoms(self) -> tuple[str, ...]:
        return tuple(self.symptom_frequency)

    @property
    def total(self) -> int:
        return sum(self.severity_distribution.values())
