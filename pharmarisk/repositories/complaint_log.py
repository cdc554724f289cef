"""Append-only log of adverse-event complaints."""

import logging
import threading
import uuid
from datetime import date
from typing import Callable, Iterable, List, Optional, Tuple

from pharmarisk.schemas.complaint import BatchComplaint, Severity

logger = logging.getLogger(__name__)


class InvalidComplaintError(ValueError):
    """Raised when a complaint submission is missing required fields."""


class ComplaintLog:
    """The only mutable state in the engine.

    Appends are serialised by a lock.  Reads return an immutable snapshot, so
    a scoring pass never observes a half-written log and never blocks a
    writer for longer than a tuple copy.
    """

    def __init__(
        self,
        seed: Optional[Iterable[BatchComplaint]] = None,
        today: Callable[[], date] = date.today,
    ):
        self._lock = threading.Lock()
        self._entries: List[BatchComplaint] = list(seed or [])
        self._today = today

    # ── reads ────────────────────────────────────────────────────────

    def snapshot(self) -> Tuple[BatchComplaint, ...]:
        with self._lock:
            return tuple(self._entries)

    def for_batch(self, batch_number: str) -> List[BatchComplaint]:
        return [c for c in self.snapshot() if c.batch_number == batch_number]

    def count(self) -> int:
        with self._lock:
            return len(self._entries)

    # ── writes ───────────────────────────────────────────────────────

    def submit(
        self,
        batch_number: str,
        drug_id: str,
        symptom: str,
        severity: "Severity | str",
    ) -> BatchComplaint:
        """Record a new, unverified complaint dated today.

        Raises:
            InvalidComplaintError: On a blank batch number / symptom or an
                unknown severity.
        """
        if not batch_number or not batch_number.strip():
            raise InvalidComplaintError("Batch number cannot be empty")
        if not symptom or not symptom.strip():
            raise InvalidComplaintError("Symptom cannot be empty")
        try:
            sev = Severity(severity)
        except ValueError:
            allowed = ", ".join(s.value for s in Severity)
            raise InvalidComplaintError(
                f"Unknown severity {severity!r} (expected one of: {allowed})"
            ) from None

        complaint = BatchComplaint(
            id=f"c_{uuid.uuid4().hex}",
            batch_number=batch_number.strip(),
            drug_id=drug_id,
            report_date=self._today(),
            symptom=symptom.strip(),
            severity=sev,
            verified=False,
        )
        with self._lock:
            self._entries.append(complaint)
        logger.debug("Complaint %s appended for batch %s", complaint.id, complaint.batch_number)
        return complaint

    def clear(self) -> None:
        """Drop every entry; used by container teardown only."""
        with self._lock:
            self._entries.clear()
