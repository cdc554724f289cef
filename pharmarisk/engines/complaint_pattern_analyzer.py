"""Aggregates a batch's complaints into frequency, severity and monthly counts."""

from collections import Counter
from typing import Iterable

from pharmarisk.schemas.complaint import BatchComplaint, ComplaintPattern, Severity


def normalize_symptom(symptom: str) -> str:
    """Lower-case and collapse whitespace so free-text symptoms group together.

    >>> normalize_symptom("  Severe  Headache ")
    'severe headache'
    """
    return " ".join(symptom.lower().split())


class ComplaintPatternAnalyzer:
    """Summarise complaints for risk scoring.

    Months with no complaints are not represented in the temporal pattern;
    trend analysis only compares the last two non-empty months.
    """

    def analyze(self, complaints: Iterable[BatchComplaint]) -> ComplaintPattern:
        symptoms: Counter = Counter()
        severities = {s.value: 0 for s in Severity}
        months: Counter = Counter()

        for c in complaints:
            symptoms[normalize_symptom(c.symptom)] += 1
            severities[Severity(c.severity).value] += 1
            months[f"{c.report_date.year:04d}-{c.report_date.month:02d}"] += 1

        buckets = sorted(months)
        return ComplaintPattern(
            symptom_frequency=dict(symptoms),
            severity_distribution=severities,
            temporal_pattern=[months[b] for b in buckets],
            temporal_buckets=buckets,
        )
