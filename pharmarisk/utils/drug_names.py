"""Drug-name clean-up for reference lookups.

Product names arrive from barcode scans and pharmacy listings with dosage
strings attached ("Trimol 500mg/50mg").  Reference keys are bare names, so
dosage tokens are stripped before matching.
"""

import re
from typing import Iterator

_UNIT = r"(?:mcg|mg|ml|g)"
_NUMBER = r"\d+(?:[.,]\d+)?"

_COMBINED_DOSE = re.compile(
    rf"\s*{_NUMBER}\s*{_UNIT}?\s*/\s*{_NUMBER}\s*{_UNIT}?\b\s*", re.IGNORECASE
)
_SINGLE_DOSE = re.compile(rf"\s*{_NUMBER}\s*{_UNIT}\b\s*", re.IGNORECASE)

# Shorter words substring-match nearly every reference name
MIN_FALLBACK_WORD = 3


def strip_dosage(name: str) -> str:
    """Remove dosage tokens and collapse whitespace.

    >>> strip_dosage("Acetaminophen 500mg")
    'Acetaminophen'
    >>> strip_dosage("Kyupene 400mg/325mg tablets")
    'Kyupene tablets'
    >>> strip_dosage("Almagel 170 ml")
    'Almagel'
    """
    cleaned = _COMBINED_DOSE.sub(" ", name)
    cleaned = _SINGLE_DOSE.sub(" ", cleaned)
    return " ".join(cleaned.split())


def lookup_candidates(name: str) -> Iterator[str]:
    """Names to try, in order, when resolving a reference.

    The dosage-stripped name first, then each word of the original name.

    >>> list(lookup_candidates("Trimol Forte 500mg"))
    ['Trimol Forte', 'Trimol', 'Forte', '500mg']
    """
    seen = set()
    cleaned = strip_dosage(name)
    if cleaned:
        seen.add(cleaned.lower())
        yield cleaned
    for word in name.split():
        if len(word) < MIN_FALLBACK_WORD or word.lower() in seen:
            continue
        seen.add(word.lower())
        yield word
