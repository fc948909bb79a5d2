"""
Candidate pool filters.

Registry searches return rows for dissolved, foreign and placeholder
entities next to the live one. These predicates narrow the pool before
scoring, using only the metadata the caller attached to each record.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .models import CandidateRecord

REGISTRY_DOCUMENT_PREFIXES = "BDLMNTRP"
REGISTRY_MIN_DOCUMENT_LENGTH = 7


@dataclass(frozen=True)
class DocumentNumberFilter:
    """
    Keep records whose document number looks like a live registry filing.

    A record passes when its ``field`` metadata value is at least
    ``min_length`` characters long and starts with one of ``prefixes``
    (case-insensitive). Records without the field never pass.

    Example:
        keep = DocumentNumberFilter()
        keep(CandidateRecord("Acme LLC", metadata={"document_number": "L19000012345"}))  # True
        keep(CandidateRecord("Acme LLC", metadata={"document_number": "F12345"}))        # False
    """
    prefixes: str = REGISTRY_DOCUMENT_PREFIXES
    min_length: int = REGISTRY_MIN_DOCUMENT_LENGTH
    field: str = "document_number"

    def __call__(self, record: CandidateRecord) -> bool:
        number = str(record.metadata.get(self.field) or "").strip().upper()
        if not number or len(number) < self.min_length:
            return False
        return number[0] in self.prefixes.upper()

    def apply(self, records: Iterable[CandidateRecord]) -> list[CandidateRecord]:
        return [record for record in records if self(record)]


def limit_candidates(
    records: Iterable[CandidateRecord], max_candidates: Optional[int]
) -> list[CandidateRecord]:
    """Keep the first ``max_candidates`` records (all of them when None)."""
    records = list(records)
    if max_candidates is None:
        return records
    return records[: max(0, max_candidates)]
