"""
Domain models for name resolution.

These are pure data models with no dependencies. All of them are built once
per resolution call and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


class MatchType(Enum):
    """Which scoring rule produced a score."""
    EXACT = "exact"
    CORE_EXACT = "core_exact"
    SEARCH_IN_RESULT = "search_in_result"
    RESULT_IN_SEARCH = "result_in_search"
    WORD_MATCH = "word_match"
    FUZZY_HIGH = "fuzzy_high"
    FUZZY_MEDIUM = "fuzzy_medium"
    PARTIAL_OVERLAP = "partial_overlap"
    LOW_SIMILARITY = "low_similarity"


NAME_KEYS = ("display_name", "name", "text")


@dataclass(frozen=True)
class CandidateRecord:
    """
    One externally supplied name to compare against the query.

    Example:
        CandidateRecord(
            id="L19000012345",
            display_name="ACME ROOFING, LLC",
            metadata={"document_number": "L19000012345", "href": "..."},
        )
    """
    display_name: str
    """Name as the directory renders it"""

    id: Any = None
    """Opaque handle owned by the caller"""

    metadata: Mapping[str, Any] = field(default_factory=dict, hash=False)
    """Anything else the caller scraped; read-only"""

    def __post_init__(self) -> None:
        object.__setattr__(self, "display_name", self.display_name or "")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata or {})))

    @classmethod
    def from_value(cls, value: Any) -> "CandidateRecord":
        """
        Build a record from a plain string or a mapping.

        Mappings take their name from ``display_name``, ``name`` or ``text``
        (first present wins) and their handle from ``id``; every other key is
        kept as metadata.
        """
        if isinstance(value, CandidateRecord):
            return value
        if isinstance(value, str):
            return cls(display_name=value)
        if isinstance(value, Mapping):
            name_key = next((key for key in NAME_KEYS if key in value), None)
            if name_key is None:
                raise ValueError(f"candidate has no name field: {dict(value)!r}")
            metadata = {
                key: item for key, item in value.items() if key not in (name_key, "id")
            }
            return cls(
                display_name=str(value[name_key] or ""),
                id=value.get("id"),
                metadata=metadata,
            )
        raise ValueError(f"unsupported candidate value: {value!r}")


@dataclass(frozen=True, slots=True)
class MatchScore:
    """Score of one (variation, candidate name) pair."""
    score: float
    match_type: MatchType


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Best score found for one candidate across all query variations."""
    candidate: CandidateRecord
    score: float
    match_type: MatchType
    variation: Optional[str] = None
    """The query variation that produced the score"""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.candidate.id,
            "display_name": self.candidate.display_name,
            "metadata": dict(self.candidate.metadata),
            "score": self.score,
            "match_type": self.match_type.value,
            "variation": self.variation,
        }


@dataclass(frozen=True)
class ResolutionOutcome:
    """
    Result of resolving one query against a candidate pool.

    ``all_results`` holds every candidate, highest score first, whether or not
    it cleared the threshold. ``best_match`` is None when nothing did.
    """
    best_match: Optional[MatchResult]
    all_results: tuple[MatchResult, ...] = ()
    min_score: float = 0.65
    review_candidates: tuple[MatchResult, ...] = ()
    """Below-threshold candidates whose registry names contain the query's (or vice versa)"""

    @property
    def matched(self) -> bool:
        return self.best_match is not None

    @property
    def needs_review(self) -> bool:
        return self.best_match is None and bool(self.review_candidates)

    def to_dict(self) -> dict[str, Any]:
        return {
            "best_match": self.best_match.to_dict() if self.best_match else None,
            "min_score": self.min_score,
            "all_results": [result.to_dict() for result in self.all_results],
            "review_candidates": [result.to_dict() for result in self.review_candidates],
        }
