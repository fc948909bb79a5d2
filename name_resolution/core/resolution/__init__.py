"""
Business name resolution domain logic.

This module handles:
- Name normalization and legal suffix stripping
- Query variation generation (broad and strict strategies)
- Pairwise scoring with an ordered rule table
- Best-match selection over a candidate pool
- Candidate pool filters for registry searches

All logic is pure business logic with no I/O dependencies.
"""

from __future__ import annotations

from .filters import DocumentNumberFilter, limit_candidates
from .models import CandidateRecord, MatchResult, MatchScore, MatchType, ResolutionOutcome
from .normalization import canonicalize_registry_name, normalize
from .scoring import NameScorer, levenshtein_similarity, score_names
from .selector import DEFAULT_MIN_SCORE, best_for_candidate, build_outcome, resolve
from .suffixes import core_name, significant_words, strip_suffixes
from .variations import VariationGenerator, VariationStrategy, generate_variations
from .vocabulary import DEFAULT_VOCABULARY, NameVocabulary

__all__ = [
    "CandidateRecord",
    "DEFAULT_MIN_SCORE",
    "DEFAULT_VOCABULARY",
    "DocumentNumberFilter",
    "MatchResult",
    "MatchScore",
    "MatchType",
    "NameScorer",
    "NameVocabulary",
    "ResolutionOutcome",
    "VariationGenerator",
    "VariationStrategy",
    "best_for_candidate",
    "build_outcome",
    "canonicalize_registry_name",
    "core_name",
    "generate_variations",
    "levenshtein_similarity",
    "limit_candidates",
    "normalize",
    "resolve",
    "score_names",
    "significant_words",
    "strip_suffixes",
]
