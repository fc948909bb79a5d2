"""
Best-match selection across a candidate pool.

For every candidate the selector keeps the best score over all query
variations, then picks the single best candidate if it clears the threshold.
Ties never depend on execution order:

- within a candidate, the first variation reaching the maximum wins;
- across candidates, the first candidate (input order) reaching it wins.

Both follow from replacing the running best only on a strict improvement.

All functions are pure and have no I/O dependencies.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from .models import CandidateRecord, MatchResult, MatchType, ResolutionOutcome
from .normalization import registry_names_related
from .scoring import NameForms, NameScorer
from .variations import DEFAULT_MAX_VARIATIONS, VariationStrategy, generate_variations
from .vocabulary import DEFAULT_VOCABULARY, NameVocabulary

DEFAULT_MIN_SCORE = 0.65


def best_for_candidate(
    variations: Sequence[NameForms],
    candidate: CandidateRecord,
    scorer: NameScorer,
) -> MatchResult:
    """
    Score one candidate against every variation and keep the best.

    Args:
        variations: Precomputed forms of the query variations, in order
        candidate: Candidate to score
        scorer: Scorer holding the rule table

    Returns:
        MatchResult with the maximum score; 0.0 when there are no variations
    """
    target = scorer.forms(candidate.display_name)
    best: Optional[MatchResult] = None

    for variation in variations:
        result = scorer.score_forms(variation, target)
        if best is None or result.score > best.score:
            best = MatchResult(
                candidate=candidate,
                score=result.score,
                match_type=result.match_type,
                variation=variation.raw,
            )

    if best is None:
        return MatchResult(candidate=candidate, score=0.0, match_type=MatchType.LOW_SIMILARITY)
    return best


def build_outcome(
    query: Optional[str],
    results: Sequence[MatchResult],
    min_score: float = DEFAULT_MIN_SCORE,
) -> ResolutionOutcome:
    """
    Rank per-candidate results and apply the threshold.

    ``results`` must be in candidate input order; the first maximal result
    wins ties and the ranking sort is stable.

    Args:
        query: Original query name (for review candidate detection)
        results: One MatchResult per candidate, in input order
        min_score: Threshold the best score must reach

    Returns:
        ResolutionOutcome with the ranked table and the best match, if any
    """
    best: Optional[MatchResult] = None
    for result in results:
        if best is None or result.score > best.score:
            best = result

    if best is not None and best.score < min_score:
        best = None

    ranked = tuple(sorted(results, key=lambda result: result.score, reverse=True))

    review: tuple[MatchResult, ...] = ()
    if best is None:
        review = tuple(
            result
            for result in ranked
            if registry_names_related(query, result.candidate.display_name)
        )

    return ResolutionOutcome(
        best_match=best,
        all_results=ranked,
        min_score=min_score,
        review_candidates=review,
    )


def as_candidates(candidates: Iterable[Any]) -> list[CandidateRecord]:
    """Coerce strings and mappings into CandidateRecords, keeping order."""
    return [CandidateRecord.from_value(candidate) for candidate in candidates]


def resolve(
    query: Optional[str],
    candidates: Iterable[Any],
    min_score: float = DEFAULT_MIN_SCORE,
    *,
    vocabulary: NameVocabulary = DEFAULT_VOCABULARY,
    strategy: VariationStrategy = VariationStrategy.BROAD,
    max_variations: int = DEFAULT_MAX_VARIATIONS,
) -> ResolutionOutcome:
    """
    Resolve a query name against candidate names.

    Examples:
        outcome = resolve("Acme Roofing", ["Acme Roofing, LLC", "Apex Roofing"])
        outcome.best_match.candidate.display_name → "Acme Roofing, LLC"

    Args:
        query: Canonical business name being looked up
        candidates: CandidateRecords, plain names or mappings with a name key
        min_score: Threshold for a best match
        vocabulary: Tables for suffixes, fillers and abbreviations
        strategy: Variation strategy for the query
        max_variations: Cap on query variations

    Returns:
        ResolutionOutcome; ``best_match`` is None when nothing clears ``min_score``
    """
    scorer = NameScorer(vocabulary)
    variations = [
        scorer.forms(variation)
        for variation in generate_variations(
            query, vocabulary=vocabulary, strategy=strategy, max_variations=max_variations
        )
    ]
    results = [
        best_for_candidate(variations, candidate, scorer)
        for candidate in as_candidates(candidates)
    ]
    return build_outcome(query, results, min_score)
