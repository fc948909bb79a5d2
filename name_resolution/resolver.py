from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Iterable, Optional

from .config import ResolverSettings, Settings
from .core.resolution.filters import DocumentNumberFilter, limit_candidates
from .core.resolution.models import CandidateRecord, MatchResult, ResolutionOutcome
from .core.resolution.scoring import NameForms, NameScorer
from .core.resolution.selector import as_candidates, best_for_candidate, build_outcome
from .core.resolution.variations import VariationGenerator
from .core.resolution.vocabulary import DEFAULT_VOCABULARY, NameVocabulary

logger = logging.getLogger(__name__)


class NameResolver:
    """Service wrapping the resolution engine with configured thresholds, filters and workers."""

    def __init__(
        self,
        settings: Optional[ResolverSettings] = None,
        vocabulary: NameVocabulary = DEFAULT_VOCABULARY,
    ) -> None:
        self.settings = settings or ResolverSettings()
        self.vocabulary = vocabulary
        self.scorer = NameScorer(vocabulary)
        self.generator = VariationGenerator(
            vocabulary=vocabulary,
            strategy=self.settings.strategy,
            max_variations=self.settings.max_variations,
        )
        self.document_filter: Optional[DocumentNumberFilter] = (
            self.settings.document_filter.build() if self.settings.document_filter else None
        )

    @classmethod
    def from_settings(cls, settings: Settings, profile: Optional[str] = None) -> "NameResolver":
        return cls(settings.resolver_for(profile), settings.vocabulary.build())

    def variations(self, query: Optional[str]) -> tuple[str, ...]:
        return self.generator.generate(query)

    def select_candidates(self, candidates: Iterable[Any]) -> list[CandidateRecord]:
        """Apply the document filter, then the top-N cap, keeping input order."""
        records = as_candidates(candidates)
        if self.document_filter is not None:
            kept = self.document_filter.apply(records)
            if len(kept) != len(records):
                logger.debug(
                    "Document filter dropped %d of %d candidate(s)",
                    len(records) - len(kept),
                    len(records),
                )
            records = kept
        return limit_candidates(records, self.settings.max_candidates)

    def resolve(
        self,
        query: Optional[str],
        candidates: Iterable[Any],
        min_score: Optional[float] = None,
    ) -> ResolutionOutcome:
        """
        Resolve a query against a candidate pool with the configured settings.

        Args:
            query: Business name being looked up
            candidates: CandidateRecords, plain names or mappings with a name key
            min_score: Overrides the configured threshold for this call

        Returns:
            ResolutionOutcome with the best match (or None) and the ranked table
        """
        threshold = self.settings.min_score if min_score is None else min_score
        pool = self.select_candidates(candidates)
        variations = [self.scorer.forms(variation) for variation in self.variations(query)]

        results = self._score_pool(variations, pool)
        outcome = build_outcome(query, results, threshold)

        if outcome.best_match:
            logger.info(
                "Resolved '%s' -> '%s' (%.3f, %s)",
                query,
                outcome.best_match.candidate.display_name,
                outcome.best_match.score,
                outcome.best_match.match_type.value,
            )
        elif outcome.all_results:
            closest = outcome.all_results[0]
            logger.info(
                "No match for '%s' at %.2f; closest '%s' (%.3f, %s)",
                query,
                threshold,
                closest.candidate.display_name,
                closest.score,
                closest.match_type.value,
            )
            if outcome.needs_review:
                logger.warning(
                    "'%s' has %d close registry name(s) needing review",
                    query,
                    len(outcome.review_candidates),
                )
        else:
            logger.info("No candidates to resolve '%s' against", query)
        return outcome

    def _score_pool(
        self, variations: list[NameForms], pool: list[CandidateRecord]
    ) -> list[MatchResult]:
        score_one = partial(best_for_candidate, variations, scorer=self.scorer)
        workers = self.settings.max_workers
        if workers <= 1 or len(pool) < self.settings.parallel_threshold:
            return [score_one(candidate) for candidate in pool]

        logger.debug(
            "Scoring %d candidate(s) x %d variation(s) on %d workers",
            len(pool),
            len(variations),
            workers,
        )
        # map() yields in submission order, so tie-breaks match the sequential path
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(score_one, pool))
