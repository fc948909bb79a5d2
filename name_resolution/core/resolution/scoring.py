"""
Pairwise name scoring.

Scoring is an ordered table of rules. Each rule pairs a predicate with a
score formula; rules are tried top to bottom and the first one whose
predicate holds decides both the score and the match type:

    1. exact             normalized forms equal                 1.0
    2. core_exact        core forms equal                       0.95-0.98
    3. search_in_result  core(b) contains core(a)               0.85 + 0.08 * |a|/|b|
    4. result_in_search  core(a) contains core(b)               0.85 + 0.10 * |b|/|a|
    5. word_match        >= 80% of b's words found in a          0.85
                         >= 80% of a's words found in b          0.82
    6. fuzzy_high        Levenshtein similarity >= 0.85         sim * 0.95
    7. fuzzy_medium      similarity >= 0.70                     sim * 0.90
    8. partial_overlap   >= 50% significant word overlap        0.60 + 0.25 * ratio
    9. low_similarity    anything else                          sim * 0.5

The table is asymmetric: a short query found inside a longer
directory listing (rule 3) scores differently from the reverse (rule 4).

All functions are pure and have no I/O dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from rapidfuzz.distance import Levenshtein

from .models import MatchScore, MatchType
from .normalization import normalize
from .suffixes import significant_words, strip_suffixes
from .vocabulary import DEFAULT_VOCABULARY, NameVocabulary

WORD_MATCH_RATIO = 0.80
FUZZY_HIGH_SIMILARITY = 0.85
FUZZY_MEDIUM_SIMILARITY = 0.70
PARTIAL_OVERLAP_RATIO = 0.50


def levenshtein_similarity(first: str, second: str) -> float:
    """
    1 - edit_distance / longest length. Two empty strings are identical (1.0).

    Examples:
        ("acme", "acme") → 1.0
        ("acme", "acne") → 0.75
        ("", "acme") → 0.0
    """
    longest = max(len(first), len(second))
    if longest == 0:
        return 1.0
    return 1.0 - Levenshtein.distance(first, second) / longest


def words_related(word: str, other: str) -> bool:
    """Equal, or either word contains the other ("road" ~ "roads")."""
    return word == other or word in other or other in word


def word_coverage(words: Sequence[str], others: Sequence[str]) -> float:
    """Fraction of ``words`` related to at least one of ``others``."""
    if not words or not others:
        return 0.0
    found = sum(1 for word in words if any(words_related(word, other) for other in others))
    return found / len(words)


def word_overlap_ratio(words: Sequence[str], others: Sequence[str]) -> float:
    """Related words of ``words`` over the larger of the two word counts."""
    if not words or not others:
        return 0.0
    found = sum(1 for word in words if any(words_related(word, other) for other in others))
    return found / max(len(words), len(others))


@dataclass(frozen=True, slots=True)
class NameForms:
    """Every derived form of one name the rules look at."""
    raw: str
    normalized: str
    core: str
    words: tuple[str, ...]

    @classmethod
    def of(cls, text: Optional[str], vocabulary: NameVocabulary = DEFAULT_VOCABULARY) -> "NameForms":
        normalized = normalize(text)
        core = strip_suffixes(normalized, vocabulary)
        return cls(
            raw=text or "",
            normalized=normalized,
            core=core,
            words=significant_words(core, vocabulary),
        )

    @property
    def comparable(self) -> str:
        """Core name, or the normalized name when nothing but suffixes was left."""
        return self.core or self.normalized


@dataclass(frozen=True, slots=True)
class ScoreContext:
    """Both names' forms plus the values several rules share."""
    a: NameForms
    b: NameForms
    similarity: float

    @classmethod
    def build(cls, a: NameForms, b: NameForms) -> "ScoreContext":
        if not a.normalized or not b.normalized:
            similarity = 0.0
        else:
            similarity = levenshtein_similarity(a.comparable, b.comparable)
        return cls(a=a, b=b, similarity=similarity)

    @property
    def stripped_word_count(self) -> int:
        """Words removed as suffixes or fillers, summed over both names."""
        return (
            len(self.a.normalized.split())
            - len(self.a.core.split())
            + len(self.b.normalized.split())
            - len(self.b.core.split())
        )


@dataclass(frozen=True)
class ScoringRule:
    """One row of the scoring table."""
    match_type: MatchType
    applies: Callable[[ScoreContext], bool]
    formula: Callable[[ScoreContext], float]
    label: str = ""

    def evaluate(self, ctx: ScoreContext) -> Optional[MatchScore]:
        if not self.applies(ctx):
            return None
        return MatchScore(score=self.formula(ctx), match_type=self.match_type)


def _exact(ctx: ScoreContext) -> bool:
    return bool(ctx.a.normalized) and ctx.a.normalized == ctx.b.normalized


def _core_exact(ctx: ScoreContext) -> bool:
    return bool(ctx.a.core) and ctx.a.core == ctx.b.core


def _core_exact_score(ctx: ScoreContext) -> float:
    # One stripped word scores 0.98, each further one costs 0.01, floor 0.95
    extra = min(3, max(0, ctx.stripped_word_count - 1))
    return 0.98 - 0.01 * extra


def _search_in_result(ctx: ScoreContext) -> bool:
    return bool(ctx.a.core) and bool(ctx.b.core) and ctx.a.core in ctx.b.core


def _search_in_result_score(ctx: ScoreContext) -> float:
    return 0.85 + 0.08 * (len(ctx.a.core) / len(ctx.b.core))


def _result_in_search(ctx: ScoreContext) -> bool:
    return bool(ctx.a.core) and bool(ctx.b.core) and ctx.b.core in ctx.a.core


def _result_in_search_score(ctx: ScoreContext) -> float:
    return 0.85 + 0.10 * (len(ctx.b.core) / len(ctx.a.core))


def _word_match(ctx: ScoreContext) -> bool:
    return word_coverage(ctx.b.words, ctx.a.words) >= WORD_MATCH_RATIO


def _word_match_reverse(ctx: ScoreContext) -> bool:
    return word_coverage(ctx.a.words, ctx.b.words) >= WORD_MATCH_RATIO


def _fuzzy_high(ctx: ScoreContext) -> bool:
    return ctx.similarity >= FUZZY_HIGH_SIMILARITY


def _fuzzy_medium(ctx: ScoreContext) -> bool:
    return ctx.similarity >= FUZZY_MEDIUM_SIMILARITY


def _partial_overlap(ctx: ScoreContext) -> bool:
    return word_overlap_ratio(ctx.a.words, ctx.b.words) >= PARTIAL_OVERLAP_RATIO


def _partial_overlap_score(ctx: ScoreContext) -> float:
    return 0.60 + 0.25 * word_overlap_ratio(ctx.a.words, ctx.b.words)


SCORING_RULES: tuple[ScoringRule, ...] = (
    ScoringRule(MatchType.EXACT, _exact, lambda ctx: 1.0, "exact"),
    ScoringRule(MatchType.CORE_EXACT, _core_exact, _core_exact_score, "core_exact"),
    ScoringRule(MatchType.SEARCH_IN_RESULT, _search_in_result, _search_in_result_score, "search_in_result"),
    ScoringRule(MatchType.RESULT_IN_SEARCH, _result_in_search, _result_in_search_score, "result_in_search"),
    ScoringRule(MatchType.WORD_MATCH, _word_match, lambda ctx: 0.85, "word_match"),
    ScoringRule(MatchType.WORD_MATCH, _word_match_reverse, lambda ctx: 0.82, "word_match_reverse"),
    ScoringRule(MatchType.FUZZY_HIGH, _fuzzy_high, lambda ctx: ctx.similarity * 0.95, "fuzzy_high"),
    ScoringRule(MatchType.FUZZY_MEDIUM, _fuzzy_medium, lambda ctx: ctx.similarity * 0.90, "fuzzy_medium"),
    ScoringRule(MatchType.PARTIAL_OVERLAP, _partial_overlap, _partial_overlap_score, "partial_overlap"),
    ScoringRule(MatchType.LOW_SIMILARITY, lambda ctx: True, lambda ctx: ctx.similarity * 0.5, "low_similarity"),
)


class NameScorer:
    """
    Scores pairs of names with the rule table.

    Usage:
        scorer = NameScorer()
        result = scorer.score("Acme", "Acme Roofing LLC")
        print(result.match_type, result.score)
    """

    def __init__(
        self,
        vocabulary: NameVocabulary = DEFAULT_VOCABULARY,
        rules: Sequence[ScoringRule] = SCORING_RULES,
    ) -> None:
        self.vocabulary = vocabulary
        self.rules = tuple(rules)

    def forms(self, text: Optional[str]) -> NameForms:
        return NameForms.of(text, self.vocabulary)

    def score(self, a: Optional[str], b: Optional[str]) -> MatchScore:
        """
        Score name ``a`` (query side) against name ``b`` (candidate side).

        Args:
            a: Query name or variation
            b: Candidate display name

        Returns:
            MatchScore from the first rule that applies
        """
        return self.score_forms(self.forms(a), self.forms(b))

    def score_forms(self, a: NameForms, b: NameForms) -> MatchScore:
        """Score precomputed forms; used when the same names are scored repeatedly."""
        return self.first_rule(ScoreContext.build(a, b))

    def first_rule(self, ctx: ScoreContext) -> MatchScore:
        for rule in self.rules:
            result = rule.evaluate(ctx)
            if result is not None:
                return result
        return MatchScore(score=ctx.similarity * 0.5, match_type=MatchType.LOW_SIMILARITY)

    def explain(self, a: Optional[str], b: Optional[str]) -> list[tuple[str, bool]]:
        """Every rule label with whether its predicate holds, in table order."""
        ctx = ScoreContext.build(self.forms(a), self.forms(b))
        return [(rule.label, rule.applies(ctx)) for rule in self.rules]


def score_names(
    a: Optional[str], b: Optional[str], vocabulary: NameVocabulary = DEFAULT_VOCABULARY
) -> MatchScore:
    """Score two names with the default rule table."""
    return NameScorer(vocabulary).score(a, b)
