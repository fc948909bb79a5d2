"""
Query name variation generation.

Expands one query name into a bounded, ordered set of plausible spellings a
directory might list it under. Order matters: the selector keeps the first
variation that reaches a candidate's best score, so rules run from the most
faithful spelling (the name as given) to the loosest (truncated prefixes).

All functions are pure and have no I/O dependencies.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Iterator, Optional

from .normalization import canonicalize_registry_name, normalize
from .suffixes import strip_suffixes
from .vocabulary import DEFAULT_VOCABULARY, NameVocabulary

DEFAULT_MAX_VARIATIONS = 20

_AND_WORD = re.compile(r"\band\b", re.IGNORECASE)
_AMPERSAND = re.compile(r"\s*&\s*")


class VariationStrategy(Enum):
    """How widely a query name is expanded."""
    BROAD = "broad"
    STRICT = "strict"


class _VariationSet:
    """Insertion-ordered, deduplicated, capped collection of strings."""

    def __init__(self, limit: int) -> None:
        self.limit = max(1, limit)
        self._items: dict[str, None] = {}

    def add(self, value: Optional[str]) -> None:
        if not value:
            return
        value = value.strip()
        if not value or value in self._items or len(self._items) >= self.limit:
            return
        self._items[value] = None

    def freeze(self) -> tuple[str, ...]:
        return tuple(self._items)


def swap_conjunction(text: str) -> Optional[str]:
    """
    Swap a whole-word "and" for "&", or "&" for "and".

    Examples:
        "Smith and Sons" → "Smith & Sons"
        "Smith & Sons" → "Smith and Sons"
        "Acme Roofing" → None
    """
    if _AND_WORD.search(text):
        return _AND_WORD.sub("&", text)
    if "&" in text:
        return _AMPERSAND.sub(" and ", text).strip()
    return None


def abbreviation_variants(
    core: str, vocabulary: NameVocabulary = DEFAULT_VOCABULARY
) -> Iterator[str]:
    """
    Yield the core name with each abbreviation pair applied.

    Each pair works in both directions: "saint" becomes "st" and "st" becomes
    "saint", whole words only.
    """
    for full, short in vocabulary.abbreviations:
        full_re = re.compile(rf"\b{re.escape(full)}\b")
        short_re = re.compile(rf"\b{re.escape(short)}\b")
        if full_re.search(core):
            yield full_re.sub(short, core)
        if short_re.search(core):
            yield short_re.sub(full, core)


def prefix_variants(core: str) -> list[str]:
    """
    First-2 and first-3 word prefixes of long names.

    Directories often truncate listings, so "Acme Roofing And Gutter Services"
    may show up as "Acme Roofing". Only words longer than one character count.
    """
    words = [word for word in core.split() if len(word) > 1]
    if len(words) <= 3:
        return []
    return [" ".join(words[:2]), " ".join(words[:3])]


def generate_variations(
    raw_name: Optional[str],
    vocabulary: NameVocabulary = DEFAULT_VOCABULARY,
    strategy: VariationStrategy = VariationStrategy.BROAD,
    max_variations: int = DEFAULT_MAX_VARIATIONS,
) -> tuple[str, ...]:
    """
    Expand a query name into alternate spellings.

    Rules, in order:
    1. The name as given (trimmed) and its normalized form
    2. The core name
    3. Core + each common suffix token, space- and comma-joined
    4. "and" / "&" swaps of the name and of the core
    5. Abbreviation substitutions on the core
    6. 2- and 3-word prefixes of long cores

    The STRICT strategy stops after rule 3 and adds the registry canonical
    form ("ACME ROOFING LLC") instead.

    Examples:
        "Acme Roofing" → ("Acme Roofing", "acme roofing", "acme roofing LLC",
                          "acme roofing, LLC", ...)

    Args:
        raw_name: Query name
        vocabulary: Tables for suffixes, fillers and abbreviations
        strategy: BROAD for fuzzy recall, STRICT for suffix-only expansion
        max_variations: Upper bound on the number of strings returned

    Returns:
        Ordered tuple of unique, non-empty variations
    """
    variations = _VariationSet(max_variations)

    original = (raw_name or "").strip()
    normalized = normalize(original)
    core = strip_suffixes(normalized, vocabulary)

    variations.add(original)
    variations.add(normalized)
    variations.add(core)

    if core:
        for token in vocabulary.suffix_tokens:
            variations.add(f"{core} {token}")
            variations.add(f"{core}, {token}")

    if strategy is VariationStrategy.STRICT:
        variations.add(canonicalize_registry_name(original))
        return variations.freeze()

    for base in (original, core):
        swapped = swap_conjunction(base) if base else None
        variations.add(swapped)

    if core:
        for variant in abbreviation_variants(core, vocabulary):
            variations.add(variant)
        for variant in prefix_variants(core):
            variations.add(variant)

    return variations.freeze()


class VariationGenerator:
    """
    Holds the vocabulary and strategy for repeated variation generation.

    Usage:
        generator = VariationGenerator(strategy=VariationStrategy.STRICT)
        variations = generator.generate("Acme Roofing")
    """

    def __init__(
        self,
        vocabulary: NameVocabulary = DEFAULT_VOCABULARY,
        strategy: VariationStrategy = VariationStrategy.BROAD,
        max_variations: int = DEFAULT_MAX_VARIATIONS,
    ) -> None:
        self.vocabulary = vocabulary
        self.strategy = strategy
        self.max_variations = max_variations

    def generate(self, raw_name: Optional[str]) -> tuple[str, ...]:
        return generate_variations(
            raw_name,
            vocabulary=self.vocabulary,
            strategy=self.strategy,
            max_variations=self.max_variations,
        )
