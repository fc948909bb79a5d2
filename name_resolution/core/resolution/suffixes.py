"""
Legal suffix and filler word stripping.

Reduces a normalized name to its core: the words that actually identify the
business once "LLC", "Inc", "the", "of" and friends are gone.
"""

from __future__ import annotations

from typing import Optional

from .normalization import normalize
from .vocabulary import DEFAULT_VOCABULARY, NameVocabulary


def _strip_trailing_suffixes(tokens: list[str], vocabulary: NameVocabulary) -> None:
    stripped = True
    while tokens and stripped:
        stripped = False
        for phrase in vocabulary.legal_suffixes:
            size = len(phrase)
            if size <= len(tokens) and tuple(tokens[-size:]) == phrase:
                del tokens[-size:]
                stripped = True
                break


def strip_suffixes(
    text: Optional[str], vocabulary: NameVocabulary = DEFAULT_VOCABULARY
) -> str:
    """
    Strip trailing legal suffixes, then filler words anywhere.

    Suffixes only match whole words at the end of the name and are removed
    repeatedly ("Acme Holdings LLC" → "acme"). The suffix table is scanned
    longest phrase first. Dropping fillers can expose another suffix
    ("smith company the"), so both passes repeat until the name stops
    changing: the result never ends in a suffix and holds no filler.

    Examples:
        "acme roofing llc" → "acme roofing"
        "the law office of jane doe pa" → "law office jane doe"
        "smith company the" → "smith"
        "llc" → ""

    Args:
        text: Normalized name
        vocabulary: Tables to strip with

    Returns:
        Core name, possibly empty
    """
    tokens = (text or "").lower().split()

    while True:
        _strip_trailing_suffixes(tokens, vocabulary)
        kept = [token for token in tokens if token not in vocabulary.filler_words]
        if len(kept) == len(tokens):
            break
        tokens = kept

    return " ".join(tokens)


def core_name(text: Optional[str], vocabulary: NameVocabulary = DEFAULT_VOCABULARY) -> str:
    """Normalize a raw name and strip it down to its core."""
    return strip_suffixes(normalize(text), vocabulary)


def significant_words(
    core: Optional[str], vocabulary: NameVocabulary = DEFAULT_VOCABULARY
) -> tuple[str, ...]:
    """
    Words that carry identity: longer than two characters and not filler.

    Examples:
        "st mary s construction" → ("mary", "construction")
    """
    return tuple(
        word
        for word in (core or "").split()
        if len(word) > 2 and word not in vocabulary.filler_words
    )
