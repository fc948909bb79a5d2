"""
Static word tables used by the resolution engine.

The tables are plain immutable data. A ``NameVocabulary`` bundles them and is
passed by reference into every component, so separate engines (for example
one per tenant with extra suffixes) never share hidden state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from .normalization import normalize

LEGAL_SUFFIXES = (
    # Long forms
    "professional limited liability company",
    "limited liability company",
    "limited liability partnership",
    "limited partnership",
    "professional association",
    "professional corporation",
    "incorporated",
    "corporation",
    "company",
    "limited",
    "enterprises",
    "holdings",
    "solutions",
    "partners",
    "associates",
    # Abbreviations
    "llc",
    "l.l.c.",
    "inc",
    "inc.",
    "corp",
    "corp.",
    "co",
    "co.",
    "ltd",
    "ltd.",
    "llp",
    "l.l.p.",
    "lp",
    "pllc",
    "pc",
    "p.c.",
    "pa",
    "p.a.",
    "plc",
    "dba",
    "d/b/a",
)

FILLER_WORDS = ("the", "and", "&", "of", "at", "in", "on", "for", "a", "an")

ABBREVIATIONS = (
    ("saint", "st"),
    ("mount", "mt"),
    ("doctor", "dr"),
    ("mister", "mr"),
)

# Rendered after the core name when widening a query ("Acme LLC", "Acme, LLC")
COMMON_SUFFIX_TOKENS = ("LLC", "Inc", "Corp", "Co", "Inc.", "LLC.")


def _phrase_key(phrase: tuple[str, ...]) -> tuple[int, int, tuple[str, ...]]:
    return (-len(phrase), -len(" ".join(phrase)), phrase)


def build_suffix_table(phrases: Iterable[str]) -> tuple[tuple[str, ...], ...]:
    """
    Normalize suffix phrases into word tuples ordered longest-first.

    "l.l.c." and "L L C" both become ("l", "l", "c"), so the table matches
    normalized text. Multi-word phrases sort before their shorter tails,
    which keeps "limited liability company" from being shadowed by "company".
    """
    table = {tuple(normalize(phrase).split()) for phrase in phrases}
    table.discard(())
    return tuple(sorted(table, key=_phrase_key))


@dataclass(frozen=True)
class NameVocabulary:
    """Immutable bundle of the tables the engine consults."""

    legal_suffixes: tuple[tuple[str, ...], ...]
    """Suffix phrases as normalized word tuples, longest first"""

    filler_words: frozenset[str]
    """Words dropped anywhere in a core name"""

    abbreviations: tuple[tuple[str, str], ...]
    """(full form, abbreviation) pairs applied in both directions"""

    suffix_tokens: tuple[str, ...] = COMMON_SUFFIX_TOKENS
    """Suffixes appended to the core name when generating variations"""

    @classmethod
    def build(
        cls,
        suffixes: Iterable[str] = LEGAL_SUFFIXES,
        fillers: Iterable[str] = FILLER_WORDS,
        abbreviations: Iterable[tuple[str, str]] = ABBREVIATIONS,
        suffix_tokens: Iterable[str] = COMMON_SUFFIX_TOKENS,
    ) -> "NameVocabulary":
        pairs = []
        for full, short in abbreviations:
            full_norm, short_norm = normalize(full), normalize(short)
            if full_norm and short_norm and (full_norm, short_norm) not in pairs:
                pairs.append((full_norm, short_norm))
        return cls(
            legal_suffixes=build_suffix_table(suffixes),
            filler_words=frozenset(word.strip().lower() for word in fillers if word.strip()),
            abbreviations=tuple(pairs),
            suffix_tokens=tuple(token for token in suffix_tokens if token.strip()),
        )

    def extended(
        self,
        suffixes: Iterable[str] = (),
        fillers: Iterable[str] = (),
        abbreviations: Optional[Mapping[str, str]] = None,
    ) -> "NameVocabulary":
        """Return a new vocabulary with extra entries; this one is unchanged."""
        merged_suffixes = [" ".join(phrase) for phrase in self.legal_suffixes]
        merged_suffixes.extend(suffixes)
        merged_abbreviations = list(self.abbreviations)
        merged_abbreviations.extend((abbreviations or {}).items())
        return NameVocabulary.build(
            suffixes=merged_suffixes,
            fillers=[*self.filler_words, *fillers],
            abbreviations=merged_abbreviations,
            suffix_tokens=self.suffix_tokens,
        )


DEFAULT_VOCABULARY = NameVocabulary.build()
