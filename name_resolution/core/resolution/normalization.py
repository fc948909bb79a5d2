"""
Text normalization for business names.

Two canonical forms live here:

- ``normalize``: the matching form (lowercase, punctuation to spaces,
  whitespace collapsed). Every comparison in the engine goes through it.
- ``canonicalize_registry_name``: the form state business registries list
  names in (uppercase, suffix spellings folded to one token). Used by the
  strict variation strategy and to spot close matches worth a manual review.

All functions are pure and total: ``None`` and empty input yield ``""``.
"""

from __future__ import annotations

import re
from typing import Optional

PUNCTUATION = ".,-_'\"!@#$%^&*()+=[]{}|\\:;<>?/~`"

_PUNCT_TABLE = str.maketrans({char: " " for char in PUNCTUATION})
_WS = re.compile(r"\s+")

# Folding rules for the registry form, applied in order
REGISTRY_SUFFIX_FOLDS = (
    (re.compile(r"\b(LIMITED LIABILITY COMPANY|L L C|LLC)\b"), "LLC"),
    (re.compile(r"\b(INCORPORATED|INC)\b"), "INC"),
    (re.compile(r"\b(CORPORATION|CORP)\b"), "CORP"),
    (re.compile(r"\b(LIMITED|LTD)\b"), "LTD"),
    (re.compile(r"\b(COMPANY|CO)\b"), "CO"),
    (re.compile(r"\bBUILDS?\b"), "BUILD"),
)


def normalize(text: Optional[str]) -> str:
    """
    Normalize a raw name to its matching form.

    Process:
    1. Lowercase
    2. Replace every punctuation character with a space
    3. Collapse whitespace runs and trim

    Examples:
        "Acme Roofing, LLC" → "acme roofing llc"
        "St. Mary's Construction" → "st mary s construction"
        "   " → ""

    Args:
        text: Raw name

    Returns:
        Normalized name (idempotent: normalizing it again changes nothing)
    """
    if not text:
        return ""

    cleaned = text.lower().translate(_PUNCT_TABLE)
    return _WS.sub(" ", cleaned).strip()


def canonicalize_registry_name(text: Optional[str]) -> str:
    """
    Fold a name to the form registries use for exact comparisons.

    Examples:
        "Acme Builders Limited Liability Company" → "ACME BUILDERS LLC"
        "Smith Builds, Inc." → "SMITH BUILD INC"

    Args:
        text: Raw name

    Returns:
        Uppercase name with periods/commas dropped and suffixes folded
    """
    if not text:
        return ""

    folded = _WS.sub(" ", text.upper().strip())
    folded = re.sub(r"[.,]", "", folded)
    for pattern, replacement in REGISTRY_SUFFIX_FOLDS:
        folded = pattern.sub(replacement, folded)
    return _WS.sub(" ", folded).strip()


def registry_names_related(first: Optional[str], second: Optional[str]) -> bool:
    """True when either registry form contains the other."""
    left = canonicalize_registry_name(first)
    right = canonicalize_registry_name(second)
    if not left or not right:
        return False
    return left in right or right in left
