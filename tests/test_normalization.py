"""
Unit tests for name_resolution.core.resolution.normalization.

Covers:
- Matching form (lowercase, punctuation, whitespace)
- Idempotence
- Registry canonical form and suffix folding
"""

import unittest

from name_resolution.core.resolution.normalization import (
    PUNCTUATION,
    canonicalize_registry_name,
    normalize,
    registry_names_related,
)


class TestNormalize(unittest.TestCase):
    """Test the matching form."""

    def test_lowercases_and_strips_punctuation(self):
        self.assertEqual(normalize("Acme Roofing, LLC"), "acme roofing llc")
        self.assertEqual(normalize("St. Mary's Construction"), "st mary s construction")

    def test_every_punctuation_character_becomes_space(self):
        self.assertEqual(normalize(f"a{PUNCTUATION}b"), "a b")
        for char in PUNCTUATION:
            self.assertEqual(normalize(f"x{char}y"), "x y", msg=repr(char))

    def test_collapses_whitespace(self):
        self.assertEqual(normalize("  Too   Many\t\tSpaces \n"), "too many spaces")
        self.assertEqual(normalize("A--B__C"), "a b c")

    def test_empty_input(self):
        self.assertEqual(normalize(""), "")
        self.assertEqual(normalize("   \t "), "")
        self.assertEqual(normalize(None), "")
        self.assertEqual(normalize("!!!"), "")

    def test_keeps_unicode_letters(self):
        self.assertEqual(normalize("Café Déjà-Vu"), "café déjà vu")

    def test_idempotent(self):
        samples = [
            "Acme Roofing, LLC",
            "  THE Smith & Sons (Holdings) Inc. ",
            "D/B/A Joe's Café",
            "Mount-Dora__Dental~~Group",
            "",
            "a.b.c.",
        ]
        for sample in samples:
            once = normalize(sample)
            self.assertEqual(normalize(once), once, msg=sample)


class TestRegistryForm(unittest.TestCase):
    """Test the registry canonical form."""

    def test_folds_long_suffixes(self):
        self.assertEqual(
            canonicalize_registry_name("Acme Builders Limited Liability Company"),
            "ACME BUILDERS LLC",
        )
        self.assertEqual(canonicalize_registry_name("Acme Incorporated"), "ACME INC")
        self.assertEqual(canonicalize_registry_name("Acme Corporation"), "ACME CORP")
        self.assertEqual(canonicalize_registry_name("Acme Limited"), "ACME LTD")
        self.assertEqual(canonicalize_registry_name("Acme Company"), "ACME CO")

    def test_drops_periods_and_commas(self):
        self.assertEqual(canonicalize_registry_name("acme, l.l.c."), "ACME LLC")
        self.assertEqual(canonicalize_registry_name("Acme Co."), "ACME CO")

    def test_folds_builds_plural(self):
        self.assertEqual(canonicalize_registry_name("Smith Builds, Inc."), "SMITH BUILD INC")
        self.assertEqual(canonicalize_registry_name("Smith Builders"), "SMITH BUILDERS")

    def test_empty_input(self):
        self.assertEqual(canonicalize_registry_name(""), "")
        self.assertEqual(canonicalize_registry_name(None), "")

    def test_related_names(self):
        self.assertTrue(registry_names_related("Acme Roofing", "ACME ROOFING & GUTTERS LLC"))
        self.assertTrue(registry_names_related("Acme Roofing Company", "acme roofing co."))
        self.assertFalse(registry_names_related("Acme", "Zeta Widgets"))
        self.assertFalse(registry_names_related("Acme", ""))


if __name__ == "__main__":
    unittest.main()
