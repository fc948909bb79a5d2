"""
Unit tests for name_resolution.core.resolution.scoring.

Each rule of the table gets a pair that reaches it and no earlier rule.
"""

import unittest

from name_resolution.core.resolution.models import MatchType
from name_resolution.core.resolution.scoring import (
    SCORING_RULES,
    NameScorer,
    levenshtein_similarity,
    score_names,
    word_coverage,
    word_overlap_ratio,
    words_related,
)


class TestSimilarityHelpers(unittest.TestCase):
    def test_levenshtein_similarity(self) -> None:
        self.assertEqual(levenshtein_similarity("acme", "acme"), 1.0)
        self.assertAlmostEqual(levenshtein_similarity("acme", "acne"), 0.75)
        self.assertEqual(levenshtein_similarity("", ""), 1.0)
        self.assertEqual(levenshtein_similarity("", "abc"), 0.0)

    def test_words_related(self) -> None:
        self.assertTrue(words_related("road", "roads"))
        self.assertTrue(words_related("roads", "road"))
        self.assertFalse(words_related("roofing", "rofing"))

    def test_word_coverage(self) -> None:
        self.assertEqual(word_coverage(("acme", "roofing"), ("acme",)), 0.5)
        self.assertEqual(word_coverage((), ("acme",)), 0.0)

    def test_word_overlap_uses_larger_count(self) -> None:
        self.assertAlmostEqual(word_overlap_ratio(("acme",), ("acme", "roofing", "gutters")), 1 / 3)


class TestScoringRules(unittest.TestCase):
    def setUp(self) -> None:
        self.scorer = NameScorer()

    def test_rule_order(self) -> None:
        self.assertEqual(
            [rule.label for rule in SCORING_RULES],
            [
                "exact",
                "core_exact",
                "search_in_result",
                "result_in_search",
                "word_match",
                "word_match_reverse",
                "fuzzy_high",
                "fuzzy_medium",
                "partial_overlap",
                "low_similarity",
            ],
        )

    def test_exact(self) -> None:
        result = self.scorer.score("Acme Roofing", "acme  roofing")
        self.assertEqual(result.match_type, MatchType.EXACT)
        self.assertEqual(result.score, 1.0)

    def test_self_match_is_exact(self) -> None:
        for name in ["Acme Roofing, LLC", "St. Mary's", "The Company", "x"]:
            result = self.scorer.score(name, name)
            self.assertEqual(result.match_type, MatchType.EXACT, msg=name)
            self.assertEqual(result.score, 1.0, msg=name)

    def test_core_exact(self) -> None:
        result = self.scorer.score("Acme Roofing", "Acme Roofing, LLC")
        self.assertEqual(result.match_type, MatchType.CORE_EXACT)
        self.assertAlmostEqual(result.score, 0.98)

    def test_core_exact_loses_a_point_per_extra_stripped_word(self) -> None:
        result = self.scorer.score("The Acme Roofing Company", "Acme Roofing LLC")
        self.assertEqual(result.match_type, MatchType.CORE_EXACT)
        self.assertAlmostEqual(result.score, 0.96)

        floor = self.scorer.score("The Acme Roofing Holdings Company", "Acme Roofing, Inc. LLC")
        self.assertEqual(floor.match_type, MatchType.CORE_EXACT)
        self.assertAlmostEqual(floor.score, 0.95)

    def test_core_exact_with_inverted_registry_name(self) -> None:
        result = self.scorer.score("Smith Co", "Smith Company, The")
        self.assertEqual(result.match_type, MatchType.CORE_EXACT)
        self.assertAlmostEqual(result.score, 0.96)

    def test_search_in_result(self) -> None:
        result = self.scorer.score("Acme", "Acme Roofing LLC")
        self.assertEqual(result.match_type, MatchType.SEARCH_IN_RESULT)
        self.assertAlmostEqual(result.score, 0.85 + 0.08 * 4 / 12)

    def test_result_in_search(self) -> None:
        result = self.scorer.score("Acme Roofing LLC", "Acme")
        self.assertEqual(result.match_type, MatchType.RESULT_IN_SEARCH)
        self.assertAlmostEqual(result.score, 0.85 + 0.10 * 4 / 12)

    def test_containment_is_asymmetric(self) -> None:
        forward = score_names("Acme", "Acme Roofing LLC")
        backward = score_names("Acme Roofing LLC", "Acme")
        self.assertNotEqual(forward.score, backward.score)
        self.assertNotEqual(forward.match_type, backward.match_type)

    def test_word_match(self) -> None:
        result = self.scorer.score("Saint Mary Construction Group", "Saint Marys Construction")
        self.assertEqual(result.match_type, MatchType.WORD_MATCH)
        self.assertAlmostEqual(result.score, 0.85)

    def test_word_match_reverse_scores_lower(self) -> None:
        result = self.scorer.score("Mary Construction", "Saint Marys Roofing Construction")
        self.assertEqual(result.match_type, MatchType.WORD_MATCH)
        self.assertAlmostEqual(result.score, 0.82)

    def test_fuzzy_high(self) -> None:
        result = self.scorer.score("Acme Roofing", "Acme Rofing")
        self.assertEqual(result.match_type, MatchType.FUZZY_HIGH)
        self.assertAlmostEqual(result.score, (1 - 1 / 12) * 0.95)

    def test_fuzzy_medium(self) -> None:
        result = self.scorer.score("Northfield", "Narthfeeld")
        self.assertEqual(result.match_type, MatchType.FUZZY_MEDIUM)
        self.assertAlmostEqual(result.score, 0.8 * 0.90)

    def test_partial_overlap(self) -> None:
        result = self.scorer.score("Acme Roofing", "Acme Plumbing")
        self.assertEqual(result.match_type, MatchType.PARTIAL_OVERLAP)
        self.assertAlmostEqual(result.score, 0.60 + 0.25 * 0.5)

    def test_low_similarity(self) -> None:
        result = self.scorer.score("XYZ", "Unrelated Co")
        self.assertEqual(result.match_type, MatchType.LOW_SIMILARITY)
        self.assertEqual(result.score, 0.0)

        other = self.scorer.score("XYZ", "Another Biz")
        self.assertEqual(other.match_type, MatchType.LOW_SIMILARITY)
        self.assertLess(other.score, 0.65)

    def test_suffix_only_names_fall_through_to_low_similarity(self) -> None:
        result = self.scorer.score("LLC", "Inc")
        self.assertEqual(result.match_type, MatchType.LOW_SIMILARITY)
        self.assertLess(result.score, 0.2)


class TestScoreBounds(unittest.TestCase):
    def test_empty_input(self) -> None:
        for first, second in [("", ""), ("!!!", "???"), ("", "Acme"), ("Acme", None), ("!!!", "Acme")]:
            result = score_names(first, second)
            self.assertEqual(result.match_type, MatchType.LOW_SIMILARITY)
            self.assertEqual(result.score, 0.0)

    def test_scores_stay_in_unit_interval(self) -> None:
        pairs = [
            ("Café Ünïcode", "x" * 5000),
            ("Acme Roofing", "ACME ROOFING & GUTTERS OF TAMPA LLC"),
            ("St. Mary's", "Saint Marys"),
            ("a", "b"),
        ]
        for first, second in pairs:
            for a, b in ((first, second), (second, first)):
                result = score_names(a, b)
                self.assertGreaterEqual(result.score, 0.0)
                self.assertLessEqual(result.score, 1.0)

    def test_deterministic(self) -> None:
        self.assertEqual(
            score_names("Acme Roofing", "Acme Rofing"),
            score_names("Acme Roofing", "Acme Rofing"),
        )


class TestNameScorer(unittest.TestCase):
    def test_explain_lists_every_rule(self) -> None:
        verdicts = NameScorer().explain("Acme", "Acme Roofing LLC")
        self.assertEqual(len(verdicts), len(SCORING_RULES))
        self.assertEqual(dict(verdicts)["search_in_result"], True)
        self.assertEqual(dict(verdicts)["exact"], False)
        self.assertEqual(verdicts[-1], ("low_similarity", True))

    def test_custom_rule_table(self) -> None:
        scorer = NameScorer(rules=SCORING_RULES[-1:])
        result = scorer.score("Acme Roofing", "Acme Roofing")
        self.assertEqual(result.match_type, MatchType.LOW_SIMILARITY)
        self.assertAlmostEqual(result.score, 0.5)

    def test_forms(self) -> None:
        forms = NameScorer().forms("The St. Mary's Roofing, LLC")
        self.assertEqual(forms.normalized, "the st mary s roofing llc")
        self.assertEqual(forms.core, "st mary s roofing")
        self.assertEqual(forms.words, ("mary", "roofing"))


if __name__ == "__main__":
    unittest.main()
