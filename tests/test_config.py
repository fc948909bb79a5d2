import os
import tempfile
import unittest
from pathlib import Path

from pydantic import ValidationError

from name_resolution.config import (
    DocumentFilterSettings,
    ResolverSettings,
    Settings,
    find_config,
    load_settings,
)
from name_resolution.core.resolution.vocabulary import DEFAULT_VOCABULARY
from name_resolution.core.resolution.variations import VariationStrategy

CONFIG = """
resolver:
  min_score: 0.7
  max_workers: 3
vocabulary:
  extra_suffixes: [group]
  abbreviations:
    brothers: bros
profiles:
  registry:
    min_score: 0.9
    strategy: STRICT
    max_candidates: 5
    document_filter:
      prefixes: ldp
  reviews:
    min_score: 0.6
"""


class TestSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = Settings()
        self.assertEqual(settings.resolver.min_score, 0.65)
        self.assertEqual(settings.resolver.strategy, VariationStrategy.BROAD)
        self.assertEqual(settings.resolver.max_variations, 20)
        self.assertIsNone(settings.resolver.document_filter)
        self.assertIs(settings.vocabulary.build(), DEFAULT_VOCABULARY)

    def test_load_yaml_and_profiles(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.yaml"
            path.write_text(CONFIG, encoding="utf-8")
            settings = Settings.load(path)

        self.assertEqual(settings.resolver.min_score, 0.7)

        registry = settings.resolver_for("registry")
        self.assertEqual(registry.min_score, 0.9)
        self.assertEqual(registry.strategy, VariationStrategy.STRICT)
        self.assertEqual(registry.max_candidates, 5)
        self.assertEqual(registry.max_workers, 3)
        self.assertEqual(registry.document_filter.prefixes, "LDP")
        self.assertEqual(registry.document_filter.min_length, 7)

        reviews = settings.resolver_for("reviews")
        self.assertEqual(reviews.min_score, 0.6)
        self.assertEqual(reviews.strategy, VariationStrategy.BROAD)

        vocabulary = settings.vocabulary.build()
        self.assertIn(("group",), vocabulary.legal_suffixes)
        self.assertIn(("brothers", "bros"), vocabulary.abbreviations)

    def test_resolver_for_without_profile(self) -> None:
        settings = Settings()
        self.assertIs(settings.resolver_for(None), settings.resolver)

    def test_unknown_profile(self) -> None:
        settings = Settings(profiles={"reviews": ResolverSettings(min_score=0.6)})
        with self.assertRaises(ValueError) as ctx:
            settings.resolver_for("registry")
        self.assertIn("reviews", str(ctx.exception))

    def test_empty_file_gives_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.yaml"
            path.write_text("", encoding="utf-8")
            settings = Settings.load(path)
        self.assertEqual(settings.resolver.min_score, 0.65)

    def test_rejects_invalid_values(self) -> None:
        with self.assertRaises(ValidationError):
            ResolverSettings(min_score=1.5)
        with self.assertRaises(ValidationError):
            ResolverSettings(max_variations=0)
        with self.assertRaises(ValidationError):
            ResolverSettings(strategy="sideways")
        with self.assertRaises(ValidationError):
            DocumentFilterSettings(prefixes="  ")

    def test_document_filter_settings_build(self) -> None:
        keep = DocumentFilterSettings(prefixes="l", min_length=3).build()
        self.assertEqual(keep.prefixes, "L")
        self.assertEqual(keep.min_length, 3)


class TestFindConfig(unittest.TestCase):
    def setUp(self) -> None:
        self._cwd = os.getcwd()
        self._tmp = tempfile.TemporaryDirectory()
        os.chdir(self._tmp.name)

    def tearDown(self) -> None:
        os.chdir(self._cwd)
        self._tmp.cleanup()

    def test_explicit_missing_path(self) -> None:
        with self.assertRaises(FileNotFoundError):
            find_config(Path("does-not-exist.yaml"))

    def test_no_config_found(self) -> None:
        self.assertIsNone(find_config(None))
        self.assertEqual(load_settings().resolver.min_score, 0.65)

    def test_finds_config_in_cwd(self) -> None:
        Path("config.yml").write_text("resolver:\n  min_score: 0.8\n", encoding="utf-8")
        self.assertEqual(find_config(None).name, "config.yml")
        self.assertEqual(load_settings().resolver.min_score, 0.8)


if __name__ == "__main__":
    unittest.main()
