from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .core.resolution.filters import (
    REGISTRY_DOCUMENT_PREFIXES,
    REGISTRY_MIN_DOCUMENT_LENGTH,
    DocumentNumberFilter,
)
from .core.resolution.selector import DEFAULT_MIN_SCORE
from .core.resolution.variations import DEFAULT_MAX_VARIATIONS, VariationStrategy
from .core.resolution.vocabulary import DEFAULT_VOCABULARY, NameVocabulary


class DocumentFilterSettings(BaseModel):
    prefixes: str = REGISTRY_DOCUMENT_PREFIXES
    min_length: int = Field(default=REGISTRY_MIN_DOCUMENT_LENGTH, ge=1)
    field: str = "document_number"

    @field_validator("prefixes")
    @classmethod
    def _require_prefixes(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("prefixes must list at least one letter")
        return value

    def build(self) -> DocumentNumberFilter:
        return DocumentNumberFilter(
            prefixes=self.prefixes, min_length=self.min_length, field=self.field
        )


class ResolverSettings(BaseModel):
    min_score: float = Field(default=DEFAULT_MIN_SCORE, ge=0.0, le=1.0)
    strategy: VariationStrategy = VariationStrategy.BROAD
    max_variations: int = Field(default=DEFAULT_MAX_VARIATIONS, ge=1)
    max_workers: int = Field(default=1, ge=1)
    parallel_threshold: int = Field(default=64, ge=1)
    max_candidates: Optional[int] = Field(default=None, ge=1)
    document_filter: Optional[DocumentFilterSettings] = None

    @field_validator("strategy", mode="before")
    @classmethod
    def _lower_strategy(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class VocabularySettings(BaseModel):
    extra_suffixes: List[str] = Field(default_factory=list)
    extra_fillers: List[str] = Field(default_factory=list)
    abbreviations: Dict[str, str] = Field(default_factory=dict)

    def build(self) -> NameVocabulary:
        if not (self.extra_suffixes or self.extra_fillers or self.abbreviations):
            return DEFAULT_VOCABULARY
        return DEFAULT_VOCABULARY.extended(
            suffixes=self.extra_suffixes,
            fillers=self.extra_fillers,
            abbreviations=self.abbreviations,
        )


class Settings(BaseModel):
    resolver: ResolverSettings = ResolverSettings()
    vocabulary: VocabularySettings = VocabularySettings()
    profiles: Dict[str, ResolverSettings] = Field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "Settings":
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        return cls.model_validate(raw or {})

    def resolver_for(self, profile: Optional[str] = None) -> ResolverSettings:
        """Base resolver settings with the named profile's explicit fields on top."""
        if profile is None:
            return self.resolver
        try:
            overrides = self.profiles[profile]
        except KeyError:
            known = ", ".join(sorted(self.profiles)) or "none"
            raise ValueError(f"Unknown profile '{profile}' (known: {known})") from None
        merged = self.resolver.model_dump()
        merged.update(overrides.model_dump(exclude_unset=True))
        return ResolverSettings.model_validate(merged)


def find_config(explicit_path: Optional[Path]) -> Optional[Path]:
    if explicit_path:
        if not explicit_path.exists():
            raise FileNotFoundError(f"Config file not found: {explicit_path}")
        return explicit_path
    cwd = Path.cwd()
    for candidate in (cwd / "config.yaml", cwd / "config.yml"):
        if candidate.exists():
            return candidate
    return None


def load_settings(explicit_path: Optional[Path] = None) -> Settings:
    """Settings from the config file if one is found, else the built-in defaults."""
    path = find_config(explicit_path)
    if path is None:
        return Settings()
    return Settings.load(path)
