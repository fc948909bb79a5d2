from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..config import ResolverSettings, Settings
from ..core.resolution.models import MatchType
from ..core.resolution.scoring import NameScorer
from .output import error, ok as ok_line, warning


@dataclass(slots=True)
class DoctorReport:
    ok: bool
    checks: list[str]


def _threshold_line(label: str, settings: ResolverSettings) -> str:
    detail = f"min_score={settings.min_score:.2f}, strategy={settings.strategy.value}"
    if settings.min_score < 0.5:
        return warning(label, f"{detail}; low threshold accepts weak fuzzy matches")
    return ok_line(label, detail)


def run(settings: Settings, config_path: Optional[str] = None) -> DoctorReport:
    checks: list[str] = []
    ok = True

    checks.append(ok_line("Config", config_path or "built-in defaults"))
    checks.append(_threshold_line("Resolver", settings.resolver))

    for name in sorted(settings.profiles):
        try:
            profile = settings.resolver_for(name)
        except ValueError as exc:
            ok = False
            checks.append(error(f"Profile {name}", str(exc)))
            continue
        checks.append(_threshold_line(f"Profile {name}", profile))

    vocabulary = settings.vocabulary.build()
    if not vocabulary.legal_suffixes:
        ok = False
        checks.append(error("Vocabulary", "no legal suffixes"))
    else:
        checks.append(
            ok_line(
                "Vocabulary",
                f"{len(vocabulary.legal_suffixes)} suffixes, "
                f"{len(vocabulary.filler_words)} fillers, "
                f"{len(vocabulary.abbreviations)} abbreviations",
            )
        )

    # The configured vocabulary must still treat a name as an exact match of itself
    probe = NameScorer(vocabulary).score("Acme Roofing, LLC", "Acme Roofing, LLC")
    if probe.match_type is not MatchType.EXACT or probe.score != 1.0:
        ok = False
        checks.append(error("Self-match", f"{probe.score:.3f} {probe.match_type.value}"))
    else:
        checks.append(ok_line("Self-match"))

    return DoctorReport(ok=ok, checks=checks)
