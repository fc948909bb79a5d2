from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.resolution.models import MatchResult, ResolutionOutcome


@dataclass(frozen=True, slots=True)
class CheckLine:
    label: str
    status: str
    detail: Optional[str] = None

    def render(self) -> str:
        if self.detail:
            return f"{self.label}: {self.status} ({self.detail})"
        return f"{self.label}: {self.status}"


def ok(label: str, detail: Optional[str] = None) -> str:
    return CheckLine(label, "OK", detail).render()


def warning(label: str, detail: Optional[str] = None) -> str:
    return CheckLine(label, "WARNING", detail).render()


def error(label: str, detail: Optional[str] = None) -> str:
    return CheckLine(label, "ERROR", detail).render()


def result_line(rank: int, result: MatchResult, marker: str = " ") -> str:
    return (
        f"{marker}{rank:>3}. {result.score:.3f}  {result.match_type.value:<16} "
        f"{result.candidate.display_name}"
    )


def render_outcome(query: str, outcome: ResolutionOutcome) -> list[str]:
    lines = [f"Query: {query}", f"Threshold: {outcome.min_score:.2f}"]
    if outcome.best_match:
        best = outcome.best_match
        lines.append(
            f"Best match: {best.candidate.display_name} "
            f"({best.score:.3f}, {best.match_type.value}, via '{best.variation}')"
        )
    else:
        lines.append("Best match: none")
    if not outcome.all_results:
        lines.append("No candidates.")
        return lines
    lines.append("Candidates:")
    for rank, result in enumerate(outcome.all_results, start=1):
        marker = "*" if result is outcome.best_match else " "
        lines.append(result_line(rank, result, marker))
    if outcome.needs_review:
        lines.append("Needs review:")
        for result in outcome.review_candidates:
            lines.append(f"  - {result.candidate.display_name}")
    return lines
