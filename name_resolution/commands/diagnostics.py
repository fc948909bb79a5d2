from __future__ import annotations

import sys
from typing import Optional, TextIO

from ..core.resolution.models import MatchScore
from ..core.resolution.scoring import NameScorer
from ..core.resolution.variations import VariationGenerator


def run_score(
    scorer: NameScorer,
    first: str,
    second: str,
    *,
    explain: bool = False,
    out: Optional[TextIO] = None,
) -> MatchScore:
    out = out or sys.stdout
    result = scorer.score(first, second)
    out.write(f"{result.score:.4f} {result.match_type.value}\n")
    if explain:
        a, b = scorer.forms(first), scorer.forms(second)
        out.write(f"  normalized: '{a.normalized}' | '{b.normalized}'\n")
        out.write(f"  core:       '{a.core}' | '{b.core}'\n")
        for label, applies in scorer.explain(first, second):
            out.write(f"  {'x' if applies else ' '} {label}\n")
    return result


def run_variations(
    generator: VariationGenerator,
    name: str,
    *,
    out: Optional[TextIO] = None,
) -> tuple[str, ...]:
    out = out or sys.stdout
    variations = generator.generate(name)
    for variation in variations:
        out.write(variation + "\n")
    return variations
