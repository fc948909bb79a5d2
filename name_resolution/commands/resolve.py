from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, TextIO

from ..core.resolution.models import CandidateRecord, ResolutionOutcome
from ..resolver import NameResolver
from .output import render_outcome

logger = logging.getLogger(__name__)


def parse_candidates(payload: Any) -> list[CandidateRecord]:
    """
    Candidate records from decoded JSON.

    Accepts a list of names/objects, or an object with a ``candidates`` list.
    """
    if isinstance(payload, dict) and "candidates" in payload:
        payload = payload["candidates"]
    if not isinstance(payload, list):
        raise ValueError("candidates must be a JSON list (or an object with a 'candidates' list)")
    return [CandidateRecord.from_value(item) for item in payload]


def load_candidates(source: Path | str, stdin: Optional[TextIO] = None) -> list[CandidateRecord]:
    """Read candidates from a JSON file, or from stdin when ``source`` is '-'."""
    if str(source) == "-":
        text = (stdin or sys.stdin).read()
    else:
        text = Path(source).read_text(encoding="utf-8")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid candidates JSON: {exc}") from exc
    return parse_candidates(payload)


def run(
    resolver: NameResolver,
    query: str,
    candidates: list[CandidateRecord],
    *,
    min_score: Optional[float] = None,
    json_output: bool = False,
    out: Optional[TextIO] = None,
) -> ResolutionOutcome:
    out = out or sys.stdout
    logger.debug("Resolving '%s' against %d candidate(s)", query, len(candidates))
    outcome = resolver.resolve(query, candidates, min_score=min_score)
    if json_output:
        payload = {"query": query, **outcome.to_dict()}
        out.write(json.dumps(payload, indent=2, default=str) + "\n")
    else:
        for line in render_outcome(query, outcome):
            out.write(line + "\n")
    return outcome
