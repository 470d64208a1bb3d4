from __future__ import annotations

from collections.abc import Collection

from twinscan.core.types import CandidateKind, NormalizedCandidate


def filter_candidates(
    normalized: list[NormalizedCandidate],
    min_tokens: int,
    min_lines: int,
    kinds: Collection[CandidateKind] | None = None,
) -> list[NormalizedCandidate]:
    if min_tokens < 0:
        raise ValueError("min_tokens must be >= 0")
    if min_lines < 0:
        raise ValueError("min_lines must be >= 0")
    kind_set = frozenset(kinds) if kinds else None
    return [
        item
        for item in normalized
        if item.token_count >= min_tokens
        and item.candidate.line_count >= min_lines
        and (kind_set is None or item.candidate.kind in kind_set)
    ]
