from __future__ import annotations

from collections import defaultdict

from twinscan.core.types import DuplicateGroup, DuplicateOccurrence, HashedCandidate

EXACT_SIMILARITY = 100.0


def bucket_by_signature(hashed: list[HashedCandidate]) -> dict[str, list[HashedCandidate]]:
    buckets: dict[str, list[HashedCandidate]] = defaultdict(list)
    for item in hashed:
        buckets[item.signature].append(item)
    return dict(buckets)


def group_duplicates(
    hashed: list[HashedCandidate], min_group_size: int = 2
) -> list[DuplicateGroup]:
    """Group candidates sharing a signature, most impactful first.

    Groups are ordered by impact, then size (both descending), then signature,
    so the order is total and independent of input order.
    """
    if min_group_size <= 0:
        raise ValueError("min_group_size must be > 0")
    groups = [
        _make_group(signature, members)
        for signature, members in bucket_by_signature(hashed).items()
        if len(members) >= min_group_size
    ]
    groups.sort(key=lambda group: group.signature)
    groups.sort(key=lambda group: (group.impact, group.group_size), reverse=True)
    return groups


def _make_group(signature: str, members: list[HashedCandidate]) -> DuplicateGroup:
    occurrences = sorted(
        (_occurrence(member) for member in members),
        key=lambda occ: (occ.file_path, occ.start_line, occ.span_start),
    )
    group_size = len(occurrences)
    token_count = max(member.token_count for member in members)
    return DuplicateGroup(
        signature=signature,
        similarity_percent=EXACT_SIMILARITY,
        group_size=group_size,
        token_count=token_count,
        impact=token_count * (group_size - 1),
        occurrences=occurrences,
    )


def _occurrence(member: HashedCandidate) -> DuplicateOccurrence:
    candidate = member.candidate
    return DuplicateOccurrence(
        kind=candidate.kind,
        file_path=candidate.file_path,
        start_line=candidate.start_line,
        end_line=candidate.end_line,
        span_start=candidate.span_start,
        span_length=candidate.span_length,
    )
