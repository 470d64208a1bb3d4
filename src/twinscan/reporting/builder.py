from __future__ import annotations

from twinscan.core.types import (
    CandidateKind,
    DuplicateGroup,
    GroupReport,
    HashedCandidate,
    NormalizedCandidate,
    OccurrenceReport,
    ScanReport,
    ScanSummary,
)
from twinscan.io.preview import preview_lines
from twinscan.similarity.grouping import bucket_by_signature


def build_summary(
    total_files: int,
    parsed_successfully: int,
    error_diagnostics: int,
    normalized: list[NormalizedCandidate],
    filtered: list[NormalizedCandidate],
    hashed: list[HashedCandidate],
    groups: list[DuplicateGroup],
) -> ScanSummary:
    token_counts = [item.token_count for item in filtered]
    tokens_total = sum(token_counts)
    tokens_avg = round(tokens_total / len(token_counts), 1) if token_counts else 0.0
    strong = [members for members in bucket_by_signature(hashed).values() if len(members) >= 2]
    return ScanSummary(
        total_files=total_files,
        parsed_successfully=parsed_successfully,
        parsed_failed=total_files - parsed_successfully,
        error_diagnostics=error_diagnostics,
        candidates_total=len(filtered),
        candidates_method=_count_kind(filtered, CandidateKind.METHOD),
        candidates_lambda=_count_kind(filtered, CandidateKind.LAMBDA),
        candidates_block=_count_kind(filtered, CandidateKind.BLOCK),
        normalized_total=len(normalized),
        tokens_total=tokens_total,
        tokens_avg=tokens_avg,
        tokens_max=max(token_counts, default=0),
        signatures_total=len(hashed),
        strong_duplicates_groups=len(strong),
        strong_duplicates_items=sum(len(members) for members in strong),
        strong_duplicates_max_group_size=max((len(members) for members in strong), default=0),
        duplicates_groups=len(groups),
        duplicates_items=sum(group.group_size for group in groups),
    )


def build_group_reports(
    groups: list[DuplicateGroup], preview_line_count: int
) -> list[GroupReport]:
    reports: list[GroupReport] = []
    for group in groups:
        occurrences = [
            OccurrenceReport(
                kind=occ.kind.value,
                file_path=occ.file_path,
                start_line=occ.start_line,
                end_line=occ.end_line,
                preview_lines=(
                    preview_lines(occ.file_path, occ.start_line, occ.end_line, preview_line_count)
                    if preview_line_count > 0
                    else None
                ),
            )
            for occ in group.occurrences
        ]
        reports.append(
            GroupReport(
                signature=group.signature,
                similarity_percent=group.similarity_percent,
                group_size=group.group_size,
                token_count=group.token_count,
                impact=group.impact,
                occurrences=occurrences,
            )
        )
    return reports


def build_report(
    summary: ScanSummary, groups: list[DuplicateGroup], top: int, preview_line_count: int
) -> tuple[ScanReport, list[GroupReport]]:
    """Return the display report (top ``top`` groups) and every group's projection."""
    if top <= 0:
        raise ValueError("top must be > 0")
    all_groups = build_group_reports(groups, preview_line_count)
    return ScanReport(summary=summary, groups=all_groups[:top]), all_groups


def _count_kind(items: list[NormalizedCandidate], kind: CandidateKind) -> int:
    return sum(1 for item in items if item.candidate.kind is kind)
