from __future__ import annotations

import os

from twinscan.core.types import GroupReport, ScanReport, ScanResult, ScanSummary
from twinscan.model.interfaces import Reporter


class MarkdownReporter(Reporter):
    def render(self, result: ScanResult) -> str:
        report = result.report
        lines = ["# TwinScan Report", ""]
        lines += ["## Key findings", ""]
        lines += _key_findings(report)
        lines += ["", "## Summary", ""]
        lines += _summary_bullets(report.summary)
        lines += ["", "## Top Duplicate Groups", ""]
        lines += [
            "| # | Size | Token Count | Impact | Similarity |",
            "| - | ---- | ----------- | ------ | ---------- |",
        ]
        for index, group in enumerate(report.groups, start=1):
            lines.append(
                f"| {index} | {group.group_size} | {group.token_count} | {group.impact} "
                f"| {group.similarity_percent:.0f}% |"
            )
        for index, group in enumerate(report.groups, start=1):
            lines.append("")
            lines += _group_details(index, group)
        return "\n".join(lines) + "\n"


def _key_findings(report: ScanReport) -> list[str]:
    summary = report.summary
    if not report.groups:
        findings = ["- No duplicate groups found."]
    else:
        top = report.groups[0]
        findings = [
            f"- {summary.duplicates_groups} duplicate groups covering "
            f"{summary.duplicates_items} occurrences.",
            f"- Highest impact: group 1 with impact {top.impact} "
            f"({top.token_count} tokens x {top.group_size - 1} redundant copies).",
            f"- Largest group holds {max(group.group_size for group in report.groups)} "
            "occurrences.",
        ]
    if summary.parsed_failed:
        findings.append(
            f"- {summary.parsed_failed} files could not be parsed "
            f"({summary.error_diagnostics} error diagnostics); results may be incomplete."
        )
    return findings


def _summary_bullets(summary: ScanSummary) -> list[str]:
    return [
        f"- Total files: {summary.total_files}",
        f"- Parsed successfully: {summary.parsed_successfully}",
        f"- Parsed failed: {summary.parsed_failed}",
        f"- Error diagnostics: {summary.error_diagnostics}",
        f"- Candidates total: {summary.candidates_total}",
        f"- Candidates by kind: {summary.candidates_method} methods, "
        f"{summary.candidates_lambda} lambdas, {summary.candidates_block} blocks",
        f"- Normalized total: {summary.normalized_total}",
        f"- Tokens total: {summary.tokens_total}",
        f"- Tokens avg: {summary.tokens_avg:.1f}",
        f"- Tokens max: {summary.tokens_max}",
        f"- Signatures total: {summary.signatures_total}",
        f"- Strong duplicates groups/items: "
        f"{summary.strong_duplicates_groups}/{summary.strong_duplicates_items}",
        f"- Strong duplicates max group size: {summary.strong_duplicates_max_group_size}",
        f"- Duplicate groups/items: {summary.duplicates_groups}/{summary.duplicates_items}",
    ]


def _group_details(index: int, group: GroupReport) -> list[str]:
    lines = [
        f"### Group {index}",
        "",
        f"- Similarity: {group.similarity_percent:.0f}%",
        f"- Size: {group.group_size}",
        f"- Token count: {group.token_count}",
        f"- Impact: {group.impact} (= token count {group.token_count} x "
        f"(size {group.group_size} - 1))",
        f"- Signature: `{group.signature}`",
        "",
        "Occurrences:",
        "",
    ]
    for number, occ in enumerate(group.occurrences, start=1):
        location = f"{_display_path(occ.file_path)}:{occ.start_line}-{occ.end_line}"
        lines.append(f"{number}. `{occ.kind} {location}`")
    preview = next((occ.preview_lines for occ in group.occurrences if occ.preview_lines), None)
    if preview:
        lines += ["", "```python", *preview, "```"]
    return lines


def _display_path(path: str) -> str:
    try:
        return os.path.relpath(path, os.getcwd())
    except ValueError:
        # Different drive on Windows.
        return path
