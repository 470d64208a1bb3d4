from __future__ import annotations

from twinscan.core.types import ScanResult, ScanSummary
from twinscan.model.interfaces import Reporter


class TextReporter(Reporter):
    def render(self, result: ScanResult) -> str:
        lines = summary_lines(result.report.summary)
        for index, group in enumerate(result.report.groups, start=1):
            lines.append(
                f"[group {index}] similarity={group.similarity_percent:.0f}% "
                f"size={group.group_size} tokens={group.token_count} impact={group.impact}"
            )
            for occ in group.occurrences:
                lines.append(f"- {occ.kind} {occ.file_path}:{occ.start_line}-{occ.end_line}")
                for preview in occ.preview_lines or []:
                    lines.append(f"  {preview}")
        return "\n".join(lines) + "\n"


def summary_lines(summary: ScanSummary) -> list[str]:
    return [
        f"total_files={summary.total_files}",
        f"parsed_successfully={summary.parsed_successfully}",
        f"parsed_failed={summary.parsed_failed}",
        f"error_diagnostics={summary.error_diagnostics}",
        f"candidates_total={summary.candidates_total}",
        f"candidates_method={summary.candidates_method}",
        f"candidates_lambda={summary.candidates_lambda}",
        f"candidates_block={summary.candidates_block}",
        f"normalized_total={summary.normalized_total}",
        f"tokens_total={summary.tokens_total}",
        f"tokens_avg={summary.tokens_avg:.1f}",
        f"tokens_max={summary.tokens_max}",
        f"signatures_total={summary.signatures_total}",
        f"strong_duplicates_groups={summary.strong_duplicates_groups}",
        f"strong_duplicates_items={summary.strong_duplicates_items}",
        f"strong_duplicates_max_group_size={summary.strong_duplicates_max_group_size}",
        f"duplicates_groups={summary.duplicates_groups}",
        f"duplicates_items={summary.duplicates_items}",
    ]
