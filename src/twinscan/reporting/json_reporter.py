from __future__ import annotations

import json

from twinscan.core.types import GroupReport, OccurrenceReport, ScanResult
from twinscan.model.interfaces import Reporter


class JsonReporter(Reporter):
    """Every surviving group, regardless of the display ``top`` limit."""

    def render(self, result: ScanResult) -> str:
        payload = [_serialize_group(group) for group in result.all_groups]
        return json.dumps(payload, indent=2) + "\n"


def _serialize_group(group: GroupReport) -> dict[str, object]:
    return {
        "signature": group.signature,
        "similarity_percent": group.similarity_percent,
        "group_size": group.group_size,
        "token_count": group.token_count,
        "impact": group.impact,
        "occurrences": [_serialize_occurrence(occ) for occ in group.occurrences],
    }


def _serialize_occurrence(occ: OccurrenceReport) -> dict[str, object]:
    data: dict[str, object] = {
        "kind": occ.kind,
        "file_path": occ.file_path,
        "start_line": occ.start_line,
        "end_line": occ.end_line,
    }
    if occ.preview_lines is not None:
        data["preview_lines"] = occ.preview_lines
    return data
