import json
import logging
from dataclasses import replace
from pathlib import Path

import pytest

from twinscan.core.config import Thresholds, TwinScanConfig
from twinscan.core.errors import ConfigError
from twinscan.core.pipeline import run_pipeline, scan_files
from twinscan.reporting.json_reporter import JsonReporter

FIXTURE = Path(__file__).resolve().parents[1] / "fixtures" / "dup_repo"

LOOSE = TwinScanConfig(thresholds=Thresholds(min_tokens=0, min_lines=0))

FIRST = """\
def compute(values):
    total = 0
    count = len(values)
    scaled = total * 3
    offset = scaled + count
    result = offset - 1
    total = result
    return total
"""

SECOND = """\
def evaluate(items):
    acc = 0
    size = len(items)
    grown = acc * 9
    moved = grown + size
    out = moved - 5
    acc = out
    return acc
"""


def _write(root: Path, name: str, text: str) -> str:
    path = root / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_renamed_methods_form_one_group(tmp_path: Path):
    files = [_write(tmp_path, "a.py", FIRST), _write(tmp_path, "b.py", SECOND)]
    result = scan_files(files, LOOSE)
    summary = result.report.summary
    assert summary.candidates_total == 2
    assert summary.duplicates_groups == 1
    assert summary.duplicates_items == 2
    (group,) = result.report.groups
    assert group.group_size == 2
    assert [occ.file_path for occ in group.occurrences] == sorted(files)
    assert all((occ.start_line, occ.end_line) == (1, 8) for occ in group.occurrences)


def test_short_method_is_filtered_out(tmp_path: Path):
    files = [_write(tmp_path, "a.py", "def f(x):\n    return x\n")]
    config = TwinScanConfig(thresholds=Thresholds(min_tokens=0, min_lines=6))
    summary = scan_files(files, config).report.summary
    assert summary.normalized_total == 1
    assert summary.candidates_total == 0
    assert summary.duplicates_groups == 0


def test_json_output_omits_preview_when_disabled(tmp_path: Path):
    files = [_write(tmp_path, "a.py", FIRST)]
    config = replace(
        LOOSE,
        thresholds=Thresholds(min_group_size=1, min_tokens=0, min_lines=0),
        report=replace(LOOSE.report, preview_lines=0),
    )
    payload = json.loads(JsonReporter().render(scan_files(files, config)))
    assert len(payload) == 1
    assert payload[0]["group_size"] == 1
    assert "preview_lines" not in payload[0]["occurrences"][0]


def test_parse_failures_are_counted_and_skipped(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
):
    files = [
        _write(tmp_path, "a.py", FIRST),
        _write(tmp_path, "b.py", SECOND),
        _write(tmp_path, "broken.py", "def broken(:\n    pass\n"),
    ]
    with caplog.at_level(logging.WARNING, logger="twinscan"):
        result = scan_files(files, LOOSE)
    summary = result.report.summary
    assert summary.total_files == 3
    assert summary.parsed_successfully == 2
    assert summary.parsed_failed == 1
    assert summary.error_diagnostics >= 1
    assert summary.duplicates_groups == 1
    assert any("broken.py" in record.getMessage() for record in caplog.records)


def test_fixture_repo_default_thresholds():
    result = run_pipeline([str(FIXTURE)], TwinScanConfig())
    summary = result.report.summary
    assert summary.total_files == 3
    assert summary.duplicates_groups == 1
    (group,) = result.report.groups
    assert [Path(occ.file_path).name for occ in group.occurrences] == [
        "invoices.py",
        "orders.py",
    ]
    assert all(occ.kind == "Method" for occ in group.occurrences)
    assert group.token_count >= 50
    assert group.impact == group.token_count


def test_fixture_repo_loose_thresholds():
    result = run_pipeline([str(FIXTURE)], LOOSE)
    kinds = sorted(group.occurrences[0].kind for group in result.all_groups)
    assert kinds == ["Block", "Block", "Block", "Lambda", "Method"]
    assert result.report.summary.duplicates_items == 10


def test_kind_filter(tmp_path: Path):
    config = replace(LOOSE, kinds=["lambda"])
    result = run_pipeline([str(FIXTURE)], config)
    summary = result.report.summary
    assert summary.candidates_total == summary.candidates_lambda == 2
    assert [group.occurrences[0].kind for group in result.all_groups] == ["Lambda"]


def test_extract_min_lines_limits_raw_candidates():
    config = replace(LOOSE, thresholds=replace(LOOSE.thresholds, extract_min_lines=5))
    summary = run_pipeline([str(FIXTURE)], config).report.summary
    assert summary.normalized_total == 2
    assert summary.candidates_method == 2


def test_results_are_deterministic():
    first = run_pipeline([str(FIXTURE)], LOOSE)
    second = run_pipeline([str(FIXTURE)], LOOSE)
    assert first.report == second.report
    assert first.all_groups == second.all_groups


def test_parallel_scan_matches_serial():
    serial = run_pipeline([str(FIXTURE)], LOOSE)
    parallel = run_pipeline([str(FIXTURE)], replace(LOOSE, jobs=2))
    assert parallel.report == serial.report


def test_timing_recorded():
    result = run_pipeline([str(FIXTURE)], TwinScanConfig())
    assert set(result.timing) == {"extract", "group", "report"}


@pytest.mark.parametrize(
    "config",
    [
        TwinScanConfig(thresholds=Thresholds(min_group_size=0)),
        TwinScanConfig(thresholds=Thresholds(min_tokens=-1)),
        TwinScanConfig(jobs=0),
        TwinScanConfig(kinds=["Class"]),
    ],
)
def test_invalid_config_rejected(config: TwinScanConfig):
    with pytest.raises(ConfigError):
        run_pipeline([str(FIXTURE)], config)


def test_copies_match_regardless_of_preceding_code(tmp_path: Path):
    alone = (
        "def total(values):\n"
        "    acc = 0\n"
        "    for value in values:\n"
        "        if value:\n"
        "            acc += value\n"
        "    return acc\n"
    )
    after_nested = (
        "def helper(x):\n"
        "    if x:\n"
        "        for y in x:\n"
        "            return y\n"
        "\n"
        "\n"
        "def summed(numbers):\n"
        "    out = 0\n"
        "    for number in numbers:\n"
        "        if number:\n"
        "            out += number\n"
        "    return out\n"
    )
    files = [_write(tmp_path, "a.py", alone), _write(tmp_path, "b.py", after_nested)]
    config = TwinScanConfig(thresholds=Thresholds(min_tokens=0, min_lines=6))
    result = scan_files(files, config)
    assert result.report.summary.duplicates_groups == 1
    (group,) = result.report.groups
    assert [(occ.start_line, occ.end_line) for occ in group.occurrences] == [(1, 6), (7, 12)]
