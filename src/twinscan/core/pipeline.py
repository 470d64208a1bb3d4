from __future__ import annotations

import time
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from functools import partial
from multiprocessing import get_context

from tqdm import tqdm

from twinscan.candidates.extractor import extract_candidates
from twinscan.candidates.filters import filter_candidates
from twinscan.core.config import TwinScanConfig, resolve_kinds, validate_config
from twinscan.core.logging import get_logger
from twinscan.core.types import NormalizedCandidate, ScanResult
from twinscan.io.fs import collect_files
from twinscan.parsing.python_ast import parse_file
from twinscan.reporting.builder import build_report, build_summary
from twinscan.similarity.grouping import group_duplicates
from twinscan.similarity.signature import compute_signatures
from twinscan.snippets.normalization import normalize_candidates


@dataclass(frozen=True, slots=True)
class FileOutcome:
    path: str
    success: bool
    error_diagnostics: int
    error_message: str | None
    normalized: list[NormalizedCandidate]


def _scan_file(path: str, extract_min_lines: int | None) -> FileOutcome:
    parsed = parse_file(path)
    candidates = extract_candidates(parsed, extract_min_lines)
    return FileOutcome(
        path=path,
        success=parsed.success,
        error_diagnostics=parsed.error_count,
        error_message=parsed.error_message
        or next((diag.message for diag in parsed.diagnostics if diag.severity == "error"), None),
        normalized=normalize_candidates(candidates),
    )


def _scan_all(
    files: list[str], extract_min_lines: int | None, jobs: int
) -> Iterator[FileOutcome]:
    worker = partial(_scan_file, extract_min_lines=extract_min_lines)
    processes = min(jobs, len(files))
    if processes <= 1:
        yield from map(worker, files)
        return
    chunk_size = max(1, len(files) // (processes * 4))
    ctx = get_context("spawn")
    with ctx.Pool(processes=processes) as pool:
        # imap keeps input order, so merging stays deterministic.
        yield from pool.imap(worker, files, chunksize=chunk_size)


def scan_files(files: list[str], config: TwinScanConfig) -> ScanResult:
    """Run every stage after file discovery over an explicit list of files."""
    validate_config(config)
    logger = get_logger()
    thresholds = config.thresholds
    timing: dict[str, float] = {}

    start = time.perf_counter()
    outcomes: Iterable[FileOutcome] = tqdm(
        _scan_all(files, thresholds.extract_min_lines, config.jobs),
        total=len(files),
        desc="Scan files",
        unit="file",
        disable=not config.progress,
    )
    parsed_successfully = 0
    error_diagnostics = 0
    normalized: list[NormalizedCandidate] = []
    for outcome in outcomes:
        error_diagnostics += outcome.error_diagnostics
        if not outcome.success:
            logger.warning(
                "Skipping %s: %s", outcome.path, outcome.error_message or "parse failed"
            )
            continue
        parsed_successfully += 1
        normalized.extend(outcome.normalized)
    timing["extract"] = time.perf_counter() - start

    start = time.perf_counter()
    filtered = filter_candidates(
        normalized,
        thresholds.min_tokens,
        thresholds.min_lines,
        resolve_kinds(config.kinds),
    )
    hashed = compute_signatures(filtered)
    groups = group_duplicates(hashed, thresholds.min_group_size)
    timing["group"] = time.perf_counter() - start

    start = time.perf_counter()
    summary = build_summary(
        total_files=len(files),
        parsed_successfully=parsed_successfully,
        error_diagnostics=error_diagnostics,
        normalized=normalized,
        filtered=filtered,
        hashed=hashed,
        groups=groups,
    )
    report, all_groups = build_report(
        summary, groups, config.report.top, config.report.preview_lines
    )
    timing["report"] = time.perf_counter() - start

    logger.debug(
        "Timings: %s", ", ".join(f"{stage}={elapsed:.3f}s" for stage, elapsed in timing.items())
    )
    logger.info(
        "Scanned %d files: %d candidates kept of %d, %d duplicate groups",
        summary.total_files,
        summary.candidates_total,
        summary.normalized_total,
        summary.duplicates_groups,
    )
    return ScanResult(report=report, all_groups=all_groups, timing=timing)


def run_pipeline(paths: list[str], config: TwinScanConfig) -> ScanResult:
    validate_config(config)
    files = collect_files(paths, config.include_globs, config.exclude_globs)
    get_logger().debug("Collected %d files from %d paths", len(files), len(paths))
    return scan_files(files, config)
