from __future__ import annotations

import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TextIO, cast

from twinscan.core.config_loader import load_config
from twinscan.core.errors import ConfigError, ReportWriteError
from twinscan.core.pipeline import run_pipeline
from twinscan.model.interfaces import Reporter
from twinscan.reporting.json_reporter import JsonReporter
from twinscan.reporting.markdown_reporter import MarkdownReporter
from twinscan.reporting.text_reporter import TextReporter

REPORTERS: dict[str, type[Reporter]] = {
    "text": TextReporter,
    "json": JsonReporter,
    "markdown": MarkdownReporter,
}

FORMAT_BY_SUFFIX = {
    ".json": "json",
    ".md": "markdown",
    ".markdown": "markdown",
    ".txt": "text",
}


@dataclass(frozen=True, slots=True)
class ScanOptions:
    paths: list[str]
    fmt: str | None = None
    out_path: str | None = None
    top: int | None = None
    min_group_size: int | None = None
    min_tokens: int | None = None
    min_lines: int | None = None
    extract_min_lines: int | None = None
    preview_lines: int | None = None
    kinds: list[str] | None = None
    jobs: int | None = None
    progress: bool = False
    include_globs: list[str] | None = None
    exclude_globs: list[str] | None = None


def run_scan(
    options: ScanOptions, stdout: TextIO | None = None, stderr: TextIO | None = None
) -> int:
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    for raw in options.paths:
        if not Path(raw).exists():
            stderr.write(f"Error: path '{raw}' does not exist.\n")
            return 1

    fmt = resolve_format(options.fmt, options.out_path)
    if fmt is None:
        stderr.write(
            "Error: unable to infer format from --out path. "
            "Use .json, .md, or .txt, or set --format explicitly.\n"
        )
        return 1

    overrides: dict[str, object] = {
        "kinds": options.kinds,
        "jobs": options.jobs,
        "progress": True if options.progress else None,
        "thresholds": {
            "min_group_size": options.min_group_size,
            "min_tokens": options.min_tokens,
            "min_lines": options.min_lines,
            "extract_min_lines": options.extract_min_lines,
        },
        "report": {"top": options.top, "preview_lines": options.preview_lines},
    }
    try:
        config = load_config(Path.cwd(), _clean_overrides(overrides))
        include_globs, exclude_globs = merge_globs(
            config.include_globs,
            config.exclude_globs,
            options.include_globs or [],
            options.exclude_globs or [],
        )
        config = replace(config, include_globs=include_globs, exclude_globs=exclude_globs)
        result = run_pipeline(options.paths, config)
    except ConfigError as exc:
        stderr.write(f"Error: {exc}\n")
        return 1

    reporter = REPORTERS[fmt]()
    stdout.write(reporter.render(result))
    if options.out_path is not None:
        try:
            reporter.write(result, options.out_path)
        except ReportWriteError as exc:
            stderr.write(f"Error: {exc}\n")
            return 1
    return 0


def resolve_format(fmt: str | None, out_path: str | None) -> str | None:
    if fmt is not None:
        fmt = fmt.strip().lower()
        return "markdown" if fmt == "md" else fmt
    if out_path is None:
        return "text"
    return FORMAT_BY_SUFFIX.get(Path(out_path).suffix.lower())


def _clean_overrides(overrides: dict[str, object]) -> dict[str, object]:
    cleaned: dict[str, object] = {}
    for key, value in overrides.items():
        if isinstance(value, dict):
            value_dict = cast(dict[str, object], value)
            filtered: dict[str, object] = {k: v for k, v in value_dict.items() if v is not None}
            if filtered:
                cleaned[key] = filtered
        elif value is not None:
            cleaned[key] = value
    return cleaned


def merge_globs(
    base_include: list[str],
    base_exclude: list[str],
    cli_include: list[str],
    cli_exclude: list[str],
) -> tuple[list[str], list[str]]:
    include = _dedupe(base_include + cli_include)
    exclude = _dedupe(base_exclude + cli_exclude)

    # CLI entries override conflicting pyproject entries.
    for pattern in cli_include:
        exclude = [value for value in exclude if value != pattern]
    for pattern in cli_exclude:
        include = [value for value in include if value != pattern]
    return include, exclude


def _dedupe(values: list[str]) -> list[str]:
    seen: set[str] = set()
    deduped: list[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        deduped.append(value)
    return deduped
