from __future__ import annotations

from dataclasses import dataclass, field

from twinscan.core.errors import ConfigError
from twinscan.core.types import CandidateKind


@dataclass(frozen=True, slots=True)
class Thresholds:
    min_group_size: int = 2
    min_tokens: int = 50
    min_lines: int = 6
    # Coarse line filter applied while extracting, before normalization.
    extract_min_lines: int | None = None


@dataclass(frozen=True, slots=True)
class ReportConfig:
    top: int = 10
    preview_lines: int = 3


@dataclass(frozen=True, slots=True)
class TwinScanConfig:
    include_globs: list[str] = field(default_factory=lambda: ["**/*.py"])
    exclude_globs: list[str] = field(
        default_factory=lambda: [
            "**/.git/**",
            "**/.hg/**",
            "**/.svn/**",
            "**/.venv/**",
            "**/venv/**",
            "**/__pycache__/**",
            "**/site-packages/**",
            "**/.tox/**",
            "**/build/**",
            "**/dist/**",
        ]
    )
    thresholds: Thresholds = Thresholds()
    report: ReportConfig = ReportConfig()
    kinds: list[str] | None = None
    jobs: int = 1
    progress: bool = False


def resolve_kinds(names: list[str] | None) -> frozenset[CandidateKind] | None:
    if not names:
        return None
    kinds: set[CandidateKind] = set()
    for name in names:
        try:
            kinds.add(CandidateKind.parse(name))
        except ValueError as exc:
            allowed = ", ".join(kind.value for kind in CandidateKind)
            raise ConfigError(
                f"Unknown candidate kind {name!r}; expected one of {allowed}"
            ) from exc
    return frozenset(kinds)


def validate_config(config: TwinScanConfig) -> None:
    if config.report.top <= 0:
        raise ConfigError("top must be > 0")
    if config.thresholds.min_group_size <= 0:
        raise ConfigError("min_group_size must be > 0")
    if config.thresholds.min_tokens < 0:
        raise ConfigError("min_tokens must be >= 0")
    if config.thresholds.min_lines < 0:
        raise ConfigError("min_lines must be >= 0")
    if config.report.preview_lines < 0:
        raise ConfigError("preview_lines must be >= 0")
    extract_min_lines = config.thresholds.extract_min_lines
    if extract_min_lines is not None and extract_min_lines <= 0:
        raise ConfigError("extract_min_lines must be > 0 when set")
    if config.jobs <= 0:
        raise ConfigError("jobs must be > 0")
    resolve_kinds(config.kinds)
