from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class CandidateKind(str, Enum):
    METHOD = "Method"
    LAMBDA = "Lambda"
    BLOCK = "Block"

    @classmethod
    def parse(cls, name: str) -> CandidateKind:
        wanted = name.strip().lower()
        for kind in cls:
            if kind.value.lower() == wanted:
                return kind
        raise ValueError(f"Unknown candidate kind: {name!r}")


class TokenCategory(Enum):
    IDENTIFIER = "identifier"
    NUMERIC = "numeric"
    STRING = "string"
    CHARACTER = "character"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class LexToken:
    category: TokenCategory
    text: str
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Candidate:
    kind: CandidateKind
    file_path: str
    start_line: int
    end_line: int
    span_start: int
    span_length: int
    node: Any = field(default=None, compare=False, repr=False)
    tokens: tuple[LexToken, ...] = field(default=(), compare=False, repr=False)

    @property
    def line_count(self) -> int:
        return max(0, self.end_line - self.start_line + 1)


@dataclass(frozen=True, slots=True)
class NormalizedCandidate:
    candidate: Candidate
    tokens: tuple[str, ...]
    token_count: int


@dataclass(frozen=True, slots=True)
class HashedCandidate:
    normalized: NormalizedCandidate
    signature: str
    token_count: int

    @property
    def candidate(self) -> Candidate:
        return self.normalized.candidate


@dataclass(frozen=True, slots=True)
class DuplicateOccurrence:
    kind: CandidateKind
    file_path: str
    start_line: int
    end_line: int
    span_start: int
    span_length: int


@dataclass(frozen=True, slots=True)
class DuplicateGroup:
    signature: str
    similarity_percent: float
    group_size: int
    token_count: int
    impact: int
    occurrences: list[DuplicateOccurrence]


@dataclass(frozen=True, slots=True)
class ScanSummary:
    total_files: int
    parsed_successfully: int
    parsed_failed: int
    error_diagnostics: int
    candidates_total: int
    candidates_method: int
    candidates_lambda: int
    candidates_block: int
    normalized_total: int
    tokens_total: int
    tokens_avg: float
    tokens_max: int
    signatures_total: int
    strong_duplicates_groups: int
    strong_duplicates_items: int
    strong_duplicates_max_group_size: int
    duplicates_groups: int
    duplicates_items: int


@dataclass(frozen=True, slots=True)
class OccurrenceReport:
    kind: str
    file_path: str
    start_line: int
    end_line: int
    preview_lines: list[str] | None = None


@dataclass(frozen=True, slots=True)
class GroupReport:
    signature: str
    similarity_percent: float
    group_size: int
    token_count: int
    impact: int
    occurrences: list[OccurrenceReport]


@dataclass(frozen=True, slots=True)
class ScanReport:
    summary: ScanSummary
    groups: list[GroupReport]


@dataclass(frozen=True, slots=True)
class ScanResult:
    report: ScanReport
    all_groups: list[GroupReport]
    timing: dict[str, float] = field(default_factory=dict)
