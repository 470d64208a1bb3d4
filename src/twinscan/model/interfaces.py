from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from twinscan.core.errors import ReportWriteError
from twinscan.core.types import ScanResult


class Reporter(ABC):
    @abstractmethod
    def render(self, result: ScanResult) -> str: ...

    def write(self, result: ScanResult, out_path: str) -> None:
        payload = self.render(result)
        try:
            Path(out_path).parent.mkdir(parents=True, exist_ok=True)
            with open(out_path, "w", encoding="utf-8") as handle:
                handle.write(payload)
        except OSError as exc:
            raise ReportWriteError(f"Failed to write report to {out_path!r}: {exc}") from exc
