"""twinscan package."""

from twinscan.core.config import TwinScanConfig
from twinscan.core.pipeline import run_pipeline, scan_files

__all__ = ["TwinScanConfig", "run_pipeline", "scan_files"]
