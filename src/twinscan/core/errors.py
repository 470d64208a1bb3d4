class TwinScanError(Exception):
    """Base exception for twinscan."""


class ConfigError(TwinScanError):
    """Raised when configuration is invalid."""


class ReportWriteError(TwinScanError):
    """Raised when a rendered report cannot be persisted."""
