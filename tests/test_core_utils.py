import logging

from twinscan.core.errors import ConfigError, ReportWriteError, TwinScanError
from twinscan.core.logging import get_logger, set_verbosity


def test_errors_are_exceptions():
    assert issubclass(TwinScanError, Exception)
    assert issubclass(ConfigError, TwinScanError)
    assert issubclass(ReportWriteError, TwinScanError)


def test_get_logger_singleton():
    logger1 = get_logger()
    logger2 = get_logger()
    assert logger1 is logger2
    assert logger1.name == "twinscan"
    assert len(logger1.handlers) == 1
    assert any(isinstance(h, logging.Handler) for h in logger1.handlers)


def test_set_verbosity_levels():
    logger = get_logger()
    try:
        assert set_verbosity(verbose=True) == logging.DEBUG
        assert logger.level == logging.DEBUG
        assert set_verbosity(quiet=True, verbose=True) == logging.WARNING
        assert set_verbosity() == logging.INFO
    finally:
        logger.setLevel(logging.INFO)
