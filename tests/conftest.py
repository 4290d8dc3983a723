"""Pytest configuration for test isolation.

Every test gets its own XDG data/config directories so nothing touches the
real ledger, and the ``pfv`` logger is reset so a CLI test that configures
logging does not leak handlers into later tests.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from pfv import logging_setup


@pytest.fixture(autouse=True)
def _isolate_xdg_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point XDG directories at the test's temporary directory."""
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv(logging_setup.LOG_LEVEL_ENV, raising=False)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Undo configure_logging after each test."""
    yield
    logger = logging.getLogger(logging_setup.PKG_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    logging_setup._CONFIGURED = False
