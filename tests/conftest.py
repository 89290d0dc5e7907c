from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.coverage_builder import CoverageDirBuilder


@pytest.fixture
def coverage_builder(tmp_path: Path) -> CoverageDirBuilder:
    """Provide a builder for coverage output directories rooted at tmp_path."""
    return CoverageDirBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_covpods_logger():
    """Undo handler and propagation changes made by configure_logging."""
    yield
    logger = logging.getLogger("covpods")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
