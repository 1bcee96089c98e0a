from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.resource_builder import ResourceProject


@pytest.fixture
def resource_project(tmp_path: Path) -> ResourceProject:
    """Provide a reusable resource project rooted at the pytest tmp_path."""
    return ResourceProject(tmp_path)


@pytest.fixture(autouse=True)
def _reset_resgen_logger() -> Iterator[None]:
    """Undo configure_logging so caplog keeps seeing resgen records."""
    yield
    logger = logging.getLogger("resgen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
