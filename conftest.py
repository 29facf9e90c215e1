"""
Repository-level pytest configuration.

  - Expose the repository root to tests
  - Initialize loguru once per run (stderr + rotating file sink from config)

Settings come from config/config.yaml; any key can be overridden by an
environment variable (``ui.base_url`` -> ``UI_BASE_URL``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Generator

import pytest

from event_tools.common import init_logger


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _init_logging() -> Generator[None, None, None]:
    """Route framework logs through the configured loguru sinks."""
    init_logger()
    yield
