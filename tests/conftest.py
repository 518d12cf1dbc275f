"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from ttime.scoring.loader import forget_loaded_units


@pytest.fixture(autouse=True)
def _fresh_unit_record():
    """Tests reuse plugin file names, so each starts with no units imported."""
    forget_loaded_units()
    yield
    forget_loaded_units()
