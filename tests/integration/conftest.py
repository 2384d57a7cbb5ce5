"""Integration-test conftest — live portal settings.

Integration tests require:
    PLACEMENT_TEST_LIVE=1          (set in shell before running)
    PLACEMENT_TEST_ADMISSION=...   optional known-good admission number

Run with:
    PLACEMENT_TEST_LIVE=1 pytest tests/integration/ -v
"""

from __future__ import annotations

import os

import pytest


@pytest.fixture
def known_admission_number() -> str | None:
    return os.getenv("PLACEMENT_TEST_ADMISSION")
