"""Root conftest — shared pytest markers and global settings.

Markers
-------
unit        fast, no I/O, pure logic
integration hits the live JU portal (set PLACEMENT_TEST_LIVE=1)
"""

from __future__ import annotations


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast, no I/O tests")
    config.addinivalue_line("markers", "integration: hits the live JU portal")
