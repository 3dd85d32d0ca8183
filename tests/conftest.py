"""
Pytest configuration shared by unit and E2E tests.

Markers are declared in pyproject.toml.
"""
import importlib.util
import os
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def pytest_collection_modifyitems(config, items):
    """Skip e2e tests if playwright is not installed."""
    _playwright_spec = importlib.util.find_spec("playwright.sync_api")
    if _playwright_spec is None:
        skip_e2e = pytest.mark.skip(reason="Playwright not installed")
        for item in items:
            if "e2e" in item.keywords:
                item.add_marker(skip_e2e)
