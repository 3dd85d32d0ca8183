"""
Pageflow

Page objects, test data builders and network intercept helpers for
browser end-to-end tests on Playwright.

Structure:
    pages/        - Page Object Models (BasePage, LoginPage, HomePage)
    utils/        - string, test data and API helpers
    driver.py     - Playwright-backed DOM and network primitives
    intercepts.py - Aliased route interception
    commands.py   - FIFO command queue
    config.py     - E2E configuration
    fixtures.py   - JSON/YAML fixture loading
    session.py    - Cached login and page error policy
"""

from .commands import Command, CommandQueue
from .config import E2EConfig
from .driver import DomProvider, NetworkProvider, PlaywrightDriver
from .errors import AssertionFailure, FixtureNotFoundError, PageflowError, TimeoutFailure
from .fixtures import load_fixture
from .models import ApiResponse, Endpoint, Interception

__version__ = "1.0.0"

__all__ = [
    "ApiResponse",
    "AssertionFailure",
    "Command",
    "CommandQueue",
    "DomProvider",
    "E2EConfig",
    "Endpoint",
    "FixtureNotFoundError",
    "Interception",
    "NetworkProvider",
    "PageflowError",
    "PlaywrightDriver",
    "TimeoutFailure",
    "load_fixture",
]
