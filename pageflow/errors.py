"""
Pageflow Errors

Failures raised by page objects and API helpers. Both failure types
subclass the matching builtin so pytest reports them as ordinary
assertion or timeout failures.
"""
from typing import Any


class PageflowError(Exception):
    """Base class for pageflow errors."""


class AssertionFailure(PageflowError, AssertionError):
    """Raised when an expectation does not match."""

    def __init__(self, message: str, actual: Any = None, expected: Any = None):
        self.actual = actual
        self.expected = expected
        super().__init__(message)


class TimeoutFailure(PageflowError, TimeoutError):
    """Raised when an awaited call or element never shows up in time."""

    def __init__(self, message: str, alias: str = None, timeout: int = None):
        self.alias = alias
        self.timeout = timeout
        super().__init__(message)


class FixtureNotFoundError(PageflowError, FileNotFoundError):
    """Raised when a fixture file cannot be located."""
