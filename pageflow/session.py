"""
Session Helpers

Cached UI login and the policy for uncaught errors raised by the page
under test.
"""
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from .errors import PageflowError
from .pages import LoginPage

logger = logging.getLogger(__name__)

_RESTORE_LOCAL_STORAGE = """
(origins) => {
    const entry = origins.find((o) => o.origin === window.location.origin);
    if (entry) {
        for (const item of entry.localStorage) {
            window.localStorage.setItem(item.name, item.value);
        }
    }
}
"""


class SessionCache:
    """Browser storage state saved per credential pair."""

    def __init__(self):
        self._states: Dict[Tuple[str, str], Dict[str, Any]] = {}

    def __contains__(self, key: Tuple[str, str]) -> bool:
        return key in self._states

    def __len__(self) -> int:
        return len(self._states)

    def get(self, key: Tuple[str, str]) -> Optional[Dict[str, Any]]:
        return self._states.get(key)

    def save(self, key: Tuple[str, str], state: Dict[str, Any]) -> None:
        self._states[key] = state

    def clear(self) -> None:
        self._states.clear()


def restore_storage_state(page: Page, state: Dict[str, Any]) -> None:
    """Load saved cookies and local storage into the page's context."""
    context = page.context
    context.clear_cookies()
    if state.get("cookies"):
        context.add_cookies(state["cookies"])
    origins = state.get("origins") or []
    if origins:
        context.add_init_script(f"({_RESTORE_LOCAL_STORAGE})({json.dumps(origins)})")


def login(driver, username: str, password: str, cache: Optional[SessionCache] = None) -> None:
    """
    Log in through the UI, reusing a cached session when one exists.

    The first login for a credential pair drives the login form, checks
    the browser left /login, and saves the storage state. Later calls
    with the same cache restore that state instead.
    """
    key = (username, password)
    if cache is not None and key in cache:
        logger.debug(f"Restoring cached session for {username}")
        restore_storage_state(driver.page, cache.get(key))
        return

    LoginPage(driver).visit().login(username, password).should_be_logged_in()

    if cache is not None:
        cache.save(key, driver.page.context.storage_state())
        logger.debug(f"Cached session for {username}")


class PageErrorPolicy:
    """
    Handles uncaught exceptions thrown by the page under test.

    With ``suppress=True`` errors are logged and otherwise ignored. With
    ``suppress=False`` they are collected and ``raise_collected()`` fails
    the test.
    """

    def __init__(self, suppress: bool = True):
        self.suppress = suppress
        self.errors: List[str] = []

    def install(self, page: Page) -> "PageErrorPolicy":
        page.on("pageerror", self.handle)
        return self

    def handle(self, error: PlaywrightError) -> None:
        message = getattr(error, "message", str(error))
        if self.suppress:
            logger.warning(f"Uncaught exception {message}")
            return
        self.errors.append(message)

    def raise_collected(self) -> None:
        if self.errors:
            raise PageflowError(f"Uncaught page exceptions: {'; '.join(self.errors)}")


def install_uncaught_exception_policy(page: Page, suppress: bool = True) -> PageErrorPolicy:
    """Attach a PageErrorPolicy to ``page``."""
    return PageErrorPolicy(suppress=suppress).install(page)
