"""
Base Page Object

Provides common functionality for all page objects. Every action goes
through the page's command queue so actions run in the order issued, and
every action or assertion returns the page for chaining:

    LoginPage(driver).visit().login("user", "secret").should_be_logged_in()
"""
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from ..commands import CommandQueue
from ..driver import DomProvider


def data_test(test_id: str) -> str:
    """Selector for a ``data-test`` attribute."""
    return f'[data-test="{test_id}"]'


def data_cy(value: str) -> str:
    """Selector for a ``data-cy`` attribute."""
    return f'[data-cy="{value}"]'


class BasePage:
    """Base class for all page objects."""

    # Semantic element name -> selector, overridden per page
    SELECTORS: Dict[str, str] = {}

    def __init__(self, driver: DomProvider, queue: Optional[CommandQueue] = None):
        self.driver = driver
        self.queue = queue if queue is not None else CommandQueue()
        self._selectors = MappingProxyType(dict(self.SELECTORS))

    @property
    def selectors(self) -> Mapping[str, str]:
        """Read-only selector map for this page."""
        return self._selectors

    def _do(self, name: str, fn, *args) -> Any:
        return self.queue.enqueue(name, fn, *args)

    # =========================================================================
    # Navigation
    # =========================================================================

    def visit(self, url: str = "") -> "BasePage":
        """Navigate to a URL, relative to the base URL unless absolute."""
        self._do(f"visit {url or '/'}", self.driver.navigate, url or "/")
        return self

    def get_title(self) -> str:
        """Get page title."""
        return self._do("title", self.driver.title)

    def get_current_url(self) -> str:
        """Get current page URL."""
        return self._do("url", self.driver.url)

    def url_should_contain(self, text: str) -> "BasePage":
        """Assert the current URL includes ``text``."""
        self._do(f"url should include {text}", self.driver.assert_url_contains, text)
        return self

    def wait_for_page_load(self) -> "BasePage":
        """Wait until the document has finished loading."""
        self._do("wait for page load", self.driver.wait_for_page_load)
        return self

    # =========================================================================
    # Locators
    # =========================================================================

    def get_element(self, selector: str) -> Any:
        """Get a locator for the selector."""
        return self._do(f"get {selector}", self.driver.query, selector)

    def get_by_test_id(self, test_id: str) -> Any:
        """Get element by data-test attribute."""
        return self.get_element(data_test(test_id))

    def get_by_cy(self, value: str) -> Any:
        """Get element by data-cy attribute."""
        return self.get_element(data_cy(value))

    # =========================================================================
    # Element Interaction
    # =========================================================================

    def click(self, selector: str) -> "BasePage":
        """Click an element."""
        self._do(f"click {selector}", self.driver.click, selector)
        return self

    def type(self, selector: str, text: str) -> "BasePage":
        """Clear an input field, then type into it."""
        self._do(f"type {selector}", self.driver.type_text, selector, text)
        return self

    # =========================================================================
    # Assertions
    # =========================================================================

    def should_be_visible(self, selector: str) -> "BasePage":
        """Assert element is visible."""
        self._do(f"{selector} should be visible", self.driver.assert_visible, selector)
        return self

    def should_contain_text(self, selector: str, text: str) -> "BasePage":
        """Assert element contains text."""
        self._do(f"{selector} should contain {text}", self.driver.assert_text, selector, text)
        return self

    def should_have_value(self, selector: str, value: str) -> "BasePage":
        """Assert input has value."""
        self._do(f"{selector} should have value", self.driver.assert_value, selector, value)
        return self

    def should_have_attribute(self, selector: str, name: str, value: str) -> "BasePage":
        """Assert element attribute equals value."""
        self._do(
            f"{selector} should have {name}", self.driver.assert_attribute, selector, name, value
        )
        return self

    def should_be_clickable(self, selector: str) -> "BasePage":
        """Assert element is visible and not disabled."""
        self.should_be_visible(selector)
        self._do(f"{selector} should be enabled", self.driver.assert_enabled, selector)
        return self

    def wait_for_element(self, selector: str, timeout: int = 10000) -> "BasePage":
        """Wait for element to be visible within ``timeout`` ms."""
        self._do(f"wait for {selector}", self.driver.wait_for_element, selector, timeout)
        return self
