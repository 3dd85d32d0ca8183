"""
Playwright Driver

The browser and network primitives that page objects and API helpers are
written against. ``DomProvider`` and ``NetworkProvider`` describe the
seam; ``PlaywrightDriver`` implements both over a Playwright ``Page``.
Unit tests substitute fakes that satisfy the same protocols.
"""
import logging
import re
from contextlib import contextmanager
from typing import Any, Dict, Optional, Protocol

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator, Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import expect

from .config import E2EConfig
from .errors import AssertionFailure, PageflowError, TimeoutFailure
from .intercepts import InterceptRegistry
from .models import ApiResponse, Interception, parse_body

logger = logging.getLogger(__name__)


class DomProvider(Protocol):
    """Browser primitives used by page objects."""

    def navigate(self, url: str) -> None: ...

    def query(self, selector: str) -> Any: ...

    def click_text(self, selector: str, text: str) -> None: ...

    def click(self, selector: str) -> None: ...

    def type_text(self, selector: str, text: str) -> None: ...

    def assert_visible(self, selector: str, timeout: Optional[int] = None) -> None: ...

    def assert_text(self, selector: str, text: str) -> None: ...

    def assert_value(self, selector: str, value: str) -> None: ...

    def assert_attribute(self, selector: str, name: str, value: str) -> None: ...

    def assert_enabled(self, selector: str) -> None: ...

    def assert_url_contains(self, text: str) -> None: ...

    def assert_url_excludes(self, text: str) -> None: ...

    def wait_for_element(self, selector: str, timeout: int) -> None: ...

    def wait_for_page_load(self) -> None: ...

    def title(self) -> str: ...

    def url(self) -> str: ...


class NetworkProvider(Protocol):
    """Network primitives used by the API helpers."""

    def register_intercept(
        self, method: str, url: str, alias: str, response: Optional[Dict[str, Any]] = None
    ) -> None: ...

    def await_intercept(self, alias: str, timeout: int) -> Interception: ...

    def issue_request(self, method: str, url: str, options: Dict[str, Any]) -> ApiResponse: ...

    def wait(self, milliseconds: int) -> None: ...


@contextmanager
def translate_errors(action: str):
    """Re-raise Playwright failures as pageflow failures."""
    try:
        yield
    except PageflowError:
        raise
    except PlaywrightTimeoutError as e:
        raise TimeoutFailure(f"{action}: {e}") from e
    except AssertionError as e:
        raise AssertionFailure(f"{action}: {e}") from e


class PlaywrightDriver:
    """DOM and network provider backed by a Playwright page."""

    def __init__(self, page: Page, config: Optional[E2EConfig] = None):
        self.page = page
        self.config = config or E2EConfig()
        self.base_url = self.config.BASE_URL.rstrip("/")
        self.intercepts = InterceptRegistry(page)

    def resolve_url(self, url: str) -> str:
        """Join a relative path onto the configured base URL."""
        if re.match(r"^[a-zA-Z][a-zA-Z0-9+.-]*://", url):
            return url
        if not url.startswith("/"):
            url = "/" + url
        return f"{self.base_url}{url}"

    # =========================================================================
    # Navigation
    # =========================================================================

    def navigate(self, url: str) -> None:
        full_url = self.resolve_url(url)
        with translate_errors(f"visit {full_url}"):
            self.page.goto(full_url, timeout=self.config.PAGE_LOAD_TIMEOUT)

    def title(self) -> str:
        return self.page.title()

    def url(self) -> str:
        return self.page.url

    def wait_for_page_load(self) -> None:
        with translate_errors("wait for page load"):
            self.page.wait_for_function(
                "document.readyState === 'complete'", timeout=self.config.PAGE_LOAD_TIMEOUT
            )

    # =========================================================================
    # Elements
    # =========================================================================

    def query(self, selector: str) -> Locator:
        return self.page.locator(selector)

    def contains(self, selector: str, text: str) -> Locator:
        """First element inside ``selector`` whose text contains ``text``."""
        return self.page.locator(selector).get_by_text(text).first

    def click(self, selector: str) -> None:
        with translate_errors(f"click {selector}"):
            self.query(selector).click(timeout=self.config.DEFAULT_COMMAND_TIMEOUT)

    def click_text(self, selector: str, text: str) -> None:
        """Click the first element inside ``selector`` containing ``text``."""
        with translate_errors(f"click '{text}' in {selector}"):
            self.contains(selector, text).click(timeout=self.config.DEFAULT_COMMAND_TIMEOUT)

    def type_text(self, selector: str, text: str) -> None:
        locator = self.query(selector)
        with translate_errors(f"type into {selector}"):
            locator.clear(timeout=self.config.DEFAULT_COMMAND_TIMEOUT)
            locator.fill(text, timeout=self.config.DEFAULT_COMMAND_TIMEOUT)

    def wait_for_element(self, selector: str, timeout: int) -> None:
        with translate_errors(f"wait for {selector}"):
            self.query(selector).first.wait_for(state="visible", timeout=timeout)

    # =========================================================================
    # Assertions
    # =========================================================================

    def assert_visible(self, selector: str, timeout: Optional[int] = None) -> None:
        with translate_errors(f"expected {selector} to be visible"):
            expect(self.query(selector).first).to_be_visible(
                timeout=timeout or self.config.DEFAULT_COMMAND_TIMEOUT
            )

    def assert_text(self, selector: str, text: str) -> None:
        with translate_errors(f"expected {selector} to contain '{text}'"):
            expect(self.query(selector).first).to_contain_text(
                text, timeout=self.config.DEFAULT_COMMAND_TIMEOUT
            )

    def assert_value(self, selector: str, value: str) -> None:
        with translate_errors(f"expected {selector} to have value '{value}'"):
            expect(self.query(selector)).to_have_value(
                value, timeout=self.config.DEFAULT_COMMAND_TIMEOUT
            )

    def assert_attribute(self, selector: str, name: str, value: str) -> None:
        with translate_errors(f"expected {selector} to have {name}='{value}'"):
            expect(self.query(selector)).to_have_attribute(
                name, value, timeout=self.config.DEFAULT_COMMAND_TIMEOUT
            )

    def assert_enabled(self, selector: str) -> None:
        with translate_errors(f"expected {selector} to be enabled"):
            expect(self.query(selector).first).to_be_enabled(
                timeout=self.config.DEFAULT_COMMAND_TIMEOUT
            )

    def assert_url_contains(self, text: str) -> None:
        with translate_errors(f"expected URL to include '{text}'"):
            expect(self.page).to_have_url(
                re.compile(re.escape(text)), timeout=self.config.DEFAULT_COMMAND_TIMEOUT
            )

    def assert_url_excludes(self, text: str) -> None:
        with translate_errors(f"expected URL not to include '{text}'"):
            expect(self.page).not_to_have_url(
                re.compile(re.escape(text)), timeout=self.config.DEFAULT_COMMAND_TIMEOUT
            )

    # =========================================================================
    # Network
    # =========================================================================

    def register_intercept(
        self, method: str, url: str, alias: str, response: Optional[Dict[str, Any]] = None
    ) -> None:
        self.intercepts.register(method, url, alias, response)

    def await_intercept(self, alias: str, timeout: int) -> Interception:
        return self.intercepts.wait(alias, timeout)

    def issue_request(self, method: str, url: str, options: Dict[str, Any]) -> ApiResponse:
        """
        Send a request through the page's request context.

        Supported options: ``headers``, ``body`` (sent as JSON when a dict
        or list), ``qs`` (query params) and ``timeout``. Non-2xx statuses
        never raise.
        """
        full_url = self.resolve_url(url)
        kwargs: Dict[str, Any] = {
            "method": method.upper(),
            "headers": options.get("headers"),
            "params": options.get("qs"),
            "timeout": options.get("timeout", self.config.REQUEST_TIMEOUT),
            "fail_on_status_code": False,
        }
        body = options.get("body")
        if body is not None:
            kwargs["data"] = body

        logger.debug(f"{method.upper()} {full_url}")
        try:
            response = self.page.request.fetch(full_url, **kwargs)
        except PlaywrightTimeoutError as e:
            raise TimeoutFailure(f"{method.upper()} {full_url}: {e}") from e
        except PlaywrightError as e:
            raise PageflowError(f"{method.upper()} {full_url} failed: {e}") from e

        return ApiResponse(
            status=response.status,
            body=parse_body(response.body(), response.headers.get("content-type", "")),
            headers=response.headers,
            url=response.url,
        )

    def wait(self, milliseconds: int) -> None:
        self.page.wait_for_timeout(milliseconds)

    # =========================================================================
    # Local storage
    # =========================================================================

    def set_local_storage(self, key: str, value: str) -> None:
        self.page.evaluate("([k, v]) => window.localStorage.setItem(k, v)", [key, value])

    def get_local_storage(self, key: str) -> Optional[str]:
        return self.page.evaluate("(k) => window.localStorage.getItem(k)", key)

    def clear_local_storage(self) -> None:
        self.page.evaluate("() => window.localStorage.clear()")
