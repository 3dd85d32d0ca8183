"""
Intercept Registry

Registers aliased network intercepts on a Playwright page and records
every matching call so tests can wait on it later by alias.
"""
import fnmatch
import logging
import time
from collections import deque
from typing import Any, Callable, Deque, Dict, Optional
from urllib.parse import urlparse

from playwright.sync_api import Page, Request, Route

from .errors import PageflowError, TimeoutFailure
from .models import ApiResponse, Interception, fulfill_args, parse_body

logger = logging.getLogger(__name__)

POLL_INTERVAL_MS = 50


def url_matcher(pattern: str) -> Callable[[str], bool]:
    """
    Build a URL predicate.

    Globs match the full URL, absolute URLs match ignoring the query
    string, and bare paths ("/api/users") match the URL path.
    """
    if any(ch in pattern for ch in "*?["):
        return lambda url: fnmatch.fnmatchcase(url, pattern) or fnmatch.fnmatchcase(
            urlparse(url).path, pattern
        )

    if pattern.startswith(("http://", "https://")):
        return lambda url: url.split("?", 1)[0] == pattern.split("?", 1)[0]

    return lambda url: urlparse(url).path == pattern


class _Rule:
    def __init__(self, method: str, url: str, alias: str, response: Optional[Dict[str, Any]]):
        self.method = method.upper()
        self.url = url
        self.alias = alias
        self.response = response
        self.matches = url_matcher(url)


class InterceptRegistry:
    """Aliased network intercepts for one page."""

    def __init__(self, page: Page):
        self.page = page
        self._rules: Dict[str, tuple] = {}
        self._calls: Dict[str, Deque[Interception]] = {}

    @property
    def aliases(self) -> list:
        return list(self._rules)

    def register(
        self, method: str, url: str, alias: str, response: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Intercept calls matching method and URL under ``alias``.

        With a canned ``response`` the call never reaches the network.
        Registering an alias twice replaces the earlier rule.
        """
        if alias in self._rules:
            old_matcher, old_handler = self._rules.pop(alias)
            self.page.unroute(old_matcher, old_handler)

        rule = _Rule(method, url, alias, response)

        def handler(route: Route, request: Request) -> None:
            if request.method.upper() != rule.method:
                route.fallback()
                return
            self._handle(rule, route, request)

        self.page.route(rule.matches, handler)
        self._rules[alias] = (rule.matches, handler)
        self._calls[alias] = deque()
        logger.debug(
            f"Registered intercept @{alias}: {rule.method} {url}"
            + (" (stubbed)" if response is not None else "")
        )

    def _handle(self, rule: _Rule, route: Route, request: Request) -> None:
        interception = Interception(
            alias=rule.alias,
            method=request.method,
            url=request.url,
            request_body=parse_body(request.post_data_buffer, request.headers.get("content-type", "")),
        )

        if rule.response is not None:
            args = fulfill_args(rule.response)
            route.fulfill(**args)
            interception.response = ApiResponse(
                status=args["status"],
                body=rule.response.get("body"),
                headers=args["headers"],
                url=request.url,
            )
        else:
            fetched = route.fetch()
            route.fulfill(response=fetched)
            interception.response = ApiResponse(
                status=fetched.status,
                body=parse_body(fetched.body(), fetched.headers.get("content-type", "")),
                headers=fetched.headers,
                url=fetched.url,
            )

        self._calls[rule.alias].append(interception)

    def calls(self, alias: str) -> list:
        """Interceptions recorded for an alias and not yet consumed."""
        return list(self._calls.get(alias, ()))

    def wait(self, alias: str, timeout: int = 10000) -> Interception:
        """
        Consume the next call recorded for ``alias``.

        Raises TimeoutFailure if no call completes within ``timeout`` ms.
        """
        if alias not in self._rules:
            raise PageflowError(f"No intercept registered for alias '@{alias}'")

        deadline = time.monotonic() + timeout / 1000
        calls = self._calls[alias]
        while True:
            if calls:
                return calls.popleft()
            if time.monotonic() >= deadline:
                raise TimeoutFailure(
                    f"Timed out after {timeout}ms waiting for '@{alias}'", alias=alias, timeout=timeout
                )
            self.page.wait_for_timeout(POLL_INTERVAL_MS)
