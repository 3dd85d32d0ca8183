"""
API utilities.

Helpers for issuing requests with retry, registering aliased intercepts,
waiting on them, and asserting on responses. Every network helper takes
the provider (normally a ``PlaywrightDriver``) as its first argument and
accepts an optional ``CommandQueue`` so the call is ordered with the
surrounding page actions.
"""

import difflib
import json
import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from ..commands import CommandQueue
from ..errors import AssertionFailure
from ..models import ApiResponse, Endpoint, Interception

logger = logging.getLogger(__name__)

# Fixed delay between retries; the retry count decrements linearly and
# the delay never grows.
RETRY_DELAY_MS = 1000


def _run(queue: Optional[CommandQueue], name: str, fn: Callable, *args) -> Any:
    if queue is None:
        return fn(*args)
    return queue.enqueue(name, fn, *args)


def _run_now(queue: Optional[CommandQueue], name: str, fn: Callable, *args) -> Any:
    """Like ``_run``, but drains a deferred queue so the result can be read."""
    if queue is None or queue.autoflush:
        return _run(queue, name, fn, *args)
    command = queue.enqueue(name, fn, *args)
    queue.flush()
    return command.result


def api_request(
    provider,
    method: str,
    url: str,
    options: Optional[Dict[str, Any]] = None,
    retries: int = 3,
    queue: Optional[CommandQueue] = None,
) -> ApiResponse:
    """
    Issue a request, retrying server errors.

    A response with status >= 500 is retried after a fixed one-second wait
    while ``retries`` remains above zero. Any other status, 4xx included,
    is returned straight away. When the retries run out the last failing
    response is returned; nothing is raised, so callers assert on status.

    Args:
        provider: Network provider issuing the request.
        method: HTTP method.
        url: Absolute URL or path relative to the base URL.
        options: Request options (headers, body, qs, timeout).
        retries: Number of retries left. Defaults to 3.
        queue: Optional command queue to run the calls on. A deferred
            queue is flushed, so earlier queued actions run first.

    Returns:
        The final ApiResponse.
    """
    options = dict(options or {})
    name = f"request {method.upper()} {url}"

    response = _run_now(queue, name, provider.issue_request, method, url, options)
    while response.status >= 500 and retries > 0:
        logger.warning(
            f"{method.upper()} {url} returned {response.status}, "
            f"retrying in {RETRY_DELAY_MS}ms ({retries} left)"
        )
        _run(queue, f"wait {RETRY_DELAY_MS}", provider.wait, RETRY_DELAY_MS)
        retries -= 1
        response = _run_now(queue, name, provider.issue_request, method, url, options)

    return response


def setup_api_intercepts(
    provider,
    endpoints: Iterable[Union[Endpoint, Dict[str, Any]]],
    queue: Optional[CommandQueue] = None,
) -> None:
    """
    Register one intercept per endpoint, in order.

    Endpoints with a ``response`` are stubbed; the rest pass through to
    the network and are only observed. A repeated alias replaces the
    earlier registration.
    """
    for endpoint in endpoints:
        if not isinstance(endpoint, Endpoint):
            endpoint = Endpoint.from_dict(endpoint)
        _run(
            queue,
            f"intercept @{endpoint.alias}",
            provider.register_intercept,
            endpoint.method,
            endpoint.url,
            endpoint.alias,
            endpoint.response,
        )


def wait_for_apis(
    provider,
    aliases: Iterable[str],
    timeout: int = 10000,
    queue: Optional[CommandQueue] = None,
) -> List[Interception]:
    """
    Wait for each aliased call in turn.

    Aliases are awaited one after another, each with its own ``timeout``
    (ms). The first alias that does not complete raises TimeoutFailure.
    A deferred queue is flushed before each wait.
    """
    return [
        _run_now(queue, f"wait @{alias}", provider.await_intercept, alias, timeout)
        for alias in aliases
    ]


def verify_response_status(response: ApiResponse, expected_status: int) -> None:
    """Assert the response status equals ``expected_status``."""
    actual = extract_from_response(response, "status")
    if actual != expected_status:
        raise AssertionFailure(
            f"expected status {expected_status}, got {actual}",
            actual=actual,
            expected=expected_status,
        )


def _pretty(value: Any) -> List[str]:
    return json.dumps(value, indent=2, sort_keys=True, default=str).splitlines()


def verify_response_body(response: ApiResponse, expected_body: Any) -> None:
    """Assert the whole body deep-equals ``expected_body``, reporting a diff."""
    actual = extract_from_response(response, "body")
    if actual != expected_body:
        diff = "\n".join(
            difflib.unified_diff(
                _pretty(expected_body), _pretty(actual), "expected", "actual", lineterm=""
            )
        )
        raise AssertionFailure(
            f"response body does not match expected:\n{diff}",
            actual=actual,
            expected=expected_body,
        )


def extract_from_response(response: Any, path: str) -> Any:
    """
    Read a value by dotted path, e.g. 'body.user.id'.

    Dict keys, list indices and attributes of response objects are all
    walked. A missing segment returns None instead of raising.

    Examples:
        >>> extract_from_response({'body': {'user': {'id': 1}}}, 'body.user.id')
        1

        >>> extract_from_response({'body': {}}, 'body.missing.x') is None
        True
    """
    current = response
    for key in path.split("."):
        if current is None:
            return None
        if isinstance(current, Mapping):
            current = current.get(key)
        elif isinstance(current, (list, tuple)):
            try:
                index = int(key)
            except ValueError:
                return None
            if not 0 <= index < len(current):
                return None
            current = current[index]
        elif not key.startswith("_") and hasattr(current, key):
            current = getattr(current, key)
        else:
            return None
    return current
