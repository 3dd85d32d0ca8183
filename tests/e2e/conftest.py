"""
Playwright E2E Test Configuration and Fixtures

This module provides shared fixtures, configuration, and utilities
for end-to-end browser testing with Playwright against the demo app.
"""
import os
import signal
import subprocess
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Generator
from urllib.parse import urlparse

import pytest

# Skip entire module if playwright not installed
pytest.importorskip("playwright")

import requests
from playwright.sync_api import Browser, BrowserContext, BrowserType, Page

from pageflow import E2EConfig, PlaywrightDriver, load_fixture
from pageflow.pages import HomePage, LoginPage
from pageflow.session import PageErrorPolicy, SessionCache

CONFIG = E2EConfig.load()

# =============================================================================
# Server Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def e2e_config() -> E2EConfig:
    return CONFIG


@pytest.fixture(scope="session")
def app_server() -> Generator[subprocess.Popen, None, None]:
    """
    Start the demo application for E2E tests.

    This fixture has session scope - server starts once for all tests.
    """
    parsed = urlparse(CONFIG.BASE_URL)
    port = parsed.port or 80
    env = os.environ.copy()
    env["PORT"] = str(port)

    app_path = Path(__file__).parent / "demo_app.py"

    proc = subprocess.Popen(
        [sys.executable, str(app_path), "--host", parsed.hostname or "127.0.0.1", "--port", str(port)],
        env=env,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )

    # Wait for server to be ready
    max_wait = 30
    for _ in range(max_wait * 2):
        try:
            resp = requests.get(f"{CONFIG.BASE_URL}/health", timeout=1)
            if resp.status_code == 200:
                print(f"\n[E2E] Demo app started on port {port}")
                break
        except requests.exceptions.RequestException:
            pass
        if proc.poll() is not None:
            break
        time.sleep(0.5)
    else:
        proc.kill()
        stdout, stderr = proc.communicate()
        raise RuntimeError(
            f"Demo app failed to start within {max_wait}s\n"
            f"stdout: {stdout.decode()}\n"
            f"stderr: {stderr.decode()}"
        )

    if proc.poll() is not None:
        stdout, stderr = proc.communicate()
        raise RuntimeError(f"Demo app exited early\nstderr: {stderr.decode()}")

    yield proc

    print("\n[E2E] Stopping demo app...")
    proc.send_signal(signal.SIGTERM)
    try:
        proc.wait(timeout=10)
    except subprocess.TimeoutExpired:
        proc.kill()


# =============================================================================
# Browser Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def browser_type_launch_args() -> Dict[str, Any]:
    """Browser launch arguments."""
    return {
        "headless": CONFIG.HEADLESS,
        "slow_mo": CONFIG.SLOW_MO,
    }


@pytest.fixture(scope="session")
def browser(
    browser_type: BrowserType, browser_type_launch_args: Dict[str, Any]
) -> Generator[Browser, None, None]:
    """Launch the browser, skipping E2E tests when it is not installed."""
    if not Path(browser_type.executable_path).exists():
        pytest.skip(f"{browser_type.name} is not installed (run `playwright install`)")

    browser = browser_type.launch(**browser_type_launch_args)
    yield browser
    browser.close()


@pytest.fixture(scope="session")
def browser_context_args() -> Dict[str, Any]:
    """Browser context arguments."""
    args = {
        "viewport": CONFIG.viewport,
        "ignore_https_errors": True,
    }

    if CONFIG.RECORD_VIDEO:
        CONFIG.ARTIFACTS_DIR.mkdir(parents=True, exist_ok=True)
        args["record_video_dir"] = str(CONFIG.ARTIFACTS_DIR / "videos")

    return args


@pytest.fixture
def context(browser: Browser, browser_context_args: Dict) -> Generator[BrowserContext, None, None]:
    """Create a new browser context for each test."""
    context = browser.new_context(**browser_context_args)
    context.set_default_timeout(CONFIG.DEFAULT_COMMAND_TIMEOUT)
    context.set_default_navigation_timeout(CONFIG.PAGE_LOAD_TIMEOUT)

    yield context

    context.close()


@pytest.fixture
def page(request, context: BrowserContext, app_server) -> Generator[Page, None, None]:
    """Create a new page for each test, capturing a screenshot on failure."""
    page = context.new_page()

    yield page

    report = getattr(request.node, "rep_call", None)
    if CONFIG.SCREENSHOT_ON_FAILURE and report is not None and report.failed:
        CONFIG.ARTIFACTS_DIR.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        test_name = request.node.name.replace("/", "_").replace(":", "_")
        screenshot_path = CONFIG.ARTIFACTS_DIR / f"failure_{test_name}_{timestamp}.png"
        page.screenshot(path=str(screenshot_path))
        print(f"\n[E2E] Screenshot saved: {screenshot_path}")

    page.close()


@pytest.fixture
def page_errors(page: Page) -> PageErrorPolicy:
    """Uncaught page exceptions are logged, not raised, unless configured."""
    return PageErrorPolicy(suppress=CONFIG.SUPPRESS_PAGE_ERRORS).install(page)


@pytest.fixture
def driver(page: Page, page_errors) -> PlaywrightDriver:
    return PlaywrightDriver(page, CONFIG)


# =============================================================================
# Page Object and Data Fixtures
# =============================================================================


@pytest.fixture
def login_page(driver: PlaywrightDriver) -> LoginPage:
    return LoginPage(driver)


@pytest.fixture
def home_page(driver: PlaywrightDriver) -> HomePage:
    return HomePage(driver)


@pytest.fixture(scope="session")
def users() -> Dict[str, Any]:
    return load_fixture("users", CONFIG.FIXTURES_DIR)


@pytest.fixture(scope="session")
def api_config() -> Dict[str, Any]:
    return load_fixture("api", CONFIG.FIXTURES_DIR)


@pytest.fixture(scope="session")
def session_cache() -> SessionCache:
    """Login sessions shared across tests in the run."""
    return SessionCache()


# =============================================================================
# Hooks
# =============================================================================


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Store test results for use in fixtures."""
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


def pytest_collection_modifyitems(config, items):
    """Mark everything under tests/e2e as e2e."""
    e2e_dir = Path(__file__).parent
    for item in items:
        if e2e_dir in item.path.parents:
            item.add_marker(pytest.mark.e2e)
