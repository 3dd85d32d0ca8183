"""
Pageflow E2E Test Suite

End-to-end browser tests using Playwright against the demo app.

Structure:
    conftest.py   - Fixtures, configuration and demo app server
    demo_app.py   - Flask app under test
    fixtures/     - JSON test data (api.json, users.json)
    test_login.py - Login page tests
    test_home.py  - Home page tests
    test_api.py   - API intercept and request tests

Running Tests:
    # Install dependencies
    pip install -e ".[test]"
    playwright install chromium

    # Run all tests
    pytest tests/e2e/

    # Run with visible browser
    E2E_HEADLESS=false pytest tests/e2e/

    # Run smoke tests only
    pytest tests/e2e/ -m smoke

    # Skip slow retry tests
    pytest tests/e2e/ -m "not slow"
"""
