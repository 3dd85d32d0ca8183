"""
Pageflow Test Suite

Test categories:
- unit/ - Page objects, command queue, intercepts and utilities against fakes
- e2e/ - Browser tests against the bundled demo app
"""
