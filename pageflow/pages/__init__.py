"""
Page Object Models

This package provides page objects that encapsulate UI interactions
and provide a clean API for test code.
"""

from .base_page import BasePage, data_cy, data_test
from .home_page import HomePage
from .login_page import LoginPage

__all__ = [
    "BasePage",
    "LoginPage",
    "HomePage",
    "data_test",
    "data_cy",
]
