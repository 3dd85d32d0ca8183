"""
Home Page Object

Encapsulates the home/dashboard page shown after login.
"""
from typing import Optional

from .base_page import BasePage, data_test


class HomePage(BasePage):
    """Page object for the home page."""

    SELECTORS = {
        "header": data_test("header"),
        "welcome_message": data_test("welcome-message"),
        "logout_button": data_test("logout-button"),
        "main_content": data_test("main-content"),
        "navigation_menu": data_test("nav-menu"),
        "user_profile": data_test("user-profile"),
    }

    def visit(self) -> "HomePage":
        """Navigate to home page."""
        super().visit("/")
        return self

    # =========================================================================
    # User Actions
    # =========================================================================

    def logout(self) -> "HomePage":
        """Click logout."""
        return self.click(self.selectors["logout_button"])

    def click_user_profile(self) -> "HomePage":
        """Open the user profile."""
        return self.click(self.selectors["user_profile"])

    def navigate_to_section(self, section_name: str) -> "HomePage":
        """Click the navigation menu entry whose text contains ``section_name``."""
        menu = self.selectors["navigation_menu"]
        self._do(f"click {section_name} in {menu}", self.driver.click_text, menu, section_name)
        return self

    # =========================================================================
    # Assertions
    # =========================================================================

    def should_be_displayed(self) -> "HomePage":
        """Assert header and main content are visible."""
        self.should_be_visible(self.selectors["header"])
        self.should_be_visible(self.selectors["main_content"])
        return self

    def should_show_welcome_message(self, username: Optional[str] = None) -> "HomePage":
        """Assert the welcome message is shown, naming ``username`` if given."""
        self.should_be_visible(self.selectors["welcome_message"])
        if username:
            self.should_contain_text(self.selectors["welcome_message"], username)
        return self

    def should_show_navigation_menu(self) -> "HomePage":
        """Assert navigation menu is visible."""
        return self.should_be_visible(self.selectors["navigation_menu"])
