"""
Login Page Object

Encapsulates login page interactions.
"""
from .base_page import BasePage, data_test


class LoginPage(BasePage):
    """Page object for the login page."""

    SELECTORS = {
        "username_input": data_test("username"),
        "password_input": data_test("password"),
        "login_button": data_test("login-button"),
        "error_message": data_test("error-message"),
        "login_form": data_test("login-form"),
    }

    def visit(self) -> "LoginPage":
        """Navigate to login page."""
        super().visit("/login")
        return self

    def enter_username(self, username: str) -> "LoginPage":
        """Enter username."""
        return self.type(self.selectors["username_input"], username)

    def enter_password(self, password: str) -> "LoginPage":
        """Enter password."""
        return self.type(self.selectors["password_input"], password)

    def click_login_button(self) -> "LoginPage":
        """Click the login button."""
        return self.click(self.selectors["login_button"])

    def login(self, username: str, password: str) -> "LoginPage":
        """Complete login flow."""
        self.enter_username(username)
        self.enter_password(password)
        self.click_login_button()
        return self

    # Assertions
    def should_show_error(self, message: str) -> "LoginPage":
        """Assert the error region is shown with ``message``."""
        self.should_be_visible(self.selectors["error_message"])
        self.should_contain_text(self.selectors["error_message"], message)
        return self

    def should_show_login_form(self) -> "LoginPage":
        """Assert login form is visible."""
        return self.should_be_visible(self.selectors["login_form"])

    def should_be_logged_in(self) -> "LoginPage":
        """Assert the browser has left the login route."""
        self._do("url should not include /login", self.driver.assert_url_excludes, "/login")
        return self
