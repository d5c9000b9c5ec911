"""
Single Responsibility Principle

LoginActions only drives the login form. LoginValidator only inspects the
outcome. A selector change for the form touches one class, a change to what
"logged in" means touches the other.
"""

from playwright.sync_api import Page


class LoginActions:

    def __init__(self, page: Page, path: str = "/login"):
        self.page = page
        self.path = path

    def navigate(self) -> None:
        self.page.goto(self.path)

    def fill_credentials(self, username: str, password: str) -> None:
        self.page.fill("#username", username)
        self.page.fill("#password", password)

    def submit(self) -> None:
        self.page.click("#login")

    def run(self, username: str, password: str) -> None:
        self.navigate()
        self.fill_credentials(username, password)
        self.submit()


class LoginValidator:

    def __init__(self, page: Page, dashboard_selector: str = ".dashboard", error_selector: str = ".error"):
        self.page = page
        self.dashboard_selector = dashboard_selector
        self.error_selector = error_selector

    def is_logged_in(self) -> bool:
        return self.page.locator(self.dashboard_selector).is_visible()

    def has_login_error(self) -> bool:
        return self.page.locator(self.error_selector).is_visible()
