"""
LoginPage - Traditional Page Object Pattern

Represents the login form and its interactions. Defaults target the
the-internet demo site, whose form labels the first field "Username".
"""

import re
from typing import Optional

from playwright.sync_api import Error as PlaywrightError, Page

from .base_page import BasePage

DEFAULT_LOGIN_URL = "https://the-internet.herokuapp.com/login"


class LoginPage:

    def __init__(self, page: Page):
        self.page = page
        self.base = BasePage(page)
        self.email_input = page.get_by_label("Email").or_(page.get_by_label("Username")).or_(
            page.locator('input[type="email"]')
        )
        self.password_input = page.get_by_label("Password").or_(
            page.locator('input[type="password"]')
        )
        self.submit_button = page.get_by_role(
            "button", name=re.compile(r"log in|login|sign in|signin", re.IGNORECASE)
        )
        self.error_message = page.locator('.error, [role="alert"], .alert-danger, #flash.error')
        self.forgot_password_link = page.get_by_role(
            "link", name=re.compile(r"forgot password|forgot", re.IGNORECASE)
        )
        self.remember_me_checkbox = page.get_by_role(
            "checkbox", name=re.compile(r"remember me|remember", re.IGNORECASE)
        )

    @property
    def header(self):
        return self.base.header

    @property
    def footer(self):
        return self.base.footer

    def goto(self, url: str = DEFAULT_LOGIN_URL) -> None:
        self.base.goto(url)

    def login(self, email: str, password: str) -> None:
        self.fill_email(email)
        self.fill_password(password)
        self.submit_button.first.click()

    def login_with_remember_me(self, email: str, password: str) -> None:
        self.fill_email(email)
        self.fill_password(password)
        if self.remember_me_checkbox.count() > 0:
            self.remember_me_checkbox.first.check()
        self.submit_button.first.click()

    def click_forgot_password(self) -> None:
        if self.forgot_password_link.count() > 0:
            self.forgot_password_link.first.click()

    def get_error_message(self) -> Optional[str]:
        if self.error_message.count() > 0:
            return self.error_message.first.text_content()
        return None

    def has_error_message(self) -> bool:
        try:
            return self.error_message.first.is_visible()
        except PlaywrightError:
            return False

    def fill_email(self, email: str) -> None:
        self.email_input.first.fill(email)

    def fill_password(self, password: str) -> None:
        self.password_input.first.fill(password)

    def is_form_visible(self) -> bool:
        try:
            return self.email_input.first.is_visible()
        except PlaywrightError:
            return False
