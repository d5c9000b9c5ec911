"""
HeaderComponent - Component Object Model

Reusable header region shared by every page. Update the locators here once
and every page object that bundles a header picks up the change.
"""

import logging
import re

from playwright.sync_api import Error as PlaywrightError, Page

logger = logging.getLogger(__name__)


class HeaderComponent:
    """Logo, search box, user menu and navigation links."""

    def __init__(self, page: Page):
        self.page = page
        self.logo = page.get_by_test_id("logo").or_(
            page.locator("header").get_by_role("link").first
        )
        self.search_input = page.get_by_test_id("search").or_(
            page.locator('input[type="search"]').or_(page.get_by_placeholder("Search"))
        )
        self.user_menu = page.get_by_test_id("user-menu")
        self.logout_button = page.get_by_test_id("logout").or_(
            page.get_by_role("button", name=re.compile(r"logout", re.IGNORECASE))
        )
        self.navigation_links = page.locator("header nav a")

    def click_logo(self) -> None:
        """Navigate home through the logo."""
        if self.logo.count() > 0:
            self.logo.first.click()

    def search(self, query: str) -> None:
        if self.search_input.count() == 0:
            logger.debug("No search input in header, skipping search for %r", query)
            return
        self.search_input.first.fill(query)
        self.page.keyboard.press("Enter")

    def open_user_menu(self) -> None:
        if self.user_menu.count() > 0:
            self.user_menu.first.click()

    def logout(self) -> None:
        """Open the user menu (if there is one), then click logout."""
        self.open_user_menu()
        if self.logout_button.count() > 0:
            self.logout_button.first.click()

    def navigate_to(self, link_text: str) -> None:
        link = self.navigation_links.filter(has_text=link_text)
        if link.count() > 0:
            link.first.click()
        else:
            logger.debug("Header has no navigation link %r", link_text)

    def is_visible(self) -> bool:
        try:
            return self.logo.first.is_visible()
        except PlaywrightError:
            return False
