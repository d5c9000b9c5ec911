"""
DashboardPage - Page Object that drives Component Objects

Page-specific widgets live here; cross-cutting actions (search, logout,
home) are delegated to the header from the base bundle.
"""

import re
from typing import Optional

from playwright.sync_api import Error as PlaywrightError, Page

from .base_page import BasePage

DEFAULT_DASHBOARD_URL = "https://the-internet.herokuapp.com/secure"


class DashboardPage:

    def __init__(self, page: Page):
        self.page = page
        self.base = BasePage(page)
        self.welcome_message = page.get_by_text(
            re.compile(r"welcome|dashboard|secure area", re.IGNORECASE)
        )
        self.stats_cards = page.locator('.stat-card, [data-testid*="stat"]')
        self.recent_activity = page.locator('.recent-activity, [data-testid="recent-activity"]')
        self.quick_actions = page.locator('.quick-actions, [data-testid="quick-actions"]')

    @property
    def header(self):
        return self.base.header

    @property
    def footer(self):
        return self.base.footer

    def goto(self, url: str = DEFAULT_DASHBOARD_URL) -> None:
        self.base.goto(url)

    def navigate_to_transactions(self) -> None:
        self.header.search("transactions")

    def get_welcome_message(self) -> Optional[str]:
        if self.welcome_message.count() > 0:
            return self.welcome_message.first.text_content()
        return None

    def logout(self) -> None:
        self.header.logout()

    def go_home(self) -> None:
        self.header.click_logo()

    def get_stats_count(self) -> int:
        return self.stats_cards.count()

    def is_loaded(self) -> bool:
        try:
            return self.welcome_message.first.is_visible()
        except PlaywrightError:
            return False
