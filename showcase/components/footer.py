"""
FooterComponent - Component Object Model

Reusable footer region: links, copyright line and social icons.
"""

import re
from typing import List, Optional

from playwright.sync_api import Error as PlaywrightError, Page


class FooterComponent:

    def __init__(self, page: Page):
        self.page = page
        self.footer = page.locator("footer")
        self.footer_links = page.locator("footer a")
        self.copyright_text = self.footer.get_by_text(re.compile(r"copyright|©", re.IGNORECASE))
        self.social_links = page.locator('footer [data-testid*="social"]')

    def click_link(self, link_text: str) -> None:
        link = self.footer_links.filter(has_text=link_text)
        if link.count() > 0:
            link.first.click()

    def get_copyright_text(self) -> Optional[str]:
        if self.copyright_text.count() > 0:
            return self.copyright_text.first.text_content()
        return None

    def click_social_link(self, platform: str) -> None:
        """Click the social icon whose text matches platform, case-insensitively."""
        social_link = self.social_links.filter(
            has_text=re.compile(re.escape(platform), re.IGNORECASE)
        )
        if social_link.count() > 0:
            social_link.first.click()

    def is_visible(self) -> bool:
        try:
            return self.footer.first.is_visible()
        except PlaywrightError:
            return False

    def get_all_links(self) -> List[str]:
        """Text of every footer link, in document order."""
        count = self.footer_links.count()
        return [self.footer_links.nth(i).text_content() or "" for i in range(count)]
