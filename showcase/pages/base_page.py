"""
BasePage - shared capabilities for every page object

Concrete pages do not subclass this. Each one holds a BasePage in `self.base`
and exposes `header` / `footer` from it, so a change to the bundle never
ripples through an inheritance chain.
"""

import logging
from pathlib import Path
from typing import Union

from playwright.sync_api import Page

from ..components import FooterComponent, HeaderComponent

logger = logging.getLogger(__name__)


class BasePage:
    """Header, footer and page-wide pass-through operations."""

    def __init__(self, page: Page):
        self.page = page
        self.header = HeaderComponent(page)
        self.footer = FooterComponent(page)

    @property
    def url(self) -> str:
        return self.page.url

    def title(self) -> str:
        return self.page.title()

    def goto(self, url: str) -> None:
        logger.info("Navigating to %s", url)
        self.page.goto(url)

    def wait_for_load_state(self, state: str = "networkidle") -> None:
        self.page.wait_for_load_state(state)

    def take_screenshot(self, path: Union[str, Path], full_page: bool = False) -> bytes:
        return self.page.screenshot(path=str(path), full_page=full_page)
