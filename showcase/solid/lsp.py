"""
Liskov Substitution Principle

PageHeader and PageFooter both satisfy VisibleComponent, so
check_component_visibility accepts either without knowing which it got.
"""

from typing import Protocol

from playwright.sync_api import Page

from ..failures import ScenarioFailure


class VisibleComponent(Protocol):
    def is_visible(self) -> bool:
        ...


class PageHeader:

    def __init__(self, page: Page):
        self.page = page

    def is_visible(self) -> bool:
        return self.page.locator("header").is_visible()

    def get_title(self) -> str:
        return self.page.locator("header h1").text_content() or ""


class PageFooter:

    def __init__(self, page: Page):
        self.page = page

    def is_visible(self) -> bool:
        return self.page.locator("footer").is_visible()

    def get_copyright(self) -> str:
        return self.page.locator("footer .copyright").text_content() or ""


def check_component_visibility(component: VisibleComponent) -> None:
    if not component.is_visible():
        name = type(component).__name__
        raise ScenarioFailure(
            scenario=f"{name} substituted as a VisibleComponent",
            expected=f"{name} should be visible",
            actual=f"{name} is hidden or missing",
            likely_cause="Component is not rendered on this page",
        )
