"""
ProductPage - Page Object composed with the BasePage bundle

Gets header and footer from `self.base` without duplicating their locators.
Cart options are optional on both sides: an option is applied only when the
caller passes a value and the page actually renders the matching control.
"""

import json
import re
from typing import Optional

from playwright.sync_api import Error as PlaywrightError, Page

from .base_page import BasePage

DEFAULT_STORE_URL = "https://the-internet.herokuapp.com/"


class ProductPage:

    def __init__(self, page: Page):
        self.page = page
        self.base = BasePage(page)
        self.add_to_cart_button = page.get_by_role(
            "button", name=re.compile(r"add to cart|add to bag", re.IGNORECASE)
        )
        self.product_title = page.locator('h1, [data-testid="product-title"]')
        self.product_price = page.locator('[data-testid="price"], .price')
        self.product_description = page.locator('[data-testid="description"], .product-description')
        self.quantity_input = page.locator('input[type="number"], [data-testid="quantity"]')
        self.size_selector = page.locator('select[name="size"], [data-testid="size-select"]')
        self.color_selector = page.locator('[data-testid="color-select"], .color-selector')
        self.reviews_section = page.locator('.reviews, [data-testid="reviews"]')

    @property
    def header(self):
        return self.base.header

    @property
    def footer(self):
        return self.base.footer

    def goto(self, product_id: str = "", base_url: str = DEFAULT_STORE_URL) -> None:
        if not base_url.endswith("/"):
            base_url += "/"
        url = f"{base_url}products/{product_id}" if product_id else base_url
        self.base.goto(url)

    def add_to_cart(self) -> None:
        if self.add_to_cart_button.count() > 0:
            self.add_to_cart_button.first.click()

    def add_to_cart_with_options(
        self,
        quantity: Optional[int] = None,
        size: Optional[str] = None,
        color: Optional[str] = None
    ) -> None:
        if quantity and self.quantity_input.count() > 0:
            self.quantity_input.first.fill(str(quantity))

        if size and self.size_selector.count() > 0:
            self.size_selector.first.select_option(size)

        if color and self.color_selector.count() > 0:
            color_option = self.color_selector.locator(f"[data-color={json.dumps(color)}]")
            if color_option.count() > 0:
                color_option.first.click()

        self.add_to_cart()

    def _text_of(self, locator) -> Optional[str]:
        if locator.count() > 0:
            return locator.first.text_content()
        return None

    def get_product_title(self) -> Optional[str]:
        return self._text_of(self.product_title)

    def get_product_price(self) -> Optional[str]:
        return self._text_of(self.product_price)

    def get_product_description(self) -> Optional[str]:
        return self._text_of(self.product_description)

    def search_product(self, query: str) -> None:
        self.header.search(query)

    def scroll_to_reviews(self) -> None:
        if self.reviews_section.count() > 0:
            self.reviews_section.first.scroll_into_view_if_needed()

    def is_loaded(self) -> bool:
        try:
            return self.product_title.first.is_visible()
        except PlaywrightError:
            return False
