"""
Dependency Inversion Principle

CheckoutScenario (high level) depends on the Notifier protocol, not on how a
notification travels. LoggingNotifier and HttpNotifier (low level) implement
it; configuration decides which one is injected.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Protocol

from playwright.sync_api import Page

from ..api_client import APIClient

logger = logging.getLogger(__name__)

PURCHASE_MESSAGE = "Purchase completed successfully!"


class Notifier(Protocol):
    def send(self, message: str) -> None:
        ...


class LoggingNotifier:

    def __init__(self):
        self.sent = []

    def send(self, message: str) -> None:
        self.sent.append(message)
        logger.info("NOTIFICATION: %s", message)


class HttpNotifier:

    def __init__(self, api: APIClient, path: str = "/api/notify"):
        self.api = api
        self.path = path

    def send(self, message: str) -> None:
        response = self.api.post(self.path, json={"message": message})
        response.raise_for_status()
        logger.info("API notification sent to %s", self.path)


class CheckoutScenario:

    def __init__(self, notifier: Notifier, checkout_url: str = "/checkout"):
        self.notifier = notifier
        self.checkout_url = checkout_url

    def run(self, page: Page) -> None:
        page.goto(self.checkout_url)
        page.click("#confirm-purchase")
        self.notifier.send(PURCHASE_MESSAGE)


def build_notifier(kind: str, options: Optional[Mapping[str, Any]] = None) -> Notifier:
    """Pick a notifier by name: "log" or "http" (requires an `api` option)."""
    kwargs: Dict[str, Any] = dict(options or {})
    if kind == "log":
        return LoggingNotifier()
    if kind == "http":
        if "api" not in kwargs:
            raise ValueError("http notifier needs an 'api' client option")
        return HttpNotifier(**kwargs)
    raise ValueError(f"Unknown notifier '{kind}', expected 'log' or 'http'")
