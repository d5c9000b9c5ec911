"""
Open/Closed Principle

LoginFlow runs any AuthStrategy it is handed and never changes when a new
way of logging in appears. New strategies are added by registering a
factory under a new `kind`; configuration picks one by name.
"""

from typing import Any, Callable, Dict, Mapping, Protocol

from playwright.sync_api import Page


class AuthStrategy(Protocol):
    def authenticate(self, page: Page) -> None:
        ...


class UsernamePasswordAuth:

    def __init__(self, username: str, password: str):
        self.username = username
        self.password = password

    def authenticate(self, page: Page) -> None:
        page.fill("#username", self.username)
        page.fill("#password", self.password)
        page.click("#login")


class OAuthAuth:

    def __init__(self, provider: str):
        self.provider = provider

    def authenticate(self, page: Page) -> None:
        page.click(f"#oauth-{self.provider}")


class LoginFlow:

    def __init__(self, strategy: AuthStrategy):
        self.strategy = strategy

    def run(self, page: Page) -> None:
        self.strategy.authenticate(page)


STRATEGIES: Dict[str, Callable[..., AuthStrategy]] = {
    "password": UsernamePasswordAuth,
    "oauth": OAuthAuth,
}


def register_strategy(kind: str, factory: Callable[..., AuthStrategy]) -> None:
    if kind in STRATEGIES:
        raise ValueError(f"Auth strategy '{kind}' is already registered")
    STRATEGIES[kind] = factory


def build_auth_strategy(config: Mapping[str, Any]) -> AuthStrategy:
    """
    Build a strategy from configuration, e.g.
    {"kind": "password", "username": "user", "password": "secret"}
    or {"kind": "oauth", "provider": "google"}.
    """
    options = dict(config)
    kind = options.pop("kind", None)
    if kind not in STRATEGIES:
        raise ValueError(f"Unknown auth strategy '{kind}', expected one of {sorted(STRATEGIES)}")
    return STRATEGIES[kind](**options)
