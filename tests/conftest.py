# Showcase Test Suite - Shared Configuration and Fixtures
#
# This module provides:
# - Settings from SHOWCASE_* environment variables
# - HTTP clients for the public fixture APIs (REST, httpbin, GraphQL)
# - Reachability probes so live scenarios skip instead of failing offline
# - Marker registration

import time
from typing import Callable, Dict, Generator

import pytest
import httpx

from showcase.api_client import APIClient
from showcase.config import Settings, configure_logging
from showcase.graphql import GraphQLClient


# =============================================================================
# CONFIGURATION
# =============================================================================

@pytest.fixture(scope="session")
def settings() -> Settings:
    """Provide test configuration."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    settings.ensure_dirs()
    return settings


# =============================================================================
# REACHABILITY
# =============================================================================

_REACHABLE: Dict[str, bool] = {}


def is_reachable(url: str, timeout: float = 5.0, attempts: int = 2) -> bool:
    """
    Probe a live endpoint once per session.
    Any HTTP answer counts as reachable; only connection failures do not.
    """
    if url in _REACHABLE:
        return _REACHABLE[url]

    reachable = False
    for attempt in range(attempts):
        try:
            httpx.get(url, timeout=timeout, follow_redirects=True)
            reachable = True
            break
        except (httpx.ConnectError, httpx.TimeoutException):
            if attempt < attempts - 1:
                time.sleep(0.5)
    _REACHABLE[url] = reachable
    return reachable


@pytest.fixture
def require_live() -> Callable[[str], None]:
    """Return a function that skips the current test when a URL is unreachable."""
    def check(url: str) -> None:
        if not is_reachable(url):
            pytest.skip(f"Live endpoint unreachable: {url}")
    return check


# =============================================================================
# HTTP CLIENTS
# =============================================================================

@pytest.fixture
def rest_client(settings: Settings, require_live) -> Generator[APIClient, None, None]:
    """Provide a client for the jsonplaceholder-style REST API."""
    require_live(settings.rest_base_url)
    client = APIClient(settings.rest_base_url, timeout=settings.request_timeout)
    yield client
    client.close()


@pytest.fixture
def httpbin_client(settings: Settings, require_live) -> Generator[APIClient, None, None]:
    """Provide a client for the httpbin echo API."""
    require_live(settings.httpbin_url)
    client = APIClient(settings.httpbin_url, timeout=settings.request_timeout)
    yield client
    client.close()


@pytest.fixture
def graphql_client(settings: Settings, require_live) -> Generator[GraphQLClient, None, None]:
    """Provide a client for the countries GraphQL API."""
    require_live(settings.graphql_url)
    client = GraphQLClient(settings.graphql_url, timeout=settings.request_timeout)
    yield client
    client.close()


# =============================================================================
# TEST MARKERS
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "smoke: Quick smoke tests for critical paths")
    config.addinivalue_line("markers", "unit: Offline tests with fake pages and transports")
    config.addinivalue_line("markers", "api: REST request scenarios")
    config.addinivalue_line("markers", "graphql: GraphQL request scenarios")
    config.addinivalue_line("markers", "ui: Browser scenarios")
    config.addinivalue_line("markers", "pom: Page Object / Component Object scenarios")
    config.addinivalue_line("markers", "locators: Locator strategy scenarios")
    config.addinivalue_line("markers", "intercept: Route interception scenarios")
    config.addinivalue_line("markers", "context: Browser context scenarios")
    config.addinivalue_line("markers", "visual: Visual regression scenarios")
    config.addinivalue_line("markers", "a11y: axe-core accessibility scenarios")
    config.addinivalue_line("markers", "extended: Uploads, downloads, frames, dialogs and popups")
    config.addinivalue_line("markers", "solid: SOLID principle examples")
    config.addinivalue_line("markers", "live: Needs public internet endpoints")
