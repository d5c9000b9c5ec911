# Showcase UI Tests - Playwright Configuration
#
# Provides fixtures for Playwright browser automation:
# - one browser per session (chromium, firefox or webkit from settings)
# - a fresh context and page per test, closed at teardown
# - trace, screenshot and video kept for failed tests
# - `serve` for scenarios that run against inline HTML on a fake origin

from pathlib import Path
from typing import Callable, Generator

import pytest
from playwright.sync_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    expect,
    sync_playwright,
)

from showcase.browser import ContextProfile, artifact_name, new_context, start_tracing, stop_tracing
from showcase.config import Settings
from showcase.interception import serve_html
from showcase.visual import SnapshotComparator
from tests.ui.site_pages import LOCAL_ORIGIN


@pytest.fixture(scope="session")
def playwright_instance() -> Generator[Playwright, None, None]:
    """Create playwright instance for the test session."""
    with sync_playwright() as p:
        yield p


@pytest.fixture(scope="session")
def browser(playwright_instance: Playwright, settings: Settings) -> Generator[Browser, None, None]:
    """Create browser for the test session."""
    browser_type = getattr(playwright_instance, settings.browser)
    try:
        browser = browser_type.launch(headless=settings.headless, slow_mo=settings.slow_mo)
    except PlaywrightError as exc:
        pytest.skip(f"{settings.browser} is not installed. Run: playwright install {settings.browser} ({exc})")
    expect.set_options(timeout=settings.expect_timeout)
    yield browser
    browser.close()


@pytest.fixture
def context(
    browser: Browser,
    playwright_instance: Playwright,
    settings: Settings,
    request
) -> Generator[BrowserContext, None, None]:
    """Create browser context for each test."""
    context = new_context(browser, ContextProfile.from_settings(settings), playwright_instance)
    tracing = start_tracing(context, settings.trace)
    yield context
    if tracing:
        trace_path = settings.artifacts_dir / "traces" / f"{artifact_name(request.node.nodeid)}.zip"
        stop_tracing(context, settings.trace, _failed(request), trace_path)
    context.close()


@pytest.fixture
def page(context: BrowserContext, settings: Settings, request) -> Generator[Page, None, None]:
    """Create page for each test."""
    page = context.new_page()
    yield page
    failed = _failed(request)
    if failed:
        take_screenshot_on_failure(page, settings.artifacts_dir, request.node.nodeid)
    video = page.video
    page.close()
    if video is not None and not failed:
        video.delete()


@pytest.fixture
def ui_base_url(settings: Settings, require_live) -> str:
    """Base URL of the live demo site; skips the test when it is unreachable."""
    require_live(settings.ui_base_url)
    return settings.ui_base_url


@pytest.fixture
def serve(page: Page) -> Callable[[str, str], str]:
    """
    Return a function that serves inline HTML at a path on LOCAL_ORIGIN and
    gives back the full URL, e.g. `page.goto(serve("/login", LOGIN_HTML))`.
    """
    def register(path: str, html: str) -> str:
        url = f"{LOCAL_ORIGIN}/{path.lstrip('/')}"
        serve_html(page, url, html)
        return url
    return register


@pytest.fixture
def snapshots(settings: Settings) -> SnapshotComparator:
    """Visual comparator with one baseline set per browser engine."""
    return SnapshotComparator(
        settings.snapshot_dir,
        settings.artifacts_dir / "visual",
        update=settings.update_snapshots,
        suffix=settings.browser,
    )


def _failed(request) -> bool:
    report = getattr(request.node, "rep_call", None)
    return bool(report and report.failed)


def take_screenshot_on_failure(page: Page, artifacts_dir: Path, nodeid: str):
    """Take screenshot when test fails."""
    screenshot_path = artifacts_dir / "screenshots" / f"{artifact_name(nodeid)}.png"
    screenshot_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        page.screenshot(path=str(screenshot_path), full_page=True)
    except PlaywrightError as exc:
        print(f"Screenshot failed: {exc}")
        return
    print(f"Screenshot saved: {screenshot_path}")


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Hook to capture test results for screenshot on failure."""
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)
