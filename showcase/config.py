"""
Showcase Configuration

Every knob the scenarios read comes from environment variables, so the same
suite runs locally (headed, one browser) and in CI (headless, any browser)
without code changes.
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional


REPO_ROOT = Path(__file__).resolve().parent.parent

BROWSERS = ("chromium", "firefox", "webkit")
TRACE_MODES = ("on", "off", "retain-on-failure")

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Test configuration with environment variable overrides."""
    # Targets
    ui_base_url: str = "https://the-internet.herokuapp.com"
    rest_base_url: str = "https://jsonplaceholder.typicode.com"
    httpbin_url: str = "https://httpbin.org"
    graphql_url: str = "https://countries.trevorblades.com/graphql"

    # Browser
    browser: str = "chromium"
    device: Optional[str] = None
    headless: bool = True
    slow_mo: int = 0

    # Timeouts (Playwright uses milliseconds, httpx seconds)
    action_timeout: int = 30_000
    expect_timeout: int = 5_000
    request_timeout: float = 30.0

    # Artifacts
    artifacts_dir: Path = field(default_factory=lambda: REPO_ROOT / "tests" / "artifacts")
    snapshot_dir: Path = field(default_factory=lambda: REPO_ROOT / "tests" / "snapshots")
    update_snapshots: bool = False
    trace: str = "retain-on-failure"
    video: bool = False

    log_level: str = "INFO"

    def __post_init__(self):
        if self.browser not in BROWSERS:
            raise ValueError(f"Unknown browser '{self.browser}', expected one of {BROWSERS}")
        if self.trace not in TRACE_MODES:
            raise ValueError(f"Unknown trace mode '{self.trace}', expected one of {TRACE_MODES}")
        self.artifacts_dir = Path(self.artifacts_dir)
        self.snapshot_dir = Path(self.snapshot_dir)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from SHOWCASE_* variables, falling back to defaults."""
        env = os.environ if env is None else env
        defaults = cls()

        def get(name: str, default):
            return env.get(f"SHOWCASE_{name}", default)

        return cls(
            ui_base_url=get("UI_BASE_URL", defaults.ui_base_url).rstrip("/"),
            rest_base_url=get("REST_BASE_URL", defaults.rest_base_url).rstrip("/"),
            httpbin_url=get("HTTPBIN_URL", defaults.httpbin_url).rstrip("/"),
            graphql_url=get("GRAPHQL_URL", defaults.graphql_url),
            browser=get("BROWSER", defaults.browser).lower(),
            device=get("DEVICE", "") or None,
            headless=_flag(get("HEADLESS", "true")),
            slow_mo=int(get("SLOW_MO", "0")),
            action_timeout=int(get("ACTION_TIMEOUT", str(defaults.action_timeout))),
            expect_timeout=int(get("EXPECT_TIMEOUT", str(defaults.expect_timeout))),
            request_timeout=float(get("REQUEST_TIMEOUT", str(defaults.request_timeout))),
            artifacts_dir=Path(get("ARTIFACTS_DIR", str(defaults.artifacts_dir))),
            snapshot_dir=Path(get("SNAPSHOT_DIR", str(defaults.snapshot_dir))),
            update_snapshots=_flag(get("UPDATE_SNAPSHOTS", "false")),
            trace=get("TRACE", defaults.trace).lower(),
            video=_flag(get("VIDEO", "false")),
            log_level=get("LOG_LEVEL", defaults.log_level).upper(),
        )

    def ensure_dirs(self) -> None:
        self.artifacts_dir.mkdir(parents=True, exist_ok=True)
        self.snapshot_dir.mkdir(parents=True, exist_ok=True)


def configure_logging(level: str = "INFO") -> None:
    """Install one stream handler on the showcase logger."""
    logger = logging.getLogger("showcase")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
