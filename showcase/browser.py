"""
Browser Context Helpers

A ContextProfile collects the options for `browser.new_context()` (viewport,
locale, geolocation, credentials, a device descriptor, saved storage state)
plus the default timeouts that Playwright only accepts after the context
exists. Storage state and trace archives are written under the artifacts
directory.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from playwright.sync_api import Browser, BrowserContext, Playwright

from .config import Settings

logger = logging.getLogger(__name__)

DEFAULT_VIEWPORT = {"width": 1280, "height": 720}


@dataclass
class ContextProfile:
    """Options for one isolated browser context."""
    viewport: Optional[Dict[str, int]] = None
    user_agent: Optional[str] = None
    locale: Optional[str] = None
    timezone_id: Optional[str] = None
    geolocation: Optional[Dict[str, float]] = None
    permissions: List[str] = field(default_factory=list)
    http_credentials: Optional[Dict[str, str]] = None
    storage_state: Optional[Union[str, Path]] = None
    device: Optional[str] = None
    offline: bool = False
    record_video_dir: Optional[Union[str, Path]] = None
    default_timeout: Optional[float] = None
    navigation_timeout: Optional[float] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: Settings, **overrides) -> "ContextProfile":
        options: Dict[str, Any] = {
            "device": settings.device,
            "default_timeout": settings.action_timeout,
        }
        if not settings.device:
            options["viewport"] = dict(DEFAULT_VIEWPORT)
        if settings.video:
            options["record_video_dir"] = settings.artifacts_dir / "videos"
        options.update(overrides)
        return cls(**options)

    def to_context_options(self, playwright: Optional[Playwright] = None) -> Dict[str, Any]:
        """
        Keyword arguments for `browser.new_context()`.

        A device descriptor is applied first and explicit fields win over it.
        Resolving a device name needs the Playwright instance.
        """
        options: Dict[str, Any] = {}
        if self.device:
            if playwright is None:
                raise ValueError(f"Resolving device '{self.device}' needs a Playwright instance")
            try:
                descriptor = playwright.devices[self.device]
            except KeyError:
                raise ValueError(f"Unknown device descriptor '{self.device}'") from None
            options.update(descriptor)
            options.pop("default_browser_type", None)

        if self.viewport is not None:
            options["viewport"] = dict(self.viewport)
        if self.user_agent:
            options["user_agent"] = self.user_agent
        if self.locale:
            options["locale"] = self.locale
        if self.timezone_id:
            options["timezone_id"] = self.timezone_id
        if self.geolocation is not None:
            options["geolocation"] = dict(self.geolocation)
        if self.permissions:
            options["permissions"] = list(self.permissions)
        if self.http_credentials is not None:
            options["http_credentials"] = dict(self.http_credentials)
        if self.storage_state is not None:
            options["storage_state"] = str(self.storage_state)
        if self.offline:
            options["offline"] = True
        if self.record_video_dir is not None:
            options["record_video_dir"] = str(self.record_video_dir)
        options.update(self.extra)
        return options


def new_context(
    browser: Browser,
    profile: Optional[ContextProfile] = None,
    playwright: Optional[Playwright] = None
) -> BrowserContext:
    """Open a context from a profile and apply its default timeouts."""
    profile = profile or ContextProfile()
    options = profile.to_context_options(playwright)
    logger.debug("Creating browser context with %s", sorted(options))
    context = browser.new_context(**options)
    if profile.default_timeout is not None:
        context.set_default_timeout(profile.default_timeout)
    if profile.navigation_timeout is not None:
        context.set_default_navigation_timeout(profile.navigation_timeout)
    return context


def save_storage_state(context: BrowserContext, path: Union[str, Path]) -> Dict[str, Any]:
    """Persist cookies and per-origin storage so a later context can reuse them."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    state = context.storage_state(path=str(path))
    logger.info(
        "Saved storage state to %s (%d cookies, %d origins)",
        path, len(state.get("cookies", [])), len(state.get("origins", []))
    )
    return state


def load_storage_state(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a saved storage-state document, checking its shape."""
    state = json.loads(Path(path).read_text(encoding="utf-8"))
    for key in ("cookies", "origins"):
        if not isinstance(state.get(key), list):
            raise ValueError(f"Storage state {path} has no '{key}' list")
    return state


def artifact_name(nodeid: str) -> str:
    """Filesystem-safe name for a test's screenshots and traces."""
    return re.sub(r"[^A-Za-z0-9_.-]+", "_", nodeid).strip("_")


def start_tracing(context: BrowserContext, mode: str) -> bool:
    """Start tracing unless the mode is "off". Returns whether tracing runs."""
    if mode == "off":
        return False
    context.tracing.start(screenshots=True, snapshots=True, sources=True)
    return True


def stop_tracing(
    context: BrowserContext,
    mode: str,
    failed: bool,
    path: Union[str, Path]
) -> Optional[Path]:
    """
    Stop tracing and keep the archive when the mode asks for it: always for
    "on", only for failed tests under "retain-on-failure".
    """
    if mode == "off":
        return None
    if mode == "on" or (mode == "retain-on-failure" and failed):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        context.tracing.stop(path=str(path))
        logger.info("Trace saved: %s", path)
        return path
    context.tracing.stop()
    return None
