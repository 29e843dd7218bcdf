# Shared page-object plumbing: navigation and fail-fast action wrapping.
from __future__ import annotations

import functools
from typing import Callable, TypeVar

from playwright.sync_api import Locator, Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from e2e_logging import get_logger

LOGGER = get_logger("actions")

F = TypeVar("F", bound=Callable)


class ControlNotInteractableError(RuntimeError):
    """A control never resolved or never became interactable within the timeout."""

    def __init__(self, action: str, detail: str) -> None:
        super().__init__(f"{action}: control not found or not interactable ({detail})")
        self.action = action
        self.detail = detail


def user_action(func: F) -> F:
    """Log an action and turn Playwright timeouts into ControlNotInteractableError."""

    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        LOGGER.debug(
            "action",
            extra={"event": "action", "action": func.__name__, "args": [str(arg) for arg in args]},
        )
        try:
            return func(self, *args, **kwargs)
        except PlaywrightTimeoutError as exc:
            detail = str(exc).strip().splitlines()[0] if str(exc).strip() else "timeout"
            raise ControlNotInteractableError(func.__name__, detail) from exc

    return wrapper  # type: ignore[return-value]


class BasePage:
    """Base class for page objects with consistent timeout-aware helpers."""

    def __init__(self, page: Page, base_url: str, timeout_ms: int = 10_000) -> None:
        self.page = page
        self.base_url = base_url
        self.timeout_ms = timeout_ms

    def goto(self, path: str = "") -> None:
        """Navigate to a path under base_url, retrying once for transient demo-site slowness."""

        url = f"{self.base_url}{path}"
        try:
            self.page.goto(url, wait_until="domcontentloaded", timeout=self.timeout_ms)
        except PlaywrightTimeoutError:
            LOGGER.warning("navigation_retry", extra={"event": "navigation_retry", "url": url})
            self.page.goto(url, wait_until="domcontentloaded", timeout=self.timeout_ms)

    def reload(self) -> None:
        self.page.reload(wait_until="domcontentloaded", timeout=self.timeout_ms)

    def wait_visible(self, locator: Locator) -> None:
        locator.wait_for(state="visible", timeout=self.timeout_ms)
