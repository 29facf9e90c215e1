"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for UI automation.

Features:
    - One browser instance per test session
    - Explicit ``BrowserSession`` object (context + page + dialog watcher)
      handed to every scenario instead of a global driver handle
    - Per-scenario reset: unhandled dialogs accepted, cookies cleared
    - Failure capture (screenshot, URL, dialog texts) into Allure

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
)

from event_tools.common import get_config
from event_tools.report_tools import attach_failure_bundle

from .dialogs import DialogWatcher


class SessionRole(str, Enum):
    """Authentication state of the browser session as seen by the suite."""
    ANONYMOUS = "anonymous"
    AUTHENTICATING = "authenticating"
    ADMIN = "admin"
    REGULAR_USER = "regular_user"


class BrowserSession:
    """
    The browser state one scenario drives.

    Holds the context (cookie jar), the page, the dialog watcher and the
    role the suite believes it is logged in as.

    Usage:
        session = await manager.open_session("http://localhost:3000")
        await session.page.goto(session.url_for("/login"))
        ...
        await session.reset()  # before the next scenario
    """

    def __init__(
        self,
        context: BrowserContext,
        page: Page,
        base_url: str,
        dialogs: Optional[DialogWatcher] = None,
    ):
        self.context = context
        self.page = page
        self.base_url = base_url.rstrip("/")
        self.dialogs = dialogs or DialogWatcher(page)
        self.role = SessionRole.ANONYMOUS

    def url_for(self, path: str = "/") -> str:
        """Absolute URL for an application route."""
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.base_url}{path}"

    @property
    def root_url(self) -> str:
        return self.url_for("/")

    async def reset(self) -> None:
        """Return to an anonymous session: flush dialogs, clear cookies."""
        await self.dialogs.accept_pending()
        self.dialogs.clear_history()
        await self.context.clear_cookies()
        self.role = SessionRole.ANONYMOUS
        logger.debug("Browser session reset (cookies cleared)")

    async def capture_failure(self, test_name: str) -> None:
        """Attach screenshot, URL and dialog texts to the Allure report."""
        screenshot = None
        try:
            screenshot = await self.page.screenshot(full_page=True)
        except PlaywrightError as e:
            logger.warning(f"Failed to capture screenshot on failure: {e}")
        attach_failure_bundle(
            test_name,
            url=self.page.url,
            screenshot=screenshot,
            dialog_messages=self.dialogs.messages,
        )


class BrowserManager:
    """
    Manages the browser instance and sessions for UI testing.

    Usage:
        async with BrowserManager() as manager:
            session = await manager.open_session("http://localhost:3000")
            await session.page.goto(session.url_for("/login"))
    """

    # Default browser launch options
    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
        "args": [
            "--ignore-certificate-errors",
        ],
    }

    # Default context options
    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "viewport": {"width": 1920, "height": 1080},
        "ignore_https_errors": True,
    }

    def __init__(
        self,
        headless: Optional[bool] = None,
        browser_type: Optional[str] = None,
        slow_mo: Optional[int] = None,
    ):
        """
        Initialize browser manager.

        Args:
            headless: Run browser in headless mode (``ui.headless``)
            browser_type: 'chromium', 'firefox' or 'webkit' (``ui.browser``)
            slow_mo: Delay between driver operations in ms (``ui.slow_mo_ms``)
        """
        self.headless = get_config("ui.headless", True) if headless is None else headless
        self.browser_type = browser_type or get_config("ui.browser", "chromium")
        self.slow_mo = get_config("ui.slow_mo_ms", 0) if slow_mo is None else slow_mo

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: list[BrowserContext] = []

    async def __aenter__(self) -> "BrowserManager":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def start(self) -> None:
        """Start Playwright and launch browser."""
        self._playwright = await async_playwright().start()

        if self.browser_type == "firefox":
            browser_launcher = self._playwright.firefox
        elif self.browser_type == "webkit":
            browser_launcher = self._playwright.webkit
        else:
            browser_launcher = self._playwright.chromium

        launch_options = {
            **self.DEFAULT_LAUNCH_OPTIONS,
            "headless": self.headless,
            "slow_mo": self.slow_mo,
        }
        if self.browser_type != "chromium":
            launch_options.pop("args")

        self._browser = await browser_launcher.launch(**launch_options)
        logger.info(
            f"Browser started: {self.browser_type} "
            f"(headless={self.headless})"
        )

    async def close(self) -> None:
        """Close all contexts and browser."""
        for context in self._contexts:
            try:
                await context.close()
            except PlaywrightError as e:
                logger.debug(f"Context already closed: {e}")
        self._contexts.clear()

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.info("Browser closed")

    async def new_context(self, **options: Any) -> BrowserContext:
        """
        Create new browser context.

        Each context is isolated - separate cookies, localStorage, etc.
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context_options = {**self.DEFAULT_CONTEXT_OPTIONS, **options}
        context = await self._browser.new_context(**context_options)
        context.set_default_timeout(get_config("timeouts.default_ms", 10000))
        self._contexts.append(context)

        return context

    async def open_session(self, base_url: Optional[str] = None, **context_options: Any) -> BrowserSession:
        """
        Open a page in a fresh context and wrap it in a BrowserSession.

        Args:
            base_url: Application base URL (``ui.base_url``)
            **context_options: Options for the new context
        """
        base_url = base_url or get_config("ui.base_url", "http://localhost:3000")
        context = await self.new_context(**context_options)
        page = await context.new_page()
        logger.debug(f"Browser session opened for {base_url}")
        return BrowserSession(context=context, page=page, base_url=base_url)

    @property
    def browser(self) -> Optional[Browser]:
        return self._browser


__all__ = [
    "BrowserManager",
    "BrowserSession",
    "SessionRole",
]
