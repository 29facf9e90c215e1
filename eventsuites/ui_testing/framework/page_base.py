"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Route navigation relative to the session base URL
    - Named-locator element access through the LocatorTable
    - Locate -> wait visible -> interact helpers with Allure steps
    - Explicit absence checks for role-gated controls

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional, Union

import allure
from loguru import logger
from playwright.async_api import Locator, Page

from event_tools.common import get_config

from .browser_manager import BrowserSession
from .locators import LocatorTable
from .waits import (
    assert_element_absent,
    element_appears_within,
    wait_for_element,
    wait_for_element_visible,
    wait_for_url,
)


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class LoginPage(BasePage):
            URL_PATH = "/login"
            HEADING = "login_heading"

            async def submit(self):
                await self.click("login_submit_button")
    """

    # Override in subclasses
    URL_PATH: str = "/"
    HEADING: Optional[str] = None

    def __init__(
        self,
        session: BrowserSession,
        locators: Optional[LocatorTable] = None,
    ):
        """
        Initialize page object.

        Args:
            session: Browser session the page drives
            locators: Locator table (a default table is built if omitted)
        """
        self.session = session
        self.locators = locators or LocatorTable()

    @property
    def page(self) -> Page:
        return self.session.page

    @property
    def url(self) -> str:
        """Full page URL."""
        return self.session.url_for(self.URL_PATH)

    @property
    def current_url(self) -> str:
        return self.page.url

    @property
    def negative_timeout(self) -> int:
        """Timeout for checks that expect an element NOT to show up."""
        return int(get_config("timeouts.negative_check_ms", 3000))

    # =========================================================================
    # Navigation
    # =========================================================================

    async def navigate(self, wait_for: str = "load") -> None:
        """
        Navigate to this page.

        Args:
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
        """
        with allure.step(f"Navigate to {self.URL_PATH}"):
            await self.page.goto(self.url, wait_until=wait_for)
            logger.debug(f"Navigated to: {self.url}")

    async def open(self) -> "BasePage":
        """Navigate here and wait for the page heading, if the page has one."""
        await self.navigate()
        if self.HEADING:
            await self.wait_for(self.HEADING)
        return self

    async def wait_until_current(self, timeout: Optional[int] = None) -> str:
        """Wait for the browser to land on this page's route."""
        return await wait_for_url(self.page, self.URL_PATH, timeout)

    def is_current(self) -> bool:
        return self.URL_PATH in self.page.url

    # =========================================================================
    # Named Element Access
    # =========================================================================

    def element(
        self,
        name: str,
        scope: Optional[Union[Page, Locator]] = None,
        **params: str,
    ) -> Locator:
        """Locator for a named element (not awaited, not yet resolved)."""
        return self.locators.resolve(scope or self.page, name, **params)

    async def wait_for(
        self,
        name: str,
        timeout: Optional[int] = None,
        scope: Optional[Union[Page, Locator]] = None,
        **params: str,
    ) -> Locator:
        """Wait for a named element to be attached and return it."""
        return await wait_for_element(
            scope or self.page,
            self.element(name, scope, **params),
            timeout,
            self.locators.spec(name).label,
        )

    async def wait_for_visible(
        self,
        name: str,
        timeout: Optional[int] = None,
        scope: Optional[Union[Page, Locator]] = None,
    ) -> Locator:
        """Locate, then wait for the element to render visible."""
        element = await self.wait_for(name, timeout, scope)
        return await wait_for_element_visible(
            element, timeout, self.locators.spec(name).label
        )

    # =========================================================================
    # Interactions
    # =========================================================================

    async def click(
        self,
        name: str,
        timeout: Optional[int] = None,
        scope: Optional[Union[Page, Locator]] = None,
    ) -> None:
        """Locate -> wait visible -> click."""
        with allure.step(f"Click: {self.locators.spec(name).label}"):
            element = await self.wait_for_visible(name, timeout, scope)
            await element.click()

    async def fill(
        self,
        name: str,
        value: str,
        clear_first: bool = False,
        timeout: Optional[int] = None,
    ) -> None:
        """
        Type ``value`` into a named input.

        Args:
            name: Locator name of the input
            value: Text to enter
            clear_first: Clear the field before typing
            timeout: Timeout for element location
        """
        label = self.locators.spec(name).label
        shown = "*" * len(value) if "password" in name.lower() else value
        with allure.step(f"Fill {label}: {shown}"):
            element = await self.wait_for(name, timeout)
            if clear_first:
                await element.clear()
            await element.fill(value)

    # =========================================================================
    # Presence / Absence
    # =========================================================================

    async def has_element(
        self,
        name: str,
        timeout: int = 0,
        scope: Optional[Union[Page, Locator]] = None,
        **params: str,
    ) -> bool:
        """True when the named element shows up within ``timeout`` ms."""
        return await element_appears_within(
            self.element(name, scope, **params),
            timeout,
            self.locators.spec(name).label,
        )

    async def assert_absent(
        self,
        name: str,
        timeout: int = 0,
        scope: Optional[Union[Page, Locator]] = None,
        **params: str,
    ) -> None:
        """Fail with UnexpectedElementError if the named element appears."""
        await assert_element_absent(
            self.element(name, scope, **params),
            timeout,
            self.locators.spec(name).label,
        )


__all__ = [
    "BasePage",
]
