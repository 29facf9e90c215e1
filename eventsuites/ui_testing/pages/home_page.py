"""
================================================================================
Home Page Object (Async / Playwright)
================================================================================

Site root ``/``: top navigation (register / dashboard / logout) and the event
list. Every event renders as a container holding an ``h6`` heading with the
event name and, depending on role, RSVP or Delete buttons.

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from playwright.async_api import Locator

from eventsuites.ui_testing.framework.page_base import BasePage
from eventsuites.ui_testing.framework.waits import wait_for_unique_element


class HomePage(BasePage):
    """Home page / event list object (async)."""

    URL_PATH = "/"

    # =========================================================================
    # Navigation
    # =========================================================================

    @allure.step("Open home page")
    async def open(self) -> "HomePage":
        await super().open()
        return self

    async def go_to_register(self) -> None:
        await self.click("register_link")

    async def go_to_dashboard(self) -> None:
        await self.click("dashboard_link")

    async def click_logout(self) -> None:
        await self.click("logout_button")

    # =========================================================================
    # Event List
    # =========================================================================

    def event_card(self, name: str) -> Locator:
        """Unresolved locator for the container of event ``name``."""
        return self.element("event_card", **self.locators.event_params(name))

    async def find_event(self, name: str, timeout: Optional[int] = None) -> Locator:
        """
        Resolve the container of event ``name``.

        Raises:
            WaitTimeoutError: No such event within the timeout
            AmbiguousLookupError: Several events share the name
        """
        with allure.step(f"Find event: {name}"):
            return await wait_for_unique_element(
                self.page,
                self.event_card(name),
                timeout,
                f"event card {name!r}",
            )

    async def has_event(self, name: str, timeout: int = 0) -> bool:
        return await self.has_element("event_card", timeout, **self.locators.event_params(name))

    def delete_button(self, card: Locator) -> Locator:
        return self.element("event_delete_button", scope=card)

    def rsvp_button(self, card: Locator) -> Locator:
        return self.element("event_rsvp_button", scope=card)

    def rsvp_confirmation(self, card: Locator) -> Locator:
        return self.element("event_rsvp_confirmation", scope=card)
