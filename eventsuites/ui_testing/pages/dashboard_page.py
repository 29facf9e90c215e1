"""
================================================================================
Dashboard Page Object (Async / Playwright)
================================================================================

Admin-only dashboard at ``/dashboard`` holding the "Create New Event" form.

================================================================================
"""

from __future__ import annotations

from datetime import datetime

import allure
from loguru import logger

from event_tools.data_generator import EventFixture
from eventsuites.ui_testing.framework.page_base import BasePage


def to_input_date(value: str) -> str:
    """
    Convert a ``DD/MM/YYYY`` date to the ``YYYY-MM-DD`` form date inputs accept.

    Values already in ISO form pass through unchanged.
    """
    for fmt in ("%d/%m/%Y", "%Y-%m-%d"):
        try:
            return datetime.strptime(value, fmt).strftime("%Y-%m-%d")
        except ValueError:
            continue
    raise ValueError(f"Unsupported event date: {value!r}")


class DashboardPage(BasePage):
    """Dashboard page object (async)."""

    URL_PATH = "/dashboard"
    HEADING = "create_event_heading"

    @allure.step("Open dashboard")
    async def open(self) -> "DashboardPage":
        await super().open()
        return self

    @allure.step("Verify dashboard loaded")
    async def verify_dashboard_loaded(self) -> None:
        await self.wait_until_current()
        await self.wait_for(self.HEADING)

    async def creation_form_shown(self, timeout: int = 0) -> bool:
        """True when the creation form heading shows up within ``timeout`` ms."""
        return await self.has_element(self.HEADING, timeout)

    @allure.step("Fill event form")
    async def fill_event_form(self, event: EventFixture) -> None:
        await self.fill("event_name_input", event.name)
        await self.fill("event_description_input", event.description)
        await self.fill("event_date_input", to_input_date(event.date), clear_first=True)
        await self.fill("event_time_input", event.time)
        await self.fill("event_location_input", event.location)
        logger.debug(f"Event form filled: {event.name}")

    @allure.step("Submit event form")
    async def submit_event(self) -> None:
        await self.click("create_event_button")
