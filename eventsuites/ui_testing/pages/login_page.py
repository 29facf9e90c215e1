"""
================================================================================
Login Page Object (Async / Playwright)
================================================================================

Login form at ``/login``.

NOTE:
  The identifier and password fields carry no id or name; they are located
  by input type only. A second text input on the page would break the lookup.

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from eventsuites.ui_testing.framework.page_base import BasePage


class LoginPage(BasePage):
    """Login page object (async)."""

    URL_PATH = "/login"
    HEADING = "login_heading"

    @allure.step("Open login page")
    async def open(self) -> "LoginPage":
        """Navigate to the login page and wait for its heading."""
        await super().open()
        return self

    @allure.step("Fill login form")
    async def fill_credentials(self, email: str, password: str) -> None:
        await self.fill("login_identifier_input", email)
        await self.fill("login_password_input", password)

    @allure.step("Submit login form")
    async def submit(self) -> None:
        await self.click("login_submit_button")

    async def login(self, email: str, password: str) -> None:
        """
        Open the page, fill the form and submit.

        Does not assert the outcome; callers check the post-conditions.
        """
        await self.open()
        await self.fill_credentials(email, password)
        await self.submit()
        logger.debug(f"Login submitted for {email or '<empty>'}")

    async def assert_on_login_page(self) -> None:
        """Hard assertion helper used by tests."""
        await self.wait_until_current()
        await self.wait_for(self.HEADING)
