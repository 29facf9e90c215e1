"""
================================================================================
Register Page Object (Async / Playwright)
================================================================================

Registration form at ``/register``. Fields are located by id.

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger

from event_tools.common import get_config
from event_tools.data_generator import UserFixture
from eventsuites.ui_testing.framework.errors import WaitTimeoutError
from eventsuites.ui_testing.framework.page_base import BasePage
from eventsuites.ui_testing.framework.waits import wait_for_element_visible


class RegisterPage(BasePage):
    """Registration page object (async)."""

    URL_PATH = "/register"
    HEADING = "register_heading"

    @allure.step("Open registration page")
    async def open(self) -> "RegisterPage":
        await super().open()
        return self

    @allure.step("Fill registration form")
    async def fill_form(self, user: UserFixture) -> None:
        await self.fill("register_username_input", user.username)
        await self.fill("register_email_input", user.email)
        await self.fill("register_password_input", user.password)
        await self.fill("register_confirm_password_input", user.confirm_password)

    @allure.step("Submit registration form")
    async def submit(self) -> None:
        await self.click("register_submit_button")

    async def register(self, user: UserFixture) -> None:
        """Open, fill and submit. Outcome is asserted by the caller."""
        await self.open()
        await self.fill_form(user)
        await self.submit()
        logger.info(f"Registration submitted for {user.username}")

    @allure.step("Read registration error")
    async def registration_error(self, timeout: Optional[int] = None) -> Optional[str]:
        """
        Text of the "Registration failed." message, or None if it never shows.
        """
        if timeout is None:
            timeout = int(get_config("timeouts.error_message_ms", 5000))
        try:
            message = await self.wait_for("registration_error", timeout)
            await wait_for_element_visible(message, timeout, "registration failure message")
        except WaitTimeoutError:
            logger.info("Registration failure message not displayed")
            return None
        return await message.inner_text()

    @allure.step("Go to login page via link")
    async def go_to_login(self) -> None:
        await self.click("login_link")
