"""
================================================================================
Session Flows
================================================================================

Login / logout journeys built on the page objects.

Role model:
    ANONYMOUS -> AUTHENTICATING -> {ADMIN, REGULAR_USER} -> ANONYMOUS

``login`` leaves the session AUTHENTICATING; only the role-specific helpers
assert the post-condition and promote the session to a role. ``logout`` and
``BrowserSession.reset`` return it to ANONYMOUS.

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError

from event_tools.data_generator import FixtureFactory, UserFixture
from eventsuites.ui_testing.framework.browser_manager import BrowserSession, SessionRole
from eventsuites.ui_testing.framework.errors import (
    RoleAssertionError,
    UiAutomationError,
    UnexpectedElementError,
    WaitTimeoutError,
)
from eventsuites.ui_testing.framework.locators import LocatorTable
from eventsuites.ui_testing.framework.waits import wait_for_url
from eventsuites.ui_testing.pages import HomePage, LoginPage


class SessionActions:
    """
    Authentication flows for one browser session.

    Usage:
        actions = SessionActions(session, factory)
        await actions.login_as_admin()
        ...
        await actions.logout()
    """

    def __init__(
        self,
        session: BrowserSession,
        factory: FixtureFactory,
        locators: Optional[LocatorTable] = None,
    ):
        self.session = session
        self.factory = factory
        locators = locators or LocatorTable()
        self.login_page = LoginPage(session, locators)
        self.home_page = HomePage(session, locators)

    @property
    def role(self) -> SessionRole:
        return self.session.role

    async def login(self, email: str, password: str) -> None:
        """Submit the login form; callers assert the outcome."""
        with allure.step(f"Login as {email or '<empty>'}"):
            self.session.role = SessionRole.AUTHENTICATING
            await self.login_page.login(email, password)

    async def login_as(self, user: UserFixture) -> None:
        await self.login(user.email, user.password)

    async def login_as_admin(self) -> UserFixture:
        """
        Login with the admin fixture and require the dashboard link.

        Raises:
            RoleAssertionError: Dashboard link never shows up
        """
        admin = self.factory.admin_user()
        with allure.step("Login as admin"):
            await self.login_as(admin)
            try:
                await self.home_page.wait_for("dashboard_link")
            except WaitTimeoutError as e:
                raise RoleAssertionError(
                    f"Admin {admin.email} should see the dashboard link"
                ) from e
        self.session.role = SessionRole.ADMIN
        logger.info("Successfully logged in as admin")
        return admin

    async def login_as_regular_user(self) -> UserFixture:
        """
        Login with the registered fixture; require logout, forbid dashboard link.

        Raises:
            RoleAssertionError: Logout missing, or dashboard link present
        """
        user = self.factory.registered_user()
        with allure.step("Login as regular user"):
            await self.login_as(user)
            try:
                await self.home_page.wait_for("logout_button")
            except WaitTimeoutError as e:
                raise RoleAssertionError(
                    f"Regular user {user.email} should see the logout button"
                ) from e
            await self.assert_no_dashboard_access()
        self.session.role = SessionRole.REGULAR_USER
        logger.info("Successfully logged in as regular user")
        return user

    async def assert_no_dashboard_access(self, timeout: int = 0) -> None:
        """
        Role-negative check: the dashboard link must not be rendered.

        Raises:
            RoleAssertionError: The link is present
        """
        try:
            await self.home_page.assert_absent("dashboard_link", timeout)
        except UnexpectedElementError as e:
            raise RoleAssertionError(
                "Regular user should not have dashboard access"
            ) from e

    def require_role(self, role: SessionRole) -> None:
        """Guard for role-scoped actions."""
        if self.session.role != role:
            raise RoleAssertionError(
                f"Action requires {role.value} session, current is {self.session.role.value}"
            )

    async def logout(self, timeout: Optional[int] = None) -> None:
        """
        Click Logout and wait for the redirect to /login.

        Raises:
            WaitTimeoutError: No redirect within the timeout
        """
        with allure.step("Logout"):
            await self.home_page.click_logout()
            await wait_for_url(self.session.page, "/login", timeout)
        self.session.role = SessionRole.ANONYMOUS
        logger.info("Logged out")

    async def safe_logout(self) -> bool:
        """Best-effort logout for teardown. Failures are logged, not raised."""
        if self.session.role == SessionRole.ANONYMOUS:
            logger.debug("Logout not needed: session is anonymous")
            return False
        try:
            await self.logout()
        except (UiAutomationError, PlaywrightError) as e:
            logger.warning(f"Logout failed or not needed: {e}")
            return False
        return True


__all__ = [
    "SessionActions",
]
