"""
================================================================================
Event Flows
================================================================================

Event lifecycle journeys: create (admin), find, delete (admin), reserve
(regular user), plus teardown cleanup of events a scenario left behind.

Event names are unique per run (timestamp suffix) because lookups match the
exact heading text.

================================================================================
"""

from __future__ import annotations

from typing import List, Optional

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator

from event_tools.data_generator import EventFixture, FixtureFactory
from eventsuites.ui_testing.framework.browser_manager import BrowserSession, SessionRole
from eventsuites.ui_testing.framework.errors import (
    CreationTimeoutError,
    UiAutomationError,
    WaitTimeoutError,
)
from eventsuites.ui_testing.framework.locators import LocatorTable
from eventsuites.ui_testing.framework.waits import (
    assert_element_absent,
    find_unique,
    wait_for_element,
    wait_for_element_visible,
    wait_for_exact_url,
    wait_for_staleness,
)
from eventsuites.ui_testing.flows.session_flows import SessionActions
from eventsuites.ui_testing.pages import DashboardPage, HomePage


class EventActions:
    """
    Event resource flows.

    Usage:
        events = EventActions(session, session_actions, factory)
        await session_actions.login_as_admin()
        name = await events.create_event("Smoke Test Event_1700000000000")
        await events.find_event(name)
        await events.delete_event(name)
    """

    def __init__(
        self,
        session: BrowserSession,
        session_actions: SessionActions,
        factory: FixtureFactory,
        locators: Optional[LocatorTable] = None,
    ):
        self.session = session
        self.session_actions = session_actions
        self.factory = factory
        locators = locators or LocatorTable()
        self.home_page = HomePage(session, locators)
        self.dashboard_page = DashboardPage(session, locators)

    # =========================================================================
    # Create
    # =========================================================================

    async def create_event(
        self,
        name: str,
        description: Optional[str] = None,
        date: Optional[str] = None,
        time: Optional[str] = None,
        location: Optional[str] = None,
        timeout: Optional[int] = None,
    ) -> str:
        """
        Create an event through the dashboard form (admin only).

        Unset fields take the configured event defaults.

        Returns:
            The event name

        Raises:
            RoleAssertionError: Session is not logged in as admin
            CreationTimeoutError: No redirect to the site root after submit
        """
        defaults = self.factory.event_named(name, description)
        event = EventFixture(
            name=name,
            description=defaults.description,
            date=date or defaults.date,
            time=time or defaults.time,
            location=location or defaults.location,
        )
        await self.create(event, timeout)
        return event.name

    async def create(self, event: EventFixture, timeout: Optional[int] = None) -> EventFixture:
        """Create ``event`` and track it for cleanup."""
        self.session_actions.require_role(SessionRole.ADMIN)
        with allure.step(f"Create event: {event.name}"):
            await self.home_page.go_to_dashboard()
            await self.dashboard_page.verify_dashboard_loaded()
            await self.dashboard_page.fill_event_form(event)
            await self.dashboard_page.submit_event()
            self.factory.track(event)
            try:
                await wait_for_exact_url(self.session.page, self.session.root_url, timeout)
            except WaitTimeoutError as e:
                raise CreationTimeoutError(
                    f"redirect to {self.session.root_url} after creating {event.name!r}",
                    e.timeout_ms,
                ) from e
        logger.info(f"Successfully created event: {event.name}")
        return event

    async def create_unique(self, prefix: str, description: Optional[str] = None) -> str:
        """Create an event named ``<prefix>_<timestamp>``."""
        event = self.factory.event(prefix, description)
        await self.create(event)
        return event.name

    # =========================================================================
    # Read
    # =========================================================================

    async def find_event(self, name: str, timeout: Optional[int] = None) -> Locator:
        """Container of event ``name`` on the current page."""
        return await self.home_page.find_event(name, timeout)

    async def assert_event_absent(self, name: str, timeout: int = 0) -> None:
        """Fail with UnexpectedElementError if event ``name`` is listed."""
        await assert_element_absent(
            self.home_page.event_card(name), timeout, f"event card {name!r}"
        )

    # =========================================================================
    # Delete
    # =========================================================================

    async def delete_event(self, name: str, timeout: Optional[int] = None) -> bool:
        """
        Delete event ``name`` and wait for its container to detach.

        Best-effort: wait and driver failures are logged and swallowed so a
        failed delete never masks a scenario's recorded outcome. Any other
        error propagates.

        Returns:
            True when deletion was confirmed
        """
        with allure.step(f"Delete event: {name}"):
            try:
                card = await self.find_event(name, timeout)
                delete_button = await find_unique(
                    card,
                    self.home_page.delete_button(card),
                    f"delete button of {name!r}",
                )
                await wait_for_element_visible(delete_button, timeout, "delete button")
                await delete_button.click()
                await wait_for_staleness(card, timeout, f"event card {name!r}")
            except (UiAutomationError, PlaywrightError) as e:
                logger.warning(f"Failed to delete event {name}: {e}")
                return False
        self.factory.mark_deleted(name)
        logger.info(f"Successfully deleted event: {name}")
        return True

    # =========================================================================
    # Reserve (RSVP)
    # =========================================================================

    async def reserve_event(self, name: str, timeout: Optional[int] = None) -> None:
        """
        RSVP to event ``name`` as the current (regular) user.

        Raises:
            WaitTimeoutError: Confirmation never shows inside the event card
            UnexpectedElementError: RSVP button still present after confirming
        """
        with allure.step(f"Reserve event: {name}"):
            card = await self.find_event(name, timeout)
            rsvp_button = await wait_for_element(
                card, self.home_page.rsvp_button(card), timeout, f"RSVP button of {name!r}"
            )
            await wait_for_element_visible(rsvp_button, timeout, "RSVP button")
            await rsvp_button.click()
            await wait_for_element(
                card,
                self.home_page.rsvp_confirmation(card),
                timeout,
                f"RSVP confirmation of {name!r}",
            )
            await assert_element_absent(
                self.home_page.rsvp_button(card), 0, f"RSVP button of {name!r}"
            )
        logger.info(f"Regular user reserved a spot for: {name}")

    # =========================================================================
    # Cleanup
    # =========================================================================

    async def cleanup_tracked_events(self) -> List[str]:
        """
        Delete every tracked event not yet deleted (teardown safety net).

        Logs in as admin if needed. Never raises.

        Returns:
            Names that could not be deleted
        """
        pending = self.factory.pending_cleanup()
        if not pending:
            return []

        logger.info(f"Cleaning up {len(pending)} leftover event(s)")
        try:
            await self.session.dialogs.accept_pending()
            if self.session.role != SessionRole.ADMIN:
                await self.session_actions.safe_logout()
                await self.session.context.clear_cookies()
                await self.session_actions.login_as_admin()
            await self.home_page.open()
        except Exception as e:
            logger.warning(f"Cleanup could not log in as admin: {e!r}")
            return [event.name for event in pending]

        leftovers = []
        for event in pending:
            # delete_event only absorbs driver/wait failures; teardown absorbs the rest
            try:
                deleted = await self.delete_event(event.name)
            except Exception as e:
                logger.warning(f"Failed to cleanup event {event.name}: {e!r}")
                deleted = False
            if not deleted:
                leftovers.append(event.name)
        if leftovers:
            logger.warning(f"Leaked events: {leftovers}")
        return leftovers


__all__ = [
    "EventActions",
]
