"""
================================================================================
Fixture Factory
================================================================================

This module provides the user and event fixtures driven through the UI.

Features:
- Seeded identities (admin, registered user, unregistered user) read from config
- Timestamp-suffixed unique identities for registration tests
- Timestamp-suffixed unique event names (lookups match exact visible text)
- Tracking of created events so teardown can clean up leftovers

================================================================================
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Optional

from loguru import logger

from event_tools.common import get_config


# ================================================================================
# Data Models
# ================================================================================

class UserRole(str, Enum):
    """Role implied by the server-side seed data."""
    ADMIN = "admin"
    REGULAR = "regular"
    UNREGISTERED = "unregistered"
    NEW = "new"


@dataclass(frozen=True)
class UserFixture:
    """A user identity typed into the registration and login forms."""
    username: str
    email: str
    password: str
    confirm_password: str
    role: UserRole = UserRole.REGULAR


@dataclass(frozen=True)
class EventFixture:
    """An event typed into the dashboard creation form."""
    name: str
    description: str = "Test event description"
    date: str = "31/12/2023"
    time: str = "12:00"
    location: str = "Test Location"


@dataclass
class TrackedEvent:
    """Event created during a scenario, pending deletion."""
    event: EventFixture
    created_at: datetime = field(default_factory=datetime.now)
    deleted: bool = False


# ================================================================================
# Factory
# ================================================================================

class FixtureFactory:
    """
    Builds user and event fixtures.

    Seeded identities come from the ``users`` config section so every
    environment can point the suite at its own seed data. Generated
    identities and event names carry a millisecond timestamp suffix that
    is strictly increasing within one factory.

    Usage:
        factory = FixtureFactory()
        admin = factory.admin_user()
        event = factory.event("Smoke Test Event")
        # event.name == "Smoke Test Event_1735603200123"
    """

    _DEFAULT_USERS: Dict[str, Dict[str, str]] = {
        "admin": {
            "username": "adminUser",
            "email": "adminemail@edges.com",
            "password": "adminpassword123",
        },
        "regular": {
            "username": "testuser",
            "email": "testemail@gmail.com",
            "password": "testpassword123",
        },
        "unregistered": {
            "username": "unregisteredUser",
            "email": "unregemail@edges.com",
            "password": "unregpassword123",
        },
    }

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        """
        Args:
            clock: Returns seconds since epoch. Defaults to ``time.time``.
        """
        self._clock = clock or time.time
        self._last_suffix = 0
        self._tracked: List[TrackedEvent] = []

    # ------------------------------------------------------------------
    # Unique suffixes
    # ------------------------------------------------------------------

    def unique_suffix(self) -> int:
        """Millisecond timestamp, bumped when two calls land on the same ms."""
        suffix = int(self._clock() * 1000)
        if suffix <= self._last_suffix:
            suffix = self._last_suffix + 1
        self._last_suffix = suffix
        return suffix

    def unique_name(self, prefix: str) -> str:
        return f"{prefix}_{self.unique_suffix()}"

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def _seeded_user(self, key: str, role: UserRole) -> UserFixture:
        defaults = self._DEFAULT_USERS[key]
        username = get_config(f"users.{key}.username", defaults["username"])
        email = get_config(f"users.{key}.email", defaults["email"])
        password = get_config(f"users.{key}.password", defaults["password"])
        return UserFixture(
            username=username,
            email=email,
            password=password,
            confirm_password=password,
            role=role,
        )

    def admin_user(self) -> UserFixture:
        return self._seeded_user("admin", UserRole.ADMIN)

    def registered_user(self) -> UserFixture:
        return self._seeded_user("regular", UserRole.REGULAR)

    def unregistered_user(self) -> UserFixture:
        return self._seeded_user("unregistered", UserRole.UNREGISTERED)

    def wrong_password_user(self) -> UserFixture:
        """Registered identity with a password the server must reject."""
        password = get_config("users.wrong_password.password", "wrongpassword123")
        return replace(
            self.registered_user(),
            password=password,
            confirm_password=password,
        )

    def empty_user(self) -> UserFixture:
        return UserFixture(
            username="",
            email="",
            password="",
            confirm_password="",
            role=UserRole.UNREGISTERED,
        )

    def new_user(
        self,
        prefix: str = "testuser",
        domain: str = "example.com",
        password: str = "testpassword123",
    ) -> UserFixture:
        """Fresh identity that does not exist server-side yet."""
        suffix = self.unique_suffix()
        return UserFixture(
            username=f"{prefix}_{suffix}",
            email=f"{prefix}_{suffix}@{domain}",
            password=password,
            confirm_password=password,
            role=UserRole.NEW,
        )

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def event(self, prefix: str, description: Optional[str] = None) -> EventFixture:
        """Event with a unique name built from ``prefix``."""
        return self.event_named(self.unique_name(prefix), description)

    def event_named(self, name: str, description: Optional[str] = None) -> EventFixture:
        """Event called exactly ``name``; other fields from the ``event`` config."""
        return EventFixture(
            name=name,
            description=description or get_config(
                "event.description", "Test event description"
            ),
            date=get_config("event.date", "31/12/2023"),
            time=get_config("event.time", "12:00"),
            location=get_config("event.location", "Test Location"),
        )

    # ------------------------------------------------------------------
    # Tracking
    # ------------------------------------------------------------------

    def track(self, event: EventFixture) -> TrackedEvent:
        tracked = TrackedEvent(event=event)
        self._tracked.append(tracked)
        logger.debug(f"Tracking event for cleanup: {event.name}")
        return tracked

    def mark_deleted(self, name: str) -> None:
        for tracked in self._tracked:
            if tracked.event.name == name:
                tracked.deleted = True

    def pending_cleanup(self) -> List[EventFixture]:
        """Tracked events not yet deleted, newest first."""
        return [t.event for t in reversed(self._tracked) if not t.deleted]

    def clear(self) -> None:
        self._tracked.clear()

    @property
    def tracked_count(self) -> int:
        return len(self._tracked)


__all__ = [
    "UserRole",
    "UserFixture",
    "EventFixture",
    "TrackedEvent",
    "FixtureFactory",
]
