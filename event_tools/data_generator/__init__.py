"""
Fixture generation for the Event Manager UI suite.
"""

from .fixture_factory import (
    EventFixture,
    FixtureFactory,
    TrackedEvent,
    UserFixture,
    UserRole,
)

__all__ = [
    "EventFixture",
    "FixtureFactory",
    "TrackedEvent",
    "UserFixture",
    "UserRole",
]
