"""
================================================================================
User Journeys
================================================================================

Composite flows built from page objects and wait primitives.

    - session_flows: login / logout and role assertions
    - event_flows: event create / find / delete / reserve and cleanup

================================================================================
"""

from .event_flows import EventActions
from .session_flows import SessionActions

__all__ = [
    "EventActions",
    "SessionActions",
]
