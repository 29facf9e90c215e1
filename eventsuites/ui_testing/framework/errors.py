"""
================================================================================
UI Automation Errors
================================================================================

Error taxonomy for the UI suite.

    UiAutomationError
    +-- WaitTimeoutError            a wait condition never became true
    |   +-- CreationTimeoutError    event creation did not confirm in time
    +-- AmbiguousLookupError        by-text lookup did not match exactly one node

    AssertionError
    +-- RoleAssertionError          UI contradicts the expected role
    +-- UnexpectedElementError      element present where absence was asserted

Assertion-flavoured errors derive from ``AssertionError`` so pytest reports
them as test failures rather than errors.
================================================================================
"""

from __future__ import annotations

from typing import Optional


class UiAutomationError(Exception):
    """Base class for UI automation failures."""
    pass


class WaitTimeoutError(UiAutomationError):
    """Raised when a wait condition is not met within its timeout."""

    def __init__(self, description: str, timeout_ms: int, detail: Optional[str] = None):
        self.description = description
        self.timeout_ms = timeout_ms
        self.detail = detail
        message = f"Timed out after {timeout_ms}ms waiting for: {description}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class CreationTimeoutError(WaitTimeoutError):
    """Raised when a created resource never confirms (no redirect)."""
    pass


class AmbiguousLookupError(UiAutomationError):
    """Raised when a lookup expected exactly one node but matched another count."""

    def __init__(self, description: str, match_count: int):
        self.description = description
        self.match_count = match_count
        super().__init__(
            f"Expected exactly one match for {description}, found {match_count}"
        )


class RoleAssertionError(AssertionError):
    """Raised when observed UI state contradicts the expected role permissions."""
    pass


class UnexpectedElementError(AssertionError):
    """Raised when an element that must be absent is found."""

    def __init__(self, description: str, match_count: int = 1):
        self.description = description
        self.match_count = match_count
        super().__init__(f"Element should be absent but was found: {description}")


__all__ = [
    "UiAutomationError",
    "WaitTimeoutError",
    "CreationTimeoutError",
    "AmbiguousLookupError",
    "RoleAssertionError",
    "UnexpectedElementError",
]
