"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based synchronization layer for the Event Manager UI suite.

Components:
    - errors: Error taxonomy (timeouts, role and absence assertions)
    - waits: Wait primitives and explicit absence assertion
    - dialogs: Native alert capture
    - locators: Named locator table
    - browser_manager: Browser lifecycle and the per-suite BrowserSession
    - page_base: Base page object

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_manager import BrowserManager, BrowserSession, SessionRole
from .dialogs import AlertHandle, DialogWatcher
from .errors import (
    AmbiguousLookupError,
    CreationTimeoutError,
    RoleAssertionError,
    UiAutomationError,
    UnexpectedElementError,
    WaitTimeoutError,
)
from .locators import LocatorSpec, LocatorTable, xpath_literal
from .page_base import BasePage

__all__ = [
    "AlertHandle",
    "AmbiguousLookupError",
    "BasePage",
    "BrowserManager",
    "BrowserSession",
    "CreationTimeoutError",
    "DialogWatcher",
    "LocatorSpec",
    "LocatorTable",
    "RoleAssertionError",
    "SessionRole",
    "UiAutomationError",
    "UnexpectedElementError",
    "WaitTimeoutError",
    "xpath_literal",
]
