"""
================================================================================
Wait Primitives
================================================================================

Blocking helpers that suspend a scenario until the UI reaches a state or a
timeout elapses.

Features:
    - Generic async polling loop with backoff (``poll_until``)
    - URL, element presence, visibility and staleness waits
    - Native alert wait backed by ``DialogWatcher``
    - Explicit absence assertion for role-negative checks

Every timeout surfaces as ``WaitTimeoutError`` carrying the condition
description. Playwright's own ``TimeoutError`` is translated here; any other
driver error propagates untouched.

Usage:
    await wait_for_url(page, "/login")
    button = await wait_for_element(page, 'button:text-is("Login")')
    await wait_for_element_visible(button)
    await assert_element_absent(page.locator('a[href="/dashboard"]'))

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar, Union

import allure
from loguru import logger
from playwright.async_api import Locator, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from event_tools.common import get_config

from .dialogs import AlertHandle, DialogWatcher
from .errors import AmbiguousLookupError, UnexpectedElementError, WaitTimeoutError


T = TypeVar("T")

DEFAULT_TIMEOUT_MS = 10000


@dataclass
class PollConfig:
    """
    Polling cadence.

    Attributes:
        interval_ms: First sleep between checks
        multiplier: Backoff multiplier applied after each miss
        max_interval_ms: Upper bound for the sleep between checks
    """
    interval_ms: int = 100
    multiplier: float = 1.5
    max_interval_ms: int = 500


def default_timeout() -> int:
    """Default wait timeout in milliseconds (``timeouts.default_ms``)."""
    return int(get_config("timeouts.default_ms", DEFAULT_TIMEOUT_MS))


def _resolve_timeout(timeout: Optional[int]) -> int:
    return default_timeout() if timeout is None else int(timeout)


def _driver_timeout(timeout: int) -> int:
    # Playwright treats 0 as "wait forever"
    return max(timeout, 1)


async def poll_until(
    condition: Callable[[], Union[T, Awaitable[T]]],
    timeout: Optional[int] = None,
    description: str = "condition",
    config: Optional[PollConfig] = None,
) -> T:
    """
    Poll ``condition`` until it returns a truthy value.

    The condition is always evaluated at least once, so ``timeout=0``
    performs a single immediate check.

    Args:
        condition: Sync or async callable; its truthy result is returned
        timeout: Timeout in milliseconds (defaults to ``timeouts.default_ms``)
        description: Human-readable condition for logs and errors
        config: Polling cadence

    Returns:
        The first truthy value produced by ``condition``

    Raises:
        WaitTimeoutError: If the condition stays falsy until the deadline
    """
    timeout = _resolve_timeout(timeout)
    config = config or PollConfig(
        interval_ms=int(get_config("timeouts.poll_interval_ms", 100))
    )
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout / 1000
    interval = config.interval_ms / 1000
    attempt = 0

    while True:
        attempt += 1
        result = condition()
        if inspect.isawaitable(result):
            result = await result
        if result:
            logger.debug(f"Condition met after {attempt} attempt(s): {description}")
            return result

        remaining = deadline - loop.time()
        if remaining <= 0:
            raise WaitTimeoutError(description, timeout, detail=f"{attempt} attempts")

        await asyncio.sleep(min(interval, remaining))
        interval = min(interval * config.multiplier, config.max_interval_ms / 1000)


# =============================================================================
# URL Waits
# =============================================================================

async def _poll_url(
    page: Page,
    matches: Callable[[str], bool],
    timeout: Optional[int],
    description: str,
) -> str:
    try:
        return await poll_until(
            lambda: page.url if matches(page.url) else None,
            timeout,
            description,
        )
    except WaitTimeoutError as e:
        # Report where the browser ended up, not where it started
        raise WaitTimeoutError(
            f"{description} (current: {page.url})", e.timeout_ms, e.detail
        ) from e


async def wait_for_url(page: Page, pattern: str, timeout: Optional[int] = None) -> str:
    """
    Wait until the current URL contains ``pattern``.

    Returns:
        The matching URL
    """
    with allure.step(f"Wait for URL containing: {pattern}"):
        return await _poll_url(
            page,
            lambda current: pattern in current,
            timeout,
            f"URL containing {pattern!r}",
        )


async def wait_for_exact_url(page: Page, url: str, timeout: Optional[int] = None) -> str:
    """Wait until the current URL equals ``url``."""
    with allure.step(f"Wait for URL: {url}"):
        return await _poll_url(
            page,
            lambda current: current == url,
            timeout,
            f"URL equal to {url!r}",
        )


# =============================================================================
# Element Waits
# =============================================================================

def _as_locator(scope: Union[Page, Locator], target: Union[str, Locator]) -> Locator:
    if isinstance(target, str):
        return scope.locator(target)
    return target


async def _wait_for_state(
    element: Locator,
    state: str,
    timeout: Optional[int],
    description: str,
) -> None:
    timeout = _resolve_timeout(timeout)
    try:
        await element.wait_for(state=state, timeout=_driver_timeout(timeout))
    except PlaywrightTimeoutError as e:
        raise WaitTimeoutError(description, timeout) from e


async def wait_for_element(
    scope: Union[Page, Locator],
    target: Union[str, Locator],
    timeout: Optional[int] = None,
    description: Optional[str] = None,
) -> Locator:
    """
    Wait until an element matching ``target`` is attached to the document.

    Args:
        scope: Page, or a Locator to search within
        target: Selector string or Locator
        timeout: Timeout in milliseconds
        description: Name used in logs and errors (defaults to the selector)

    Returns:
        Locator pinned to the first match
    """
    element = _as_locator(scope, target).first
    description = description or str(target)
    await _wait_for_state(element, "attached", timeout, f"element {description}")
    logger.debug(f"Element located: {description}")
    return element


async def wait_for_element_visible(
    element: Locator,
    timeout: Optional[int] = None,
    description: str = "element",
) -> Locator:
    """Wait until ``element`` is attached and rendered visible."""
    await _wait_for_state(element, "visible", timeout, f"{description} to be visible")
    return element


async def wait_for_staleness(
    element: Locator,
    timeout: Optional[int] = None,
    description: str = "element",
) -> None:
    """Wait until ``element`` is detached from the document."""
    await _wait_for_state(element, "detached", timeout, f"{description} to be detached")
    logger.debug(f"Element detached: {description}")


async def wait_for_unique_element(
    scope: Union[Page, Locator],
    target: Union[str, Locator],
    timeout: Optional[int] = None,
    description: Optional[str] = None,
) -> Locator:
    """
    Wait for ``target`` to appear, then require exactly one match.

    Raises:
        WaitTimeoutError: Nothing matched within the timeout
        AmbiguousLookupError: More than one node matched
    """
    locator = _as_locator(scope, target)
    description = description or str(target)
    await wait_for_element(scope, locator, timeout, description)
    count = await locator.count()
    if count != 1:
        raise AmbiguousLookupError(description, count)
    return locator.first


async def find_unique(
    scope: Union[Page, Locator],
    target: Union[str, Locator],
    description: Optional[str] = None,
) -> Locator:
    """Immediate lookup that must match exactly one node."""
    locator = _as_locator(scope, target)
    count = await locator.count()
    if count != 1:
        raise AmbiguousLookupError(description or str(target), count)
    return locator.first


# =============================================================================
# Native Alerts
# =============================================================================

async def wait_for_alert(
    dialogs: DialogWatcher,
    timeout: Optional[int] = None,
) -> AlertHandle:
    """
    Wait until a native alert/confirm dialog is open.

    Returns:
        AlertHandle exposing ``text``, ``accept()`` and ``dismiss()``
    """
    with allure.step("Wait for native alert"):
        await poll_until(dialogs.has_pending, timeout, "native alert dialog")
        return dialogs.pop()


# =============================================================================
# Absence Checks
# =============================================================================

async def element_appears_within(
    locator: Locator,
    timeout: int = 0,
    description: str = "element",
) -> bool:
    """
    Report whether ``locator`` matches anything within ``timeout`` ms.

    ``timeout=0`` checks the current document once. Only the polling
    timeout maps to ``False``; driver errors propagate.
    """
    async def has_match() -> bool:
        return await locator.count() > 0

    try:
        await poll_until(has_match, timeout, description)
    except WaitTimeoutError:
        return False
    return True


async def assert_element_absent(
    locator: Locator,
    timeout: int = 0,
    description: str = "element",
) -> None:
    """
    Assert that ``locator`` matches nothing for the whole ``timeout`` window.

    Raises:
        UnexpectedElementError: The element is present or shows up in time
    """
    with allure.step(f"Verify absent: {description}"):
        if await element_appears_within(locator, timeout, description):
            raise UnexpectedElementError(description, await locator.count())
        logger.info(f"Verified absent: {description}")


__all__ = [
    "DEFAULT_TIMEOUT_MS",
    "PollConfig",
    "default_timeout",
    "poll_until",
    "wait_for_url",
    "wait_for_exact_url",
    "wait_for_element",
    "wait_for_element_visible",
    "wait_for_staleness",
    "wait_for_unique_element",
    "find_unique",
    "wait_for_alert",
    "element_appears_within",
    "assert_element_absent",
]
