import asyncio

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from eventsuites.ui_testing.framework.dialogs import DialogWatcher
from eventsuites.ui_testing.framework.errors import (
    AmbiguousLookupError,
    UnexpectedElementError,
    WaitTimeoutError,
)
from eventsuites.ui_testing.framework.waits import (
    PollConfig,
    assert_element_absent,
    element_appears_within,
    find_unique,
    poll_until,
    wait_for_alert,
    wait_for_element,
    wait_for_element_visible,
    wait_for_exact_url,
    wait_for_staleness,
    wait_for_unique_element,
    wait_for_url,
)
from eventsuites.unit.fakes import FakeContext, FakeDom, FakePage


FAST = PollConfig(interval_ms=5, multiplier=1.0, max_interval_ms=5)


@pytest.fixture
def dom():
    return FakeDom()


@pytest.fixture
def page(dom):
    return FakePage(dom, FakeContext(), url="http://app.test/login")


def later(delay_s, callback):
    asyncio.get_running_loop().call_later(delay_s, callback)


# ---------------------------------------------------------------------------
# poll_until
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_poll_until_returns_first_truthy_value():
    calls = []

    def condition():
        calls.append(1)
        return "ready" if len(calls) == 3 else None

    assert await poll_until(condition, 1000, "third call", FAST) == "ready"
    assert len(calls) == 3


@pytest.mark.asyncio
async def test_poll_until_accepts_async_condition():
    async def condition():
        return 42

    assert await poll_until(condition, 100, "async condition") == 42


@pytest.mark.asyncio
async def test_poll_until_timeout_carries_description():
    with pytest.raises(WaitTimeoutError) as exc_info:
        await poll_until(lambda: False, 30, "never true", FAST)

    assert exc_info.value.description == "never true"
    assert exc_info.value.timeout_ms == 30
    assert "never true" in str(exc_info.value)


@pytest.mark.asyncio
async def test_poll_until_zero_timeout_checks_once():
    calls = []

    def condition():
        calls.append(1)
        return False

    with pytest.raises(WaitTimeoutError):
        await poll_until(condition, 0, "immediate", FAST)
    assert len(calls) == 1


# ---------------------------------------------------------------------------
# URL waits
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_wait_for_url_matches_substring(page):
    later(0.02, lambda: setattr(page, "url", "http://app.test/dashboard"))

    assert await wait_for_url(page, "/dashboard", 500) == "http://app.test/dashboard"


@pytest.mark.asyncio
async def test_wait_for_exact_url_ignores_prefix_matches(page):
    page.url = "http://app.test/login"

    with pytest.raises(WaitTimeoutError):
        await wait_for_exact_url(page, "http://app.test/", 50)


@pytest.mark.asyncio
async def test_url_timeout_reports_url_at_deadline(page):
    later(0.01, lambda: setattr(page, "url", "http://app.test/register"))

    with pytest.raises(WaitTimeoutError) as exc_info:
        await wait_for_url(page, "/dashboard", 80)

    assert "current: http://app.test/register" in exc_info.value.description
    assert "/login" not in exc_info.value.description
    assert exc_info.value.timeout_ms == 80


# ---------------------------------------------------------------------------
# Element waits
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_wait_for_element_returns_once_attached(dom, page):
    later(0.02, lambda: dom.add("#email"))

    element = await wait_for_element(page, "#email", 500)

    assert await element.count() == 1


@pytest.mark.asyncio
async def test_wait_for_element_translates_driver_timeout(page):
    with pytest.raises(WaitTimeoutError) as exc_info:
        await wait_for_element(page, "#missing", 30, "missing field")

    assert "missing field" in exc_info.value.description
    assert isinstance(exc_info.value.__cause__, PlaywrightTimeoutError)


@pytest.mark.asyncio
async def test_wait_for_element_visible_rejects_hidden_node(dom, page):
    dom.add("#hidden", visible=False)

    with pytest.raises(WaitTimeoutError):
        await wait_for_element_visible(page.locator("#hidden"), 30)


@pytest.mark.asyncio
async def test_wait_for_staleness_returns_after_detach(dom, page):
    dom.add("div.card")
    card = page.locator("div.card").first
    later(0.02, lambda: dom.remove("div.card"))

    await wait_for_staleness(card, 500, "card")

    assert await card.count() == 0


@pytest.mark.asyncio
async def test_wait_for_unique_element_rejects_duplicates(dom, page):
    dom.add("h6")
    dom.add("h6")

    with pytest.raises(AmbiguousLookupError) as exc_info:
        await wait_for_unique_element(page, "h6", 100, "event heading")

    assert exc_info.value.match_count == 2


@pytest.mark.asyncio
async def test_find_unique_rejects_zero_matches(page):
    with pytest.raises(AmbiguousLookupError) as exc_info:
        await find_unique(page, "button.delete", "delete button")

    assert exc_info.value.match_count == 0


# ---------------------------------------------------------------------------
# Alerts
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_wait_for_alert_hands_out_dialog(page):
    watcher = DialogWatcher(page)
    later(0.02, lambda: page.emit_dialog("Invalid login credentials"))

    alert = await wait_for_alert(watcher, 500)

    assert alert.text == "Invalid login credentials"
    assert not watcher.has_pending()


@pytest.mark.asyncio
async def test_wait_for_alert_times_out_without_dialog(page):
    with pytest.raises(WaitTimeoutError):
        await wait_for_alert(DialogWatcher(page), 30)


# ---------------------------------------------------------------------------
# Absence checks
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_element_appears_within_reports_late_arrival(dom, page):
    later(0.02, lambda: dom.add('a[href="/dashboard"]'))

    assert await element_appears_within(page.locator('a[href="/dashboard"]'), 500)


@pytest.mark.asyncio
async def test_element_appears_within_false_when_absent(page):
    assert not await element_appears_within(page.locator('a[href="/dashboard"]'), 30)


@pytest.mark.asyncio
async def test_assert_element_absent_passes_when_absent(page):
    await assert_element_absent(page.locator('a[href="/dashboard"]'), 30, "dashboard link")


@pytest.mark.asyncio
async def test_assert_element_absent_fails_on_appearance(dom, page):
    later(0.01, lambda: dom.add('a[href="/dashboard"]'))

    with pytest.raises(UnexpectedElementError) as exc_info:
        await assert_element_absent(page.locator('a[href="/dashboard"]'), 500, "dashboard link")

    assert exc_info.value.description == "dashboard link"
    assert exc_info.value.match_count == 1


@pytest.mark.asyncio
async def test_absence_check_does_not_swallow_driver_errors(dom, page):
    dom.broken['a[href="/dashboard"]'] = "Target page, context or browser has been closed"

    with pytest.raises(PlaywrightError):
        await assert_element_absent(page.locator('a[href="/dashboard"]'), 30)
