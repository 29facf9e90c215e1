"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for the Event Manager scenario suite.

Key Features:
- Reachability check: the suite is skipped when the application is down
- One browser session for the whole run, closed regardless of outcomes
- Fresh session state (cookies cleared) before every scenario
- Screenshot / URL / dialog capture on failure
- Teardown cleanup of events a scenario created but did not delete

All async fixtures share the session event loop so the browser opened at
suite setup is usable from every scenario.

================================================================================
"""

from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from loguru import logger

from event_tools.common import get_config
from event_tools.data_generator import FixtureFactory
from eventsuites.ui_testing.flows import EventActions, SessionActions
from eventsuites.ui_testing.framework.browser_manager import BrowserManager, BrowserSession
from eventsuites.ui_testing.framework.locators import LocatorTable
from eventsuites.ui_testing.pages import DashboardPage, HomePage, LoginPage, RegisterPage


# ================================================================================
# Environment
# ================================================================================

@pytest.fixture(scope="session")
def base_url() -> str:
    return get_config("ui.base_url", "http://localhost:3000").rstrip("/")


@pytest.fixture(scope="session")
def app_available(base_url: str) -> str:
    """Skip the scenario suite when the application under test is unreachable."""
    try:
        httpx.get(base_url, timeout=5.0, follow_redirects=True)
    except httpx.HTTPError as e:
        pytest.skip(f"Event Manager app not reachable at {base_url}: {e}")
    return base_url


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def browser_manager(app_available: str) -> AsyncGenerator[BrowserManager, None]:
    """Session-scoped browser, launched before the first scenario."""
    manager = BrowserManager()
    await manager.start()
    yield manager
    await manager.close()


@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def ui_session(browser_manager: BrowserManager, base_url: str) -> BrowserSession:
    """The single browser session every scenario drives."""
    return await browser_manager.open_session(base_url)


@pytest.fixture(scope="session")
def locators() -> LocatorTable:
    return LocatorTable()


@pytest.fixture(scope="session")
def factory() -> FixtureFactory:
    return FixtureFactory()


# ================================================================================
# Page Object and Flow Fixtures
# ================================================================================

@pytest.fixture
def login_page(ui_session: BrowserSession, locators: LocatorTable) -> LoginPage:
    return LoginPage(ui_session, locators)


@pytest.fixture
def register_page(ui_session: BrowserSession, locators: LocatorTable) -> RegisterPage:
    return RegisterPage(ui_session, locators)


@pytest.fixture
def home_page(ui_session: BrowserSession, locators: LocatorTable) -> HomePage:
    return HomePage(ui_session, locators)


@pytest.fixture
def dashboard_page(ui_session: BrowserSession, locators: LocatorTable) -> DashboardPage:
    return DashboardPage(ui_session, locators)


@pytest.fixture
def session_actions(
    ui_session: BrowserSession,
    factory: FixtureFactory,
    locators: LocatorTable,
) -> SessionActions:
    return SessionActions(ui_session, factory, locators)


@pytest.fixture
def event_actions(
    ui_session: BrowserSession,
    session_actions: SessionActions,
    factory: FixtureFactory,
    locators: LocatorTable,
) -> EventActions:
    return EventActions(ui_session, session_actions, factory, locators)


@pytest.fixture
def negative_timeout() -> int:
    """Window for checks that expect an element NOT to show up."""
    return int(get_config("timeouts.negative_check_ms", 3000))


# ================================================================================
# Scenario Lifecycle
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase report on the item (``item.rep_call``) for fixtures."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


@pytest_asyncio.fixture(autouse=True, loop_scope="session")
async def scenario_guard(
    request: pytest.FixtureRequest,
    ui_session: BrowserSession,
    event_actions: EventActions,
) -> AsyncGenerator[None, None]:
    """
    Reset the session before each scenario; capture failures and clean up after.
    """
    await ui_session.reset()
    yield

    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed:
        logger.error(f"Scenario failed: {request.node.name} (url={ui_session.page.url})")
        await ui_session.capture_failure(request.node.name)

    leftovers = await event_actions.cleanup_tracked_events()
    if leftovers:
        logger.warning(f"{request.node.name} leaked events: {leftovers}")
    event_actions.factory.clear()


@pytest_asyncio.fixture(loop_scope="session")
async def as_admin(session_actions: SessionActions) -> AsyncGenerator[SessionActions, None]:
    """Logged in as admin for the scenario; logout afterwards (best-effort)."""
    await session_actions.login_as_admin()
    yield session_actions
    await session_actions.safe_logout()
