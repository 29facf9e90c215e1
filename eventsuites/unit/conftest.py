"""
================================================================================
Unit Test Configuration
================================================================================

Fixtures for offline framework tests. Timeouts are shrunk through the
environment override layer so failing waits resolve in milliseconds.

================================================================================
"""

from typing import Generator

import pytest

from event_tools.common import ConfigLoader
from eventsuites.ui_testing.flows import EventActions, SessionActions
from eventsuites.ui_testing.pages import DashboardPage, HomePage, LoginPage, RegisterPage
from eventsuites.unit.fakes import FakeApp


@pytest.fixture(autouse=True)
def fast_timeouts(monkeypatch) -> None:
    monkeypatch.setenv("TIMEOUTS_DEFAULT_MS", "300")
    monkeypatch.setenv("TIMEOUTS_NEGATIVE_CHECK_MS", "50")
    monkeypatch.setenv("TIMEOUTS_ERROR_MESSAGE_MS", "50")
    monkeypatch.setenv("TIMEOUTS_POLL_INTERVAL_MS", "5")


@pytest.fixture(autouse=True)
def fresh_config() -> Generator[None, None, None]:
    """Tests may point the singleton at a temp file; never leak it."""
    yield
    ConfigLoader.reset()


@pytest.fixture
def app() -> FakeApp:
    return FakeApp()


@pytest.fixture
def login_page(app: FakeApp) -> LoginPage:
    return LoginPage(app.session, app.locators)


@pytest.fixture
def register_page(app: FakeApp) -> RegisterPage:
    return RegisterPage(app.session, app.locators)


@pytest.fixture
def home_page(app: FakeApp) -> HomePage:
    return HomePage(app.session, app.locators)


@pytest.fixture
def dashboard_page(app: FakeApp) -> DashboardPage:
    return DashboardPage(app.session, app.locators)


@pytest.fixture
def session_actions(app: FakeApp) -> SessionActions:
    return SessionActions(app.session, app.factory, app.locators)


@pytest.fixture
def event_actions(app: FakeApp, session_actions: SessionActions) -> EventActions:
    return EventActions(app.session, session_actions, app.factory, app.locators)
