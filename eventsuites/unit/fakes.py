"""
================================================================================
In-Memory Page Doubles
================================================================================

Minimal stand-ins for the slice of the Playwright async API the framework
uses: Page, Locator, BrowserContext and Dialog.

The "DOM" is a dict from selector key to nodes. Page-level locators use the
selector itself as key; a scoped locator joins keys with `` >> `` the way
Playwright chains selectors, so ``card.locator("button")`` looks up
``"<card selector> >> button"``.

================================================================================
"""

from __future__ import annotations

import asyncio
import inspect
from collections import defaultdict
from typing import Callable, Dict, List, Optional, Tuple

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from event_tools.data_generator import FixtureFactory
from eventsuites.ui_testing.framework.browser_manager import BrowserSession
from eventsuites.ui_testing.framework.locators import LocatorTable


class FakeNode:
    def __init__(self, text: str = "", visible: bool = True, on_click: Optional[Callable] = None):
        self.text = text
        self.visible = visible
        self.on_click = on_click
        self.value = ""
        self.clicks = 0


class FakeDom:
    def __init__(self):
        self.nodes: Dict[str, List[FakeNode]] = defaultdict(list)
        self.broken: Dict[str, str] = {}

    def add(self, key: str, node: Optional[FakeNode] = None, **kwargs) -> FakeNode:
        node = node or FakeNode(**kwargs)
        self.nodes[key].append(node)
        return node

    def remove(self, key: str) -> None:
        """Drop ``key`` and everything scoped under it."""
        for existing in list(self.nodes):
            if existing == key or existing.startswith(f"{key} >> "):
                del self.nodes[existing]

    def matching(self, keys: Tuple[str, ...]) -> List[FakeNode]:
        for key in keys:
            if key in self.broken:
                raise PlaywrightError(self.broken[key])
        return [node for key in keys for node in self.nodes.get(key, [])]


class FakeLocator:
    def __init__(self, dom: FakeDom, keys: Tuple[str, ...], first: bool = False):
        self.dom = dom
        self.keys = keys
        self._first = first

    def __repr__(self) -> str:
        return f"FakeLocator({' | '.join(self.keys)})"

    def _nodes(self) -> List[FakeNode]:
        nodes = self.dom.matching(self.keys)
        return nodes[:1] if self._first else nodes

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(self.dom, self.keys, first=True)

    def locator(self, selector: str) -> "FakeLocator":
        return FakeLocator(self.dom, tuple(f"{key} >> {selector}" for key in self.keys))

    def or_(self, other: "FakeLocator") -> "FakeLocator":
        return FakeLocator(self.dom, self.keys + other.keys, self._first)

    async def count(self) -> int:
        return len(self._nodes())

    def _in_state(self, state: str) -> bool:
        nodes = self._nodes()
        if state == "attached":
            return bool(nodes)
        if state == "visible":
            return any(node.visible for node in nodes)
        if state == "detached":
            return not nodes
        raise ValueError(f"Unsupported state: {state}")

    async def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + (timeout or 0) / 1000
        while not self._in_state(state):
            if loop.time() >= deadline:
                raise PlaywrightTimeoutError(
                    f"Locator.wait_for: Timeout {timeout}ms exceeded waiting for {self!r} to be {state}"
                )
            await asyncio.sleep(0.005)

    def _target(self) -> FakeNode:
        nodes = self._nodes()
        if not nodes:
            raise PlaywrightError(f"No element for {self!r}")
        return nodes[0]

    async def click(self) -> None:
        node = self._target()
        node.clicks += 1
        if node.on_click:
            result = node.on_click()
            if inspect.isawaitable(result):
                await result

    async def fill(self, value: str) -> None:
        self._target().value = value

    async def clear(self) -> None:
        self._target().value = ""

    async def inner_text(self) -> str:
        return self._target().text


class FakeDialog:
    def __init__(self, message: str, type: str = "alert"):
        self.message = message
        self.type = type
        self.accepted = False
        self.dismissed = False
        self.prompt_text: Optional[str] = None

    async def accept(self, prompt_text: Optional[str] = None) -> None:
        self.accepted = True
        self.prompt_text = prompt_text

    async def dismiss(self) -> None:
        self.dismissed = True


class FakeContext:
    def __init__(self):
        self.cookie_clears = 0

    async def clear_cookies(self) -> None:
        self.cookie_clears += 1


class FakePage:
    def __init__(self, dom: FakeDom, context: FakeContext, url: str = "about:blank"):
        self.dom = dom
        self.context = context
        self.url = url
        self.visits: List[str] = []
        self.handlers: Dict[str, List[Callable]] = defaultdict(list)
        self.screenshot_error: Optional[str] = None

    def on(self, event: str, handler: Callable) -> None:
        self.handlers[event].append(handler)

    def emit_dialog(self, message: str, type: str = "alert") -> FakeDialog:
        dialog = FakeDialog(message, type)
        for handler in self.handlers["dialog"]:
            handler(dialog)
        return dialog

    async def goto(self, url: str, wait_until: str = "load") -> None:
        self.url = url
        self.visits.append(url)

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self.dom, (selector,))

    async def screenshot(self, full_page: bool = False) -> bytes:
        if self.screenshot_error:
            raise PlaywrightError(self.screenshot_error)
        return b"\x89PNG fake"


class FakeApp:
    """
    A scripted Event Manager: login, logout, dashboard, event cards.

    Elements are keyed by the real LocatorTable selectors, so page objects
    and flows run unchanged against it.
    """

    BASE_URL = "http://app.test"

    # False: the create form submits but the app never redirects
    redirect_after_create = True

    def __init__(self):
        self.locators = LocatorTable(overrides={})
        self.factory = FixtureFactory()
        self.dom = FakeDom()
        self.context = FakeContext()
        self.page = FakePage(self.dom, self.context)
        self.session = BrowserSession(self.context, self.page, self.BASE_URL)
        self.created: List[str] = []
        admin = self.factory.admin_user()
        regular = self.factory.registered_user()
        # Server-side accounts, fixed at start like a seeded database
        self.accounts: Dict[str, Tuple[str, str]] = {
            admin.email: (admin.password, "admin"),
            regular.email: (regular.password, "regular"),
        }
        self._render_login_form()

    # -- keys ---------------------------------------------------------------

    def key(self, name: str, scope: Optional[str] = None, **params: str) -> str:
        selector = self.locators.selector(name, **params)
        return f"{scope} >> {selector}" if scope else selector

    def card_key(self, event_name: str) -> str:
        return self.key("event_card", **self.locators.event_params(event_name))

    def show(self, name: str, scope: Optional[str] = None, **kwargs) -> FakeNode:
        return self.dom.add(self.key(name, scope), **kwargs)

    def hide(self, name: str, scope: Optional[str] = None) -> None:
        self.dom.remove(self.key(name, scope))

    def has(self, name: str, scope: Optional[str] = None) -> bool:
        return bool(self.dom.nodes.get(self.key(name, scope)))

    # -- screens ------------------------------------------------------------

    def _render_login_form(self) -> None:
        self.show("login_heading")
        self.show("login_identifier_input")
        self.show("login_password_input")
        self.show("login_submit_button", on_click=self._submit_login)

    def _submit_login(self) -> None:
        email = self.field_value("login_identifier_input")
        password = self.field_value("login_password_input")
        expected_password, role = self.accounts.get(email, (None, None))
        if role is None or password != expected_password:
            self.page.emit_dialog("Invalid login credentials")
            return
        self.page.url = f"{self.BASE_URL}/"
        self.show("logout_button", on_click=self._logout)
        if role == "admin":
            self.show("dashboard_link", on_click=self._open_dashboard)

    def _logout(self) -> None:
        self.hide("logout_button")
        self.hide("dashboard_link")
        self.page.url = f"{self.BASE_URL}/login"

    def _open_dashboard(self) -> None:
        self.page.url = f"{self.BASE_URL}/dashboard"
        if self.has("create_event_heading"):
            return
        self.show("create_event_heading")
        for name in (
            "event_name_input",
            "event_description_input",
            "event_date_input",
            "event_time_input",
            "event_location_input",
        ):
            self.show(name)
        self.show("create_event_button", on_click=self._submit_event)

    def _submit_event(self) -> None:
        name = self.dom.nodes[self.key("event_name_input")][0].value
        self.created.append(name)
        if self.redirect_after_create:
            self.add_event(name, admin=True)
            self.page.url = f"{self.BASE_URL}/"

    def add_event(self, name: str, admin: bool = False, rsvp: bool = True) -> str:
        card = self.card_key(name)
        self.dom.add(card)
        if admin:
            self.show("event_delete_button", scope=card, on_click=lambda: self.dom.remove(card))
        elif rsvp:
            self.show(
                "event_rsvp_button",
                scope=card,
                on_click=lambda: self._confirm_rsvp(card),
            )
        return card

    def _confirm_rsvp(self, card: str) -> None:
        self.hide("event_rsvp_button", scope=card)
        self.show("event_rsvp_confirmation", scope=card)

    def field_value(self, name: str) -> str:
        return self.dom.nodes[self.key(name)][0].value
