"""
================================================================================
Locator Table
================================================================================

Named semantic locators for the Event Manager UI.

Scenarios and page objects address elements by role ("logout_button",
"event_delete_button"), never by raw selector, so a UI copy change touches
this table only.

Features:
    - Primary selector plus optional fallbacks, combined with ``Locator.or_``
    - Templated entries for per-event lookups (exact heading text)
    - Per-environment overrides from the ``locators`` config section

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple, Union

from loguru import logger
from playwright.async_api import Locator, Page

from event_tools.common import ConfigLoader


def xpath_literal(value: str) -> str:
    """Quote ``value`` as an XPath 1.0 string literal."""
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    parts = value.split('"')
    return "concat(" + ", '\"', ".join(f'"{part}"' for part in parts) + ")"


@dataclass(frozen=True)
class LocatorSpec:
    """
    A named locator.

    Attributes:
        name: Semantic role of the element
        primary: Preferred selector (Playwright selector syntax)
        fallbacks: Alternative selectors tried alongside the primary
        description: Human-readable name for logs and reports
    """
    name: str
    primary: str
    fallbacks: Tuple[str, ...] = ()
    description: str = ""

    def render(self, **params: str) -> "LocatorSpec":
        """Fill ``{placeholders}`` in every selector."""
        if not params:
            return self
        return replace(
            self,
            primary=self.primary.format(**params),
            fallbacks=tuple(fb.format(**params) for fb in self.fallbacks),
        )

    @property
    def label(self) -> str:
        return self.description or self.name


def _spec(name: str, primary: str, description: str, *fallbacks: str) -> LocatorSpec:
    return LocatorSpec(name=name, primary=primary, fallbacks=tuple(fallbacks), description=description)


class LocatorTable:
    """
    Registry of named locators.

    Usage:
        >>> table = LocatorTable()
        >>> table.selector("logout_button")
        'button:text-is("Logout")'
        >>> card = table.resolve(page, "event_card", **table.event_params("Smoke Test Event_1"))
        >>> table.resolve(card, "event_delete_button")
    """

    LOCATORS: Dict[str, LocatorSpec] = {
        spec.name: spec
        for spec in (
            # Navigation
            _spec("register_link", 'a[href="/register"]', "register link"),
            _spec("login_link", 'a[href="/login"]', "login link"),
            _spec("dashboard_link", 'a[href="/dashboard"]', "dashboard link"),
            _spec("logout_button", 'button:text-is("Logout")', "logout button"),

            # Login form (fields are only distinguishable by input type)
            _spec("login_heading", 'h5:text-is("Login")', "login heading"),
            _spec("login_identifier_input", 'input[type="text"]', "login email input"),
            _spec("login_password_input", 'input[type="password"]', "login password input"),
            _spec("login_submit_button", 'button:text-is("Login")', "login button"),

            # Registration form
            _spec("register_heading", 'h5:text-is("Register")', "register heading"),
            _spec("register_username_input", "#username", "username input"),
            _spec("register_email_input", "#email", "email input"),
            _spec("register_password_input", "#password", "password input"),
            _spec("register_confirm_password_input", "#confirmPassword", "confirm password input"),
            _spec("register_submit_button", 'button[type="submit"]', "register button"),
            _spec(
                "registration_error",
                'xpath=//div[contains(text(), "Registration failed.")]',
                "registration failure message",
            ),

            # Dashboard event creation form
            _spec("create_event_heading", 'h4:text-is("Create New Event")', "create event heading"),
            _spec("event_name_input", 'input[name="name"]', "event name input"),
            _spec("event_description_input", 'textarea[name="description"]', "event description input"),
            _spec("event_date_input", 'input[type="date"]', "event date input"),
            _spec("event_time_input", 'input[type="time"]', "event time input"),
            _spec("event_location_input", 'input[name="location"]', "event location input"),
            _spec("create_event_button", 'button:text-is("Create Event")', "create event button"),

            # Event list (root route); card entries take event_name=xpath_literal(...)
            _spec("event_heading", "xpath=//h6[text()={event_name}]", "event heading"),
            _spec("event_card", "xpath=//div[h6[text()={event_name}]]/..", "event card"),
            _spec("event_delete_button", 'button:has-text("Delete")', "event delete button"),
            _spec("event_rsvp_button", 'button:has-text("RSVP")', "event RSVP button"),
            _spec(
                "event_rsvp_confirmation",
                'p:has-text("You have RSVPed to this event.")',
                "RSVP confirmation",
            ),
        )
    }

    def __init__(self, overrides: Optional[Dict[str, Union[str, List[str]]]] = None):
        """
        Args:
            overrides: name -> selector, or name -> [primary, *fallbacks].
                Defaults to the ``locators`` config section.
        """
        if overrides is None:
            overrides = ConfigLoader().get_section("locators")
        self._specs: Dict[str, LocatorSpec] = dict(self.LOCATORS)
        for name, selectors in overrides.items():
            if name not in self._specs:
                logger.warning(f"Ignoring override for unknown locator: {name}")
                continue
            if isinstance(selectors, str):
                selectors = [selectors]
            self._specs[name] = replace(
                self._specs[name],
                primary=selectors[0],
                fallbacks=tuple(selectors[1:]),
            )
            logger.debug(f"Locator override: {name} -> {selectors}")

    def spec(self, name: str, **params: str) -> LocatorSpec:
        try:
            spec = self._specs[name]
        except KeyError:
            raise KeyError(f"Unknown locator: {name}") from None
        return spec.render(**params)

    def selector(self, name: str, **params: str) -> str:
        """Primary selector for ``name``."""
        return self.spec(name, **params).primary

    def resolve(self, scope: Union[Page, Locator], name: str, **params: str) -> Locator:
        """
        Build a Playwright Locator for ``name`` within ``scope``.

        Fallback selectors are OR-ed with the primary, so the locator matches
        whichever variant the current build renders.
        """
        spec = self.spec(name, **params)
        locator = scope.locator(spec.primary)
        for fallback in spec.fallbacks:
            locator = locator.or_(scope.locator(fallback))
        return locator

    def event_params(self, event_name: str) -> Dict[str, str]:
        return {"event_name": xpath_literal(event_name)}

    def names(self) -> Tuple[str, ...]:
        return tuple(self._specs)


__all__ = [
    "LocatorSpec",
    "LocatorTable",
    "xpath_literal",
]
