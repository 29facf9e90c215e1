"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the entire test suite.
It registers common markers and tags tests by the directory they live in.

================================================================================
"""

import pytest

from event_tools.common import ConfigLoader, get_config


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests simulating user flows"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: Browser-driven scenario tests (need the running app)"
    )
    config.addinivalue_line(
        "markers", "unit: Framework tests against in-memory page doubles"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "auth: Tests related to login and logout"
    )
    config.addinivalue_line(
        "markers", "registration: Tests related to account registration"
    )
    config.addinivalue_line(
        "markers", "dashboard: Tests related to the admin dashboard"
    )
    config.addinivalue_line(
        "markers", "events: Tests related to event management"
    )
    config.addinivalue_line(
        "markers", "rsvp: Tests related to event reservations"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify collected test items.

    Adds the domain marker matching the directory a test lives in.
    """
    for item in items:
        # Auto-add 'ui' marker to tests in ui_testing directory
        if "ui_testing" in str(item.fspath):
            item.add_marker(pytest.mark.ui)

        # Auto-add 'unit' marker to tests in unit directory
        if "unit" in item.path.parts:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Event Manager UI Automation Suite",
        f"Target: {get_config('ui.base_url', 'http://localhost:3000')} "
        f"(from {ConfigLoader().source('ui.base_url')})",
        f"Config: {ConfigLoader().path}",
        "=" * 60,
        "",
    ]
