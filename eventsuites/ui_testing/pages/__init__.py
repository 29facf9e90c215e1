"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the Event Manager pages.

Each page class encapsulates:
    - Its route and heading
    - Page-specific actions
    - Verification helpers

Author: Automation Team
License: MIT
================================================================================
"""

from .dashboard_page import DashboardPage
from .home_page import HomePage
from .login_page import LoginPage
from .register_page import RegisterPage

__all__ = [
    "DashboardPage",
    "HomePage",
    "LoginPage",
    "RegisterPage",
]
