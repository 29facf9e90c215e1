"""
Event Manager Autotest Tools

Supporting utilities for the UI suite: configuration, logging, fixture
generation and Allure reporting.
"""

__version__ = "1.0.0"
