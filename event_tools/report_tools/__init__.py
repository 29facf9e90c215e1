"""
Allure reporting helpers.
"""

from .allure_utils import (
    attach_failure_bundle,
    attach_json,
    attach_png,
    attach_text,
)

__all__ = [
    "attach_failure_bundle",
    "attach_json",
    "attach_png",
    "attach_text",
]
