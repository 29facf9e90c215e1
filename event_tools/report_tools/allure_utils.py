"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers used by UI failure capture.

Features:
- Text / JSON / PNG attachment helpers
- Failure bundle: screenshot, current URL, captured native dialogs

================================================================================
"""

import json
from typing import Any, List, Optional

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    json_str = json.dumps(data, indent=2, default=str)
    allure.attach(
        json_str,
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_png(png: bytes, name: str = "Screenshot"):
    """Attach raw PNG bytes to Allure report."""
    allure.attach(
        png,
        name=name,
        attachment_type=allure.attachment_type.PNG
    )


def attach_failure_bundle(
    test_name: str,
    url: str,
    screenshot: Optional[bytes] = None,
    dialog_messages: Optional[List[str]] = None,
) -> None:
    """
    Attach everything needed to debug a failed UI scenario.

    Args:
        test_name: Failing test node name
        url: Page URL at failure time
        screenshot: Full-page PNG, if one could be taken
        dialog_messages: Texts of native dialogs seen during the scenario
    """
    with allure.step(f"Failure details: {test_name}"):
        if screenshot:
            attach_png(screenshot, name=f"failure_{test_name}")
        attach_text(url, name="Current URL")
        if dialog_messages:
            attach_json(dialog_messages, name="Native dialogs")
    logger.debug(f"Failure bundle attached for {test_name} (url={url})")


__all__ = [
    "attach_json",
    "attach_text",
    "attach_png",
    "attach_failure_bundle",
]
