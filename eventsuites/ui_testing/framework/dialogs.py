"""
================================================================================
Native Dialog Watcher
================================================================================

Playwright auto-dismisses ``alert``/``confirm`` dialogs unless a listener is
registered. The watcher registers one and keeps each dialog pending until a
scenario reads and handles it, so a test can assert on the alert text the
same way it would with a blocking WebDriver alert.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional

from loguru import logger
from playwright.async_api import Dialog, Page


class AlertHandle:
    """A native dialog handed out by ``wait_for_alert``."""

    def __init__(self, dialog: Dialog):
        self._dialog = dialog
        self.handled = False

    @property
    def text(self) -> str:
        return self._dialog.message

    @property
    def type(self) -> str:
        return self._dialog.type

    async def accept(self, prompt_text: Optional[str] = None) -> None:
        if prompt_text is None:
            await self._dialog.accept()
        else:
            await self._dialog.accept(prompt_text)
        self.handled = True
        logger.debug(f"Accepted dialog: {self.text!r}")

    async def dismiss(self) -> None:
        await self._dialog.dismiss()
        self.handled = True
        logger.debug(f"Dismissed dialog: {self.text!r}")


class DialogWatcher:
    """
    Queues native dialogs raised by a page.

    Usage:
        watcher = DialogWatcher(page)
        ...  # action that triggers window.alert(...)
        alert = await wait_for_alert(watcher)
        assert "Invalid" in alert.text
        await alert.accept()
    """

    def __init__(self, page: Page):
        self.page = page
        self._pending: Deque[Dialog] = deque()
        self._history: List[str] = []
        page.on("dialog", self._on_dialog)

    def _on_dialog(self, dialog: Dialog) -> None:
        logger.info(f"Native {dialog.type} dialog opened: {dialog.message!r}")
        self._pending.append(dialog)
        self._history.append(dialog.message)

    def has_pending(self) -> bool:
        return bool(self._pending)

    def pop(self) -> AlertHandle:
        """Hand out the oldest pending dialog."""
        if not self._pending:
            raise LookupError("No native dialog is pending")
        return AlertHandle(self._pending.popleft())

    async def accept_pending(self) -> int:
        """Accept every dialog nobody handled; the page is frozen while one is open."""
        flushed = 0
        while self._pending:
            await self._pending.popleft().accept()
            flushed += 1
        if flushed:
            logger.warning(f"Accepted {flushed} unhandled native dialog(s)")
        return flushed

    @property
    def messages(self) -> List[str]:
        """Texts of every dialog seen since the last ``clear_history``."""
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()


__all__ = [
    "AlertHandle",
    "DialogWatcher",
]
