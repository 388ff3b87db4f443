"""Auto-dismissing popup notice."""

from __future__ import annotations

from textual.timer import Timer
from textual.widgets import Static

from cafe_order.config import POPUP_SECONDS


class Popup(Static):
    """Short-lived message box. Never touches order state.

    Each show() cancels the pending dismiss and schedules a fresh one, so the
    newest message always gets the full display time.
    """

    DEFAULT_CSS = """
    Popup {
        dock: bottom;
        width: auto;
        max-width: 60;
        height: auto;
        margin: 0 2 1 0;
        padding: 1 2;
        background: #c0392b;
        color: #ffffff;
        text-style: bold;
        display: none;
    }
    """

    def __init__(self, delay: float = POPUP_SECONDS, **kwargs) -> None:
        super().__init__("", **kwargs)
        self.delay = delay
        self.message = ""
        self._timer: Timer | None = None

    @property
    def is_showing(self) -> bool:
        return bool(self.display)

    def show(self, message: str) -> None:
        self._cancel_timer()
        self.message = message
        self.update(message)
        self.display = True
        self._timer = self.set_timer(self.delay, self.dismiss_now)

    def dismiss_now(self) -> None:
        self._cancel_timer()
        self.message = ""
        self.update("")
        self.display = False

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None
