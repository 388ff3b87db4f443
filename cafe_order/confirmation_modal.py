"""Order confirmation modal screen with receipt export."""

from __future__ import annotations

from pathlib import Path

from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from cafe_order.config import RECEIPT_DIR
from cafe_order.flow import OrderFlowController
from cafe_order.models import OrderSummary
from cafe_order.popup import Popup
from cafe_order.receipt import print_receipt, receipt_lines, save_receipt


class ConfirmationModal(ModalScreen[None]):
    """Show the receipt for a confirmed order until the shopper acknowledges it."""

    BINDINGS = [
        ("escape", "acknowledge", "Done"),
        ("enter", "acknowledge", "Done"),
        ("s", "save_receipt", "Save PDF"),
        ("p", "print_receipt", "Print"),
    ]

    CSS = """
    ConfirmationModal {
        align: center middle;
        background: $background 60%;
    }

    #confirm-dialog {
        width: 44;
        height: auto;
        max-height: 90%;
        border: round $success;
        background: $panel;
        padding: 1 2;
    }

    #confirm-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #confirm-receipt {
        color: white;
    }

    #confirm-status {
        margin-top: 1;
        color: #b8e0c0;
    }

    #confirm-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def __init__(self, controller: OrderFlowController, summary: OrderSummary, receipt_dir: str | Path = RECEIPT_DIR) -> None:
        super().__init__()
        self.controller = controller
        self.summary = summary
        self.receipt_dir = receipt_dir
        self.saved_path: Path | None = None
        self.status = "Order placed successfully!"

    def compose(self) -> ComposeResult:
        with Container(id="confirm-dialog"):
            yield Static("Order Confirmed", id="confirm-title")
            yield Static("\n".join(receipt_lines(self.summary)), id="confirm-receipt")
            yield Static(id="confirm-status")
            yield Static("S save PDF, P print, Enter/Esc done", id="confirm-help")
        yield Popup()

    def on_mount(self) -> None:
        self._refresh_status()

    def action_acknowledge(self) -> None:
        self.controller.acknowledge_confirmation()
        self.dismiss(None)

    def action_save_receipt(self) -> None:
        try:
            self.saved_path = save_receipt(self.summary, self.receipt_dir)
        except (OSError, ValueError) as exc:
            self.query_one(Popup).show(f"Could not save receipt: {exc}")
            return
        self.status = f"Saved {self.saved_path}"
        self._refresh_status()

    def action_print_receipt(self) -> None:
        try:
            print_receipt(self.summary)
        except Exception as exc:
            self.query_one(Popup).show(f"Print failed: {exc}")
            return
        self.status = f"Printed {self.summary.order_id[:8]}"
        self._refresh_status()

    def _refresh_status(self) -> None:
        self.query_one("#confirm-status", Static).update(self.status)
