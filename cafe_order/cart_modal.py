"""Cart modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from cafe_order.checkout_modal import CheckoutModal
from cafe_order.errors import OrderError
from cafe_order.flow import OrderFlowController
from cafe_order.models import CartLine, OrderSummary
from cafe_order.popup import Popup
from cafe_order.rendering import format_cart_line, format_totals, message_for


class CartModal(ModalScreen[OrderSummary | None]):
    """Cart review: change quantities, remove lines, proceed to checkout.

    Dismisses with the confirmed OrderSummary, or None when closed.
    """

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("up", "move_cursor(-1)", "Previous"),
        ("plus,equals_sign,right,l", "change_quantity(1)", "More"),
        ("minus,left,h", "change_quantity(-1)", "Less"),
        ("d,delete", "remove_current", "Remove"),
        ("c,enter", "checkout", "Checkout"),
    ]

    CSS = """
    CartModal {
        align: center middle;
        background: $background 60%;
    }

    #cart-dialog {
        width: 64;
        height: auto;
        max-height: 80%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #cart-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #cart-body {
        margin-bottom: 1;
        color: white;
    }

    #cart-totals {
        color: white;
    }

    #cart-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)

    def __init__(self, controller: OrderFlowController) -> None:
        super().__init__()
        self.controller = controller

    def compose(self) -> ComposeResult:
        with Container(id="cart-dialog"):
            yield Static("Your Cart", id="cart-title")
            yield Static(id="cart-body")
            yield Static(id="cart-totals")
            yield Static("J/K move, +/- quantity, D remove, C checkout, Esc close", id="cart-help")
        yield Popup()

    def on_mount(self) -> None:
        self._refresh_content()

    def action_close(self) -> None:
        self.controller.close_cart()
        self.dismiss(None)

    def action_move_cursor(self, delta: int) -> None:
        lines = self.controller.cart.lines()
        if not lines:
            return
        self.cursor_index = (self.cursor_index + delta) % len(lines)
        self._refresh_content()

    def action_change_quantity(self, delta: int) -> None:
        line = self._current_line()
        if line is None:
            return
        try:
            self.controller.change_quantity(line.product.id, delta)
        except OrderError as exc:
            self._show_error(exc)
        self._refresh_content()

    def action_remove_current(self) -> None:
        line = self._current_line()
        if line is None:
            return
        self.controller.remove_item(line.product.id)
        self._refresh_content()

    def action_checkout(self) -> None:
        try:
            self.controller.begin_checkout()
        except OrderError as exc:
            self._show_error(exc)
            return
        self.app.push_screen(CheckoutModal(self.controller), self._on_checkout_done)

    def _on_checkout_done(self, summary: OrderSummary | None) -> None:
        if summary is None:
            self._refresh_content()
            return
        self.dismiss(summary)

    def _show_error(self, exc: OrderError) -> None:
        self.query_one(Popup).show(message_for(exc.kind))

    def _current_line(self) -> CartLine | None:
        lines = self.controller.cart.lines()
        if not lines:
            return None
        if self.cursor_index >= len(lines):
            self.cursor_index = len(lines) - 1
        return lines[self.cursor_index]

    def _refresh_content(self) -> None:
        body = self.query_one("#cart-body", Static)
        totals = self.query_one("#cart-totals", Static)
        lines = self.controller.cart.lines()

        if not lines:
            body.update(Text("Your cart is empty.", style="dim"))
            totals.update("")
            return

        if self.cursor_index >= len(lines):
            self.cursor_index = len(lines) - 1

        content = Text(style="white")
        for idx, line in enumerate(lines):
            if idx > 0:
                content.append("\n")
            pointer = "➤ " if idx == self.cursor_index else "  "
            content.append(pointer)
            content.append_text(format_cart_line(line))
        body.update(content)
        totals.update(format_totals(self.controller.pricing()))
