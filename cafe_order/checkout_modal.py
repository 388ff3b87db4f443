"""Checkout form modal screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from cafe_order.checkout import CHECKOUT_FIELDS
from cafe_order.errors import CheckoutError, OrderError
from cafe_order.flow import OrderFlowController
from cafe_order.models import CustomerInfo, OrderSummary
from cafe_order.popup import Popup
from cafe_order.rendering import format_form_field, message_for, money

FIELD_LABELS: dict[str, str] = {
    "table": "Table No",
    "name": "Name",
    "phone": "Phone No",
}
_MAX_FIELD_LENGTH = 40


class CheckoutModal(ModalScreen[OrderSummary | None]):
    """Table / name / phone form, validated on every keystroke."""

    CSS = """
    CheckoutModal {
        align: center middle;
        background: $background 60%;
    }

    #checkout-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #checkout-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    .checkout-field {
        color: white;
        margin-bottom: 1;
    }

    #checkout-total {
        color: white;
        text-style: bold;
    }

    #checkout-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def __init__(self, controller: OrderFlowController) -> None:
        super().__init__()
        self.controller = controller
        self.active_field = 0
        # Only fields the shopper has touched show inline errors until submit.
        self.touched: set[str] = set()

    def compose(self) -> ComposeResult:
        with Container(id="checkout-dialog"):
            yield Static("Checkout", id="checkout-title")
            for field in CHECKOUT_FIELDS:
                yield Static(id=f"field-{field}", classes="checkout-field")
            yield Static(id="checkout-total")
            yield Static(
                "Tab/↑/↓ switch field. Enter confirm order. Backspace delete. Esc cancel.",
                id="checkout-help",
            )
        yield Popup()

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key == "escape":
            self.controller.cancel_checkout()
            self.dismiss(None)
            event.stop()
            return

        if event.key == "enter":
            self._confirm()
            event.stop()
            return

        if event.key in {"tab", "down"}:
            self.active_field = (self.active_field + 1) % len(CHECKOUT_FIELDS)
            self._refresh_content()
            event.stop()
            return

        if event.key in {"shift+tab", "up"}:
            self.active_field = (self.active_field - 1) % len(CHECKOUT_FIELDS)
            self._refresh_content()
            event.stop()
            return

        if event.key == "backspace":
            value = self._value(self._field())
            if value:
                self._edit(value[:-1])
            event.stop()
            return

        if event.is_printable and event.character:
            value = self._value(self._field())
            if len(value) < _MAX_FIELD_LENGTH:
                self._edit(value + event.character)
            event.stop()
            return

        # Ignore all non-text keys while the form is open.
        event.stop()

    def _field(self) -> str:
        return CHECKOUT_FIELDS[self.active_field]

    def _draft(self) -> CustomerInfo:
        return self.controller.draft or CustomerInfo()

    def _value(self, field: str) -> str:
        return getattr(self._draft(), field)

    def _edit(self, value: str) -> None:
        field = self._field()
        self.controller.edit_field(field, value)
        self.touched.add(field)
        self._refresh_content()

    def _confirm(self) -> None:
        try:
            summary = self.controller.submit_checkout()
        except CheckoutError as exc:
            self.touched.update(exc.field_errors)
            self.active_field = CHECKOUT_FIELDS.index(next(iter(exc.field_errors)))
            self.query_one(Popup).show(message_for(exc.kind))
            self._refresh_content()
            return
        except OrderError as exc:
            self.query_one(Popup).show(message_for(exc.kind))
            self._refresh_content()
            return
        self.dismiss(summary)

    def _refresh_content(self) -> None:
        errors = self.controller.field_errors
        for idx, field in enumerate(CHECKOUT_FIELDS):
            error = errors.get(field) if field in self.touched else None
            self.query_one(f"#field-{field}", Static).update(
                format_form_field(FIELD_LABELS[field], self._value(field), error, idx == self.active_field)
            )
        self.query_one("#checkout-total", Static).update(f"Order total: {money(self.controller.pricing().total)}")
