"""Main Textual app class."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from cafe_order.cart_modal import CartModal
from cafe_order.catalog import categories, filter_by_category, load_catalog
from cafe_order.config import RECEIPT_DIR, RESTAURANT_NAME, RESTAURANT_TAGLINE
from cafe_order.confirmation_modal import ConfirmationModal
from cafe_order.errors import OrderError
from cafe_order.flow import OrderFlowController
from cafe_order.models import OrderSummary, Product
from cafe_order.popup import Popup
from cafe_order.receipt import check_printer_dependencies
from cafe_order.rendering import (
    format_cart_badge,
    format_category_bar,
    format_product_detail,
    format_product_row,
    message_for,
)

logger = logging.getLogger(__name__)


class CafeOrderApp(App):
    """A Textual app for browsing the cafe menu and placing one order at a time."""

    TITLE = RESTAURANT_NAME
    SUB_TITLE = RESTAURANT_TAGLINE

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #menu-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #side-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #category-bar {
        height: auto;
        margin-bottom: 1;
    }

    #product-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-badge {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 3;
    }

    #product-detail {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #status-bar {
        height: auto;
        margin-top: 1;
        color: $text-muted;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    selected_index = reactive(0)
    active_category = reactive(0)

    BINDINGS = [
        ("j,down", "move_selection(1)", "Next item"),
        ("k,up", "move_selection(-1)", "Previous item"),
        ("l,right", "cycle_category(1)", "Next category"),
        ("h,left", "cycle_category(-1)", "Previous category"),
        ("a,enter", "add_selected", "Add to cart"),
        ("c", "open_cart", "Open cart"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        catalog: list[Product] | None = None,
        controller: OrderFlowController | None = None,
        receipt_dir: str | Path = RECEIPT_DIR,
        check_printer: bool = True,
    ) -> None:
        super().__init__()
        self.products: list[Product] = load_catalog() if catalog is None else list(catalog)
        self.category_labels = categories(self.products)
        self.controller = controller if controller is not None else OrderFlowController()
        self.receipt_dir = receipt_dir
        self.check_printer = check_printer
        self.system_status = ""
        self.popup = Popup(id="popup")
        self._log_debug(f"app_init products={len(self.products)}")

    def _log_debug(self, message: str) -> None:
        logger.debug(message)

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="menu-pane"):
                yield Static(id="category-bar")
                yield Static(id="product-list")
            with Vertical(id="side-pane"):
                yield Static(id="cart-badge")
                yield Static(id="product-detail")
                yield Static(id="status-bar")
        yield self.popup

    def on_mount(self) -> None:
        if self.check_printer:
            _, msg = check_printer_dependencies()
            self.system_status = msg
            self._log_debug(f"on_mount printer_status={msg!r}")
        if not self.products:
            self.system_status = "Menu unavailable (empty catalog)"
        self._refresh_all()

    def on_key(self, event: Key) -> None:
        # While a modal is active, let the modal own keyboard handling.
        if self._modal_open():
            return

        if not event.is_printable or not event.character or not event.character.isdigit():
            return

        chip = int(event.character) - 1
        if 0 <= chip < len(self.category_labels):
            self._select_category(chip)
            event.stop()

    def show_popup(self, message: str) -> None:
        self.popup.show(message)

    def action_move_selection(self, delta: int) -> None:
        if self._modal_open():
            return
        visible = self._visible_products()
        if not visible:
            return
        self.selected_index = (self.selected_index + delta) % len(visible)
        self._refresh_products()

    def action_cycle_category(self, delta: int) -> None:
        if self._modal_open():
            return
        self._select_category((self.active_category + delta) % len(self.category_labels))

    def action_add_selected(self) -> None:
        if self._modal_open():
            return
        product = self._selected_product()
        if product is None:
            return
        try:
            line = self.controller.add_item(product)
        except OrderError as exc:
            self._log_debug(f"add_rejected product_id={product.id} kind={exc.kind.value}")
            self.show_popup(message_for(exc.kind))
            return
        self.system_status = f"Added {product.name} (x{line.quantity})"
        self._refresh_all()

    def action_open_cart(self) -> None:
        if self._modal_open():
            return
        self.controller.open_cart()
        self._log_debug(f"open_cart lines={len(self.controller.cart)}")
        self.push_screen(CartModal(self.controller), self._on_cart_closed)

    def _on_cart_closed(self, summary: OrderSummary | None) -> None:
        self._refresh_all()
        if summary is None:
            return
        self._log_debug(f"order_confirmed order_id={summary.order_id}")
        self.system_status = f"Order {summary.order_id[:8]} placed"
        self.push_screen(ConfirmationModal(self.controller, summary, self.receipt_dir), self._on_confirmation_done)

    def _on_confirmation_done(self, _: None) -> None:
        self._refresh_all()

    def _modal_open(self) -> bool:
        return isinstance(self.screen, ModalScreen)

    def _select_category(self, index: int) -> None:
        self.active_category = index
        self.selected_index = 0
        self._refresh_all()

    def _visible_products(self) -> list[Product]:
        return filter_by_category(self.products, self.category_labels[self.active_category])

    def _selected_product(self) -> Product | None:
        visible = self._visible_products()
        if not visible:
            return None
        if not (0 <= self.selected_index < len(visible)):
            return None
        return visible[self.selected_index]

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            half = rows // 2
            start = selected - half
            start = max(0, start)
            start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_all(self) -> None:
        try:
            self.query_one("#category-bar", Static).update(
                format_category_bar(self.category_labels, self.category_labels[self.active_category])
            )
        except NoMatches:
            return
        self._refresh_products()

    def _refresh_products(self) -> None:
        list_widget = self.query_one("#product-list", Static)
        visible = self._visible_products()
        if not visible:
            list_widget.update("(no products)")
            self._refresh_side()
            return

        if self.selected_index >= len(visible):
            self.selected_index = 0

        rows = self._visible_rows(list_widget)
        start, end = self._window_bounds(len(visible), rows, self.selected_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            product = visible[idx]
            line = self.controller.cart.get(product.id)
            pointer = "➤ " if idx == self.selected_index else "  "
            lines.append(pointer)
            lines.append_text(format_product_row(product, line.quantity if line else 0))

        if end < len(visible):
            lines.append("\n⋮", style="dim")

        list_widget.update(lines)
        self._refresh_side()

    def _refresh_side(self) -> None:
        self.query_one("#cart-badge", Static).update(format_cart_badge(self.controller.cart.total_quantity()))
        self.query_one("#product-detail", Static).update(format_product_detail(self._selected_product()))
        status = self.system_status or "Ready"
        self.query_one("#status-bar", Static).update(
            f"J/K move, H/L or 1-{len(self.category_labels)} category, A add, C cart, Ctrl+Q quit\n{status}"
        )
