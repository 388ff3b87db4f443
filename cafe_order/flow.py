"""Order flow state machine: browsing, cart, checkout and confirmation."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from cafe_order.cart import Cart
from cafe_order.checkout import CHECKOUT_FIELDS, CheckoutValidator, error_for_kind
from cafe_order.config import TAX_RATE
from cafe_order.errors import EmptyCart, ErrorKind, InvalidTransition
from cafe_order.models import CartLine, CustomerInfo, FlowState, OrderLine, OrderSummary, Product
from cafe_order.pricing import PriceBreakdown, price_lines

logger = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class OrderFlowController:
    """Owns one shopper's cart and drives it through a single order.

    Browsing -> CartOpen -> CheckingOut -> Confirmed -> Browsing. CartOpen and
    CheckingOut can always fall back to Browsing with close_cart(). Shopper
    mistakes raise OrderError subclasses; calls made in the wrong state raise
    InvalidTransition.
    """

    def __init__(
        self,
        cart: Cart | None = None,
        validator: CheckoutValidator | None = None,
        tax_rate: Decimal = TAX_RATE,
    ) -> None:
        self.cart = cart if cart is not None else Cart()
        self.validator = validator if validator is not None else CheckoutValidator()
        self.tax_rate = Decimal(tax_rate)
        self._state = FlowState.BROWSING
        self._draft: CustomerInfo | None = None
        self._summary: OrderSummary | None = None
        self.field_errors: dict[str, ErrorKind] = {}

    @property
    def state(self) -> FlowState:
        return self._state

    @property
    def draft(self) -> CustomerInfo | None:
        return self._draft

    @property
    def summary(self) -> OrderSummary | None:
        return self._summary

    def pricing(self) -> PriceBreakdown:
        return price_lines(self.cart.lines(), self.tax_rate)

    # Cart edits are allowed in every state.
    def add_item(self, product: Product) -> CartLine:
        return self.cart.add_item(product)

    def remove_item(self, product_id: int) -> bool:
        return self.cart.remove_item(product_id)

    def change_quantity(self, product_id: int, delta: int) -> CartLine | None:
        return self.cart.change_quantity(product_id, delta)

    def open_cart(self) -> None:
        if self._state is FlowState.CHECKING_OUT:
            self._discard_draft()
        elif self._state is FlowState.CONFIRMED:
            self._summary = None
        self._move_to(FlowState.CART_OPEN)

    def close_cart(self) -> None:
        if self._state is FlowState.BROWSING:
            return
        self._require(FlowState.CART_OPEN, FlowState.CHECKING_OUT, action="close_cart")
        self._discard_draft()
        self._move_to(FlowState.BROWSING)

    def begin_checkout(self) -> CustomerInfo:
        self._require(FlowState.CART_OPEN, action="begin_checkout")
        if self.cart.is_empty:
            logger.info("checkout rejected reason=empty_cart")
            raise EmptyCart("cart has no items")
        self._draft = CustomerInfo()
        self.field_errors = {}
        self._move_to(FlowState.CHECKING_OUT)
        return self._draft

    def cancel_checkout(self) -> None:
        """Leave the form and return to the cart view."""
        self._require(FlowState.CHECKING_OUT, action="cancel_checkout")
        self._discard_draft()
        self._move_to(FlowState.CART_OPEN)

    def edit_field(self, field: str, value: str) -> ErrorKind | None:
        """Store a draft field and re-validate only that field."""
        self._require(FlowState.CHECKING_OUT, action="edit_field")
        if field not in CHECKOUT_FIELDS:
            raise KeyError(field)
        draft = self._draft or CustomerInfo()
        self._draft = replace(draft, **{field: value})
        kind = self.validator.validate_field(field, value)
        if kind is None:
            self.field_errors.pop(field, None)
        else:
            self.field_errors[field] = kind
        return kind

    def submit_checkout(self, customer_info: CustomerInfo | None = None) -> OrderSummary:
        """Validate the form, snapshot the priced order and empty the cart.

        On rejection the first failing field is raised with every failure in
        ``field_errors``; the draft keeps what the shopper typed.
        """
        self._require(FlowState.CHECKING_OUT, action="submit_checkout")
        if customer_info is not None:
            self._draft = customer_info
        info = self._draft if self._draft is not None else CustomerInfo()

        errors = self.validator.validate(info)
        self.field_errors = dict(errors)
        if errors:
            first = next(iter(errors.values()))
            logger.info("submit rejected fields=%s", ",".join(errors))
            raise error_for_kind(first, errors)

        if self.cart.is_empty:
            raise EmptyCart("cart has no items")

        summary = self._snapshot(info)
        self.cart.clear()
        self._draft = None
        self._summary = summary
        self._move_to(FlowState.CONFIRMED)
        logger.info(
            "order confirmed order_id=%s lines=%d total=%s", summary.order_id, len(summary.lines), summary.total
        )
        return summary

    def acknowledge_confirmation(self) -> None:
        self._require(FlowState.CONFIRMED, action="acknowledge_confirmation")
        self._summary = None
        self._move_to(FlowState.BROWSING)

    def _snapshot(self, info: CustomerInfo) -> OrderSummary:
        lines = self.cart.lines()
        prices = price_lines(lines, self.tax_rate)
        order_lines = tuple(
            OrderLine(
                product_id=line.product.id,
                name=line.product.name,
                unit_price=line.product.price,
                quantity=line.quantity,
                line_total=line.line_total,
            )
            for line in lines
        )
        return OrderSummary(
            order_id=uuid4().hex,
            created_at=_utc_now_iso(),
            customer=info.normalized(),
            lines=order_lines,
            subtotal=prices.subtotal,
            tax=prices.tax,
            total=prices.total,
            tax_rate=prices.tax_rate,
        )

    def _discard_draft(self) -> None:
        self._draft = None
        self.field_errors = {}

    def _require(self, *allowed: FlowState, action: str) -> None:
        if self._state not in allowed:
            raise InvalidTransition(f"{action} not allowed from {self._state.value}")

    def _move_to(self, state: FlowState) -> None:
        if state is not self._state:
            logger.debug("flow %s -> %s", self._state.value, state.value)
        self._state = state
