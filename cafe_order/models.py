"""Domain models for cafe-order."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Product:
    """A catalog product. Identity is the numeric id."""

    id: int
    name: str
    price: Decimal
    description: str = ""
    image: str = ""
    category: str = ""


@dataclass(frozen=True)
class CartLine:
    """One product and its quantity inside a cart."""

    product: Product
    quantity: int = 1

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity


@dataclass(frozen=True)
class CustomerInfo:
    """Checkout fields, kept as typed until submitted."""

    table: str = ""
    name: str = ""
    phone: str = ""

    def normalized(self) -> CustomerInfo:
        return CustomerInfo(table=self.table.strip(), name=self.name.strip(), phone=self.phone.strip())


@dataclass(frozen=True)
class OrderLine:
    """A priced, detached copy of a cart line."""

    product_id: int
    name: str
    unit_price: Decimal
    quantity: int
    line_total: Decimal


def _money(amount: Decimal) -> str:
    return str(amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class OrderSummary:
    """Immutable snapshot of a confirmed order, handed to the receipt formatter."""

    order_id: str
    created_at: str
    customer: CustomerInfo
    lines: tuple[OrderLine, ...]
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    tax_rate: Decimal
    item_count: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "item_count", sum(line.quantity for line in self.lines))

    def to_dict(self) -> dict[str, Any]:
        """Plain data view with amounts rounded for display."""
        return {
            "order_id": self.order_id,
            "created_at": self.created_at,
            "customer": {
                "table": self.customer.table,
                "name": self.customer.name,
                "phone": self.customer.phone,
            },
            "lines": [
                {
                    "product_id": line.product_id,
                    "name": line.name,
                    "unit_price": _money(line.unit_price),
                    "quantity": line.quantity,
                    "line_total": _money(line.line_total),
                }
                for line in self.lines
            ],
            "item_count": self.item_count,
            "subtotal": _money(self.subtotal),
            "tax_rate": str(self.tax_rate),
            "tax": _money(self.tax),
            "total": _money(self.total),
        }


class FlowState(Enum):
    BROWSING = "browsing"
    CART_OPEN = "cart_open"
    CHECKING_OUT = "checking_out"
    CONFIRMED = "confirmed"
