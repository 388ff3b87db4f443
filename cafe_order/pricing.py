"""Subtotal, tax and total for a set of cart lines."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from cafe_order.config import TAX_RATE
from cafe_order.models import CartLine

_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class PriceBreakdown:
    """Full-precision amounts. Round with to_display only when showing them."""

    subtotal: Decimal
    tax: Decimal
    total: Decimal
    tax_rate: Decimal


def price_lines(lines: Iterable[CartLine], tax_rate: Decimal = TAX_RATE) -> PriceBreakdown:
    """Price a cart snapshot. Pure; the same lines always give the same result."""
    rate = Decimal(tax_rate)
    subtotal = sum((line.product.price * line.quantity for line in lines), Decimal("0"))
    tax = subtotal * rate
    return PriceBreakdown(subtotal=subtotal, tax=tax, total=subtotal + tax, tax_rate=rate)


def to_display(amount: Decimal) -> Decimal:
    """Round an amount to cents for presentation."""
    return Decimal(amount).quantize(_CENTS, rounding=ROUND_HALF_UP)


def format_money(amount: Decimal, symbol: str = "") -> str:
    return f"{symbol}{to_display(amount):,.2f}"


def format_rate(rate: Decimal) -> str:
    """Render a tax rate as a percentage, e.g. 0.05 -> '5%'."""
    pct = (Decimal(rate) * 100).normalize()
    if pct == pct.to_integral_value():
        pct = pct.quantize(Decimal("1"))
    return f"{pct}%"
