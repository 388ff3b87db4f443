"""Rendering helpers and shopper-facing messages."""

from __future__ import annotations

from rich.text import Text

from cafe_order.config import CURRENCY_SYMBOL, MAX_CART_LINES, MAX_LINE_QUANTITY, TABLE_MAX, TABLE_MIN
from cafe_order.errors import ErrorKind
from cafe_order.models import CartLine, Product
from cafe_order.pricing import PriceBreakdown, format_money, format_rate

MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.CAPACITY_EXCEEDED: f"You can only add up to {MAX_CART_LINES} different items to the cart.",
    ErrorKind.QUANTITY_EXCEEDED: f"You can only add up to {MAX_LINE_QUANTITY} units of each item.",
    ErrorKind.EMPTY_CART: "Your cart is empty. Add something first.",
    ErrorKind.INVALID_TABLE: f"Table number must be between {TABLE_MIN} and {TABLE_MAX}.",
    ErrorKind.MISSING_NAME: "Please enter your name.",
    ErrorKind.MISSING_PHONE: "Please enter your phone number.",
}


def message_for(kind: ErrorKind) -> str:
    return MESSAGES[kind]


def money(amount) -> str:
    return format_money(amount, CURRENCY_SYMBOL)


def chip_style(active: bool) -> str:
    """Filter chip style; the active chip is highlighted."""
    if active:
        return "bold #ffffff on #3c9a4f"
    return "#1f2a1f on #d6d9d6"


def format_category_bar(labels: list[str], active: str) -> Text:
    text = Text()
    for idx, label in enumerate(labels):
        if idx > 0:
            text.append(" ")
        text.append(f" {idx + 1} {label} ", style=chip_style(label == active))
    return text


def format_product_row(product: Product, in_cart: int = 0) -> Text:
    text = Text()
    text.append(product.name, style="bold")
    text.append(f"  {money(product.price)}", style="#5fbf72")
    if in_cart:
        text.append(f"  [{in_cart} in cart]", style="dim")
    return text


def format_product_detail(product: Product | None) -> Text:
    if product is None:
        return Text("No products in this category", style="dim")
    text = Text()
    text.append(f"{product.name}\n", style="bold")
    text.append(f"{product.category}\n\n", style="italic #8fa58f")
    text.append(product.description or "-")
    text.append(f"\n\n{money(product.price)}", style="bold #5fbf72")
    return text


def format_cart_line(line: CartLine) -> Text:
    text = Text()
    text.append(line.product.name)
    text.append(f"  - {line.quantity} +  ", style="bold")
    text.append(money(line.line_total), style="#5fbf72")
    return text


def format_totals(prices: PriceBreakdown) -> Text:
    text = Text()
    text.append(f"Subtotal: {money(prices.subtotal)}\n")
    text.append(f"Tax ({format_rate(prices.tax_rate)}): {money(prices.tax)}\n")
    text.append(f"Total: {money(prices.total)}", style="bold")
    return text


def format_cart_badge(count: int) -> Text:
    text = Text("Cart ")
    if count:
        text.append(f" {count} ", style="bold #ffffff on #c0392b")
    else:
        text.append("(empty)", style="dim")
    return text


def format_form_field(label: str, value: str, error: ErrorKind | None, active: bool) -> Text:
    text = Text()
    pointer = "➤ " if active else "  "
    text.append(f"{pointer}{label:<9}", style="bold" if active else "")
    cursor = "|" if active else ""
    text.append(f"{value}{cursor}", style="white")
    if error is not None:
        text.append(f"\n           {message_for(error)}", style="#ffb3b3")
    return text
