from __future__ import annotations

from decimal import Decimal

from cafe_order.cart import Cart
from cafe_order.models import CartLine
from cafe_order.pricing import format_money, format_rate, price_lines, to_display

from conftest import make_product


def test_scenario_subtotal_tax_total():
    lines = [CartLine(make_product(1, price=10), 2), CartLine(make_product(2, price=15), 1)]

    prices = price_lines(lines, Decimal("0.05"))

    assert prices.subtotal == Decimal("35.00")
    assert prices.tax == Decimal("1.75")
    assert prices.total == Decimal("36.75")


def test_empty_cart_prices_to_zero():
    prices = price_lines([])

    assert prices.subtotal == 0
    assert prices.tax == 0
    assert prices.total == 0


def test_pricing_twice_is_identical():
    cart = Cart()
    cart.add_item(make_product(1, price="19.99"))
    cart.add_item(make_product(1, price="19.99"))
    cart.add_item(make_product(2, price="3.33"))

    first = price_lines(cart.lines(), Decimal("0.075"))
    second = price_lines(cart.lines(), Decimal("0.075"))

    assert first == second


def test_tax_keeps_full_precision_until_display():
    lines = [CartLine(make_product(1, price="3.33"), 1)]

    prices = price_lines(lines, Decimal("0.05"))

    assert prices.tax == Decimal("0.1665")
    assert to_display(prices.tax) == Decimal("0.17")
    assert to_display(prices.total) == Decimal("3.50")


def test_pricing_does_not_mutate_lines():
    lines = [CartLine(make_product(1, price=10), 3)]
    price_lines(lines)
    assert lines[0].quantity == 3


def test_format_helpers():
    assert format_money(Decimal("1234.5"), "₹") == "₹1,234.50"
    assert format_rate(Decimal("0.05")) == "5%"
    assert format_rate(Decimal("0.075")) == "7.5%"
