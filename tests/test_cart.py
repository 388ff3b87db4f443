from __future__ import annotations

import random

import pytest

from cafe_order.cart import Cart
from cafe_order.errors import CapacityExceeded, ErrorKind, QuantityExceeded

from conftest import make_product


def test_add_new_product_appends_line_with_quantity_one(products):
    cart = Cart()
    cart.add_item(products[0])
    cart.add_item(products[1])

    lines = cart.lines()
    assert [line.product.id for line in lines] == [1, 2]
    assert [line.quantity for line in lines] == [1, 1]


def test_add_existing_product_increments_quantity(products):
    cart = Cart()
    cart.add_item(products[0])
    line = cart.add_item(products[0])

    assert line.quantity == 2
    assert len(cart) == 1


def test_sixth_distinct_product_rejected_and_cart_unchanged(products):
    cart = Cart()
    for product in products[:5]:
        cart.add_item(product)
    cart.change_quantity(3, 2)
    before = cart.lines()

    with pytest.raises(CapacityExceeded) as excinfo:
        cart.add_item(products[5])

    assert excinfo.value.kind is ErrorKind.CAPACITY_EXCEEDED
    assert cart.lines() == before


def test_full_cart_still_accepts_more_of_existing_product(products):
    cart = Cart()
    for product in products[:5]:
        cart.add_item(product)

    line = cart.add_item(products[2])

    assert line.quantity == 2
    assert len(cart) == 5


def test_add_beyond_quantity_cap_leaves_line_unchanged(products):
    cart = Cart()
    for _ in range(5):
        cart.add_item(products[0])

    with pytest.raises(QuantityExceeded):
        cart.add_item(products[0])

    assert cart.get(1).quantity == 5


def test_remove_item_deletes_line_and_ignores_missing(products):
    cart = Cart()
    cart.add_item(products[0])
    cart.add_item(products[1])

    assert cart.remove_item(1) is True
    assert cart.remove_item(99) is False
    assert [line.product.id for line in cart.lines()] == [2]


def test_change_quantity_clamps_to_one_without_removing(products):
    cart = Cart()
    cart.add_item(products[0])
    cart.change_quantity(1, 3)

    line = cart.change_quantity(1, -999)

    assert line.quantity == 1
    assert 1 in cart


def test_change_quantity_over_cap_raises_and_keeps_quantity(products):
    cart = Cart()
    cart.add_item(products[0])
    cart.change_quantity(1, 2)

    with pytest.raises(QuantityExceeded):
        cart.change_quantity(1, 3)

    assert cart.get(1).quantity == 3


def test_change_quantity_keeps_order_of_other_lines(products):
    cart = Cart()
    for product in products[:3]:
        cart.add_item(product)

    cart.change_quantity(2, 4)

    assert [line.product.id for line in cart.lines()] == [1, 2, 3]
    assert [line.quantity for line in cart.lines()] == [1, 5, 1]


def test_change_quantity_unknown_product_is_noop(products):
    cart = Cart()
    cart.add_item(products[0])

    assert cart.change_quantity(42, 1) is None
    assert cart.get(1).quantity == 1


def test_lines_reflect_live_state(products):
    cart = Cart()
    assert cart.lines() == ()
    cart.add_item(products[0])
    assert len(cart.lines()) == 1
    cart.clear()
    assert cart.lines() == ()
    assert cart.is_empty


def test_total_quantity_counts_units(products):
    cart = Cart()
    cart.add_item(products[0])
    cart.add_item(products[0])
    cart.add_item(products[1])

    assert cart.total_quantity() == 3


def test_custom_caps_are_respected():
    cart = Cart(max_lines=2, max_quantity=2)
    cart.add_item(make_product(1))
    cart.add_item(make_product(2))

    with pytest.raises(CapacityExceeded):
        cart.add_item(make_product(3))
    cart.add_item(make_product(1))
    with pytest.raises(QuantityExceeded):
        cart.add_item(make_product(1))


def test_invalid_caps_rejected():
    with pytest.raises(ValueError):
        Cart(max_lines=0)


def test_random_edits_never_break_caps():
    rng = random.Random(1234)
    catalog = [make_product(i) for i in range(1, 10)]
    cart = Cart()

    for _ in range(500):
        op = rng.choice(["add", "change", "remove"])
        product = rng.choice(catalog)
        try:
            if op == "add":
                cart.add_item(product)
            elif op == "change":
                cart.change_quantity(product.id, rng.randint(-6, 6))
            else:
                cart.remove_item(product.id)
        except (CapacityExceeded, QuantityExceeded):
            pass

        lines = cart.lines()
        assert len(lines) <= 5
        assert all(1 <= line.quantity <= 5 for line in lines)
        assert len({line.product.id for line in lines}) == len(lines)
