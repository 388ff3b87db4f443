from __future__ import annotations

from decimal import Decimal

import pytest

from cafe_order.models import CustomerInfo, Product


def make_product(product_id: int, price: str | int = "10", category: str = "Salads") -> Product:
    return Product(
        id=product_id,
        name=f"Dish {product_id}",
        price=Decimal(str(price)),
        description=f"Description {product_id}",
        image=f"/images/{product_id}.jpg",
        category=category,
    )


@pytest.fixture
def products() -> list[Product]:
    return [make_product(i, price=10 + i) for i in range(1, 8)]


@pytest.fixture
def valid_customer() -> CustomerInfo:
    return CustomerInfo(table="7", name="Asha", phone="9876543210")
