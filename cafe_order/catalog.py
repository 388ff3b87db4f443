"""Static product catalog loading and category filtering."""

from __future__ import annotations

import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Iterable

from cafe_order.config import ALL_CATEGORY, CATALOG_PATH
from cafe_order.models import Product

logger = logging.getLogger(__name__)


def _parse_id(value: Any) -> int:
    # Floats and bools would truncate into another product's id.
    if isinstance(value, bool):
        raise TypeError("product id must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    raise ValueError(f"product id must be an integer, got {value!r}")


def _product_from_record(record: Any) -> Product | None:
    if not isinstance(record, dict):
        return None
    try:
        price = Decimal(str(record["price"]))
        product = Product(
            id=_parse_id(record["id"]),
            name=str(record["name"]).strip(),
            price=price,
            description=str(record.get("description") or ""),
            image=str(record.get("image") or ""),
            category=str(record.get("category") or ""),
        )
    except (KeyError, TypeError, ValueError, InvalidOperation):
        return None
    if not product.name or not price.is_finite() or price < 0:
        return None
    return product


def parse_catalog(data: Any) -> list[Product]:
    """Build products from decoded JSON, skipping malformed records."""
    records = data.get("products") if isinstance(data, dict) else data
    if not isinstance(records, list):
        logger.warning("catalog has no product list; using empty catalog")
        return []

    products: list[Product] = []
    seen: set[int] = set()
    for idx, record in enumerate(records):
        product = _product_from_record(record)
        if product is None:
            logger.warning("skipping malformed catalog record at index %d", idx)
            continue
        if product.id in seen:
            logger.warning("skipping duplicate product id %d", product.id)
            continue
        seen.add(product.id)
        products.append(product)
    return products


def load_catalog(path: str | Path = CATALOG_PATH) -> list[Product]:
    """Load the catalog once at startup. Any failure yields an empty catalog."""
    catalog_file = Path(path)
    try:
        data = json.loads(catalog_file.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("catalog load failed path=%s error=%s", catalog_file, exc)
        return []
    products = parse_catalog(data)
    logger.info("catalog loaded path=%s products=%d", catalog_file, len(products))
    return products


def categories(products: Iterable[Product]) -> list[str]:
    """Filter chip labels: All, then each category in first-seen order."""
    labels = [ALL_CATEGORY]
    for product in products:
        if product.category and product.category not in labels:
            labels.append(product.category)
    return labels


def filter_by_category(products: Iterable[Product], category: str) -> list[Product]:
    if category == ALL_CATEGORY:
        return list(products)
    return [product for product in products if product.category == category]
