"""In-memory cart with distinct-line and per-line quantity caps."""

from __future__ import annotations

import logging

from cafe_order.config import MAX_CART_LINES, MAX_LINE_QUANTITY
from cafe_order.errors import CapacityExceeded, QuantityExceeded
from cafe_order.models import CartLine, Product

logger = logging.getLogger(__name__)


class Cart:
    """Ordered cart lines, one per product id, in the order they were added.

    Every mutation checks its cap before touching state, so a rejected call
    leaves the cart exactly as it was.
    """

    def __init__(self, max_lines: int = MAX_CART_LINES, max_quantity: int = MAX_LINE_QUANTITY) -> None:
        if max_lines < 1 or max_quantity < 1:
            raise ValueError("cart caps must be at least 1")
        self.max_lines = max_lines
        self.max_quantity = max_quantity
        self._lines: list[CartLine] = []

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, product_id: object) -> bool:
        return self._index_of(product_id) is not None

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def lines(self) -> tuple[CartLine, ...]:
        """Current lines in insertion order."""
        return tuple(self._lines)

    def get(self, product_id: int) -> CartLine | None:
        idx = self._index_of(product_id)
        if idx is None:
            return None
        return self._lines[idx]

    def total_quantity(self) -> int:
        return sum(line.quantity for line in self._lines)

    def add_item(self, product: Product) -> CartLine:
        """Add one unit of a product, appending a new line if needed."""
        idx = self._index_of(product.id)
        if idx is None:
            if len(self._lines) >= self.max_lines:
                logger.info("add rejected product_id=%s reason=capacity lines=%d", product.id, len(self._lines))
                raise CapacityExceeded(f"cart already holds {self.max_lines} different items")
            line = CartLine(product=product, quantity=1)
            self._lines.append(line)
            logger.debug("add product_id=%s new_line", product.id)
            return line

        current = self._lines[idx]
        if current.quantity + 1 > self.max_quantity:
            logger.info("add rejected product_id=%s reason=quantity qty=%d", product.id, current.quantity)
            raise QuantityExceeded(f"at most {self.max_quantity} units of {product.name}")
        line = CartLine(product=current.product, quantity=current.quantity + 1)
        self._lines[idx] = line
        logger.debug("add product_id=%s qty=%d", product.id, line.quantity)
        return line

    def remove_item(self, product_id: int) -> bool:
        """Delete the whole line for a product. Missing ids are ignored."""
        idx = self._index_of(product_id)
        if idx is None:
            return False
        del self._lines[idx]
        logger.debug("remove product_id=%s", product_id)
        return True

    def change_quantity(self, product_id: int, delta: int) -> CartLine | None:
        """Shift a line's quantity by delta.

        Raising above the cap fails with QuantityExceeded. Going below one
        clamps to one; only remove_item deletes a line.
        """
        idx = self._index_of(product_id)
        if idx is None:
            return None

        current = self._lines[idx]
        new_quantity = current.quantity + delta
        if new_quantity > self.max_quantity:
            logger.info("change rejected product_id=%s reason=quantity wanted=%d", product_id, new_quantity)
            raise QuantityExceeded(f"at most {self.max_quantity} units of {current.product.name}")
        line = CartLine(product=current.product, quantity=max(1, new_quantity))
        self._lines[idx] = line
        return line

    def clear(self) -> None:
        self._lines.clear()

    def _index_of(self, product_id: object) -> int | None:
        for idx, line in enumerate(self._lines):
            if line.product.id == product_id:
                return idx
        return None
