# storefront/storefront/application/cart_engine.py
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Optional, Tuple

from storefront.core import config
from storefront.domain.entities import CartItem, Product

log = logging.getLogger("app.cart")


class Cart:
    """
    Line items keyed by product id, in insertion order.

    Every stored line satisfies 1 <= quantity <= product.stock. Totals are
    recomputed on each read, so there is nothing to invalidate after a mutation.
    """

    def __init__(self, shipping_cost: Optional[float] = None) -> None:
        self.shipping_cost = float(config.SHIPPING_COST if shipping_cost is None else shipping_cost)
        self._lines: Dict[str, CartItem] = {}

    # ----------------------------
    # Mutations
    # ----------------------------
    def add_item(self, product: Product) -> bool:
        """Add one unit of `product`. Returns True if the cart holds the product afterwards."""
        line = self._lines.get(product.id)
        if line is not None:
            # the passed product carries the current stock
            line.product = product
            quantity = min(line.quantity + 1, product.stock)
            if quantity <= 0:
                log.debug("add_item: %s sold out, line dropped", product.id)
                self._lines.pop(product.id, None)
                return False
            line.quantity = quantity
            return True

        if not product.in_stock:
            log.debug("add_item ignored: %s is out of stock", product.id)
            return False

        self._lines[product.id] = CartItem(product=product, quantity=1)
        return True

    def set_quantity(self, product_id: str, quantity: int) -> None:
        line = self._lines.get(product_id)
        if line is None:
            return
        clamped = min(int(quantity), line.product.stock)
        if clamped <= 0:
            self._lines.pop(product_id, None)
            return
        line.quantity = clamped

    def remove_item(self, product_id: str) -> None:
        self._lines.pop(product_id, None)

    def clear(self) -> None:
        self._lines.clear()

    # ----------------------------
    # Reads
    # ----------------------------
    @property
    def items(self) -> Tuple[CartItem, ...]:
        return tuple(self._lines.values())

    def snapshot(self) -> Tuple[CartItem, ...]:
        return tuple(replace(line) for line in self._lines.values())

    def get(self, product_id: str) -> Optional[CartItem]:
        return self._lines.get(product_id)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    @property
    def subtotal(self) -> float:
        return sum((line.product.price * line.quantity for line in self._lines.values()), 0.0)

    @property
    def total(self) -> float:
        return self.subtotal + self.shipping_cost

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._lines
