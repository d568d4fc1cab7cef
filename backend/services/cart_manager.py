# backend/services/cart_manager.py
import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from database import MAX_INTEGER
from services.errors import (
    ConflictError,
    ForbiddenError,
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _storable(row_id: int) -> bool:
    # Ids outside the column range cannot match any row
    return -MAX_INTEGER - 1 <= row_id <= MAX_INTEGER


@dataclass
class CartEntry:
    """A cart item joined with the current catalog data of its product."""

    item: Any
    product: Optional[Any]


class CartManager:
    """Per-user cart rules: stock sufficiency, ownership and quantity accumulation.

    ``store`` provides ``transaction()``, ``get_product``, ``list_items``,
    ``get_item``, ``find_item``, ``create_item``, ``increment_quantity``,
    ``set_quantity`` and ``delete_item`` (see :class:`services.cart_store.CartStore`).
    The caller passes the authenticated user id; it is never taken from the
    request body.
    """

    def __init__(self, store):
        self.store = store

    def list_cart(self, user_id: int) -> List[CartEntry]:
        with self.store.transaction():
            rows = self.store.list_items(user_id)
        return [CartEntry(item, product) for item, product in rows]

    def add_item(self, user_id: int, product_id: Optional[int], quantity: Optional[int]) -> CartEntry:
        if product_id is None or quantity is None:
            raise ValidationError("Product ID and quantity are required")
        if isinstance(product_id, bool) or not isinstance(product_id, int):
            raise ValidationError("Invalid product ID")
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")
        if not _storable(product_id):
            raise NotFoundError("Product not found")

        try:
            return self._add_item(user_id, product_id, quantity)
        except ConflictError:
            # Another request inserted the same (user, product) entry first
            logger.warning("Retrying cart add as increment: user=%s product=%s", user_id, product_id)
            return self._add_item(user_id, product_id, quantity)

    def _add_item(self, user_id: int, product_id: int, quantity: int) -> CartEntry:
        with self.store.transaction():
            product = self.store.get_product(product_id, lock=True)
            if product is None:
                raise NotFoundError("Product not found")
            # Only the requested increment is checked, not the accumulated total
            if product.stock < quantity:
                raise InsufficientStockError("Not enough stock available")

            item = self.store.find_item(user_id, product_id)
            if item is not None:
                item = self.store.increment_quantity(item, quantity)
            else:
                item = self.store.create_item(user_id, product_id, quantity)

        logger.info("Cart add: user=%s product=%s qty=%s", user_id, product_id, quantity)
        return CartEntry(item, product)

    def update_item(self, user_id: int, item_id: int, quantity: Optional[int]) -> CartEntry:
        if quantity is None or quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        with self.store.transaction():
            item = self.store.get_item(item_id) if _storable(item_id) else None
            if item is None:
                raise NotFoundError("Cart item not found")
            if item.user_id != user_id:
                raise ForbiddenError("Not authorized to update this cart item")

            product = self.store.get_product(item.product_id, lock=True)
            if product is None or product.stock < quantity:
                raise InsufficientStockError("Not enough stock available")

            item = self.store.set_quantity(item, quantity)

        logger.info("Cart update: user=%s item=%s qty=%s", user_id, item_id, quantity)
        return CartEntry(item, product)

    def remove_item(self, user_id: int, item_id: int) -> None:
        with self.store.transaction():
            item = self.store.get_item(item_id) if _storable(item_id) else None
            if item is None:
                raise NotFoundError("Cart item not found")
            if item.user_id != user_id:
                raise ForbiddenError("Not authorized to delete this cart item")
            self.store.delete_item(item)

        logger.info("Cart remove: user=%s item=%s", user_id, item_id)
