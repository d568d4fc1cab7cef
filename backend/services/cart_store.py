# backend/services/cart_store.py
import logging
from contextlib import contextmanager
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from models.cart import CartItem
from models.product import Product
from services.errors import ConflictError, StorageError

logger = logging.getLogger(__name__)


class CartStore:
    """Data access for cart items and the read-only product lookup they need.

    All reads and writes of one cart operation happen inside
    :meth:`transaction`, which commits on success, rolls back on any error
    and converts driver failures into :class:`StorageError`.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self):
        try:
            yield
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Cart write conflict: %s", e.orig)
            raise ConflictError() from e
        except (SQLAlchemyError, OverflowError) as e:
            # OverflowError: the DB-API driver rejected a value before SQL ran
            self.db.rollback()
            logger.exception("Cart store failure: %s", e)
            raise StorageError() from e
        except Exception:
            self.db.rollback()
            raise

    # --- catalog (read-only) ---
    def get_product(self, product_id: int, lock: bool = False) -> Optional[Product]:
        query = self.db.query(Product).filter(Product.id == product_id)
        if lock:
            # Holds the row until commit so the stock check stays valid for the write
            query = query.with_for_update()
        return query.first()

    # --- cart items ---
    def list_items(self, user_id: int) -> List[Tuple[CartItem, Optional[Product]]]:
        rows = (
            self.db.query(CartItem, Product)
            .outerjoin(Product, Product.id == CartItem.product_id)
            .filter(CartItem.user_id == user_id)
            .order_by(CartItem.added_at, CartItem.id)
            .all()
        )
        return [(item, product) for item, product in rows]

    def get_item(self, item_id: int) -> Optional[CartItem]:
        return self.db.query(CartItem).filter(CartItem.id == item_id).first()

    def find_item(self, user_id: int, product_id: int) -> Optional[CartItem]:
        return self.db.query(CartItem).filter(
            CartItem.user_id == user_id, CartItem.product_id == product_id
        ).first()

    def create_item(self, user_id: int, product_id: int, quantity: int) -> CartItem:
        item = CartItem(user_id=user_id, product_id=product_id, quantity=quantity)
        self.db.add(item)
        self.db.flush()
        # Loads the server-side added_at default
        self.db.refresh(item)
        return item

    def increment_quantity(self, item: CartItem, quantity: int) -> CartItem:
        # Rendered as "quantity = quantity + :n" so concurrent increments add up
        item.quantity = CartItem.quantity + quantity
        self.db.flush()
        # Read the summed value back inside the same transaction
        self.db.refresh(item, ["quantity"])
        return item

    def set_quantity(self, item: CartItem, quantity: int) -> CartItem:
        item.quantity = quantity
        self.db.flush()
        return item

    def delete_item(self, item: CartItem) -> None:
        self.db.delete(item)
        self.db.flush()
