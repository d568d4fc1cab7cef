# backend/models/cart.py
from sqlalchemy import Column, Integer, ForeignKey, DateTime, UniqueConstraint, CheckConstraint, func
from database import Base


# Represents a single (user, product, quantity) entry in a user's cart
class CartItem(Base):
    __tablename__ = "cart_items" # Table name

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False) # Owner of the entry
    product_id = Column(Integer, ForeignKey("products.id"), index=True, nullable=False) # Referenced catalog product
    quantity = Column(Integer, CheckConstraint("quantity >= 1"), nullable=False, default=1)
    added_at = Column(DateTime(timezone=True), server_default=func.now()) # Moment of first addition

    __table_args__ = (
        # One entry per product per user; repeated adds accumulate quantity
        UniqueConstraint("user_id", "product_id", name="uq_cartitem_user_product"),
    )
