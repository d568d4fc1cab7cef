# backend/models/product.py
from sqlalchemy import Column, Integer, String, Float, CheckConstraint
from database import Base

# Model Product
# A catalog entry. The integer id is generated by the database
# (autoincrement), never derived from the current maximum.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    title = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False)
    category = Column(String, nullable=False, index=True)

    price = Column(Float, CheckConstraint("price >= 0"), nullable=False)
    rating = Column(Float, CheckConstraint("rating >= 0 AND rating <= 5"), nullable=False)

    # Read by the cart as a sufficiency gate, never decremented by it.
    stock = Column(Integer, CheckConstraint("stock >= 0"), nullable=False)
