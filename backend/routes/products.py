# backend/routes/products.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import MAX_INTEGER, get_db
from models.product import Product
from services.errors import NotFoundError, ValidationError
import schemas.product as product_schemas

router = APIRouter(tags=["Products"])


def _parse_product_id(raw: str) -> int:
    try:
        product_id = int(raw)
    except (TypeError, ValueError):
        raise ValidationError("Invalid product ID")
    # A valid number beyond the id column range cannot name a product
    if abs(product_id) > MAX_INTEGER:
        raise NotFoundError("Product not found")
    return product_id


# =============================
# PRODUCT LIST
# =============================
@router.get("/products", response_model=List[product_schemas.ProductOut])
def list_products(db: Session = Depends(get_db)):
    return db.query(Product).order_by(Product.id.asc()).all()


@router.get("/products/{product_id}", response_model=product_schemas.ProductOut)
def get_product(product_id: str, db: Session = Depends(get_db)):
    product = db.query(Product).filter(Product.id == _parse_product_id(product_id)).first()
    if not product:
        raise NotFoundError("Product not found")
    return product


# =============================
# CREATE PRODUCT
# =============================
@router.post("/products", response_model=product_schemas.ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(payload: product_schemas.ProductCreate, db: Session = Depends(get_db)):
    # The id comes from the table's autoincrement key
    product = Product(**payload.model_dump())
    db.add(product)
    db.commit()
    db.refresh(product)
    return product
