# backend/routes/cart.py
from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
from schemas.cart import CartAddItem, CartUpdateItem, CartItemOut, CartItemResponse, MessageResponse
from schemas.product import ProductOut
from services.cart_manager import CartEntry, CartManager
from services.cart_store import CartStore
from utils.audit import write_log
from utils.tokenJWT import get_current_user

router = APIRouter(prefix="/cart", tags=["Cart"])

def get_cart_manager(db: Session = Depends(get_db)) -> CartManager:
    return CartManager(CartStore(db))

def _entry_to_out(entry: CartEntry) -> CartItemOut:
    item, product = entry.item, entry.product
    return CartItemOut(
        id=item.id,
        user_id=item.user_id,
        product_id=item.product_id,
        quantity=item.quantity,
        added_at=item.added_at,
        product=ProductOut.model_validate(product) if product is not None else None,
    )

@router.get("", response_model=List[CartItemOut])
def get_cart(
    current_user: User = Depends(get_current_user),
    cart: CartManager = Depends(get_cart_manager),
):
    return [_entry_to_out(entry) for entry in cart.list_cart(current_user.id)]

@router.post("", response_model=CartItemResponse, status_code=status.HTTP_201_CREATED)
def add_to_cart(
    payload: CartAddItem,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    cart: CartManager = Depends(get_cart_manager),
):
    entry = cart.add_item(current_user.id, payload.product_id, payload.quantity)
    out = _entry_to_out(entry)

    write_log(
        db,
        user_id=current_user.id,
        action="CART_ADD",
        resource="cart",
        request=request,
        meta={"product_id": out.product_id, "qty": payload.quantity, "total_qty": out.quantity},
    )
    return CartItemResponse(message="Product added to cart", cart_item=out)

@router.put("/{item_id}", response_model=CartItemResponse)
def update_cart_item(
    item_id: int,
    payload: CartUpdateItem,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    cart: CartManager = Depends(get_cart_manager),
):
    entry = cart.update_item(current_user.id, item_id, payload.quantity)
    out = _entry_to_out(entry)

    write_log(
        db,
        user_id=current_user.id,
        action="CART_UPDATE",
        resource="cart",
        request=request,
        meta={"item_id": item_id, "qty": payload.quantity},
    )
    return CartItemResponse(message="Cart item updated", cart_item=out)

@router.delete("/{item_id}", response_model=MessageResponse)
def delete_cart_item(
    item_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    cart: CartManager = Depends(get_cart_manager),
):
    cart.remove_item(current_user.id, item_id)

    write_log(
        db,
        user_id=current_user.id,
        action="CART_DELETE",
        resource="cart",
        request=request,
        meta={"item_id": item_id},
    )
    return MessageResponse(message="Item removed from cart")
