from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Optional

from schemas.product import ProductOut

# Request schema for adding an item to the cart; range checks live in the cart manager
class CartAddItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: Optional[int] = Field(default=None, alias="productId")
    quantity: Optional[int] = None

    @field_validator("product_id", mode="before")
    @classmethod
    def numeric_product_id(cls, v: Any) -> Any:
        if v is None or (isinstance(v, int) and not isinstance(v, bool)):
            return v
        if isinstance(v, float) and v.is_integer():
            return int(v)
        if isinstance(v, str):
            try:
                return int(v.strip())
            except ValueError:
                pass
        raise ValueError("Invalid product ID")

# Request schema for replacing a cart item's quantity
class CartUpdateItem(BaseModel):
    quantity: Optional[int] = None

# A cart item joined with its product's current catalog data
class CartItemOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    user_id: int = Field(alias="userId")
    product_id: int = Field(alias="productId")
    quantity: int
    added_at: Optional[datetime] = Field(default=None, alias="addedAt")
    product: Optional[ProductOut] = None

# Response for POST and PUT /cart
class CartItemResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    cart_item: CartItemOut = Field(alias="cartItem")

class MessageResponse(BaseModel):
    message: str
