from pydantic import BaseModel, field_validator
from typing import Optional

from schemas.common import reject_bool

# Request schema for adding an item to the cart
class CartAddItem(BaseModel):
    productId: int
    quantity: int

    @field_validator("productId", "quantity", mode="before")
    @classmethod
    def numbers_not_bool(cls, value):
        return reject_bool(value)

# Request schema for updating cart item quantity
class CartUpdateItem(BaseModel):
    quantity: int

    @field_validator("quantity", mode="before")
    @classmethod
    def numbers_not_bool(cls, value):
        return reject_bool(value)

# Response schema for a single cart line joined with its product
class CartItemOut(BaseModel):
    cart_item_id: int
    quantity: int
    product_id: int
    name: str
    price: float
    image: str
    line_total: float

# Live total of the user's active cart
class CartTotalOut(BaseModel):
    cart_id: Optional[int] = None
    total: float

class CartItemAdded(BaseModel):
    message: str
    cartItemId: int
