# backend/routes/cart.py
from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from services.cart_service import CartService
from utils.audit import write_log
from utils.messages import t
from schemas.common import Message
from schemas.cart import CartAddItem, CartUpdateItem, CartItemOut, CartTotalOut, CartItemAdded

router = APIRouter(prefix="/cart", tags=["Cart"])

def _ip(request: Request):
    return request.client.host if request.client else None


# Lines of the user's active cart, priced with current catalog prices
@router.get("/{user_id}", response_model=List[CartItemOut])
def get_cart(user_id: int, db: Session = Depends(get_db)):
    items_out = []
    for item, product in CartService(db).get_cart_contents(user_id):
        items_out.append(CartItemOut(
            cart_item_id=item.id,
            quantity=item.quantity,
            product_id=product.id,
            name=product.name,
            price=product.price,
            image=product.image,
            line_total=round(item.quantity * product.price, 2),
        ))
    return items_out

@router.get("/{user_id}/total", response_model=CartTotalOut)
def get_cart_total(user_id: int, db: Session = Depends(get_db)):
    cart, total = CartService(db).get_cart_total(user_id)
    return CartTotalOut(cart_id=cart.id if cart else None, total=total)

@router.post("/{user_id}/items", response_model=CartItemAdded)
def add_to_cart(
    user_id: int,
    payload: CartAddItem,
    request: Request,
    db: Session = Depends(get_db),
):
    item = CartService(db).add_item(user_id, payload.productId, payload.quantity)

    # Log cart add action
    write_log(
        db,
        user_id=user_id,
        action="CART_ADD",
        resource="cart",
        ip=_ip(request),
        meta={"cart_id": item.cart_id, "product_id": payload.productId, "quantity": payload.quantity},
    )
    return {"message": t("cart.item_added"), "cartItemId": item.id}

@router.put("/items/{cart_item_id}", response_model=Message)
def update_cart_item(
    cart_item_id: int,
    payload: CartUpdateItem,
    request: Request,
    db: Session = Depends(get_db),
):
    item = CartService(db).update_item_quantity(cart_item_id, payload.quantity)
    write_log(
        db,
        user_id=item.cart.user_id,
        action="CART_UPDATE",
        resource="cart",
        ip=_ip(request),
        meta={"item_id": cart_item_id, "quantity": payload.quantity},
    )
    return {"message": t("cart.item_updated")}

@router.delete("/items/{cart_item_id}", response_model=Message)
def delete_cart_item(cart_item_id: int, request: Request, db: Session = Depends(get_db)):
    cart_id = CartService(db).remove_item(cart_item_id)
    write_log(
        db,
        user_id=None,
        action="CART_DELETE",
        resource="cart",
        ip=_ip(request),
        meta={"item_id": cart_item_id, "cart_id": cart_id},
    )
    return {"message": t("cart.item_removed")}
