# backend/services/cart_service.py
import logging
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import transaction
from models.cart import Cart, CartItem
from models.product import Product
from models.users import User
from utils.errors import NotFoundError, ValidationError
from utils.messages import t

logger = logging.getLogger(__name__)


def _validate_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError(t("cart.quantity_invalid"))
    return quantity


class CartService:
    """
    Use cases of the cart domain.

    A user owns at most one cart; it is created by the first added item and
    reused afterwards. Line items are never merged: adding a product twice
    gives two lines. Totals are not stored, they are always computed from the
    current catalog prices.
    """

    def __init__(self, db: Session):
        self.db = db

    # =====================================================
    # QUERIES
    # =====================================================
    def get_active_cart(self, user_id: int) -> Optional[Cart]:
        return (
            self.db.query(Cart)
            .filter(Cart.user_id == user_id)
            .order_by(Cart.created_at.desc(), Cart.id.desc())
            .first()
        )

    def get_cart_contents(self, user_id: int) -> List[Tuple[CartItem, Product]]:
        cart = self.get_active_cart(user_id)
        if cart is None:
            return []

        rows = (
            self.db.query(CartItem, Product)
            .join(Product, CartItem.product_id == Product.id)
            .filter(CartItem.cart_id == cart.id)
            .order_by(CartItem.id)
            .all()
        )
        return [(item, product) for item, product in rows]

    def get_cart_total(self, user_id: int) -> Tuple[Optional[Cart], float]:
        cart = self.get_active_cart(user_id)
        if cart is None:
            return None, 0.0
        return cart, self._compute_total(cart.id)

    # =====================================================
    # COMMANDS
    # =====================================================
    def add_item(self, user_id: int, product_id: int, quantity: int) -> CartItem:
        quantity = _validate_quantity(quantity)

        with transaction(self.db):
            if self.db.get(User, user_id) is None:
                raise NotFoundError(t("user.not_found"))

            product = self.db.get(Product, product_id)
            if product is None:
                raise NotFoundError(t("product.not_found"))

            cart = self._get_or_create_cart(user_id)
            self._check_stock(product, quantity, cart.id)

            item = CartItem(cart_id=cart.id, product_id=product_id, quantity=quantity)
            self.db.add(item)
            self.db.flush()

        logger.info("Added product %s x%s to cart %s of user %s", product_id, quantity, item.cart_id, user_id)
        return item

    def update_item_quantity(self, cart_item_id: int, quantity: int) -> CartItem:
        quantity = _validate_quantity(quantity)

        with transaction(self.db):
            item = self.db.get(CartItem, cart_item_id)
            if item is None:
                raise NotFoundError(t("cart.item_not_found"))

            product = self.db.get(Product, item.product_id)
            if product is not None:
                self._check_stock(product, quantity, item.cart_id, exclude_item_id=item.id)

            item.quantity = quantity
            self.db.flush()

        logger.info("Cart item %s quantity set to %s", cart_item_id, quantity)
        return item

    def remove_item(self, cart_item_id: int) -> int:
        """Delete a line item and return the id of the cart it belonged to."""
        with transaction(self.db):
            item = self.db.get(CartItem, cart_item_id)
            if item is None:
                raise NotFoundError(t("cart.item_not_found"))

            cart_id = item.cart_id
            self.db.delete(item)
            self.db.flush()

        logger.info("Removed cart item %s from cart %s", cart_item_id, cart_id)
        return cart_id

    # ---- HELPERS ----
    def _get_or_create_cart(self, user_id: int) -> Cart:
        cart = self.get_active_cart(user_id)
        if cart is not None:
            return cart

        cart = Cart(user_id=user_id)
        self.db.add(cart)
        try:
            self.db.flush()
        except IntegrityError:
            # A concurrent request created this user's cart first (carts.user_id is unique)
            self.db.rollback()
            cart = self.get_active_cart(user_id)
            if cart is None:
                raise
            logger.info("Reusing cart %s created concurrently for user %s", cart.id, user_id)
        return cart

    def _check_stock(
        self,
        product: Product,
        quantity: int,
        cart_id: int,
        exclude_item_id: Optional[int] = None,
    ) -> None:
        # Lines are never merged, so every line of the same product counts against stock
        held = self.db.query(func.coalesce(func.sum(CartItem.quantity), 0)).filter(
            CartItem.cart_id == cart_id,
            CartItem.product_id == product.id,
        )
        if exclude_item_id is not None:
            held = held.filter(CartItem.id != exclude_item_id)

        available = max((product.stock or 0) - int(held.scalar() or 0), 0)
        if quantity > available:
            raise ValidationError(t("cart.insufficient_stock", available=available))

    def _compute_total(self, cart_id: int) -> float:
        total = (
            self.db.query(func.coalesce(func.sum(CartItem.quantity * Product.price), 0))
            .select_from(CartItem)
            .join(Product, CartItem.product_id == Product.id)
            .filter(CartItem.cart_id == cart_id)
            .scalar()
        )
        return round(float(total or 0), 2)
