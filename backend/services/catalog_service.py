# backend/services/catalog_service.py
import logging
import math
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from database import transaction
from models.cart import CartItem
from models.category import Category, ProductCategory
from models.product import Product
from utils.errors import ConflictError, NotFoundError, ValidationError
from utils.messages import t

logger = logging.getLogger(__name__)


def _parse_price(value) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    return price if math.isfinite(price) else None


def _parse_stock(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def validate_product_fields(name, stock, price, image) -> Tuple[str, int, float, str]:
    """Check and normalize writable product fields.

    Returns (trimmed name, parsed stock, parsed price, trimmed image).
    Numeric fields may arrive as strings ("10", "2.50") and are stored parsed.
    """
    name = str(name).strip() if name is not None else ""
    if not name:
        raise ValidationError(t("product.name_required"))

    image = str(image).strip() if image is not None else ""
    if not image:
        raise ValidationError(t("product.image_required"))

    parsed_price = _parse_price(price)
    if parsed_price is None or parsed_price <= 0:
        raise ValidationError(t("product.price_invalid"))

    parsed_stock = _parse_stock(stock)
    if parsed_stock is None or parsed_stock < 0:
        raise ValidationError(t("product.stock_invalid"))

    return name, parsed_stock, parsed_price, image


class CatalogService:
    """Products, categories and the association between them."""

    def __init__(self, db: Session):
        self.db = db

    # =========================
    # PRODUCTS
    # =========================
    def list_products(self) -> List[Product]:
        return (
            self.db.query(Product)
            .options(selectinload(Product.categories))
            .order_by(Product.id)
            .all()
        )

    def get_product(self, product_id: int) -> Product:
        product = self.db.get(Product, product_id)
        if product is None:
            raise NotFoundError(t("product.not_found"))
        return product

    def create_product(
        self,
        name,
        stock,
        price,
        image,
        description: Optional[str] = None,
        category_ids: Optional[Iterable[int]] = None,
    ) -> Product:
        name, stock, price, image = validate_product_fields(name, stock, price, image)

        with transaction(self.db):
            if self._find_by_name(name) is not None:
                raise ConflictError(t("product.name_exists"))

            product = Product(name=name, stock=stock, price=price, image=image, description=description or None)
            self.db.add(product)
            self._flush_product()

            if category_ids:
                self._replace_categories(product, category_ids)

        logger.info("Created product %s (%s)", product.id, name)
        return product

    def update_product(
        self,
        product_id: int,
        name,
        stock,
        price,
        image,
        description: Optional[str] = None,
        category_ids: Optional[Iterable[int]] = None,
    ) -> Product:
        name, stock, price, image = validate_product_fields(name, stock, price, image)

        with transaction(self.db):
            product = self.get_product(product_id)

            other = self._find_by_name(name)
            if other is not None and other.id != product.id:
                raise ConflictError(t("product.name_exists"))

            product.name = name
            product.stock = stock
            product.price = price
            product.image = image
            product.description = description or None
            self._flush_product()

            # None leaves associations untouched, an empty list clears them
            if category_ids is not None:
                self._replace_categories(product, category_ids)

        logger.info("Updated product %s", product_id)
        return product

    def delete_product(self, product_id: int) -> None:
        with transaction(self.db):
            product = self.get_product(product_id)
            self.db.query(ProductCategory).filter(
                ProductCategory.product_id == product.id
            ).delete(synchronize_session=False)
            self.db.query(CartItem).filter(
                CartItem.product_id == product.id
            ).delete(synchronize_session=False)
            self.db.delete(product)

        logger.info("Deleted product %s", product_id)

    # =========================
    # CATEGORIES
    # =========================
    def list_categories(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.id).all()

    def create_category(self, name: str) -> Category:
        name = (name or "").strip()
        if not name:
            raise ValidationError(t("category.name_required"))

        with transaction(self.db):
            if self.db.query(Category).filter(Category.name == name).first() is not None:
                raise ConflictError(t("category.name_exists"))
            category = Category(name=name)
            self.db.add(category)
            try:
                self.db.flush()
            except IntegrityError as exc:
                raise ConflictError(t("category.name_exists")) from exc

        logger.info("Created category %s (%s)", category.id, name)
        return category

    def link_category(self, product_id: int, category_id: int) -> None:
        with transaction(self.db):
            product = self.get_product(product_id)
            if self.db.get(Category, category_id) is None:
                raise NotFoundError(t("category.not_found"))
            if self.db.get(ProductCategory, (product_id, category_id)) is not None:
                raise ConflictError(t("category.already_linked"))

            self.db.add(ProductCategory(product_id=product_id, category_id=category_id))
            try:
                self.db.flush()
            except IntegrityError as exc:
                raise ConflictError(t("category.already_linked")) from exc
            self.db.expire(product, ["categories"])

    # ---- HELPERS ----
    def _find_by_name(self, name: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.name == name).first()

    def _flush_product(self) -> None:
        # Concurrent insert of the same name between pre-check and write
        try:
            self.db.flush()
        except IntegrityError as exc:
            raise ConflictError(t("product.name_exists")) from exc

    def _replace_categories(self, product: Product, category_ids: Iterable[int]) -> None:
        ids = list(dict.fromkeys(category_ids))
        if ids:
            found = {row[0] for row in self.db.query(Category.id).filter(Category.id.in_(ids))}
            missing = [i for i in ids if i not in found]
            if missing:
                raise ValidationError(t("category.unknown_ids", ids=", ".join(str(i) for i in missing)))

        self.db.query(ProductCategory).filter(
            ProductCategory.product_id == product.id
        ).delete(synchronize_session=False)
        self.db.add_all([ProductCategory(product_id=product.id, category_id=i) for i in ids])
        self.db.flush()
        self.db.expire(product, ["categories"])
