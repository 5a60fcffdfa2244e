# backend/models/product.py
from sqlalchemy import Column, Integer, String, Float, DateTime, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base
from models.category import Category, ProductCategory

# Model Product
# A catalog entry: unique name, current price and stock, image reference.
# Categories are attached through the product_categories join table and
# managed explicitly by the catalog service, hence the read-only relationship.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False, index=True)

    stock = Column(Integer, CheckConstraint("stock >= 0"), nullable=False, default=0)
    price = Column(Float, CheckConstraint("price >= 0"), nullable=False)

    image = Column(String(500), nullable=False)
    description = Column(String(2000), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    categories = relationship(
        Category,
        secondary=ProductCategory.__table__,
        order_by=Category.id,
        viewonly=True,
    )
