# backend/models/category.py
from sqlalchemy import Column, Integer, String, ForeignKey
from database import Base

# Product category, e.g. "Shoes" or "Accessories"
class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False, index=True)


# Join entity of the many-to-many Product <-> Category association
class ProductCategory(Base):
    __tablename__ = "product_categories"

    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True)
