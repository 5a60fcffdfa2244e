# backend/schemas/product.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional, List

from schemas.common import reject_bool


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class CategoryResponse(ORMBase):
    id: int
    name: str


# Request schema for creating a category
class CategoryCreate(BaseModel):
    categoryName: str


class CategoryCreated(BaseModel):
    categoryId: int


# Request schema for attaching a product to a category
class ProductCategoryLink(BaseModel):
    productId: int
    categoryId: int

    @field_validator("productId", "categoryId", mode="before")
    @classmethod
    def numbers_not_bool(cls, value):
        return reject_bool(value)


# Shared writable attributes; range checks live in the catalog service
class ProductBase(BaseModel):
    name: str
    stock: int
    price: float
    image: str
    description: Optional[str] = None
    categoryIds: Optional[List[int]] = None

    @field_validator("stock", "price", mode="before")
    @classmethod
    def numbers_not_bool(cls, value):
        return reject_bool(value)


# Schema for creating a new product
class ProductCreate(ProductBase):
    pass


# Schema for full product updates (PUT); categoryIds replaces the whole set when given
class ProductUpdate(ProductBase):
    pass


# Full product representation including its categories
class ProductResponse(ORMBase):
    id: int
    name: str
    stock: int
    price: float
    image: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    categories: List[CategoryResponse] = []


class ProductCreated(BaseModel):
    productId: int
    message: str
