# backend/routes/categories.py
from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from services.catalog_service import CatalogService
from utils.audit import write_log
from utils.messages import t
from schemas.common import Message
import schemas.product as product_schemas

router = APIRouter(tags=["Categories"])


@router.get("/categories", response_model=List[product_schemas.CategoryResponse])
def list_categories(db: Session = Depends(get_db)):
    return CatalogService(db).list_categories()


@router.post("/categories", response_model=product_schemas.CategoryCreated)
def create_category(payload: product_schemas.CategoryCreate, request: Request, db: Session = Depends(get_db)):
    category = CatalogService(db).create_category(payload.categoryName)
    write_log(
        db, user_id=None, action="CATEGORY_CREATE", resource="categories",
        ip=request.client.host if request.client else None,
        meta={"category_id": category.id, "name": category.name},
    )
    return {"categoryId": category.id}


# Attach an existing product to an existing category
@router.post("/product-category", response_model=Message)
def add_product_to_category(
    payload: product_schemas.ProductCategoryLink,
    request: Request,
    db: Session = Depends(get_db),
):
    CatalogService(db).link_category(payload.productId, payload.categoryId)
    write_log(
        db, user_id=None, action="CATEGORY_LINK", resource="categories",
        ip=request.client.host if request.client else None,
        meta={"product_id": payload.productId, "category_id": payload.categoryId},
    )
    return {"message": t("category.linked")}
