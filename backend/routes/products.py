# backend/routes/products.py
from typing import List
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from database import get_db
from services.catalog_service import CatalogService
from utils.audit import write_log
from utils.messages import t
from schemas.common import Message
import schemas.product as product_schemas

router = APIRouter(tags=["Products"])

def _ip(request: Request):
    return request.client.host if request.client else None


# =========================
# PRODUCT LIST
# =========================
@router.get("/products", response_model=List[product_schemas.ProductResponse])
def list_products(db: Session = Depends(get_db)):
    return CatalogService(db).list_products()


# =========================
# SINGLE PRODUCT
# =========================
@router.get("/products/{product_id}", response_model=product_schemas.ProductResponse)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return CatalogService(db).get_product(product_id)


# =========================
# ADD PRODUCT
# =========================
@router.post("/products", response_model=product_schemas.ProductCreated, status_code=status.HTTP_201_CREATED)
def add_product(payload: product_schemas.ProductCreate, request: Request, db: Session = Depends(get_db)):
    product = CatalogService(db).create_product(
        name=payload.name,
        stock=payload.stock,
        price=payload.price,
        image=payload.image,
        description=payload.description,
        category_ids=payload.categoryIds,
    )
    write_log(
        db, user_id=None, action="PRODUCT_CREATE", resource="products",
        ip=_ip(request), meta={"product_id": product.id, "name": product.name},
    )
    return {"productId": product.id, "message": t("product.created")}


# =========================
# UPDATE PRODUCT
# =========================
@router.put("/products/{product_id}", response_model=Message)
def update_product(
    product_id: int,
    payload: product_schemas.ProductUpdate,
    request: Request,
    db: Session = Depends(get_db),
):
    CatalogService(db).update_product(
        product_id,
        name=payload.name,
        stock=payload.stock,
        price=payload.price,
        image=payload.image,
        description=payload.description,
        category_ids=payload.categoryIds,
    )
    write_log(
        db, user_id=None, action="PRODUCT_UPDATE", resource="products",
        ip=_ip(request), meta={"product_id": product_id, "category_ids": payload.categoryIds},
    )
    return {"message": t("product.updated")}


# =========================
# DELETE PRODUCT
# =========================
@router.delete("/products/{product_id}", response_model=Message)
def delete_product(product_id: int, request: Request, db: Session = Depends(get_db)):
    CatalogService(db).delete_product(product_id)
    write_log(
        db, user_id=None, action="PRODUCT_DELETE", resource="products",
        ip=_ip(request), meta={"product_id": product_id},
    )
    return {"message": t("product.deleted")}
