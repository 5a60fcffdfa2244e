# backend/routes/users.py
from typing import List
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from database import get_db
from services.account_service import AccountService
from utils.audit import write_log
from utils.messages import t
from schemas.common import Message
import schemas.user as user_schemas

router = APIRouter(prefix="/users", tags=["Users"])

def _ip(request: Request):
    return request.client.host if request.client else None


@router.get("", response_model=List[user_schemas.UserResponse])
def list_users(db: Session = Depends(get_db)):
    return AccountService(db).list_users()


# Register a new user
@router.post("", response_model=user_schemas.UserCreated, status_code=status.HTTP_201_CREATED)
def register_user(payload: user_schemas.UserCreate, request: Request, db: Session = Depends(get_db)):
    user = AccountService(db).register(
        username=payload.username,
        password=payload.password,
        email=payload.email,
        address=payload.address,
    )

    write_log(
        db,
        user_id=user.id,
        action="REGISTER",
        resource="users",
        ip=_ip(request),
        meta={"username": user.username},
    )
    return {"userId": user.id, "message": t("user.registered")}


@router.get("/{user_id}", response_model=user_schemas.UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return AccountService(db).get_user(user_id)


@router.put("/{user_id}", response_model=Message)
def update_user(
    user_id: int,
    payload: user_schemas.UserUpdate,
    request: Request,
    db: Session = Depends(get_db),
):
    AccountService(db).update_user(
        user_id,
        username=payload.username,
        password=payload.password,
        email=payload.email,
        role=payload.role,
        address=payload.address,
    )
    write_log(db, user_id=user_id, action="USER_UPDATE", resource="users", ip=_ip(request))
    return {"message": t("user.updated")}


@router.delete("/{user_id}", response_model=Message)
def delete_user(user_id: int, request: Request, db: Session = Depends(get_db)):
    AccountService(db).delete_user(user_id)
    # The row is gone, so the id only goes into meta
    write_log(db, user_id=None, action="USER_DELETE", resource="users", ip=_ip(request),
              meta={"user_id": user_id})
    return {"message": t("user.deleted")}
