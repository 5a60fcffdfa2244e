# backend/routes/transactions.py
from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from services.ledger_service import LedgerService
from utils.audit import write_log
from schemas.transaction import TransactionCreate, TransactionCreated, TransactionResponse

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.post("", response_model=TransactionCreated)
def create_transaction(payload: TransactionCreate, request: Request, db: Session = Depends(get_db)):
    entry = LedgerService(db).record(payload.userId, payload.totalAmount)
    write_log(
        db, user_id=payload.userId, action="TRANSACTION_CREATE", resource="transactions",
        ip=request.client.host if request.client else None,
        meta={"transaction_id": entry.id, "total_amount": entry.total_amount},
    )
    return {"transactionId": entry.id}


# All transactions recorded for a user, oldest first
@router.get("/{user_id}", response_model=List[TransactionResponse])
def list_transactions(user_id: int, db: Session = Depends(get_db)):
    return LedgerService(db).list_for_user(user_id)
