from datetime import datetime
from pydantic import BaseModel, field_validator
from typing import Optional

from schemas.common import reject_bool

# Request schema for recording a purchase
class TransactionCreate(BaseModel):
    userId: int
    totalAmount: float

    @field_validator("userId", "totalAmount", mode="before")
    @classmethod
    def numbers_not_bool(cls, value):
        return reject_bool(value)

class TransactionCreated(BaseModel):
    transactionId: int

class TransactionResponse(BaseModel):
    id: int
    user_id: int
    total_amount: float
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
