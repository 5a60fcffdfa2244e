# backend/services/ledger_service.py
import logging
import math
from typing import List

from sqlalchemy.orm import Session

from database import transaction
from models.transaction import Transaction
from models.users import User
from utils.errors import NotFoundError, ValidationError
from utils.messages import t

logger = logging.getLogger(__name__)


class LedgerService:
    """Recorded purchase transactions per user."""

    def __init__(self, db: Session):
        self.db = db

    def record(self, user_id: int, total_amount) -> Transaction:
        if isinstance(total_amount, bool):
            raise ValidationError(t("transaction.amount_invalid"))
        try:
            amount = float(total_amount)
        except (TypeError, ValueError):
            raise ValidationError(t("transaction.amount_invalid"))
        if not math.isfinite(amount) or amount < 0:
            raise ValidationError(t("transaction.amount_invalid"))

        with transaction(self.db):
            if self.db.get(User, user_id) is None:
                raise NotFoundError(t("user.not_found"))
            entry = Transaction(user_id=user_id, total_amount=amount)
            self.db.add(entry)
            self.db.flush()

        logger.info("Recorded transaction %s for user %s: %.2f", entry.id, user_id, amount)
        return entry

    def list_for_user(self, user_id: int) -> List[Transaction]:
        return (
            self.db.query(Transaction)
            .filter(Transaction.user_id == user_id)
            .order_by(Transaction.created_at, Transaction.id)
            .all()
        )
