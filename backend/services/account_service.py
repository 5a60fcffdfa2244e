# backend/services/account_service.py
import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import transaction
from models.users import User
from utils.errors import ConflictError, NotFoundError, ValidationError, violated_field
from utils.hashing import get_password_hash
from utils.messages import t

logger = logging.getLogger(__name__)


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


class AccountService:
    """Registration and maintenance of user accounts."""

    def __init__(self, db: Session):
        self.db = db

    def list_users(self) -> List[User]:
        return self.db.query(User).order_by(User.id).all()

    def get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError(t("user.not_found"))
        return user

    def register(self, username: str, password: str, email: str, address: Optional[str] = None) -> User:
        username, email = _clean(username), _clean(email).lower()
        if not username or not email or not password:
            raise ValidationError(t("user.required"))

        with transaction(self.db):
            self._ensure_unique(username, email)
            user = User(
                username=username,
                email=email,
                password_hash=get_password_hash(password),
                address=address or None,
            )
            self.db.add(user)
            self._flush_unique()

        logger.info("Registered user %s (%s)", user.id, username)
        return user

    def update_user(
        self,
        user_id: int,
        username: str,
        password: str,
        email: str,
        role: Optional[str] = None,
        address: Optional[str] = None,
    ) -> User:
        username, email = _clean(username), _clean(email).lower()
        if not username or not email or not password:
            raise ValidationError(t("user.required"))

        with transaction(self.db):
            user = self.get_user(user_id)
            self._ensure_unique(username, email, exclude_id=user.id)
            user.username = username
            user.email = email
            user.password_hash = get_password_hash(password)
            user.address = address or None
            if role:
                user.role = role.strip()
            self._flush_unique()

        logger.info("Updated user %s", user_id)
        return user

    def delete_user(self, user_id: int) -> None:
        with transaction(self.db):
            user = self.get_user(user_id)
            self.db.delete(user)
        logger.info("Deleted user %s", user_id)

    def _ensure_unique(self, username: str, email: str, exclude_id: Optional[int] = None) -> None:
        query = self.db.query(User).filter(or_(User.username == username, User.email == email))
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        matches = query.all()
        if any(existing.username == username for existing in matches):
            raise ConflictError(t("user.username_exists"))
        if matches:
            raise ConflictError(t("user.email_exists"))

    def _flush_unique(self) -> None:
        # Unique constraints catch a concurrent insert that slipped past the pre-check
        try:
            self.db.flush()
        except IntegrityError as exc:
            field = violated_field(exc, ("username", "email"))
            if field == "username":
                raise ConflictError(t("user.username_exists")) from exc
            if field == "email":
                raise ConflictError(t("user.email_exists")) from exc
            raise ConflictError(t("error.duplicate")) from exc
