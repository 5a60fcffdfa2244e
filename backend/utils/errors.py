# backend/utils/errors.py
import re
from typing import Iterable, Optional


# Base class for failures that map onto an HTTP status and a user-facing message
class AppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# Missing or malformed input
class ValidationError(AppError):
    status_code = 400


# Unique constraint violation (duplicate username, product name, ...)
class ConflictError(AppError):
    status_code = 400


# Referenced entity does not exist
class NotFoundError(AppError):
    status_code = 404


# Store unreachable, malformed query, failed commit
class StoreError(AppError):
    status_code = 500


# Offending values quoted by PostgreSQL ("=(...)") and MySQL ("entry '...'")
_VALUE_PARTS = re.compile(r"=\(.*?\)|entry '.*?'", re.DOTALL)


def violated_field(exc: Exception, fields: Iterable[str]) -> Optional[str]:
    """Best-effort name of the column behind a unique violation.

    SQLite reports "UNIQUE constraint failed: users.email", PostgreSQL
    "constraint "ix_users_email" ... Key (email)=(...)", MySQL "Duplicate
    entry '...' for key 'users.ix_users_email'". The offending value is cut
    out first, then the column is matched as a "table.column", "(column)"
    or constraint-name suffix token.
    """
    text = _VALUE_PARTS.sub("", str(getattr(exc, "orig", exc)).lower())
    for field in fields:
        name = re.escape(field.lower())
        if re.search(rf"\.{name}\b|\({name}\)|_{name}(?:_key)?\b", text):
            return field
    return None
