import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from models.log import AuditLog

logger = logging.getLogger(__name__)

def write_log(db: Session, *, user_id, action, resource, status="SUCCESS", ip=None, meta=None):
    entry = AuditLog(user_id=user_id, action=action, resource=resource, status=status, ip=ip, meta=meta or {})
    db.add(entry)
    try:
        db.commit()
    except SQLAlchemyError:
        # The audited change is already committed; a lost audit row must not fail the request
        db.rollback()
        logger.exception("Audit log write failed: %s %s user=%s", resource, action, user_id)
        return None
    logger.info("%s %s %s user=%s meta=%s", resource, action, status, user_id, meta or {})
    return entry
