# backend/database.py
import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from config import settings
from utils.errors import StoreError
from utils.messages import t

logger = logging.getLogger(__name__)


def create_db_engine(url: str) -> Engine:
    # Azure / Heroku style URLs use postgres://, SQLAlchemy needs postgresql://
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)

    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # In-memory database lives in a single connection shared by the pool
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, **kwargs)

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(url, pool_pre_ping=True)


engine = create_db_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

@contextmanager
def transaction(db: Session):
    """Run a unit of work: commit on success, roll back on any failure."""
    try:
        yield db
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Store operation failed: %s", exc)
        raise StoreError(t("error.server")) from exc
    except Exception:
        db.rollback()
        raise

def init_db(bind: Engine = None):
    # Register every model on Base.metadata before creating tables
    import models.users  # noqa: F401
    import models.category  # noqa: F401
    import models.product  # noqa: F401
    import models.cart  # noqa: F401
    import models.transaction  # noqa: F401
    import models.log  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)

def dispose_db():
    engine.dispose()
