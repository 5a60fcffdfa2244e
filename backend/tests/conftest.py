"""
Shared fixtures.

Every test gets a fresh in-memory SQLite database. Engine-level tests use the
``db_session`` fixture directly; API tests use ``test_client``, which routes the
``get_db`` dependency to the same database.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOCALE"] = "en"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from database import Base, create_db_engine, get_db, init_db
from main import app
from services.account_service import AccountService
from services.catalog_service import CatalogService


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def test_client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    client = TestClient(app)
    yield client

    # Clean up dependency overrides
    app.dependency_overrides.clear()


@pytest.fixture
def alice(db_session):
    return AccountService(db_session).register("alice", "secret", "a@x.com", "1 Main St")


@pytest.fixture
def widget(db_session):
    return CatalogService(db_session).create_product("Widget", 5, 10, "widget.png")
