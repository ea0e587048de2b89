# tests/services/conftest.py
from __future__ import annotations
import pytest
from sqlalchemy.orm import Session
from starlette.testclient import TestClient

from serieshub.database.models import Demography, Genre
from serieshub.services.api.app import create_app
from serieshub.services.api.deps import get_cover_store, transactional_session
from serieshub.services.images.cover_image import CoverImageStore


@pytest.fixture()
def api_session(db_engine):
    """One connection/transaction for the whole test, rolled back at the end."""
    conn = db_engine.connect()
    trans = conn.begin()
    session = Session(bind=conn, future=True)
    try:
        yield session
    finally:
        session.close()
        trans.rollback()
        conn.close()


@pytest.fixture()
def seeded(api_session):
    shonen = Demography(name="Shonen", slug="shonen")
    action = Genre(name="Action", slug="action")
    comedy = Genre(name="Comedy", slug="comedy")
    api_session.add_all([shonen, action, comedy])
    api_session.flush()
    return {"shonen": shonen.id, "action": action.id, "comedy": comedy.id}


@pytest.fixture()
def api_client(api_session, tmp_path):
    """
    A TestClient whose FastAPI dependency `transactional_session` is overridden
    to yield a single SQLAlchemy Session bound to the test engine/transaction.
    All API calls in one test share the same session (so POST -> GET works),
    and everything is rolled back at the end of the test. Covers are written
    under tmp_path.
    """
    app = create_app()

    def _override():
        # yield the same session for every request in this test
        yield api_session

    app.dependency_overrides[transactional_session] = _override
    app.dependency_overrides[get_cover_store] = lambda: CoverImageStore(tmp_path)

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
