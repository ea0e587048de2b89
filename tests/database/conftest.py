# tests/database/conftest.py
from __future__ import annotations

import pytest
from sqlalchemy.orm import Session

from serieshub.database.models import Demography, Genre


@pytest.fixture()
def db(db_engine) -> Session:
    """
    Per-test SQLAlchemy Session bound to a transaction (rolled back after each test).
    Uses the engine provided by the top-level conftest.
    """
    connection = db_engine.connect()
    trans = connection.begin()
    session = Session(bind=connection, future=True)
    try:
        yield session
    finally:
        session.close()
        trans.rollback()
        connection.close()


@pytest.fixture()
def catalog(db):
    """Lookup rows every series needs: two demographies and three genres."""
    shonen = Demography(name="Shonen", slug="shonen")
    seinen = Demography(name="Seinen", slug="seinen")
    action = Genre(name="Action", slug="action")
    comedy = Genre(name="Comedy", slug="comedy")
    drama = Genre(name="Drama", slug="drama")
    db.add_all([shonen, seinen, action, comedy, drama])
    db.flush()
    return {
        "shonen": shonen.id,
        "seinen": seinen.id,
        "action": action.id,
        "comedy": comedy.id,
        "drama": drama.id,
    }
