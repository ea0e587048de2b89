# serieshub/services/api/deps.py
from __future__ import annotations
from typing import Generator
from fastapi import Depends
from sqlalchemy.orm import Session

from serieshub.common.settings import get_settings
from serieshub.database.core.main import SessionLocal
from serieshub.database.repos.series_read_repo import SqlAlchemySeriesReadRepo
from serieshub.database.repos.series_write_repo import SqlAlchemySeriesWriteRepo
from serieshub.domain.policies.series_validation import SeriesRules
from serieshub.domain.ports.images import CoverImagePort
from serieshub.services.images.cover_image import CoverImageStore


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def transactional_session(db: Session = Depends(get_db)) -> Generator[Session, None, None]:
    """
    Request-scoped transaction. Every repo built for the request shares it:
    COMMIT on normal exit, ROLLBACK if an exception (including the
    HTTPException raised for a failed command) bubbles out.
    """
    with db.begin():
        yield db


def get_cover_store() -> CoverImagePort:
    """Provide the CoverImagePort implementation via DI (swappable in tests)."""
    return CoverImageStore.from_config(get_settings().images)


def get_series_rules() -> SeriesRules:
    return SeriesRules.from_settings(get_settings())


def get_read_repo(db: Session = Depends(transactional_session)) -> SqlAlchemySeriesReadRepo:
    return SqlAlchemySeriesReadRepo(db)


def get_write_repo(db: Session = Depends(transactional_session)) -> SqlAlchemySeriesWriteRepo:
    return SqlAlchemySeriesWriteRepo(db)
