# serieshub/services/api/routers/catalog.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from serieshub.common.settings import get_settings
from serieshub.database.repos.series_read_repo import SqlAlchemySeriesReadRepo
from serieshub.services.api.deps import get_read_repo
from serieshub.services.api.results import ok_or_raise
from serieshub.services.schemas.series import DemographyRead, GenreRead
from serieshub.services.series.queries import (
    ListDemographiesHandler, ListGenresHandler, ListProductionYearsHandler,
)

cfg = get_settings()
router = APIRouter(prefix=cfg.api.prefix, tags=["catalog"])


@router.get("/genres", response_model=List[GenreRead])
def list_genres(read: SqlAlchemySeriesReadRepo = Depends(get_read_repo)) -> List[GenreRead]:
    result = ok_or_raise(ListGenresHandler(read).execute(None))
    return [GenreRead.model_validate(g) for g in result.data]


@router.get("/demographies", response_model=List[DemographyRead])
def list_demographies(read: SqlAlchemySeriesReadRepo = Depends(get_read_repo)) -> List[DemographyRead]:
    result = ok_or_raise(ListDemographiesHandler(read).execute(None))
    return [DemographyRead.model_validate(d) for d in result.data]


@router.get("/years", response_model=List[int])
def list_production_years(read: SqlAlchemySeriesReadRepo = Depends(get_read_repo)) -> List[int]:
    """Distinct production years, newest first."""
    return ok_or_raise(ListProductionYearsHandler(read).execute(None)).data
