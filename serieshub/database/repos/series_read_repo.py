# serieshub/database/repos/series_read_repo.py
from __future__ import annotations
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from serieshub.common.strings.keys import name_key
from serieshub.database.models.series import (
    Demography as DBDemography,
    Genre as DBGenre,
    Series as DBSeries,
)
from serieshub.database.repos._mapping import to_domain_demography, to_domain_genre, to_domain_series
from serieshub.domain.entities.series import Demography, Genre, Series, SeriesSearchFilters


class SqlAlchemySeriesReadRepo:
    """
    Read-only queries for Series. Satisfies SeriesReadPort and
    SeriesCatalogPort via structural typing.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    # -------------------------------------------------------------------------
    # SeriesReadPort
    # -------------------------------------------------------------------------
    def find_by_id(self, series_id: int) -> Optional[Series]:
        # populate_existing: rank is rewritten with a bulk UPDATE
        row = self.db.get(DBSeries, series_id, populate_existing=True)
        return to_domain_series(row) if row else None

    def find_by_name_and_year(self, name: str, year: int) -> Optional[Series]:
        """Natural-key lookup: trimmed, case-insensitive name plus exact year. Oldest row wins."""
        stmt = (
            select(DBSeries)
            .where(
                func.lower(func.trim(DBSeries.name)) == name_key(name),
                DBSeries.year == year,
            )
            .order_by(DBSeries.id.asc())
            .limit(1)
        )
        row = self.db.execute(stmt).scalars().first()
        return to_domain_series(row) if row else None

    # -------------------------------------------------------------------------
    # SeriesCatalogPort
    # -------------------------------------------------------------------------
    def search(self, filters: SeriesSearchFilters) -> List[Series]:
        stmt = select(DBSeries).where(DBSeries.visible.is_(True))
        if filters.name:
            stmt = stmt.where(func.lower(DBSeries.name).contains(filters.name.strip().lower(), autoescape=True))
        if filters.year is not None:
            stmt = stmt.where(DBSeries.year == filters.year)
        if filters.demography_id is not None:
            stmt = stmt.where(DBSeries.demography_id == filters.demography_id)
        stmt = (
            stmt.order_by(
                DBSeries.rank.asc().nullslast(),
                DBSeries.qualification.desc(),
                DBSeries.name.asc(),
            )
            .offset(filters.offset)
            .limit(filters.limit)
        )
        return [to_domain_series(r) for r in self.db.execute(stmt).scalars().all()]

    def list_genres(self) -> List[Genre]:
        rows = self.db.execute(select(DBGenre).order_by(DBGenre.name.asc())).scalars().all()
        return [to_domain_genre(r) for r in rows]

    def list_demographies(self) -> List[Demography]:
        rows = self.db.execute(select(DBDemography).order_by(DBDemography.name.asc())).scalars().all()
        return [to_domain_demography(r) for r in rows]

    def list_production_years(self) -> List[int]:
        stmt = select(DBSeries.year).distinct().order_by(DBSeries.year.desc())
        return [int(y) for (y,) in self.db.execute(stmt) if y is not None]
