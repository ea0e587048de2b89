# serieshub/database/repos/series_write_repo.py
from __future__ import annotations

from typing import List, Optional, Sequence

from sqlalchemy import case, func, select, update
from sqlalchemy.orm import Session, aliased

from serieshub.common.logging import get_logger
from serieshub.database.models.series import (
    Genre as DBGenre,
    Series as DBSeries,
    SeriesTitle as DBSeriesTitle,
)
from serieshub.domain.entities.series import SeriesFields, SeriesPatch
from serieshub.domain.errors import SeriesStorageError

logger = get_logger()


class SqlAlchemySeriesWriteRepo:
    """
    SQLAlchemy-backed repository that satisfies SeriesWritePort.

    Every mutation flushes, so a read in the same session sees it. Commit is
    left to the caller (request-scoped transaction).
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def _get(self, series_id: int) -> Optional[DBSeries]:
        return self.db.get(DBSeries, series_id)

    # -------------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------------
    def create(self, fields: SeriesFields) -> int:
        row = DBSeries(**fields.as_dict())
        self.db.add(row)
        self.db.flush()
        return row.id

    def update(self, series_id: int, patch: SeriesPatch) -> None:
        row = self._get(series_id)
        if not row:
            raise SeriesStorageError("Series not found")
        for key, value in patch.as_updates().items():
            setattr(row, key, value)
        self.db.flush()

    def delete(self, series_id: int) -> bool:
        row = self._get(series_id)
        if not row:
            return False
        self.db.delete(row)
        self.db.flush()
        return True

    def update_image(self, series_id: int, image_path: str) -> bool:
        row = self._get(series_id)
        if not row:
            return False
        row.image = image_path
        self.db.flush()
        return True

    # -------------------------------------------------------------------------
    # Genres (set semantics)
    # -------------------------------------------------------------------------
    def _genres(self, genre_ids: Sequence[int]) -> List[DBGenre]:
        ids = list(dict.fromkeys(genre_ids))
        if not ids:
            return []
        found = {g.id: g for g in self.db.execute(select(DBGenre).where(DBGenre.id.in_(ids))).scalars()}
        missing = [i for i in ids if i not in found]
        if missing:
            raise SeriesStorageError(f"Unknown genre IDs: {', '.join(str(i) for i in missing)}")
        return [found[i] for i in ids]

    def assign_genres(self, series_id: int, genre_ids: Sequence[int]) -> bool:
        row = self._get(series_id)
        if not row:
            return False
        row.genres = self._genres(genre_ids)
        self.db.flush()
        return True

    def remove_genres(self, series_id: int, genre_ids: Sequence[int]) -> bool:
        row = self._get(series_id)
        if not row:
            return False
        drop = set(genre_ids)
        row.genres = [g for g in row.genres if g.id not in drop]
        self.db.flush()
        return True

    # -------------------------------------------------------------------------
    # Titles (append-only list)
    # -------------------------------------------------------------------------
    def add_titles(self, series_id: int, titles: Sequence[str]) -> bool:
        row = self._get(series_id)
        if not row:
            return False
        for name in titles:
            row.titles.append(DBSeriesTitle(name=name))
        self.db.flush()
        return True

    def remove_titles(self, series_id: int, title_ids: Sequence[int]) -> bool:
        row = self._get(series_id)
        if not row:
            return False
        drop = set(title_ids)
        # delete-orphan cascade removes the rows
        row.titles = [t for t in row.titles if t.id not in drop]
        self.db.flush()
        return True

    # -------------------------------------------------------------------------
    # Rank
    # -------------------------------------------------------------------------
    def update_rank(self) -> None:
        """
        Competition ranking over visible series by qualification desc:
        rank = 1 + number of visible series with a strictly higher
        qualification. Hidden series get NULL.
        """
        self.db.flush()
        higher = aliased(DBSeries)
        better = (
            select(func.count())
            .select_from(higher)
            .where(higher.visible.is_(True), higher.qualification > DBSeries.qualification)
            .scalar_subquery()
        )
        stmt = (
            update(DBSeries)
            .values(
                rank=case((DBSeries.visible.is_(True), better + 1), else_=None),
                # rank is derived; not a user edit
                last_updated=DBSeries.last_updated,
            )
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        self.db.expire_all()
        logger.debug("rank recomputed for %s series", result.rowcount)
