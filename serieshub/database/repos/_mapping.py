# serieshub/database/repos/_mapping.py
from __future__ import annotations
from serieshub.database.models.series import (
    Demography as DBDemography,
    Genre as DBGenre,
    Series as DBSeries,
    SeriesTitle as DBSeriesTitle,
)
from serieshub.domain.entities.series import Demography, Genre, Series, Title


def to_domain_genre(row: DBGenre) -> Genre:
    return Genre(id=row.id, name=row.name, slug=row.slug)


def to_domain_demography(row: DBDemography) -> Demography:
    return Demography(id=row.id, name=row.name, slug=row.slug)


def to_domain_title(row: DBSeriesTitle) -> Title:
    return Title(id=row.id, series_id=row.series_id, name=row.name)


def to_domain_series(row: DBSeries) -> Series:
    return Series(
        id=row.id,
        name=row.name,
        year=row.year,
        demography_id=row.demography_id,
        chapter_number=row.chapter_number or 0,
        description=row.description or "",
        description_en=row.description_en or "",
        qualification=float(row.qualification) if row.qualification is not None else 0.0,
        visible=bool(row.visible),
        image=row.image,
        rank=row.rank,
        demography_name=row.demography.name if row.demography is not None else None,
        genres=[to_domain_genre(g) for g in row.genres],
        titles=[to_domain_title(t) for t in row.titles],
        date_created=getattr(row, "date_created", None),
        last_updated=getattr(row, "last_updated", None),
    )
