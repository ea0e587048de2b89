# serieshub/database/models/__init__.py

from serieshub.database.models.series import (
    Base,
    Demography,
    Genre,
    Series,
    SeriesGenre,
    SeriesTitle,
)

__all__ = [
    "Base",
    "Demography",
    "Genre",
    "Series",
    "SeriesGenre",
    "SeriesTitle",
]
