from __future__ import annotations

from typing import List, Optional, Protocol, Sequence

from serieshub.domain.entities.series import (
    Demography, Genre, Series, SeriesFields, SeriesPatch, SeriesSearchFilters,
)


class SeriesReadPort(Protocol):
    def find_by_id(self, series_id: int) -> Optional[Series]: ...
    def find_by_name_and_year(self, name: str, year: int) -> Optional[Series]: ...


class SeriesCatalogPort(Protocol):
    """Read-only listings used by the query handlers."""
    def search(self, filters: SeriesSearchFilters) -> List[Series]: ...
    def list_genres(self) -> List[Genre]: ...
    def list_demographies(self) -> List[Demography]: ...
    def list_production_years(self) -> List[int]: ...


class SeriesRecordPort(Protocol):
    def create(self, fields: SeriesFields) -> int: ...
    def update(self, series_id: int, patch: SeriesPatch) -> None: ...
    def delete(self, series_id: int) -> bool: ...
    def update_image(self, series_id: int, image_path: str) -> bool: ...


class GenreReplaceSetPort(Protocol):
    """
    Genres are a set. `assign_genres` replaces the whole set (an empty
    sequence clears it); `remove_genres` subtracts.
    """
    def assign_genres(self, series_id: int, genre_ids: Sequence[int]) -> bool: ...
    def remove_genres(self, series_id: int, genre_ids: Sequence[int]) -> bool: ...


class TitleAppendListPort(Protocol):
    """
    Titles are an append-only list addressed by id. `add_titles` never
    deduplicates against what is already stored.
    """
    def add_titles(self, series_id: int, titles: Sequence[str]) -> bool: ...
    def remove_titles(self, series_id: int, title_ids: Sequence[int]) -> bool: ...


class RankPort(Protocol):
    def update_rank(self) -> None: ...


class SeriesWritePort(SeriesRecordPort, GenreReplaceSetPort, TitleAppendListPort, RankPort, Protocol):
    pass
