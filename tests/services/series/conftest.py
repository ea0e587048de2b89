# tests/services/series/conftest.py
from __future__ import annotations

import copy
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

import pytest

from serieshub.common.strings.keys import name_key
from serieshub.domain.entities.series import (
    Demography, Genre, Series, SeriesFields, SeriesPatch, SeriesSearchFilters, Title,
)


class FakeStore:
    """In-memory catalog shared by the fake read/write ports. Every port call is recorded."""

    def __init__(self) -> None:
        self.series: Dict[int, Series] = {}
        self.genres: Dict[int, Genre] = {i: Genre(id=i, name=f"Genre {i}") for i in range(1, 6)}
        self.demographies = [Demography(id=1, name="Shonen"), Demography(id=2, name="Seinen")]
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        # method name -> exception raised when called
        self.fail_on: Dict[str, Exception] = {}
        self._next_id = 1
        self._next_title_id = 1

    def record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if name in self.fail_on:
            raise self.fail_on[name]

    def called(self, name: str) -> List[Tuple[Any, ...]]:
        return [args for (n, args) in self.calls if n == name]

    def names(self) -> List[str]:
        return [n for (n, _) in self.calls]

    def seed(self, **kw: Any) -> Series:
        data = {"name": "Seeded", "year": 2010, "demography_id": 1}
        data.update(kw)
        sid = self._next_id
        self._next_id += 1
        s = Series(id=sid, **data)
        self.series[sid] = s
        return s


class FakeRead:
    def __init__(self, store: FakeStore) -> None:
        self.store = store

    def find_by_id(self, series_id: int) -> Optional[Series]:
        self.store.record("find_by_id", series_id)
        s = self.store.series.get(series_id)
        return copy.deepcopy(s) if s else None

    def find_by_name_and_year(self, name: str, year: int) -> Optional[Series]:
        self.store.record("find_by_name_and_year", name, year)
        for sid in sorted(self.store.series):
            s = self.store.series[sid]
            if name_key(s.name) == name_key(name) and s.year == year:
                return copy.deepcopy(s)
        return None

    # catalog
    def search(self, filters: SeriesSearchFilters) -> List[Series]:
        self.store.record("search", filters)
        rows = [s for s in self.store.series.values() if s.visible]
        if filters.name:
            rows = [s for s in rows if filters.name.lower() in s.name.lower()]
        return rows[filters.offset: filters.offset + filters.limit]

    def list_genres(self) -> List[Genre]:
        self.store.record("list_genres")
        return list(self.store.genres.values())

    def list_demographies(self) -> List[Demography]:
        self.store.record("list_demographies")
        return list(self.store.demographies)

    def list_production_years(self) -> List[int]:
        self.store.record("list_production_years")
        return sorted({s.year for s in self.store.series.values()}, reverse=True)


class FakeWrite:
    def __init__(self, store: FakeStore) -> None:
        self.store = store

    def create(self, fields: SeriesFields) -> int:
        self.store.record("create", fields)
        return self.store.seed(**fields.as_dict()).id

    def update(self, series_id: int, patch: SeriesPatch) -> None:
        self.store.record("update", series_id, patch)
        s = self.store.series[series_id]
        self.store.series[series_id] = replace(s, **patch.as_updates())

    def delete(self, series_id: int) -> bool:
        self.store.record("delete", series_id)
        return self.store.series.pop(series_id, None) is not None

    def update_image(self, series_id: int, image_path: str) -> bool:
        self.store.record("update_image", series_id, image_path)
        if series_id not in self.store.series:
            return False
        self.store.series[series_id].image = image_path
        return True

    def assign_genres(self, series_id: int, genre_ids) -> bool:
        self.store.record("assign_genres", series_id, list(genre_ids))
        self.store.series[series_id].genres = [self.store.genres[i] for i in genre_ids]
        return True

    def remove_genres(self, series_id: int, genre_ids) -> bool:
        self.store.record("remove_genres", series_id, list(genre_ids))
        s = self.store.series[series_id]
        s.genres = [g for g in s.genres if g.id not in set(genre_ids)]
        return True

    def add_titles(self, series_id: int, titles) -> bool:
        self.store.record("add_titles", series_id, list(titles))
        s = self.store.series[series_id]
        for name in titles:
            s.titles.append(Title(id=self.store._next_title_id, series_id=series_id, name=name))
            self.store._next_title_id += 1
        return True

    def remove_titles(self, series_id: int, title_ids) -> bool:
        self.store.record("remove_titles", series_id, list(title_ids))
        s = self.store.series[series_id]
        s.titles = [t for t in s.titles if t.id not in set(title_ids)]
        return True

    def update_rank(self) -> None:
        self.store.record("update_rank")
        visible = [s for s in self.store.series.values() if s.visible]
        for s in self.store.series.values():
            s.rank = 1 + sum(1 for o in visible if o.qualification > s.qualification) if s.visible else None


class FakeImages:
    def __init__(self) -> None:
        self.saved: List[Tuple[bytes, int]] = []
        self.deleted: List[str] = []
        self.save_error: Optional[Exception] = None
        self.delete_error: Optional[Exception] = None

    def process_and_save(self, data: bytes, series_id: int) -> str:
        if self.save_error:
            raise self.save_error
        self.saved.append((data, series_id))
        return f"/img/tarjeta/{series_id}_{len(self.saved)}.jpg"

    def delete(self, image_path: str) -> None:
        if self.delete_error:
            raise self.delete_error
        self.deleted.append(image_path)


@pytest.fixture()
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture()
def read(store) -> FakeRead:
    return FakeRead(store)


@pytest.fixture()
def write(store) -> FakeWrite:
    return FakeWrite(store)


@pytest.fixture()
def images() -> FakeImages:
    return FakeImages()
