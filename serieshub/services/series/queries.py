# serieshub/services/series/queries.py
from __future__ import annotations

from typing import Optional

from serieshub.domain.dataclasses.commands import GetSeriesByIdQuery, SearchSeriesQuery
from serieshub.domain.dataclasses.results import CommandResult
from serieshub.domain.entities.series import SeriesSearchFilters
from serieshub.domain.policies.series_validation import series_id_errors
from serieshub.domain.ports.series import SeriesCatalogPort, SeriesReadPort
from serieshub.services.series.base import SeriesHandler


class GetSeriesByIdHandler(SeriesHandler[GetSeriesByIdQuery]):
    failure_prefix = "Error reading series"

    def __init__(self, read: SeriesReadPort) -> None:
        self.read = read

    def handle(self, query: GetSeriesByIdQuery) -> CommandResult:
        self.check(series_id_errors(query.id))
        series = self.require_series(self.read, query.id)
        return CommandResult.ok("Series found", series_id=series.id, series=series)


class SearchSeriesHandler(SeriesHandler[SearchSeriesQuery]):
    failure_prefix = "Error searching series"

    def __init__(self, catalog: SeriesCatalogPort, *, default_limit: int = 50, max_limit: int = 100) -> None:
        self.catalog = catalog
        self.default_limit = default_limit
        self.max_limit = max_limit

    def normalize(self, query: SearchSeriesQuery) -> SeriesSearchFilters:
        """
        limit: missing or <= 0 -> default, otherwise capped at max_limit.
        offset: missing or negative -> 0. Blank name -> no name filter.
        """
        limit: Optional[int] = query.limit
        limit = min(limit, self.max_limit) if limit and limit > 0 else self.default_limit
        offset = query.offset if query.offset and query.offset >= 0 else 0
        name = query.name.strip() if query.name and query.name.strip() else None
        return SeriesSearchFilters(
            name=name,
            year=query.year or None,
            demography_id=query.demography_id or None,
            limit=limit,
            offset=offset,
        )

    def handle(self, query: SearchSeriesQuery) -> CommandResult:
        rows = self.catalog.search(self.normalize(query))
        return CommandResult.ok(f"{len(rows)} series found", data=rows)


class ListGenresHandler(SeriesHandler[None]):
    failure_prefix = "Error listing genres"

    def __init__(self, catalog: SeriesCatalogPort) -> None:
        self.catalog = catalog

    def handle(self, query: None = None) -> CommandResult:
        return CommandResult.ok("Genres", data=self.catalog.list_genres())


class ListDemographiesHandler(SeriesHandler[None]):
    failure_prefix = "Error listing demographies"

    def __init__(self, catalog: SeriesCatalogPort) -> None:
        self.catalog = catalog

    def handle(self, query: None = None) -> CommandResult:
        return CommandResult.ok("Demographies", data=self.catalog.list_demographies())


class ListProductionYearsHandler(SeriesHandler[None]):
    failure_prefix = "Error listing production years"

    def __init__(self, catalog: SeriesCatalogPort) -> None:
        self.catalog = catalog

    def handle(self, query: None = None) -> CommandResult:
        return CommandResult.ok("Production years", data=self.catalog.list_production_years())
