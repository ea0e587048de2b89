# serieshub/services/series/relations.py
from __future__ import annotations

from serieshub.domain.dataclasses.commands import (
    AddTitlesCommand, AssignGenresCommand, RemoveGenresCommand, RemoveTitlesCommand,
)
from serieshub.domain.dataclasses.results import CommandResult
from serieshub.domain.errors import SeriesValidationError
from serieshub.domain.policies.series_normalizer import dedupe_ids, normalize_titles
from serieshub.domain.policies.series_validation import id_list_errors, series_id_errors, title_list_errors
from serieshub.domain.ports.series import SeriesReadPort, SeriesWritePort
from serieshub.services.series.base import SeriesHandler


class _RelationHandler(SeriesHandler):
    def __init__(self, read: SeriesReadPort, write: SeriesWritePort) -> None:
        self.read = read
        self.write = write


class AssignGenresHandler(_RelationHandler):
    """Replace the series' whole genre set with the (deduplicated) given ids."""
    failure_prefix = "Error assigning genres"

    def handle(self, command: AssignGenresCommand) -> CommandResult:
        self.check(series_id_errors(command.series_id) + id_list_errors(command.genre_ids, "genre"))
        self.require_series(self.read, command.series_id)

        self.write.assign_genres(command.series_id, dedupe_ids(command.genre_ids))
        return CommandResult.ok(
            f"Genres assigned successfully to series {command.series_id}", series_id=command.series_id
        )


class RemoveGenresHandler(_RelationHandler):
    failure_prefix = "Error removing genres"

    def handle(self, command: RemoveGenresCommand) -> CommandResult:
        self.check(series_id_errors(command.series_id) + id_list_errors(command.genre_ids, "genre"))
        self.require_series(self.read, command.series_id)

        self.write.remove_genres(command.series_id, dedupe_ids(command.genre_ids))
        return CommandResult.ok(
            f"Genres removed successfully from series {command.series_id}", series_id=command.series_id
        )


class AddTitlesHandler(_RelationHandler):
    """Append alternate titles; repeats are only dropped within this request."""
    failure_prefix = "Error adding titles"

    def handle(self, command: AddTitlesCommand) -> CommandResult:
        self.check(series_id_errors(command.series_id) + title_list_errors(command.titles))
        self.require_series(self.read, command.series_id)

        titles = normalize_titles(command.titles)
        if not titles:
            raise SeriesValidationError("At least one non-empty title is required")

        self.write.add_titles(command.series_id, titles)
        return CommandResult.ok(
            f"Titles added successfully to series {command.series_id}",
            series_id=command.series_id,
            data=titles,
        )


class RemoveTitlesHandler(_RelationHandler):
    failure_prefix = "Error removing titles"

    def handle(self, command: RemoveTitlesCommand) -> CommandResult:
        self.check(series_id_errors(command.series_id) + id_list_errors(command.title_ids, "title"))
        self.require_series(self.read, command.series_id)

        self.write.remove_titles(command.series_id, dedupe_ids(command.title_ids))
        return CommandResult.ok(
            f"Titles removed successfully from series {command.series_id}", series_id=command.series_id
        )
