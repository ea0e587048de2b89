# serieshub/services/series/create.py
from __future__ import annotations

from typing import Optional, Tuple

from serieshub.common.logging import get_logger
from serieshub.domain.dataclasses.commands import CreateSeriesCommand, CreateSeriesCompleteCommand
from serieshub.domain.dataclasses.results import CommandResult
from serieshub.domain.entities.series import SeriesFields
from serieshub.domain.enums import WritePath
from serieshub.domain.errors import SeriesConsistencyError
from serieshub.domain.policies.series_normalizer import dedupe_ids, normalize_fields, normalize_titles
from serieshub.domain.policies.series_validation import (
    DEFAULT_RULES, SeriesRules, optional_list_errors, series_field_errors,
)
from serieshub.domain.ports.images import CoverImagePort
from serieshub.domain.ports.series import SeriesReadPort, SeriesWritePort
from serieshub.services.series.base import SeriesHandler, describe

logger = get_logger(__name__)


def write_by_natural_key(
    read: SeriesReadPort,
    write: SeriesWritePort,
    fields: SeriesFields,
) -> Tuple[int, WritePath]:
    """
    Create the series, or overwrite the scalar fields of the one already
    stored under the same (name, year).

    Not atomic: two concurrent calls with the same key can both miss the
    lookup and both create.
    """
    existing = read.find_by_name_and_year(fields.name, fields.year)
    if existing is not None:
        write.update(existing.id, fields.as_patch())
        return existing.id, WritePath.updated
    return write.create(fields), WritePath.created


class CreateSeriesCompleteHandler(SeriesHandler[CreateSeriesCompleteCommand]):
    """
    Create-or-merge a series together with its genres and alternate titles.

    Steps: validate, normalize, natural-key lookup, create or update,
    replace genres, append titles, recompute rank, confirm by re-reading.
    Earlier steps are not rolled back when a later one fails.
    """
    failure_prefix = "Error creating complete series"

    def __init__(
        self,
        read: SeriesReadPort,
        write: SeriesWritePort,
        *,
        rules: SeriesRules = DEFAULT_RULES,
    ) -> None:
        self.read = read
        self.write = write
        self.rules = rules

    def handle(self, command: CreateSeriesCompleteCommand) -> CommandResult:
        # 1) validate (all reasons at once)
        self.check(
            series_field_errors(command, creating=True, rules=self.rules)
            + optional_list_errors(command.genres, "Genres")
            + optional_list_errors(command.titles, "Titles")
        )

        # 2) normalize
        fields = normalize_fields(command)
        genre_ids = dedupe_ids(command.genres)
        titles = normalize_titles(command.titles)

        # 3) create or merge by (name, year)
        series_id, path = write_by_natural_key(self.read, self.write, fields)
        logger.info("series %s %s via natural key %r", series_id, path.value, fields.natural_key.as_key())

        # 4) genres: full replacement on both paths
        if genre_ids:
            self.write.assign_genres(series_id, genre_ids)

        # 5) titles: additive on both paths
        if titles:
            self.write.add_titles(series_id, titles)

        # 6) rank, always
        self.write.update_rank()

        # 7) confirm
        series = self.read.find_by_id(series_id)
        if series is None:
            raise SeriesConsistencyError(f"Series {path.value} but not found")

        created = path is WritePath.created
        message = (
            "Series created successfully with all relations"
            if created
            else "Series updated successfully with all relations"
        )
        return CommandResult.ok(message, series_id=series_id, series=series, created=created)


class CreateSeriesHandler(SeriesHandler[CreateSeriesCommand]):
    """
    Create-or-merge by natural key, plus an optional cover image.
    The image step is best-effort: its failure only adds a warning.
    """
    failure_prefix = "Error creating series"

    def __init__(
        self,
        read: SeriesReadPort,
        write: SeriesWritePort,
        images: CoverImagePort,
        *,
        rules: SeriesRules = DEFAULT_RULES,
    ) -> None:
        self.read = read
        self.write = write
        self.images = images
        self.rules = rules

    def handle(self, command: CreateSeriesCommand) -> CommandResult:
        self.check(series_field_errors(command, creating=True, rules=self.rules))
        fields = normalize_fields(command)

        series_id, path = write_by_natural_key(self.read, self.write, fields)
        logger.info("series %s %s", series_id, path.value)

        warnings = []
        image_path: Optional[str] = None
        if command.image:
            try:
                image_path = self.images.process_and_save(command.image, series_id)
                self.write.update_image(series_id, image_path)
            except Exception as e:
                logger.warning("Image processing failed for series %s: %s", series_id, describe(e))
                warnings.append(f"Image processing failed for series {series_id}: {describe(e)}")
                if image_path:
                    self._discard(image_path, series_id)
                image_path = None

        self.write.update_rank()

        series = self.read.find_by_id(series_id)
        if series is None:
            raise SeriesConsistencyError(f"Series {path.value} but not found")
        if image_path:
            series.image = image_path

        created = path is WritePath.created
        message = "Series created successfully" if created else "Series updated successfully"
        return CommandResult.ok(
            message, series_id=series_id, series=series, created=created, warnings=warnings
        )

    def _discard(self, image_path: str, series_id: int) -> None:
        """Remove a cover that was saved but never linked to the series."""
        try:
            self.images.delete(image_path)
        except Exception as e:
            logger.warning("Could not remove unlinked cover %s for series %s: %s", image_path, series_id, describe(e))
