# serieshub/services/series/update.py
from __future__ import annotations

from serieshub.common.logging import get_logger
from serieshub.domain.dataclasses.commands import UpdateSeriesCommand, UpdateSeriesImageCommand
from serieshub.domain.dataclasses.results import CommandResult
from serieshub.domain.errors import SeriesConsistencyError
from serieshub.domain.policies.series_normalizer import normalize_patch
from serieshub.domain.policies.series_validation import (
    DEFAULT_RULES, SeriesRules, image_errors, series_id_errors, update_errors,
)
from serieshub.domain.ports.images import CoverImagePort
from serieshub.domain.ports.series import SeriesReadPort, SeriesWritePort
from serieshub.services.series.base import SeriesHandler, describe

logger = get_logger(__name__)

DEFAULT_MAX_IMAGE_BYTES = 10 * 1024 * 1024


class UpdateSeriesHandler(SeriesHandler[UpdateSeriesCommand]):
    """Partial update of an existing series (no natural-key merge)."""
    failure_prefix = "Error updating series"

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

    def handle(self, command: UpdateSeriesCommand) -> CommandResult:
        self.check(update_errors(command.id, command, rules=self.rules))
        self.require_series(self.read, command.id)

        patch = normalize_patch(command)
        self.write.update(command.id, patch)
        self.write.update_rank()

        series = self.read.find_by_id(command.id)
        if series is None:
            raise SeriesConsistencyError("Series not found after update")
        return CommandResult.ok(
            "Series updated successfully", series_id=command.id, series=series, created=False
        )


class UpdateSeriesImageHandler(SeriesHandler[UpdateSeriesImageCommand]):
    """
    Replace a series' cover. Removing the previous file is best-effort;
    processing and storing the new one is not.
    """
    failure_prefix = "Error updating series image"

    def __init__(
        self,
        read: SeriesReadPort,
        write: SeriesWritePort,
        images: CoverImagePort,
        *,
        max_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
    ) -> None:
        self.read = read
        self.write = write
        self.images = images
        self.max_bytes = max_bytes

    def handle(self, command: UpdateSeriesImageCommand) -> CommandResult:
        self.check(series_id_errors(command.series_id) + image_errors(command.image, max_bytes=self.max_bytes))
        existing = self.require_series(self.read, command.series_id)

        image_path = self.images.process_and_save(command.image, command.series_id)
        if not self.write.update_image(command.series_id, image_path):
            raise SeriesConsistencyError("Series image path was not stored")

        # the old cover goes only once the new path is stored
        warnings = []
        if existing.image and existing.image.strip() and existing.image != image_path:
            try:
                self.images.delete(existing.image)
            except Exception as e:
                logger.warning("Could not delete old image for series %s: %s", command.series_id, describe(e))
                warnings.append(f"Could not delete old image for series {command.series_id}: {describe(e)}")

        return CommandResult.ok(
            "Series image updated successfully",
            series_id=command.series_id,
            data=image_path,
            warnings=warnings,
        )
