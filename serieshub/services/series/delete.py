# serieshub/services/series/delete.py
from __future__ import annotations

from serieshub.common.logging import get_logger
from serieshub.domain.dataclasses.commands import DeleteSeriesCommand
from serieshub.domain.dataclasses.results import CommandResult
from serieshub.domain.enums import FailureKind
from serieshub.domain.policies.series_validation import series_id_errors
from serieshub.domain.ports.images import CoverImagePort
from serieshub.domain.ports.series import SeriesReadPort, SeriesWritePort
from serieshub.services.series.base import SeriesHandler, describe

logger = get_logger(__name__)


class DeleteSeriesHandler(SeriesHandler[DeleteSeriesCommand]):
    """
    Delete a series and, best-effort, its stored cover.
    A missing series is an ordinary negative result, not an error.
    Rank is not recomputed here.
    """
    failure_prefix = "Error deleting series"

    def __init__(self, read: SeriesReadPort, write: SeriesWritePort, images: CoverImagePort) -> None:
        self.read = read
        self.write = write
        self.images = images

    def handle(self, command: DeleteSeriesCommand) -> CommandResult:
        self.check(series_id_errors(command.id))

        series = self.read.find_by_id(command.id)
        if series is None:
            return CommandResult.fail(FailureKind.not_found, "Series not found", series_id=command.id)

        warnings = []
        if series.image and series.image.strip():
            try:
                self.images.delete(series.image)
            except Exception as e:
                logger.warning("Could not delete image for series %s: %s", command.id, describe(e))
                warnings.append(f"Could not delete image for series {command.id}: {describe(e)}")

        if not self.write.delete(command.id):
            return CommandResult.fail(
                FailureKind.storage, "Failed to delete series", series_id=command.id, warnings=warnings
            )

        logger.info("series %s deleted", command.id)
        return CommandResult.ok("Series deleted successfully", series_id=command.id, warnings=warnings)
