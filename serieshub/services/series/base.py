# serieshub/services/series/base.py
from __future__ import annotations

from typing import Any, Generic, Iterable, TypeVar

from serieshub.common.logging import get_logger
from serieshub.domain.dataclasses.results import CommandResult
from serieshub.domain.enums import FailureKind
from serieshub.domain.errors import SeriesError, SeriesNotFoundError, SeriesValidationError
from serieshub.domain.ports.series import SeriesReadPort
from serieshub.domain.entities.series import Series

logger = get_logger(__name__)

C = TypeVar("C")

# Failures reported as-is; everything else gets the handler's prefix.
_UNWRAPPED = {FailureKind.validation, FailureKind.not_found}


class SeriesHandler(Generic[C]):
    """
    Base for every command/query handler.

    Subclasses implement `handle()` and raise SeriesError subclasses for
    expected failures. `execute()` is the only public entry point: it never
    raises, and turns both domain errors and unexpected exceptions (storage
    drivers, image codecs...) into a failure CommandResult.
    """
    failure_prefix = "Error executing series command"

    def execute(self, command: C) -> CommandResult:
        try:
            return self.handle(command)
        except SeriesError as e:
            if e.kind in _UNWRAPPED:
                logger.info("%s rejected: %s", type(self).__name__, e.message)
                return CommandResult.fail(e.kind, e.message, reasons=e.reasons, cause=e)
            logger.error("%s failed: %s", type(self).__name__, e.message)
            return CommandResult.fail(
                e.kind, f"{self.failure_prefix}: {e.message}", reasons=e.reasons, cause=e
            )
        except Exception as e:
            logger.exception("%s failed with an unexpected error", type(self).__name__)
            return CommandResult.fail(
                FailureKind.storage, f"{self.failure_prefix}: {e}", reasons=[str(e)], cause=e
            )

    def handle(self, command: C) -> CommandResult:  # pragma: no cover - abstract
        raise NotImplementedError

    # ---- shared steps ------------------------------------------------------

    @staticmethod
    def check(errors: Iterable[str]) -> None:
        errs = list(errors)
        if errs:
            raise SeriesValidationError.from_reasons(errs)

    @staticmethod
    def require_series(read: SeriesReadPort, series_id: int) -> Series:
        series = read.find_by_id(series_id)
        if series is None:
            raise SeriesNotFoundError("Series not found")
        return series


def describe(exc: Any) -> str:
    return str(exc) or type(exc).__name__
