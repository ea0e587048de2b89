# serieshub/domain/errors.py
from __future__ import annotations

from typing import Iterable, List, Optional

from serieshub.domain.enums import FailureKind


class SeriesError(Exception):
    """
    Base for failures raised inside series handlers. Handlers never let these
    escape `execute()`; they are turned into failure CommandResults.
    """
    kind: FailureKind = FailureKind.storage

    def __init__(self, message: str, *, reasons: Optional[Iterable[str]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.reasons: List[str] = list(reasons) if reasons else [message]


class SeriesValidationError(SeriesError):
    kind = FailureKind.validation

    @classmethod
    def from_reasons(cls, reasons: Iterable[str]) -> "SeriesValidationError":
        rs = list(reasons)
        return cls("; ".join(rs), reasons=rs)


class SeriesNotFoundError(SeriesError):
    kind = FailureKind.not_found


class SeriesConsistencyError(SeriesError):
    """A read immediately after a write did not see the written row."""
    kind = FailureKind.consistency


class SeriesStorageError(SeriesError):
    kind = FailureKind.storage
