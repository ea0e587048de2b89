# serieshub/domain/dataclasses/results.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from serieshub.domain.entities.series import Series
from serieshub.domain.enums import FailureKind


@dataclass
class CommandResult:
    """
    Outcome of a handler's execute():
    - success / message: always set
    - series_id / series / created: set by the series-returning handlers
    - failure / reasons / cause: set on failure only
    - warnings: best-effort steps that failed without failing the command
    """
    success: bool
    message: str
    series_id: Optional[int] = None
    series: Optional[Series] = None
    created: Optional[bool] = None
    data: Any = None

    failure: Optional[FailureKind] = None
    reasons: List[str] = field(default_factory=list)
    cause: Optional[BaseException] = None

    warnings: List[str] = field(default_factory=list)

    @classmethod
    def ok(cls, message: str, **kw: Any) -> "CommandResult":
        return cls(success=True, message=message, **kw)

    @classmethod
    def fail(
        cls,
        kind: FailureKind,
        message: str,
        *,
        reasons: Optional[List[str]] = None,
        cause: Optional[BaseException] = None,
        **kw: Any,
    ) -> "CommandResult":
        return cls(
            success=False,
            message=message,
            failure=kind,
            reasons=list(reasons) if reasons else [message],
            cause=cause,
            **kw,
        )

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)
