# serieshub/services/api/results.py
from __future__ import annotations

from http import HTTPStatus

from fastapi import HTTPException

from serieshub.domain.dataclasses.results import CommandResult
from serieshub.domain.enums import FailureKind

FAILURE_STATUS = {
    FailureKind.validation: HTTPStatus.BAD_REQUEST,
    FailureKind.not_found: HTTPStatus.NOT_FOUND,
    FailureKind.consistency: HTTPStatus.INTERNAL_SERVER_ERROR,
    FailureKind.storage: HTTPStatus.INTERNAL_SERVER_ERROR,
}


def ok_or_raise(result: CommandResult) -> CommandResult:
    """Failed results become HTTP errors, which also rolls the request transaction back."""
    if result.success:
        return result
    status = FAILURE_STATUS.get(result.failure, HTTPStatus.INTERNAL_SERVER_ERROR)
    raise HTTPException(status_code=status, detail={"message": result.message, "reasons": result.reasons})
