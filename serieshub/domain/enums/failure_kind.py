from __future__ import annotations
from enum import StrEnum


class FailureKind(StrEnum):
    validation = "validation"
    not_found = "not_found"
    storage = "storage"
    consistency = "consistency"
