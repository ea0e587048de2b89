from __future__ import annotations
from enum import StrEnum


class WritePath(StrEnum):
    """Which branch a natural-key aware write took."""
    created = "created"
    updated = "updated"
