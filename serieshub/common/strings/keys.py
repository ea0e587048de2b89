# serieshub/common/strings/keys.py
from __future__ import annotations


def name_key(name: str | None) -> str:
    """
    Comparison form of a series name for natural-key matching:
    surrounding whitespace removed, lowercased. Inner spacing is kept,
    matching LOWER(TRIM(name)) on the storage side.
    """
    if name is None:
        return ""
    return str(name).strip().lower()
