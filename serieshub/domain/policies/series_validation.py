# serieshub/domain/policies/series_validation.py
"""
Structural and business checks for series write requests.

Everything here is pure: functions take a request and return the list of
violated rules (empty list == valid). Handlers decide whether to stop on the
first reason or report all of them. Nothing here touches storage.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Any, List, Optional, Sequence

from serieshub.domain.dataclasses.commands import SeriesRequest


@dataclass(frozen=True)
class SeriesRules:
    name_min_length: int = 2
    name_max_length: int = 200
    year_min: int = 1900
    year_future_window: int = 5
    qualification_min: float = 0.0
    qualification_max: float = 10.0
    description_max_length: int = 5000

    @classmethod
    def from_settings(cls, cfg) -> "SeriesRules":
        v = cfg.validation
        return cls(
            name_min_length=v.name_min_length,
            name_max_length=v.name_max_length,
            year_min=v.year_min,
            year_future_window=v.year_future_window,
            qualification_min=v.qualification_min,
            qualification_max=v.qualification_max,
            description_max_length=v.description_max_length,
        )

    def year_max(self, today: Optional[date] = None) -> int:
        return (today or date.today()).year + self.year_future_window


DEFAULT_RULES = SeriesRules()


def is_int(v: Any) -> bool:
    # bool is an int subclass; True must not pass as id 1
    return isinstance(v, int) and not isinstance(v, bool)


def is_positive_int(v: Any) -> bool:
    return is_int(v) and v > 0


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


# ---------------------------------------------------------------------------
# Scalar fields
# ---------------------------------------------------------------------------
def series_field_errors(
    req: SeriesRequest,
    *,
    creating: bool,
    rules: SeriesRules = DEFAULT_RULES,
    today: Optional[date] = None,
) -> List[str]:
    """
    Check every supplied field. With creating=True, name, year and
    demography_id are also required.
    """
    errors: List[str] = []

    if req.name is None or (creating and not str(req.name).strip()):
        if creating:
            errors.append("Series name is required")
    elif not isinstance(req.name, str):
        errors.append("Series name must be a string")
    else:
        n = len(req.name.strip())
        if n < rules.name_min_length or n > rules.name_max_length:
            errors.append(
                f"Series name must be between {rules.name_min_length} and {rules.name_max_length} characters"
            )

    if req.chapter_number is not None:
        if not is_int(req.chapter_number):
            errors.append("Chapter number must be an integer")
        elif req.chapter_number < 0:
            errors.append("Chapter number must be zero or greater")

    ymax = rules.year_max(today)
    if req.year is None:
        if creating:
            errors.append("Year is required")
    elif not is_int(req.year) or req.year < rules.year_min or req.year > ymax:
        errors.append(f"Year must be between {rules.year_min} and {ymax}")

    if req.qualification is not None:
        q = req.qualification
        if (
            not _is_number(q)
            or not math.isfinite(q)
            or not (rules.qualification_min <= q <= rules.qualification_max)
        ):
            errors.append(
                f"Qualification must be between {rules.qualification_min:g} and {rules.qualification_max:g}"
            )

    if req.demography_id is None:
        if creating:
            errors.append("Valid demography_id is required")
    elif not is_positive_int(req.demography_id):
        errors.append("Valid demography_id is required")

    for label, value in (("Description", req.description), ("Description_en", req.description_en)):
        if value is None:
            continue
        if not isinstance(value, str):
            errors.append(f"{label} must be a string")
        elif len(value) > rules.description_max_length:
            errors.append(f"{label} must not exceed {rules.description_max_length} characters")

    if req.visible is not None and not isinstance(req.visible, bool):
        errors.append("Visible must be a boolean")

    return errors


def update_errors(
    series_id: Any,
    req: SeriesRequest,
    *,
    rules: SeriesRules = DEFAULT_RULES,
    today: Optional[date] = None,
) -> List[str]:
    errors: List[str] = []
    if not is_positive_int(series_id):
        errors.append("Valid series ID is required")
    errors.extend(series_field_errors(req, creating=False, rules=rules, today=today))
    if not req.present():
        errors.append("No fields to update")
    return errors


# ---------------------------------------------------------------------------
# Relationship commands
# ---------------------------------------------------------------------------
def series_id_errors(series_id: Any) -> List[str]:
    return [] if is_positive_int(series_id) else ["Valid series ID is required"]


def id_list_errors(ids: Any, label: str) -> List[str]:
    """
    Non-empty list whose every element is a positive int. Duplicates are
    allowed here; they are collapsed later.
    """
    if not isinstance(ids, (list, tuple)) or len(ids) == 0:
        return [f"At least one {label} ID is required"]
    invalid = [i for i in ids if not is_positive_int(i)]
    if invalid:
        return [f"Invalid {label} IDs: {', '.join(str(i) for i in invalid)}"]
    return []


def title_list_errors(titles: Any) -> List[str]:
    if not isinstance(titles, (list, tuple)) or len(titles) == 0:
        return ["At least one title is required"]
    bad = [repr(t) for t in titles if not isinstance(t, str)]
    if bad:
        return [f"Titles must be strings: {', '.join(bad)}"]
    return []


def optional_list_errors(values: Optional[Sequence[Any]], label: str) -> List[str]:
    """Shape check for the optional relationship lists of create-complete."""
    if values is None:
        return []
    if not isinstance(values, (list, tuple)):
        return [f"{label} must be an array"]
    return []


def image_errors(data: Optional[bytes], *, max_bytes: int) -> List[str]:
    if not data:
        return ["Image file is required"]
    if len(data) > max_bytes:
        return [f"Image size must not exceed {max_bytes // (1024 * 1024)} MB"]
    return []
