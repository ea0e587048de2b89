# serieshub/domain/policies/series_normalizer.py
from __future__ import annotations

from typing import Any, Iterable, List, Optional

from serieshub.domain.dataclasses.commands import SeriesRequest
from serieshub.domain.entities.series import SeriesFields, SeriesPatch
from serieshub.domain.policies.series_validation import is_positive_int


def _trim(v: Optional[str]) -> Optional[str]:
    return v.strip() if isinstance(v, str) else v


def normalize_fields(req: SeriesRequest) -> SeriesFields:
    """
    Canonical create payload from a validated request:
      - strings trimmed
      - description / description_en default to ""
      - visible defaults to True
      - chapter_number / qualification default to 0
    """
    return SeriesFields(
        name=req.name.strip(),
        year=int(req.year),
        demography_id=int(req.demography_id),
        chapter_number=int(req.chapter_number) if req.chapter_number is not None else 0,
        description=_trim(req.description) or "",
        description_en=_trim(req.description_en) or "",
        qualification=float(req.qualification) if req.qualification is not None else 0.0,
        visible=True if req.visible is None else bool(req.visible),
    )


def normalize_patch(req: SeriesRequest) -> SeriesPatch:
    """Only the supplied fields, strings trimmed."""
    present = req.present()
    for k in ("name", "description", "description_en"):
        if k in present:
            present[k] = _trim(present[k])
    if "qualification" in present:
        present["qualification"] = float(present["qualification"])
    return SeriesPatch(**present)


def dedupe_ids(ids: Optional[Iterable[Any]]) -> List[int]:
    """Set semantics, first occurrence order kept; non-positive ids dropped."""
    out: List[int] = []
    seen = set()
    for i in ids or ():
        if not is_positive_int(i) or i in seen:
            continue
        seen.add(i)
        out.append(i)
    return out


def normalize_titles(titles: Optional[Iterable[Any]]) -> List[str]:
    """
    Trim each entry, drop empties, drop repeats within this list (first wins,
    case-sensitive). Nothing is compared against titles already stored.
    """
    out: List[str] = []
    seen = set()
    for t in titles or ():
        if not isinstance(t, str):
            continue
        s = t.strip()
        if not s or s in seen:
            continue
        seen.add(s)
        out.append(s)
    return out
