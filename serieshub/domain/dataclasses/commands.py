# serieshub/domain/dataclasses/commands.py
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

# Scalar series fields a write request may carry, in payload order.
SERIES_FIELD_NAMES = (
    "name",
    "chapter_number",
    "year",
    "description",
    "description_en",
    "qualification",
    "demography_id",
    "visible",
)


@dataclass(frozen=True)
class SeriesRequest:
    """
    Raw, un-normalized scalar fields as received from a caller.
    None means the field was not supplied.
    """
    name: Optional[str] = None
    chapter_number: Optional[int] = None
    year: Optional[int] = None
    description: Optional[str] = None
    description_en: Optional[str] = None
    qualification: Optional[float] = None
    demography_id: Optional[int] = None
    visible: Optional[bool] = None

    def present(self) -> Dict[str, Any]:
        return {n: getattr(self, n) for n in SERIES_FIELD_NAMES if getattr(self, n) is not None}

    @classmethod
    def from_mapping(cls, data: Dict[str, Any], **extra: Any) -> "SeriesRequest":
        known = {f.name for f in fields(cls)}
        kw = {k: v for k, v in data.items() if k in known}
        kw.update(extra)
        return cls(**kw)


@dataclass(frozen=True)
class CreateSeriesCommand(SeriesRequest):
    image: Optional[bytes] = None


@dataclass(frozen=True)
class CreateSeriesCompleteCommand(SeriesRequest):
    genres: Optional[List[int]] = None
    titles: Optional[List[str]] = None


@dataclass(frozen=True)
class UpdateSeriesCommand(SeriesRequest):
    id: int = 0


@dataclass(frozen=True)
class DeleteSeriesCommand:
    id: int


@dataclass(frozen=True)
class UpdateSeriesImageCommand:
    series_id: int
    image: Optional[bytes] = None


@dataclass(frozen=True)
class AssignGenresCommand:
    series_id: int
    genre_ids: List[int] = field(default_factory=list)


@dataclass(frozen=True)
class RemoveGenresCommand:
    series_id: int
    genre_ids: List[int] = field(default_factory=list)


@dataclass(frozen=True)
class AddTitlesCommand:
    series_id: int
    titles: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class RemoveTitlesCommand:
    series_id: int
    title_ids: List[int] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class GetSeriesByIdQuery:
    id: int


@dataclass(frozen=True)
class SearchSeriesQuery:
    name: Optional[str] = None
    year: Optional[int] = None
    demography_id: Optional[int] = None
    limit: Optional[int] = None
    offset: Optional[int] = None
