# serieshub/domain/entities/series.py
from __future__ import annotations

from dataclasses import dataclass, asdict, field, fields
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from serieshub.common.strings.keys import name_key


@dataclass(frozen=True)
class NaturalKey:
    """
    (name, year) pair used to decide whether an incoming write is a new series
    or a merge into an existing one. The name is compared trimmed and
    case-insensitively; the year exactly.
    """
    name: str
    year: int

    def as_key(self) -> Tuple[str, int]:
        return (name_key(self.name), self.year)


@dataclass(frozen=True)
class Genre:
    id: int
    name: str
    slug: Optional[str] = None


@dataclass(frozen=True)
class Title:
    id: int
    series_id: int
    name: str


@dataclass(frozen=True)
class Demography:
    id: int
    name: str
    slug: Optional[str] = None


@dataclass
class Series:
    """
    Aggregate root of the catalog.

    `rank` is derived: storage recomputes it for the whole catalog on request,
    handlers only read it. `image` is only changed by the image workflows.
    """
    id: int
    name: str
    year: int
    demography_id: int
    chapter_number: int = 0
    description: str = ""
    description_en: str = ""
    qualification: float = 0.0
    visible: bool = True
    image: Optional[str] = None
    rank: Optional[int] = None

    demography_name: Optional[str] = None
    genres: List[Genre] = field(default_factory=list)
    titles: List[Title] = field(default_factory=list)

    date_created: Optional[datetime] = None
    last_updated: Optional[datetime] = None

    @property
    def genre_ids(self) -> List[int]:
        return [g.id for g in self.genres]


# ---------------------------------------------------------------------------
# Write payloads. Neither shape has id, image or rank: those are never set by
# a create/update request.
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SeriesFields:
    """Complete, normalized scalar fields for a create (or a full overwrite)."""
    name: str
    year: int
    demography_id: int
    chapter_number: int = 0
    description: str = ""
    description_en: str = ""
    qualification: float = 0.0
    visible: bool = True

    @property
    def natural_key(self) -> NaturalKey:
        return NaturalKey(self.name, self.year)

    def as_patch(self) -> "SeriesPatch":
        return SeriesPatch(**asdict(self))

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SeriesPatch:
    """Partial update; None means "leave unchanged"."""
    name: Optional[str] = None
    year: Optional[int] = None
    demography_id: Optional[int] = None
    chapter_number: Optional[int] = None
    description: Optional[str] = None
    description_en: Optional[str] = None
    qualification: Optional[float] = None
    visible: Optional[bool] = None

    def as_updates(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


@dataclass(frozen=True)
class SeriesSearchFilters:
    name: Optional[str] = None
    year: Optional[int] = None
    demography_id: Optional[int] = None
    limit: int = 50
    offset: int = 0
