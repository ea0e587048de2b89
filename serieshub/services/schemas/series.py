# serieshub/services/schemas/series.py
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------- Catalog lookups ----------

class GenreRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: Optional[str] = None


class DemographyRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: Optional[str] = None


class TitleRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


# ---------- Series ----------

class SeriesWrite(BaseModel):
    """
    Scalar fields of a write request. Ranges and required fields are checked
    by the handlers so that every violated rule is reported at once.
    """
    name: Optional[str] = None
    chapter_number: Optional[int] = None
    year: Optional[int] = None
    description: Optional[str] = None
    description_en: Optional[str] = None
    qualification: Optional[float] = None
    demography_id: Optional[int] = None
    visible: Optional[bool] = None


class SeriesCreate(SeriesWrite):
    image: Optional[str] = Field(default=None, description="Base64 image bytes (a data: URL is accepted)")


class SeriesCreateComplete(SeriesWrite):
    # Element types are checked by the handler, which names the bad entries
    genres: Optional[List[Any]] = None
    titles: Optional[List[Any]] = None


class SeriesUpdate(SeriesWrite):
    pass


class SeriesRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    chapter_number: int = 0
    year: int
    description: str = ""
    description_en: str = ""
    qualification: float = 0.0
    demography_id: int
    demography_name: Optional[str] = None
    visible: bool = True
    image: Optional[str] = None
    rank: Optional[int] = None
    genres: List[GenreRead] = []
    titles: List[TitleRead] = []
    date_created: Optional[datetime] = None
    last_updated: Optional[datetime] = None


# ---------- Relationship payloads ----------

class GenreIds(BaseModel):
    genre_ids: List[Any] = []


class TitleNames(BaseModel):
    titles: List[Any] = []


class TitleIds(BaseModel):
    title_ids: List[Any] = []


# ---------- Command outcomes ----------

class CommandRead(BaseModel):
    success: bool
    message: str
    id: Optional[int] = None
    created: Optional[bool] = None
    warnings: List[str] = []


class SeriesCommandRead(CommandRead):
    series: Optional[SeriesRead] = None


class ImageCommandRead(CommandRead):
    image: Optional[str] = None


class TitlesCommandRead(CommandRead):
    titles: List[str] = []
