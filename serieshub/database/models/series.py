# serieshub/database/models/series.py
from __future__ import annotations

from typing import Optional, List

from sqlalchemy import (
    Boolean, CheckConstraint, ForeignKey, Index, Integer, Numeric, String, Text, UniqueConstraint, func, true,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from serieshub.database.core.main import Base
from serieshub.database.core.service_object import ServiceObject


def _t(name: str):
    """Return Table object from metadata, honoring schema on Base.metadata."""
    schema = Base.metadata.schema
    key = f"{schema}.{name}" if schema else name
    return Base.metadata.tables[key]


# =======================
# Lookups
# =======================
class Demography(ServiceObject, Base):
    __tablename__ = "demography"
    __table_args__ = (
        UniqueConstraint("slug", name="uq_demography_slug"),
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[Optional[str]] = mapped_column(String(100))

    series: Mapped[List["Series"]] = relationship(back_populates="demography")

    def __repr__(self) -> str:
        return f"<Demography id={self.id} name={self.name!r}>"


class Genre(ServiceObject, Base):
    __tablename__ = "genre"
    __table_args__ = (
        UniqueConstraint("slug", name="uq_genre_slug"),
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[Optional[str]] = mapped_column(String(100))

    series: Mapped[List["Series"]] = relationship(
        "Series",
        secondary=lambda: _t("series_genre"),
        back_populates="genres",
    )

    def __repr__(self) -> str:
        return f"<Genre id={self.id} name={self.name!r}>"


# =======================
# Series
# =======================
class Series(ServiceObject, Base):
    """
    Catalog entry. (lower(trim(name)), year) is the natural key used by the
    write workflows; it is not a unique constraint.
    `rank` is derived and rewritten wholesale by the write repo.
    """
    __tablename__ = "series"
    __table_args__ = (
        CheckConstraint("qualification >= 0 AND qualification <= 10", name="qualification_range"),
        Index("ix_series_year", "year"),
        Index("ix_series_demography_id", "demography_id"),
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    chapter_number: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, default="")
    description_en: Mapped[Optional[str]] = mapped_column(Text, default="")
    qualification: Mapped[float] = mapped_column(
        Numeric(4, 2, asdecimal=False), nullable=False, default=0.0, server_default="0"
    )
    demography_id: Mapped[int] = mapped_column(
        ForeignKey("demography.id", ondelete="RESTRICT"), nullable=False
    )
    visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())
    image: Mapped[Optional[str]] = mapped_column(String(255))
    rank: Mapped[Optional[int]] = mapped_column(Integer)

    demography: Mapped["Demography"] = relationship(back_populates="series", lazy="joined")
    genres: Mapped[List["Genre"]] = relationship(
        "Genre",
        secondary=lambda: _t("series_genre"),
        back_populates="series",
        lazy="selectin",
        order_by="Genre.name",
    )
    titles: Mapped[List["SeriesTitle"]] = relationship(
        back_populates="series",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="SeriesTitle.id",
    )

    def __repr__(self) -> str:
        return f"<Series id={self.id} name={self.name!r} year={self.year}>"


Index("ix_series_name_lower", func.lower(Series.name))


class SeriesGenre(Base):
    """Association table for Series <-> Genre (M:M)."""
    __tablename__ = "series_genre"
    __table_args__ = (
        Index("ix_series_genre_genre_id", "genre_id"),
    )

    series_id: Mapped[int] = mapped_column(
        ForeignKey("series.id", ondelete="CASCADE"),
        primary_key=True,
    )
    genre_id: Mapped[int] = mapped_column(
        ForeignKey("genre.id", ondelete="CASCADE"),
        primary_key=True,
    )


class SeriesTitle(ServiceObject, Base):
    """Alternate title. Duplicates across requests are allowed."""
    __tablename__ = "series_title"
    __table_args__ = (
        Index("ix_series_title_series_id", "series_id"),
    )

    series_id: Mapped[int] = mapped_column(
        ForeignKey("series.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    series: Mapped["Series"] = relationship(back_populates="titles")

    def __repr__(self) -> str:
        return f"<SeriesTitle id={self.id} series_id={self.series_id} name={self.name!r}>"
