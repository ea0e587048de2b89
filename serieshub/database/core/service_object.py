# serieshub/database/core/service_object.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, DateTime, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column, declared_attr


class ServiceObject:
    """
    Mixin providing common columns for persisted catalog rows.
    Use with multiple inheritance: `class MyModel(ServiceObject, Base): ...`
    """
    __abstract__ = True

    @declared_attr
    def id(cls) -> Mapped[int]:
        return mapped_column(Integer, primary_key=True, autoincrement=True)

    @declared_attr
    def date_created(cls) -> Mapped[Optional[datetime]]:
        return mapped_column(DateTime(timezone=True), server_default=func.now())

    @declared_attr
    def last_updated(cls) -> Mapped[Optional[datetime]]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
        )

    @declared_attr
    def data_origin(cls) -> Mapped[Optional[str]]:
        return mapped_column(Text, nullable=True)

    @declared_attr
    def meta_data(cls) -> Mapped[Optional[dict]]:
        # Generic JSON so the same models run on SQLite in tests
        return mapped_column(JSON, nullable=True)
