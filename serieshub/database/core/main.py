# serieshub/database/core/main.py
from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy import MetaData, create_engine, event, Column, Table
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from serieshub.common.settings import get_settings

_settings = get_settings()

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

_serviceobject_first = ("id", "date_created", "last_updated", "data_origin", "meta_data")


def app_schema() -> str | None:
    s = _settings.db_schema
    return s if s and s.lower() != "public" else None


class Base(DeclarativeBase):
    metadata = MetaData(schema=app_schema(), naming_convention=NAMING_CONVENTION)

    @classmethod
    def __table_cls__(cls, *args, **kw):
        """Reorder columns so ServiceObject fields come first."""
        if not args:
            return super().__table_cls__(*args, **kw)

        # Positional args are (name, metadata, *columns_and_constraints)
        name, metadata, *rest = args

        cols: List[Column] = [x for x in rest if isinstance(x, Column)]
        others = [x for x in rest if not isinstance(x, Column)]

        priority = {n: i for i, n in enumerate(_serviceobject_first)}
        original_index = {c: i for i, c in enumerate(cols)}
        cols.sort(key=lambda c: (priority.get(c.name, 10_000), original_index[c]))

        return Table(name, metadata, *(cols + others), **kw)


def engine_kwargs(url: str) -> Dict[str, Any]:
    """Pool options only apply to server databases; SQLite rejects them."""
    kw: Dict[str, Any] = {"echo": _settings.db.echo, "future": True}
    if not url.startswith("sqlite"):
        kw.update(
            pool_size=_settings.db.pool_size,
            max_overflow=_settings.db.max_overflow,
            pool_pre_ping=_settings.db.pool_pre_ping,
            pool_recycle=_settings.db.pool_recycle,
        )
    return kw


engine = create_engine(_settings.database_url, **engine_kwargs(_settings.database_url))

# App schema first, then public
if app_schema():
    @event.listens_for(engine, "connect")
    def _set_search_path(dbapi_conn, _):
        with dbapi_conn.cursor() as cur:
            cur.execute(f'SET search_path TO "{_settings.db_schema}", public')


SessionLocal = sessionmaker(bind=engine, expire_on_commit=False, future=True, autoflush=False)

