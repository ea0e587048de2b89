# serieshub/services/api/routers/series.py
from __future__ import annotations

import base64
import binascii
from http import HTTPStatus
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response

from serieshub.common.settings import get_settings
from serieshub.database.repos.series_read_repo import SqlAlchemySeriesReadRepo
from serieshub.database.repos.series_write_repo import SqlAlchemySeriesWriteRepo
from serieshub.domain.dataclasses.commands import (
    AddTitlesCommand, AssignGenresCommand, CreateSeriesCommand, CreateSeriesCompleteCommand,
    DeleteSeriesCommand, GetSeriesByIdQuery, RemoveGenresCommand, RemoveTitlesCommand,
    SearchSeriesQuery, UpdateSeriesCommand, UpdateSeriesImageCommand,
)
from serieshub.domain.dataclasses.results import CommandResult
from serieshub.domain.policies.series_validation import SeriesRules
from serieshub.domain.ports.images import CoverImagePort
from serieshub.services.api.deps import get_cover_store, get_read_repo, get_series_rules, get_write_repo
from serieshub.services.api.results import ok_or_raise
from serieshub.services.schemas.series import (
    CommandRead, GenreIds, ImageCommandRead, SeriesCommandRead, SeriesCreate, SeriesCreateComplete,
    SeriesRead, SeriesUpdate, TitleIds, TitleNames, TitlesCommandRead,
)
from serieshub.services.series.create import CreateSeriesCompleteHandler, CreateSeriesHandler
from serieshub.services.series.delete import DeleteSeriesHandler
from serieshub.services.series.queries import GetSeriesByIdHandler, SearchSeriesHandler
from serieshub.services.series.relations import (
    AddTitlesHandler, AssignGenresHandler, RemoveGenresHandler, RemoveTitlesHandler,
)
from serieshub.services.series.update import UpdateSeriesHandler, UpdateSeriesImageHandler

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/series", tags=["series"])


# ---- helpers ----

def _series_out(result: CommandResult) -> SeriesCommandRead:
    return SeriesCommandRead(
        success=result.success,
        message=result.message,
        id=result.series_id,
        created=result.created,
        warnings=result.warnings,
        series=SeriesRead.model_validate(result.series) if result.series is not None else None,
    )


def _command_out(result: CommandResult) -> CommandRead:
    return CommandRead(
        success=result.success,
        message=result.message,
        id=result.series_id,
        created=result.created,
        warnings=result.warnings,
    )


def _decode_image(data: Optional[str]) -> Optional[bytes]:
    if not data:
        return None
    s = data.split(",", 1)[1] if data.startswith("data:") else data
    try:
        return base64.b64decode(s, validate=True)
    except (binascii.Error, ValueError):
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail={"message": "Image must be base64 encoded", "reasons": ["Image must be base64 encoded"]},
        )


# ---- queries ----

@router.get("", response_model=List[SeriesRead])
def search_series(
    name: Optional[str] = Query(None, description="Case-insensitive substring"),
    year: Optional[int] = Query(None),
    demography_id: Optional[int] = Query(None),
    limit: Optional[int] = Query(None, description=f"Defaults to {cfg.search_default_limit}, capped at {cfg.search_max_limit}"),
    offset: Optional[int] = Query(None),
    read: SqlAlchemySeriesReadRepo = Depends(get_read_repo),
) -> List[SeriesRead]:
    handler = SearchSeriesHandler(read, default_limit=cfg.search_default_limit, max_limit=cfg.search_max_limit)
    result = ok_or_raise(handler.execute(
        SearchSeriesQuery(name=name, year=year, demography_id=demography_id, limit=limit, offset=offset)
    ))
    return [SeriesRead.model_validate(s) for s in result.data]


@router.get("/{series_id}", response_model=SeriesRead)
def get_series(
    series_id: int,
    read: SqlAlchemySeriesReadRepo = Depends(get_read_repo),
) -> SeriesRead:
    result = ok_or_raise(GetSeriesByIdHandler(read).execute(GetSeriesByIdQuery(id=series_id)))
    return SeriesRead.model_validate(result.series)


# ---- series writes ----

@router.post("", response_model=SeriesCommandRead)
def create_series(
    payload: SeriesCreate,
    response: Response,
    read: SqlAlchemySeriesReadRepo = Depends(get_read_repo),
    write: SqlAlchemySeriesWriteRepo = Depends(get_write_repo),
    images: CoverImagePort = Depends(get_cover_store),
    rules: SeriesRules = Depends(get_series_rules),
) -> SeriesCommandRead:
    command = CreateSeriesCommand.from_mapping(
        payload.model_dump(exclude={"image"}), image=_decode_image(payload.image)
    )
    result = ok_or_raise(CreateSeriesHandler(read, write, images, rules=rules).execute(command))
    response.status_code = HTTPStatus.CREATED if result.created else HTTPStatus.OK
    return _series_out(result)


@router.post("/complete", response_model=SeriesCommandRead)
def create_series_complete(
    payload: SeriesCreateComplete,
    response: Response,
    read: SqlAlchemySeriesReadRepo = Depends(get_read_repo),
    write: SqlAlchemySeriesWriteRepo = Depends(get_write_repo),
    rules: SeriesRules = Depends(get_series_rules),
) -> SeriesCommandRead:
    command = CreateSeriesCompleteCommand.from_mapping(payload.model_dump())
    result = ok_or_raise(CreateSeriesCompleteHandler(read, write, rules=rules).execute(command))
    response.status_code = HTTPStatus.CREATED if result.created else HTTPStatus.OK
    return _series_out(result)


@router.patch("/{series_id}", response_model=SeriesCommandRead)
def update_series(
    series_id: int,
    payload: SeriesUpdate,
    read: SqlAlchemySeriesReadRepo = Depends(get_read_repo),
    write: SqlAlchemySeriesWriteRepo = Depends(get_write_repo),
    rules: SeriesRules = Depends(get_series_rules),
) -> SeriesCommandRead:
    command = UpdateSeriesCommand.from_mapping(payload.model_dump(), id=series_id)
    result = ok_or_raise(UpdateSeriesHandler(read, write, rules=rules).execute(command))
    return _series_out(result)


@router.delete("/{series_id}", response_model=CommandRead)
def delete_series(
    series_id: int,
    read: SqlAlchemySeriesReadRepo = Depends(get_read_repo),
    write: SqlAlchemySeriesWriteRepo = Depends(get_write_repo),
    images: CoverImagePort = Depends(get_cover_store),
) -> CommandRead:
    result = ok_or_raise(DeleteSeriesHandler(read, write, images).execute(DeleteSeriesCommand(id=series_id)))
    return _command_out(result)


@router.put("/{series_id}/image", response_model=ImageCommandRead)
def update_series_image(
    series_id: int,
    body: Optional[bytes] = Body(None, media_type="application/octet-stream"),
    read: SqlAlchemySeriesReadRepo = Depends(get_read_repo),
    write: SqlAlchemySeriesWriteRepo = Depends(get_write_repo),
    images: CoverImagePort = Depends(get_cover_store),
) -> ImageCommandRead:
    handler = UpdateSeriesImageHandler(read, write, images, max_bytes=cfg.images.max_upload_bytes)
    result = ok_or_raise(handler.execute(UpdateSeriesImageCommand(series_id=series_id, image=body)))
    return ImageCommandRead(
        success=True, message=result.message, id=result.series_id, warnings=result.warnings, image=result.data
    )


# ---- relationships ----

@router.put("/{series_id}/genres", response_model=CommandRead)
def assign_genres(
    series_id: int,
    payload: GenreIds,
    read: SqlAlchemySeriesReadRepo = Depends(get_read_repo),
    write: SqlAlchemySeriesWriteRepo = Depends(get_write_repo),
) -> CommandRead:
    command = AssignGenresCommand(series_id=series_id, genre_ids=payload.genre_ids)
    return _command_out(ok_or_raise(AssignGenresHandler(read, write).execute(command)))


@router.delete("/{series_id}/genres", response_model=CommandRead)
def remove_genres(
    series_id: int,
    payload: GenreIds,
    read: SqlAlchemySeriesReadRepo = Depends(get_read_repo),
    write: SqlAlchemySeriesWriteRepo = Depends(get_write_repo),
) -> CommandRead:
    command = RemoveGenresCommand(series_id=series_id, genre_ids=payload.genre_ids)
    return _command_out(ok_or_raise(RemoveGenresHandler(read, write).execute(command)))


@router.post("/{series_id}/titles", response_model=TitlesCommandRead, status_code=HTTPStatus.CREATED)
def add_titles(
    series_id: int,
    payload: TitleNames,
    read: SqlAlchemySeriesReadRepo = Depends(get_read_repo),
    write: SqlAlchemySeriesWriteRepo = Depends(get_write_repo),
) -> TitlesCommandRead:
    result = ok_or_raise(AddTitlesHandler(read, write).execute(
        AddTitlesCommand(series_id=series_id, titles=payload.titles)
    ))
    return TitlesCommandRead(success=True, message=result.message, id=result.series_id, titles=result.data)


@router.delete("/{series_id}/titles", response_model=CommandRead)
def remove_titles(
    series_id: int,
    payload: TitleIds,
    read: SqlAlchemySeriesReadRepo = Depends(get_read_repo),
    write: SqlAlchemySeriesWriteRepo = Depends(get_write_repo),
) -> CommandRead:
    command = RemoveTitlesCommand(series_id=series_id, title_ids=payload.title_ids)
    return _command_out(ok_or_raise(RemoveTitlesHandler(read, write).execute(command)))
