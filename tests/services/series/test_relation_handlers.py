from __future__ import annotations

import pytest

from serieshub.domain.dataclasses.commands import (
    AddTitlesCommand, AssignGenresCommand, RemoveGenresCommand, RemoveTitlesCommand,
)
from serieshub.domain.enums import FailureKind
from serieshub.services.series.relations import (
    AddTitlesHandler, AssignGenresHandler, RemoveGenresHandler, RemoveTitlesHandler,
)


# ----- genres ----------------------------------------------------------------

def test_assign_dedupes_then_replaces(store, read, write):
    s = store.seed()
    handler = AssignGenresHandler(read, write)

    res = handler.execute(AssignGenresCommand(series_id=s.id, genre_ids=[1, 2, 2, 3]))
    assert res.success
    assert res.message == f"Genres assigned successfully to series {s.id}"
    assert store.called("assign_genres") == [(s.id, [1, 2, 3])]

    handler.execute(AssignGenresCommand(series_id=s.id, genre_ids=[4]))
    assert [g.id for g in store.series[s.id].genres] == [4]


def test_remove_genres_subtracts(store, read, write):
    s = store.seed()
    write.assign_genres(s.id, [1, 2, 3])

    res = RemoveGenresHandler(read, write).execute(RemoveGenresCommand(series_id=s.id, genre_ids=[2, 2]))

    assert res.message == f"Genres removed successfully from series {s.id}"
    assert [g.id for g in store.series[s.id].genres] == [1, 3]


@pytest.mark.parametrize("handler_cls, command_cls", [
    (AssignGenresHandler, AssignGenresCommand),
    (RemoveGenresHandler, RemoveGenresCommand),
])
def test_genre_ids_must_be_non_empty_positive_ints(store, read, write, handler_cls, command_cls):
    s = store.seed()
    handler = handler_cls(read, write)

    empty = handler.execute(command_cls(series_id=s.id, genre_ids=[]))
    assert empty.failure is FailureKind.validation
    assert empty.reasons == ["At least one genre ID is required"]

    bad = handler.execute(command_cls(series_id=s.id, genre_ids=[1, 0, "x", -2]))
    assert bad.reasons == ["Invalid genre IDs: 0, x, -2"]

    assert [n for n in store.names() if n.endswith("genres")] == []


def test_genres_for_unknown_series(store, read, write):
    res = AssignGenresHandler(read, write).execute(AssignGenresCommand(series_id=9, genre_ids=[1]))
    assert res.failure is FailureKind.not_found
    assert res.message == "Series not found"


# ----- titles ----------------------------------------------------------------

def test_add_titles_trims_and_dedupes_within_request_only(store, read, write):
    s = store.seed()
    write.add_titles(s.id, ["A"])

    res = AddTitlesHandler(read, write).execute(AddTitlesCommand(series_id=s.id, titles=["A", " A ", "B"]))

    assert res.success
    assert res.message == f"Titles added successfully to series {s.id}"
    assert res.data == ["A", "B"]
    assert [t.name for t in store.series[s.id].titles] == ["A", "A", "B"]


def test_add_titles_all_blank_fails_after_normalizing(store, read, write):
    s = store.seed()
    res = AddTitlesHandler(read, write).execute(AddTitlesCommand(series_id=s.id, titles=["  ", ""]))

    assert res.failure is FailureKind.validation
    assert res.message == "At least one non-empty title is required"
    assert store.called("add_titles") == []


def test_add_titles_rejects_non_strings(store, read, write):
    s = store.seed()
    res = AddTitlesHandler(read, write).execute(AddTitlesCommand(series_id=s.id, titles=["ok", 5]))
    assert res.reasons == ["Titles must be strings: 5"]


def test_remove_titles_by_id(store, read, write):
    s = store.seed()
    write.add_titles(s.id, ["A", "B", "C"])
    a, b, c = store.series[s.id].titles

    res = RemoveTitlesHandler(read, write).execute(RemoveTitlesCommand(series_id=s.id, title_ids=[a.id, c.id]))

    assert res.message == f"Titles removed successfully from series {s.id}"
    assert [t.name for t in store.series[s.id].titles] == ["B"]


def test_remove_titles_empty_list_fails(store, read, write):
    s = store.seed()
    res = RemoveTitlesHandler(read, write).execute(RemoveTitlesCommand(series_id=s.id, title_ids=[]))
    assert res.reasons == ["At least one title ID is required"]


def test_storage_error_in_relation_op_is_wrapped(store, read, write):
    s = store.seed()
    store.fail_on["remove_titles"] = RuntimeError("deadlock detected")

    res = RemoveTitlesHandler(read, write).execute(RemoveTitlesCommand(series_id=s.id, title_ids=[1]))

    assert res.failure is FailureKind.storage
    assert res.message == "Error removing titles: deadlock detected"
