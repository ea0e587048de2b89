from __future__ import annotations

import base64
import io
from http import HTTPStatus

from PIL import Image

from serieshub.common.settings import get_settings

API = get_settings().api.prefix


def _png() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (400, 600), (10, 120, 200)).save(buf, format="PNG")
    return buf.getvalue()


def _complete(client, seeded, **kw):
    body = {"name": "Foo", "year": 2020, "demography_id": seeded["shonen"], "qualification": 8.5}
    body.update(kw)
    return client.post(f"{API}/series/complete", json=body)


def test_create_complete_then_merge(api_client, seeded):
    r1 = _complete(api_client, seeded, genres=[seeded["action"], seeded["action"]], titles=["X", "x "])
    assert r1.status_code == HTTPStatus.CREATED, r1.text
    j1 = r1.json()
    assert j1["created"] is True
    assert j1["message"] == "Series created successfully with all relations"
    assert [g["id"] for g in j1["series"]["genres"]] == [seeded["action"]]
    assert [t["name"] for t in j1["series"]["titles"]] == ["X", "x"]
    assert j1["series"]["rank"] == 1
    assert j1["series"]["demography_name"] == "Shonen"

    r2 = _complete(api_client, seeded, name="  foo ", qualification=9.0)
    assert r2.status_code == HTTPStatus.OK
    j2 = r2.json()
    assert j2["id"] == j1["id"]
    assert j2["created"] is False
    assert j2["series"]["qualification"] == 9.0

    listing = api_client.get(f"{API}/series").json()
    assert [s["id"] for s in listing] == [j1["id"]]


def test_create_complete_validation_error_is_400(api_client, seeded):
    r = _complete(api_client, seeded, year=1899, qualification=10.01)
    assert r.status_code == HTTPStatus.BAD_REQUEST
    detail = r.json()["detail"]
    assert "Qualification must be between 0 and 10" in detail["reasons"]
    assert any(x.startswith("Year must be between 1900") for x in detail["reasons"])


def test_non_finite_qualification_is_400(api_client, seeded):
    raw = f'{{"name": "Foo", "year": 2020, "demography_id": {seeded["shonen"]}, "qualification": NaN}}'
    r = api_client.post(
        f"{API}/series/complete", content=raw, headers={"Content-Type": "application/json"}
    )
    assert r.status_code == HTTPStatus.BAD_REQUEST, r.text
    assert r.json()["detail"]["reasons"] == ["Qualification must be between 0 and 10"]
    assert api_client.get(f"{API}/series").json() == []


def test_get_patch_delete_cycle(api_client, seeded):
    sid = _complete(api_client, seeded).json()["id"]

    got = api_client.get(f"{API}/series/{sid}")
    assert got.status_code == HTTPStatus.OK
    assert got.json()["name"] == "Foo"

    patched = api_client.patch(f"{API}/series/{sid}", json={"description": "  new  "})
    assert patched.status_code == HTTPStatus.OK
    assert patched.json()["series"]["description"] == "new"

    empty = api_client.patch(f"{API}/series/{sid}", json={})
    assert empty.status_code == HTTPStatus.BAD_REQUEST
    assert "No fields to update" in empty.json()["detail"]["reasons"]

    deleted = api_client.delete(f"{API}/series/{sid}")
    assert deleted.status_code == HTTPStatus.OK
    assert deleted.json()["message"] == "Series deleted successfully"

    assert api_client.get(f"{API}/series/{sid}").status_code == HTTPStatus.NOT_FOUND
    assert api_client.delete(f"{API}/series/{sid}").status_code == HTTPStatus.NOT_FOUND


def test_create_with_base64_image_and_replace_it(api_client, seeded, tmp_path):
    body = {
        "name": "Pictured",
        "year": 2019,
        "demography_id": seeded["shonen"],
        "image": "data:image/png;base64," + base64.b64encode(_png()).decode(),
    }
    r = api_client.post(f"{API}/series", json=body)
    assert r.status_code == HTTPStatus.CREATED, r.text
    sid = r.json()["id"]
    first = r.json()["series"]["image"]
    assert first.startswith(f"/img/tarjeta/{sid}_")
    assert (tmp_path / first.lstrip("/")).is_file()

    put = api_client.put(
        f"{API}/series/{sid}/image", content=_png(), headers={"Content-Type": "image/png"}
    )
    assert put.status_code == HTTPStatus.OK, put.text
    second = put.json()["image"]
    assert (tmp_path / second.lstrip("/")).is_file()
    if second != first:
        assert not (tmp_path / first.lstrip("/")).exists()


def test_create_with_bad_image_still_succeeds_with_warning(api_client, seeded):
    body = {
        "name": "Broken Cover",
        "year": 2019,
        "demography_id": seeded["shonen"],
        "image": base64.b64encode(b"not an image").decode(),
    }
    r = api_client.post(f"{API}/series", json=body)
    assert r.status_code == HTTPStatus.CREATED
    assert r.json()["series"]["image"] is None
    assert r.json()["warnings"]


def test_image_body_required(api_client, seeded):
    sid = _complete(api_client, seeded).json()["id"]
    r = api_client.put(f"{API}/series/{sid}/image", content=b"", headers={"Content-Type": "image/png"})
    assert r.status_code == HTTPStatus.BAD_REQUEST
    assert r.json()["detail"]["reasons"] == ["Image file is required"]


def test_genre_and_title_endpoints(api_client, seeded):
    sid = _complete(api_client, seeded).json()["id"]

    r = api_client.put(f"{API}/series/{sid}/genres", json={"genre_ids": [seeded["action"], seeded["comedy"]]})
    assert r.status_code == HTTPStatus.OK
    assert r.json()["message"] == f"Genres assigned successfully to series {sid}"

    r = api_client.request("DELETE", f"{API}/series/{sid}/genres", json={"genre_ids": [seeded["action"]]})
    assert r.status_code == HTTPStatus.OK
    series = api_client.get(f"{API}/series/{sid}").json()
    assert [g["id"] for g in series["genres"]] == [seeded["comedy"]]

    bad = api_client.put(f"{API}/series/{sid}/genres", json={"genre_ids": [0, "x"]})
    assert bad.status_code == HTTPStatus.BAD_REQUEST
    assert bad.json()["detail"]["reasons"] == ["Invalid genre IDs: 0, x"]

    r = api_client.post(f"{API}/series/{sid}/titles", json={"titles": ["A", " A ", "B"]})
    assert r.status_code == HTTPStatus.CREATED
    assert r.json()["titles"] == ["A", "B"]

    titles = api_client.get(f"{API}/series/{sid}").json()["titles"]
    r = api_client.request("DELETE", f"{API}/series/{sid}/titles", json={"title_ids": [titles[0]["id"]]})
    assert r.status_code == HTTPStatus.OK
    assert [t["name"] for t in api_client.get(f"{API}/series/{sid}").json()["titles"]] == ["B"]

    empty = api_client.request("DELETE", f"{API}/series/{sid}/titles", json={"title_ids": []})
    assert empty.status_code == HTTPStatus.BAD_REQUEST


def test_relation_on_missing_series_is_404(api_client, seeded):
    r = api_client.put(f"{API}/series/999999/genres", json={"genre_ids": [seeded["action"]]})
    assert r.status_code == HTTPStatus.NOT_FOUND


def test_search_paging_and_filters(api_client, seeded):
    for i, q in enumerate([5, 9, 7]):
        _complete(api_client, seeded, name=f"Series {i}", year=2000 + i, qualification=q)
    _complete(api_client, seeded, name="Hidden one", year=2010, qualification=10, visible=False)

    all_rows = api_client.get(f"{API}/series").json()
    assert [s["qualification"] for s in all_rows] == [9, 7, 5]
    assert [s["rank"] for s in all_rows] == [1, 2, 3]

    page = api_client.get(f"{API}/series", params={"limit": 1, "offset": 1}).json()
    assert [s["name"] for s in page] == ["Series 2"]

    by_year = api_client.get(f"{API}/series", params={"year": 2000}).json()
    assert [s["name"] for s in by_year] == ["Series 0"]
