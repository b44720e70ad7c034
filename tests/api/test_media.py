"""Standalone media endpoint tests."""

from collections.abc import Callable

from httpx import AsyncClient


async def test_upload_returns_url_and_identifier(
    app_client: AsyncClient, fake_store, make_image: Callable[..., bytes]
) -> None:
    response = await app_client.post(
        "/api/v1/media", files={"file": ("cat.jpg", make_image(fmt="JPEG"), "image/jpeg")}
    )
    assert response.status_code == 201
    uploaded = fake_store.by_filename["cat.jpg"]
    assert response.json() == {
        "message": "Image uploaded",
        "url": uploaded.locator,
        "identifier": uploaded.identifier,
    }


async def test_upload_unprocessable_image(app_client: AsyncClient, fake_store) -> None:
    response = await app_client.post(
        "/api/v1/media", files={"file": ("cat.jpg", b"nope", "image/jpeg")}
    )
    assert response.status_code == 422
    assert response.json()["error"] == "TRANSFORM_ERROR"
    assert fake_store.uploads == []


async def test_upload_store_failure_is_bad_gateway(
    app_client: AsyncClient, fake_store, make_image: Callable[..., bytes]
) -> None:
    fake_store.fail_uploads.add("cat.png")
    response = await app_client.post(
        "/api/v1/media", files={"file": ("cat.png", make_image(), "image/png")}
    )
    assert response.status_code == 502
    assert response.json()["error"] == "STORE_UPLOAD_ERROR"


async def test_upload_requires_file(app_client: AsyncClient) -> None:
    response = await app_client.post("/api/v1/media", data={"other": "x"})
    assert response.status_code == 422


async def test_delete_by_identifier(app_client: AsyncClient, fake_store) -> None:
    response = await app_client.request(
        "DELETE", "/api/v1/media", json={"identifier": "abc123"}
    )
    assert response.status_code == 200
    assert response.json()["identifier"] == "abc123"
    assert fake_store.deleted == ["abc123"]


async def test_delete_accepts_public_id(app_client: AsyncClient, fake_store) -> None:
    response = await app_client.request("DELETE", "/api/v1/media", json={"public_id": "xyz"})
    assert response.status_code == 200
    assert fake_store.deleted == ["xyz"]


async def test_delete_without_identifier_never_reaches_store(
    app_client: AsyncClient, fake_store
) -> None:
    response = await app_client.request("DELETE", "/api/v1/media", json={})
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "identifier"}
    assert fake_store.deleted == []


async def test_delete_store_failure_is_bad_gateway(app_client: AsyncClient, fake_store) -> None:
    fake_store.fail_deletes.add("abc")
    response = await app_client.request("DELETE", "/api/v1/media", json={"identifier": "abc"})
    assert response.status_code == 502
    assert response.json()["error"] == "STORE_DELETE_ERROR"
