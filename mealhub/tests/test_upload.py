import pytest
from httpx import ASGITransport, AsyncClient

from mealhub.api.api_run import app
from mealhub.api.routes import upload

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.mark.asyncio
async def test_upload_image_saves_file(tmp_path, monkeypatch, client, login, alice):
    """Uploaded images land under the uploads directory, grouped by folder."""

    # Use a temporary uploads directory (don't touch the real one)
    monkeypatch.setattr(upload, "UPLOADS_DIR", tmp_path / "uploads")

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        resp = await ac.post(
            "/api/upload/image",
            headers=login(alice),
            files={"file": ("dish.PNG", PNG, "image/png")},
            data={"folder": "recipes"},
        )
    assert resp.status_code == 200, resp.text
    url = resp.json()["imageUrl"]
    assert url.startswith("/uploads/recipes/") and url.endswith(".png")
    assert (tmp_path / "uploads" / "recipes" / url.rsplit("/", 1)[1]).read_bytes() == PNG


@pytest.mark.asyncio
async def test_upload_rejects_non_images(tmp_path, monkeypatch, client, login, alice):
    monkeypatch.setattr(upload, "UPLOADS_DIR", tmp_path / "uploads")

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        resp = await ac.post(
            "/api/upload/image",
            headers=login(alice),
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid image type"
    assert not (tmp_path / "uploads").exists()


@pytest.mark.asyncio
async def test_upload_extension_follows_content_type(tmp_path, monkeypatch, client, login, alice):
    """A script disguised as a PNG is stored with the .png extension."""
    monkeypatch.setattr(upload, "UPLOADS_DIR", tmp_path / "uploads")

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        resp = await ac.post(
            "/api/upload/image",
            headers=login(alice),
            files={"file": ("evil.html", b"<script>alert(1)</script>", "image/png")},
        )
    assert resp.status_code == 200
    url = resp.json()["imageUrl"]
    assert url.endswith(".png")
    assert not list((tmp_path / "uploads").rglob("*.html"))


@pytest.mark.asyncio
async def test_upload_rejects_unlisted_image_types(tmp_path, monkeypatch, client, login, alice):
    monkeypatch.setattr(upload, "UPLOADS_DIR", tmp_path / "uploads")

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        resp = await ac.post(
            "/api/upload/image",
            headers=login(alice),
            files={"file": ("logo.svg", b"<svg onload=\"alert(1)\"/>", "image/svg+xml")},
        )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid image type"


@pytest.mark.asyncio
async def test_upload_rejects_oversized_image(tmp_path, monkeypatch, client, login, alice):
    monkeypatch.setattr(upload, "UPLOADS_DIR", tmp_path / "uploads")
    monkeypatch.setattr(upload, "MAX_UPLOAD_BYTES", 16)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        resp = await ac.post(
            "/api/upload/image",
            headers=login(alice),
            files={"file": ("dish.png", PNG, "image/png")},
        )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Image is too large"
    assert not (tmp_path / "uploads").exists()


@pytest.mark.asyncio
async def test_upload_sanitizes_folder(tmp_path, monkeypatch, client, login, alice):
    monkeypatch.setattr(upload, "UPLOADS_DIR", tmp_path / "uploads")

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        resp = await ac.post(
            "/api/upload/image",
            headers=login(alice),
            files={"file": ("dish.jpg", PNG, "image/jpeg")},
            data={"folder": "../../etc"},
        )
    assert resp.status_code == 200
    assert resp.json()["imageUrl"].startswith("/uploads/uploads/")


@pytest.mark.asyncio
async def test_upload_requires_session(client):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        resp = await ac.post("/api/upload/image", files={"file": ("dish.png", PNG, "image/png")})
    assert resp.status_code == 401
