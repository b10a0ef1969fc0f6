"""Tests for the HTML interface and redirects."""

import pytest

from tinylink.errors import StorageError


@pytest.mark.asyncio
class TestWebRoutes:
    """Test the listing page, form handling and redirects."""

    async def test_homepage_lists_live_links(self, client, service):
        await service.shorten("example.com/keep", custom_code="keep")
        await service.shorten("example.com/drop", custom_code="drop")
        await service.delete("drop")

        response = await client.get("/")

        assert response.status_code == 200
        assert "http://testserver/keep" in response.text
        assert "https://example.com/keep" in response.text
        assert "https://example.com/drop" not in response.text

    async def test_homepage_empty(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert "No links yet." in response.text

    async def test_homepage_storage_failure(self, client, store, monkeypatch):
        async def broken_list():
            raise StorageError("connection lost")

        monkeypatch.setattr(store, "list_live", broken_list)

        response = await client.get("/")

        assert response.status_code == 503

    async def test_form_shorten_redirects_home(self, client):
        response = await client.post(
            "/shorten",
            data={"url": "example.com/path", "custom_code": ""},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"].endswith("/")

        listing = await client.get("/")
        assert "https://example.com/path" in listing.text

    async def test_form_missing_url_shows_error_with_listing(self, client, service):
        await service.shorten("example.com/existing", custom_code="exist")

        response = await client.post("/shorten", data={"url": ""})

        assert response.status_code == 400
        assert "URL required" in response.text
        assert "https://example.com/existing" in response.text

    async def test_form_bad_code(self, client):
        response = await client.post("/shorten", data={"url": "example.com", "custom_code": "ab"})

        assert response.status_code == 400
        assert "3-8 letters/digits" in response.text

    async def test_form_code_taken(self, client):
        await client.post("/shorten", data={"url": "example.com", "custom_code": "abc"})
        response = await client.post("/shorten", data={"url": "example.com", "custom_code": "abc"})

        assert response.status_code == 409
        assert "already exists" in response.text

    async def test_form_storage_failure_is_generic(self, client, store, monkeypatch):
        async def broken_insert(code, target_url):
            raise StorageError("password authentication failed")

        monkeypatch.setattr(store, "insert", broken_insert)

        response = await client.post("/shorten", data={"url": "example.com"})

        assert response.status_code == 500
        assert "Something went wrong" in response.text
        assert "password" not in response.text

    async def test_delete_form(self, client, service):
        await service.shorten("example.com", custom_code="gone")

        response = await client.post("/delete/gone", follow_redirects=False)

        assert response.status_code == 303
        assert (await client.get("/gone", follow_redirects=False)).status_code == 404

    async def test_delete_failure_page_posts_to_absolute_routes(self, client, service, store, monkeypatch):
        await service.shorten("example.com", custom_code="abc")

        async def broken_mark_deleted(code):
            raise StorageError("connection lost")

        monkeypatch.setattr(store, "mark_deleted", broken_mark_deleted)

        response = await client.post("/delete/abc", follow_redirects=False)

        assert response.status_code == 500
        assert 'action="http://testserver/shorten"' in response.text
        assert 'action="http://testserver/delete/abc"' in response.text
        assert 'action="shorten"' not in response.text

    async def test_delete_unknown_code(self, client):
        response = await client.post("/delete/never", follow_redirects=False)

        assert response.status_code == 303

    async def test_redirect_counts_click(self, client, service):
        await service.shorten("example.com/target", custom_code="go1")

        response = await client.get("/go1", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "https://example.com/target"
        assert (await service.get_link_info("go1")).total_clicks == 1

    async def test_redirect_not_found(self, client):
        response = await client.get("/nosuchcode", follow_redirects=False)

        assert response.status_code == 404
        assert response.text == "Not found"

    async def test_healthz(self, client):
        response = await client.get("/healthz")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["db"] == "ok"
        assert data["version"] == "1.0.0"
        assert data["uptime"] >= 0

    async def test_healthz_db_down(self, client, store):
        await store.close()

        response = await client.get("/healthz")

        assert response.status_code == 500
        assert response.json()["db"] == "down"
        assert response.json()["status"] == "error"
