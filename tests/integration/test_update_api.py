"""Integration tests for the update-check endpoints."""

import httpx
import pytest
import pytest_asyncio
import respx
from fastapi import status

from slatestack.infrastructure.api.dependencies import get_update_service
from slatestack.infrastructure.services.update_service import ReleaseCache, UpdateService

API = "https://api.example.test"


@pytest_asyncio.fixture
async def update_client(client):
    from slatestack.infrastructure.api.app import app

    cache = ReleaseCache(60)
    app.dependency_overrides[get_update_service] = lambda: UpdateService(
        current_version="0.1.0", owner="acme", repo="slatestack", cache=cache, api_url=API
    )
    yield client


@pytest.mark.asyncio
@respx.mock
async def test_check_for_updates(update_client):
    respx.get(f"{API}/repos/acme/slatestack/releases/latest").mock(
        return_value=httpx.Response(
            200,
            json={
                "tag_name": "v1.0.0",
                "html_url": "https://github.com/acme/slatestack/releases/tag/v1.0.0",
                "published_at": "2026-10-01T00:00:00Z",
            },
        )
    )

    response = await update_client.get("/api/admin/update/check")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "currentVersion": "0.1.0",
        "latestVersion": "1.0.0",
        "updateAvailable": True,
        "versionDiff": "major",
        "releaseUrl": "https://github.com/acme/slatestack/releases/tag/v1.0.0",
        "publishedAt": "2026-10-01T00:00:00Z",
    }


@pytest.mark.asyncio
@respx.mock
async def test_rate_limited(update_client):
    respx.get(f"{API}/repos/acme/slatestack/releases/latest").mock(
        return_value=httpx.Response(403)
    )

    response = await update_client.get("/api/admin/update/check")

    assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
    assert response.json()["error"] == "upstream_rate_limited"


@pytest.mark.asyncio
@respx.mock
async def test_upstream_unavailable(update_client):
    respx.get(f"{API}/repos/acme/slatestack/releases/latest").mock(
        side_effect=httpx.ConnectError("refused")
    )

    response = await update_client.get("/api/admin/update/check")

    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert response.json()["error"] == "upstream_unavailable"


@pytest.mark.asyncio
@respx.mock
async def test_changelog(update_client):
    respx.get(host="api.example.test", path="/repos/acme/slatestack/releases").mock(
        return_value=httpx.Response(
            200,
            json=[
                {
                    "tag_name": "v0.2.0",
                    "name": "Spring",
                    "body": "- reorder fixes",
                    "published_at": "2026-10-01T00:00:00Z",
                    "html_url": "https://github.com/acme/slatestack/releases/tag/v0.2.0",
                }
            ],
        )
    )

    response = await update_client.get("/api/admin/update/changelog", params={"limit": 3})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["releases"] == [
        {
            "version": "0.2.0",
            "name": "Spring",
            "body": "- reorder fixes",
            "publishedAt": "2026-10-01T00:00:00Z",
            "url": "https://github.com/acme/slatestack/releases/tag/v0.2.0",
        }
    ]
