import json

import httpx
import pytest
from fastapi.testclient import TestClient

from portfolio_api.config import Settings, get_settings
from portfolio_api.main import app, get_github_client

OWNER = "jasonschurawel"


def make_repo(**overrides):
    base = {
        "id": 1,
        "name": "tool-x",
        "full_name": f"{OWNER}/tool-x",
        "description": "A small tool",
        "html_url": f"https://github.com/{OWNER}/tool-x",
        "language": "Go",
        "stargazers_count": 5,
        "forks_count": 1,
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-06-01T00:00:00Z",
        "topics": ["cli"],
        "private": False,
    }
    base.update(overrides)
    return base


class FakeGitHub:
    """Records upstream requests and answers them with a canned response."""

    def __init__(self, status_code=200, body=b"[]", error=None):
        self.status_code = status_code
        self.body = body
        self.error = error
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, content=self.body)

    def client(self, headers=None) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url="https://api.github.com",
            headers=headers,
            transport=httpx.MockTransport(self.handler),
        )


def json_body(payload) -> bytes:
    return json.dumps(payload).encode()


@pytest.fixture
def settings() -> Settings:
    return Settings(owner=OWNER)


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def api(settings, fake_github):
    async def _client():
        async with fake_github.client() as client:
            yield client

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_github_client] = _client
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
