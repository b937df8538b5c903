"""Shared fixtures for all tests."""

import asyncio
from typing import Any

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from charforge.config import Settings, get_settings
from charforge.game.engine import CharacterBuilder
from charforge.game.store import CharacterStore


class FakeCharacterEndpoint:
    """In-process stand-in for the remote character store."""

    def __init__(self) -> None:
        self.url = ""
        self.load_status = 200
        self.load_body: Any = {
            "statusCode": 200,
            "body": {
                "attributes": {"Strength": 15, "Dexterity": 12},
                "skills": {"Stealth": 2},
            },
        }
        self.raw_load_body: str | None = None
        self.save_status = 200
        self.delay = 0.0
        self.saved: list[dict[str, Any]] = []
        self.load_requests = 0

    async def handle_get(self, request: web.Request) -> web.Response:
        self.load_requests += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.raw_load_body is not None:
            return web.Response(text=self.raw_load_body, status=self.load_status)
        return web.json_response(self.load_body, status=self.load_status)

    async def handle_post(self, request: web.Request) -> web.Response:
        payload = await request.json()
        self.saved.append(payload)
        return web.json_response({"statusCode": 200, "body": payload}, status=self.save_status)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make sure no test sees settings cached by another."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def endpoint():
    """Run a fake remote store on a local port."""
    fake = FakeCharacterEndpoint()
    app = web.Application()
    app.router.add_get("/api/character", fake.handle_get)
    app.router.add_post("/api/character", fake.handle_post)

    server = TestServer(app)
    await server.start_server()
    fake.url = str(server.make_url("/api/character"))

    yield fake

    await server.close()


@pytest.fixture
def settings(endpoint: FakeCharacterEndpoint) -> Settings:
    """Settings pointing at the fake remote store."""
    return Settings(api_url=endpoint.url, request_timeout_seconds=5.0)


@pytest.fixture
def notifications() -> list[str]:
    """Collects messages sent to the builder's notify callback."""
    return []


@pytest.fixture
def builder(settings: Settings, notifications: list[str]) -> CharacterBuilder:
    """A character builder wired to the fake remote store."""
    return CharacterBuilder(
        settings=settings,
        store=CharacterStore(default_attribute_score=settings.default_attribute_score),
        notify=notifications.append,
    )
