"""Pytest configuration and fixtures."""

import asyncio
from collections.abc import AsyncGenerator
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from pubdict.config import Settings
from pubdict.main import app
from pubdict.services.dictionary import PubDictionaries

BASE = "https://pubdictionaries.org"
DICT_PREFIX = "https://pubdictionaries.org/dictionaries/"


class FakeFetch:
    """Request function answering from a url -> body (or exception) table."""

    def __init__(self, responses: dict[str, Any], delays: dict[str, int] | None = None) -> None:
        self.responses = responses
        self.delays = delays or {}
        self.calls: list[str] = []
        self.finished: list[str] = []

    async def __call__(self, url: str) -> Any:
        self.calls.append(url)
        # yield to the loop a number of times to control completion order
        for _ in range(self.delays.get(url, 0)):
            await asyncio.sleep(0)
        self.finished.append(url)
        if url not in self.responses:
            raise AssertionError(f"Unexpected URL {url}")
        value = self.responses[url]
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults only, ignoring any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def make_backend(settings: Settings):
    """Build a PubDictionaries backend answering from a canned response table."""

    def _make(responses: dict[str, Any], delays: dict[str, int] | None = None):
        fetch = FakeFetch(responses, delays)
        return PubDictionaries(settings, fetch=fetch), fetch

    return _make


@pytest.fixture
def test_app() -> FastAPI:
    """The FastAPI application with a removable backend slot."""
    yield app
    if hasattr(app.state, "backend"):
        del app.state.backend


@pytest.fixture
async def async_client(test_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create an asynchronous test client."""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def make_fetch() -> type[FakeFetch]:
    """Factory for canned request functions."""
    return FakeFetch
