"""Shared pytest fixtures."""

import copy
from collections.abc import AsyncGenerator, Iterable
from contextlib import asynccontextmanager
from types import SimpleNamespace
from typing import Any

import pytest

from uigen.app import App
from uigen.config import Config
from uigen.core.core import Services


@pytest.fixture(scope="session")
def anyio_backend():
    """Run anyio-marked tests on asyncio only."""
    return "asyncio"


def _matches(doc: dict[str, Any], query: dict[str, Any]) -> bool:
    return all(doc.get(key) == value for key, value in query.items())


class FakeCursor:
    """Sortable async iterator over matched documents."""

    def __init__(self, docs: Iterable[dict[str, Any]]) -> None:
        self._docs = list(docs)

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._docs.sort(key=lambda doc: doc[key], reverse=direction == -1)
        return self

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for doc in self._docs:
            yield doc


class FakeCollection:
    """In-memory stand-in for the handful of collection methods the services use."""

    def __init__(self) -> None:
        self.docs: list[dict[str, Any]] = []
        self.indexes: list[Any] = []

    async def create_index(self, keys: Any, **kwargs: Any) -> None:
        self.indexes.append((keys, kwargs))

    async def insert_one(self, doc: dict[str, Any]) -> SimpleNamespace:
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        return next((copy.deepcopy(doc) for doc in self.docs if _matches(doc, query)), None)

    def find(self, query: dict[str, Any] | None = None) -> FakeCursor:
        return FakeCursor(copy.deepcopy(doc) for doc in self.docs if _matches(doc, query or {}))


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())


class FakeCore:
    """Core with the real service registry over an in-memory database."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self.database = FakeDatabase()
        self.services = Services(self.database)  # type: ignore[arg-type]
        self.services.set_core(self)  # type: ignore[arg-type]

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        await self.services.start_all()
        try:
            yield
        finally:
            await self.services.stop_all()


@pytest.fixture
def config():
    """Configuration for a development deployment."""
    return Config(
        database_url="mongodb://localhost:27017/uigen_test",
        session_secret_key="test-secret-key",
        environment="development",
    )


@pytest.fixture
def production_config(config):
    return config.model_copy(update={"environment": "production"})


@pytest.fixture
def core(config):
    return FakeCore(config)


@pytest.fixture
def app(config, core):
    return App(config, core=core)  # type: ignore[arg-type]
