"""Shared pytest fixtures for the Shoplist test suite."""

from __future__ import annotations

from datetime import date
from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from shoplist.config import get_settings
from shoplist.db import CatalogStore, Database, ItemStore, ListStore
from shoplist.models.shopping import ShoppingItemCreate, ShoppingList, ShoppingListCreate
from shoplist.server.app import create_app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Ensure each test uses an isolated SQLite database location."""

    db_path = tmp_path / "test_shoplist.db"
    monkeypatch.setenv("SHOPLIST_DATABASE_PATH", str(db_path))
    monkeypatch.delenv("SHOPLIST_API_TOKEN", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def database() -> Generator[Database, None, None]:
    """Open a database handle at the isolated path and close it afterwards."""

    handle = Database.from_settings(get_settings()).open()
    yield handle
    handle.close()


@pytest.fixture()
def list_store(database) -> ListStore:
    return ListStore(database)


@pytest.fixture()
def item_store(database) -> ItemStore:
    return ItemStore(database)


@pytest.fixture()
def catalog_store(database) -> CatalogStore:
    return CatalogStore(database)


@pytest.fixture()
def weekly_list(list_store) -> ShoppingList:
    return list_store.create(ShoppingListCreate(name="Week 12", week_starting=date(2024, 3, 18)))


@pytest.fixture()
def make_item(item_store, weekly_list):
    """Factory adding an item to ``weekly_list`` unless another list id is given."""

    def _make(name: str, **fields):
        fields.setdefault("list_id", weekly_list.id)
        return item_store.create(ShoppingItemCreate(name=name, **fields))

    return _make


@pytest.fixture()
def app(database) -> Generator[FastAPI, None, None]:
    """Create a new FastAPI app instance for each test and reset overrides."""

    application = create_app(database=database)
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> TestClient:
    """Return a test client bound to the FastAPI app."""

    return TestClient(app)
