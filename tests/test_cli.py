"""Tests for the typer command-line interface."""

from __future__ import annotations

import json
from datetime import date

import pytest
from typer.testing import CliRunner

from shoplist.cli import app
from shoplist.config import get_settings
from shoplist.db import CatalogStore, Database, ItemStore, ListStore
from shoplist.models.catalog import CatalogItemCreate
from shoplist.models.shopping import ShoppingItemCreate, ShoppingListCreate

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep INFO log lines out of the captured command output."""

    monkeypatch.setenv("SHOPLIST_LOG_LEVEL", "WARNING")
    get_settings.cache_clear()


def _seed() -> int:
    with Database.from_settings(get_settings()) as database:
        shopping_list = ListStore(database).create(
            ShoppingListCreate(name="Week 1", week_starting=date(2024, 1, 1))
        )
        items = ItemStore(database)
        first = items.create(ShoppingItemCreate(list_id=shopping_list.id, name="eggs", quantity=2, price=3.0))
        items.create(ShoppingItemCreate(list_id=shopping_list.id, name="bread", price=5.0))
        items.toggle(first.id)
        CatalogStore(database).create(CatalogItemCreate(name="eggs", category="Dairy"))
        return shopping_list.id


def test_init_db_creates_database():
    result = runner.invoke(app, ["init-db"])

    assert result.exit_code == 0
    assert get_settings().database_path.exists()


def test_summary_command():
    list_id = _seed()

    result = runner.invoke(app, ["summary", str(list_id), "--no-pretty"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["estimated_total"] == 11.0
    assert payload["actual_total"] == 6.0
    assert payload["completion_percentage"] == 50
    assert payload["budget_remaining"] == 5.0


def test_summary_for_missing_list_exits_nonzero():
    result = runner.invoke(app, ["summary", "999"])

    assert result.exit_code == 1


def test_lists_and_catalog_commands():
    _seed()

    result = runner.invoke(app, ["lists"])
    assert result.exit_code == 0
    assert [row["name"] for row in json.loads(result.stdout)] == ["Week 1"]

    result = runner.invoke(app, ["catalog", "--category", "Dairy"])
    assert result.exit_code == 0
    assert [row["name"] for row in json.loads(result.stdout)] == ["eggs"]
