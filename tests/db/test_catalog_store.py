"""Unit tests for the catalog store."""

from __future__ import annotations

import pytest

from shoplist.errors import ConflictError, InvalidInputError, NotFoundError
from shoplist.models.catalog import CatalogAddToList, CatalogItemCreate, CatalogItemUpdate


def test_create_starts_usage_at_one(catalog_store):
    entry = catalog_store.create(CatalogItemCreate(name=" Bananas ", category="Produce", default_price=0.25))

    assert entry.name == "Bananas"
    assert entry.usage_count == 1
    assert entry.default_quantity == 1
    assert entry.default_unit == "pcs"


@pytest.mark.parametrize(
    ("existing", "duplicate"),
    [
        ("Bananas", "Bananas"),
        ("Bananas", "  bananas  "),
        ("Bananas", "BANANAS"),
        ("Äpfel", "äpfel"),
        ("Äpfel", "ÄPFEL"),
        ("Äpfel", " Äpfel "),
        ("Crème fraîche", "CRÈME FRAÎCHE"),
        ("Straße", "STRASSE"),
    ],
)
def test_duplicate_name_conflicts(catalog_store, existing, duplicate):
    original = catalog_store.create(CatalogItemCreate(name=existing, default_price=0.25))

    with pytest.raises(ConflictError):
        catalog_store.create(CatalogItemCreate(name=duplicate, default_price=9.99))

    assert catalog_store.get(original.id) == original
    assert len(catalog_store.list()) == 1


def test_list_ranks_by_usage_then_name(catalog_store):
    eggs = catalog_store.create(CatalogItemCreate(name="eggs"))
    catalog_store.create(CatalogItemCreate(name="bread"))
    catalog_store.create(CatalogItemCreate(name="apples"))
    catalog_store.record_usage(eggs.id)

    assert [entry.name for entry in catalog_store.list()] == ["eggs", "apples", "bread"]


def test_list_filters_by_category(catalog_store):
    catalog_store.create(CatalogItemCreate(name="milk", category="Dairy"))
    catalog_store.create(CatalogItemCreate(name="soap", category="Household"))

    assert [entry.name for entry in catalog_store.list(category="Dairy")] == ["milk"]


def test_record_usage_only_touches_count(catalog_store):
    entry = catalog_store.create(
        CatalogItemCreate(name="yogurt", default_quantity=4, default_unit="cup", category="Dairy", default_price=0.8)
    )

    used = catalog_store.record_usage(entry.id)

    assert used.usage_count == 2
    assert used.name == entry.name
    assert used.default_quantity == entry.default_quantity
    assert used.default_unit == entry.default_unit
    assert used.category == entry.category
    assert used.default_price == entry.default_price


def test_record_usage_missing_raises(catalog_store):
    with pytest.raises(NotFoundError):
        catalog_store.record_usage(321)


def test_update_and_rename_conflict(catalog_store):
    rice = catalog_store.create(CatalogItemCreate(name="rice"))
    catalog_store.create(CatalogItemCreate(name="pasta"))

    updated = catalog_store.update(rice.id, CatalogItemUpdate(default_unit="kg", default_price=2.5))
    assert updated.default_unit == "kg"
    assert updated.usage_count == 1

    with pytest.raises(ConflictError):
        catalog_store.update(rice.id, CatalogItemUpdate(name="Pasta"))

    renamed = catalog_store.update(rice.id, CatalogItemUpdate(name="Rice"))
    assert renamed.name == "Rice"


def test_update_requires_fields(catalog_store):
    entry = catalog_store.create(CatalogItemCreate(name="salt"))

    with pytest.raises(InvalidInputError):
        catalog_store.update(entry.id, CatalogItemUpdate())


def test_delete(catalog_store):
    entry = catalog_store.create(CatalogItemCreate(name="pepper"))

    catalog_store.delete(entry.id)

    with pytest.raises(NotFoundError):
        catalog_store.get(entry.id)
    with pytest.raises(NotFoundError):
        catalog_store.delete(entry.id)


def test_ensure_from_item_creates_once(catalog_store, make_item):
    item = make_item("Oat milk", quantity=2, unit="l", category="Dairy", price=1.9)

    created = catalog_store.ensure_from_item(item)
    assert created is not None
    assert created.default_quantity == 2
    assert created.default_unit == "l"
    assert created.default_price == pytest.approx(1.9)

    again = make_item("oat milk")
    assert catalog_store.ensure_from_item(again) is None
    assert len(catalog_store.list()) == 1


def test_add_to_list_uses_defaults_and_counts_usage(catalog_store, item_store, weekly_list):
    entry = catalog_store.create(
        CatalogItemCreate(name="tomatoes", default_quantity=6, default_unit="pcs", category="Produce", default_price=0.4)
    )

    item = catalog_store.add_to_list(entry.id, CatalogAddToList(list_id=weekly_list.id, quantity=3))

    assert item.name == "tomatoes"
    assert item.quantity == 3
    assert item.category == "Produce"
    assert item.price == pytest.approx(0.4)
    assert item_store.get(item.id) == item
    assert catalog_store.get(entry.id).usage_count == 2


def test_add_to_missing_list_leaves_usage_unchanged(catalog_store):
    entry = catalog_store.create(CatalogItemCreate(name="lettuce"))

    with pytest.raises(NotFoundError):
        catalog_store.add_to_list(entry.id, CatalogAddToList(list_id=999))

    assert catalog_store.get(entry.id).usage_count == 1


def test_rename_conflict_ignores_non_ascii_case(catalog_store):
    apples = catalog_store.create(CatalogItemCreate(name="Äpfel"))
    pears = catalog_store.create(CatalogItemCreate(name="Birnen"))

    with pytest.raises(ConflictError):
        catalog_store.update(pears.id, CatalogItemUpdate(name="ÄPFEL"))

    assert catalog_store.get(apples.id).name == "Äpfel"
    assert catalog_store.get(pears.id).name == "Birnen"


def test_ensure_from_item_matches_non_ascii_case(catalog_store, make_item):
    assert catalog_store.ensure_from_item(make_item("Crème fraîche")) is not None
    assert catalog_store.ensure_from_item(make_item("CRÈME FRAÎCHE")) is None
    assert [entry.name for entry in catalog_store.list()] == ["Crème fraîche"]
