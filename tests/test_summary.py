"""Tests for the list summary calculator."""

from __future__ import annotations

from datetime import datetime

import pytest

from shoplist.models.shopping import ShoppingItem
from shoplist.summary import budget_delta, completion_percentage, summarize

_NOW = datetime(2024, 3, 18, 9, 30)


def _item(item_id: int, quantity: int, price: float, completed: bool = False) -> ShoppingItem:
    return ShoppingItem(
        id=item_id,
        name=f"item-{item_id}",
        quantity=quantity,
        unit="pcs",
        category="General",
        price=price,
        completed=completed,
        list_id=1,
        created_at=_NOW,
        updated_at=_NOW,
    )


def test_empty_list_has_zero_summary():
    summary = summarize([])

    assert summary.total_items == 0
    assert summary.completed_items == 0
    assert summary.estimated_total == 0
    assert summary.actual_total == 0
    assert summary.completion_percentage == 0


def test_estimated_and_actual_totals():
    items = [_item(1, 2, 3.00, completed=True), _item(2, 1, 5.00)]

    summary = summarize(items)

    assert summary.total_items == 2
    assert summary.completed_items == 1
    assert summary.estimated_total == pytest.approx(11.00)
    assert summary.actual_total == pytest.approx(6.00)
    assert summary.completion_percentage == 50
    assert budget_delta(summary) == pytest.approx(5.00)


def test_totals_are_rounded_to_cents():
    summary = summarize([_item(1, 3, 0.1, completed=True)])

    assert summary.estimated_total == 0.3
    assert summary.actual_total == 0.3


def test_actual_never_exceeds_estimated():
    items = [
        _item(1, 4, 2.49, completed=True),
        _item(2, 1, 0.0, completed=True),
        _item(3, 7, 1.15),
        _item(4, 2, 12.0, completed=True),
    ]

    summary = summarize(items)

    assert summary.actual_total <= summary.estimated_total
    assert 0 <= summary.completion_percentage <= 100


def test_all_completed_is_one_hundred_percent():
    summary = summarize([_item(1, 1, 1.0, completed=True), _item(2, 1, 1.0, completed=True)])

    assert summary.completion_percentage == 100


@pytest.mark.parametrize(
    ("completed", "total", "expected"),
    [
        (0, 0, 0),
        (0, 3, 0),
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),
        (3, 3, 100),
    ],
)
def test_completion_percentage_rounds_half_up(completed, total, expected):
    assert completion_percentage(completed, total) == expected


def test_summarize_accepts_generators():
    summary = summarize(_item(i, 1, 1.0, completed=i % 2 == 0) for i in range(4))

    assert summary.total_items == 4
    assert summary.completed_items == 2
