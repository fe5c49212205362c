"""Summary statistics for a shopping list.

This is the only place list totals and completion are computed; both the list
detail response and the dedicated summary endpoint call :func:`summarize`.
"""

from __future__ import annotations

from typing import Iterable

from shoplist.models.shopping import ShoppingItem, ShoppingListSummary

EMPTY_SUMMARY = ShoppingListSummary(
    total_items=0,
    completed_items=0,
    estimated_total=0.0,
    actual_total=0.0,
    completion_percentage=0,
)


def _round_currency(value: float) -> float:
    return round(value, 2)


def completion_percentage(completed: int, total: int) -> int:
    """Whole-number share of completed items, 0 for an empty list."""

    if total <= 0:
        return 0
    # Half-up rounding in integer arithmetic: 12.5% reports as 13.
    percentage = (completed * 200 + total) // (2 * total)
    return max(0, min(100, percentage))


def summarize(items: Iterable[ShoppingItem]) -> ShoppingListSummary:
    """Derive totals and completion for ``items``.

    ``estimated_total`` covers every item while ``actual_total`` only covers
    completed ones, so with non-negative prices the actual total never exceeds
    the estimate.
    """

    total_items = 0
    completed_items = 0
    estimated_total = 0.0
    actual_total = 0.0
    for item in items:
        line_total = item.line_total
        total_items += 1
        estimated_total += line_total
        if item.completed:
            completed_items += 1
            actual_total += line_total

    if total_items == 0:
        return EMPTY_SUMMARY

    return ShoppingListSummary(
        total_items=total_items,
        completed_items=completed_items,
        estimated_total=_round_currency(estimated_total),
        actual_total=_round_currency(actual_total),
        completion_percentage=completion_percentage(completed_items, total_items),
    )


def budget_delta(summary: ShoppingListSummary) -> float:
    """Amount still unspent against the estimate; negative when over budget."""

    return _round_currency(summary.estimated_total - summary.actual_total)


__all__ = ["EMPTY_SUMMARY", "budget_delta", "completion_percentage", "summarize"]
