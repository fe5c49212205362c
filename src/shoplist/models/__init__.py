"""Pydantic models defining shared data contracts."""

from shoplist.models.catalog import (
    CatalogAddToList,
    CatalogItem,
    CatalogItemCreate,
    CatalogItemUpdate,
)
from shoplist.models.shopping import (
    ShoppingItem,
    ShoppingItemCreate,
    ShoppingItemUpdate,
    ShoppingList,
    ShoppingListCreate,
    ShoppingListDetail,
    ShoppingListSummary,
    ShoppingListUpdate,
)

__all__ = [
    "CatalogAddToList",
    "CatalogItem",
    "CatalogItemCreate",
    "CatalogItemUpdate",
    "ShoppingItem",
    "ShoppingItemCreate",
    "ShoppingItemUpdate",
    "ShoppingList",
    "ShoppingListCreate",
    "ShoppingListDetail",
    "ShoppingListSummary",
    "ShoppingListUpdate",
]
