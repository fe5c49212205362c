"""Shopping list and shopping item models."""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shoplist.models._base import PartialUpdate, clean_name


class ShoppingItem(BaseModel):
    """Single purchasable entry on a weekly list."""

    id: int
    name: str
    quantity: int = Field(ge=1)
    unit: str
    category: str
    price: float = Field(ge=0)
    completed: bool = Field(default=False)
    list_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(frozen=True)

    @property
    def line_total(self) -> float:
        return self.quantity * self.price


class ShoppingListSummary(BaseModel):
    """Aggregate statistics derived from a list's items."""

    total_items: int = Field(ge=0)
    completed_items: int = Field(ge=0)
    estimated_total: float
    actual_total: float
    completion_percentage: int = Field(ge=0, le=100)

    model_config = ConfigDict(frozen=True)


class ShoppingList(BaseModel):
    """A named shopping list scoped to the week starting on ``week_starting``."""

    id: int
    name: str
    week_starting: date
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(frozen=True)


class ShoppingListDetail(ShoppingList):
    """List with its items (ordered by category, then name) and their summary."""

    items: List[ShoppingItem] = Field(default_factory=list)
    summary: ShoppingListSummary


class ShoppingListCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    week_starting: date

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return clean_name(value)


class ShoppingListUpdate(PartialUpdate):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    week_starting: Optional[date] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return clean_name(value)


class ShoppingItemCreate(BaseModel):
    """Payload for adding an item; omitted optional fields fall back to store defaults."""

    list_id: int
    name: str = Field(min_length=1, max_length=255)
    quantity: int = Field(default=1, ge=1)
    unit: Optional[str] = Field(default=None, min_length=1, max_length=64)
    category: Optional[str] = Field(default=None, min_length=1, max_length=128)
    price: float = Field(default=0.0, ge=0)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return clean_name(value)


class ShoppingItemUpdate(PartialUpdate):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    quantity: Optional[int] = Field(default=None, ge=1)
    unit: Optional[str] = Field(default=None, min_length=1, max_length=64)
    category: Optional[str] = Field(default=None, min_length=1, max_length=128)
    price: Optional[float] = Field(default=None, ge=0)
    completed: Optional[bool] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return clean_name(value)


__all__ = [
    "ShoppingItem",
    "ShoppingItemCreate",
    "ShoppingItemUpdate",
    "ShoppingList",
    "ShoppingListCreate",
    "ShoppingListDetail",
    "ShoppingListSummary",
    "ShoppingListUpdate",
]
