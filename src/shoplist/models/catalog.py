"""Catalog models: reusable templates for quickly adding list items."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shoplist.models._base import PartialUpdate, clean_name


class CatalogItem(BaseModel):
    """Frequently purchased item, ranked by how often it has been reused."""

    id: int
    name: str
    default_quantity: int = Field(ge=1)
    default_unit: str
    category: str
    default_price: float = Field(ge=0)
    usage_count: int = Field(ge=0)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(frozen=True)


class CatalogItemCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    default_quantity: int = Field(default=1, ge=1)
    default_unit: Optional[str] = Field(default=None, min_length=1, max_length=64)
    category: Optional[str] = Field(default=None, min_length=1, max_length=128)
    default_price: float = Field(default=0.0, ge=0)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return clean_name(value)


class CatalogItemUpdate(PartialUpdate):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    default_quantity: Optional[int] = Field(default=None, ge=1)
    default_unit: Optional[str] = Field(default=None, min_length=1, max_length=64)
    category: Optional[str] = Field(default=None, min_length=1, max_length=128)
    default_price: Optional[float] = Field(default=None, ge=0)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return clean_name(value)


class CatalogAddToList(BaseModel):
    """Target list plus optional overrides of the catalog defaults."""

    list_id: int
    quantity: Optional[int] = Field(default=None, ge=1)
    unit: Optional[str] = Field(default=None, min_length=1, max_length=64)
    category: Optional[str] = Field(default=None, min_length=1, max_length=128)
    price: Optional[float] = Field(default=None, ge=0)


__all__ = ["CatalogItem", "CatalogItemCreate", "CatalogItemUpdate", "CatalogAddToList"]
