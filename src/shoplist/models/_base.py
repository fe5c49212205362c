"""Shared building blocks for request payload models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, model_validator


def clean_name(value: Any) -> Any:
    """Strip surrounding whitespace from names; blank names fail validation."""

    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
    return value


class PartialUpdate(BaseModel):
    """Update payload where only explicitly provided fields are applied."""

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> "PartialUpdate":
        for field in self.model_fields_set:
            if getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Return only the fields the caller set."""

        return self.model_dump(exclude_unset=True)


__all__ = ["PartialUpdate", "clean_name"]
