"""Catalog persistence helpers."""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shoplist import metrics
from shoplist.errors import ConflictError, InvalidInputError, NotFoundError
from shoplist.models.catalog import (
    CatalogAddToList,
    CatalogItem,
    CatalogItemCreate,
    CatalogItemUpdate,
)
from shoplist.models.shopping import ShoppingItem

from .items import add_item, item_to_model
from .models import CatalogItemORM
from .repository import Database

logger = logging.getLogger(__name__)


def _to_model(row: CatalogItemORM) -> CatalogItem:
    return CatalogItem.model_validate(
        {
            "id": row.id,
            "name": row.name,
            "default_quantity": row.default_quantity,
            "default_unit": row.default_unit,
            "category": row.category,
            "default_price": row.default_price,
            "usage_count": row.usage_count,
            "created_at": row.created_at,
            "updated_at": row.updated_at,
        }
    )


def name_key(name: str) -> str:
    """Comparison key for catalog names: trimmed and casefolded (Unicode-aware)."""

    return name.strip().casefold()


def _find_by_name(session: Session, name: str) -> Optional[CatalogItemORM]:
    return (
        session.execute(
            select(CatalogItemORM).where(CatalogItemORM.name_key == name_key(name))
        )
        .scalars()
        .first()
    )


def _get_or_raise(session: Session, catalog_id: int) -> CatalogItemORM:
    row = session.get(CatalogItemORM, catalog_id)
    if row is None:
        raise NotFoundError(f"Catalog item {catalog_id} not found")
    return row


def _flush_unique(session: Session, name: str) -> None:
    try:
        session.flush()
    except IntegrityError as exc:
        raise ConflictError(f"Catalog item '{name}' already exists") from exc


class CatalogStore:
    """Reusable item templates ranked by how often they are picked."""

    def __init__(
        self,
        database: Database,
        *,
        default_unit: str = "pcs",
        default_category: str = "General",
    ):
        self._database = database
        self.default_unit = default_unit
        self.default_category = default_category

    def create(self, payload: CatalogItemCreate) -> CatalogItem:
        name = payload.name.strip()
        with self._database.session_scope() as session:
            if _find_by_name(session, name) is not None:
                raise ConflictError(f"Catalog item '{name}' already exists")
            row = CatalogItemORM(
                name=name,
                name_key=name_key(name),
                default_quantity=payload.default_quantity,
                default_unit=(payload.default_unit or self.default_unit).strip(),
                category=(payload.category or self.default_category).strip(),
                default_price=float(payload.default_price),
                usage_count=1,
            )
            session.add(row)
            _flush_unique(session, name)
            created = _to_model(row)
        logger.info("Added catalog item %s (%s)", created.id, created.name)
        return created

    def get(self, catalog_id: int) -> CatalogItem:
        with self._database.session_scope() as session:
            return _to_model(_get_or_raise(session, catalog_id))

    def list(self, category: Optional[str] = None) -> List[CatalogItem]:
        """Return catalog entries, most used first, then alphabetically."""

        query = select(CatalogItemORM).order_by(
            CatalogItemORM.usage_count.desc(),
            CatalogItemORM.name.asc(),
        )
        if category:
            query = query.where(CatalogItemORM.category == category.strip())
        with self._database.session_scope() as session:
            return [_to_model(row) for row in session.execute(query).scalars().all()]

    def update(self, catalog_id: int, payload: CatalogItemUpdate) -> CatalogItem:
        changes = payload.changes()
        if not changes:
            raise InvalidInputError("No fields provided for update")

        with self._database.session_scope() as session:
            row = _get_or_raise(session, catalog_id)
            if "name" in changes:
                name = changes["name"].strip()
                clash = _find_by_name(session, name)
                if clash is not None and clash.id != row.id:
                    raise ConflictError(f"Catalog item '{name}' already exists")
                changes["name"] = name
                changes["name_key"] = name_key(name)

            for field, value in changes.items():
                if isinstance(value, str):
                    value = value.strip()
                setattr(row, field, value)

            _flush_unique(session, row.name)
            return _to_model(row)

    def delete(self, catalog_id: int) -> None:
        with self._database.session_scope() as session:
            session.delete(_get_or_raise(session, catalog_id))

    def record_usage(self, catalog_id: int) -> CatalogItem:
        """Increment the usage count by one, leaving every other field alone."""

        with self._database.session_scope() as session:
            row = _get_or_raise(session, catalog_id)
            row.usage_count = CatalogItemORM.usage_count + 1
            session.flush()
            return _to_model(row)

    def ensure_from_item(self, item: ShoppingItem) -> Optional[CatalogItem]:
        """Create a catalog entry mirroring ``item`` unless its name is already known.

        Returns the new entry, or ``None`` when the catalog already had one.
        """

        with self._database.session_scope() as session:
            if _find_by_name(session, item.name) is not None:
                return None
            row = CatalogItemORM(
                name=item.name.strip(),
                name_key=name_key(item.name),
                default_quantity=item.quantity,
                default_unit=item.unit,
                category=item.category,
                default_price=item.price,
                usage_count=1,
            )
            session.add(row)
            _flush_unique(session, item.name)
            return _to_model(row)

    def add_to_list(self, catalog_id: int, request: CatalogAddToList) -> ShoppingItem:
        """Create a list item from catalog defaults and count the usage.

        Both writes share one transaction: either the item exists and the
        usage count moved, or neither happened.
        """

        with self._database.session_scope() as session:
            entry = _get_or_raise(session, catalog_id)
            item_row = add_item(
                session,
                list_id=request.list_id,
                name=entry.name,
                quantity=request.quantity if request.quantity is not None else entry.default_quantity,
                unit=request.unit or entry.default_unit,
                category=request.category or entry.category,
                price=request.price if request.price is not None else entry.default_price,
            )
            entry.usage_count = CatalogItemORM.usage_count + 1
            session.flush()
            item = item_to_model(item_row)
        metrics.ITEM_MUTATIONS.labels(operation="create").inc()
        logger.info("Added catalog item %s to list %s as item %s", catalog_id, item.list_id, item.id)
        return item


__all__ = ["CatalogStore"]
