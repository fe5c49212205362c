"""Shopping item persistence helpers."""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from shoplist import metrics
from shoplist.errors import InvalidInputError, NotFoundError
from shoplist.models.shopping import ShoppingItem, ShoppingItemCreate, ShoppingItemUpdate

from .models import ShoppingItemORM, ShoppingListORM
from .repository import Database

logger = logging.getLogger(__name__)


def item_to_model(row: ShoppingItemORM) -> ShoppingItem:
    return ShoppingItem.model_validate(
        {
            "id": row.id,
            "name": row.name,
            "quantity": row.quantity,
            "unit": row.unit,
            "category": row.category,
            "price": row.price,
            "completed": row.completed,
            "list_id": row.list_id,
            "created_at": row.created_at,
            "updated_at": row.updated_at,
        }
    )


def items_for_list(session: Session, list_id: int) -> List[ShoppingItemORM]:
    """Items of one list in display order (category, then name)."""

    return list(
        session.execute(
            select(ShoppingItemORM)
            .where(ShoppingItemORM.list_id == list_id)
            .order_by(
                ShoppingItemORM.category.asc(),
                ShoppingItemORM.name.asc(),
                ShoppingItemORM.id.asc(),
            )
        )
        .scalars()
        .all()
    )


def add_item(
    session: Session,
    *,
    list_id: int,
    name: str,
    quantity: int,
    unit: str,
    category: str,
    price: float,
) -> ShoppingItemORM:
    """Insert an item inside an existing session; the list must exist."""

    if session.get(ShoppingListORM, list_id) is None:
        raise NotFoundError(f"Shopping list {list_id} not found")

    row = ShoppingItemORM(
        name=name.strip(),
        quantity=int(quantity),
        unit=unit.strip(),
        category=category.strip(),
        price=float(price),
        completed=False,
        list_id=list_id,
    )
    session.add(row)
    session.flush()
    return row


class ItemStore:
    """CRUD over items; every item belongs to exactly one list."""

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

    def create(self, payload: ShoppingItemCreate) -> ShoppingItem:
        with self._database.session_scope() as session:
            row = add_item(
                session,
                list_id=payload.list_id,
                name=payload.name,
                quantity=payload.quantity,
                unit=payload.unit or self.default_unit,
                category=payload.category or self.default_category,
                price=payload.price,
            )
            item = item_to_model(row)
        metrics.ITEM_MUTATIONS.labels(operation="create").inc()
        logger.debug("Created item %s on list %s", item.id, item.list_id)
        return item

    def get(self, item_id: int) -> ShoppingItem:
        with self._database.session_scope() as session:
            row = session.get(ShoppingItemORM, item_id)
            if row is None:
                raise NotFoundError(f"Shopping item {item_id} not found")
            return item_to_model(row)

    def list_for(self, list_id: int) -> List[ShoppingItem]:
        with self._database.session_scope() as session:
            if session.get(ShoppingListORM, list_id) is None:
                raise NotFoundError(f"Shopping list {list_id} not found")
            return [item_to_model(row) for row in items_for_list(session, list_id)]

    def update(self, item_id: int, payload: ShoppingItemUpdate) -> ShoppingItem:
        changes = payload.changes()
        if not changes:
            raise InvalidInputError("No fields provided for update")

        with self._database.session_scope() as session:
            row = session.get(ShoppingItemORM, item_id)
            if row is None:
                raise NotFoundError(f"Shopping item {item_id} not found")

            for field, value in changes.items():
                if isinstance(value, str):
                    value = value.strip()
                setattr(row, field, value)

            session.flush()
            item = item_to_model(row)
        metrics.ITEM_MUTATIONS.labels(operation="update").inc()
        return item

    def toggle(self, item_id: int) -> ShoppingItem:
        """Flip the completed flag of one item."""

        with self._database.session_scope() as session:
            row = session.get(ShoppingItemORM, item_id)
            if row is None:
                raise NotFoundError(f"Shopping item {item_id} not found")
            row.completed = not row.completed
            session.flush()
            item = item_to_model(row)
        metrics.ITEM_MUTATIONS.labels(operation="toggle").inc()
        return item

    def delete(self, item_id: int) -> None:
        with self._database.session_scope() as session:
            row = session.get(ShoppingItemORM, item_id)
            if row is None:
                raise NotFoundError(f"Shopping item {item_id} not found")
            session.delete(row)
        metrics.ITEM_MUTATIONS.labels(operation="delete").inc()


__all__ = ["ItemStore", "add_item", "item_to_model", "items_for_list"]
