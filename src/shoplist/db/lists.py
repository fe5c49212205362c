"""Shopping list persistence helpers."""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy import select

from shoplist.errors import InvalidInputError, NotFoundError
from shoplist.models.shopping import (
    ShoppingList,
    ShoppingListCreate,
    ShoppingListDetail,
    ShoppingListSummary,
    ShoppingListUpdate,
)
from shoplist.summary import summarize

from .items import item_to_model, items_for_list
from .models import ShoppingListORM
from .repository import Database

logger = logging.getLogger(__name__)


def _to_model(row: ShoppingListORM) -> ShoppingList:
    return ShoppingList.model_validate(
        {
            "id": row.id,
            "name": row.name,
            "week_starting": row.week_starting,
            "created_at": row.created_at,
            "updated_at": row.updated_at,
        }
    )


class ListStore:
    """Weekly lists; deleting a list removes its items with it."""

    def __init__(self, database: Database):
        self._database = database

    def create(self, payload: ShoppingListCreate) -> ShoppingList:
        with self._database.session_scope() as session:
            row = ShoppingListORM(name=payload.name.strip(), week_starting=payload.week_starting)
            session.add(row)
            session.flush()
            created = _to_model(row)
        logger.info("Created shopping list %s for week %s", created.id, created.week_starting)
        return created

    def get(self, list_id: int) -> ShoppingListDetail:
        """Return the list with its items and their summary."""

        with self._database.session_scope() as session:
            row = session.get(ShoppingListORM, list_id)
            if row is None:
                raise NotFoundError(f"Shopping list {list_id} not found")
            items = [item_to_model(item) for item in items_for_list(session, list_id)]
            return ShoppingListDetail(
                **_to_model(row).model_dump(),
                items=items,
                summary=summarize(items),
            )

    def list(self) -> List[ShoppingList]:
        """Return all lists, most recent week first."""

        with self._database.session_scope() as session:
            rows = (
                session.execute(
                    select(ShoppingListORM).order_by(
                        ShoppingListORM.week_starting.desc(),
                        ShoppingListORM.id.desc(),
                    )
                )
                .scalars()
                .all()
            )
            return [_to_model(row) for row in rows]

    def update(self, list_id: int, payload: ShoppingListUpdate) -> ShoppingList:
        changes = payload.changes()
        if not changes:
            raise InvalidInputError("No fields provided for update")

        with self._database.session_scope() as session:
            row = session.get(ShoppingListORM, list_id)
            if row is None:
                raise NotFoundError(f"Shopping list {list_id} not found")
            if "name" in changes:
                row.name = changes["name"].strip()
            if "week_starting" in changes:
                row.week_starting = changes["week_starting"]
            session.flush()
            return _to_model(row)

    def delete(self, list_id: int) -> None:
        with self._database.session_scope() as session:
            row = session.get(ShoppingListORM, list_id)
            if row is None:
                raise NotFoundError(f"Shopping list {list_id} not found")
            session.delete(row)
        logger.info("Deleted shopping list %s and its items", list_id)

    def summary(self, list_id: int) -> ShoppingListSummary:
        with self._database.session_scope() as session:
            if session.get(ShoppingListORM, list_id) is None:
                raise NotFoundError(f"Shopping list {list_id} not found")
            return summarize(item_to_model(row) for row in items_for_list(session, list_id))


__all__ = ["ListStore"]
