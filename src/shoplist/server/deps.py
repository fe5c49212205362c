"""Dependency definitions for the Shoplist API server."""

from __future__ import annotations

from typing import Callable, Optional

from fastapi import Depends, HTTPException, Request, status

from shoplist.config import Settings, get_settings
from shoplist.db import CatalogStore, Database, ItemStore, ListStore
from shoplist.models.catalog import CatalogItem
from shoplist.models.shopping import ShoppingItem

CatalogSyncer = Callable[[ShoppingItem], Optional[CatalogItem]]


def get_database(request: Request) -> Database:
    """Return the database handle opened by :func:`shoplist.server.app.create_app`."""

    return request.app.state.database


def get_list_store(database: Database = Depends(get_database)) -> ListStore:
    return ListStore(database)


def get_item_store(
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_settings),
) -> ItemStore:
    return ItemStore(
        database,
        default_unit=settings.default_unit,
        default_category=settings.default_category,
    )


def get_catalog_store(
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_settings),
) -> CatalogStore:
    return CatalogStore(
        database,
        default_unit=settings.default_unit,
        default_category=settings.default_category,
    )


def get_catalog_syncer(
    store: CatalogStore = Depends(get_catalog_store),
    settings: Settings = Depends(get_settings),
) -> Optional[CatalogSyncer]:
    """Return the advisory catalog sync run after item creation, or None when disabled."""

    if not settings.catalog_sync:
        return None
    return store.ensure_from_item


def require_api_token(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> None:
    """Ensure requests carry the configured API token when required."""

    token = settings.api_token
    if not token:
        return

    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.split("Bearer ")[-1].strip() == token:
        return

    if request.headers.get("X-API-Key") == token:
        return

    if request.query_params.get("api_token") == token:
        return

    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
