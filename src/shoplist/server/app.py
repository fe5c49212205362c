"""ASGI application for Shoplist."""
# mypy: ignore-errors

from __future__ import annotations

import logging
from time import perf_counter
from typing import Any, Optional
from uuid import uuid4

from fastapi import Body, Depends, FastAPI, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from shoplist import __version__, metrics
from shoplist.config import Settings, get_settings
from shoplist.db import CatalogStore, Database, ItemStore, ListStore
from shoplist.errors import ShoplistError
from shoplist.logging_utils import configure_logging as configure_app_logging
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
from shoplist.server import deps

logger = logging.getLogger(__name__)


def _json_safe(value: Any) -> Any:
    """Convert non-serializable values into JSON-safe representations."""

    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, (list, tuple)):
        return [_json_safe(entry) for entry in value]
    if isinstance(value, dict):
        return {key: _json_safe(sub_value) for key, sub_value in value.items()}
    return str(value)


def _log_extra(request: Request) -> dict[str, Any]:
    request_id = getattr(request.state, "request_id", None)
    return {"extra": {"request_id": request_id}} if request_id else {}


def _route_path(request: Request) -> str:
    # Label by route template so /lists/1 and /lists/2 share a series.
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


def _configure_logging(settings: Settings) -> None:
    configure_app_logging(settings.log_level, settings.log_format, [settings.api_token or ""])


def _sync_catalog(item: ShoppingItem, syncer: Optional[deps.CatalogSyncer]) -> None:
    """Mirror a new item into the catalog; failures are logged and never reach the caller."""

    if syncer is None:
        return
    try:
        created = syncer(item)
    except Exception as exc:
        metrics.CATALOG_SYNC.labels(result="failed").inc()
        logger.warning("Catalog sync failed for item %s (%s): %s", item.id, item.name, exc)
        return
    metrics.CATALOG_SYNC.labels(result="created" if created is not None else "existing").inc()
    if created is not None:
        logger.info("Catalog sync added '%s' as catalog item %s", created.name, created.id)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    The database handle is opened here and closed when the application shuts
    down. Pass ``database`` to share an already opened handle.
    """

    explicit_settings = settings is not None
    settings = settings or get_settings()
    _configure_logging(settings)

    application = FastAPI(title="Shoplist", version=__version__)
    if explicit_settings:
        application.dependency_overrides[get_settings] = lambda: settings
    application.state.database = (database or Database.from_settings(settings)).open()

    @application.on_event("shutdown")
    def close_database() -> None:
        application.state.database.close()

    logger.debug("Application created with log level %s", settings.log_level)

    if settings.log_requests:
        access_logger = logging.getLogger("shoplist.access")

        @application.middleware("http")
        async def log_request_response(request: Request, call_next):
            """Log request/response details and record request metrics."""

            request_id = request.headers.get("X-Request-ID") or uuid4().hex
            request.state.request_id = request_id
            start = perf_counter()
            method = request.method
            try:
                response: Response = await call_next(request)
            except Exception:
                duration_ms = (perf_counter() - start) * 1000
                access_logger.exception(
                    "HTTP %s %s status=500 duration_ms=%.2f",
                    method,
                    request.url.path,
                    duration_ms,
                    extra={"request_id": request_id},
                )
                path = _route_path(request)
                metrics.REQUEST_COUNT.labels(method=method, path=path, status="500").inc()
                metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000.0)
                raise

            duration_ms = (perf_counter() - start) * 1000
            path = _route_path(request)
            response.headers.setdefault("X-Request-ID", request_id)
            access_logger.info(
                "HTTP %s %s status=%s duration_ms=%.2f",
                method,
                request.url.path,
                response.status_code,
                duration_ms,
                extra={"request_id": request_id},
            )
            metrics.REQUEST_COUNT.labels(
                method=method,
                path=path,
                status=str(response.status_code),
            ).inc()
            metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000.0)
            return response

    @application.exception_handler(ShoplistError)
    async def shoplist_error_handler(request: Request, exc: ShoplistError):
        if exc.status_code >= 500:
            logger.error(
                "%s %s failed: %s", request.method, request.url.path, exc.detail, **_log_extra(request)
            )
        else:
            logger.warning(
                "%s %s rejected (%s): %s",
                request.method,
                request.url.path,
                exc.status_code,
                exc.detail,
                **_log_extra(request),
            )
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = [{key: _json_safe(value) for key, value in error.items()} for error in exc.errors()]
        logger.warning(
            "Validation error on %s %s: %s",
            request.method,
            request.url.path,
            errors,
            **_log_extra(request),
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": errors},
        )

    @application.get("/healthz", summary="Liveness check")
    def healthz() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    @application.get("/metrics", include_in_schema=False)
    def metrics_endpoint() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Lists

    @application.get("/lists", response_model=list[ShoppingList], summary="List shopping lists")
    def lists_list(store: ListStore = Depends(deps.get_list_store)) -> list[ShoppingList]:
        return store.list()

    @application.post(
        "/lists",
        response_model=ShoppingList,
        status_code=status.HTTP_201_CREATED,
        summary="Create shopping list",
    )
    def lists_create(
        payload: ShoppingListCreate = Body(...),
        auth: None = Depends(deps.require_api_token),
        store: ListStore = Depends(deps.get_list_store),
    ) -> ShoppingList:
        return store.create(payload)

    @application.get(
        "/lists/{list_id}",
        response_model=ShoppingListDetail,
        summary="Get shopping list with items and summary",
    )
    def lists_get(
        list_id: int,
        store: ListStore = Depends(deps.get_list_store),
    ) -> ShoppingListDetail:
        return store.get(list_id)

    @application.put(
        "/lists/{list_id}",
        response_model=ShoppingList,
        summary="Update shopping list",
    )
    def lists_update(
        list_id: int,
        payload: ShoppingListUpdate = Body(...),
        auth: None = Depends(deps.require_api_token),
        store: ListStore = Depends(deps.get_list_store),
    ) -> ShoppingList:
        return store.update(list_id, payload)

    @application.delete(
        "/lists/{list_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary="Delete shopping list and its items",
    )
    def lists_delete(
        list_id: int,
        auth: None = Depends(deps.require_api_token),
        store: ListStore = Depends(deps.get_list_store),
    ) -> None:
        store.delete(list_id)

    @application.get(
        "/lists/{list_id}/summary",
        response_model=ShoppingListSummary,
        summary="Summarize shopping list",
    )
    def lists_summary(
        list_id: int,
        store: ListStore = Depends(deps.get_list_store),
    ) -> ShoppingListSummary:
        return store.summary(list_id)

    @application.get(
        "/lists/{list_id}/items",
        response_model=list[ShoppingItem],
        summary="List items of a shopping list",
    )
    def lists_items(
        list_id: int,
        store: ItemStore = Depends(deps.get_item_store),
    ) -> list[ShoppingItem]:
        return store.list_for(list_id)

    # Items

    @application.post(
        "/items",
        response_model=ShoppingItem,
        status_code=status.HTTP_201_CREATED,
        summary="Add item to a shopping list",
    )
    def items_create(
        payload: ShoppingItemCreate = Body(...),
        auth: None = Depends(deps.require_api_token),
        store: ItemStore = Depends(deps.get_item_store),
        syncer: Optional[deps.CatalogSyncer] = Depends(deps.get_catalog_syncer),
    ) -> ShoppingItem:
        item = store.create(payload)
        _sync_catalog(item, syncer)
        return item

    @application.get("/items/{item_id}", response_model=ShoppingItem, summary="Get item")
    def items_get(
        item_id: int,
        store: ItemStore = Depends(deps.get_item_store),
    ) -> ShoppingItem:
        return store.get(item_id)

    @application.put("/items/{item_id}", response_model=ShoppingItem, summary="Update item")
    def items_update(
        item_id: int,
        payload: ShoppingItemUpdate = Body(...),
        auth: None = Depends(deps.require_api_token),
        store: ItemStore = Depends(deps.get_item_store),
    ) -> ShoppingItem:
        logger.debug("Updating item %s with payload=%s", item_id, payload.changes())
        return store.update(item_id, payload)

    @application.post(
        "/items/{item_id}/toggle",
        response_model=ShoppingItem,
        summary="Toggle item completion",
    )
    def items_toggle(
        item_id: int,
        auth: None = Depends(deps.require_api_token),
        store: ItemStore = Depends(deps.get_item_store),
    ) -> ShoppingItem:
        return store.toggle(item_id)

    @application.delete(
        "/items/{item_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary="Delete item",
    )
    def items_delete(
        item_id: int,
        auth: None = Depends(deps.require_api_token),
        store: ItemStore = Depends(deps.get_item_store),
    ) -> None:
        store.delete(item_id)

    # Catalog

    @application.get(
        "/catalog",
        response_model=list[CatalogItem],
        summary="List catalog items, most used first",
    )
    def catalog_list(
        category: Optional[str] = Query(default=None, min_length=1, max_length=128),
        store: CatalogStore = Depends(deps.get_catalog_store),
    ) -> list[CatalogItem]:
        return store.list(category=category)

    @application.post(
        "/catalog",
        response_model=CatalogItem,
        status_code=status.HTTP_201_CREATED,
        summary="Create catalog item",
    )
    def catalog_create(
        payload: CatalogItemCreate = Body(...),
        auth: None = Depends(deps.require_api_token),
        store: CatalogStore = Depends(deps.get_catalog_store),
    ) -> CatalogItem:
        return store.create(payload)

    @application.put(
        "/catalog/{catalog_id}",
        response_model=CatalogItem,
        summary="Update catalog item",
    )
    def catalog_update(
        catalog_id: int,
        payload: CatalogItemUpdate = Body(...),
        auth: None = Depends(deps.require_api_token),
        store: CatalogStore = Depends(deps.get_catalog_store),
    ) -> CatalogItem:
        return store.update(catalog_id, payload)

    @application.delete(
        "/catalog/{catalog_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary="Delete catalog item",
    )
    def catalog_delete(
        catalog_id: int,
        auth: None = Depends(deps.require_api_token),
        store: CatalogStore = Depends(deps.get_catalog_store),
    ) -> None:
        store.delete(catalog_id)

    @application.post(
        "/catalog/{catalog_id}/use",
        response_model=CatalogItem,
        summary="Record catalog item usage",
    )
    def catalog_use(
        catalog_id: int,
        auth: None = Depends(deps.require_api_token),
        store: CatalogStore = Depends(deps.get_catalog_store),
    ) -> CatalogItem:
        return store.record_usage(catalog_id)

    @application.post(
        "/catalog/{catalog_id}/add-to-list",
        response_model=ShoppingItem,
        status_code=status.HTTP_201_CREATED,
        summary="Add catalog item to a list and record the usage",
    )
    def catalog_add_to_list(
        catalog_id: int,
        payload: CatalogAddToList = Body(...),
        auth: None = Depends(deps.require_api_token),
        store: CatalogStore = Depends(deps.get_catalog_store),
    ) -> ShoppingItem:
        return store.add_to_list(catalog_id, payload)

    return application


__all__ = ["create_app"]
