"""Prometheus metrics definitions for Shoplist."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "shoplist_http_requests_total",
    "Total number of HTTP requests processed by the Shoplist API",
    ["method", "path", "status"],
)

REQUEST_LATENCY = Histogram(
    "shoplist_http_request_duration_seconds",
    "Latency of HTTP requests processed by the Shoplist API",
    ["method", "path"],
)

ITEM_MUTATIONS = Counter(
    "shoplist_item_mutations_total",
    "Number of shopping item writes by operation",
    ["operation"],
)

CATALOG_SYNC = Counter(
    "shoplist_catalog_sync_total",
    "Outcome of the catalog sync performed after an item is added",
    ["result"],
)

__all__ = [
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "ITEM_MUTATIONS",
    "CATALOG_SYNC",
]
