"""SQLite persistence for lists, items and the catalog."""

from shoplist.db.catalog import CatalogStore
from shoplist.db.items import ItemStore
from shoplist.db.lists import ListStore
from shoplist.db.repository import Database

__all__ = ["CatalogStore", "Database", "ItemStore", "ListStore"]
