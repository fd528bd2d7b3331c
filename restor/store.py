"""Process-wide access to the loaded catalog.

Snapshot mode reads the JSON files once. SQL mode reads the tables once; if
the database is down at startup the service still starts and every request
tries the load again, failing with STORE_UNAVAILABLE until it succeeds.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError

from restor import config
from restor.catalog import Catalog
from restor.errors import store_unavailable

logger = logging.getLogger(__name__)

ENDPOINTS = [
    "GET /api/restaurants",
    "GET /api/restaurants/:id",
    "GET /api/restaurants/:id/menu",
    "GET /api/dishes",
    "GET /api/dishes/:id",
    "GET /api/dishes/:id/restaurants",
    "GET /api/search",
]


class CatalogStore:
    def __init__(self, loader: Callable[[], Catalog], source: str, kind: str):
        self._loader = loader
        self.source = source
        self.kind = kind
        self._catalog: Catalog | None = None
        self._last_error: str | None = None

    @classmethod
    def from_catalog(cls, catalog: Catalog, source: str = "JSON files") -> "CatalogStore":
        store = cls(lambda: catalog, source=source, kind="In-memory")
        store.load()
        return store

    def load(self) -> bool:
        try:
            self._catalog = self._loader()
        except (OSError, ValueError, SQLAlchemyError) as e:
            self._last_error = str(e)
            logger.warning("Could not load catalog from %s: %s", self.source, e)
            return False
        self._last_error = None
        return True

    @property
    def loaded(self) -> bool:
        return self._catalog is not None

    def catalog(self) -> Catalog:
        if self._catalog is None and not self.load():
            raise store_unavailable(f"Database error: {self._last_error}")
        return self._catalog

    def health(self) -> dict:
        counts = self.catalog().counts()
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "database": {"status": self.source, "type": self.kind, **counts},
            "api": {"version": config.API_VERSION, "endpoints": ENDPOINTS},
        }


def snapshot_store(data_dir=None) -> CatalogStore:
    from restor.loaders import load_snapshot

    data_dir = data_dir or config.DATA_DIR
    restaurants_path = data_dir / config.RESTAURANTS_FILE
    dishes_path = data_dir / config.DISHES_FILE

    def loader() -> Catalog:
        return load_snapshot(restaurants_path, dishes_path)

    store = CatalogStore(loader, source="JSON files", kind="In-memory")
    if not store.load():
        # serve empty collections rather than fail every request
        store._catalog = Catalog()
    return store


def sql_store() -> CatalogStore:
    from restor import db
    from restor.loaders import load_database

    def loader() -> Catalog:
        db.check_connection()
        with db.get_sessionmaker()() as session:
            return load_database(session)

    store = CatalogStore(loader, source="PostgreSQL", kind="Relational")
    if not store.load():
        logger.warning("Database not available - requests will fail until it is reachable")
    return store


_store: CatalogStore | None = None


def get_store() -> CatalogStore:
    global _store
    if _store is None:
        if config.DATA_SOURCE == "sql":
            _store = sql_store()
        else:
            _store = snapshot_store()
    return _store
