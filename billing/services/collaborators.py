"""
External collaborators of the mutation pipeline.

The services talk to the database, the listing cache and the navigation
layer only through these objects, so each can be swapped for a fake.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from django.conf import settings
from django.core.cache import cache
from django.db import connection

from .outcomes import Redirect

logger = logging.getLogger(__name__)


class SqlPersistence:
    """Runs positional-parameter SQL on the default Django connection."""

    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        with connection.cursor() as cursor:
            cursor.execute(sql, list(params))
            return cursor.rowcount

    def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        with connection.cursor() as cursor:
            cursor.execute(sql, list(params))
            columns = [col[0] for col in cursor.description]
            return [dict(zip(columns, row)) for row in cursor.fetchall()]

    def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        rows = self.fetch_all(sql, params)
        return rows[0] if rows else None


class DjangoViewCache:
    """
    Cached listing data keyed by route path.

    Each path owns a version counter; every cached variant (search term,
    page) of that path is stored under the current version, so bumping the
    version marks all of them stale at once.
    """

    KEY_PREFIX = "billing:view"

    def __init__(self, backend=None, timeout: Optional[int] = None):
        self.backend = backend or cache
        self.timeout = timeout if timeout is not None else settings.BILLING_LISTING_CACHE_TIMEOUT

    def _version_key(self, path: str) -> str:
        return f"{self.KEY_PREFIX}:{path}:version"

    def _version(self, path: str) -> int:
        version = self.backend.get(self._version_key(path))
        if version is None:
            version = 1
            self.backend.set(self._version_key(path), version, None)
        return version

    def _data_key(self, path: str, variant: str) -> str:
        return f"{self.KEY_PREFIX}:{path}:v{self._version(path)}:{variant}"

    def get(self, path: str, variant: str = "") -> Any:
        return self.backend.get(self._data_key(path, variant))

    def set(self, path: str, variant: str, value: Any) -> None:
        self.backend.set(self._data_key(path, variant), value, self.timeout)

    def invalidate(self, path: str) -> None:
        try:
            self.backend.incr(self._version_key(path))
        except ValueError:
            self.backend.set(self._version_key(path), 2, None)
        logger.info(f"Invalidated cached view {path}")


class Navigator:
    """Produces the terminal redirect outcome for a route."""

    def redirect(self, path: str) -> Redirect:
        return Redirect(path=path)
