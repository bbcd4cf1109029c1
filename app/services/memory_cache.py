import copy
import json
import time
from threading import RLock
from typing import Any, Callable, Dict, Optional

from app.config.settings import settings
from app.utils.log import app_logger

_SCALARS = (str, bytes, int, float, bool, type(None))


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class MemoryCache:
    """In-process key/value cache with per-entry TTL (milliseconds).

    Values are deep-copied on the way in and on the way out so callers can
    never mutate cached state through a reference they hold. Expired entries
    are purged lazily when they are next touched; there is no size bound, so
    keys should come from a small, predictable space (see
    `app.utils.pagination.pagination_cache_key`).
    """

    def __init__(self, default_ttl: Optional[float] = 60_000, clock: Optional[Callable[[], float]] = None):
        self.default_ttl = default_ttl
        self._clock = clock or _monotonic_ms
        self._store: Dict[str, Dict[str, Any]] = {}
        # sync FastAPI endpoints run on a thread pool
        self._lock = RLock()

    @staticmethod
    def clone(value: Any) -> Any:
        """Best-effort deep copy: deepcopy, then a JSON round-trip, then as-is."""
        if isinstance(value, _SCALARS):
            return value
        try:
            return copy.deepcopy(value)
        except Exception as e:
            app_logger.debug("cache.clone.deepcopy_failed", error=str(e))
        try:
            return json.loads(json.dumps(value))
        except Exception as e:
            app_logger.debug("cache.clone.json_failed", error=str(e))
        return value

    def _is_expired(self, entry: Dict[str, Any]) -> bool:
        expires_at = entry["expires_at"]
        return expires_at is not None and expires_at <= self._clock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if self._is_expired(entry):
                del self._store[key]
                return None
            return self.clone(entry["value"])

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        valid_ttl = isinstance(ttl, (int, float)) and not isinstance(ttl, bool) and ttl > 0
        ttl_value = ttl if valid_ttl else self.default_ttl
        stored = self.clone(value)
        with self._lock:
            expires_at = self._clock() + ttl_value if ttl_value else None
            self._store[key] = {"value": stored, "expires_at": expires_at}

    def delete(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def invalidate_prefix(self, prefix: str) -> int:
        """Drop every entry whose key starts with `prefix`; returns how many.

        An empty prefix is ignored rather than wiping the whole cache.
        """
        if not prefix:
            return 0
        with self._lock:
            doomed = [key for key in self._store if key.startswith(prefix)]
            for key in doomed:
                del self._store[key]
        if doomed:
            app_logger.debug("cache.invalidate_prefix", prefix=prefix, removed=len(doomed))
        return len(doomed)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return False
            if self._is_expired(entry):
                del self._store[key]
                return False
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)


# module-level cache instance used by the app
cache = MemoryCache(default_ttl=settings.CACHE_DEFAULT_TTL_MS)


def get_cache() -> MemoryCache:
    """FastAPI dependency returning the process-wide cache."""
    return cache
