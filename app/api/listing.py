from typing import Any, Callable, Dict, List, Tuple

from fastapi import Response
from fastapi.encoders import jsonable_encoder

from app.config.settings import settings
from app.services.memory_cache import MemoryCache
from app.utils.log import app_logger
from app.utils.pagination import PaginationOptions, pagination_cache_key


def cached_page(
    response: Response,
    cache: MemoryCache,
    prefix: str,
    options: PaginationOptions,
    loader: Callable[[], Tuple[List[Any], int]],
) -> Dict[str, Any]:
    """Serve one list page from the cache, loading and storing it on a miss.

    Sets the pagination headers (X-Page, X-Per-Page, X-Total-Count) and
    X-Cache so clients can tell hits from misses.
    """
    cache_key = pagination_cache_key(prefix, options)
    page = cache.get(cache_key)
    if page is None:
        items, total = loader()
        page = {"items": jsonable_encoder(items), "total": total}
        cache.set(cache_key, page, settings.LIST_CACHE_TTL_MS)
        response.headers["X-Cache"] = "MISS"
        app_logger.debug("api.list.cache_miss", key=cache_key, total=total)
    else:
        response.headers["X-Cache"] = "HIT"
        app_logger.debug("api.list.cache_hit", key=cache_key)

    response.headers["X-Page"] = str(options.page)
    response.headers["X-Per-Page"] = str(options.limit)
    response.headers["X-Total-Count"] = str(page["total"])

    return {
        "ok": True,
        "data": {
            "items": page["items"],
            "page": options.page,
            "limit": options.limit,
            "total": page["total"],
        },
    }
