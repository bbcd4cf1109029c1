"""Query-string pagination helpers shared by the list endpoints.

`parse_pagination` turns an untrusted query-parameter bag into bounded
`PaginationOptions`; `apply_pagination` pushes those options onto a fluent
list query (see `app.services.list_query.ListQuery`).
"""
import json
import re
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_LIMIT = 100
DEFAULT_LIMIT = 10
SORT_FIELDS = ("createdAt", "updatedAt", "ratingAvg")

# leading integer, the way a browser's parseInt reads "12abc" or " 7"
_INT_PREFIX = re.compile(r"^\s*([+-]?)(\d+)")
# longer digit runs saturate, which keeps skip inside a 64-bit OFFSET
_MAX_DIGITS = 15
_SATURATED = 10 ** _MAX_DIGITS

Projection = Union[Dict[str, int], str]


class PaginationOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    page: int = 1
    limit: int = DEFAULT_LIMIT
    skip: int = 0
    sort: Mapping[str, int] = Field(default_factory=dict, validate_default=True)
    q: Optional[str] = None
    status: Optional[str] = None
    projection: Optional[Projection] = None
    lean: bool = True

    @field_validator("sort", mode="after")
    @classmethod
    def read_only_sort(cls, value: Mapping[str, int]) -> Mapping[str, int]:
        return MappingProxyType(dict(value))


def _parse_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (list, tuple)):
        value = ",".join(str(v) for v in value)
    elif isinstance(value, float) and abs(value) < 1e21:
        # a browser's String(1e20) has no exponent, Python's str() does
        value = format(value, "f")
    match = _INT_PREFIX.match(str(value))
    if not match:
        return None
    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    number = _SATURATED if len(digits) > _MAX_DIGITS else int(digits)
    return -number if sign == "-" else number


def _parse_sort(raw: Any) -> Dict[str, int]:
    sort: Dict[str, int] = {}
    if not isinstance(raw, str):
        return sort
    for token in raw.split(","):
        if not token:
            continue
        direction = -1 if token.startswith("-") else 1
        field = token[1:] if token[0] in "+-" else token
        if field in SORT_FIELDS:
            sort[field] = direction
    return sort


def _trimmed(value: Any) -> Optional[str]:
    return value.strip() if isinstance(value, str) else None


def parse_pagination(raw_query: Optional[Mapping[str, Any]] = None) -> PaginationOptions:
    """Build safe pagination options from raw query parameters.

    Never raises: missing or malformed values fall back to defaults, `limit`
    is clamped to [1, MAX_LIMIT] and unknown sort fields are dropped.
    """
    raw_query = raw_query or {}

    page = _parse_int(raw_query.get("page")) or 1
    page = max(page, 1)

    # 0 and garbage both mean "not given"; negatives clamp up to 1
    limit = _parse_int(raw_query.get("limit")) or DEFAULT_LIMIT
    limit = min(max(limit, 1), MAX_LIMIT)

    return PaginationOptions(
        page=page,
        limit=limit,
        skip=(page - 1) * limit,
        sort=_parse_sort(raw_query.get("sort")),
        q=_trimmed(raw_query.get("q")),
        status=_trimmed(raw_query.get("status")),
        projection=None,
        lean=True,
    )


def _option(options, name: str, default=None):
    if isinstance(options, Mapping):
        return options.get(name, default)
    return getattr(options, name, default)


def apply_pagination(query, options, projection: Optional[Projection] = None):
    """Apply skip/limit/sort/lean/projection to a fluent list query.

    `options` is a `PaginationOptions` or a mapping with the same keys. The
    query is expected to expose `skip`, `limit`, `sort`, `lean` and `select`;
    `sort` and `select` are only called when there is something to apply.
    """
    q = query.skip(_option(options, "skip", 0)).limit(_option(options, "limit", DEFAULT_LIMIT))
    sort = _option(options, "sort") or {}
    if len(sort):
        q.sort(sort)
    if _option(options, "lean", False):
        q.lean()
    if projection:
        q.select(projection)
    return q


def pagination_cache_key(prefix: str, options: PaginationOptions) -> str:
    """Deterministic cache key for a list page, e.g. `shops:list:{...}`."""
    payload = {
        "page": options.page,
        "limit": options.limit,
        # kept as pairs so the key changes with sort priority
        "sort": [[field, direction] for field, direction in options.sort.items()],
        "q": options.q,
        "status": options.status,
    }
    return prefix + json.dumps(payload, sort_keys=True, separators=(",", ":"))
