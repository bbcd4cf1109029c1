import re
from typing import Any, Dict, List, Optional, Set, Type, Union

from sqlalchemy import func
from sqlalchemy.orm import Session, load_only
from sqlmodel import SQLModel, select

from app.core.exceptions.exceptions import InvalidQueryFieldError

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_column_name(field: str) -> str:
    """`ratingAvg` -> `rating_avg`; snake_case names pass through."""
    return _CAMEL_BOUNDARY.sub("_", field).lower()


class ListQuery:
    """Fluent list query over a SQLModel table.

    Mirrors the chainable handle `apply_pagination` expects: `skip`, `limit`,
    `sort`, `lean` and `select` record intent and return `self`; nothing hits
    the database until `all()` or `count()`.
    """

    def __init__(self, db: Session, model: Type[SQLModel], statement=None):
        self.db = db
        self.model = model
        self._statement = statement if statement is not None else select(model)
        self._offset: Optional[int] = None
        self._limit: Optional[int] = None
        self._order: List[Any] = []
        self._lean = False
        self._fields: Optional[List[str]] = None

    @property
    def field_names(self) -> List[str]:
        return list(self.model.model_fields.keys())

    def _column_name(self, field: str) -> str:
        name = to_column_name(field)
        if name not in self.model.model_fields:
            raise InvalidQueryFieldError(field, f"unknown on {self.model.__name__}")
        return name

    def where(self, *criteria) -> "ListQuery":
        self._statement = self._statement.where(*criteria)
        return self

    def skip(self, n: int) -> "ListQuery":
        self._offset = n
        return self

    def limit(self, n: int) -> "ListQuery":
        self._limit = n
        return self

    def sort(self, sort_map: Dict[str, int]) -> "ListQuery":
        for field, direction in sort_map.items():
            column = getattr(self.model, self._column_name(field))
            self._order.append(column.desc() if direction < 0 else column.asc())
        return self

    def lean(self) -> "ListQuery":
        self._lean = True
        return self

    def select(self, projection: Union[Dict[str, int], str]) -> "ListQuery":
        """Restrict returned fields.

        Accepts `{"name": 1, "price": 1}` (include), `{"isDeleted": 0}`
        (exclude) or the string form `"name price"` / `"-isDeleted"`.
        The primary key is always returned.
        """
        include: Set[str] = set()
        exclude: Set[str] = set()
        if isinstance(projection, str):
            for token in projection.split():
                if token.startswith("-"):
                    exclude.add(self._column_name(token[1:]))
                else:
                    include.add(self._column_name(token.lstrip("+")))
        else:
            for field, flag in projection.items():
                (include if flag else exclude).add(self._column_name(field))

        if include and exclude:
            raise InvalidQueryFieldError(", ".join(sorted(exclude)), "can't mix inclusion and exclusion")

        if include:
            include.add("id")
            self._fields = [name for name in self.field_names if name in include]
        else:
            self._fields = [name for name in self.field_names if name not in exclude]
        return self

    def count(self) -> int:
        """Total matching rows, ignoring skip/limit/sort."""
        stmt = select(func.count()).select_from(self._statement.subquery())
        return int(self.db.execute(stmt).scalar_one())

    def _build(self):
        stmt = self._statement
        if self._order:
            stmt = stmt.order_by(*self._order)
        # stable paging when sort keys tie
        stmt = stmt.order_by(self.model.id.asc())
        if self._fields is not None:
            stmt = stmt.options(load_only(*(getattr(self.model, name) for name in self._fields)))
        if self._offset:
            stmt = stmt.offset(self._offset)
        if self._limit is not None:
            stmt = stmt.limit(self._limit)
        return stmt

    def all(self) -> List[Any]:
        rows = self.db.execute(self._build()).scalars().all()
        if not self._lean:
            return list(rows)
        fields = self._fields or self.field_names
        return [{name: getattr(row, name) for name in fields} for row in rows]
