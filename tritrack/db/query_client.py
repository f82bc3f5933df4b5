"""Typed query client over the backend tables.

Models the hosted data service's per-table interface: ``select``, ``insert``,
``update`` and ``delete`` with equality, inequality and inclusive range filters. Every
call returns a ``QueryResult`` carrying either rows or an error object; backend
failures are never raised to the caller.

Example:
    result = (
        QueryClient(session)
        .table("planned_workouts")
        .select()
        .eq("user_id", user_id)
        .gte("workout_date", "2024-06-02")
        .lte("workout_date", "2024-06-08")
        .order("workout_date")
        .execute()
    )
    if result.error:
        ...
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Literal

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tritrack.core.errors import WriteError
from tritrack.db.models import TABLES, Base

Operation = Literal["select", "insert", "update", "delete"]
FilterOp = Literal["eq", "neq", "gte", "lte"]


@dataclass(frozen=True)
class QueryError:
    """Backend error. Only its presence and message text are meaningful."""

    message: str
    code: str | None = None


@dataclass(frozen=True)
class QueryResult:
    data: list[dict[str, Any]] = field(default_factory=list)
    error: QueryError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def maybe_single(self) -> dict[str, Any] | None:
        """Return the first row, or None when the result is empty or failed."""
        if self.error or not self.data:
            return None
        return self.data[0]

    def raise_for_error(self) -> list[dict[str, Any]]:
        """Return the rows of a write, raising WriteError with the backend message on failure."""
        if self.error:
            raise WriteError(self.error.message)
        return self.data


def _serialize(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


def row_to_dict(obj: Base) -> dict[str, Any]:
    """Convert a model instance to a plain dict keyed by column name."""
    return {column.name: _serialize(getattr(obj, column.key)) for column in obj.__table__.columns}


class TableQuery:
    """Builder for a single query against one table."""

    def __init__(self, session: Session, table_name: str, model: type[Base]):
        self._session = session
        self._table_name = table_name
        self._model = model
        self._operation: Operation = "select"
        self._columns: tuple[str, ...] = ()
        self._values: list[dict[str, Any]] = []
        self._filters: list[tuple[FilterOp, str, Any]] = []
        self._order_by: tuple[str, bool] | None = None
        self._limit: int | None = None

    # Operations

    def select(self, *columns: str) -> TableQuery:
        self._operation = "select"
        self._columns = columns
        return self

    def insert(self, values: dict[str, Any] | list[dict[str, Any]]) -> TableQuery:
        self._operation = "insert"
        self._values = [values] if isinstance(values, dict) else list(values)
        return self

    def update(self, values: dict[str, Any]) -> TableQuery:
        self._operation = "update"
        self._values = [values]
        return self

    def delete(self) -> TableQuery:
        self._operation = "delete"
        return self

    # Filters and modifiers

    def eq(self, column: str, value: Any) -> TableQuery:
        self._filters.append(("eq", column, value))
        return self

    def neq(self, column: str, value: Any) -> TableQuery:
        self._filters.append(("neq", column, value))
        return self

    def gte(self, column: str, value: Any) -> TableQuery:
        self._filters.append(("gte", column, value))
        return self

    def lte(self, column: str, value: Any) -> TableQuery:
        self._filters.append(("lte", column, value))
        return self

    def order(self, column: str, ascending: bool = True) -> TableQuery:
        self._order_by = (column, ascending)
        return self

    def limit(self, count: int) -> TableQuery:
        self._limit = count
        return self

    # Execution

    def _unknown_columns(self) -> list[str]:
        known = set(self._model.__table__.columns.keys())
        referenced = list(self._columns)
        referenced.extend(column for _, column, _ in self._filters)
        for values in self._values:
            referenced.extend(values.keys())
        if self._order_by:
            referenced.append(self._order_by[0])
        return sorted({column for column in referenced if column not in known})

    def _where(self, stmt):
        for op, column, value in self._filters:
            attr = getattr(self._model, column)
            if op == "eq":
                stmt = stmt.where(attr.is_(None)) if value is None else stmt.where(attr == value)
            elif op == "neq":
                stmt = stmt.where(attr.is_not(None)) if value is None else stmt.where(attr != value)
            elif op == "gte":
                stmt = stmt.where(attr >= value)
            else:
                stmt = stmt.where(attr <= value)
        return stmt

    def _matching_objects(self) -> list[Base]:
        return list(self._session.execute(self._where(select(self._model))).scalars().all())

    def _run_select(self) -> list[dict[str, Any]]:
        stmt = self._where(select(self._model))
        if self._order_by:
            column, ascending = self._order_by
            attr = getattr(self._model, column)
            stmt = stmt.order_by(attr.asc() if ascending else attr.desc())
        if self._limit is not None:
            stmt = stmt.limit(self._limit)
        rows = [row_to_dict(obj) for obj in self._session.execute(stmt).scalars().all()]
        if self._columns:
            rows = [{column: row[column] for column in self._columns} for row in rows]
        return rows

    def _run_insert(self) -> list[dict[str, Any]]:
        objects = [self._model(**values) for values in self._values]
        self._session.add_all(objects)
        self._session.flush()
        self._session.commit()
        return [row_to_dict(obj) for obj in objects]

    def _run_update(self) -> list[dict[str, Any]]:
        values = dict(self._values[0])
        if "updated_at" in self._model.__table__.columns and "updated_at" not in values:
            values["updated_at"] = datetime.now(timezone.utc)
        objects = self._matching_objects()
        for obj in objects:
            for column, value in values.items():
                setattr(obj, column, value)
        self._session.flush()
        self._session.commit()
        return [row_to_dict(obj) for obj in objects]

    def _run_delete(self) -> list[dict[str, Any]]:
        objects = self._matching_objects()
        deleted = [row_to_dict(obj) for obj in objects]
        for obj in objects:
            self._session.delete(obj)
        self._session.flush()
        self._session.commit()
        return deleted

    def execute(self) -> QueryResult:
        """Run the query and wrap the outcome in a QueryResult."""
        unknown = self._unknown_columns()
        if unknown:
            message = f'column "{unknown[0]}" of relation "{self._table_name}" does not exist'
            logger.warning(f"[QUERY] {self._operation} {self._table_name} rejected: {message}")
            return QueryResult(error=QueryError(message=message, code="undefined_column"))

        if self._operation in {"update", "delete"} and not self._filters:
            message = f"{self._operation.upper()} on {self._table_name} requires a filter"
            logger.warning(f"[QUERY] {message}")
            return QueryResult(error=QueryError(message=message, code="missing_filter"))

        if self._operation in {"insert", "update"} and not any(self._values):
            message = f"{self._operation.upper()} on {self._table_name} has no values"
            logger.warning(f"[QUERY] {message}")
            return QueryResult(error=QueryError(message=message, code="empty_values"))

        runners = {
            "select": self._run_select,
            "insert": self._run_insert,
            "update": self._run_update,
            "delete": self._run_delete,
        }
        try:
            data = runners[self._operation]()
        except SQLAlchemyError as e:
            self._session.rollback()
            message = str(getattr(e, "orig", None) or e)
            logger.warning(f"[QUERY] {self._operation} {self._table_name} failed: {message}")
            return QueryResult(error=QueryError(message=message, code=type(e).__name__))

        logger.debug(f"[QUERY] {self._operation} {self._table_name}: {len(data)} row(s), filters={self._filters}")
        return QueryResult(data=data)


class QueryClient:
    """Entry point for table queries bound to one database session."""

    def __init__(self, session: Session):
        self._session = session

    def table(self, name: str) -> TableQuery:
        model = TABLES.get(name)
        if model is None:
            raise ValueError(f"Unknown table: {name}. Valid tables: {', '.join(sorted(TABLES))}")
        return TableQuery(self._session, name, model)
