"""In-memory store used by tests and local tooling."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from .base import RecordT
from .exceptions import RecordNotFoundError
from .predicates import Predicate


class MemoryStore:
    """Keeps transient model instances keyed by model class and id.

    Records are returned by reference, the way a session's identity map would
    hand them out. Ordering is stable, so ties keep insertion order.
    """

    def __init__(self) -> None:
        self._tables: dict[type, dict[str, Any]] = {}

    def _table(self, model: type) -> dict[str, Any]:
        return self._tables.setdefault(model, {})

    def insert(self, record: RecordT) -> RecordT:
        self._table(type(record))[record.id] = record
        return record

    def find_one(self, model: type[RecordT], where: Predicate) -> RecordT | None:
        for record in self._table(model).values():
            if where.matches(record):
                return record
        return None

    def find_many(
        self,
        model: type[RecordT],
        where: Predicate | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[RecordT]:
        records = [
            record
            for record in self._table(model).values()
            if where is None or where.matches(record)
        ]
        if order_by is not None:
            records.sort(key=lambda record: getattr(record, order_by), reverse=descending)
        return records

    def update(self, model: type[RecordT], record_id: str, **values: Any) -> RecordT:
        record = self._table(model).get(record_id)
        if record is None:
            raise RecordNotFoundError(model.__name__, record_id)
        for name, value in values.items():
            setattr(record, name, value)
        return record

    def delete(self, model: type[RecordT], record_id: str) -> RecordT:
        record = self._table(model).pop(record_id, None)
        if record is None:
            raise RecordNotFoundError(model.__name__, record_id)
        return record

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Restore every table to its previous state if the block raises."""
        tables = {model: dict(table) for model, table in self._tables.items()}
        values = {
            id(record): (record, _column_values(record))
            for table in self._tables.values()
            for record in table.values()
        }
        try:
            yield
        except Exception:
            self._tables = tables
            for record, columns in values.values():
                for name, value in columns.items():
                    setattr(record, name, value)
            raise


def _column_values(record: Any) -> dict[str, Any]:
    return {column.key: getattr(record, column.key) for column in record.__table__.columns}
