"""SQLAlchemy-backed store."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from .base import RecordT
from .exceptions import RecordNotFoundError
from .predicates import Predicate


class SqlStore:
    """Store over a caller-owned session; flushes, the session owner commits."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def insert(self, record: RecordT) -> RecordT:
        self.session.add(record)
        self.session.flush()
        return record

    def find_one(self, model: type[RecordT], where: Predicate) -> RecordT | None:
        stmt = select(model).where(where.to_clause(model)).limit(1)
        return self.session.execute(stmt).scalar_one_or_none()

    def find_many(
        self,
        model: type[RecordT],
        where: Predicate | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[RecordT]:
        stmt = select(model)
        if where is not None:
            stmt = stmt.where(where.to_clause(model))
        if order_by is not None:
            column = getattr(model, order_by)
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        return list(self.session.execute(stmt).scalars().all())

    def update(self, model: type[RecordT], record_id: str, **values: Any) -> RecordT:
        record = self.session.get(model, record_id)
        if record is None:
            raise RecordNotFoundError(model.__name__, record_id)
        for name, value in values.items():
            setattr(record, name, value)
        self.session.flush()
        return record

    def delete(self, model: type[RecordT], record_id: str) -> RecordT:
        record = self.session.get(model, record_id)
        if record is None:
            raise RecordNotFoundError(model.__name__, record_id)
        self.session.delete(record)
        self.session.flush()
        return record

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Run the block inside a SAVEPOINT of the caller's transaction."""
        with self.session.begin_nested():
            yield
