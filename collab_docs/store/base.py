"""Persistence capability consumed by the services."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Any, Protocol, TypeVar

from collab_docs.db.base import Base

from .predicates import Predicate


RecordT = TypeVar("RecordT", bound=Base)


class Store(Protocol):
    """Minimal record store: services receive one explicitly, never globally."""

    def insert(self, record: RecordT) -> RecordT:
        """Persist a new record and return it."""

    def find_one(self, model: type[RecordT], where: Predicate) -> RecordT | None:
        """Return the first record matching ``where`` or None."""

    def find_many(
        self,
        model: type[RecordT],
        where: Predicate | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[RecordT]:
        """Return all matching records, optionally ordered by one field."""

    def update(self, model: type[RecordT], record_id: str, **values: Any) -> RecordT:
        """Set ``values`` on the record; raise RecordNotFoundError if missing."""

    def delete(self, model: type[RecordT], record_id: str) -> RecordT:
        """Remove the record and return it; raise RecordNotFoundError if missing."""

    def transaction(self) -> AbstractContextManager[None]:
        """Group writes so an exception inside the block undoes all of them."""
