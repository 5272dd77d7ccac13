"""Typed filter predicates shared by every store implementation.

A predicate can be evaluated directly against a record (``matches``) or
compiled into a SQLAlchemy clause for a mapped model (``to_clause``), so the
in-memory and SQL stores answer the same queries the same way. NULL never
equals or orders against a value, and ``Not`` is plain two-valued negation in
both places.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeAlias

from sqlalchemy import and_, not_, or_
from sqlalchemy.sql.elements import ColumnElement


def _present(model: type, field: str, clause: ColumnElement[bool]) -> ColumnElement[bool]:
    return and_(getattr(model, field).is_not(None), clause)


@dataclass(frozen=True, slots=True)
class Equals:
    field: str
    value: Any

    def matches(self, record: Any) -> bool:
        return getattr(record, self.field) == self.value

    def to_clause(self, model: type) -> ColumnElement[bool]:
        column = getattr(model, self.field)
        if self.value is None:
            return column.is_(None)
        return _present(model, self.field, column == self.value)


@dataclass(frozen=True, slots=True)
class LessThan:
    field: str
    value: Any

    def matches(self, record: Any) -> bool:
        current = getattr(record, self.field)
        return current is not None and current < self.value

    def to_clause(self, model: type) -> ColumnElement[bool]:
        return _present(model, self.field, getattr(model, self.field) < self.value)


@dataclass(frozen=True, slots=True)
class GreaterThan:
    field: str
    value: Any

    def matches(self, record: Any) -> bool:
        current = getattr(record, self.field)
        return current is not None and current > self.value

    def to_clause(self, model: type) -> ColumnElement[bool]:
        return _present(model, self.field, getattr(model, self.field) > self.value)


@dataclass(frozen=True, slots=True, init=False)
class And:
    parts: tuple[Predicate, ...]

    def __init__(self, *parts: Predicate) -> None:
        object.__setattr__(self, "parts", parts)

    def matches(self, record: Any) -> bool:
        return all(part.matches(record) for part in self.parts)

    def to_clause(self, model: type) -> ColumnElement[bool]:
        return and_(*(part.to_clause(model) for part in self.parts))


@dataclass(frozen=True, slots=True, init=False)
class Or:
    parts: tuple[Predicate, ...]

    def __init__(self, *parts: Predicate) -> None:
        object.__setattr__(self, "parts", parts)

    def matches(self, record: Any) -> bool:
        return any(part.matches(record) for part in self.parts)

    def to_clause(self, model: type) -> ColumnElement[bool]:
        return or_(*(part.to_clause(model) for part in self.parts))


@dataclass(frozen=True, slots=True)
class Not:
    part: Predicate

    def matches(self, record: Any) -> bool:
        return not self.part.matches(record)

    def to_clause(self, model: type) -> ColumnElement[bool]:
        return not_(self.part.to_clause(model))


Predicate: TypeAlias = "Equals | LessThan | GreaterThan | And | Or | Not"
