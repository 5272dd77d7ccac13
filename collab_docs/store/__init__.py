"""Record stores and the predicates they evaluate."""

from .base import Store
from .exceptions import RecordNotFoundError, StoreError
from .memory import MemoryStore
from .predicates import And, Equals, GreaterThan, LessThan, Not, Or, Predicate
from .sql import SqlStore

__all__ = [
    "And",
    "Equals",
    "GreaterThan",
    "LessThan",
    "MemoryStore",
    "Not",
    "Or",
    "Predicate",
    "RecordNotFoundError",
    "SqlStore",
    "Store",
    "StoreError",
]
