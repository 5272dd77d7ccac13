"""Database package."""

from .base import Base
from .models import Document, Image
from .session import get_database_url, get_engine, get_session, make_engine, make_session_factory

__all__ = [
    "Base",
    "Document",
    "Image",
    "get_database_url",
    "get_engine",
    "get_session",
    "make_engine",
    "make_session_factory",
]
