"""SQLAlchemy-backed database adapters."""

from .database import Database, Transaction, UnknownTableError, WriteResult
from .engine import make_engine, normalize_url
from .metadata import metadata

__all__ = [
    "Database",
    "Transaction",
    "UnknownTableError",
    "WriteResult",
    "make_engine",
    "metadata",
    "normalize_url",
]
