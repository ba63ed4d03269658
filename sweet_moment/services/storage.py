"""
Durable key/value storage for client-side state.

The cart is written as one JSON text blob under a well-known key, on every
mutation. Two backends share the same two-method interface:

- SqlStorage: a row per key in the storage_entries table (SQLAlchemy).
- MemoryStorage: a plain dict, for ephemeral carts and tests.

Backends raise on failure; CartStore decides how failures are surfaced.
"""

import logging
from typing import Dict, Optional, Protocol

from sqlalchemy.orm import sessionmaker

from ..models import StorageEntry


logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStorage:
    """In-process storage. Lost when the process exits."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class SqlStorage:
    """Storage backed by the storage_entries table."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        with self._session_factory() as db:
            entry = db.get(StorageEntry, key)
            return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        with self._session_factory() as db:
            entry = db.get(StorageEntry, key)
            if entry:
                entry.value = value
            else:
                db.add(StorageEntry(key=key, value=value))
            db.commit()
        logger.debug("Persisted %d bytes under %r", len(value), key)
