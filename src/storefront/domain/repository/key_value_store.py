"""Abstract local key-value storage.

The cart and favorites stores each own one key and write their whole
collection under it. Values are JSON-compatible (dicts, lists, strings,
numbers, booleans, None).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class KeyValueStore(ABC):

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the value stored under *key*, or None if absent.

        Raises PersistenceError if the storage medium cannot be read.
        """

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*, replacing any previous value.

        Raises PersistenceError if the value cannot be written.
        """
