"""JSON-file-backed implementation of KeyValueStore.

Every key lives in one JSON object on disk, so the cart and the favorites
share a single file the way they would share an app's preferences.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from storefront.domain.exceptions import PersistenceError
from storefront.domain.repository.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


class JsonFileKeyValueStore(KeyValueStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    # --- KeyValueStore interface ----------------------------------------------

    def get(self, key: str) -> Any | None:
        return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        try:
            document = self._load()
        except PersistenceError as exc:
            logger.warning("Replacing unreadable storage document: %s", exc)
            document = {}
        document[key] = value
        self._persist(document)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Any]:
        if not self._file_path.exists():
            return {}
        try:
            document = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Cannot read {self._file_path}: {exc}") from exc
        if not isinstance(document, dict):
            raise PersistenceError(
                f"{self._file_path} does not hold a JSON object"
            )
        return document

    def _persist(self, document: dict[str, Any]) -> None:
        try:
            text = json.dumps(document, indent=2, sort_keys=True) + "\n"
        except (TypeError, ValueError) as exc:
            raise PersistenceError(f"Cannot serialise storage document: {exc}") from exc
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Cannot write {self._file_path}: {exc}") from exc
