"""
JSON-file document collections.

Each collection lives in a single file ({"documents": [...]}) and is written
atomically (temp file + replace). Every mutation holds the collection's file
lock for its whole load-match-modify-save cycle, so update_one/delete_one
with a filter such as {"id": ..., "user_id": ...} behave as one atomic
operation per document.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from ..core.locks import acquire_lock, lock_key_collection
from ..utils.exceptions import StorageError
from ..utils.logger import get_logger

logger = get_logger(__name__)

Document = Dict[str, Any]


def _matches(doc: Document, filters: Dict[str, Any]) -> bool:
    return all(doc.get(key) == value for key, value in filters.items())


class JsonCollection:
    """A named collection of JSON documents stored in ``data_dir/<name>.json``."""

    def __init__(self, data_dir: Path, name: str):
        self.name = name
        self.data_dir = Path(data_dir)
        self.path = self.data_dir / f"{name}.json"
        self.locks_dir = self.data_dir / "locks"
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _load(self) -> List[Document]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise StorageError(f"Failed to load {self.name}: {e}")
        return list(raw.get("documents", []))

    def _save(self, documents: List[Document]) -> None:
        with tempfile.NamedTemporaryFile(
            mode="w", dir=str(self.data_dir), delete=False, encoding="utf-8", suffix=".tmp"
        ) as tf:
            json.dump({"documents": documents}, tf, indent=2, ensure_ascii=False, default=str)
            temp_path = Path(tf.name)
        try:
            os.replace(str(temp_path), str(self.path))
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink()
            raise StorageError(f"Failed to save {self.name}: {e}")

    def _locked(self):
        return acquire_lock(self.locks_dir, lock_key_collection(self.name))

    def find(self, filters: Optional[Dict[str, Any]] = None) -> List[Document]:
        """Return all documents matching ``filters`` in insertion order."""
        filters = filters or {}
        return [doc for doc in self._load() if _matches(doc, filters)]

    def find_one(self, filters: Dict[str, Any]) -> Optional[Document]:
        return next((doc for doc in self._load() if _matches(doc, filters)), None)

    def insert_one(self, document: Document) -> Document:
        with self._locked():
            documents = self._load()
            documents.append(document)
            self._save(documents)
        return document

    def insert_unique(self, document: Document, key: str, normalize: Callable[[Any], Any] = lambda v: v) -> bool:
        """Insert unless another document has the same normalized ``key``.

        Returns False (and writes nothing) when a duplicate exists.
        """
        with self._locked():
            documents = self._load()
            wanted = normalize(document.get(key))
            if any(normalize(doc.get(key)) == wanted for doc in documents):
                return False
            documents.append(document)
            self._save(documents)
        return True

    def update_one(self, filters: Dict[str, Any], changes: Dict[str, Any]) -> Optional[Document]:
        """Apply ``changes`` to the first document matching ``filters``.

        Returns the updated document, or None if nothing matched.
        """
        with self._locked():
            documents = self._load()
            for i, doc in enumerate(documents):
                if _matches(doc, filters):
                    updated = {**doc, **changes}
                    documents[i] = updated
                    self._save(documents)
                    return updated
        return None

    def delete_one(self, filters: Dict[str, Any]) -> int:
        """Delete the first document matching ``filters``; return the deleted count."""
        with self._locked():
            documents = self._load()
            for i, doc in enumerate(documents):
                if _matches(doc, filters):
                    del documents[i]
                    self._save(documents)
                    return 1
        logger.debug("delete_one matched nothing", collection=self.name)
        return 0
