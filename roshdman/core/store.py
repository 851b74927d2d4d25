"""
JSON-file record store.

The whole system state is one pretty-printed JSON document with five
collections. It is re-read from disk on every request and rewritten in full
on every mutation.

Usage:
    with store.transaction() as doc:
        doc.users.append(user)
    # saved here unless the block raised
"""

import json
import logging
import os
import threading
from contextlib import contextmanager
from functools import lru_cache
from typing import Generator

from roshdman.core.config import settings
from roshdman.core.errors import StoreError
from roshdman.models.document import Document

logger = logging.getLogger("roshdman")


class JsonRecordStore:
    def __init__(self, path: str):
        self.path = path
        # Serializes load -> mutate -> save, and keeps reads off a half-written file
        self._lock = threading.RLock()

    def load(self) -> Document:
        """Read the document; a read or parse failure yields the default document."""
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                raw = json.load(fh)
        except FileNotFoundError:
            logger.info("store.empty", extra={"path": self.path})
            return Document.default()
        except (OSError, ValueError) as e:
            logger.warning(
                "store.load_failed",
                extra={"error_message": f"{type(e).__name__}: {e}", "path": self.path},
            )
            return Document.default()

        if not isinstance(raw, dict):
            logger.warning(
                "store.load_failed",
                extra={"error_message": f"top level is {type(raw).__name__}, not an object", "path": self.path},
            )
            return Document.default()

        doc = Document.from_raw(raw)
        if doc.unreadable_count():
            logger.warning(
                "store.records_unreadable",
                extra={"error_message": f"{doc.unreadable_count()} record(s) kept as stored", "path": self.path},
            )
        return doc

    def save(self, doc: Document) -> None:
        """Overwrite the backing file with the full document."""
        try:
            payload = json.dumps(doc.to_json_dict(), indent=2, ensure_ascii=False)
            with open(self.path, "w", encoding="utf-8") as fh:
                fh.write(payload)
        except (OSError, TypeError, ValueError) as e:
            logger.error(
                "store.save_failed",
                extra={"error_message": f"{type(e).__name__}: {e}", "path": self.path},
            )
            raise StoreError(f"Could not write {self.path}: {e}") from e

    def snapshot(self) -> Document:
        """Read-only view for projections; never saved."""
        with self._lock:
            return self.load()

    @contextmanager
    def transaction(self) -> Generator[Document, None, None]:
        """Load, hand the document to the caller, save if the block succeeds."""
        with self._lock:
            doc = self.load()
            yield doc
            self.save(doc)

    def is_writable(self) -> bool:
        directory = os.path.dirname(os.path.abspath(self.path))
        return os.path.isdir(directory) and os.access(directory, os.W_OK)


@lru_cache(maxsize=None)
def store_for(path: str) -> JsonRecordStore:
    """One store, and so one lock, per data file."""
    return JsonRecordStore(path)


def get_store() -> JsonRecordStore:
    """FastAPI dependency for the configured data file."""
    return store_for(settings.DATA_FILE)
