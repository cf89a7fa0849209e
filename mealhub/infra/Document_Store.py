"""JSON-file document store.

Each collection is one ``<collection>.json`` file under the data directory,
holding an object keyed by document id. The query surface is
small: equality and range filters combined with AND, ordered listing, and
create/update/delete by id.
"""
import json
import logging
import operator
import os
import shutil
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple
from uuid import uuid4

from mealhub.domain.errors import StoreError, ValidationError

logger = logging.getLogger(__name__)

Filter = Tuple[str, str, Any]
Document = Dict[str, Any]

_OPERATORS = {
    "==": operator.eq,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


class DocumentStore:
    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self._lock = threading.RLock()

    def _path(self, collection: str) -> Path:
        return self.data_dir / f"{collection}.json"

    def _load(self, collection: str) -> Dict[str, Document]:
        path = self._path(collection)
        if not path.exists():
            return {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                docs = json.load(f) or {}
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to read collection %s: %s", collection, e)
            raise StoreError(f"Could not read {collection}") from e
        if not isinstance(docs, dict):
            raise StoreError(f"Collection {collection} is corrupt")
        return docs

    def _save(self, collection: str, docs: Dict[str, Document]) -> None:
        path = self._path(collection)
        try:
            os.makedirs(path.parent, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{collection}_", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                    json.dump(docs, tmp, indent=2, ensure_ascii=False)
                shutil.move(tmp_path, path)
            finally:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
        except OSError as e:
            logger.error("Failed to write collection %s: %s", collection, e)
            raise StoreError(f"Could not write {collection}") from e

    # --- Single-document operations -------------------------------------
    def add(self, collection: str, data: Document) -> str:
        doc_id = uuid4().hex
        self.set(collection, doc_id, data)
        return doc_id

    def set(self, collection: str, doc_id: str, data: Document) -> None:
        with self._lock:
            docs = self._load(collection)
            docs[doc_id] = dict(data)
            self._save(collection, docs)

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with self._lock:
            doc = self._load(collection).get(doc_id)
        return dict(doc) if doc is not None else None

    def update(self, collection: str, doc_id: str, changes: Document) -> bool:
        with self._lock:
            docs = self._load(collection)
            if doc_id not in docs:
                return False
            docs[doc_id].update(changes)
            self._save(collection, docs)
        return True

    def delete(self, collection: str, doc_id: str) -> bool:
        with self._lock:
            docs = self._load(collection)
            if docs.pop(doc_id, None) is None:
                return False
            self._save(collection, docs)
        return True

    # --- Queries ---------------------------------------------------------
    @staticmethod
    def _compile(filters: Iterable[Filter]):
        checks = []
        for field, op, value in filters:
            if op not in _OPERATORS:
                raise ValidationError(f"Unsupported filter operator: {op}")
            checks.append((field, _OPERATORS[op], value))
        return checks

    @staticmethod
    def _matches(doc: Document, checks) -> bool:
        for field, compare, value in checks:
            current = doc.get(field)
            # Missing fields never satisfy a filter
            if current is None or not compare(current, value):
                return False
        return True

    def replace(self, collection: str, filters: Iterable[Filter], data: Document) -> Tuple[str, List[str]]:
        """Remove every document matching ``filters`` and add ``data``, in one write.

        Returns the new id and the ids that were removed. Nothing changes if the
        write fails.
        """
        checks = self._compile(filters)
        doc_id = uuid4().hex
        with self._lock:
            docs = self._load(collection)
            removed = [key for key, doc in docs.items() if self._matches(doc, checks)]
            for key in removed:
                del docs[key]
            docs[doc_id] = dict(data)
            self._save(collection, docs)
        return doc_id, removed

    def query(self, collection: str, filters: Iterable[Filter] = (), *,
              order_by: Optional[str] = None, descending: bool = False,
              limit: Optional[int] = None, offset: int = 0) -> List[Tuple[str, Document]]:
        """Return ``(id, document)`` pairs matching every filter."""
        checks = self._compile(filters)

        with self._lock:
            docs = self._load(collection)

        matched = [(doc_id, dict(doc)) for doc_id, doc in docs.items() if self._matches(doc, checks)]

        if order_by:
            present = [pair for pair in matched if pair[1].get(order_by) is not None]
            missing = [pair for pair in matched if pair[1].get(order_by) is None]
            present.sort(key=lambda pair: pair[1][order_by], reverse=descending)
            matched = present + missing
        matched = matched[max(offset, 0):]
        if limit is not None:
            matched = matched[:max(limit, 0)]
        return matched


__all__ = ['DocumentStore']
