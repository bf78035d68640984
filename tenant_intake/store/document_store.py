"""
Document store contract and the in-memory backend.

The intake flow only needs four operations (get, equality query, add,
update) against named collections. Production uses Firestore; the
in-memory backend serves local runs, the console demo, and tests.
"""

import copy
import itertools
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)

TENANTS = "tenants"
LANDLORDS = "landlords"
TICKETS = "tickets"
TICKET_MESSAGES = "ticketMessages"
UNKNOWN_MESSAGES = "unknownMessages"


class _ServerTimestamp:
    """Placeholder resolved to the write time by each backend."""

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


class StoreError(RuntimeError):
    """Raised when a document store operation cannot be completed."""


class DocumentStore(Protocol):
    """Async document store used by the intake tools.

    Documents are plain dicts; returned documents carry their id under ``"id"``.
    """

    async def get(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        ...

    async def query(
        self,
        collection: str,
        field: str,
        value: Any,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        ...

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        ...

    async def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        ...


class InMemoryDocumentStore:
    """Dict-backed document store with Firestore-like semantics."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        # Insertion order breaks ties between identical timestamps.
        self._sequence = itertools.count()
        self._order: dict[tuple[str, str], int] = {}

    def _resolve(self, data: dict[str, Any]) -> dict[str, Any]:
        now = datetime.now(timezone.utc)
        return {k: (now if v is SERVER_TIMESTAMP else v) for k, v in data.items()}

    def seed(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """Insert a document with a known id. Used for fixtures and demos."""
        self._collections.setdefault(collection, {})[doc_id] = self._resolve(data)
        self._order[(collection, doc_id)] = next(self._sequence)

    def all(self, collection: str) -> list[dict[str, Any]]:
        """Every document in a collection, in insertion order."""
        docs = self._collections.get(collection, {})
        ordered = sorted(docs, key=lambda doc_id: self._order[(collection, doc_id)])
        return [{"id": doc_id, **copy.deepcopy(docs[doc_id])} for doc_id in ordered]

    async def get(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        doc = self._collections.get(collection, {}).get(doc_id)
        if doc is None:
            return None
        return {"id": doc_id, **copy.deepcopy(doc)}

    async def query(
        self,
        collection: str,
        field: str,
        value: Any,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        docs = self._collections.get(collection, {})
        matches = [doc_id for doc_id, doc in docs.items() if doc.get(field) == value]
        if order_by is not None:
            # Documents missing the order field are excluded, as in Firestore.
            matches = [doc_id for doc_id in matches if docs[doc_id].get(order_by) is not None]
            matches.sort(
                key=lambda doc_id: (docs[doc_id][order_by], self._order[(collection, doc_id)]),
                reverse=descending,
            )
        else:
            matches.sort(key=lambda doc_id: self._order[(collection, doc_id)])
        if limit is not None:
            matches = matches[:limit]
        return [{"id": doc_id, **copy.deepcopy(docs[doc_id])} for doc_id in matches]

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex[:20]
        self.seed(collection, doc_id, data)
        logger.debug("Added %s/%s", collection, doc_id)
        return doc_id

    async def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        docs = self._collections.get(collection, {})
        if doc_id not in docs:
            raise StoreError(f"No document to update: {collection}/{doc_id}")
        docs[doc_id].update(self._resolve(data))
