"""Firestore backend for the document store contract."""

import logging
from typing import Any, Optional

from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from tenant_intake.store.document_store import SERVER_TIMESTAMP, StoreError

logger = logging.getLogger(__name__)


def _to_firestore(data: dict[str, Any]) -> dict[str, Any]:
    return {k: (firestore.SERVER_TIMESTAMP if v is SERVER_TIMESTAMP else v) for k, v in data.items()}


class FirestoreDocumentStore:
    """Document store backed by a Firestore ``AsyncClient``.

    The client is created once at process start and passed in.
    """

    def __init__(self, client: firestore.AsyncClient) -> None:
        self._client = client

    async def get(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        snap = await self._client.collection(collection).document(doc_id).get()
        if not snap.exists:
            return None
        return {"id": snap.id, **(snap.to_dict() or {})}

    async def query(
        self,
        collection: str,
        field: str,
        value: Any,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        query = self._client.collection(collection).where(filter=FieldFilter(field, "==", value))
        if order_by is not None:
            direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            query = query.order_by(order_by, direction=direction)
        if limit is not None:
            query = query.limit(limit)
        return [{"id": snap.id, **(snap.to_dict() or {})} async for snap in query.stream()]

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        _, ref = await self._client.collection(collection).add(_to_firestore(data))
        return ref.id

    async def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        try:
            await self._client.collection(collection).document(doc_id).update(_to_firestore(data))
        except gcp_exceptions.NotFound as exc:
            raise StoreError(f"No document to update: {collection}/{doc_id}") from exc


def create_firestore_store(project: Optional[str] = None) -> FirestoreDocumentStore:
    """Build the Firestore-backed store using application default credentials."""
    client = firestore.AsyncClient(project=project)
    logger.info("Firestore client created (project=%s)", project or "default")
    return FirestoreDocumentStore(client)
