"""Firestore-backed document store.

Uses the synchronous google-cloud-firestore client. Blocking calls are run in
a worker thread with asyncio.to_thread; on_snapshot watches run on the
client's own listener thread and are wrapped in Subscription handles.
"""

import asyncio
import logging
from typing import Any

from google.api_core import exceptions as google_exceptions
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from serenity.store.base import (
    Document,
    DocumentCallback,
    DocumentNotFoundError,
    QueryCallback,
    Subscription,
)

logger = logging.getLogger(__name__)


class FirestoreStore:
    """DocumentStore implementation over a Firestore database."""

    def __init__(
        self,
        client: firestore.Client | None = None,
        project: str | None = None,
    ) -> None:
        self._client = client or firestore.Client(project=project)

    def _doc(self, collection: str, doc_id: str) -> firestore.DocumentReference:
        return self._client.collection(collection).document(doc_id)

    async def get(self, collection: str, doc_id: str) -> Document | None:
        snapshot = await asyncio.to_thread(self._doc(collection, doc_id).get)
        return snapshot.to_dict() if snapshot.exists else None

    async def set(
        self, collection: str, doc_id: str, data: Document, merge: bool = False
    ) -> None:
        await asyncio.to_thread(self._doc(collection, doc_id).set, data, merge=merge)

    async def update(self, collection: str, doc_id: str, data: Document) -> None:
        try:
            await asyncio.to_thread(self._doc(collection, doc_id).update, data)
        except google_exceptions.NotFound as e:
            raise DocumentNotFoundError(collection, doc_id) from e

    async def delete(self, collection: str, doc_id: str) -> None:
        await asyncio.to_thread(self._doc(collection, doc_id).delete)

    async def where_equal(
        self, collection: str, field: str, value: Any
    ) -> list[tuple[str, Document]]:
        query = self._client.collection(collection).where(
            filter=FieldFilter(field, "==", value)
        )
        snapshots = await asyncio.to_thread(lambda: list(query.stream()))
        return [(s.id, s.to_dict() or {}) for s in snapshots]

    def new_id(self, collection: str) -> str:
        return self._client.collection(collection).document().id

    def watch_document(
        self, collection: str, doc_id: str, callback: DocumentCallback
    ) -> Subscription:
        def on_snapshot(snapshots: list[Any], changes: list[Any], read_time: Any) -> None:
            if not snapshots:
                callback(None)
                return
            for snapshot in snapshots:
                callback(snapshot.to_dict() if snapshot.exists else None)

        watch = self._doc(collection, doc_id).on_snapshot(on_snapshot)
        logger.debug(f"Watching {collection}/{doc_id}")
        return Subscription(watch.unsubscribe)

    def watch_query(
        self, collection: str, field: str, value: Any, callback: QueryCallback
    ) -> Subscription:
        query = self._client.collection(collection).where(
            filter=FieldFilter(field, "==", value)
        )

        def on_snapshot(snapshots: list[Any], changes: list[Any], read_time: Any) -> None:
            callback([(s.id, s.to_dict() or {}) for s in snapshots])

        watch = query.on_snapshot(on_snapshot)
        logger.debug(f"Watching {collection} where {field} == {value}")
        return Subscription(watch.unsubscribe)
