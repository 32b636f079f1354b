"""Storage interfaces shared by the Firebase adapters and the services.

The document database is schemaless and queried by field equality. Live
updates are delivered through explicit subscriptions: every watch returns a
Subscription handle that the caller cancels when its screen (or HTTP stream)
goes away.
"""

import asyncio
import logging
import threading
from collections.abc import Callable
from typing import Any, Protocol

logger = logging.getLogger(__name__)

Document = dict[str, Any]
DocumentCallback = Callable[[Document | None], None]
QueryCallback = Callable[[list[tuple[str, Document]]], None]


class DocumentNotFoundError(LookupError):
    """Raised when updating a document that does not exist."""

    def __init__(self, collection: str, doc_id: str) -> None:
        super().__init__(f"Document {collection}/{doc_id} does not exist")
        self.collection = collection
        self.doc_id = doc_id


class Subscription:
    """Cancellation handle for a live document or query watch.

    cancel() is idempotent and safe to call from any thread. The handle can
    be used as a context manager to tie the watch to a block.
    """

    def __init__(self, unsubscribe: Callable[[], None]) -> None:
        self._unsubscribe = unsubscribe
        self._lock = threading.Lock()
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        with self._lock:
            if not self._active:
                return
            self._active = False
        self._unsubscribe()

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()


class DocumentStore(Protocol):
    """Remote document database operations used by the services."""

    async def get(self, collection: str, doc_id: str) -> Document | None: ...

    async def set(
        self, collection: str, doc_id: str, data: Document, merge: bool = False
    ) -> None: ...

    async def update(self, collection: str, doc_id: str, data: Document) -> None: ...

    async def delete(self, collection: str, doc_id: str) -> None: ...

    async def where_equal(
        self, collection: str, field: str, value: Any
    ) -> list[tuple[str, Document]]: ...

    def new_id(self, collection: str) -> str: ...

    def watch_document(
        self, collection: str, doc_id: str, callback: DocumentCallback
    ) -> Subscription: ...

    def watch_query(
        self, collection: str, field: str, value: Any, callback: QueryCallback
    ) -> Subscription: ...


class ObjectStorage(Protocol):
    """Remote file storage used for profile images."""

    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Store bytes at path and return a download URL."""
        ...


def queue_callback(
    queue: "asyncio.Queue[Any]", loop: asyncio.AbstractEventLoop
) -> Callable[[Any], None]:
    """Build a watch callback that hands snapshots to an asyncio queue.

    Watch callbacks may fire on a background thread of the database client,
    so delivery goes through the loop's thread-safe scheduler.
    """

    def deliver(snapshot: Any) -> None:
        try:
            loop.call_soon_threadsafe(queue.put_nowait, snapshot)
        except RuntimeError:
            logger.debug("Dropping snapshot for a closed event loop")

    return deliver
