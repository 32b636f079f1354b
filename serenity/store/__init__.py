"""Remote storage adapters.

Responsibilities:
    - DocumentStore protocol with explicit watch subscriptions
    - Firestore implementation of the document store
    - Cloud Storage implementation of object storage

Services depend on the protocols only, so tests can swap in fakes.
"""

from serenity.store.base import (
    Document,
    DocumentNotFoundError,
    DocumentStore,
    ObjectStorage,
    Subscription,
    queue_callback,
)

__all__ = [
    "Document",
    "DocumentNotFoundError",
    "DocumentStore",
    "ObjectStorage",
    "Subscription",
    "queue_callback",
]
