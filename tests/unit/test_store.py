"""Unit tests for subscriptions, watch delivery and the storage helpers."""

import asyncio
import threading
from unittest.mock import MagicMock

import pytest
import pytest_check as check

from serenity.api.streaming import sse_event, watch_stream
from serenity.models.schemas import StressUpdate
from serenity.store.base import Subscription, queue_callback
from serenity.store.storage import download_url
from tests.fakes import FakeStore


class TestSubscription:
    """Tests for the cancellation handle."""

    def test_cancel_is_idempotent(self) -> None:
        unsubscribe = MagicMock()
        subscription = Subscription(unsubscribe)

        subscription.cancel()
        subscription.cancel()

        check.is_false(subscription.active)
        unsubscribe.assert_called_once_with()

    def test_context_manager_cancels(self) -> None:
        unsubscribe = MagicMock()

        with Subscription(unsubscribe) as subscription:
            check.is_true(subscription.active)

        unsubscribe.assert_called_once_with()

    def test_concurrent_cancel_unsubscribes_once(self) -> None:
        unsubscribe = MagicMock()
        subscription = Subscription(unsubscribe)

        threads = [threading.Thread(target=subscription.cancel) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        unsubscribe.assert_called_once_with()


class TestQueueCallback:
    async def test_delivers_from_another_thread(self) -> None:
        """Snapshots fired on a listener thread arrive on the loop's queue."""
        queue: asyncio.Queue = asyncio.Queue()
        deliver = queue_callback(queue, asyncio.get_running_loop())

        thread = threading.Thread(target=deliver, args=({"name": "Ana"},))
        thread.start()
        thread.join()

        assert await asyncio.wait_for(queue.get(), timeout=1) == {"name": "Ana"}


class TestWatchStream:
    """Tests for relaying a watch as SSE events."""

    async def test_relays_snapshots_and_cancels_on_close(self) -> None:
        store = FakeStore()
        stream = watch_stream(
            lambda callback: store.watch_document("users", "u1", callback),
            lambda data: StressUpdate(level=(data or {}).get("level", 0)),
        )

        first = await anext(stream)
        await store.set("users", "u1", {"level": 42})
        second = await asyncio.wait_for(anext(stream), timeout=1)
        await stream.aclose()

        check.equal(first, 'data: {"level":0}\n\n')
        check.equal(second, sse_event(StressUpdate(level=42)))
        check.equal(store.watcher_count, 0)


class TestDownloadUrl:
    @pytest.mark.parametrize(
        ("path", "encoded"),
        [("profileImages/u1.jpg", "profileImages%2Fu1.jpg")],
    )
    def test_path_is_encoded(self, path: str, encoded: str) -> None:
        url = download_url("serenity.appspot.com", path, "tok")

        assert url == (
            "https://firebasestorage.googleapis.com/v0/b/serenity.appspot.com/o/"
            f"{encoded}?alt=media&token=tok"
        )
