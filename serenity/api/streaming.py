"""Server-Sent Events helpers.

Live document and query watches are exposed as SSE streams. The watch is
opened inside the generator and cancelled when the generator is closed,
which Starlette does when the client disconnects.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator, Callable
from typing import Any

from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from serenity.store.base import Subscription, queue_callback

logger = logging.getLogger(__name__)

SSE_HEADERS = {"Cache-Control": "no-cache", "X-Accel-Buffering": "no"}


def sse_event(payload: BaseModel) -> str:
    return f"data: {payload.model_dump_json()}\n\n"


def sse_response(stream: AsyncGenerator[str]) -> StreamingResponse:
    return StreamingResponse(stream, media_type="text/event-stream", headers=SSE_HEADERS)


async def watch_stream(
    subscribe: Callable[[Callable[[Any], None]], Subscription],
    render: Callable[[Any], BaseModel],
) -> AsyncGenerator[str]:
    """Relay snapshots of a watch as SSE events until the client goes away.

    Args:
        subscribe: Opens the watch with the given callback.
        render: Turns a raw snapshot into the payload model.
    """
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[Any] = asyncio.Queue()
    with subscribe(queue_callback(queue, loop)):
        while True:
            snapshot = await queue.get()
            yield sse_event(render(snapshot))
