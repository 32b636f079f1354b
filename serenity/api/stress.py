"""Weekly stress endpoints and the simulated measurement stream."""

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import StreamingResponse

from serenity.api.deps import ServicesDep, SessionDep
from serenity.api.streaming import sse_event, sse_response
from serenity.models.schemas import MeasurementFrame, StressSummary, StressUpdate
from serenity.services.measurement import MeasurementError
from serenity.services.stress import InvalidDayError, summarize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stress", tags=["stress"])


@router.get("", response_model=StressSummary)
async def get_stress(
    session: SessionDep, services: ServicesDep, day: int | None = None
) -> StressSummary:
    """Week summary; pass ?day= to include the trend for that weekday."""
    levels = await services.stress.get_levels(session)
    try:
        return summarize(levels, day)
    except InvalidDayError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.put("/{day}", response_model=StressSummary)
async def record_stress(
    day: int, update: StressUpdate, session: SessionDep, services: ServicesDep
) -> StressSummary:
    try:
        levels = await services.stress.record_level(session, day, update.level)
    except InvalidDayError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return summarize(levels, day)


@router.post("/{day}/measure")
async def measure(day: int, session: SessionDep, services: ServicesDep) -> StreamingResponse:
    """Run a simulated measurement for a weekday.

    Streams waveform frames every 300ms for 15s; the final event carries the
    new level, which has already been stored.
    """
    try:
        frames = services.measurement.measure(session, day)
    except (MeasurementError, InvalidDayError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    async def event_generator() -> AsyncGenerator[str]:
        try:
            async for frame in frames:
                yield sse_event(frame)
        except Exception as e:
            logger.error(f"Measurement failed for {session.uid}: {e}")
            yield sse_event(MeasurementFrame(done=True, error="Error al guardar la medición"))

    return sse_response(event_generator())
