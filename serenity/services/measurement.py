"""Simulated ECG measurement.

There is no sensor: the waveform is a sine plus noise for the chart, and the
"measured" stress level is drawn uniformly at random when the fixed
measurement window ends.
"""

import asyncio
import logging
import math
import random
import time
from collections.abc import AsyncGenerator, Awaitable, Callable

from serenity.auth.session import Session
from serenity.models.schemas import MeasurementFrame
from serenity.services.stress import StressService, check_day

logger = logging.getLogger(__name__)

FRAME_POINTS = 150
FRAME_INTERVAL = 0.3
MEASUREMENT_DURATION = 15.0
WAVE_PERIOD = 0.8

NO_DAY_SELECTED = "Selecciona un día para la medición"


class MeasurementError(ValueError):
    """Raised when a measurement cannot start."""


def simulate_ecg(num_points: int = FRAME_POINTS, rng: random.Random | None = None) -> list[float]:
    """Resting waveform shown before a measurement starts."""
    rng = rng or random.Random()
    return [math.sin(i * 0.2) * 20 + rng.uniform(-2.0, 2.0) for i in range(num_points)]


def simulate_fancy_ecg(
    num_points: int = FRAME_POINTS,
    wave_offset: float = 0.0,
    rng: random.Random | None = None,
) -> list[float]:
    """Waveform for one frame of a running measurement.

    A second, phase-shifted sine rides on the base wave so consecutive frames
    appear to move.
    """
    rng = rng or random.Random()
    return [
        math.sin(i * 0.2) * 20 + rng.uniform(-2.0, 2.0) + math.sin(i * 0.3 + wave_offset) * 5
        for i in range(num_points)
    ]


def wave_offset_at(elapsed: float, period: float = WAVE_PERIOD) -> float:
    """Phase in [0, 2π) of a wave that restarts every period seconds."""
    return (elapsed % period) / period * 2 * math.pi


async def measurement_frames(
    *,
    duration: float = MEASUREMENT_DURATION,
    interval: float = FRAME_INTERVAL,
    num_points: int = FRAME_POINTS,
    rng: random.Random | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> AsyncGenerator[MeasurementFrame]:
    """Yield a frame every interval for duration seconds, then the reading.

    The final frame has done=True and carries the new level (0..100).
    Cancelling the consuming task stops the loop at the next sleep.
    """
    rng = rng or random.Random()
    start = clock()
    while (elapsed := clock() - start) < duration:
        yield MeasurementFrame(
            points=simulate_fancy_ecg(num_points, wave_offset_at(elapsed), rng)
        )
        await sleep(interval)
    yield MeasurementFrame(done=True, level=rng.randint(0, 100))


class MeasurementService:
    """Runs a measurement for a selected weekday and stores the result."""

    def __init__(
        self,
        stress: StressService,
        frames: Callable[[], AsyncGenerator[MeasurementFrame]] = measurement_frames,
    ) -> None:
        self._stress = stress
        self._frames = frames

    def measure(
        self, session: Session, day_index: int | None
    ) -> AsyncGenerator[MeasurementFrame]:
        """Validate the weekday and return the frame stream.

        The final frame's level is persisted before it is yielded.

        Raises:
            MeasurementError: If no weekday was selected.
            InvalidDayError: If the weekday index is out of range.
        """
        if day_index is None:
            raise MeasurementError(NO_DAY_SELECTED)
        check_day(day_index)
        return self._run(session, day_index)

    async def _run(self, session: Session, day_index: int) -> AsyncGenerator[MeasurementFrame]:
        logger.info(f"Starting measurement for {session.uid}, day {day_index}")
        async for frame in self._frames():
            if frame.done and frame.level is not None:
                await self._stress.record_level(session, day_index, frame.level)
            yield frame
