"""Weekly stress levels: colour bands, summary and persistence.

The week lives in users/{uid}.stressLevels as seven ints, Monday first.
"""

import logging

from serenity.auth.session import USERS_COLLECTION, Session
from serenity.models.schemas import (
    DAYS_IN_WEEK,
    NEUTRAL_STRESS,
    StressBand,
    StressDay,
    StressSummary,
    UserProfile,
    normalize_stress_levels,
)
from serenity.store.base import DocumentStore

logger = logging.getLogger(__name__)

DAY_LABELS = ["Lun", "Mar", "Mié", "Jue", "Vie", "Sáb", "Dom"]


class InvalidDayError(ValueError):
    """Raised for a weekday index outside 0..6."""


def check_day(day_index: int) -> int:
    if not 0 <= day_index < DAYS_IN_WEEK:
        raise InvalidDayError(f"Day index must be between 0 and {DAYS_IN_WEEK - 1}")
    return day_index


def bar_band(value: int) -> StressBand:
    """Colour band of a stress bar. Exactly neutral is its own band."""
    if value == NEUTRAL_STRESS:
        return StressBand.NEUTRAL
    if value < 25:
        return StressBand.LOW
    if value < 50:
        return StressBand.MILD
    if value < 75:
        return StressBand.ELEVATED
    return StressBand.HIGH


def average(levels: list[int]) -> int:
    """Truncated mean of the week, neutral for an empty list."""
    if not levels:
        return NEUTRAL_STRESS
    return int(sum(levels) / len(levels))


def trend(levels: list[int], day_index: int) -> tuple[str, bool]:
    """Deviation of one day from neutral, e.g. ("Este Lun: +10%", False).

    The flag is True when the day is at or above neutral.
    """
    check_day(day_index)
    value = levels[day_index]
    diff = value - NEUTRAL_STRESS
    sign = "+" if diff >= 0 else ""
    return f"Este {DAY_LABELS[day_index]}: {sign}{diff}%", value >= NEUTRAL_STRESS


def summarize(levels: list[int], selected_day: int | None = None) -> StressSummary:
    levels = normalize_stress_levels(levels)
    summary = StressSummary(
        days=[
            StressDay(label=label, level=level, band=bar_band(level))
            for label, level in zip(DAY_LABELS, levels)
        ],
        average=average(levels),
    )
    if selected_day is not None:
        summary.trend, summary.rising = trend(levels, selected_day)
    return summary


class StressService:
    """Reads and writes the stress week of a user document."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def get_levels(self, session: Session) -> list[int]:
        data = await self._store.get(USERS_COLLECTION, session.uid)
        return UserProfile.from_document(data).stressLevels

    async def current_level(self, session: Session) -> int:
        """Average of the stored week, used as the assistant's stress level."""
        return average(await self.get_levels(session))

    async def record_level(self, session: Session, day_index: int, value: int) -> list[int]:
        """Store a reading for one weekday and write the whole week back."""
        check_day(day_index)
        levels = await self.get_levels(session)
        levels[day_index] = max(0, min(100, int(value)))
        await self._store.set(
            USERS_COLLECTION, session.uid, {"stressLevels": levels}, merge=True
        )
        logger.info(f"Stored stress {levels[day_index]} for {DAY_LABELS[day_index]} ({session.uid})")
        return levels
