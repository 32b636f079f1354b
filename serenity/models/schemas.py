import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

DAYS_IN_WEEK = 7
NEUTRAL_STRESS = 50
DATE_FORMAT = "%Y-%m-%d"


def normalize_stress_levels(value: Any) -> list[int]:
    """Coerce a stored stressLevels value into exactly seven ints in 0..100.

    Missing slots are filled with the neutral value, extra slots are dropped
    and anything that is not a number is treated as neutral.
    """
    levels: list[int] = []
    if isinstance(value, (list, tuple)):
        for item in value[:DAYS_IN_WEEK]:
            try:
                level = int(item)
            except (TypeError, ValueError):
                level = NEUTRAL_STRESS
            levels.append(max(0, min(100, level)))
    levels.extend([NEUTRAL_STRESS] * (DAYS_IN_WEEK - len(levels)))
    return levels


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


class StressBand(str, Enum):
    """Colour bands for the weekly stress bars."""

    NEUTRAL = "neutral"
    LOW = "low"
    MILD = "mild"
    ELEVATED = "elevated"
    HIGH = "high"


class UserProfile(BaseModel):
    """The users/{uid} document.

    Remote fields may be missing or of the wrong type; every field falls back
    to a blank string and the stress week to the neutral value.
    """

    name: str = ""
    email: str = ""
    gender: str = ""
    age: str = ""
    weight: str = ""
    height: str = ""
    photoUrl: str = ""
    stressLevels: list[int] = Field(
        default_factory=lambda: [NEUTRAL_STRESS] * DAYS_IN_WEEK
    )

    @field_validator(
        "name", "email", "gender", "age", "weight", "height", "photoUrl", mode="before"
    )
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("stressLevels", mode="before")
    @classmethod
    def coerce_levels(cls, v: Any) -> list[int]:
        return normalize_stress_levels(v)

    @classmethod
    def from_document(cls, data: dict[str, Any] | None) -> "UserProfile":
        known = {k: v for k, v in (data or {}).items() if k in cls.model_fields}
        return cls.model_validate(known)


class ProfileUpdate(BaseModel):
    """Editable biometric fields of the profile screen."""

    gender: str = ""
    age: str = ""
    weight: str = ""
    height: str = ""

    @field_validator("gender", "age", "weight", "height", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> str:
        return _as_text(v).strip()


class ProfileView(BaseModel):
    """Profile as displayed, with blank name and email replaced by placeholders."""

    name: str
    email: str
    gender: str
    age: str
    weight: str
    height: str
    photo_url: str


class Event(BaseModel):
    """A reminder in the events collection.

    Attributes:
        id: The document's own identifier, duplicated into the payload.
        userId: Owner uid.
        date: Day of the reminder as yyyy-MM-dd.
        title: Reminder text.
    """

    id: str = ""
    userId: str = ""
    date: str = ""
    title: str = ""

    @field_validator("id", "userId", "date", "title", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return _as_text(v)


class EventDraft(BaseModel):
    """Payload for creating or editing an event."""

    title: str
    date: datetime.date

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v


class EventGroup(BaseModel):
    """Events sharing the same date, under one header."""

    date: str
    label: str
    events: list[Event]


class ChatMessage(BaseModel):
    """A single role-tagged message sent to the completion endpoint."""

    role: str = Field(..., description="Message role: 'user', 'assistant', or 'system'")
    content: str


class ChatCompletionRequest(BaseModel):
    model: str
    messages: list[ChatMessage]
    max_tokens: int
    temperature: float


class ChatChoice(BaseModel):
    message: ChatMessage | None = None


class ChatCompletionResponse(BaseModel):
    choices: list[ChatChoice] | None = None


class AssistantRequest(BaseModel):
    """Question sent from the assistant screen."""

    message: str = Field(..., min_length=1)

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class AssistantResponse(BaseModel):
    stress_level: int
    recommendations: list[str]


class WeatherMain(BaseModel):
    temp: float


class WeatherCondition(BaseModel):
    description: str = ""
    icon: str = ""


class WeatherResponse(BaseModel):
    """Subset of the OpenWeatherMap current weather payload."""

    name: str
    main: WeatherMain
    weather: list[WeatherCondition] = Field(default_factory=list)


class WeatherReport(BaseModel):
    """Display fields for the weather card."""

    city: str
    temperature: int
    description: str
    icon: str
    icon_url: str | None = None


class StressDay(BaseModel):
    label: str
    level: int
    band: StressBand


class StressSummary(BaseModel):
    days: list[StressDay]
    average: int
    trend: str | None = None
    rising: bool | None = None


class StressUpdate(BaseModel):
    level: int = Field(..., ge=0, le=100)


class MeasurementFrame(BaseModel):
    """One SSE message of a running measurement.

    Attributes:
        points: Waveform points for this frame.
        done: Whether the measurement has finished.
        level: Resulting stress level, only on the final message.
        error: Error message if something went wrong.
    """

    points: list[float] = Field(default_factory=list)
    done: bool = False
    level: int | None = None
    error: str | None = None


class Recommendation(BaseModel):
    title: str
    link: str | None
    image_url: str


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class RegisterRequest(BaseModel):
    name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""


class PasswordResetRequest(BaseModel):
    email: str = ""


class SessionResponse(BaseModel):
    uid: str
    email: str
    id_token: str


class PhotoUploadResponse(BaseModel):
    photo_url: str
    success: bool


class AgendaView(BaseModel):
    """Calendar screen contents."""

    today: str
    first_event: str
    groups: list[EventGroup]


class ProfileSnapshot(BaseModel):
    """One SSE message of the live profile stream."""

    profile: ProfileView
    stress: StressSummary
