"""Pydantic models for documents, API requests and responses.

Provides type safety, validation, and automatic OpenAPI documentation.
Remote documents are schemaless, so the document models default every
missing or malformed field instead of rejecting it.

Models:
    - UserProfile: the users/{uid} document
    - Event: a reminder in the events collection
    - ChatCompletionRequest/Response: completion endpoint payloads
    - WeatherResponse/WeatherReport: weather payload and display fields
"""

from serenity.models.schemas import (
    DAYS_IN_WEEK,
    NEUTRAL_STRESS,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    Event,
    EventDraft,
    EventGroup,
    ProfileUpdate,
    StressBand,
    UserProfile,
    WeatherReport,
    WeatherResponse,
)

__all__ = [
    "DAYS_IN_WEEK",
    "NEUTRAL_STRESS",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "ChatMessage",
    "Event",
    "EventDraft",
    "EventGroup",
    "ProfileUpdate",
    "StressBand",
    "UserProfile",
    "WeatherReport",
    "WeatherResponse",
]
