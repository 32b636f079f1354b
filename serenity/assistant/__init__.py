"""Conversational assistant for stress-reduction advice.

Responsibilities:
    - Build the role-tagged message list with the user's stress level
    - Call the completion endpoint with bounded retry on rate limiting
    - Extract the first choice's text for display
"""

from serenity.assistant.client import (
    FALLBACK_MESSAGE,
    AssistantClient,
    build_messages,
    extract_text,
)

__all__ = ["FALLBACK_MESSAGE", "AssistantClient", "build_messages", "extract_text"]
