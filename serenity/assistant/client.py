"""Conversational assistant client with bounded retry on rate limiting.

Sends a two-message exchange (a system instruction carrying the user's stress
level, then the user's question) to an OpenAI-compatible chat completions
endpoint.

Failure policy:
    - Up to ``max_attempts`` attempts (3 by default).
    - Only HTTP 429 is retried; any other failure propagates immediately.
    - Linear backoff of ``attempt * backoff_seconds`` before each retry.
    - When every attempt is rate limited, a single fallback message is
      returned instead of raising so the screen always has something to show.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

import httpx

from serenity.config import AssistantConfig, get_assistant_config
from serenity.models.schemas import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
)

logger = logging.getLogger(__name__)

COMPLETIONS_PATH = "/v1/chat/completions"
FALLBACK_MESSAGE = "No se pudo obtener respuesta de la API tras varios intentos"
EMPTY_RESPONSE_MESSAGE = "Sin respuesta"
SYSTEM_PROMPT = (
    "Eres un asistente de bienestar enfocado en reducir el estrés. "
    "El nivel de estrés actual del usuario es {stress_level}."
)

Sleep = Callable[[float], Awaitable[None]]


def build_messages(user_query: str, stress_level: int) -> list[ChatMessage]:
    """Build the system + user exchange for one question."""
    return [
        ChatMessage(role="system", content=SYSTEM_PROMPT.format(stress_level=stress_level)),
        ChatMessage(role="user", content=user_query),
    ]


def extract_text(response: ChatCompletionResponse) -> str:
    """Return the first choice's text, or a placeholder if the shape is empty."""
    if response.choices:
        message = response.choices[0].message
        if message is not None and message.content:
            return message.content
    return EMPTY_RESPONSE_MESSAGE


class AssistantClient:
    """Client for the completion endpoint.

    Owns an httpx.AsyncClient unless one is injected (tests pass a client
    backed by httpx.MockTransport). The sleep function is injectable so the
    backoff schedule can be observed without waiting.
    """

    def __init__(
        self,
        config: AssistantConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._config = config or get_assistant_config()
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=self._config.base_url,
            timeout=self._config.timeout,
        )
        self._sleep = sleep

    def build_request(self, user_query: str, stress_level: int) -> ChatCompletionRequest:
        return ChatCompletionRequest(
            model=self._config.model_name,
            messages=build_messages(user_query, stress_level),
            max_tokens=self._config.max_tokens,
            temperature=self._config.temperature,
        )

    async def create_completion(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """Send one completion request.

        Raises:
            httpx.HTTPStatusError: On any non-2xx response.
            httpx.RequestError: On transport failures.
        """
        response = await self._http.post(
            f"{self._config.base_url}{COMPLETIONS_PATH}",
            json=request.model_dump(),
            headers={
                "Authorization": f"Bearer {self._config.api_key}",
                "Content-Type": "application/json",
            },
        )
        response.raise_for_status()
        return ChatCompletionResponse.model_validate(response.json())

    async def get_recommendations(self, user_query: str, stress_level: int) -> list[str]:
        """Ask the assistant for advice, retrying only on rate limiting.

        Args:
            user_query: The user's question.
            stress_level: Current stress level embedded in the system prompt.

        Returns:
            A single-element list: the assistant's text, the empty-response
            placeholder, or the fallback message when rate limited on every
            attempt.

        Raises:
            httpx.HTTPStatusError: For any status other than 429.
            httpx.RequestError: On transport failures.
        """
        request = self.build_request(user_query, stress_level)
        max_attempts = self._config.max_attempts

        for attempt in range(1, max_attempts + 1):
            try:
                response = await self.create_completion(request)
            except httpx.HTTPStatusError as e:
                if e.response.status_code != httpx.codes.TOO_MANY_REQUESTS:
                    raise
                if attempt == max_attempts:
                    break
                delay = attempt * self._config.backoff_seconds
                logger.warning(
                    f"Assistant rate limited (attempt {attempt}/{max_attempts}), "
                    f"retrying in {delay:.1f}s"
                )
                await self._sleep(delay)
                continue
            return [extract_text(response)]

        logger.error(f"Assistant still rate limited after {max_attempts} attempts")
        return [FALLBACK_MESSAGE]

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()
