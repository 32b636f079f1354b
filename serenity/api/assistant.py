"""Assistant, weather and recommendation endpoints."""

import logging

import httpx
from fastapi import APIRouter, HTTPException, status

from serenity.api.deps import ServicesDep, SessionDep
from serenity.models.schemas import (
    AssistantRequest,
    AssistantResponse,
    Recommendation,
    WeatherReport,
)
from serenity.services.recommendations import list_recommendations

logger = logging.getLogger(__name__)

router = APIRouter(tags=["assistant"])


def _upstream_error(e: httpx.HTTPError) -> HTTPException:
    if isinstance(e, httpx.HTTPStatusError):
        detail = f"HTTP {e.response.status_code}"
    else:
        detail = f"Connection failed: {e}"
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


@router.post("/assistant", response_model=AssistantResponse)
async def ask_assistant(
    request: AssistantRequest, session: SessionDep, services: ServicesDep
) -> AssistantResponse:
    """Ask for stress-reduction advice given the user's average weekly stress.

    Rate limiting is retried inside the client and ends in a fallback
    message; any other upstream failure is reported as 502.
    """
    stress_level = await services.stress.current_level(session)
    try:
        recommendations = await services.assistant.get_recommendations(
            request.message, stress_level
        )
    except httpx.HTTPError as e:
        logger.error(f"Assistant request failed: {e}")
        raise _upstream_error(e) from e
    return AssistantResponse(stress_level=stress_level, recommendations=recommendations)


@router.get("/weather", response_model=WeatherReport)
async def get_weather(session: SessionDep, services: ServicesDep) -> WeatherReport:
    try:
        return await services.weather.get_weather()
    except httpx.HTTPError as e:
        logger.error(f"Weather request failed: {e}")
        raise _upstream_error(e) from e


@router.get("/recommendations", response_model=list[Recommendation])
async def get_recommendations() -> list[Recommendation]:
    return list_recommendations()
