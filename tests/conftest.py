"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - store / storage: in-memory document store and object storage
    - identity: fake identity service with one registered user
    - session: the registered user's Session
    - services: service container wired to the fakes
    - async_client: HTTPX client for API testing, authenticated as session
"""

from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from serenity.api import app
from serenity.api.deps import Services, get_services
from serenity.assistant.client import AssistantClient
from serenity.auth.identity import IdentityClient
from serenity.auth.session import Session
from serenity.config import AssistantConfig, FirebaseConfig, WeatherConfig
from serenity.weather.client import WeatherClient
from tests.fakes import FakeIdentity, FakeStorage, FakeStore

USER_EMAIL = "ana@example.com"
USER_PASSWORD = "secreto123"
USER_UID = "user-1"

WEATHER_PAYLOAD = {
    "name": "Ciudad Juárez",
    "main": {"temp": 23.7},
    "weather": [{"description": "cielo claro", "icon": "01d"}],
}


def completion_payload(content: str) -> dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def firebase_config() -> FirebaseConfig:
    return FirebaseConfig(api_key="fb-test-key", project_id="serenity-test")


@pytest.fixture
def assistant_config() -> AssistantConfig:
    return AssistantConfig(api_key="sk-test-key")


@pytest.fixture
def weather_config() -> WeatherConfig:
    return WeatherConfig(api_key="weather-test-key")


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def identity() -> FakeIdentity:
    fake = FakeIdentity()
    fake.add_account(USER_EMAIL, USER_PASSWORD, USER_UID)
    return fake


@pytest.fixture
def session() -> Session:
    return Session(uid=USER_UID, email=USER_EMAIL, id_token=f"token-{USER_UID}")


@pytest.fixture
def assistant_requests() -> list[httpx.Request]:
    """Requests received by the fake completion endpoint."""
    return []


@pytest.fixture
async def services(
    store: FakeStore,
    storage: FakeStorage,
    identity: FakeIdentity,
    firebase_config: FirebaseConfig,
    assistant_config: AssistantConfig,
    weather_config: WeatherConfig,
    assistant_requests: list[httpx.Request],
) -> AsyncGenerator[Services]:
    """Service container over the fakes; remote HTTP calls hit MockTransports."""

    def completion_handler(request: httpx.Request) -> httpx.Response:
        assistant_requests.append(request)
        return httpx.Response(200, json=completion_payload("Respira profundo durante un minuto."))

    def weather_handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=WEATHER_PAYLOAD)

    async with (
        httpx.AsyncClient(transport=identity.transport()) as identity_http,
        httpx.AsyncClient(transport=httpx.MockTransport(completion_handler)) as assistant_http,
        httpx.AsyncClient(transport=httpx.MockTransport(weather_handler)) as weather_http,
    ):
        yield Services(
            store=store,
            storage=storage,
            identity=IdentityClient(firebase_config, http_client=identity_http),
            assistant=AssistantClient(assistant_config, http_client=assistant_http),
            weather=WeatherClient(weather_config, http_client=weather_http),
        )


@pytest.fixture
async def async_client(
    services: Services, session: Session
) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        AsyncClient sending the test user's bearer token.
    """
    app.dependency_overrides[get_services] = lambda: services
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"Authorization": f"Bearer {session.id_token}"},
    ) as client:
        yield client
    app.dependency_overrides.clear()
