"""Service container and request dependencies.

The container is created once per process (singleton, like any expensive
client) and handed to routes through FastAPI dependencies, so tests can
override it with fakes.
"""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from serenity.assistant.client import AssistantClient
from serenity.auth.identity import AuthError, IdentityClient
from serenity.auth.session import AuthService, Session
from serenity.services.events import EventService
from serenity.services.measurement import MeasurementService
from serenity.services.profile import ProfileService
from serenity.services.stress import StressService
from serenity.store.base import DocumentStore, ObjectStorage
from serenity.weather.client import WeatherClient

logger = logging.getLogger(__name__)


class Services:
    """Everything a request handler needs, wired around one store."""

    def __init__(
        self,
        store: DocumentStore,
        storage: ObjectStorage,
        identity: IdentityClient,
        assistant: AssistantClient,
        weather: WeatherClient,
    ) -> None:
        self.store = store
        self.identity = identity
        self.auth = AuthService(identity, store)
        self.profile = ProfileService(store, storage)
        self.stress = StressService(store)
        self.measurement = MeasurementService(self.stress)
        self.events = EventService(store)
        self.assistant = assistant
        self.weather = weather

    async def aclose(self) -> None:
        await self.identity.aclose()
        await self.assistant.aclose()
        await self.weather.aclose()


def build_services() -> Services:
    """Create the production wiring: Firestore, Cloud Storage and httpx clients.

    Raises:
        ValueError: If a required API key is missing from the environment.
    """
    from serenity.config import get_firebase_config
    from serenity.store.firestore import FirestoreStore
    from serenity.store.storage import CloudStorage

    firebase = get_firebase_config()
    return Services(
        store=FirestoreStore(project=firebase.project_id),
        storage=CloudStorage(firebase.storage_bucket),
        identity=IdentityClient(firebase),
        assistant=AssistantClient(),
        weather=WeatherClient(),
    )


# Module-level singleton instance
_services: Services | None = None


def get_services() -> Services:
    """Get or create the global service container."""
    global _services
    if _services is None:
        _services = build_services()
        logger.info("Service container initialised")
    return _services


async def close_services() -> None:
    global _services
    if _services is not None:
        await _services.aclose()
        _services = None


bearer_scheme = HTTPBearer(auto_error=False)


async def get_session(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    services: Annotated[Services, Depends(get_services)],
) -> Session:
    """Resolve the bearer token into an explicit Session.

    Raises:
        HTTPException: 401 if the token is missing or rejected.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return await services.auth.resolve(credentials.credentials)
    except AuthError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


ServicesDep = Annotated[Services, Depends(get_services)]
SessionDep = Annotated[Session, Depends(get_session)]
