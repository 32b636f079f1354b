"""Client for the managed identity service (Identity Toolkit REST API).

Covers the four calls the app needs: sign-up, password sign-in, password
reset e-mail and ID token lookup. The same endpoints are served by the
Firebase Auth emulator, so IDENTITY_BASE_URL can point there.
"""

import logging
from typing import Any

import httpx
from pydantic import BaseModel

from serenity.config import FirebaseConfig, get_firebase_config

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Raised when the identity service rejects a request.

    The message is the service's own error text (e.g. INVALID_PASSWORD) or a
    local validation message.
    """

    def __init__(self, message: str, status_code: int = 401) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class IdentityAccount(BaseModel):
    """Account data returned by sign-up, sign-in and lookup."""

    uid: str
    email: str = ""
    id_token: str = ""


class IdentityClient:
    """Thin httpx wrapper around the accounts:* endpoints."""

    def __init__(
        self,
        config: FirebaseConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or get_firebase_config()
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=self._config.timeout)

    async def _call(self, method: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._http.post(
                f"{self._config.identity_base_url}/accounts:{method}",
                params={"key": self._config.api_key},
                json=payload,
            )
        except httpx.RequestError as e:
            logger.error(f"Identity service unreachable during {method}: {e}")
            raise AuthError(f"Servicio de autenticación no disponible: {e}", 503) from e

        if response.is_error:
            message = _error_message(response)
            logger.warning(f"Identity {method} rejected: {message}")
            status = 401 if response.status_code in (400, 401, 403) else 502
            raise AuthError(message, status)
        return response.json()

    async def sign_up(self, email: str, password: str) -> IdentityAccount:
        data = await self._call(
            "signUp", {"email": email, "password": password, "returnSecureToken": True}
        )
        return IdentityAccount(
            uid=data["localId"], email=data.get("email", email), id_token=data.get("idToken", "")
        )

    async def sign_in(self, email: str, password: str) -> IdentityAccount:
        data = await self._call(
            "signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        return IdentityAccount(
            uid=data["localId"], email=data.get("email", email), id_token=data.get("idToken", "")
        )

    async def send_password_reset(self, email: str) -> None:
        await self._call("sendOobCode", {"requestType": "PASSWORD_RESET", "email": email})
        logger.info("Password reset e-mail requested")

    async def lookup(self, id_token: str) -> IdentityAccount:
        data = await self._call("lookup", {"idToken": id_token})
        users = data.get("users") or []
        if not users:
            raise AuthError("INVALID_ID_TOKEN")
        user = users[0]
        return IdentityAccount(uid=user["localId"], email=user.get("email", ""), id_token=id_token)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return f"HTTP {response.status_code}"
