"""httpx client used by the screens to talk to the Serenity API."""

import json
import os
from collections.abc import Callable
from typing import Any

import httpx

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")


class ApiError(Exception):
    """Failed API call; the message is what the toast shows."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _detail(response: httpx.Response) -> str:
    try:
        detail = response.json().get("detail")
    except ValueError:
        detail = None
    if isinstance(detail, list):
        # FastAPI validation errors
        return "; ".join(str(item.get("msg", item)) for item in detail)
    return str(detail) if detail else f"HTTP {response.status_code}"


class ApiClient:
    """Calls one API endpoint per method, carrying the session token."""

    def __init__(self, token: str | None = None, base_url: str = API_BASE_URL) -> None:
        self._token = token
        self._base_url = base_url

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        headers = dict(extra or {})
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        async with httpx.AsyncClient(base_url=self._base_url, timeout=120.0) as client:
            try:
                response = await client.request(method, path, headers=self._headers(), **kwargs)
            except httpx.RequestError as e:
                raise ApiError(f"Connection failed: {e}") from e
        if response.is_error:
            raise ApiError(_detail(response), response.status_code)
        if response.status_code == httpx.codes.NO_CONTENT:
            return None
        return response.json()

    async def follow(
        self,
        path: str,
        on_event: Callable[[dict[str, Any]], None],
        method: str = "GET",
    ) -> None:
        """Consume an SSE endpoint, calling on_event for each data message.

        Returns when the server closes the stream; cancel the awaiting task to
        stop following.
        """
        async with httpx.AsyncClient(base_url=self._base_url, timeout=None) as client:
            try:
                async with client.stream(
                    method,
                    path,
                    headers=self._headers({"Accept": "text/event-stream"}),
                ) as response:
                    if response.is_error:
                        await response.aread()
                        raise ApiError(_detail(response), response.status_code)
                    async for line in response.aiter_lines():
                        if not line.startswith("data: "):
                            continue
                        on_event(json.loads(line[6:]))
            except httpx.RequestError as e:
                raise ApiError(f"Connection failed: {e}") from e

    # Auth

    async def login(self, email: str, password: str) -> dict[str, Any]:
        return await self.request("POST", "/auth/login", json={"email": email, "password": password})

    async def register(
        self, name: str, email: str, password: str, confirm_password: str
    ) -> dict[str, Any]:
        return await self.request(
            "POST",
            "/auth/register",
            json={
                "name": name,
                "email": email,
                "password": password,
                "confirm_password": confirm_password,
            },
        )

    async def password_reset(self, email: str) -> None:
        await self.request("POST", "/auth/password-reset", json={"email": email})

    # Profile

    async def save_profile(self, gender: str, age: str, weight: str, height: str) -> dict[str, Any]:
        return await self.request(
            "PUT",
            "/profile",
            json={"gender": gender, "age": age, "weight": weight, "height": height},
        )

    async def upload_photo(self, filename: str, data: bytes, content_type: str) -> dict[str, Any]:
        return await self.request(
            "POST", "/profile/photo", files={"file": (filename, data, content_type)}
        )

    # Stress

    async def stress(self, day: int | None = None) -> dict[str, Any]:
        params = {"day": day} if day is not None else None
        return await self.request("GET", "/stress", params=params)

    # Events

    async def save_event(self, event_id: str | None, title: str, date: str) -> dict[str, Any]:
        payload = {"title": title, "date": date}
        if event_id is None:
            return await self.request("POST", "/events", json=payload)
        return await self.request("PUT", f"/events/{event_id}", json=payload)

    async def delete_event(self, event_id: str) -> None:
        await self.request("DELETE", f"/events/{event_id}")

    # Assistant, weather, recommendations

    async def ask(self, message: str) -> dict[str, Any]:
        return await self.request("POST", "/assistant", json={"message": message})

    async def weather(self) -> dict[str, Any]:
        return await self.request("GET", "/weather")

    async def recommendations(self) -> list[dict[str, Any]]:
        return await self.request("GET", "/recommendations")
