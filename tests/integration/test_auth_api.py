"""Integration tests for the auth endpoints and bearer token resolution."""

from collections.abc import AsyncGenerator

import pytest
import pytest_check as check
from httpx import ASGITransport, AsyncClient

from serenity.api import app
from serenity.api.deps import Services, get_services
from serenity.models.schemas import SessionResponse
from tests.fakes import FakeIdentity, FakeStore


class TestAuthEndpoints:
    """Integration tests for /auth/*."""

    async def test_login_returns_session(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/auth/login", json={"email": "ana@example.com", "password": "secreto123"}
        )

        assert response.status_code == 200
        session = SessionResponse.model_validate(response.json())
        check.equal(session.uid, "user-1")
        check.equal(session.id_token, "token-user-1")

    async def test_login_wrong_password(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/auth/login", json={"email": "ana@example.com", "password": "nope"}
        )

        check.equal(response.status_code, 401)
        check.equal(response.json()["detail"], "INVALID_LOGIN_CREDENTIALS")

    async def test_login_blank_fields(self, async_client: AsyncClient) -> None:
        response = await async_client.post("/auth/login", json={"email": "", "password": ""})

        check.equal(response.status_code, 400)
        check.equal(response.json()["detail"], "Correo y contraseña son obligatorios")

    async def test_register_creates_profile(
        self, async_client: AsyncClient, store: FakeStore
    ) -> None:
        response = await async_client.post(
            "/auth/register",
            json={
                "name": "Luis",
                "email": "luis@example.com",
                "password": "secreto1",
                "confirm_password": "secreto1",
            },
        )

        assert response.status_code == 201
        uid = response.json()["uid"]
        check.equal(store.collections["users"][uid]["stressLevels"], [50] * 7)
        check.equal(store.collections["users"][uid]["name"], "Luis")

    async def test_register_password_mismatch(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/auth/register",
            json={
                "name": "Luis",
                "email": "luis@example.com",
                "password": "secreto1",
                "confirm_password": "secreto2",
            },
        )

        check.equal(response.status_code, 400)
        check.equal(response.json()["detail"], "Las contraseñas no coinciden.")

    async def test_register_then_login(self, async_client: AsyncClient) -> None:
        """A newly registered account can sign in and use its token."""
        await async_client.post(
            "/auth/register",
            json={
                "name": "Luis",
                "email": "luis@example.com",
                "password": "secreto1",
                "confirm_password": "secreto1",
            },
        )
        login = await async_client.post(
            "/auth/login", json={"email": "luis@example.com", "password": "secreto1"}
        )
        token = login.json()["id_token"]

        profile = await async_client.get(
            "/profile", headers={"Authorization": f"Bearer {token}"}
        )

        check.equal(profile.status_code, 200)
        check.equal(profile.json()["name"], "Luis")

    async def test_password_reset(
        self, async_client: AsyncClient, identity: FakeIdentity
    ) -> None:
        response = await async_client.post(
            "/auth/password-reset", json={"email": "ana@example.com"}
        )

        check.equal(response.status_code, 200)
        check.equal(response.json(), {"status": "sent"})
        check.equal(identity.reset_requests, ["ana@example.com"])

    async def test_password_reset_unknown_email(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/auth/password-reset", json={"email": "nadie@example.com"}
        )

        check.equal(response.status_code, 401)
        check.equal(response.json()["detail"], "EMAIL_NOT_FOUND")


class TestBearerToken:
    """Protected routes require a valid bearer token."""

    @pytest.fixture
    async def anonymous_client(self, services: Services) -> AsyncGenerator[AsyncClient]:
        app.dependency_overrides[get_services] = lambda: services
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
        app.dependency_overrides.clear()

    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("GET", "/profile"),
            ("GET", "/profile/stream"),
            ("GET", "/stress"),
            ("GET", "/events"),
            ("GET", "/events/stream"),
            ("GET", "/weather"),
            ("POST", "/assistant"),
        ],
    )
    async def test_missing_token_is_401(
        self, anonymous_client: AsyncClient, method: str, path: str
    ) -> None:
        response = await anonymous_client.request(method, path)

        check.equal(response.status_code, 401)
        check.equal(response.headers.get("www-authenticate"), "Bearer")

    async def test_forged_token_is_401(self, anonymous_client: AsyncClient) -> None:
        response = await anonymous_client.get(
            "/profile", headers={"Authorization": "Bearer forged"}
        )

        check.equal(response.status_code, 401)
        check.equal(response.json()["detail"], "INVALID_ID_TOKEN")

    async def test_health_needs_no_token(self, anonymous_client: AsyncClient) -> None:
        response = await anonymous_client.get("/health")

        check.equal(response.status_code, 200)
        check.equal(response.json(), {"status": "healthy", "service": "serenity"})

    async def test_recommendations_need_no_token(self, anonymous_client: AsyncClient) -> None:
        response = await anonymous_client.get("/recommendations")

        check.equal(response.status_code, 200)
        check.equal(len(response.json()), 5)
