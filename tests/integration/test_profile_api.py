"""Integration tests for the profile endpoints and photo upload."""

import asyncio

import pytest_check as check
from httpx import AsyncClient

from serenity.api.deps import Services
from serenity.api.profile import profile_snapshot, stream_profile
from serenity.auth.session import Session
from serenity.models.schemas import ProfileSnapshot, ProfileUpdate
from serenity.services.profile import MAX_PHOTO_SIZE
from tests.fakes import FakeStorage, FakeStore


class TestProfileDetails:
    """Integration tests for GET and PUT /profile."""

    async def test_new_user_gets_placeholders(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/profile")

        assert response.status_code == 200
        profile = response.json()
        check.equal(profile["name"], "Usuario")
        check.equal(profile["email"], "correo@ejemplo.com")
        check.equal(profile["photo_url"], "")

    async def test_save_details(self, async_client: AsyncClient, store: FakeStore) -> None:
        store.collections["users"] = {"user-1": {"name": "Ana", "email": "ana@example.com"}}

        response = await async_client.put(
            "/profile", json={"gender": "F", "age": "31", "weight": "60", "height": "165"}
        )

        assert response.status_code == 200
        check.equal(response.json()["name"], "Ana")
        check.equal(response.json()["height"], "165")
        check.equal(store.collections["users"]["user-1"]["gender"], "F")

    async def test_save_twice_same_result(self, async_client: AsyncClient) -> None:
        payload = {"gender": "M", "age": "40", "weight": "80", "height": "180"}

        first = await async_client.put("/profile", json=payload)
        second = await async_client.put("/profile", json=payload)

        assert first.json() == second.json()


class TestPhotoUpload:
    """Integration tests for POST /profile/photo."""

    async def test_upload_success(
        self, async_client: AsyncClient, store: FakeStore, storage: FakeStorage
    ) -> None:
        store.collections["users"] = {"user-1": {"name": "Ana"}}

        response = await async_client.post(
            "/profile/photo", files={"file": ("me.jpg", b"\xff\xd8\xffdata", "image/jpeg")}
        )

        assert response.status_code == 200
        body = response.json()
        check.is_true(body["success"])
        check.equal(body["photo_url"], "https://storage.test/profileImages/user-1.jpg")
        check.equal(store.collections["users"]["user-1"]["photoUrl"], body["photo_url"])
        check.is_in("profileImages/user-1.jpg", storage.objects)

    async def test_reject_non_image(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/profile/photo", files={"file": ("notes.txt", b"hola", "text/plain")}
        )

        check.equal(response.status_code, 400)
        check.is_in("image", response.json()["detail"])

    async def test_reject_empty_file(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/profile/photo", files={"file": ("empty.jpg", b"", "image/jpeg")}
        )

        assert response.status_code == 400

    async def test_reject_oversized_file(self, async_client: AsyncClient) -> None:
        """File exceeding 5MB limit is rejected with 413."""
        response = await async_client.post(
            "/profile/photo",
            files={"file": ("big.jpg", b"x" * (MAX_PHOTO_SIZE + 1024), "image/jpeg")},
        )

        check.equal(response.status_code, 413)
        check.is_in("5MB", response.json()["detail"])

    async def test_missing_profile_is_404(
        self, async_client: AsyncClient, storage: FakeStorage
    ) -> None:
        response = await async_client.post(
            "/profile/photo", files={"file": ("me.jpg", b"\xff\xd8", "image/jpeg")}
        )

        check.equal(response.status_code, 404)
        check.equal(response.json()["detail"], "Perfil no encontrado")
        check.equal(storage.objects, {})

    async def test_storage_failure_is_502(
        self, async_client: AsyncClient, services: Services, store: FakeStore
    ) -> None:
        store.collections["users"] = {"user-1": {"name": "Ana"}}
        services.profile._storage = FakeStorage(fail=True)

        response = await async_client.post(
            "/profile/photo", files={"file": ("me.jpg", b"\xff\xd8", "image/jpeg")}
        )

        check.equal(response.status_code, 502)
        check.equal(response.json()["detail"], "Error al subir imagen")
        check.is_not_in("photoUrl", store.collections["users"]["user-1"])


class TestProfileSnapshot:
    """The live profile stream message."""

    def test_snapshot_of_document(self) -> None:
        snapshot = profile_snapshot(
            {"name": "Ana", "photoUrl": "https://img", "stressLevels": [80, 20, 50, 50, 50, 50, 50]}
        )

        check.equal(snapshot.profile.name, "Ana")
        check.equal(snapshot.profile.photo_url, "https://img")
        check.equal(snapshot.stress.average, 50)
        check.equal(snapshot.stress.days[0].band, "high")
        check.equal(snapshot.stress.days[1].band, "low")

    def test_snapshot_of_deleted_document(self) -> None:
        snapshot = profile_snapshot(None)

        check.equal(snapshot.profile.name, "Usuario")
        check.equal([d.level for d in snapshot.stress.days], [50] * 7)


class TestProfileStream:
    """GET /profile/stream, read frame by frame from the route's response."""

    async def test_first_frame_is_profile_snapshot(
        self, services: Services, session: Session, store: FakeStore
    ) -> None:
        store.collections["users"] = {
            "user-1": {"name": "Ana", "stressLevels": [80, 80, 80, 80, 80, 80, 80]}
        }

        response = await stream_profile(session, services)
        frame = await anext(response.body_iterator)
        await response.body_iterator.aclose()

        check.equal(response.media_type, "text/event-stream")
        assert frame.startswith("data: ") and frame.endswith("\n\n")
        snapshot = ProfileSnapshot.model_validate_json(frame.removeprefix("data: "))
        check.equal(snapshot.profile.name, "Ana")
        check.equal(snapshot.profile.email, "correo@ejemplo.com")
        check.equal(snapshot.stress.average, 80)
        check.equal(store.watcher_count, 0)

    async def test_saved_details_are_pushed(
        self, services: Services, session: Session, store: FakeStore
    ) -> None:
        response = await stream_profile(session, services)
        await anext(response.body_iterator)
        await services.profile.save_details(session, ProfileUpdate(age="31"))
        frame = await asyncio.wait_for(anext(response.body_iterator), timeout=1)
        await response.body_iterator.aclose()

        snapshot = ProfileSnapshot.model_validate_json(frame.removeprefix("data: "))
        check.equal(snapshot.profile.age, "31")
