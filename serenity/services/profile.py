"""User profile: biometric fields, live document and photo upload."""

import logging

from serenity.auth.session import USERS_COLLECTION, Session
from serenity.models.schemas import ProfileUpdate, ProfileView, UserProfile
from serenity.store.base import (
    DocumentCallback,
    DocumentNotFoundError,
    DocumentStore,
    ObjectStorage,
    Subscription,
)

logger = logging.getLogger(__name__)

MAX_PHOTO_SIZE = 5 * 1024 * 1024  # 5MB
PHOTO_PATH = "profileImages/{uid}.jpg"
DEFAULT_NAME = "Usuario"
DEFAULT_EMAIL = "correo@ejemplo.com"


class PhotoValidationError(ValueError):
    """Raised when an uploaded profile image is rejected."""


class PhotoTooLargeError(PhotoValidationError):
    """Raised when an uploaded profile image exceeds the size limit."""


def to_view(profile: UserProfile) -> ProfileView:
    return ProfileView(
        name=profile.name or DEFAULT_NAME,
        email=profile.email or DEFAULT_EMAIL,
        gender=profile.gender,
        age=profile.age,
        weight=profile.weight,
        height=profile.height,
        photo_url=profile.photoUrl,
    )


def validate_photo(data: bytes, content_type: str | None) -> None:
    """Check an image upload before it is sent to storage.

    Raises:
        PhotoValidationError: If empty, not an image, or too large.
    """
    if not data:
        raise PhotoValidationError("Empty file provided")
    if not content_type or not content_type.startswith("image/"):
        raise PhotoValidationError("Only image files are accepted")
    if len(data) > MAX_PHOTO_SIZE:
        size_mb = len(data) / (1024 * 1024)
        raise PhotoTooLargeError(f"File size ({size_mb:.1f}MB) exceeds maximum allowed (5MB)")


class ProfileService:
    """Binds the profile screen to the users/{uid} document."""

    def __init__(self, store: DocumentStore, storage: ObjectStorage) -> None:
        self._store = store
        self._storage = storage

    async def load(self, session: Session) -> UserProfile:
        data = await self._store.get(USERS_COLLECTION, session.uid)
        return UserProfile.from_document(data)

    def watch(self, session: Session, callback: DocumentCallback) -> Subscription:
        """Subscribe to live changes of the user's document."""
        return self._store.watch_document(USERS_COLLECTION, session.uid, callback)

    async def save_details(self, session: Session, update: ProfileUpdate) -> UserProfile:
        """Upsert gender, age, weight and height, leaving other fields untouched."""
        await self._store.set(
            USERS_COLLECTION, session.uid, update.model_dump(), merge=True
        )
        logger.info(f"Saved profile details for {session.uid}")
        return await self.load(session)

    async def upload_photo(
        self, session: Session, data: bytes, content_type: str | None
    ) -> str:
        """Push the picked image to storage and point photoUrl at it.

        Returns:
            The download URL written to the profile.

        Raises:
            PhotoValidationError: If the image is rejected before upload.
            DocumentNotFoundError: If the user has no profile document; nothing
                is uploaded then.
        """
        validate_photo(data, content_type)
        if await self._store.get(USERS_COLLECTION, session.uid) is None:
            raise DocumentNotFoundError(USERS_COLLECTION, session.uid)
        url = await self._storage.upload(
            PHOTO_PATH.format(uid=session.uid), data, content_type or "image/jpeg"
        )
        await self._store.update(USERS_COLLECTION, session.uid, {"photoUrl": url})
        logger.info(f"Updated profile photo for {session.uid}")
        return url
