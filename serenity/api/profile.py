"""Profile endpoints: details, photo upload and the live profile stream."""

import logging

from fastapi import APIRouter, HTTPException, UploadFile, status
from fastapi.responses import StreamingResponse

from serenity.api.deps import ServicesDep, SessionDep
from serenity.api.streaming import sse_response, watch_stream
from serenity.models.schemas import (
    PhotoUploadResponse,
    ProfileSnapshot,
    ProfileUpdate,
    ProfileView,
    UserProfile,
)
from serenity.services.profile import PhotoTooLargeError, PhotoValidationError, to_view
from serenity.services.stress import summarize
from serenity.store.base import DocumentNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


def profile_snapshot(data: dict | None) -> ProfileSnapshot:
    profile = UserProfile.from_document(data)
    return ProfileSnapshot(profile=to_view(profile), stress=summarize(profile.stressLevels))


@router.get("", response_model=ProfileView)
async def get_profile(session: SessionDep, services: ServicesDep) -> ProfileView:
    return to_view(await services.profile.load(session))


@router.put("", response_model=ProfileView)
async def save_profile(
    update: ProfileUpdate, session: SessionDep, services: ServicesDep
) -> ProfileView:
    """Save gender, age, weight and height."""
    profile = await services.profile.save_details(session, update)
    return to_view(profile)


@router.post("/photo", response_model=PhotoUploadResponse)
async def upload_photo(
    file: UploadFile, session: SessionDep, services: ServicesDep
) -> PhotoUploadResponse:
    """Upload a profile picture and store its URL in the profile.

    Raises:
        400: Empty or non-image file.
        404: The user has no profile document.
        413: File exceeds 5MB limit.
        502: Storage upload failed.
    """
    content = await file.read()
    try:
        url = await services.profile.upload_photo(session, content, file.content_type)
    except PhotoTooLargeError as e:
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE, detail=str(e)
        ) from e
    except PhotoValidationError as e:
        logger.warning(f"Rejected profile photo for {session.uid}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except DocumentNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Perfil no encontrado"
        ) from e
    except Exception as e:
        logger.error(f"Failed to upload profile photo: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Error al subir imagen",
        ) from e
    return PhotoUploadResponse(photo_url=url, success=True)


@router.get("/stream")
async def stream_profile(session: SessionDep, services: ServicesDep) -> StreamingResponse:
    """Live profile document as Server-Sent Events."""
    return sse_response(
        watch_stream(
            lambda callback: services.profile.watch(session, callback),
            profile_snapshot,
        )
    )
