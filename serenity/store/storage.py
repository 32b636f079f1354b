"""Cloud Storage adapter for profile images.

Objects are uploaded with a Firebase download token in their metadata, so the
returned URL is the same kind of tokenised download URL the Firebase SDKs
hand out.
"""

import asyncio
import logging
import uuid
from urllib.parse import quote

from google.cloud import storage

logger = logging.getLogger(__name__)

DOWNLOAD_URL = "https://firebasestorage.googleapis.com/v0/b/{bucket}/o/{path}?alt=media&token={token}"


def download_url(bucket: str, path: str, token: str) -> str:
    return DOWNLOAD_URL.format(bucket=bucket, path=quote(path, safe=""), token=token)


class CloudStorage:
    """ObjectStorage implementation over a Cloud Storage bucket."""

    def __init__(self, bucket_name: str, client: storage.Client | None = None) -> None:
        self._client = client or storage.Client()
        self._bucket = self._client.bucket(bucket_name)

    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        token = str(uuid.uuid4())
        blob = self._bucket.blob(path)
        blob.metadata = {"firebaseStorageDownloadTokens": token}
        await asyncio.to_thread(blob.upload_from_string, data, content_type=content_type)
        logger.info(f"Uploaded {len(data)} bytes to {self._bucket.name}/{path}")
        return download_url(self._bucket.name, path, token)
