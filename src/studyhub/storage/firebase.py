"""Hosted blob store on the project's Cloud Storage bucket.

Download URLs use the Firebase token scheme so the mobile clients can open
them without credentials.
"""

from __future__ import annotations

import uuid
from urllib.parse import quote

import structlog
from google.api_core import exceptions as google_exceptions
from google.cloud import storage

from studyhub.storage.blobs import UploadError

logger = structlog.get_logger(__name__)

DOWNLOAD_URL_TEMPLATE = (
    "https://firebasestorage.googleapis.com/v0/b/{bucket}/o/{path}?alt=media&token={token}"
)
TOKEN_METADATA_KEY = "firebaseStorageDownloadTokens"


class FirebaseBlobStore:
    """Blob store over a Cloud Storage bucket."""

    def __init__(
        self,
        bucket_name: str,
        project_id: str | None = None,
        credentials_path: str | None = None,
        client: storage.Client | None = None,
    ):
        if client is None:
            if credentials_path:
                client = storage.Client.from_service_account_json(
                    credentials_path, project=project_id
                )
            else:
                client = storage.Client(project=project_id)

        self.bucket_name = bucket_name
        self.bucket = client.bucket(bucket_name)

    def download_url(self, path: str, token: str) -> str:
        """Token-based download URL for a stored object."""
        return DOWNLOAD_URL_TEMPLATE.format(
            bucket=self.bucket_name,
            path=quote(path, safe=""),
            token=token,
        )

    def upload_blob(self, data: bytes, path: str, content_type: str = "application/pdf") -> str:
        """Upload bytes to the bucket and return the download URL."""
        token = str(uuid.uuid4())
        blob = self.bucket.blob(path)
        blob.metadata = {TOKEN_METADATA_KEY: token}

        try:
            blob.upload_from_string(data, content_type=content_type)
        except google_exceptions.GoogleAPICallError as e:
            raise UploadError(path, str(e)) from e

        url = self.download_url(path, token)
        logger.info("firebase_storage.uploaded", path=path, size=len(data))
        return url

    def exists(self, path: str) -> bool:
        """Whether an object is stored at path."""
        try:
            return self.bucket.blob(path).exists()
        except google_exceptions.GoogleAPICallError as e:
            raise UploadError(path, str(e)) from e

    def delete_blob(self, path: str) -> bool:
        """Delete an object. Returns False if it was not there."""
        try:
            self.bucket.blob(path).delete()
        except google_exceptions.NotFound:
            return False
        except google_exceptions.GoogleAPICallError as e:
            raise UploadError(path, str(e)) from e

        logger.info("firebase_storage.deleted", path=path)
        return True
