"""Profile photo upload to the S3-compatible media host."""

import logging
import uuid
from pathlib import Path

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from blog_accounts.config import get_settings
from blog_accounts.errors import UpstreamFailure, ValidationError

logger = logging.getLogger("blog_accounts")

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}
ALLOWED_MIME_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}


class MediaService:
    """Stores uploaded files on the media host and hands back their public URL."""

    def __init__(self) -> None:
        self._client = None

    def _get_client(self):
        """Lazy-create the S3 client."""
        if self._client is None:
            settings = get_settings()
            self._client = boto3.client(
                "s3",
                endpoint_url=settings.MEDIA_ENDPOINT_URL or None,
                aws_access_key_id=settings.MEDIA_ACCESS_KEY or None,
                aws_secret_access_key=settings.MEDIA_SECRET_KEY or None,
                region_name=settings.MEDIA_REGION,
            )
        return self._client

    def validate_upload_metadata(self, filename: str, content_type: str | None) -> str | None:
        """Validate photo metadata (extension + MIME). Returns error message or None if valid."""
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            return f"Unsupported file type '{ext}'. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}"

        if content_type and content_type not in ALLOWED_MIME_TYPES:
            return f"Invalid content type '{content_type}'. Must be an image."

        return None

    async def read_upload(self, upload: UploadFile) -> bytes:
        """Read the upload in chunks, enforcing the size limit."""
        settings = get_settings()
        max_bytes = settings.MAX_PHOTO_SIZE_MB * 1024 * 1024
        chunk_size = 1024 * 64
        chunks = []
        size = 0
        while True:
            chunk = await upload.read(chunk_size)
            if not chunk:
                break
            size += len(chunk)
            if size > max_bytes:
                raise ValidationError(f"File too large. Maximum: {settings.MAX_PHOTO_SIZE_MB}MB")
            chunks.append(chunk)
        if not size:
            raise ValidationError("Uploaded file is empty")
        return b"".join(chunks)

    def public_url(self, key: str) -> str:
        settings = get_settings()
        if settings.MEDIA_PUBLIC_URL:
            return f"{settings.MEDIA_PUBLIC_URL.rstrip('/')}/{key}"
        if settings.MEDIA_ENDPOINT_URL:
            return f"{settings.MEDIA_ENDPOINT_URL.rstrip('/')}/{settings.MEDIA_BUCKET}/{key}"
        return f"https://{settings.MEDIA_BUCKET}.s3.{settings.MEDIA_REGION}.amazonaws.com/{key}"

    async def upload_profile_photo(self, user_id: int, upload: UploadFile) -> str:
        """Upload a profile photo and return its persistent URL.

        Raises ValidationError for a bad file and UpstreamFailure if the media host
        rejects the upload.
        """
        error = self.validate_upload_metadata(upload.filename or "", upload.content_type)
        if error:
            raise ValidationError(error)

        content = await self.read_upload(upload)
        ext = Path(upload.filename or "photo.bin").suffix.lower()
        key = f"profile-photos/{user_id}/{uuid.uuid4()}{ext}"
        bucket = get_settings().MEDIA_BUCKET

        try:
            await run_in_threadpool(
                self._get_client().put_object,
                Bucket=bucket,
                Key=key,
                Body=content,
                ContentType=upload.content_type or "application/octet-stream",
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("Profile photo upload to %s/%s failed: %s", bucket, key, e)
            raise UpstreamFailure("Failed to upload profile photo") from e

        return self.public_url(key)


_media_service: MediaService | None = None


def get_media_service() -> MediaService:
    """Get singleton media service instance."""
    global _media_service
    if _media_service is None:
        _media_service = MediaService()
    return _media_service
