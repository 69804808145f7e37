"""S3-compatible object storage for message attachments."""

import asyncio
import uuid
from typing import Optional, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from operand_demos.core.config import Settings
from operand_demos.core.exceptions import StorageError
from operand_demos.core.logging import setup_logger

logger = setup_logger(__name__)

ATTACHMENT_PREFIX = "imessage"


class StorageServiceProtocol(Protocol):
    """Protocol for attachment storage."""

    def build_object_path(self, category: str) -> str: ...

    async def store_file(self, path: str, data: bytes) -> str: ...


class S3StorageService:
    """Service for storing attachments in a public-read S3 bucket."""

    def __init__(self, settings: Settings):
        """Initialize storage service from static credentials in settings."""
        self.key = settings.S3_KEY
        self.secret = settings.S3_SECRET
        self.endpoint = settings.S3_ENDPOINT.rstrip("/")
        self.region_name = settings.S3_REGION
        self.bucket = settings.S3_BUCKET
        self._client = None

    @property
    def client(self):
        """Get or create S3 client."""
        if self._client is None:
            self._client = boto3.client(
                "s3",
                aws_access_key_id=self.key,
                aws_secret_access_key=self.secret,
                endpoint_url=self.endpoint,
                region_name=self.region_name,
            )
        return self._client

    def build_object_path(self, category: str) -> str:
        """
        Build a random object path for an attachment.

        Args:
            category: Content category, e.g. ``image`` or ``pdf``

        Returns:
            Key in the form ``imessage/<category>/<uuid4>``
        """
        return f"{ATTACHMENT_PREFIX}/{category}/{uuid.uuid4()}"

    def public_url(self, path: str) -> str:
        return f"{self.endpoint}/{self.bucket}/{path.lstrip('/')}"

    async def store_file(self, path: str, data: bytes) -> str:
        """
        Upload raw bytes with a public-read ACL.

        Args:
            path: Object key inside the bucket
            data: File contents

        Returns:
            Public URL of the stored object

        Raises:
            StorageError: If the upload fails
        """
        key = path.lstrip("/")
        logger.info(f"Uploading {len(data)} bytes to s3://{self.bucket}/{key}")

        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ACL="public-read",
            )
        except ClientError as e:
            error_code = e.response["Error"]["Code"]
            if error_code == "NoSuchBucket":
                raise StorageError(f"S3 bucket does not exist: {self.bucket}")
            elif error_code == "AccessDenied":
                raise StorageError(f"Access denied to S3 bucket: {self.bucket}")
            else:
                raise StorageError(f"S3 client error: {str(e)}")
        except BotoCoreError as e:
            raise StorageError(f"Failed to upload file to S3: {str(e)}")

        return self.public_url(key)


def create_storage_service(settings: Settings) -> Optional[S3StorageService]:
    """Return a storage service, or None when S3 is not fully configured."""
    if not settings.storage_configured:
        logger.info("S3 storage not configured, attachments will not be indexed")
        return None
    return S3StorageService(settings)
