"""
Blob store configuration

Uploaded file contents live in a single S3 compatible bucket.
"""

import io
from typing import BinaryIO

import boto3
from boto3.exceptions import Boto3Error
from boto3.s3.transfer import TransferConfig
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from core.config import Settings
from core.exceptions import BlobNotFoundError, BlobStoreError
from core.logger import logger

# Multipart upload tuning
UPLOAD_PART_SIZE = 4 * 1024 * 1024
UPLOAD_CONCURRENCY = 16
# Attempts per download, including failures while reading the body
DOWNLOAD_ATTEMPTS = 20

_ALREADY_EXISTS_CODES = {"BucketAlreadyOwnedByYou", "BucketAlreadyExists"}
_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


class BlobStore:
    """Stores and fetches file contents by name in one bucket"""

    def __init__(self, client, bucket: str, transfer_config: TransferConfig | None = None):
        self.client = client
        self.bucket = bucket
        self.transfer_config = transfer_config or TransferConfig(
            multipart_chunksize=UPLOAD_PART_SIZE,
            max_concurrency=UPLOAD_CONCURRENCY,
            num_download_attempts=DOWNLOAD_ATTEMPTS,
        )

    def reference(self, name: str) -> str:
        """Return the URI of the object stored under name"""
        return f"s3://{self.bucket}/{name}"

    def ensure_bucket(self) -> None:
        """
        Create the bucket if it does not exist yet.

        Raises:
            BlobStoreError: If the bucket cannot be created
        """
        kwargs = {"Bucket": self.bucket}
        region = self.client.meta.region_name
        if region and region != "us-east-1":
            kwargs["CreateBucketConfiguration"] = {"LocationConstraint": region}
        try:
            self.client.create_bucket(**kwargs)
            logger.info("Bucket '%s' created successfully.", self.bucket)
        except ClientError as exc:
            if exc.response["Error"]["Code"] in _ALREADY_EXISTS_CODES:
                logger.info("Bucket '%s' already exists.", self.bucket)
                return
            logger.error("Unable to create bucket '%s': %s", self.bucket, exc)
            raise BlobStoreError(f"Unable to create bucket {self.bucket}") from exc
        except BotoCoreError as exc:
            logger.error("Unable to create bucket '%s': %s", self.bucket, exc)
            raise BlobStoreError(f"Unable to create bucket {self.bucket}") from exc

    def put_object(self, name: str, fileobj: BinaryIO) -> str:
        """
        Upload the contents of fileobj under name.

        Args:
            name: Object name (the original filename)
            fileobj: Readable binary stream

        Returns:
            Reference of the stored object

        Raises:
            BlobStoreError: If the upload fails
        """
        logger.info("Uploading the file with blob name: %s", name)
        try:
            self.client.upload_fileobj(
                fileobj, self.bucket, name, Config=self.transfer_config
            )
        except (ClientError, BotoCoreError, Boto3Error) as exc:
            logger.error("Failed to upload blob '%s': %s", name, exc)
            raise BlobStoreError(f"Failed to upload blob {name}") from exc
        return self.reference(name)

    def get_object(self, name: str) -> bytes:
        """
        Download the object stored under name.

        Raises:
            BlobNotFoundError: If no object exists under name
            BlobStoreError: For any other failure
        """
        buffer = io.BytesIO()
        try:
            self.client.download_fileobj(
                self.bucket, name, buffer, Config=self.transfer_config
            )
        except ClientError as exc:
            if exc.response["Error"]["Code"] in _NOT_FOUND_CODES:
                logger.info("Blob '%s' not found", name)
                raise BlobNotFoundError(f"Blob {name} not found") from exc
            logger.error("Failed to download blob '%s': %s", name, exc)
            raise BlobStoreError(f"Failed to download blob {name}") from exc
        except (BotoCoreError, Boto3Error) as exc:
            logger.error("Failed to download blob '%s': %s", name, exc)
            raise BlobStoreError(f"Failed to download blob {name}") from exc
        return buffer.getvalue()


def create_blob_store(settings: Settings) -> BlobStore:
    """
    Build the blob store from the application settings.

    Requests are retried by botocore up to BLOB_MAX_RETRIES times, and
    downloads, body reads included, are attempted as many times by the
    managed transfer.
    """
    client = boto3.client(
        "s3",
        region_name=settings.STORAGE_REGION,
        endpoint_url=settings.STORAGE_ENDPOINT_URL or None,
        aws_access_key_id=settings.STORAGE_ACCOUNT,
        aws_secret_access_key=settings.STORAGE_ACCESS_KEY,
        config=Config(
            retries={"max_attempts": settings.BLOB_MAX_RETRIES, "mode": "standard"}
        ),
    )
    transfer_config = TransferConfig(
        multipart_chunksize=UPLOAD_PART_SIZE,
        max_concurrency=UPLOAD_CONCURRENCY,
        num_download_attempts=settings.BLOB_MAX_RETRIES,
    )
    return BlobStore(client, settings.STORAGE_CONTAINER, transfer_config)
