import logging
import os
from typing import Optional
from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from dotenv import load_dotenv

from src.utils.errors import ConfigError, StorageError
from src.utils.retry import STORAGE_TRANSIENT_ERRORS, RetryConfig, with_retry
from .base import BaseStorage

logger = logging.getLogger("storage")

DEFAULT_ENDPOINT = "https://storage.googleapis.com"


class CloudStorage(BaseStorage):
    """
    Thumbnail bucket on Google Cloud Storage.

    Talks to the bucket through the S3-compatible XML API with HMAC keys, so
    the public URL of an object is ``{endpoint}/{bucket}/{key}``. The HMAC key
    belongs to the service account; the service account JSON file itself only
    authenticates Firestore.
    """

    def __init__(
        self,
        bucket_name: str,
        endpoint: str = DEFAULT_ENDPOINT,
        key_id: Optional[str] = None,
        secret: Optional[str] = None,
        retry_config: Optional[RetryConfig] = None,
    ):
        load_dotenv()
        key_id = key_id or os.getenv("STORAGE_HMAC_KEY_ID")
        secret = secret or os.getenv("STORAGE_HMAC_SECRET")

        if not bucket_name:
            raise ConfigError("Missing thumbnail bucket name for cloud storage.")
        if not key_id or not secret:
            raise ConfigError(
                "Missing required environment variables for cloud storage client."
                " Please ensure STORAGE_HMAC_KEY_ID and STORAGE_HMAC_SECRET are set."
            )

        self.bucket_name = bucket_name
        self.endpoint = endpoint.rstrip("/")
        self.retry_config = retry_config

        session = boto3.session.Session()
        self.client = session.client(
            "s3",
            region_name="auto",
            endpoint_url=self.endpoint,
            aws_access_key_id=key_id,
            aws_secret_access_key=secret,
        )

    def get_public_url(self, filename: str) -> str:
        return f"{self.endpoint}/{self.bucket_name}/{quote(filename)}"

    def file_exist(self, filename: str) -> bool:
        try:
            self.client.head_object(Bucket=self.bucket_name, Key=filename)
        except ClientError as e:
            if e.response["Error"]["Code"] in ("404", "NoSuchKey", "NotFound"):
                return False
            raise StorageError(f"Error checking object {filename}: {e}") from e
        return True

    def save_file(self, filename: str, content: bytes, content_type: str) -> str:
        @with_retry(self.retry_config, STORAGE_TRANSIENT_ERRORS)
        def _put() -> None:
            self.client.put_object(
                Bucket=self.bucket_name,
                Key=filename,
                Body=content,
                ContentType=content_type,
                ACL="public-read",
            )

        try:
            _put()
        except (BotoCoreError, ClientError) as e:
            raise StorageError(
                f"Error saving {filename} to bucket {self.bucket_name}: {e}"
            ) from e

        url = self.get_public_url(filename)
        logger.info(f"Uploaded {len(content)} bytes to {url}")
        return url
