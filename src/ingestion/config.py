"""
Configuration for the feed ingestion run.

Settings come from a YAML file (``config.yaml`` by default, or the path in
``INGEST_CONFIG``) using the keys below; a ``.env`` file may provide the
storage credentials and override the thumbnail bucket.

    service-account-path: service-account.json
    thumbnail-size: 200
    cloud-storage-bucket-for-thumbnails: my-thumbnails
    storage-endpoint: https://storage.googleapis.com
    request-timeout: 30
    max-retries: 3
    workers: 1
    batch-size: 500
    feeds:
      - https://example.com/podcast.rss
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

from src.utils.errors import ConfigError
from src.utils.retry import RetryConfig
from .feeds import DEFAULT_FEEDS

DEFAULT_CONFIG_PATH = "config.yaml"


@dataclass
class IngestConfig:
    """Configuration for the podcast feed ingestion"""

    service_account_path: Optional[str] = None
    thumbnail_size: int = 200
    thumbnail_bucket: str = ""
    storage_endpoint: str = "https://storage.googleapis.com"

    # Network behaviour
    request_timeout: float = 30
    max_retries: int = 3
    retry_min_wait: float = 1
    retry_max_wait: float = 30

    # Firestore batch size (500 is the per-commit ceiling)
    batch_size: int = 500

    # Feeds processed concurrently; 1 keeps the run sequential
    workers: int = 1

    feeds: list[str] = field(default_factory=lambda: list(DEFAULT_FEEDS))

    @property
    def retry_config(self) -> RetryConfig:
        return RetryConfig(
            max_attempts=self.max_retries,
            min_wait_seconds=self.retry_min_wait,
            max_wait_seconds=self.retry_max_wait,
        )

    def validate(self, require_storage: bool = True) -> list[str]:
        """
        Validate configuration and return any error messages.

        Args:
            require_storage: Whether the thumbnail bucket must be configured

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if self.service_account_path and not Path(self.service_account_path).is_file():
            errors.append(
                f"service-account-path does not exist: {self.service_account_path}"
            )
        if self.thumbnail_size < 1:
            errors.append("thumbnail-size must be at least 1")
        if require_storage and not self.thumbnail_bucket:
            errors.append("cloud-storage-bucket-for-thumbnails is required")
        if self.request_timeout <= 0:
            errors.append("request-timeout must be positive")
        if self.max_retries < 1:
            errors.append("max-retries must be at least 1")
        if not 1 <= self.batch_size <= 500:
            errors.append("batch-size must be between 1 and 500")
        if self.workers < 1:
            errors.append("workers must be at least 1")

        return errors


def load_config(path: Optional[str] = None) -> IngestConfig:
    """
    Load the ingestion config.

    Args:
        path: YAML file; defaults to INGEST_CONFIG or ``config.yaml``

    Returns:
        IngestConfig instance

    Raises:
        ConfigError: If the file is missing or not a YAML mapping
    """
    load_dotenv()
    config_path = Path(path or os.getenv("INGEST_CONFIG", DEFAULT_CONFIG_PATH))

    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    defaults = IngestConfig()
    try:
        return IngestConfig(
            service_account_path=data.get("service-account-path"),
            thumbnail_size=int(data.get("thumbnail-size", defaults.thumbnail_size)),
            thumbnail_bucket=os.getenv(
                "THUMBNAIL_BUCKET", data.get("cloud-storage-bucket-for-thumbnails", "")
            ),
            storage_endpoint=data.get("storage-endpoint", defaults.storage_endpoint),
            request_timeout=float(data.get("request-timeout", defaults.request_timeout)),
            max_retries=int(data.get("max-retries", defaults.max_retries)),
            retry_min_wait=float(data.get("retry-min-wait", defaults.retry_min_wait)),
            retry_max_wait=float(data.get("retry-max-wait", defaults.retry_max_wait)),
            batch_size=int(data.get("batch-size", defaults.batch_size)),
            workers=int(data.get("workers", defaults.workers)),
            feeds=list(data.get("feeds") or DEFAULT_FEEDS),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value in {config_path}: {e}") from e
