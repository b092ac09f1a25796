"""S3 client configuration and management.

This module provides S3 client configuration and management functionality
for AWS S3 and S3-compatible services.

The S3ClientManager handles boto3 client creation from the credentials
stored by ``s3mgr config``.

Authentication Methods Supported:
    1. Explicit credentials (access_key_id, secret_access_key)
    2. IAM roles / environment variables (no explicit credentials)

S3-Compatible Services:
    Supports custom endpoints for services like MinIO, DigitalOcean Spaces,
    and other S3-compatible object storage providers via endpoint_url.
"""

from typing import Any, Dict, Optional

import boto3
from pydantic import BaseModel, ConfigDict, Field

from s3mgr.core import get_logger
from s3mgr.schemas import AppConfig

logger = get_logger(__name__)


class S3ClientConfig(BaseModel):
    """Configuration for S3 client connections.

    Authentication Priority:
        1. If explicit credentials are provided, use them
        2. Otherwise, fall back to default AWS credential chain

    Example:
        # MinIO endpoint
        config = S3ClientConfig(
            endpoint_url="http://localhost:9000",
            access_key_id="minioadmin",
            secret_access_key="minioadmin"
        )
    """

    model_config = ConfigDict(extra="forbid")

    access_key_id: Optional[str] = Field(None, description="AWS access key ID")
    secret_access_key: Optional[str] = Field(None, description="AWS secret access key")
    region_name: str = Field("us-east-1", description="AWS region name")
    endpoint_url: Optional[str] = Field(
        None, description="Custom S3 endpoint URL for S3-compatible services"
    )

    @classmethod
    def from_app_config(cls, config: AppConfig) -> "S3ClientConfig":
        """Build client settings from the persisted configuration.

        Empty strings in the stored file mean "not set".
        """
        return cls(
            access_key_id=config.s3.access_key or None,
            secret_access_key=config.s3.secret_key or None,
            region_name=config.s3.region or "us-east-1",
            endpoint_url=config.s3.endpoint or None,
        )


class S3ClientManager:
    """Manages S3 client connections."""

    def __init__(self, config: S3ClientConfig):
        """Initialize S3 client manager.

        Args:
            config: S3 client configuration
        """
        self.config = config
        self._client = None
        logger.info("S3 client manager initialized", region=config.region_name)

    @property
    def client(self):
        """Get or create S3 client instance."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self):
        """Create boto3 S3 client with the configured settings."""
        kwargs: Dict[str, Any] = {
            "region_name": self.config.region_name,
        }

        if self.config.endpoint_url:
            kwargs["endpoint_url"] = self.config.endpoint_url

        if self.config.access_key_id and self.config.secret_access_key:
            kwargs.update(
                {
                    "aws_access_key_id": self.config.access_key_id,
                    "aws_secret_access_key": self.config.secret_access_key,
                }
            )
            logger.info("S3 client created with explicit credentials")
        else:
            logger.info("S3 client created with default credential chain")

        return boto3.client("s3", **kwargs)  # type: ignore
