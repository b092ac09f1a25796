"""Persisted configuration schemas for s3mgr."""

from pydantic import BaseModel, Field

DEFAULT_CHUNK_SIZE = 2 * 1024 * 1024


class S3Config(BaseModel):
    """Connection settings for the object store."""

    access_key: str = Field(default="", description="Access key ID")
    secret_key: str = Field(default="", description="Secret access key")
    region: str = Field(default="us-east-1", description="Region name")
    bucket: str = Field(default="", description="Bucket name")
    endpoint: str | None = Field(
        default=None, description="Custom endpoint URL for S3-compatible services"
    )


class AppConfig(BaseModel):
    """Everything stored in ``config.toml``."""

    s3: S3Config = Field(default_factory=S3Config)
    upload_chunk_size: int = Field(
        default=DEFAULT_CHUNK_SIZE, gt=0, description="Default upload chunk size"
    )
    download_chunk_size: int = Field(
        default=DEFAULT_CHUNK_SIZE, gt=0, description="Default download chunk size"
    )
