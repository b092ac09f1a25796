"""Tests for configuration schemas and the TOML config store."""

import tomllib

import pytest
from pydantic import ValidationError

from s3mgr.core.exceptions import ConfigError
from s3mgr.schemas import DEFAULT_CHUNK_SIZE, AppConfig, S3Config
from s3mgr.storage_config import ConfigStore


class TestAppConfig:
    """Test configuration models."""

    def test_defaults(self):
        """Test default values."""
        config = AppConfig()
        assert config.s3.access_key == ""
        assert config.s3.secret_key == ""
        assert config.s3.region == "us-east-1"
        assert config.s3.bucket == ""
        assert config.s3.endpoint is None
        assert config.upload_chunk_size == 2 * 1024 * 1024
        assert config.download_chunk_size == DEFAULT_CHUNK_SIZE

    def test_chunk_size_must_be_positive(self):
        """Test chunk size validation."""
        with pytest.raises(ValidationError):
            AppConfig(upload_chunk_size=0)

    def test_custom_values(self):
        config = AppConfig(
            s3=S3Config(bucket="photos", endpoint="http://minio:9000"),
            download_chunk_size=1024,
        )
        assert config.s3.bucket == "photos"
        assert config.s3.endpoint == "http://minio:9000"
        assert config.download_chunk_size == 1024


class TestConfigStore:
    """Test loading, saving and resetting config.toml."""

    def test_load_missing_file_returns_defaults(self, temp_dir):
        store = ConfigStore(temp_dir / "config.toml")

        assert store.load() == AppConfig()
        assert not (temp_dir / "config.toml").exists()

    def test_save_and_load(self, temp_dir):
        """Test values survive a save/load cycle."""
        store = ConfigStore(temp_dir / "nested" / "config.toml")
        config = AppConfig(
            s3=S3Config(
                access_key="AKIA",
                secret_key="secret",
                region="eu-central-1",
                bucket="photos",
                endpoint="http://localhost:9000",
            ),
            upload_chunk_size=8 * 1024 * 1024,
        )

        store.save(config)

        assert store.load() == config

    def test_file_layout(self, temp_dir):
        """Test the TOML layout: chunk sizes at top level, credentials in [s3]."""
        path = temp_dir / "config.toml"
        ConfigStore(path).save(AppConfig(s3=S3Config(bucket="b")))

        with path.open("rb") as f:
            data = tomllib.load(f)

        assert data["upload_chunk_size"] == DEFAULT_CHUNK_SIZE
        assert data["s3"]["bucket"] == "b"
        assert data["s3"]["region"] == "us-east-1"
        assert "endpoint" not in data["s3"]

    def test_reset(self, temp_dir):
        """Test reset rewrites defaults."""
        store = ConfigStore(temp_dir / "config.toml")
        store.save(AppConfig(s3=S3Config(bucket="b", secret_key="s")))

        store.reset()

        assert store.load() == AppConfig()
        assert (temp_dir / "config.toml").exists()

    def test_malformed_file(self, temp_dir):
        path = temp_dir / "config.toml"
        path.write_text("this is = not [valid toml")

        with pytest.raises(ConfigError, match="Failed to parse"):
            ConfigStore(path).load()

    def test_invalid_values(self, temp_dir):
        path = temp_dir / "config.toml"
        path.write_text("upload_chunk_size = -1\n")

        with pytest.raises(ConfigError):
            ConfigStore(path).load()

    def test_default_location_follows_settings(self, config_dir):
        assert ConfigStore().path == config_dir / "config.toml"
