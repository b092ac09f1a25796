"""Test configuration and fixtures for s3mgr."""

import boto3
import pytest
from moto import mock_aws

from s3mgr.core import settings
from s3mgr.core.exceptions import GatewayError
from s3mgr.objectstorage import S3ClientConfig, S3ClientManager, S3Gateway
from s3mgr.objectstorage.gateway import ObjectEntry

BUCKET = "test-bucket"


class FakeGateway:
    """In-memory gateway that records calls and can inject failures."""

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.calls: list[tuple[str, str]] = []
        self.failures: dict[tuple[str, str], Exception] = {}

    def _record(self, operation, target):
        self.calls.append((operation, target))
        error = self.failures.get((operation, target))
        if error is not None:
            raise error

    def _missing(self, operation, key):
        return GatewayError(
            f"{operation} failed for '{key}' (HTTP 404): Not Found", status_code=404
        )

    def list(self, prefix):
        self._record("list", prefix)
        return [
            ObjectEntry(key=key, size=len(body))
            for key, body in sorted(self.objects.items())
            if key.startswith(prefix)
        ]

    def get(self, key):
        self._record("get", key)
        if key not in self.objects:
            raise self._missing("GetObject", key)
        return self.objects[key]

    def put(self, key, data):
        self._record("put", key)
        self.objects[key] = bytes(data)

    def delete(self, key):
        self._record("delete", key)
        self.objects.pop(key, None)

    def head_size(self, key):
        self._record("head", key)
        if key not in self.objects:
            raise self._missing("HeadObject", key)
        return len(self.objects[key])

    def operations(self, operation):
        return [target for op, target in self.calls if op == operation]


@pytest.fixture
def fake_gateway():
    """Create an empty in-memory gateway."""
    return FakeGateway()


@pytest.fixture
def temp_dir(tmp_path):
    """Create a temporary directory for testing."""
    return tmp_path


@pytest.fixture
def sample_tree(temp_dir):
    """Create ``root/{a.txt, sub/b.txt}`` for upload tests."""
    root = temp_dir / "root"
    root.mkdir()
    (root / "a.txt").write_text("alpha")

    sub = root / "sub"
    sub.mkdir()
    (sub / "b.txt").write_text("bravo" * 10)

    return root


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point the config store at a temporary directory."""
    directory = tmp_path / "config"
    monkeypatch.setattr(settings, "config_dir", directory)
    return directory


@pytest.fixture
def aws_credentials(monkeypatch):
    """Keep boto3 away from any real credentials."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "test_key")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "test_secret")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def s3_client(aws_credentials):
    """Mocked S3 with an empty test bucket."""
    with mock_aws():
        client = boto3.client(
            "s3",
            aws_access_key_id="test_key",
            aws_secret_access_key="test_secret",
            region_name="us-east-1",
        )
        client.create_bucket(Bucket=BUCKET)
        yield client


@pytest.fixture
def s3_gateway(s3_client):
    """S3Gateway bound to the mocked test bucket."""
    config = S3ClientConfig(
        access_key_id="test_key",
        secret_access_key="test_secret",
        region_name="us-east-1",
    )
    return S3Gateway(S3ClientManager(config), BUCKET)
