# tests/conftest.py
import pytest
from unittest.mock import MagicMock, patch
from cloudinary.exceptions import NotFound

from cloudinary_fs.adapter import CloudinaryAdapter
from cloudinary_fs.client import CloudinaryClient
from cloudinary_fs.config import Settings, get_settings


@pytest.fixture
def mock_settings():
    """
    Provides a mock of the adapter settings for testing.
    This avoids the need for environment variables during tests.
    """
    settings = MagicMock(spec=Settings)
    settings.CLOUDINARY_URL = None
    settings.CLOUDINARY_CLOUD_NAME = "demo"
    settings.CLOUDINARY_API_KEY = "test_key"
    settings.CLOUDINARY_API_SECRET = "test_secret"
    settings.CLOUDINARY_SECURE = True
    settings.CLOUDINARY_TIMEOUT = None
    settings.HTTP_TIMEOUT_SECONDS = 5
    settings.LOG_LEVEL = "INFO"
    settings.LOG_FILE = None
    return settings


@pytest.fixture(autouse=True)
def patch_settings_class(monkeypatch, mock_settings):
    """
    Replaces the `Settings` constructor so any code calling `get_settings()`
    during a test receives `mock_settings`. The cache is cleared first because
    a real instance may have been cached earlier.
    """
    get_settings.cache_clear()
    monkeypatch.setattr(
        "cloudinary_fs.config.Settings", lambda *args, **kwargs: mock_settings
    )
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_client():
    """Fixture for a mock Cloudinary client."""
    return MagicMock(spec=CloudinaryClient)


@pytest.fixture
def adapter(mock_client):
    """Adapter wired to the mock client, without a response observer."""
    return CloudinaryAdapter(mock_client, on_response=None, http_timeout=5)


class InMemoryCloudinaryClient:
    """
    Stores uploaded assets in a dict and serves them the way the real
    service would, so write/read sequences can be tested end to end.
    """

    BASE_URL = "https://res.cloudinary.com/demo/raw/upload/"

    def __init__(self):
        self.store = {}
        self.version = 1700000000

    def upload(self, file, options):
        self.version += 1
        data = file.read()
        public_id = options["public_id"]
        self.store[public_id] = {
            "public_id": public_id,
            "bytes": len(data),
            "version": self.version,
            "created_at": "2024-01-01T00:00:00Z",
            "data": data,
        }
        return {
            "public_id": public_id,
            "bytes": len(data),
            "version": self.version,
            "created_at": "2024-01-01T00:00:00Z",
        }

    def rename(self, path, new_path):
        if path not in self.store:
            raise NotFound(f"Resource not found - {path}")
        asset = self.store.pop(path)
        asset["public_id"] = new_path
        self.store[new_path] = asset
        return {"public_id": new_path}

    def destroy(self, path):
        if path not in self.store:
            raise NotFound(f"Resource not found - {path}")
        del self.store[path]
        return {"result": "ok"}

    def explicit(self, path, options):
        if path not in self.store:
            raise NotFound(f"Resource not found - {path}")
        asset = self.store[path]
        return {
            "url": self.BASE_URL + path,
            "storage": {
                key: asset[key]
                for key in ("public_id", "bytes", "version", "created_at")
            },
        }

    def create_folder(self, name):
        return {"success": True, "path": name}

    def delete_folder(self, name):
        return {"deleted": [name]}

    def assets(self, options):
        return {
            "resources": [
                {key: value for key, value in asset.items() if key != "data"}
                for public_id, asset in self.store.items()
                if public_id.startswith(options.get("prefix", ""))
            ]
        }

    def fetch(self, url, timeout=None):
        public_id = url[len(self.BASE_URL):]
        response = MagicMock()
        response.raise_for_status.return_value = None
        response.content = self.store[public_id]["data"]
        return response


@pytest.fixture
def memory_client():
    return InMemoryCloudinaryClient()


@pytest.fixture
def memory_adapter(memory_client):
    """
    Adapter backed by the in-memory client, with delivery URL downloads
    served from the same store.
    """
    with patch("cloudinary_fs.adapter.requests.get", side_effect=memory_client.fetch):
        yield CloudinaryAdapter(memory_client, on_response=None, http_timeout=5)
