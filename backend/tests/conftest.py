"""
Pytest configuration and fixtures
"""

import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from memberhub.config import settings
from memberhub.main import app
from memberhub.services import reset_providers
from memberhub.services.rate_limiter import upload_rate_limiter


def make_image(fmt: str, size=(8, 8), color=(200, 30, 30)) -> bytes:
    """Encode a small solid-colour image with Pillow."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def storage_root(tmp_path, monkeypatch):
    """Point all storage at a temporary directory."""
    monkeypatch.setattr(settings, "STORAGE_PATH", str(tmp_path))
    reset_providers()
    upload_rate_limiter.reset()
    yield tmp_path
    reset_providers()
    upload_rate_limiter.reset()


@pytest.fixture
def client(storage_root):
    """FastAPI test client fixture"""
    return TestClient(app)


@pytest.fixture
def png_bytes():
    return make_image("PNG")


@pytest.fixture
def jpeg_bytes():
    return make_image("JPEG")


@pytest.fixture
def webp_bytes():
    return make_image("WEBP")
