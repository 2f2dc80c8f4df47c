"""Pytest fixtures for API tests."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from highlight_ocr.config import Settings
from highlight_ocr.main import create_app
from highlight_ocr.models import OcrWord
from highlight_ocr.services import UploadStorage
from tests.utils.helpers import FakeBackend, make_png, word


@pytest.fixture
def png_bytes() -> bytes:
    """A plain white 120x60 PNG."""
    return make_png()


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    """Storage root for a single test."""
    return tmp_path / "uploads"


@pytest.fixture
def storage(upload_dir: Path) -> UploadStorage:
    return UploadStorage(upload_dir)


@pytest.fixture
def settings(upload_dir: Path, tmp_path: Path) -> Settings:
    """Settings pointing at temporary directories."""
    return Settings(upload_dir=upload_dir, public_dir=tmp_path / "public")


@pytest.fixture
def sample_words() -> list[OcrWord]:
    """Two words on the sample image."""
    return [
        word("Hello", 10, 10, 50, 30, confidence=95.5),
        word("World", 60, 10, 110, 30, confidence=88.0),
    ]


@pytest.fixture
def fake_backend(sample_words: list[OcrWord]) -> FakeBackend:
    return FakeBackend(words=sample_words)


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Create the FastAPI application for testing."""
    return create_app(settings)


@pytest.fixture
async def client(app: FastAPI, fake_backend: FakeBackend) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with the OCR backend replaced."""
    from highlight_ocr.dependencies import get_ocr_backend

    app.dependency_overrides[get_ocr_backend] = lambda: fake_backend

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
