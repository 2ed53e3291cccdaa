import os
import sys

import httpx
import pytest


def pytest_sessionstart(session):
    # Обеспечиваем импорт пакета imgloader при запуске pytest из корня
    project_root = os.path.dirname(os.path.abspath(__file__))
    project_root = os.path.abspath(os.path.join(project_root, os.pardir))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)


HEADER = "sku,Image 1,Image 2,Image 3,Image 4,Image 5"


@pytest.fixture
def settings(tmp_path):
    from imgloader.config import Settings
    return Settings(download_dir=tmp_path / "downloads", requests_timeout=5.0)


@pytest.fixture
def write_csv(tmp_path):
    def _write(*lines, name="products.csv"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write


@pytest.fixture
def make_upload():
    from imgloader.models import UploadedFile

    def _make(path, content_type="text/csv", size=None):
        return UploadedFile(
            content_type=content_type,
            size=path.stat().st_size if size is None else size,
            path=path,
        )
    return _make


class FakeTransport:
    """Records requested URLs and answers 200 with a small body unless told otherwise."""

    def __init__(self, failing=(), status_code=200):
        self.failing = set(failing)
        self.status_code = status_code
        self.calls = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls.append(url)
        if url in self.failing:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(self.status_code, content=b"\x89PNG fake image bytes")

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def transport_factory():
    return FakeTransport
