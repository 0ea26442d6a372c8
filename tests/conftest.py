"""
Shared pytest fixtures for the CSV Explorer test suite.
"""

import os
import sys
import tempfile

# Add project root to sys.path so 'backend' and 'frontend' import without installing
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Keep the module-level app in backend.src.api.main away from the real upload dir
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="csv_explorer_uploads_"))

import pytest
from fastapi.testclient import TestClient

from backend.src.api.main import create_app
from backend.src.core.notifier import FileLifecycleNotifier


class TestClientSession:
    """Adapts FastAPI's TestClient to the subset of requests.Session used by FileApiClient."""

    __test__ = False

    def __init__(self, client: TestClient):
        self.client = client

    def request(self, method, url, files=None, timeout=None, headers=None, stream=False):
        response = self.client.request(method, url, files=files, headers=headers)
        return _ResponseAdapter(response)


class _ResponseAdapter:
    def __init__(self, response):
        self._response = response
        self.status_code = response.status_code
        self.text = response.text
        self.reason = response.reason_phrase
        self.ok = response.is_success

    def json(self):
        return self._response.json()


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def notifier():
    return FileLifecycleNotifier()


@pytest.fixture
def app(upload_dir, notifier):
    return create_app(upload_dir=str(upload_dir), notifier=notifier)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def api_client(client):
    """FileApiClient talking to the in-process app."""
    from frontend.helpers.api_client import FileApiClient

    return FileApiClient(base_url="http://testserver", session=TestClientSession(client))
