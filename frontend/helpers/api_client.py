"""
Thin requests wrapper around the CSV Explorer HTTP API.

Every call either returns the decoded response body or raises ApiError;
callers decide how a failure is shown.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from frontend import frontend_config as config
from frontend.helpers.logger import get_logger

logger = get_logger(__name__)


class ApiError(Exception):
    """A request failed to reach the API or returned a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FileApiClient:
    def __init__(
        self,
        base_url: str = config.API_BASE,
        timeout: float = config.REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        kwargs.setdefault("timeout", self.timeout)
        try:
            response = self.session.request(method, self._url(path), **kwargs)
        except requests.exceptions.ConnectionError as e:
            raise ApiError(f"Cannot connect to backend API server at {self.base_url}") from e
        except requests.exceptions.RequestException as e:
            raise ApiError(f"Request to {path} failed: {e}") from e

        if not response.ok:
            raise ApiError(response.text or response.reason or "Request failed", response.status_code)
        return response

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/health", timeout=5).json()

    def list_files(self) -> List[str]:
        """Stored identities known to the server."""
        return self._request("GET", "/api/getFileList").json()

    def upload_file(self, file_name: str, content: bytes) -> str:
        files = {"file": (file_name, content, "text/csv")}
        return self._request("POST", "/api/uploadFile", files=files).text

    def get_file_data(self, identity: str) -> List[Dict[str, Any]]:
        return self._request("GET", f"/api/getFileData/{quote(identity, safe='')}").json()

    def delete_file(self, identity: str) -> str:
        return self._request("DELETE", f"/api/deleteFile/{quote(identity, safe='')}").text

    def open_event_stream(self) -> requests.Response:
        """Open /api/events; the caller owns (and must close) the response."""
        return self._request(
            "GET",
            "/api/events",
            stream=True,
            headers={"Accept": "text/event-stream"},
            timeout=(self.timeout, None),
        )
