"""
HTTP client wrapper used by the REST API scenarios.

Thin layer over httpx.Client: joins paths onto a base URL, sends JSON,
carries an optional bearer token and records how long the last request took.
"""

import logging
import time
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class APIClient:
    """
    HTTP client wrapper with authentication and convenience methods.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.client = httpx.Client(timeout=timeout, transport=transport)
        self.token: Optional[str] = None
        self.default_headers: Dict[str, str] = {}
        self.last_elapsed: Optional[float] = None

    def url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self, extra: Optional[Dict] = None) -> Dict:
        """Build request headers with optional auth."""
        headers = {"Accept": "application/json", **self.default_headers}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        if extra:
            headers.update(extra)
        return headers

    def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[Dict] = None,
        headers: Optional[Dict] = None,
        **kwargs
    ) -> httpx.Response:
        url = self.url(path)
        started = time.perf_counter()
        response = self.client.request(
            method,
            url,
            json=json,
            params=params,
            headers=self._headers(headers),
            **kwargs
        )
        self.last_elapsed = time.perf_counter() - started
        logger.debug("%s %s -> %s (%.3fs)", method, url, response.status_code, self.last_elapsed)
        return response

    def get(self, path: str, params: Optional[Dict] = None, **kwargs) -> httpx.Response:
        return self.request("GET", path, params=params, **kwargs)

    def post(self, path: str, json: Any = None, **kwargs) -> httpx.Response:
        return self.request("POST", path, json=json, **kwargs)

    def put(self, path: str, json: Any = None, **kwargs) -> httpx.Response:
        return self.request("PUT", path, json=json, **kwargs)

    def patch(self, path: str, json: Any = None, **kwargs) -> httpx.Response:
        return self.request("PATCH", path, json=json, **kwargs)

    def delete(self, path: str, **kwargs) -> httpx.Response:
        return self.request("DELETE", path, **kwargs)

    def close(self):
        """Close the HTTP client."""
        self.client.close()

    def __enter__(self) -> "APIClient":
        return self

    def __exit__(self, *exc_info):
        self.close()
