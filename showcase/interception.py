"""
Route Interception Helpers

Handlers for `page.route()` / `context.route()` that fabricate responses:

- fulfill_json: answer with a JSON body, status and extra headers
- serve_html: answer a made-up URL with inline HTML, so a scenario gets a
  real origin (and same-origin fetches) without any server
- with_latency: delay another handler
- credential_check: answer a login POST with 200 or 401
- MockRestApi: a tiny in-memory REST backend (list, read, create, replace,
  patch, delete) bound to a base URL

Every response carries `Access-Control-Allow-Origin: *` so pages served from
a different origin can still read the fabricated body.
"""

import json
import logging
import time
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import parse_qsl, urlsplit

from playwright.sync_api import Route

logger = logging.getLogger(__name__)

RouteHandler = Callable[[Route], None]

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


def fulfill_json(
    route: Route,
    payload: Any,
    status: int = 200,
    headers: Optional[Mapping[str, str]] = None
) -> None:
    route.fulfill(
        status=status,
        headers={**CORS_HEADERS, **(headers or {})},
        content_type="application/json",
        body=json.dumps(payload),
    )


def json_response(payload: Any, status: int = 200, headers: Optional[Mapping[str, str]] = None) -> RouteHandler:
    """Handler that always answers with the same JSON."""
    def handler(route: Route) -> None:
        fulfill_json(route, payload, status, headers)
    return handler


def serve_html(target, url: str, html: str) -> None:
    """Route `url` on a page or context to an inline HTML document."""
    def handler(route: Route) -> None:
        route.fulfill(status=200, content_type="text/html", body=html)
    target.route(url, handler)


def with_latency(handler: RouteHandler, seconds: float) -> RouteHandler:
    def delayed(route: Route) -> None:
        time.sleep(seconds)
        handler(route)
    return delayed


def request_json(route: Route) -> Any:
    """Decoded request body, or None when there is no body."""
    raw = route.request.post_data
    if not raw:
        return None
    return json.loads(raw)


def credential_check(
    valid: Mapping[str, str],
    token: str = "mock-token-123",
    success_message: str = "Login successful",
    failure_message: str = "Invalid credentials"
) -> RouteHandler:
    """Handler for a JSON login POST: 200 with a token for known users, else 401."""
    def handler(route: Route) -> None:
        body = request_json(route) or {}
        username = body.get("username")
        if username in valid and valid[username] == body.get("password"):
            fulfill_json(route, {"token": token, "message": success_message})
        else:
            fulfill_json(route, {"message": failure_message}, status=401)
    return handler


class MockRestApi:
    """
    In-memory REST backend for route interception.

    Paths under `base_url` are `/<resource>` and `/<resource>/<id>`.
    Created records get ids from a counter (101 upward by default, the same
    id jsonplaceholder hands back for a new post), and a POST answers with
    the posted payload merged with that id.
    """

    def __init__(
        self,
        base_url: str = "https://api.showcase.test",
        seed: Optional[Mapping[str, Iterable[Dict[str, Any]]]] = None,
        first_id: int = 101
    ):
        self.base_url = base_url.rstrip("/")
        self._prefix = urlsplit(self.base_url).path
        self.records: Dict[str, List[Dict[str, Any]]] = {
            resource: [dict(item) for item in items]
            for resource, items in (seed or {}).items()
        }
        self._next_id = first_id
        self.calls: List[Tuple[str, str]] = []

    @property
    def pattern(self) -> str:
        return f"{self.base_url}/**"

    def install(self, target) -> "MockRestApi":
        target.route(self.pattern, self.handle)
        return self

    def uninstall(self, target) -> None:
        target.unroute(self.pattern, self.handle)

    def handle(self, route: Route) -> None:
        request = route.request
        try:
            payload = request_json(route)
        except json.JSONDecodeError:
            fulfill_json(route, {"error": "Request body is not valid JSON"}, status=400)
            return
        status, body = self.dispatch(request.method, request.url, payload)
        fulfill_json(route, body, status)

    def dispatch(self, method: str, url: str, payload: Any = None) -> Tuple[int, Any]:
        """Apply one request to the store and return (status, body)."""
        method = method.upper()
        parts = urlsplit(url)
        path = parts.path
        if self._prefix and path.startswith(self._prefix):
            path = path[len(self._prefix):]
        segments = [s for s in path.split("/") if s]
        self.calls.append((method, path))
        logger.debug("MockRestApi %s %s", method, path)

        if not segments or len(segments) > 2:
            return 404, {"error": f"No route for {path}"}

        resource = segments[0]
        items = self.records.get(resource)
        creating = len(segments) == 1 and method == "POST"
        if items is None and not creating:
            return 404, {"error": f"Unknown resource /{resource}"}

        if len(segments) == 1:
            if method == "GET":
                filters = dict(parse_qsl(parts.query))
                return 200, [item for item in items if _matches(item, filters)]
            if method == "POST":
                if not isinstance(payload, dict):
                    return 400, {"error": "Expected a JSON object"}
                created = {**payload, "id": self._allocate_id()}
                self.records.setdefault(resource, []).append(created)
                return 201, created
            return 405, {"error": f"{method} not allowed on /{resource}"}

        record_id = _coerce_id(segments[1])
        index = next((i for i, item in enumerate(items) if item.get("id") == record_id), None)
        if index is None:
            return 404, {}

        if method == "GET":
            return 200, items[index]
        if method == "PUT":
            if not isinstance(payload, dict):
                return 400, {"error": "Expected a JSON object"}
            items[index] = {**payload, "id": record_id}
            return 200, items[index]
        if method == "PATCH":
            if not isinstance(payload, dict):
                return 400, {"error": "Expected a JSON object"}
            items[index] = {**items[index], **payload, "id": record_id}
            return 200, items[index]
        if method == "DELETE":
            del items[index]
            return 200, {}
        return 405, {"error": f"{method} not allowed on /{resource}/{record_id}"}

    def _allocate_id(self) -> int:
        allocated = self._next_id
        self._next_id += 1
        return allocated


def _coerce_id(raw: str):
    return int(raw) if raw.isdigit() else raw


def _matches(item: Mapping[str, Any], filters: Mapping[str, str]) -> bool:
    return all(str(item.get(key)) == value for key, value in filters.items())
