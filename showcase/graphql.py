"""
GraphQL over HTTP.

GraphQL servers answer 200 even when a query is invalid; failures live in the
`errors` array of the body. `execute` returns the decoded body unchanged so
scenarios can assert on either half, and raises GraphQLError only when asked.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from .api_client import APIClient

logger = logging.getLogger(__name__)


class GraphQLError(Exception):
    """The server answered with a non-empty `errors` array."""

    def __init__(self, errors: List[Dict[str, Any]]):
        self.errors = errors
        messages = "; ".join(str(error.get("message", error)) for error in errors)
        super().__init__(f"GraphQL returned {len(errors)} error(s): {messages}")


def build_payload(
    query: str,
    variables: Optional[Dict[str, Any]] = None,
    operation_name: Optional[str] = None
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"query": query}
    if variables is not None:
        payload["variables"] = variables
    if operation_name is not None:
        payload["operationName"] = operation_name
    return payload


class GraphQLClient:
    """POSTs (or GETs) GraphQL documents to a single endpoint."""

    def __init__(self, endpoint: str, api: Optional[APIClient] = None, timeout: float = 30.0):
        self.endpoint = endpoint
        self.api = api or APIClient(endpoint, timeout=timeout)

    def post(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        operation_name: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> httpx.Response:
        payload = build_payload(query, variables, operation_name)
        logger.debug("GraphQL POST %s variables=%s", self.endpoint, variables)
        return self.api.post(self.endpoint, json=payload, headers=headers)

    def get(self, query: str, variables: Optional[Dict[str, Any]] = None) -> httpx.Response:
        """Send the query string in the URL, for servers that accept GET."""
        params = {"query": query}
        if variables is not None:
            params["variables"] = json.dumps(variables)
        return self.api.get(self.endpoint, params=params)

    def batch(self, queries: List[Dict[str, Any]]) -> httpx.Response:
        """Send several operations in one request body. Server support varies."""
        return self.api.post(self.endpoint, json=queries)

    def execute(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        operation_name: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        raise_on_errors: bool = False
    ) -> Dict[str, Any]:
        response = self.post(query, variables, operation_name, headers)
        response.raise_for_status()
        body = response.json()
        errors = body.get("errors")
        if errors:
            logger.info("GraphQL errors: %s", errors)
            if raise_on_errors:
                raise GraphQLError(errors)
        return body

    def close(self):
        self.api.close()
