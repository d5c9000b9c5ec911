"""
Scenario Failure Reporting

Helpers that check an HTTP response and raise ScenarioFailure, whose message
is laid out the same way for every scenario:

1. Scenario: What was being tested
2. Expected: What should have happened
3. Actual: What actually happened
4. Likely Cause: Most probable reason for failure
5. Target: The URL or page element under test
"""

from typing import Any, Dict, Iterable, Optional

import httpx


class ScenarioFailure(AssertionError):
    """
    Assertion error with detailed, human-readable failure messages.

    Subclasses AssertionError so pytest reports it as a failed assertion
    rather than an error in the test itself.
    """

    def __init__(
        self,
        scenario: str,
        expected: str,
        actual: str,
        likely_cause: str,
        target: str = "",
        response: Optional[httpx.Response] = None,
        extra_context: Optional[Dict[str, Any]] = None
    ):
        self.scenario = scenario
        self.expected = expected
        self.actual = actual
        self.likely_cause = likely_cause
        self.target = target
        self.response = response
        self.extra_context = extra_context or {}

        super().__init__(self._format_message())

    def _format_message(self) -> str:
        lines = [
            "",
            "=" * 80,
            "SCENARIO FAILURE DETAILS",
            "=" * 80,
            f"SCENARIO: {self.scenario}",
            "-" * 80,
            f"EXPECTED: {self.expected}",
            f"ACTUAL: {self.actual}",
            "-" * 80,
            f"LIKELY CAUSE: {self.likely_cause}",
        ]
        if self.target:
            lines.append(f"TARGET: {self.target}")

        if self.response is not None:
            lines.extend([
                "-" * 80,
                f"REQUEST: {self.response.request.method} {self.response.request.url}",
                f"HTTP STATUS: {self.response.status_code}",
                f"RESPONSE BODY: {self.response.text[:1000]}",
            ])

        if self.extra_context:
            lines.append("-" * 80)
            lines.append("EXTRA CONTEXT:")
            for key, value in self.extra_context.items():
                lines.append(f"  {key}: {value}")

        lines.append("=" * 80)
        return "\n".join(lines)


def infer_cause(response: httpx.Response) -> str:
    """Infer likely cause from response status."""
    status = response.status_code
    if status == 401:
        return "Authentication failed - token invalid or missing"
    elif status == 403:
        return "Permission denied - credentials lack access to this resource"
    elif status == 404:
        return "Resource not found - wrong ID or wrong path"
    elif status == 400:
        return "Invalid request - missing required field or validation failed"
    elif status == 429:
        return "Rate limited - public fixture API is throttling requests"
    elif status >= 500:
        return "Server error - the public fixture API may be degraded"
    else:
        return f"Unexpected status code {status}"


def assert_response(
    response: httpx.Response,
    expected_status: int,
    scenario: str,
    expected_body_contains: Optional[str] = None
):
    """
    Assert HTTP response status and optionally body content.
    Raises ScenarioFailure with detailed message on failure.
    """
    target = str(response.request.url)
    if response.status_code != expected_status:
        raise ScenarioFailure(
            scenario=scenario,
            expected=f"HTTP {expected_status}",
            actual=f"HTTP {response.status_code}",
            likely_cause=infer_cause(response),
            target=target,
            response=response
        )

    if expected_body_contains and expected_body_contains not in response.text:
        raise ScenarioFailure(
            scenario=scenario,
            expected=f"Response body contains: {expected_body_contains}",
            actual=f"Response body: {response.text[:500]}",
            likely_cause="Response format changed or wrong endpoint hit",
            target=target,
            response=response
        )


def assert_json_fields(
    data: Dict[str, Any],
    fields: Iterable[str],
    scenario: str,
    response: Optional[httpx.Response] = None
):
    """Raise ScenarioFailure unless every field is present in the JSON object."""
    fields = list(fields)
    missing = [name for name in fields if name not in data]
    if missing:
        raise ScenarioFailure(
            scenario=scenario,
            expected=f"Response has fields: {', '.join(fields)}",
            actual=f"Missing fields: {missing}; keys present: {sorted(data)}",
            likely_cause="Response shape changed on the fixture API",
            target=str(response.request.url) if response is not None else "",
            response=response
        )
