"""
Interface Segregation Principle

Three narrow capabilities instead of one fat "test helper". The UI scenario
depends on navigation and form filling only, the API scenario on response
validation only.
"""

from typing import Any, Dict

from playwright.sync_api import Page

from ..api_client import APIClient
from ..failures import ScenarioFailure, assert_json_fields


class Navigator:

    def __init__(self, page: Page):
        self.page = page

    def navigate(self, url: str) -> None:
        self.page.goto(url)


class FormFiller:

    def __init__(self, page: Page):
        self.page = page

    def fill(self, selector: str, text: str) -> None:
        self.page.fill(selector, text)

    def submit(self, selector: str) -> None:
        self.page.click(selector)


class ApiValidator:

    def __init__(self, api: APIClient):
        self.api = api

    def fetch_and_validate(self, path: str, schema: Dict[str, type]) -> Dict[str, Any]:
        """GET path and check every schema key is present with the given type."""
        response = self.api.get(path)
        response.raise_for_status()
        data = response.json()
        scenario = f"Validate {path} response schema"
        assert_json_fields(data, schema, scenario, response)
        for key, expected_type in schema.items():
            if not isinstance(data[key], expected_type):
                raise ScenarioFailure(
                    scenario=scenario,
                    expected=f"'{key}' should be {expected_type.__name__}",
                    actual=f"'{key}' is {type(data[key]).__name__}: {data[key]!r}",
                    likely_cause="Response shape changed on the API",
                    target=str(response.request.url),
                    response=response
                )
        return data


class LoginUiScenario:

    def __init__(self, page: Page):
        self.navigation = Navigator(page)
        self.form = FormFiller(page)

    def perform_login(self, username: str, password: str, url: str = "/login") -> None:
        self.navigation.navigate(url)
        self.form.fill("#username", username)
        self.form.fill("#password", password)
        self.form.submit("#login")


class UserApiScenario:

    USER_SCHEMA = {"id": int, "name": str}

    def __init__(self, api: APIClient):
        self.validator = ApiValidator(api)

    def validate_user_endpoint(self, user_id: int = 1) -> Dict[str, Any]:
        return self.validator.fetch_and_validate(f"/users/{user_id}", self.USER_SCHEMA)
