# Showcase API Tests - GraphQL
#
# Tests for:
# - Queries with and without variables, nested selections
# - Aliases and fragments
# - Error responses (HTTP 200 with an `errors` array)
# - Chained queries, custom headers, response time
# - GET transport and batched operations where the server supports them
# - A create mutation against an in-process endpoint (the public countries
#   API is read-only)

import json

import httpx
import pytest

from showcase.api_client import APIClient
from showcase.failures import ScenarioFailure
from showcase.graphql import GraphQLClient, GraphQLError

pytestmark = [pytest.mark.api, pytest.mark.graphql]

COUNTRY_QUERY = """
    query GetCountry($code: ID!) {
      country(code: $code) {
        code
        name
        capital
        currency
        languages { code name }
        continent { code name }
      }
    }
"""

COUNTRIES_QUERY = """
    query {
      countries { code name }
    }
"""


def data_of(body, scenario):
    if body.get("errors") or "data" not in body:
        raise ScenarioFailure(
            scenario=scenario,
            expected="A `data` object and no `errors`",
            actual=f"errors={body.get('errors')}",
            likely_cause="Schema changed on the public countries API or the query is invalid",
        )
    return body["data"]


@pytest.mark.live
class TestQueries:

    @pytest.mark.smoke
    def test_query_with_variables(self, graphql_client: GraphQLClient):
        """
        SCENARIO: Fetch one country by code
        EXPECTED: The country with code US, a name and a list of languages
        """
        data = data_of(graphql_client.execute(COUNTRY_QUERY, {"code": "US"}), "Country by code")

        country = data["country"]
        assert country["code"] == "US"
        assert country["name"]
        assert isinstance(country["languages"], list)

    def test_query_without_variables(self, graphql_client: GraphQLClient):
        countries = data_of(graphql_client.execute(COUNTRIES_QUERY), "All countries")["countries"]

        assert len(countries) > 0
        assert {"code", "name"} <= set(countries[0])

    def test_nested_selection(self, graphql_client: GraphQLClient):
        country = data_of(graphql_client.execute(COUNTRY_QUERY, {"code": "IN"}), "Nested country")["country"]

        assert country["name"] == "India"
        assert country["continent"]["name"] == "Asia"
        assert len(country["languages"]) > 0
        assert {"code", "name"} <= set(country["languages"][0])

    def test_aliases(self, graphql_client: GraphQLClient):
        query = """
            query GetMultipleCountries {
              usa: country(code: "US") { name capital }
              india: country(code: "IN") { name capital }
              uk: country(code: "GB") { name capital }
            }
        """
        data = data_of(graphql_client.execute(query), "Aliased countries")

        assert data["usa"]["name"] == "United States"
        assert data["india"]["name"] == "India"
        assert data["uk"]["name"] == "United Kingdom"

    def test_fragments(self, graphql_client: GraphQLClient):
        query = """
            fragment CountryInfo on Country { code name capital currency }

            query GetCountriesWithFragment {
              country1: country(code: "US") { ...CountryInfo }
              country2: country(code: "IN") { ...CountryInfo }
            }
        """
        data = data_of(
            graphql_client.execute(query, operation_name="GetCountriesWithFragment"),
            "Fragment spread"
        )

        assert data["country1"]["code"] == "US"
        assert data["country2"]["code"] == "IN"
        assert data["country1"]["name"]

    def test_chained_queries(self, graphql_client: GraphQLClient):
        """
        SCENARIO: List countries, then fetch details of the first one
        EXPECTED: The detail query returns the same code
        """
        countries = data_of(graphql_client.execute(COUNTRIES_QUERY), "Chain: list")["countries"]
        first_code = countries[0]["code"]

        details = data_of(graphql_client.execute(COUNTRY_QUERY, {"code": first_code}), "Chain: details")

        assert details["country"]["code"] == first_code

    def test_custom_headers(self, graphql_client: GraphQLClient):
        body = graphql_client.execute(
            "query { continents { code } }",
            headers={"X-Request-Source": "showcase", "Authorization": "Bearer not-checked"}
        )
        assert data_of(body, "Query with headers")["continents"]

    def test_response_time(self, graphql_client: GraphQLClient):
        response = graphql_client.post(COUNTRIES_QUERY)

        assert response.status_code == 200
        assert graphql_client.api.last_elapsed < 5.0
        assert len(response.json()["data"]["countries"]) > 0


@pytest.mark.live
class TestErrors:

    def test_unknown_field_returns_errors(self, graphql_client: GraphQLClient):
        """
        SCENARIO: Query a field that does not exist
        EXPECTED: HTTP 200 with a non-empty `errors` array
        """
        response = graphql_client.post("query GetInvalidData { invalidField { id } }")

        # GraphQL servers report query errors in the body, not the status
        assert response.status_code in (200, 400)
        errors = response.json()["errors"]
        assert isinstance(errors, list) and errors

    def test_errors_can_be_raised(self, graphql_client: GraphQLClient):
        # Variable coercion errors come back as 200 or 400 depending on the server
        with pytest.raises((GraphQLError, httpx.HTTPStatusError)):
            graphql_client.execute(COUNTRY_QUERY, {"code": ["not", "an", "id"]}, raise_on_errors=True)

    def test_missing_required_variable(self, graphql_client: GraphQLClient):
        response = graphql_client.post(COUNTRY_QUERY, variables={})

        assert response.json()["errors"]


@pytest.mark.live
class TestTransports:

    def test_get_request(self, graphql_client: GraphQLClient):
        """
        SCENARIO: Send the query in the URL
        EXPECTED: Same data as POST when the server accepts GET, otherwise a 4xx
        """
        response = graphql_client.get("query { continents { code name } }")

        if response.status_code == 200:
            assert response.json()["data"]["continents"]
        else:
            assert 400 <= response.status_code < 500

    def test_batch(self, graphql_client: GraphQLClient):
        """
        SCENARIO: Two operations in one request body
        EXPECTED: A list of two results when batching is supported, otherwise
                  a single error or data object
        """
        response = graphql_client.batch([
            {"query": "query { continents { code } }"},
            {"query": "query { languages { code } }"},
        ])

        result = response.json()
        if isinstance(result, list):
            assert len(result) == 2
            assert all("data" in item for item in result)
        else:
            assert "data" in result or "errors" in result


CREATE_USER = """
    mutation CreateUser($input: CreateUserInput!) {
      createUser(input: $input) {
        id
        name
        email
        createdAt
      }
    }
"""


class TestMutations:
    """Write operations against a MockTransport endpoint that stores users."""

    @pytest.fixture
    def users_endpoint(self):
        users = []
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            payload = json.loads(request.content)
            if request.headers.get("Authorization") != "Bearer test-token":
                return httpx.Response(401, json={"errors": [{"message": "Not authenticated"}]})
            user_input = payload["variables"]["input"]
            if not user_input.get("email"):
                return httpx.Response(200, json={
                    "data": None,
                    "errors": [{"message": "Field 'email' of CreateUserInput is required"}],
                })
            user = {"id": str(len(users) + 1), **user_input, "createdAt": "2024-01-01T00:00:00Z"}
            users.append(user)
            return httpx.Response(200, json={"data": {"createUser": user}})

        api = APIClient("https://graphql.showcase.test", transport=httpx.MockTransport(handler))
        api.token = "test-token"
        client = GraphQLClient("https://graphql.showcase.test/graphql", api=api)
        yield client, users, seen
        client.close()

    def test_create_user(self, users_endpoint):
        """
        SCENARIO: Create a user with a mutation and input variables
        EXPECTED: The created user comes back with an id and timestamp
        """
        client, users, seen = users_endpoint

        body = client.execute(
            CREATE_USER,
            {"input": {"name": "John Doe", "email": "john@example.com"}},
            operation_name="CreateUser",
            raise_on_errors=True,
        )

        created = data_of(body, "Create user mutation")["createUser"]
        assert created["id"] == "1"
        assert created["name"] == "John Doe"
        assert created["email"] == "john@example.com"
        assert created["createdAt"]
        assert users == [created]

        sent = json.loads(seen[0].content)
        assert sent["operationName"] == "CreateUser"
        assert sent["query"].strip().startswith("mutation CreateUser")

    def test_invalid_input_returns_errors(self, users_endpoint):
        client, users, _ = users_endpoint

        with pytest.raises(GraphQLError, match="'email' of CreateUserInput is required"):
            client.execute(CREATE_USER, {"input": {"name": "No Email"}}, raise_on_errors=True)
        assert users == []

    def test_unauthenticated_mutation_is_rejected(self, users_endpoint):
        client, users, _ = users_endpoint
        client.api.token = None

        with pytest.raises(httpx.HTTPStatusError) as exc:
            client.execute(CREATE_USER, {"input": {"name": "John Doe", "email": "john@example.com"}})
        assert exc.value.response.status_code == 401
        assert users == []
