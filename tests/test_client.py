"""Tests for fb.integrations.client module.

Requests are served by httpx.MockTransport so the full request path,
headers, and error mapping are exercised.
"""

import itertools
import json
from unittest.mock import patch

import httpx
import pytest

from fb.integrations.client import FlowBoardsClient
from fb.integrations.exceptions import (
    ApiStatusError,
    EndpointDiscoveryError,
    FlowBoardsApiError,
    ResponseParseError,
    TransportError,
)
from fb.integrations.models import CommentPayload
from fb.utils.errors import ExitCode
from tests.fakes.fake_flowboards import REST_PREFIX, make_client


def discovered(handler) -> FlowBoardsClient:
    """Client that has already discovered REST_PREFIX."""

    def route(request: httpx.Request) -> httpx.Response:
        if request.url.host == "fb.mauvable.com":
            return httpx.Response(200, json={"restUrlPrefix": REST_PREFIX})
        return handler(request)

    client = make_client(route)
    client.discover_rest_prefix("org-1")
    return client


class TestDiscovery:
    """Tests for discover_rest_prefix()."""

    def test_stores_prefix(self, api_client, fake_api):
        prefix = api_client.discover_rest_prefix("org-1")

        assert prefix == REST_PREFIX
        assert api_client.base_url == REST_PREFIX
        assert str(fake_api.requests[0].url) == "https://fb.mauvable.com/rest-directory/2/org-1"

    def test_empty_prefix_is_error(self):
        client = make_client(lambda r: httpx.Response(200, json={"restUrlPrefix": ""}))

        with pytest.raises(EndpointDiscoveryError, match="REST prefix not found"):
            client.discover_rest_prefix("org-1")

    def test_non_2xx_is_discovery_error(self):
        client = make_client(lambda r: httpx.Response(404, text="unknown org"))

        with pytest.raises(EndpointDiscoveryError) as exc_info:
            client.discover_rest_prefix("org-1")

        assert "status 404" in str(exc_info.value)
        assert exc_info.value.exit_code == ExitCode.API_ERROR

    def test_calls_before_discovery_fail(self, api_client, fake_api):
        with pytest.raises(FlowBoardsApiError, match="not discovered"):
            api_client.get_bins()

        assert fake_api.requests == []


class TestRequests:
    """Tests for request construction."""

    def test_sends_bearer_auth_and_json_content_type(self, api_client, fake_api):
        api_client.discover_rest_prefix("org-1")
        api_client.get_bins()

        request = fake_api.requests[-1]
        assert request.headers["Authorization"] == "bearer test-key"
        assert request.headers["Content-Type"] == "application/json"

    def test_get_user_escapes_email(self, api_client, fake_api):
        api_client.discover_rest_prefix("org-1")

        user = api_client.get_user("dev+fb@example.com")

        assert user.id == "u1"
        assert fake_api.requests[-1].url.path == "/rest/users/dev+fb@example.com"
        assert "%40" in fake_api.requests[-1].url.raw_path.decode()

    def test_search_tickets_query(self, api_client, fake_api):
        api_client.discover_rest_prefix("org-1")

        api_client.search_tickets(["u1", "u2"], bin_id="bin2")

        params = fake_api.requests[-1].url.params
        assert params["users"] == "u1,u2"
        assert params["bins"] == "bin2"
        assert "boards" not in params

    def test_search_tickets_parses_tickets(self, api_client):
        api_client.discover_rest_prefix("org-1")

        tickets = api_client.search_tickets(["u1"])

        assert [t.id for t in tickets] == ["t1", "t2", "t3"]
        assert tickets[0].due_date is None
        assert tickets[0].created_at.year == 2024

    def test_get_bins_follows_pagination(self):
        seen_tokens = []

        def handler(request: httpx.Request) -> httpx.Response:
            token = request.url.params.get("page-token")
            seen_tokens.append(token)
            assert request.url.params["max-results"] == "1000"
            if token is None:
                return httpx.Response(
                    200, json={"results": [{"_id": "bin1", "name": "To Do"}], "page-token": "p2"}
                )
            return httpx.Response(200, json={"results": [{"_id": "bin2", "name": "Done"}]})

        client = discovered(handler)

        bins = client.get_bins()

        assert [b.name for b in bins] == ["To Do", "Done"]
        assert seen_tokens == [None, "p2"]

    def test_get_boards_accepts_legacy_array(self):
        client = discovered(
            lambda r: httpx.Response(200, json=[{"_id": "bd1", "name": "Main", "bins": ["bin1"]}])
        )

        boards = client.get_boards()

        assert boards[0].bins == ("bin1",)

    def test_post_comment(self, api_client, fake_api):
        api_client.discover_rest_prefix("org-1")
        payload = CommentPayload(id="abc_DEF-123", ticket_id="t1", comment="Started")

        api_client.post_comment(payload)

        request = fake_api.requests[-1]
        assert request.method == "POST"
        assert request.url.path == "/rest/ticket-comments/abc_DEF-123"
        assert json.loads(request.content) == {
            "_id": "abc_DEF-123",
            "ticket_id": "t1",
            "comment": "Started",
        }


class TestErrors:
    """Tests for error mapping."""

    def test_non_2xx_carries_context_status_and_body(self):
        client = discovered(lambda r: httpx.Response(500, text="internal failure"))

        with pytest.raises(ApiStatusError) as exc_info:
            client.get_bins()

        error = exc_info.value
        assert error.status_code == 500
        assert error.body == "internal failure"
        assert str(error) == "failed to get bins: API request failed with status 500: internal failure"

    def test_long_error_body_is_truncated(self):
        client = discovered(lambda r: httpx.Response(502, text="x" * 2000))

        with pytest.raises(ApiStatusError) as exc_info:
            client.search_tickets(["u1"])

        assert len(exc_info.value.body) == 503
        assert exc_info.value.body.endswith("...")

    def test_connection_failure_is_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = discovered(handler)

        with pytest.raises(TransportError, match="failed to get user: request failed"):
            client.get_user("dev@example.com")

    def test_timeout_is_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        client = discovered(handler)

        with pytest.raises(TransportError, match="timed out"):
            client.get_boards()

    def test_total_deadline_covers_body(self):
        page = {"results": [{"_id": "b1", "name": "To Do"}]}
        client = discovered(lambda r: httpx.Response(200, json=page))

        with patch("fb.integrations.client.time.monotonic", side_effect=itertools.count(0, 20)):
            with pytest.raises(TransportError, match="get bins: request timed out after 30s"):
                client.get_bins()

    def test_request_within_deadline_succeeds(self):
        page = {"results": [{"_id": "b1", "name": "To Do"}]}
        client = discovered(lambda r: httpx.Response(200, json=page))

        with patch("fb.integrations.client.time.monotonic", side_effect=itertools.count(0, 1)):
            bins = client.get_bins()

        assert [b.id for b in bins] == ["b1"]

    def test_malformed_ticket_json(self):
        client = discovered(lambda r: httpx.Response(200, text="{not json"))

        with pytest.raises(ResponseParseError, match="failed to parse ticket response"):
            client.search_tickets(["u1"])

    def test_ticket_response_must_be_array(self):
        client = discovered(lambda r: httpx.Response(200, json={"tickets": []}))

        with pytest.raises(ResponseParseError, match="expected an array"):
            client.search_tickets(["u1"])

    def test_bad_timestamp_is_parse_error(self):
        client = discovered(
            lambda r: httpx.Response(200, json=[{"_id": "t1", "name": "x", "createdAt": "yesterday"}])
        )

        with pytest.raises(ResponseParseError):
            client.search_tickets(["u1"])


class TestResourceManagement:
    """Tests for client lifecycle."""

    def test_context_manager_closes_owned_client(self):
        with FlowBoardsClient("key") as client:
            inner = client._http_client

        assert inner.is_closed

    def test_injected_client_is_left_open(self):
        http_client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))

        with FlowBoardsClient("key", http_client=http_client):
            pass

        assert not http_client.is_closed
