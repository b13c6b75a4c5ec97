"""Flow Boards REST API client.

FlowBoardsClient discovers the organization's REST prefix and performs
authenticated, synchronous requests against it. Every call is a single
attempt bounded by one fixed timeout; 2xx responses return the body and
anything else raises a FlowBoardsApiError subclass.

Resource Management:
    The client owns an httpx.Client. Use it as a context manager:

        with FlowBoardsClient(auth_key) as client:
            client.discover_rest_prefix(org_id)
            bins = client.get_bins()
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Literal
from urllib.parse import quote

import httpx

from fb.config.settings import DEFAULT_TIMEOUT_SECONDS
from fb.integrations.exceptions import (
    ApiStatusError,
    EndpointDiscoveryError,
    FlowBoardsApiError,
    ResponseParseError,
    TransportError,
)
from fb.integrations.models import Bin, Board, CommentPayload, Ticket, User
from fb.integrations.pagination import fetch_all, page_params

logger = logging.getLogger(__name__)

REST_DIRECTORY_URL = "https://fb.mauvable.com/rest-directory/2"
AUTHORIZATION_PREFIX = "bearer "


class FlowBoardsClient:
    """Authenticated client for one organization's Flow Boards API.

    httpx.Timeout only limits each phase of a request. Responses are
    streamed and the request is abandoned once timeout_seconds have passed
    since it started, body included.

    Attributes:
        _auth_key: API key sent as a bearer token
        _timeout_seconds: Total time allowed for one request, body included
        _timeout: httpx per-phase limit (connect, read, write, pool)
        _http_client: Underlying httpx client
        _base_url: REST prefix, set by discover_rest_prefix()
    """

    def __init__(
        self,
        auth_key: str,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: httpx.Client | None = None,
        directory_url: str = REST_DIRECTORY_URL,
    ) -> None:
        """Initialize the client.

        Args:
            auth_key: API authentication key
            timeout_seconds: Per-request timeout, applied even to an
                injected http_client
            http_client: Optional pre-built httpx client (tests inject one
                backed by httpx.MockTransport)
            directory_url: Base URL of the REST directory service
        """
        self._auth_key = auth_key
        self._timeout_seconds = timeout_seconds
        self._timeout = httpx.Timeout(timeout_seconds)
        self._owns_client = http_client is None
        self._http_client = http_client or httpx.Client(timeout=self._timeout)
        self._directory_url = directory_url.rstrip("/")
        self._base_url = ""

    def __enter__(self) -> FlowBoardsClient:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it.

        Safe to call multiple times.
        """
        if self._owns_client:
            self._http_client.close()

    @property
    def base_url(self) -> str:
        return self._base_url

    def discover_rest_prefix(self, org_id: str) -> str:
        """Look up and store the organization's REST prefix.

        Returns:
            The discovered prefix

        Raises:
            EndpointDiscoveryError: If the lookup fails or returns no prefix
        """
        url = f"{self._directory_url}/{quote(org_id, safe='')}"
        try:
            body = self._request("GET", url, context="failed to discover REST prefix")
        except FlowBoardsApiError as e:
            raise EndpointDiscoveryError(str(e), original_error=e) from e

        data = self._decode_json(body, "failed to parse REST prefix response")
        prefix = data.get("restUrlPrefix") if isinstance(data, dict) else None
        if not prefix or not isinstance(prefix, str):
            raise EndpointDiscoveryError("REST prefix not found in response")

        self._base_url = prefix.rstrip("/")
        logger.debug("Discovered REST prefix %s for org %s", self._base_url, org_id)
        return self._base_url

    def get_user(self, email: str) -> User:
        """Fetch a single user by email.

        Raises:
            FlowBoardsApiError: On transport, status, or parse failure
        """
        path = f"/users/{quote(email, safe='')}"
        body = self._request("GET", self._url(path), context="failed to get user")
        data = self._decode_json(body, "failed to parse user response")
        if not isinstance(data, dict):
            raise ResponseParseError(
                "failed to parse user response: expected an object",
                raw_response=body.decode("utf-8", errors="replace"),
            )
        return User.from_api(data)

    def search_tickets(
        self,
        user_ids: list[str],
        bin_id: str = "",
        board_id: str = "",
    ) -> list[Ticket]:
        """Search tickets assigned to any of the given users.

        Empty bin_id / board_id omit that filter. Whatever the server
        returns is passed through; the server may ignore the filters.

        Raises:
            FlowBoardsApiError: On transport, status, or parse failure
        """
        params: dict[str, str] = {}
        if user_ids:
            params["users"] = ",".join(user_ids)
        if bin_id:
            params["bins"] = bin_id
        if board_id:
            params["boards"] = board_id

        body = self._request(
            "GET",
            self._url("/ticket-search"),
            context="failed to search tickets",
            params=params,
        )
        data = self._decode_json(body, "failed to parse ticket response")
        if not isinstance(data, list):
            raise ResponseParseError(
                "failed to parse ticket response: expected an array",
                raw_response=body.decode("utf-8", errors="replace"),
            )
        try:
            return [Ticket.from_api(item) for item in data]
        except (AttributeError, TypeError, ValueError) as e:
            raise ResponseParseError(
                f"failed to parse ticket response: {e}",
                raw_response=body.decode("utf-8", errors="replace"),
                original_error=e,
            ) from e

    def get_bins(self) -> list[Bin]:
        """Fetch every bin, following pagination."""
        return [Bin.from_api(item) for item in self._fetch_collection("/bins", "bins")]

    def get_boards(self) -> list[Board]:
        """Fetch every board, following pagination."""
        return [Board.from_api(item) for item in self._fetch_collection("/boards", "boards")]

    def post_comment(self, payload: CommentPayload) -> None:
        """Post a comment; the comment ID is part of the path.

        Raises:
            FlowBoardsApiError: On transport or status failure
        """
        path = f"/ticket-comments/{quote(payload.id, safe='')}"
        self._request(
            "POST",
            self._url(path),
            context="failed to post comment",
            json_body=payload.to_api(),
        )

    def _fetch_collection(self, path: str, what: str) -> list[dict[str, Any]]:
        url = self._url(path)

        def get_page(page_token: str | None) -> bytes:
            return self._request(
                "GET",
                url,
                context=f"failed to get {what}",
                params=page_params(page_token),
            )

        return fetch_all(get_page, what)

    def _url(self, path: str) -> str:
        if not self._base_url:
            raise FlowBoardsApiError(
                "REST prefix not discovered, call discover_rest_prefix first"
            )
        return self._base_url + path

    def _request(
        self,
        method: Literal["GET", "POST"],
        url: str,
        *,
        context: str,
        params: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> bytes:
        """Execute one authenticated request and return the body.

        Raises:
            TransportError: On network failure, or if the request and its
                body take longer than timeout_seconds in total
            ApiStatusError: If the status is outside 2xx
        """
        headers = {
            "Authorization": AUTHORIZATION_PREFIX + self._auth_key,
            "Content-Type": "application/json",
        }
        kwargs: dict[str, Any] = {"headers": headers, "timeout": self._timeout}
        if params is not None:
            kwargs["params"] = params
        if json_body is not None:
            kwargs["content"] = json.dumps(json_body)

        logger.debug("%s %s", method, url)
        deadline = time.monotonic() + self._timeout_seconds
        try:
            with self._http_client.stream(method, url, **kwargs) as response:
                self._check_deadline(deadline, context)
                chunks = []
                for chunk in response.iter_bytes():
                    chunks.append(chunk)
                    self._check_deadline(deadline, context)
        except httpx.TimeoutException as e:
            raise TransportError(f"{context}: request timed out: {e}", original_error=e) from e
        except httpx.HTTPError as e:
            raise TransportError(f"{context}: request failed: {e}", original_error=e) from e

        body = b"".join(chunks)
        if not response.is_success:
            raise ApiStatusError(
                context,
                response.status_code,
                body.decode(response.encoding or "utf-8", errors="replace"),
            )
        return body

    def _check_deadline(self, deadline: float, context: str) -> None:
        if time.monotonic() > deadline:
            raise TransportError(
                f"{context}: request timed out after {self._timeout_seconds:g}s"
            )

    @staticmethod
    def _decode_json(body: bytes, context: str) -> Any:
        try:
            return json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ResponseParseError(
                f"{context}: {e}",
                raw_response=body.decode("utf-8", errors="replace"),
                original_error=e,
            ) from e


__all__ = [
    "REST_DIRECTORY_URL",
    "FlowBoardsClient",
]
