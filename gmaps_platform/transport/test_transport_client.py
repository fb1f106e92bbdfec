"""
Tests for GoogleMapsClient.

The requests session is replaced with a MagicMock so no network traffic
happens; retries use a zero-delay backoff policy.
"""

import json
import logging
from datetime import timedelta
from unittest.mock import MagicMock, patch
import pytest
import requests

from .transport_client import GoogleMapsClient
from .transport_endpoint import Endpoint, KeyPlacement
from .transport_errors import (
    ApiStatusError,
    ClientError,
    InvalidRequestError,
    MalformedResponseError,
    RateLimitedError,
    ServerError,
    TransportError,
)
from .transport_rate_limiter import ApiCategory
from .transport_retry import BackoffPolicy
from .transport_status import ResponseFormat


API_KEY = "AIzaTestKey-do-not-log"

LEGACY_ENDPOINT = Endpoint(
    title="Geocoding API",
    url="https://maps.googleapis.com/maps/api/geocode/json",
    categories=(ApiCategory.ALL, ApiCategory.GEOCODING),
)

RESOURCE_ENDPOINT = Endpoint(
    title="Places API (New) Place Details",
    url="https://places.googleapis.com/v1/places/{place_id}",
    categories=(ApiCategory.ALL, ApiCategory.PLACES_NEW, ApiCategory.PLACE_DETAILS),
    response_format=ResponseFormat.RESOURCE,
    key_placement=KeyPlacement.HEADER,
)

BINARY_ENDPOINT = Endpoint(
    title="Places API (New) Place Photo",
    url="https://places.googleapis.com/v1/{photo_name}/media",
    categories=(ApiCategory.ALL, ApiCategory.PLACE_PHOTO),
    response_format=ResponseFormat.BINARY,
    key_placement=KeyPlacement.HEADER,
)


# ==================== FIXTURES ====================

def make_response(status_code=200, payload=None, content=None, reason="OK"):
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    if content is None:
        content = json.dumps(payload).encode("utf-8") if payload is not None else b""
    response.content = content
    return response


@pytest.fixture
def session():
    mock_session = MagicMock()
    mock_session.headers = {}
    return mock_session


@pytest.fixture
def client(session):
    return GoogleMapsClient(
        api_key=API_KEY,
        backoff_policy=BackoffPolicy(initial_delay=0.0, max_delay=0.0, max_attempts=3),
        session=session,
    )


# ==================== CONSTRUCTION ====================

class TestClientInit:
    """Test client construction and builder settings."""

    def test_init_with_api_key(self, session):
        client = GoogleMapsClient(api_key=API_KEY, session=session)

        assert client.api_key == API_KEY
        assert client.request_timeout == 30
        assert client.backoff_policy == BackoffPolicy()
        assert session.headers["User-Agent"] == GoogleMapsClient.USER_AGENT

    def test_init_from_config(self, monkeypatch, session):
        monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "env_key")

        client = GoogleMapsClient(session=session)

        assert client.api_key == "env_key"

    def test_init_without_key_raises(self, monkeypatch, session):
        monkeypatch.delenv("GOOGLE_MAPS_API_KEY", raising=False)

        with pytest.raises(ValueError, match="GOOGLE_MAPS_API_KEY"):
            GoogleMapsClient(session=session)

    def test_builder_settings_chain(self, client):
        result = (client
                  .with_rate(ApiCategory.ALL, 50, 1.0)
                  .with_rate(ApiCategory.GEOCODING, 600, timedelta(minutes=1))
                  .with_max_retries(5)
                  .with_max_delay(timedelta(seconds=10)))

        assert result is client
        assert client.rate_limit.get(ApiCategory.ALL).target_rate == 50.0
        assert client.rate_limit.get(ApiCategory.GEOCODING).target_rate == 10.0
        assert client.backoff_policy.max_attempts == 6
        assert client.backoff_policy.max_delay == 10.0

    def test_with_backoff_policy(self, client):
        policy = BackoffPolicy(initial_delay=0.5, max_attempts=2)

        assert client.with_backoff_policy(policy).backoff_policy is policy

    def test_close_closes_session(self, client, session):
        client.close()

        session.close.assert_called_once()


# ==================== REQUESTS ====================

class TestClientRequests:
    """Test request construction and key placement."""

    def test_get_request_puts_key_in_query(self, client, session):
        session.request.return_value = make_response(payload={"status": "OK", "results": []})

        result = client.get_request(LEGACY_ENDPOINT, {"address": "Paris"})

        assert result == {"status": "OK", "results": []}
        session.request.assert_called_once_with(
            "GET",
            LEGACY_ENDPOINT.url,
            params={"address": "Paris", "key": API_KEY},
            json=None,
            headers={},
            timeout=30,
        )

    def test_header_key_endpoint(self, client, session):
        session.request.return_value = make_response(payload={"id": "abc", "displayName": {"text": "Cafe"}})

        result = client.get_request(
            RESOURCE_ENDPOINT,
            headers={"X-Goog-FieldMask": "id,displayName"},
            path_params={"place_id": "abc"},
        )

        assert result["id"] == "abc"
        args, kwargs = session.request.call_args
        assert args == ("GET", "https://places.googleapis.com/v1/places/abc")
        assert "key" not in kwargs["params"]
        assert kwargs["headers"] == {
            "X-Goog-FieldMask": "id,displayName",
            "X-Goog-Api-Key": API_KEY,
        }

    def test_post_request_sends_json_body(self, client, session):
        session.request.return_value = make_response(payload={"places": []})
        endpoint = Endpoint(
            title="Text Search",
            url="https://places.googleapis.com/v1/places:searchText",
            categories=(ApiCategory.ALL, ApiCategory.TEXT_SEARCH),
            response_format=ResponseFormat.RESOURCE,
            key_placement=KeyPlacement.HEADER,
        )

        client.post_request(endpoint, {"textQuery": "pizza"})

        args, kwargs = session.request.call_args
        assert args[0] == "POST"
        assert kwargs["json"] == {"textQuery": "pizza"}

    def test_missing_path_parameter(self, client, session):
        with pytest.raises(InvalidRequestError, match="place_id"):
            client.get_request(RESOURCE_ENDPOINT)

        session.request.assert_not_called()

    def test_binary_response(self, client, session):
        session.request.return_value = make_response(content=b"\x89PNG...")

        result = client.get_request(BINARY_ENDPOINT, path_params={"photo_name": "places/a/photos/b"})

        assert result == b"\x89PNG..."

    def test_rate_limits_observed_before_request(self, client, session):
        session.request.return_value = make_response(payload={"status": "OK"})

        with patch.object(client.rate_limit, "limit_apis", return_value=0) as mock_limit:
            client.get_request(LEGACY_ENDPOINT)

        mock_limit.assert_called_once_with(LEGACY_ENDPOINT.categories)

    def test_api_key_is_never_logged(self, client, session, caplog):
        session.request.side_effect = [
            requests.exceptions.ConnectionError(f"failed for ...?key={API_KEY}"),
            make_response(payload={"status": "OK"}),
        ]

        with caplog.at_level(logging.DEBUG, logger="gmaps_platform"):
            client.get_request(LEGACY_ENDPOINT, {"address": "Paris"})

        assert "Geocoding API" in caplog.text
        assert API_KEY not in caplog.text


# ==================== FAILURES ====================

class TestClientFailures:
    """Test error mapping and retries."""

    def test_success_needs_one_attempt(self, client, session):
        session.request.return_value = make_response(payload={"status": "OK", "results": [1]})

        client.get_request(LEGACY_ENDPOINT)

        assert session.request.call_count == 1

    def test_transport_errors_are_retried(self, client, session):
        session.request.side_effect = [
            requests.exceptions.ConnectionError("reset"),
            requests.exceptions.Timeout("timed out"),
            make_response(payload={"status": "OK"}),
        ]

        assert client.get_request(LEGACY_ENDPOINT) == {"status": "OK"}
        assert session.request.call_count == 3

    def test_transport_error_after_exhaustion(self, client, session):
        session.request.side_effect = requests.exceptions.ConnectionError("unreachable")

        with pytest.raises(TransportError) as exc_info:
            client.get_request(LEGACY_ENDPOINT)

        assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)
        assert session.request.call_count == 3

    def test_other_request_exceptions_are_permanent(self, client, session):
        session.request.side_effect = requests.exceptions.InvalidURL("bad url")

        with pytest.raises(InvalidRequestError):
            client.get_request(LEGACY_ENDPOINT)

        assert session.request.call_count == 1

    def test_server_error_then_success(self, client, session):
        session.request.side_effect = [
            make_response(503, reason="Service Unavailable"),
            make_response(payload={"status": "OK"}),
        ]

        assert client.get_request(LEGACY_ENDPOINT) == {"status": "OK"}
        assert session.request.call_count == 2

    def test_rate_limited_is_retried(self, client, session):
        session.request.side_effect = [
            make_response(429, reason="Too Many Requests"),
            make_response(payload={"status": "OK"}),
        ]

        client.get_request(LEGACY_ENDPOINT)

        assert session.request.call_count == 2

    def test_persistent_server_error(self, client, session):
        session.request.return_value = make_response(503, reason="Service Unavailable")

        with pytest.raises(ServerError) as exc_info:
            client.get_request(LEGACY_ENDPOINT)

        assert exc_info.value.status_code == 503
        assert session.request.call_count == 3

    def test_client_error_message_from_rpc_body(self, client, session):
        session.request.return_value = make_response(
            400,
            reason="Bad Request",
            payload={"error": {"code": 400, "message": "Invalid field mask", "status": "INVALID_ARGUMENT"}},
        )

        with pytest.raises(ClientError) as exc_info:
            client.get_request(RESOURCE_ENDPOINT, path_params={"place_id": "abc"})

        assert exc_info.value.message == "Invalid field mask"
        assert session.request.call_count == 1

    def test_legacy_permanent_status(self, client, session):
        session.request.return_value = make_response(payload={"status": "ZERO_RESULTS", "results": []})

        with pytest.raises(ApiStatusError) as exc_info:
            client.get_request(LEGACY_ENDPOINT)

        assert exc_info.value.status == "ZERO_RESULTS"
        assert session.request.call_count == 1

    def test_legacy_unknown_error_is_retried(self, client, session):
        session.request.side_effect = [
            make_response(payload={"status": "UNKNOWN_ERROR"}),
            make_response(payload={"status": "OK", "results": []}),
        ]

        client.get_request(LEGACY_ENDPOINT)

        assert session.request.call_count == 2

    def test_legacy_error_message(self, client, session):
        session.request.return_value = make_response(
            payload={"status": "REQUEST_DENIED", "error_message": "The provided API key is invalid."}
        )

        with pytest.raises(ApiStatusError, match="The provided API key is invalid."):
            client.get_request(LEGACY_ENDPOINT)

    @pytest.mark.parametrize("content", [
        b"<html>oops</html>",
        b'{"results": []}',
        b'{"status": "SOMETHING_NEW"}',
        b"",
    ])
    def test_malformed_legacy_body(self, client, session, content):
        session.request.return_value = make_response(content=content)

        with pytest.raises(MalformedResponseError):
            client.get_request(LEGACY_ENDPOINT)

        assert session.request.call_count == 1

    def test_resource_error_object(self, client, session):
        session.request.return_value = make_response(
            payload={"error": {"code": 404, "message": "Place not found", "status": "NOT_FOUND"}}
        )

        with pytest.raises(ApiStatusError) as exc_info:
            client.get_request(RESOURCE_ENDPOINT, path_params={"place_id": "abc"})

        assert exc_info.value.status == "NOT_FOUND"
        assert exc_info.value.code == 404

    def test_resource_must_be_object(self, client, session):
        session.request.return_value = make_response(payload=["not", "an", "object"])

        with pytest.raises(MalformedResponseError):
            client.get_request(RESOURCE_ENDPOINT, path_params={"place_id": "abc"})

    def test_empty_binary_body(self, client, session):
        session.request.return_value = make_response(content=b"")

        with pytest.raises(MalformedResponseError):
            client.get_request(BINARY_ENDPOINT, path_params={"photo_name": "places/a/photos/b"})

    def test_rate_limited_error_type(self, client, session):
        session.request.return_value = make_response(429, reason="Too Many Requests")

        with pytest.raises(RateLimitedError):
            client.get_request(LEGACY_ENDPOINT)
