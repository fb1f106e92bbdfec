"""
Response status envelopes and body interpretation.

Only the status part of each response is modeled. The legacy web services
(Geocoding, Directions, Distance Matrix, Elevation, Time Zone) put a
status string in every body. The newer APIs (Places, Address Validation)
return the resource itself, or a google.rpc Status under an "error" key.
"""

import json
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from .transport_errors import ApiStatusError, MalformedResponseError


class ResponseFormat(Enum):
    STATUS_ENVELOPE = "status_envelope"
    RESOURCE = "resource"
    BINARY = "binary"


class LegacyStatus(str, Enum):
    """Status values reported by the legacy web service APIs."""

    OK = "OK"
    ZERO_RESULTS = "ZERO_RESULTS"
    NOT_FOUND = "NOT_FOUND"
    INVALID_REQUEST = "INVALID_REQUEST"
    MAX_WAYPOINTS_EXCEEDED = "MAX_WAYPOINTS_EXCEEDED"
    MAX_ROUTE_LENGTH_EXCEEDED = "MAX_ROUTE_LENGTH_EXCEEDED"
    MAX_ELEMENTS_EXCEEDED = "MAX_ELEMENTS_EXCEEDED"
    MAX_DIMENSIONS_EXCEEDED = "MAX_DIMENSIONS_EXCEEDED"
    OVER_DAILY_LIMIT = "OVER_DAILY_LIMIT"
    OVER_QUERY_LIMIT = "OVER_QUERY_LIMIT"
    REQUEST_DENIED = "REQUEST_DENIED"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    DATA_NOT_AVAILABLE = "DATA_NOT_AVAILABLE"


class LegacyEnvelope(BaseModel):
    """The status fields shared by every legacy web service response."""

    model_config = ConfigDict(extra="allow")

    status: LegacyStatus
    error_message: Optional[str] = None


class RpcStatus(BaseModel):
    """google.rpc.Status as returned by the newer Google APIs."""

    code: int
    message: str = ""
    status: str = ""
    details: List[Dict[str, Any]] = []


class RpcErrorEnvelope(BaseModel):
    error: RpcStatus


def decode_json(content: bytes) -> Any:
    try:
        return json.loads(content)
    except (ValueError, UnicodeDecodeError) as e:
        raise MalformedResponseError(f"Response body is not valid JSON: {e}") from e


def parse_rpc_error(payload: Any) -> Optional[RpcStatus]:
    """Return the google.rpc Status in a payload, or None if there is none."""
    if not isinstance(payload, dict) or "error" not in payload:
        return None
    try:
        return RpcErrorEnvelope.model_validate(payload).error
    except ValidationError:
        return None


def error_message_from_body(content: bytes) -> str:
    """Best-effort human-readable message from a non-success response body."""
    try:
        payload = json.loads(content)
    except (ValueError, UnicodeDecodeError):
        return ""
    rpc_status = parse_rpc_error(payload)
    if rpc_status is not None:
        return rpc_status.message
    if isinstance(payload, dict) and isinstance(payload.get("error_message"), str):
        return payload["error_message"]
    return ""


def _interpret_status_envelope(content: bytes) -> Dict[str, Any]:
    payload = decode_json(content)
    try:
        envelope = LegacyEnvelope.model_validate(payload)
    except ValidationError as e:
        raise MalformedResponseError(f"Unexpected response shape: {e}") from e

    if envelope.status is not LegacyStatus.OK:
        raise ApiStatusError(envelope.status.value, envelope.error_message)
    return payload


def _interpret_resource(content: bytes) -> Dict[str, Any]:
    payload = decode_json(content)
    if not isinstance(payload, dict):
        raise MalformedResponseError(
            f"Expected a JSON object, got {type(payload).__name__}"
        )

    if "error" in payload:
        rpc_status = parse_rpc_error(payload)
        if rpc_status is None:
            raise MalformedResponseError("Response contains an unreadable error object")
        raise ApiStatusError(
            rpc_status.status or "UNKNOWN",
            rpc_status.message,
            code=rpc_status.code,
        )
    return payload


def interpret_body(response_format: ResponseFormat, content: bytes) -> Any:
    """
    Turn a 2xx response body into a result, or raise the matching error.

    Raises:
        MalformedResponseError: The body does not have the expected shape
        ApiStatusError: The body reports a non-success API status
    """
    if response_format is ResponseFormat.BINARY:
        if not content:
            raise MalformedResponseError("Empty response body")
        return content
    if response_format is ResponseFormat.STATUS_ENVELOPE:
        return _interpret_status_envelope(content)
    return _interpret_resource(content)
