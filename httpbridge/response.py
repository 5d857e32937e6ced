import base64
import json
import logging
from dataclasses import dataclass, field
from functools import cached_property
from http import HTTPStatus

from pydantic import JsonValue

from .headers import get_header
from .httptypes import Headers, ResponseType
from .schemas import FailurePayload, PayloadError, parse_response_payload

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "HTTP request failed"
INVALID_PAYLOAD_MESSAGE = "Invalid response payload from host bridge"


class BridgeError(Exception):
    def __init__(self, message: str | None, details: JsonValue = None) -> None:
        self.message = message or DEFAULT_ERROR_MESSAGE
        self.details = details
        super().__init__(self.message)


class DecodingError(ValueError):
    def __init__(self, message: str, body: str | bytes) -> None:
        super().__init__(message)
        self.body = body


@dataclass(frozen=True)
class Response:
    status: int
    status_text: str
    headers: Headers
    url: str
    response_type: ResponseType
    raw_body: str = field(repr=False)
    base64: bool = False

    @cached_property
    def body(self) -> str | bytes:
        """Response body: bytes for binary payloads, text otherwise."""
        if not self.base64:
            return self.raw_body

        try:
            return base64.b64decode(self.raw_body, validate=True)
        except ValueError as error:
            msg = f"Response body is not valid base64: {error}"
            raise DecodingError(msg, self.raw_body) from error

    @property
    def content(self) -> bytes:
        body = self.body
        return body if isinstance(body, bytes) else body.encode()

    @property
    def text(self) -> str:
        body = self.body
        return body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body

    @property
    def success(self) -> bool:
        return HTTPStatus.OK <= self.status < HTTPStatus.MULTIPLE_CHOICES

    def header(self, name: str) -> str | None:
        return get_header(self.headers, name)

    def json(self) -> JsonValue:
        try:
            return json.loads(self.body)
        except (TypeError, ValueError) as error:
            msg = f"Response body is not valid JSON: {error}"
            raise DecodingError(msg, self.body) from error


def adapt(raw: str | bytes) -> Response:
    try:
        payload = parse_response_payload(raw)
    except PayloadError as error:
        logger.warning("Could not parse bridge response: %s", error.message)
        raise BridgeError(INVALID_PAYLOAD_MESSAGE, details=error.message) from error

    if isinstance(payload, FailurePayload):
        raise BridgeError(payload.error.message, details=payload.error.details)

    return Response(
        status=payload.status,
        status_text=payload.status_text,
        headers=dict(payload.headers),
        url=payload.url,
        response_type=payload.response_type,
        raw_body=payload.body,
        base64=bool(payload.base64),
    )
