"""Host side of the bridge.

The executor receives a serialized request payload, performs the real HTTP
call with ``requests`` and answers with a serialized response payload. The
boundary only carries strings, so nothing raised here may escape
``Executor.execute``: every failure becomes a failure payload.
"""

import base64
import json
import logging
from collections.abc import Callable, Collection

import pydantic
import requests

from .config import DEFAULT_BINARY_CONTENT_TYPES, Settings
from .headers import get_header, normalize_headers
from .httptypes import RESPONSE_TYPES, ResponseType
from .logs import request_repr
from .schemas import (
    ErrorInfo,
    FailurePayload,
    RequestPayload,
    SuccessPayload,
)

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], requests.Session]


class InvalidPayloadError(ValueError):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def parse_request_payload(raw: str | bytes) -> RequestPayload:
    try:
        document = json.loads(raw)
    except (TypeError, ValueError) as error:
        msg = f"HTTP request payload is not valid JSON: {error}"
        raise InvalidPayloadError(msg) from error

    if not isinstance(document, dict):
        msg = "HTTP request payload must be a JSON object"
        raise InvalidPayloadError(msg)

    url = document.get("url")

    if not isinstance(url, str) or not url.strip():
        msg = "HTTP request payload must include url"
        raise InvalidPayloadError(msg)

    method = str(document.get("method") or "").strip().upper() or "GET"
    response_type = document.get("responseType")

    if response_type is not None and response_type not in RESPONSE_TYPES:
        msg = f"Unsupported responseType: {response_type!r}"
        raise InvalidPayloadError(msg)

    headers = document.get("headers")

    if headers is not None and not isinstance(headers, dict):
        msg = "HTTP request payload headers must be a JSON object"
        raise InvalidPayloadError(msg)

    body = document.get("body")

    if body is not None and not isinstance(body, str):
        body = json.dumps(body, separators=(",", ":"))

    try:
        return RequestPayload(
            method=method,
            url=url,
            headers=normalize_headers(headers) or None,
            body=body,
            response_type=response_type,
        )
    except pydantic.ValidationError as error:
        msg = f"Malformed HTTP request payload: {error}"
        raise InvalidPayloadError(msg) from error


def infer_response_type(
    content_type: str | None,
    binary_content_types: Collection[str] = DEFAULT_BINARY_CONTENT_TYPES,
) -> ResponseType:
    if not content_type:
        return "text"

    media_type = content_type.split(";", 1)[0].strip().lower()

    if "json" in media_type:
        return "json"

    if any(media_type.startswith(prefix) for prefix in binary_content_types):
        return "arrayBuffer"

    return "text"


def failure(message: str, details: pydantic.JsonValue = None) -> FailurePayload:
    return FailurePayload(error=ErrorInfo(message=message, details=details))


class Executor:
    def __init__(
        self,
        settings: Settings | None = None,
        session_factory: SessionFactory = requests.Session,
    ) -> None:
        self._settings = settings or Settings.from_env()
        self._session_factory = session_factory

    def execute(self, raw: str | bytes) -> str:
        try:
            request = parse_request_payload(raw)
        except InvalidPayloadError as error:
            logger.warning("Rejected HTTP request payload: %s", error.message)
            return failure(error.message).to_wire()

        return self.fetch(request).to_wire()

    def fetch(self, request: RequestPayload) -> SuccessPayload | FailurePayload:
        logger.info(
            "Fetching for bridge caller: %s",
            request_repr(
                method=request.method,
                url=request.url,
                query_params=None,
                headers=request.headers,
                body=request.body,
                sensitive_headers=self._settings.sensitive_headers,
            ),
        )

        try:
            with self._session_factory() as session:
                response = session.request(
                    method=request.method,
                    url=request.url,
                    headers=request.headers,
                    data=request.body.encode() if request.body is not None else None,
                    verify=self._settings.verify_tls,
                )
                payload = self._materialize(request, response)
        except Exception as error:  # noqa: BLE001
            logger.exception("HTTP %s %s failed", request.method, request.url)
            return failure(
                str(error) or type(error).__name__,
                details={"type": type(error).__name__},
            )

        logger.info(
            "Upstream responded: HTTP %s %s (%s)",
            payload.status,
            payload.status_text,
            payload.response_type,
        )
        return payload

    def _materialize(
        self,
        request: RequestPayload,
        response: requests.Response,
    ) -> SuccessPayload:
        headers = {name.lower(): value for name, value in response.headers.items()}
        response_type = request.response_type or infer_response_type(
            get_header(headers, "content-type"),
            self._settings.binary_content_types,
        )
        content = response.content or b""

        if response_type == "arrayBuffer":
            return SuccessPayload(
                status=response.status_code,
                status_text=response.reason or "",
                headers=headers,
                url=response.url or request.url,
                body=base64.b64encode(content).decode("ascii"),
                response_type=response_type,
                base64=True,
            )

        return SuccessPayload(
            status=response.status_code,
            status_text=response.reason or "",
            headers=headers,
            url=response.url or request.url,
            body=content.decode("utf-8", errors="replace"),
            response_type=response_type,
        )
