import json
from collections.abc import Mapping
from typing import cast
from urllib.parse import urlencode, urlsplit, urlunsplit

from .headers import has_header, normalize_headers
from .httptypes import RESPONSE_TYPES, HeaderValue, JsonValue, QueryParams, ResponseType
from .schemas import RequestPayload

UNSET = object()

JSON_CONTENT_TYPE = "application/json"


class RequestValidationError(ValueError):
    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"Invalid HTTP request: {field} {reason}")
        self.field = field
        self.reason = reason


def _query_pairs(query: QueryParams) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []

    for key, value in query.items():
        if value is None:
            continue

        if isinstance(value, list | tuple):
            pairs.extend((str(key), _query_value(item)) for item in value)
        else:
            pairs.append((str(key), _query_value(value)))

    return pairs


def _query_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"

    return str(value)


def append_query(url: str, query: QueryParams | None) -> str:
    """Append ``query`` to ``url`` without touching its existing parameters."""
    if not query:
        return url

    encoded = urlencode(_query_pairs(query))

    if not encoded:
        return url

    scheme, netloc, path, existing, fragment = urlsplit(url)
    combined = f"{existing}&{encoded}" if existing else encoded
    return urlunsplit((scheme, netloc, path, combined, fragment))


def serialize_json_body(value: JsonValue) -> str:
    return json.dumps(
        value,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


class RequestFactory:
    def build(  # noqa: PLR0913
        self,
        method: str | None,
        url: str | None,
        *,
        query: QueryParams | None = None,
        headers: Mapping[str, HeaderValue] | None = None,
        body: str | bytes | None = None,
        json: JsonValue = cast("JsonValue", UNSET),
        response_type: ResponseType | None = None,
    ) -> RequestPayload:
        if not method or not str(method).strip():
            raise RequestValidationError("method", "is required")

        if not url or not str(url).strip():
            raise RequestValidationError("url", "is required")

        has_json = json is not UNSET

        if has_json and body is not None:
            raise RequestValidationError("body", "cannot be combined with json")

        if response_type is not None and response_type not in RESPONSE_TYPES:
            allowed = ", ".join(sorted(RESPONSE_TYPES))
            raise RequestValidationError(
                "response_type",
                f"must be one of {allowed}, got {response_type!r}",
            )

        normalized_headers = normalize_headers(headers)

        if has_json:
            try:
                body = serialize_json_body(json)
            except (TypeError, ValueError) as error:
                raise RequestValidationError(
                    "json",
                    f"is not serializable: {error}",
                ) from error

            if not has_header(normalized_headers, "content-type"):
                normalized_headers["content-type"] = JSON_CONTENT_TYPE

        if isinstance(body, bytes):
            body = body.decode()

        return RequestPayload(
            method=str(method).strip().upper(),
            url=append_query(str(url), query),
            headers=normalized_headers or None,
            body=body,
            response_type=response_type,
        )

    def serialize(  # noqa: PLR0913
        self,
        method: str | None,
        url: str | None,
        *,
        query: QueryParams | None = None,
        headers: Mapping[str, HeaderValue] | None = None,
        body: str | bytes | None = None,
        json: JsonValue = cast("JsonValue", UNSET),
        response_type: ResponseType | None = None,
    ) -> str:
        return self.build(
            method,
            url,
            query=query,
            headers=headers,
            body=body,
            json=json,
            response_type=response_type,
        ).to_wire()
