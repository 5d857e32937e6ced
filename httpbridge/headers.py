from collections.abc import Mapping

from .httptypes import Headers, HeaderValue


def normalize_header_value(value: HeaderValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"

    if isinstance(value, str | bytes):
        return value.decode() if isinstance(value, bytes) else value

    if isinstance(value, list | tuple):
        return ", ".join(
            normalize_header_value(item) for item in value if item is not None
        )

    return str(value)


def normalize_headers(headers: Mapping[str, HeaderValue] | None) -> Headers:
    """Coerce every header value to a string.

    Sequences are joined with ", " in their original order. Entries whose
    value is None are dropped. Header names keep the casing they were given.
    """
    if not headers:
        return {}

    return {
        str(name): normalize_header_value(value)
        for name, value in headers.items()
        if value is not None
    }


def get_header(headers: Mapping[str, str] | None, name: str) -> str | None:
    if not headers:
        return None

    lowered = name.lower()

    for header, value in headers.items():
        if header.lower() == lowered:
            return value

    return None


def has_header(headers: Mapping[str, str] | None, name: str) -> bool:
    return get_header(headers, name) is not None
