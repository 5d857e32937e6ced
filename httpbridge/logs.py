from collections.abc import Collection, Mapping

from .httptypes import QueryParams


def request_repr(  # noqa: PLR0913
    method: str,
    url: str,
    query_params: QueryParams | None,
    headers: Mapping[str, str] | None,
    body: str | None,
    sensitive_headers: Collection[str] | None = None,
) -> str:
    if sensitive_headers is None:
        sensitive_headers = set()

    return str(
        {
            "method": method,
            "url": url,
            "query": query_params,
            "headers": masked_headers(headers or {}, sensitive_headers),
            "body": body,
        },
    )


def masked_headers(
    headers: Mapping[str, str],
    sensitive_headers: Collection[str],
) -> dict[str, str]:
    lowered = {header.lower() for header in sensitive_headers}
    return {
        header: masked_header_value(header, value, lowered)
        for header, value in headers.items()
    }


def masked_header_value(
    header: str,
    value: str | bytes,
    sensitive_headers: Collection[str],
) -> str:
    if isinstance(value, bytes):
        value = value.decode()

    if header.lower() in sensitive_headers:
        length = len(value)
        begin = value[:10]
        return f"{begin}*** ({length} chars)"

    return value
