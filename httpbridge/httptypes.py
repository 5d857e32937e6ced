from collections.abc import Sequence
from typing import Literal

JsonValue = (
    bool | int | float | str | None | list["JsonValue"] | dict[str, "JsonValue"]
)
JsonList = list[JsonValue]
JsonDict = dict[str, JsonValue]
Json = JsonList | JsonDict
Headers = dict[str, str]
HeaderScalar = str | int | float | bool
HeaderValue = HeaderScalar | Sequence[HeaderScalar] | None
RawHeaders = dict[str, HeaderValue]
QueryParams = dict[str, str | int | float | bool | list[str]]
ResponseType = Literal["text", "json", "arrayBuffer"]

RESPONSE_TYPES: frozenset[str] = frozenset({"text", "json", "arrayBuffer"})
