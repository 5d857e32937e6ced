import logging
from collections.abc import Mapping
from typing import cast

from .config import Settings
from .host_bridge import HostFunction, get_http_fetch
from .httptypes import HeaderValue, JsonValue, QueryParams, ResponseType
from .logs import request_repr
from .requests_factory import UNSET, RequestFactory
from .response import Response, adapt

logger = logging.getLogger(__name__)


class Client:
    """Issues HTTP requests through the host bridge.

    Every call is independent: the request is serialized, handed to the
    bridge in one blocking round trip and the answer adapted into a
    ``Response``. Failed exchanges raise ``BridgeError``; HTTP error
    statuses do not.
    """

    def __init__(
        self,
        bridge: HostFunction | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._bridge = bridge
        self._settings = settings or Settings.from_env()
        self._request_factory = RequestFactory()

    @property
    def bridge(self) -> HostFunction:
        if self._bridge is not None:
            return self._bridge

        return get_http_fetch()

    def request(  # noqa: PLR0913
        self,
        method: str,
        url: str,
        *,
        query: QueryParams | None = None,
        headers: Mapping[str, HeaderValue] | None = None,
        body: str | bytes | None = None,
        json: JsonValue = cast("JsonValue", UNSET),
        response_type: ResponseType | None = None,
    ) -> Response:
        payload = self._request_factory.build(
            method,
            url,
            query=query,
            headers=headers,
            body=body,
            json=json,
            response_type=response_type,
        )
        bridge = self.bridge

        logger.info(
            "Requested through host bridge: %s",
            request_repr(
                method=payload.method,
                url=payload.url,
                query_params=query,
                headers=payload.headers,
                body=payload.body,
                sensitive_headers=self._settings.sensitive_headers,
            ),
        )

        response = adapt(bridge.apply(payload.to_wire()))

        logger.info(
            "Host bridge responded: HTTP %s %s",
            response.status,
            response.status_text,
        )
        return response

    def get(self, url: str, **options) -> Response:
        return self.request("GET", url, **options)

    def post(self, url: str, **options) -> Response:
        return self.request("POST", url, **options)

    def put(self, url: str, **options) -> Response:
        return self.request("PUT", url, **options)

    def patch(self, url: str, **options) -> Response:
        return self.request("PATCH", url, **options)

    def delete(self, url: str, **options) -> Response:
        return self.request("DELETE", url, **options)

    def head(self, url: str, **options) -> Response:
        return self.request("HEAD", url, **options)

    def options(self, url: str, **options) -> Response:
        return self.request("OPTIONS", url, **options)


def request(method: str, url: str, **options) -> Response:
    return Client().request(method, url, **options)


def get(url: str, **options) -> Response:
    return Client().get(url, **options)


def post(url: str, **options) -> Response:
    return Client().post(url, **options)


def put(url: str, **options) -> Response:
    return Client().put(url, **options)


def patch(url: str, **options) -> Response:
    return Client().patch(url, **options)


def delete(url: str, **options) -> Response:
    return Client().delete(url, **options)


def head(url: str, **options) -> Response:
    return Client().head(url, **options)


def options(url: str, **options) -> Response:
    return Client().options(url, **options)
