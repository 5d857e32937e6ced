from .client import Client, delete, get, head, options, patch, post, put, request
from .executor import Executor
from .host_bridge import (
    BridgeNotConfiguredError,
    HostFunction,
    LocalBridge,
    clear_http_fetch,
    get_http_fetch,
    register_http_fetch,
)
from .requests_factory import RequestFactory, RequestValidationError
from .response import BridgeError, DecodingError, Response, adapt

__all__ = [
    "BridgeError",
    "BridgeNotConfiguredError",
    "Client",
    "DecodingError",
    "Executor",
    "HostFunction",
    "LocalBridge",
    "RequestFactory",
    "RequestValidationError",
    "Response",
    "adapt",
    "clear_http_fetch",
    "delete",
    "get",
    "get_http_fetch",
    "head",
    "options",
    "patch",
    "post",
    "put",
    "register_http_fetch",
    "request",
]
