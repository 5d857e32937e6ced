"""The single string-in/string-out call connecting a caller to its host.

Embedding hosts register their fetch function once with
``register_http_fetch``; clients look it up on every call unless they were
given a bridge explicitly.
"""

import threading
from typing import Protocol, runtime_checkable

from .executor import Executor


@runtime_checkable
class HostFunction(Protocol):
    def apply(self, payload: str) -> str: ...


class BridgeNotConfiguredError(RuntimeError):
    def __init__(self) -> None:
        super().__init__(
            "No host HTTP fetch function registered. "
            "Call register_http_fetch() or pass a bridge to the client.",
        )


class LocalBridge:
    """Runs the executor in-process."""

    def __init__(self, executor: Executor | None = None) -> None:
        self.executor = executor or Executor()

    def apply(self, payload: str) -> str:
        return self.executor.execute(payload)


_lock = threading.Lock()
_http_fetch: HostFunction | None = None


def register_http_fetch(function: HostFunction) -> None:
    global _http_fetch  # noqa: PLW0603

    if not isinstance(function, HostFunction):
        msg = f"Host function must define apply(payload), got {type(function)!r}"
        raise TypeError(msg)

    with _lock:
        _http_fetch = function


def clear_http_fetch() -> None:
    global _http_fetch  # noqa: PLW0603

    with _lock:
        _http_fetch = None


def get_http_fetch() -> HostFunction:
    with _lock:
        function = _http_fetch

    if function is None:
        raise BridgeNotConfiguredError

    return function
