"""Environment driven settings shared by the client, executor and CLI."""

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "HTTPBRIDGE_"

DEFAULT_SENSITIVE_HEADERS = frozenset(
    {"authorization", "cookie", "proxy-authorization", "x-api-key"},
)

DEFAULT_BINARY_CONTENT_TYPES = (
    "image/",
    "audio/",
    "video/",
    "font/",
    "application/octet-stream",
    "application/pdf",
    "application/zip",
    "application/gzip",
    "application/wasm",
)


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseModel):
    sensitive_headers: frozenset[str] = Field(default=DEFAULT_SENSITIVE_HEADERS)
    binary_content_types: tuple[str, ...] = Field(
        default=DEFAULT_BINARY_CONTENT_TYPES,
    )
    verify_tls: bool = True
    log_level: str = "WARNING"

    @field_validator("sensitive_headers", mode="before")
    @classmethod
    def validate_sensitive_headers(cls, v: object) -> object:
        if isinstance(v, str):
            v = _split_csv(v)

        if isinstance(v, list | tuple | set | frozenset):
            return frozenset(str(header).lower() for header in v)

        return v

    @field_validator("binary_content_types", mode="before")
    @classmethod
    def validate_binary_content_types(cls, v: object) -> object:
        if isinstance(v, str):
            v = _split_csv(v)

        if isinstance(v, list | tuple | set | frozenset):
            return tuple(str(prefix).lower() for prefix in v)

        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.upper()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        if environ is None:
            environ = os.environ

        values = {
            name: environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in environ
        }
        return cls.model_validate(values)
