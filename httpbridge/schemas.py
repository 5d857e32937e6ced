import base64
import json
from typing import Literal

import pydantic
from pydantic import BaseModel, ConfigDict, JsonValue, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .httptypes import Headers, ResponseType


class PayloadError(ValueError):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)


class RequestPayload(_WireModel):
    """Outbound request as it crosses the host boundary"""

    method: str
    url: str
    headers: Headers | None = None
    body: str | None = None
    response_type: ResponseType | None = None


class SuccessPayload(_WireModel):
    """Completed HTTP exchange, whatever its status code"""

    ok: Literal[True] = True
    status: int
    status_text: str = ""
    headers: Headers = {}
    url: str = ""
    body: str = ""
    response_type: ResponseType = "text"
    base64: bool | None = None

    @model_validator(mode="after")
    def validate_base64_body(self) -> "SuccessPayload":
        if not self.base64:
            return self

        try:
            base64.b64decode(self.body, validate=True)
        except ValueError as error:
            msg = f"body is not valid base64: {error}"
            raise ValueError(msg) from error

        return self


class ErrorInfo(_WireModel):
    message: str = ""
    details: JsonValue = None

    @field_validator("message", mode="before")
    @classmethod
    def validate_message(cls, v: object) -> str:
        if v is None:
            return ""

        return v if isinstance(v, str) else str(v)


class FailurePayload(_WireModel):
    """Exchange that never produced an HTTP response"""

    ok: Literal[False] = False
    error: ErrorInfo = ErrorInfo()

    @field_validator("error", mode="before")
    @classmethod
    def validate_error(cls, v: object) -> object:
        return {} if v is None else v


ResponsePayload = SuccessPayload | FailurePayload


def parse_response_payload(raw: str | bytes) -> ResponsePayload:
    try:
        document = json.loads(raw)
    except (TypeError, ValueError) as error:
        msg = f"Response payload is not valid JSON: {error}"
        raise PayloadError(msg) from error

    if not isinstance(document, dict):
        msg = "Response payload must be a JSON object"
        raise PayloadError(msg)

    model: type[SuccessPayload] | type[FailurePayload] = (
        SuccessPayload if document.get("ok") is True else FailurePayload
    )

    try:
        return model.model_validate(document)
    except pydantic.ValidationError as error:
        msg = f"Malformed response payload: {error}"
        raise PayloadError(msg) from error
