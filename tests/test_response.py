import base64
import json

import pytest

from httpbridge.response import (
    DEFAULT_ERROR_MESSAGE,
    INVALID_PAYLOAD_MESSAGE,
    BridgeError,
    DecodingError,
    Response,
    adapt,
)
from httpbridge.schemas import (
    FailurePayload,
    PayloadError,
    SuccessPayload,
    parse_response_payload,
)
from tests.factories import FailurePayloadFactory, SuccessPayloadFactory


def make_response(**kwargs: object) -> Response:
    values: dict[str, object] = {
        "status": 200,
        "status_text": "OK",
        "headers": {},
        "url": "https://example.com",
        "response_type": "text",
        "raw_body": "",
    }
    values.update(kwargs)
    return Response(**values)  # type: ignore[arg-type]


def test_adapt_text() -> None:
    response = adapt(
        json.dumps(
            {
                "ok": True,
                "status": 200,
                "statusText": "OK",
                "headers": {"content-type": "text/plain"},
                "body": "hello",
                "responseType": "text",
                "url": "https://example.com/data",
            },
        ),
    )

    assert response.success
    assert response.status == 200
    assert response.status_text == "OK"
    assert response.headers == {"content-type": "text/plain"}
    assert response.header("Content-Type") == "text/plain"
    assert response.url == "https://example.com/data"
    assert response.body == "hello"
    assert response.text == "hello"
    assert response.content == b"hello"


def test_adapt_binary() -> None:
    payload = SuccessPayloadFactory.binary(bytes([104, 105]), status=200)

    response = adapt(payload.to_wire())

    assert response.body == b"hi"
    assert response.content == b"hi"
    assert response.text == "hi"
    assert response.response_type == "arrayBuffer"


def test_adapt_binary_round_trip_all_byte_values() -> None:
    content = bytes(range(256)) * 4
    payload = SuccessPayloadFactory.binary(content)

    assert adapt(payload.to_wire()).body == content


def test_adapt_does_not_decode_without_flag() -> None:
    encoded = base64.b64encode(b"hi").decode()
    payload = SuccessPayloadFactory.build(
        body=encoded,
        response_type="arrayBuffer",
        base64=None,
    )

    assert adapt(payload.to_wire()).body == encoded


@pytest.mark.parametrize("status", [200, 201, 204, 299])
def test_success_statuses(status: int) -> None:
    assert adapt(SuccessPayloadFactory.build(status=status).to_wire()).success


@pytest.mark.parametrize("status", [100, 199, 300, 302, 404, 500])
def test_unsuccessful_statuses(status: int) -> None:
    assert not adapt(SuccessPayloadFactory.build(status=status).to_wire()).success


def test_success_matches_status_range() -> None:
    for payload in SuccessPayloadFactory.batch(20):
        response = adapt(payload.to_wire())
        assert response.success == (200 <= payload.status <= 299)


def test_adapt_failure() -> None:
    with pytest.raises(BridgeError) as error:
        adapt('{"ok": false, "error": {"message": "boom"}}')

    assert error.value.message == "boom"
    assert str(error.value) == "boom"
    assert error.value.details is None


def test_adapt_failure_details() -> None:
    with pytest.raises(BridgeError) as error:
        adapt(
            json.dumps(
                {
                    "ok": False,
                    "error": {"message": "boom", "details": {"type": "Timeout"}},
                },
            ),
        )

    assert error.value.details == {"type": "Timeout"}


def test_adapt_failure_from_factory() -> None:
    payload = FailurePayloadFactory.build()

    with pytest.raises(BridgeError) as error:
        adapt(payload.to_wire())

    assert error.value.message == (payload.error.message or DEFAULT_ERROR_MESSAGE)


@pytest.mark.parametrize(
    "raw",
    [
        '{"ok": false}',
        '{"ok": false, "error": {}}',
        '{"ok": false, "error": null}',
        '{"ok": false, "error": {"message": null}}',
        '{"ok": false, "error": {"message": ""}}',
    ],
)
def test_adapt_failure_fallback_message(raw: str) -> None:
    with pytest.raises(BridgeError, match=DEFAULT_ERROR_MESSAGE):
        adapt(raw)


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "[]",
        '{"ok": true}',
        '{"ok": "yes"}',
        '{"ok": true, "status": 200, "body": "%%%", "base64": true}',
    ],
)
def test_adapt_invalid_payload(raw: str) -> None:
    with pytest.raises(BridgeError) as error:
        adapt(raw)

    assert error.value.message == INVALID_PAYLOAD_MESSAGE
    assert isinstance(error.value.__cause__, PayloadError)


def test_json_accessor() -> None:
    response = make_response(raw_body='{"result":"ok"}', response_type="json")

    assert response.json() == {"result": "ok"}


def test_json_accessor_on_binary_body() -> None:
    response = make_response(
        raw_body=base64.b64encode(b'{"a": [1]}').decode(),
        base64=True,
    )

    assert response.json() == {"a": [1]}


def test_json_accessor_invalid() -> None:
    response = make_response(raw_body="<html>", response_type="json")

    with pytest.raises(DecodingError) as error:
        response.json()

    assert not isinstance(error.value, BridgeError)
    assert error.value.body == "<html>"


def test_invalid_json_does_not_fail_construction() -> None:
    response = adapt(
        SuccessPayloadFactory.build(body="{oops", response_type="json").to_wire(),
    )

    assert response.body == "{oops"


def test_corrupt_base64_body_fails_on_access() -> None:
    response = make_response(raw_body="%%%", base64=True)

    with pytest.raises(DecodingError):
        _ = response.body


def test_parse_response_payload_variants() -> None:
    assert isinstance(
        parse_response_payload('{"ok": true, "status": 204}'),
        SuccessPayload,
    )
    assert isinstance(
        parse_response_payload('{"ok": false, "error": {"message": "x"}}'),
        FailurePayload,
    )


def test_success_payload_wire_format() -> None:
    wire = json.loads(
        SuccessPayload(
            status=200,
            status_text="OK",
            headers={"content-type": "text/plain"},
            url="https://example.com",
            body="hello",
        ).to_wire(),
    )

    assert wire == {
        "ok": True,
        "status": 200,
        "statusText": "OK",
        "headers": {"content-type": "text/plain"},
        "url": "https://example.com",
        "body": "hello",
        "responseType": "text",
    }


def test_non_ascii_base64_body_fails_on_access() -> None:
    response = make_response(raw_body="é", base64=True)

    with pytest.raises(DecodingError):
        _ = response.body
