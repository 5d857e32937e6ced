import json
import logging
import sys
from typing import Optional, cast

import typer

from .client import Client
from .config import Settings
from .executor import Executor
from .host_bridge import LocalBridge
from .httptypes import JsonValue
from .requests_factory import UNSET, RequestValidationError
from .response import BridgeError, Response

app = typer.Typer()


def get_settings() -> Settings:
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level)
    return settings


def get_client(settings: Settings) -> Client:
    return Client(
        bridge=LocalBridge(Executor(settings=settings)),
        settings=settings,
    )


def parse_pairs(values: list[str], separator: str, option: str) -> dict[str, str]:
    pairs: dict[str, str] = {}

    for value in values:
        name, found, rest = value.partition(separator)

        if not found or not name.strip():
            msg = f"expected NAME{separator}VALUE, got {value!r}"
            raise typer.BadParameter(msg, param_hint=option)

        pairs[name.strip()] = rest.strip()

    return pairs


def echo_response(response: Response) -> None:
    typer.echo(
        json.dumps(
            {
                "status": response.status,
                "statusText": response.status_text,
                "url": response.url,
                "headers": response.headers,
                "responseType": response.response_type,
                "body": response.raw_body,
                "base64": response.base64,
            },
            indent=4,
        ),
    )


@app.command()
def fetch(  # noqa: PLR0913
    url: str,
    method: str = typer.Option("GET", "--method", "-X"),
    header: list[str] = typer.Option([], "--header", "-H"),
    query: list[str] = typer.Option([], "--query", "-q"),
    data: Optional[str] = typer.Option(None, "--data", "-d"),  # noqa: UP007
    json_body: Optional[str] = typer.Option(None, "--json"),  # noqa: UP007
    response_type: Optional[str] = typer.Option(None, "--response-type"),  # noqa: UP007
) -> None:
    """Send a request through an in-process bridge and print the response."""
    client = get_client(get_settings())
    json_value = cast("JsonValue", UNSET)

    if json_body is not None:
        try:
            json_value = json.loads(json_body)
        except ValueError as error:
            raise typer.BadParameter(str(error), param_hint="--json") from error

    try:
        response = client.request(
            method,
            url,
            query=parse_pairs(query, "=", "--query"),
            headers=parse_pairs(header, ":", "--header"),
            body=data,
            json=json_value,
            response_type=response_type,  # type: ignore[arg-type]
        )
    except RequestValidationError as error:
        raise typer.BadParameter(str(error)) from error
    except BridgeError as error:
        typer.echo(error.message, err=True)
        raise typer.Exit(code=1) from error

    echo_response(response)


@app.command()
def execute() -> None:
    """Read a request payload from stdin and write the response payload."""
    executor = Executor(settings=get_settings())
    typer.echo(executor.execute(sys.stdin.read()))


if __name__ == "__main__":
    app()
