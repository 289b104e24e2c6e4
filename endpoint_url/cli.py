"""Command line entry points for endpoint URL normalisation."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from cyclopts import App

from .config import load_defaults
from .errors import EndpointURLError
from .normalize import make_url
from .parse import parse_url, with_default_scheme
from .query import QueryParams, encode_url_params

app = App(name="endpoint-url")

ENV_DEBUG = "ENDPOINT_URL_DEBUG"
ERROR_EMPTY_ENDPOINT = "Endpoint is empty; nothing to parse."
ERROR_PARAM_FORMAT = "Query parameter {param!r} must be written as key=value."


def _env_flag(name: str) -> bool:
    value = os.getenv(name)
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_params(params: tuple[str, ...]) -> QueryParams:
    """Collect ``key=value`` tokens, keeping repeated keys in order."""
    result = QueryParams()
    for param in params:
        key, separator, value = param.partition("=")
        if not separator or not key:
            raise EndpointURLError(ERROR_PARAM_FORMAT.format(param=param))
        result.add(key, value)
    return result


@app.command()
def make(
    raw: str = "",
    *,
    scheme: str | None = None,
    path: str | None = None,
    port: int | None = None,
    config: Path | None = None,
) -> None:
    """Print the endpoint as a URL with explicit scheme and port."""
    defaults = load_defaults(config)
    url = make_url(
        defaults.default_scheme if scheme is None else scheme,
        defaults.default_path if path is None else path,
        raw,
        defaults.default_port if port is None else port,
    )
    print(url)


@app.command()
def parse(raw: str, *, default_scheme: str | None = None) -> None:
    """Print the endpoint with a scheme added when it has none."""
    hints = [with_default_scheme(default_scheme)] if default_scheme else []
    url = parse_url(raw, *hints)
    if url is None:
        raise EndpointURLError(ERROR_EMPTY_ENDPOINT)
    print(url)


@app.command()
def encode(url: str, *params: str) -> None:
    """Print the URL with ``key=value`` parameters added to its query."""
    print(encode_url_params(url, _parse_params(params)))


def main(argv: list[str] | tuple[str, ...] | None = None) -> int:
    """Entry point for the endpoint-url CLI."""
    if _env_flag(ENV_DEBUG):
        logging.basicConfig(level=logging.DEBUG)
    try:
        result = app(argv)
    except EndpointURLError as error:
        print(f"endpoint-url: {error}")
        return 1
    return int(result or 0)


if __name__ == "__main__":
    raise SystemExit(main())
