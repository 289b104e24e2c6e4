"""Build fully qualified endpoint URLs from user supplied connection strings."""

from __future__ import annotations

import logging

from .classify import (
    assemble_url,
    classify_endpoint,
    normalize_scheme,
    validate_port,
    verify_url,
)

_logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"


def make_url(
    default_scheme: str,
    default_path: str,
    raw_endpoint: str,
    default_port: int,
) -> str:
    """Return ``raw_endpoint`` as an absolute URL with explicit scheme and port.

    Schemes, ports and paths found in ``raw_endpoint`` always win over the
    defaults. An empty endpoint means ``localhost``, an empty
    ``default_scheme`` means ``http`` and an empty ``default_path`` adds no
    path. Credentials, query strings and fragments are kept verbatim.

    Args:
        default_scheme: Scheme used when the endpoint has none.
        default_path: Path used when the endpoint has none.
        raw_endpoint: The endpoint as supplied by the user.
        default_port: Port used when the endpoint has none.

    Returns:
        A URL of the form ``scheme://[userinfo@]host:port[/path]``.

    Raises:
        ClassificationError: The endpoint cannot be decomposed.
        PortFormatError: A port is not an integer between 0 and 65535.
        URLSyntaxError: The scheme or rebuilt URL is not valid URL syntax.

    """
    endpoint = raw_endpoint.strip()
    if not endpoint:
        _logger.debug("Empty endpoint; using %s", DEFAULT_HOST)
        endpoint = DEFAULT_HOST

    fallback_scheme = normalize_scheme(default_scheme)
    port = validate_port(default_port)
    classified = classify_endpoint(endpoint)

    scheme = classified.scheme or fallback_scheme
    path = classified.path or _default_path(default_path)
    url = assemble_url(
        scheme,
        classified.authority(default_port=port),
        path,
        classified.query,
        classified.fragment,
    )
    verify_url(url, require_port=True)
    return url


def _default_path(default_path: str) -> str:
    if not (path := default_path.strip()):
        return ""
    return path if path.startswith("/") else f"/{path}"
