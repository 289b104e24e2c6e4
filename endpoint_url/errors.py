"""Shared exception types for endpoint URL handling."""

from __future__ import annotations


class EndpointURLError(ValueError):
    """Base error for endpoint URL operations."""


class ClassificationError(EndpointURLError):
    """Raised when an endpoint cannot be split into scheme, host, port and path."""

    def __init__(self, endpoint: str, detail: str) -> None:
        """Initialise the error with the offending endpoint."""
        super().__init__(f"Cannot parse endpoint {endpoint!r}: {detail}.")
        self.endpoint = endpoint


class PortFormatError(EndpointURLError):
    """Raised when an explicit port is not an integer between 0 and 65535."""

    def __init__(self, port: object) -> None:
        """Initialise the error with the rejected port token."""
        super().__init__(
            f"Invalid port {port!r}; expected an integer between 0 and 65535."
        )
        self.port = port


class URLSyntaxError(EndpointURLError):
    """Raised when a rebuilt URL or a supplied scheme is not valid URL syntax."""

    def __init__(self, value: str, detail: str) -> None:
        """Initialise the error with the rejected value."""
        super().__init__(f"Invalid URL {value!r}: {detail}.")
        self.value = value


class ConfigError(EndpointURLError):
    """Raised when the endpoint defaults file is malformed."""
