"""Endpoint URL normalisation, parsing and query encoding."""

from .classify import (
    ClassifiedEndpoint,
    HostSpec,
    classify_endpoint,
    has_scheme,
    split_host_port,
)
from .errors import (
    ClassificationError,
    ConfigError,
    EndpointURLError,
    PortFormatError,
    URLSyntaxError,
)
from .normalize import make_url
from .parse import EndpointURL, ParseHint, ParseOptions, parse_url, with_default_scheme
from .query import QueryParams, encode_url_params

__all__ = [
    "ClassificationError",
    "ClassifiedEndpoint",
    "ConfigError",
    "EndpointURL",
    "EndpointURLError",
    "HostSpec",
    "ParseHint",
    "ParseOptions",
    "PortFormatError",
    "QueryParams",
    "URLSyntaxError",
    "classify_endpoint",
    "encode_url_params",
    "has_scheme",
    "make_url",
    "parse_url",
    "split_host_port",
    "with_default_scheme",
]
