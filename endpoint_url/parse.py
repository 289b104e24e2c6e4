"""Parse endpoint strings into structured URLs, guided by optional hints."""

from __future__ import annotations

import dataclasses
import typing as typ

from .classify import (
    DEFAULT_SCHEME,
    ClassifiedEndpoint,
    assemble_url,
    classify_endpoint,
    normalize_scheme,
    verify_url,
)


@dataclasses.dataclass(frozen=True, slots=True)
class ParseOptions:
    """Options consulted by :func:`parse_url`.

    Attributes:
        default_scheme: Scheme injected when the endpoint has no
            ``scheme://`` prefix. Defaults to ``http``.

    """

    default_scheme: str = DEFAULT_SCHEME


ParseHint = typ.Callable[[ParseOptions], ParseOptions]


def with_default_scheme(scheme: str) -> ParseHint:
    """Return a hint that injects ``scheme`` into schemeless endpoints."""

    def hint(options: ParseOptions) -> ParseOptions:
        return dataclasses.replace(options, default_scheme=scheme)

    return hint


@dataclasses.dataclass(frozen=True, slots=True)
class EndpointURL:
    """A parsed endpoint URL. The host is stored without IPv6 brackets."""

    scheme: str
    host: str
    port: int | None = None
    path: str = ""
    query: str | None = None
    fragment: str | None = None
    userinfo: str | None = None
    is_ipv6: bool = False

    @classmethod
    def from_classified(
        cls, classified: ClassifiedEndpoint, scheme: str
    ) -> EndpointURL:
        """Build a URL from a classified endpoint and its resolved scheme."""
        host_spec = classified.host_spec
        return cls(
            scheme=scheme,
            host=host_spec.host,
            port=host_spec.port,
            path=classified.path,
            query=classified.query,
            fragment=classified.fragment,
            userinfo=classified.userinfo,
            is_ipv6=host_spec.is_ipv6,
        )

    @property
    def netloc_host(self) -> str:
        """Return the host, bracketed when it is an IPv6 literal."""
        return f"[{self.host}]" if self.is_ipv6 else self.host

    @property
    def username(self) -> str | None:
        """Return the user name from the credentials, if any."""
        if self.userinfo is None:
            return None
        return self.userinfo.partition(":")[0]

    @property
    def password(self) -> str | None:
        """Return the password from the credentials, if any."""
        if self.userinfo is None or ":" not in self.userinfo:
            return None
        return self.userinfo.partition(":")[2]

    @property
    def netloc(self) -> str:
        """Return ``[userinfo@]host[:port]``."""
        hostport = self.netloc_host
        if self.port is not None:
            hostport = f"{hostport}:{self.port}"
        if self.userinfo is None:
            return hostport
        return f"{self.userinfo}@{hostport}"

    def geturl(self) -> str:
        """Return the URL as a string."""
        return assemble_url(
            self.scheme, self.netloc, self.path, self.query, self.fragment
        )

    def __str__(self) -> str:
        """Return the URL as a string."""
        return self.geturl()


def parse_url(raw_endpoint: str, *hints: ParseHint) -> EndpointURL | None:
    """Parse ``raw_endpoint`` into an :class:`EndpointURL`.

    Hints are applied in order to a default :class:`ParseOptions`. Endpoints
    without a ``scheme://`` prefix receive the hinted default scheme (``http``
    unless overridden). Unlike :func:`~endpoint_url.normalize.make_url`, no
    port or path is injected.

    Returns None for an empty endpoint. Malformed endpoints raise the
    corresponding :class:`~endpoint_url.errors.EndpointURLError`.
    """
    if not (endpoint := raw_endpoint.strip()):
        return None

    options = ParseOptions()
    for hint in hints:
        options = hint(options)
    default_scheme = normalize_scheme(options.default_scheme)

    classified = classify_endpoint(endpoint)
    scheme = classified.scheme or default_scheme
    url = EndpointURL.from_classified(classified, scheme)
    verify_url(url.geturl())
    return url
