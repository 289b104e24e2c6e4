"""Classification of loosely specified endpoint strings.

Endpoints arrive as ``host``, ``host:port``, ``scheme://host[:port][/path]``,
bracketed or bare IPv6 literals, and optionally with ``user:pass@``
credentials. Every decision about which of those shapes an input has is made
here, so the URL builders never repeat the colon-counting heuristics.

Host/port rules applied by :func:`split_host_port`:

======================  ===============================================
``[addr]``              IPv6 ``addr``, no port
``[addr]:NNN``          IPv6 ``addr``, port ``NNN``
``host``                ``host``, no port
``host:NNN``            ``host``, port ``NNN``
``host:``               ``host``, no port
``foobar:port``         :class:`ClassificationError`
``2001:db8::1``         IPv6, the whole token is the address
``a:b:foo``             :class:`ClassificationError` (not an address)
======================  ===============================================
"""

from __future__ import annotations

import dataclasses
import ipaddress
import logging
import re
from urllib.parse import urlsplit

from .errors import ClassificationError, PortFormatError, URLSyntaxError

_logger = logging.getLogger(__name__)

DEFAULT_SCHEME = "http"
MAX_PORT = 65535

SCHEME_PREFIX_PATTERN = re.compile(r"^(?P<scheme>[A-Za-z][A-Za-z0-9+.\-]*)://")
SCHEME_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_PORT_PATTERN = re.compile(r"[0-9]+")
# RFC 3986 reg-name: unreserved, sub-delims and percent-encoded octets.
_REG_NAME_PATTERN = re.compile(
    r"(?:[A-Za-z0-9\-._~!$&'()*+,;=]|%[0-9A-Fa-f]{2})+"
)
_IPV6_LITERAL_PATTERN = re.compile(
    r"[0-9A-Fa-f:.]+(?:%25(?:[A-Za-z0-9\-._~]|%[0-9A-Fa-f]{2})+)?"
)
_AUTHORITY_DELIMITERS = "/?#"


@dataclasses.dataclass(frozen=True, slots=True)
class HostSpec:
    """A host with its optional port.

    ``host`` is always stored without brackets; :attr:`netloc_host` adds
    them back for IPv6 literals.
    """

    host: str
    port: int | None = None
    is_ipv6: bool = False

    @property
    def netloc_host(self) -> str:
        """Return the host as it appears in a URL authority."""
        return f"[{self.host}]" if self.is_ipv6 else self.host

    def render(self, default_port: int | None = None) -> str:
        """Return ``host[:port]``, using ``default_port`` when none was given."""
        port = self.port if self.port is not None else default_port
        if port is None:
            return self.netloc_host
        return f"{self.netloc_host}:{port}"


@dataclasses.dataclass(frozen=True, slots=True)
class ClassifiedEndpoint:
    """An endpoint decomposed into URL components."""

    scheme: str | None
    userinfo: str | None
    host_spec: HostSpec
    path: str = ""
    query: str | None = None
    fragment: str | None = None

    def authority(self, default_port: int | None = None) -> str:
        """Return ``[userinfo@]host[:port]`` for the endpoint."""
        hostport = self.host_spec.render(default_port)
        if self.userinfo is None:
            return hostport
        return f"{self.userinfo}@{hostport}"


def match_scheme(raw: str) -> re.Match[str] | None:
    """Return the ``scheme://`` prefix match of a stripped endpoint, if any."""
    return SCHEME_PREFIX_PATTERN.match(raw)


def has_scheme(raw: str) -> bool:
    """Return True when ``raw`` starts with a ``scheme://`` prefix."""
    return match_scheme(raw.strip()) is not None


def normalize_scheme(scheme: str) -> str:
    """Return a lower-cased scheme name, falling back to ``http`` when empty."""
    if not (cleaned := scheme.strip()):
        return DEFAULT_SCHEME
    if SCHEME_NAME_PATTERN.match(cleaned) is None:
        raise URLSyntaxError(scheme, "scheme must start with a letter")
    return cleaned.lower()


def validate_port(port: object) -> int:
    """Return ``port`` if it is an integer in the TCP port range."""
    if isinstance(port, bool) or not isinstance(port, int):
        raise PortFormatError(port)
    if not 0 <= port <= MAX_PORT:
        raise PortFormatError(port)
    return port


def classify_endpoint(raw: str) -> ClassifiedEndpoint:
    """Split ``raw`` into scheme, userinfo, host, port, path, query and fragment.

    Args:
        raw: The endpoint as supplied by the user.

    Returns:
        The classified endpoint. ``scheme`` is None when the input carries no
        ``scheme://`` prefix.

    Raises:
        ClassificationError: The input cannot be decomposed.
        PortFormatError: An explicit port is not in the range 0-65535.

    """
    endpoint = raw.strip()
    scheme: str | None = None
    remainder = endpoint
    if (match := match_scheme(endpoint)) is not None:
        scheme = match.group("scheme").lower()
        remainder = endpoint[match.end() :]
    elif endpoint.startswith("//"):
        remainder = endpoint[2:]

    authority, path, query, fragment = _split_authority(remainder)
    userinfo: str | None = None
    if "@" in authority:
        userinfo, _, authority = authority.rpartition("@")

    host_spec = split_host_port(authority, endpoint=endpoint)
    _logger.debug(
        "Classified %r as scheme=%r host=%r port=%r ipv6=%s path=%r",
        endpoint,
        scheme,
        host_spec.host,
        host_spec.port,
        host_spec.is_ipv6,
        path,
    )
    return ClassifiedEndpoint(
        scheme=scheme,
        userinfo=userinfo,
        host_spec=host_spec,
        path=path,
        query=query,
        fragment=fragment,
    )


def split_host_port(hostport: str, *, endpoint: str | None = None) -> HostSpec:
    """Split an authority's ``host[:port]`` token.

    ``endpoint`` is the full input, used only for error messages.
    """
    source = hostport if endpoint is None else endpoint
    if hostport.startswith("["):
        return _split_bracketed(hostport, source)

    colons = hostport.count(":")
    if colons > 1:
        if not _is_ipv6(hostport):
            raise ClassificationError(
                source, f"{hostport!r} is neither host:port nor an IPv6 address"
            )
        _logger.debug("Treating unbracketed %r as an IPv6 literal", hostport)
        return HostSpec(host=hostport, is_ipv6=True)

    host, _, token = hostport.partition(":")
    if token and _PORT_PATTERN.fullmatch(token) is None:
        raise ClassificationError(
            source, f"{token!r} is neither a port nor a scheme separator"
        )
    if not host:
        raise ClassificationError(source, "host is empty")
    if "[" in host or "]" in host:
        raise ClassificationError(source, "unbalanced brackets in host")
    if _REG_NAME_PATTERN.fullmatch(host) is None:
        raise ClassificationError(
            source, f"{host!r} contains characters not allowed in a host"
        )
    return HostSpec(host=host, port=_parse_port(token))


def _split_bracketed(hostport: str, source: str) -> HostSpec:
    end = hostport.find("]")
    if end == -1:
        raise ClassificationError(source, "missing closing bracket")
    host = hostport[1:end]
    rest = hostport[end + 1 :]
    if rest and not rest.startswith(":"):
        raise ClassificationError(source, f"unexpected {rest!r} after bracketed host")
    token = rest[1:]
    if token and _PORT_PATTERN.fullmatch(token) is None:
        raise PortFormatError(token)
    if not _is_ipv6(host):
        raise ClassificationError(source, f"{host!r} is not an IPv6 address")
    return HostSpec(host=host, port=_parse_port(token), is_ipv6=True)


def _split_authority(remainder: str) -> tuple[str, str, str | None, str | None]:
    """Split ``authority[/path][?query][#fragment]``."""
    end = len(remainder)
    for delimiter in _AUTHORITY_DELIMITERS:
        if (index := remainder.find(delimiter)) != -1:
            end = min(end, index)
    authority, rest = remainder[:end], remainder[end:]

    rest, hash_mark, fragment = rest.partition("#")
    path, question_mark, query = rest.partition("?")
    return (
        authority,
        path,
        query if question_mark else None,
        fragment if hash_mark else None,
    )


def _parse_port(token: str) -> int | None:
    if not token:
        return None
    return validate_port(int(token))


def _is_ipv6(candidate: str) -> bool:
    # Zone identifiers are percent-encoded inside URLs.
    if _IPV6_LITERAL_PATTERN.fullmatch(candidate) is None:
        return False
    try:
        ipaddress.IPv6Address(candidate.replace("%25", "%", 1))
    except ValueError:
        return False
    return True


def assemble_url(
    scheme: str,
    authority: str,
    path: str = "",
    query: str | None = None,
    fragment: str | None = None,
) -> str:
    """Join URL components into ``scheme://authority[path][?query][#fragment]``."""
    url = f"{scheme}://{authority}{path}"
    if query is not None:
        url = f"{url}?{query}"
    if fragment is not None:
        url = f"{url}#{fragment}"
    return url


def verify_url(url: str, *, require_port: bool = False) -> None:
    """Ensure ``url`` re-parses with a scheme, a host and, optionally, a port.

    Control characters, spaces and DEL are rejected outright; ``urlsplit``
    would silently drop some of them.
    """
    if any(ord(char) < 0x21 or ord(char) == 0x7F for char in url):
        raise URLSyntaxError(url, "control characters and spaces are not allowed")
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as error:
        raise URLSyntaxError(url, str(error)) from error
    if not parts.scheme or not parts.hostname:
        raise URLSyntaxError(url, "scheme and host are required")
    if require_port and port is None:
        raise URLSyntaxError(url, "port is required")
