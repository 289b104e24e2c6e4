"""Query string encoding for normalised endpoint URLs."""

from __future__ import annotations

import collections.abc as cabc
from urllib.parse import urlencode

ParamValues = str | cabc.Sequence[str]


class QueryParams(cabc.Mapping[str, tuple[str, ...]]):
    """Ordered multi-map of query parameter names to values.

    Adding a value for an existing key appends it, so repeated keys encode
    as ``key=v1&key=v2`` in the order they were added.
    """

    def __init__(self, pairs: cabc.Iterable[tuple[str, str]] = ()) -> None:
        """Initialise the mapping from ``(key, value)`` pairs."""
        self._values: dict[str, list[str]] = {}
        for key, value in pairs:
            self.add(key, value)

    def add(self, key: str, value: str) -> None:
        """Append ``value`` to the values recorded for ``key``."""
        self._values.setdefault(key, []).append(value)

    def set(self, key: str, value: str) -> None:
        """Replace every value recorded for ``key`` with ``value``."""
        self._values[key] = [value]

    def remove(self, key: str) -> None:
        """Drop ``key`` and its values if present."""
        self._values.pop(key, None)

    def first(self, key: str) -> str | None:
        """Return the first value for ``key`` or None."""
        values = self._values.get(key)
        return values[0] if values else None

    def encode(self) -> str:
        """Return the parameters as a form encoded query string."""
        return urlencode(_sorted_pairs(self))

    def __getitem__(self, key: str) -> tuple[str, ...]:
        return tuple(self._values[key])

    def __iter__(self) -> cabc.Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.pairs())!r})"

    def pairs(self) -> cabc.Iterator[tuple[str, str]]:
        """Yield ``(key, value)`` pairs in insertion order."""
        for key, values in self._values.items():
            for value in values:
                yield key, value


def _sorted_pairs(
    params: cabc.Mapping[str, ParamValues],
) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for key in sorted(params):
        values = params[key]
        if isinstance(values, str):
            values = (values,)
        pairs.extend((key, value) for value in values)
    return pairs


def encode_url_params(url: str, params: cabc.Mapping[str, ParamValues]) -> str:
    """Return ``url`` with ``params`` added to its query string.

    Keys are emitted in sorted order and the values of a key in the order
    they were given. Existing query parameters are kept and the new ones are
    appended before any fragment. ``url`` is assumed to be valid already.
    """
    pairs = _sorted_pairs(params)
    if not pairs:
        return url

    encoded = urlencode(pairs)
    base, hash_mark, fragment = url.partition("#")
    if "?" not in base:
        separator = "?"
    elif base.endswith(("?", "&")):
        separator = ""
    else:
        separator = "&"
    return f"{base}{separator}{encoded}{hash_mark}{fragment}"
