"""
Read-only header lookup used by the extractors.

Extractors only need ``get_all(name)``: every value of a header, in the
order it was received. Anything providing that method can be passed in; two
adapters are provided for the common cases.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Protocol

HeaderValue = bytes | str


class HeaderSource(Protocol):
    """Case-insensitive, multi-valued header lookup."""

    def get_all(self, name: str) -> Sequence[HeaderValue]: ...


class HeaderList:
    """
    Ordered list of ``(name, value)`` header pairs.

    Names and values may be ``bytes`` or ``str``. Lookup is
    case-insensitive and repeated headers are returned in insertion order.

    Example:
        headers = HeaderList([("X-Forwarded-For", "1.1.1.1"), ("x-forwarded-for", "2.2.2.2")])
        headers.get_all("X-Forwarded-For")  # ["1.1.1.1", "2.2.2.2"]
    """

    def __init__(self, pairs: Iterable[tuple[HeaderValue, HeaderValue]] = ()) -> None:
        self._pairs: list[tuple[str, HeaderValue]] = [
            (_name_key(name), value) for name, value in pairs
        ]

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[str, HeaderValue | Sequence[HeaderValue]]
    ) -> "HeaderList":
        """Build from a ``name -> value`` or ``name -> [values]`` mapping."""
        pairs: list[tuple[HeaderValue, HeaderValue]] = []
        for name, value in mapping.items():
            if isinstance(value, (bytes, str)):
                pairs.append((name, value))
            else:
                pairs.extend((name, item) for item in value)
        return cls(pairs)

    @classmethod
    def from_asgi_scope(cls, scope: Mapping[str, Any]) -> "HeaderList":
        """Build from the raw ``headers`` list of an ASGI HTTP scope."""
        return cls(scope.get("headers") or [])

    def get_all(self, name: str) -> list[HeaderValue]:
        key = name.lower()
        return [value for pair_name, value in self._pairs if pair_name == key]

    def __len__(self) -> int:
        return len(self._pairs)

    def __repr__(self) -> str:
        return f"HeaderList({len(self._pairs)} headers)"


class MetaHeaders:
    """
    View over a WSGI environ or Django ``request.META`` dictionary.

    The server has already merged repeated headers into one comma-separated
    value, so every lookup returns at most one value.
    """

    def __init__(self, meta: Mapping[str, Any]) -> None:
        self._meta = meta

    def get_all(self, name: str) -> list[HeaderValue]:
        value = self._meta.get(meta_key(name))
        if isinstance(value, (bytes, str)):
            return [value]
        return []


def meta_key(name: str) -> str:
    """
    Convert a header name to its WSGI environ key.

    ``X-Forwarded-For`` becomes ``HTTP_X_FORWARDED_FOR``.
    """
    key = name.upper().replace("-", "_")
    if key in ("CONTENT_TYPE", "CONTENT_LENGTH"):
        return key
    return f"HTTP_{key}"


def _name_key(name: HeaderValue) -> str:
    if isinstance(name, bytes):
        name = name.decode("latin-1")
    return name.lower()
