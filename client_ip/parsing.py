"""
Header value parsing for client IP extraction.

Implements the small grammar shared by the proxy headers: comma-separated
lists, RFC 7239 quoted strings, ``Forwarded`` parameters and IP literals with
optional brackets and port.

Every function fails closed: malformed input yields ``None`` (or an empty
list), never an exception, so one bad candidate cannot abort the caller's
selection policy.
"""

import ipaddress
from collections.abc import Iterable
from enum import Enum

from client_ip.headers import HeaderValue

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address

# str.strip() with no argument would also strip non-ASCII spaces like U+00A0
ASCII_WHITESPACE = " \t\r\n\x0b\x0c"


class _QuoteState(Enum):
    NORMAL = "normal"
    QUOTED = "quoted"
    ESCAPE = "escape"


def decode_value(value: HeaderValue) -> str:
    """
    Decode a raw header value to text.

    Latin-1 maps every byte to one character, so decoding cannot fail;
    non-ASCII characters survive and are rejected by ``parse_address``.
    """
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return value


def split_list(values: Iterable[HeaderValue]) -> list[str]:
    """
    Split comma-separated header values into trimmed tokens.

    Order is preserved across repeated occurrences of the header. Empty
    fields (``"a,,b"``, trailing commas, whitespace-only values) are dropped.

    Args:
        values: Every value of one header, in receipt order.

    Returns:
        Tokens in order; the last one is the rightmost.
    """
    tokens: list[str] = []
    for value in values:
        for field in decode_value(value).split(","):
            token = field.strip(ASCII_WHITESPACE)
            if token:
                tokens.append(token)
    return tokens


def rightmost(values: Iterable[HeaderValue]) -> str | None:
    """Return the last token across all values, or None if there is none."""
    tokens = split_list(values)
    return tokens[-1] if tokens else None


def first_value(values: Iterable[HeaderValue]) -> str | None:
    """Return the first occurrence of a header, trimmed, or None if absent or blank."""
    for value in values:
        text = decode_value(value).strip(ASCII_WHITESPACE)
        return text or None
    return None


def unquote(token: str) -> str | None:
    """
    Remove RFC 7239 quoted-string quoting from a token.

    Quote pairs are removed wherever they appear and ``\\x`` inside quotes
    becomes ``x``. A token ending inside quotes or after a lone backslash
    is rejected.

    Args:
        token: Raw parameter value, e.g. ``"[2001:db8::1]:8080"`` with quotes.

    Returns:
        The unquoted text, or None if the quoting is unterminated.
    """
    token = token.strip(ASCII_WHITESPACE)
    if '"' not in token:
        return token

    chars: list[str] = []
    state = _QuoteState.NORMAL
    for char in token:
        if state is _QuoteState.ESCAPE:
            chars.append(char)
            state = _QuoteState.QUOTED
        elif state is _QuoteState.QUOTED:
            if char == '"':
                state = _QuoteState.NORMAL
            elif char == "\\":
                state = _QuoteState.ESCAPE
            else:
                chars.append(char)
        elif char == '"':
            state = _QuoteState.QUOTED
        else:
            chars.append(char)

    if state is not _QuoteState.NORMAL:
        return None
    return "".join(chars)


def parse_address(text: str) -> IPAddress | None:
    """
    Parse a bare IPv4 or IPv6 literal.

    Zone identifiers (``fe80::1%eth0``) and any non-ASCII input are rejected.
    """
    if not text or not text.isascii() or "%" in text:
        return None
    try:
        return ipaddress.ip_address(text)
    except ValueError:
        return None


def parse_ip_literal(token: str) -> IPAddress | None:
    """
    Extract an address from an IP literal with optional brackets and port.

    Accepted shapes:
        - ``192.0.2.1``
        - ``192.0.2.1:8080``
        - ``[2001:db8::1]`` and ``[2001:db8::1]:8080``
        - ``2001:db8::1`` (bare IPv6, parsed as a whole)

    Args:
        token: One normalized candidate token.

    Returns:
        The parsed address, or None if the token is not an IP literal.
    """
    token = token.strip(ASCII_WHITESPACE)
    if not token or not token.isascii():
        return None

    if token.startswith("["):
        end = token.find("]")
        if end == -1:
            return None
        # Anything after the closing bracket is a port
        return parse_address(token[1:end])

    host, sep, port = token.partition(":")
    if sep and port.isdigit():
        return parse_address(host)

    return parse_address(token)


def rejection_reason(token: str) -> str:
    """
    Classify a candidate that holds no address, for log events.

    Returns one of ``non_ascii``, ``unknown`` (RFC 7239 ``for=unknown``),
    ``obfuscated`` (RFC 7239 ``_identifier``) or ``invalid_literal``.
    """
    if not token.isascii():
        return "non_ascii"
    if token.lower() == "unknown":
        return "unknown"
    if token.startswith("_"):
        return "obfuscated"
    return "invalid_literal"


def forwarded_for_value(element: str) -> str | None:
    """
    Return the raw value of the first ``for`` parameter of a ``Forwarded`` element.

    The value is returned as written, still quoted. Returns None when the
    element has no ``for`` parameter.
    """
    for pair in element.split(";"):
        name, sep, value = pair.partition("=")
        if sep and name.strip(ASCII_WHITESPACE).lower() == "for":
            return value
    return None


def parse_forwarded_for(element: str) -> IPAddress | None:
    """
    Extract the ``for`` address from one ``Forwarded`` element.

    The element is a ``;``-separated list of ``name=value`` pairs. Names are
    case-insensitive; the first ``for`` pair decides the result even when its
    value is not an address (``for=unknown``, obfuscated ``for=_hidden``).

    Args:
        element: One comma-separated entry of the ``Forwarded`` header.

    Returns:
        The forwarded-for address, or None.
    """
    value = forwarded_for_value(element)
    if value is None:
        return None
    normalized = unquote(value)
    if normalized is None:
        return None
    return parse_ip_literal(normalized)
