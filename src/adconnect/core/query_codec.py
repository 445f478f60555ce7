#!/usr/bin/env python
"""Query string generation and percent-encoding.

Keys and values are percent-encoded as UTF-8, escaping everything outside the
RFC 3986 unreserved set, so a value containing ``&`` or ``=`` survives a
round trip through ``generate_string`` and ``parse_query_string``.

Decoding is strict: a ``%`` that is not followed by two hex digits, or escapes
that do not form valid UTF-8, raise ``DecodingError`` instead of being passed
through. ``+`` is a literal plus sign, not a space.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from urllib.parse import quote, unquote_to_bytes

from adconnect.core.exceptions import DecodingError, EncodingError
from adconnect.utils.config import (
    QUERY_KEY_VALUE_SEPARATOR,
    QUERY_PAIR_SEPARATOR,
    QUERY_PREFIX,
    URL_SAFE_CHARACTERS,
)

__all__ = [
    "add_url_encoding",
    "generate_query_string",
    "generate_string",
    "parse_query_string",
    "remove_url_encoding",
]

_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def add_url_encoding(value: str) -> str:
    """Percent-encode ``value`` for use in a query string.

    Raises:
        EncodingError: If ``value`` cannot be encoded as UTF-8 (lone surrogates)
    """
    try:
        # quote() always keeps ASCII letters and digits
        return quote(value, safe=URL_SAFE_CHARACTERS, encoding="utf-8", errors="strict")
    except UnicodeEncodeError as e:
        raise EncodingError(value, str(e)) from e


def remove_url_encoding(value: str) -> str:
    """Reverse ``add_url_encoding``.

    Raises:
        DecodingError: On a malformed escape or escapes that are not valid UTF-8
    """
    match = _MALFORMED_ESCAPE.search(value)
    if match:
        raise DecodingError(value, f"malformed escape at position {match.start()}")
    try:
        return unquote_to_bytes(value).decode("utf-8")
    except UnicodeError as e:
        raise DecodingError(value, str(e)) from e


def generate_string(pairs: Mapping[str, str]) -> str:
    """Join ``pairs`` as ``key1=value1&key2=value2`` with no leading separator."""
    return QUERY_PAIR_SEPARATOR.join(
        f"{add_url_encoding(key)}{QUERY_KEY_VALUE_SEPARATOR}{add_url_encoding(value)}"
        for key, value in pairs.items()
    )


def generate_query_string(pairs: Mapping[str, str]) -> str:
    """Like ``generate_string`` but with a leading ``?``; empty input gives ``""``."""
    if not pairs:
        return ""
    return QUERY_PREFIX + generate_string(pairs)


def parse_query_string(query: str) -> dict[str, str]:
    """Parse a query produced by ``generate_string`` or ``generate_query_string``.

    A leading ``?`` is ignored and a later duplicate key overwrites an earlier one.

    Raises:
        DecodingError: If a pair has no ``=`` or contains a malformed escape
    """
    if query.startswith(QUERY_PREFIX):
        query = query[len(QUERY_PREFIX) :]
    if not query:
        return {}

    pairs: dict[str, str] = {}
    for segment in query.split(QUERY_PAIR_SEPARATOR):
        key, separator, value = segment.partition(QUERY_KEY_VALUE_SEPARATOR)
        if not separator:
            raise DecodingError(segment, "query pair has no '=' separator")
        pairs[remove_url_encoding(key)] = remove_url_encoding(value)
    return pairs
