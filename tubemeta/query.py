"""Raw query string parsing used by the redirect handler."""

from __future__ import annotations

import re
from urllib.parse import unquote_plus

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class QueryError(ValueError):
    """A query string could not be parsed cleanly.

    ``values`` holds whatever could still be parsed.
    """

    def __init__(self, message: str, values: dict[str, list[str]] | None = None) -> None:
        super().__init__(message)
        self.values = values if values is not None else {}


def _unescape(text: str) -> str:
    if match := _BAD_ESCAPE.search(text):
        raise QueryError(f"invalid URL escape {text[match.start():match.start() + 3]!r}")
    return unquote_plus(text)


def parse_query(query: str) -> dict[str, list[str]]:
    """Parse a raw query; keys are unescaped, values are kept as sent.

    Raises QueryError, carrying the parsed values, if any pair was rejected.
    """
    values: dict[str, list[str]] = {}
    error: str | None = None
    for pair in query.split("&") if query else ():
        if ";" in pair:
            error = "invalid semicolon separator in query"
            continue
        if not pair:
            continue
        key, _, value = pair.partition("=")
        try:
            key = _unescape(key)
        except QueryError as exc:
            if error is None:
                error = str(exc)
            continue
        values.setdefault(key, []).append(value)
    if error is not None:
        raise QueryError(error, values)
    return values


def parse_redirect(value: str) -> tuple[str, str]:
    """Split a ``provider:id`` redirect target and unescape the id."""
    provider, movie_id = "", ""
    parts = value.split(":")
    if len(parts) > 1:
        provider, movie_id = parts[0], parts[1]
    return provider, _unescape(movie_id)