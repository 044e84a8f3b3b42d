"""Bearer token validation."""

from __future__ import annotations

from http import HTTPStatus
from typing import Iterator, Protocol, runtime_checkable


@runtime_checkable
class Validator(Protocol):
    """Anything that can tell whether a token is accepted."""

    def valid(self, token: str) -> bool: ...


class Token(str):
    """A single accepted token."""

    def valid(self, token: str) -> bool:
        return str(self) == token


class TokenStore:
    """A set of accepted tokens."""

    def __init__(self, *args: str) -> None:
        self._tokens: set[str] = set()
        self.add(*args)

    def add(self, *args: str) -> None:
        self._tokens.update(args)

    def delete(self, token: str) -> None:
        self._tokens.discard(token)

    def valid(self, token: str) -> bool:
        return token in self._tokens

    def __contains__(self, token: object) -> bool:
        return token in self._tokens

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)


class UnauthorizedError(Exception):
    """The request carries no acceptable bearer token."""

    code = HTTPStatus.UNAUTHORIZED.value

    def __init__(self, message: str = HTTPStatus.UNAUTHORIZED.phrase) -> None:
        super().__init__(message)
        self.message = message


def authenticate(header: str, validator: Validator | None) -> str | None:
    """Check an Authorization header; return the token, or None when auth is off."""
    if validator is None:
        return None
    bearer, found, token = (header or "").partition(" ")
    if bearer != "Bearer" or not found or not validator.valid(token):
        raise UnauthorizedError()
    return token