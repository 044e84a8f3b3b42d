from http import HTTPStatus

import pytest

from tubemeta.auth import Token, TokenStore, UnauthorizedError, Validator, authenticate


def test_token_valid():
    token = Token("token")
    assert token.valid("token")
    assert not token.valid("secret")
    assert isinstance(token, Validator)


def test_token_store_add_delete():
    store = TokenStore("token", "secret")
    assert store.valid("token")
    assert store.valid("secret")
    assert len(store) == 2
    store.delete("token")
    assert not store.valid("token")
    store.add("placeholder")
    assert "placeholder" in store
    assert sorted(store) == ["placeholder", "secret"]


def test_token_store_delete_missing_is_noop():
    store = TokenStore("token")
    store.delete("secret")
    assert store.valid("token")


def test_authenticate_success():
    assert authenticate("Bearer token", Token("token")) == "token"
    assert authenticate("Bearer secret", TokenStore("token", "secret")) == "secret"


def test_authenticate_disabled():
    assert authenticate("", None) is None


@pytest.mark.parametrize(
    "header",
    ["Basic token", "Bearer", "Bearer secret", "", "bearer token", "Bearertoken"],
)
def test_authenticate_rejects(header):
    with pytest.raises(UnauthorizedError) as info:
        authenticate(header, Token("token"))
    assert info.value.code == HTTPStatus.UNAUTHORIZED
    assert str(info.value) == HTTPStatus.UNAUTHORIZED.phrase