"""Unit tests for the passlib / python-jose credential adapters."""

import pytest

from app.domain.exceptions import AuthenticationError
from app.infrastructure.security.credentials import BcryptPasswordHasher, JoseTokenService


def test_bcrypt_hash_round_trip():
    hasher = BcryptPasswordHasher()
    digest = hasher.hash("secret1")

    assert digest != "secret1"
    assert hasher.verify("secret1", digest)
    assert not hasher.verify("secret2", digest)
    assert not hasher.verify("secret1", "not-a-bcrypt-digest")


def test_token_carries_claims_and_expiry():
    tokens = JoseTokenService("k" * 32, "HS256", expire_minutes=5)

    claims = tokens.verify(tokens.issue({"sub": "7", "username": "alice"}))

    assert claims["sub"] == "7"
    assert claims["username"] == "alice"
    assert "exp" in claims


def test_expired_token_is_rejected():
    tokens = JoseTokenService("k" * 32, "HS256", expire_minutes=-1)

    with pytest.raises(AuthenticationError):
        tokens.verify(tokens.issue({"sub": "7"}))


def test_token_signed_with_other_secret_is_rejected():
    issued = JoseTokenService("a" * 32, "HS256", expire_minutes=5).issue({"sub": "7"})

    with pytest.raises(AuthenticationError):
        JoseTokenService("b" * 32, "HS256", expire_minutes=5).verify(issued)
