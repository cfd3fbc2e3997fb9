"""Tests for password hashers."""

from __future__ import annotations

import pytest

from shared.auth.password import BcryptHasher, PasswordHasher, SimpleHasher, get_hasher


class TestBcryptHasher:
    async def test_hash_and_verify_roundtrip(self):
        hasher = BcryptHasher(rounds=4)
        hashed = await hasher.hash("my-secret-password")
        assert hashed.startswith("$2b$04$")
        assert await hasher.verify("my-secret-password", hashed) is True

    async def test_wrong_password_rejected(self):
        hasher = BcryptHasher(rounds=4)
        hashed = await hasher.hash("correct-password")
        assert await hasher.verify("wrong-password", hashed) is False

    async def test_malformed_hash_returns_false(self):
        hasher = BcryptHasher(rounds=4)
        assert await hasher.verify("any-password", "not-a-bcrypt-hash") is False


class TestSimpleHasher:
    async def test_hash_and_verify_roundtrip(self):
        hasher = SimpleHasher()
        hashed = await hasher.hash("my-secret-password")
        assert hashed.startswith("simple$")
        assert await hasher.verify("my-secret-password", hashed) is True

    async def test_wrong_password_rejected(self):
        hasher = SimpleHasher()
        hashed = await hasher.hash("correct-password")
        assert await hasher.verify("wrong-password", hashed) is False

    async def test_rejects_bcrypt_hash(self):
        hashed = await BcryptHasher(rounds=4).hash("pw")
        assert await SimpleHasher().verify("pw", hashed) is False


class TestGetHasher:
    def test_returns_bcrypt_by_default(self):
        assert isinstance(get_hasher(), BcryptHasher)

    def test_returns_simple(self):
        hasher = get_hasher("simple")
        assert isinstance(hasher, SimpleHasher)
        assert isinstance(hasher, PasswordHasher)

    def test_unknown_name_raises(self):
        with pytest.raises(ValueError, match="Unknown password hasher"):
            get_hasher("md5")
