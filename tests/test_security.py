"""
Token and password hashing tests
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from projecthub.utils.security import PasswordHasher, TokenService
from tests.conftest import TEST_SECRET


class TestTokenService:
    def test_issue_embeds_subject_and_expiry(self, token_service):
        token = token_service.issue("alice@example.com")
        payload = jwt.decode(token, TEST_SECRET, algorithms=["HS256"])

        assert payload["sub"] == "alice@example.com"
        assert payload["exp"] - payload["iat"] == 60 * 60

    def test_validate_accepts_matching_identity(self, token_service):
        token = token_service.issue("alice@example.com")
        assert token_service.validate(token, "alice@example.com") is True

    def test_validate_rejects_other_identity(self, token_service):
        token = token_service.issue("alice@example.com")
        assert token_service.validate(token, "bob@example.com") is False

    def test_expired_token_is_rejected(self, token_service):
        token = token_service.issue("alice@example.com", expires_in=-1)
        assert token_service.validate(token, "alice@example.com") is False

    def test_extract_identity_ignores_expiration(self, token_service):
        token = token_service.issue("alice@example.com", expires_in=-1)
        assert token_service.extract_identity(token) == "alice@example.com"

    def test_tampered_token_is_rejected(self, token_service):
        token = token_service.issue("alice@example.com")
        header, _, signature = token.split(".")
        forged = jwt.encode(
            {"sub": "bob@example.com", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            "another-secret-key-that-is-also-long-enough-for-hs256",
            algorithm="HS256",
        )
        tampered = ".".join([header, forged.split(".")[1], signature])

        assert token_service.validate(tampered, "bob@example.com") is False
        with pytest.raises(jwt.InvalidTokenError):
            token_service.extract_identity(tampered)

    def test_token_from_other_secret_is_rejected(self, token_service):
        other = TokenService("another-secret-key-that-is-also-long-enough-for-hs256")
        token = other.issue("alice@example.com")
        assert token_service.validate(token, "alice@example.com") is False

    @pytest.mark.parametrize("garbage", ["", "not-a-token", "a.b.c"])
    def test_malformed_token_fails_closed(self, token_service, garbage):
        assert token_service.validate(garbage, "alice@example.com") is False
        with pytest.raises(jwt.InvalidTokenError):
            token_service.extract_identity(garbage)

    def test_token_without_subject_has_no_identity(self, token_service):
        token = jwt.encode(
            {"exp": datetime.now(timezone.utc) + timedelta(hours=1)}, TEST_SECRET, algorithm="HS256"
        )
        with pytest.raises(jwt.InvalidTokenError):
            token_service.extract_identity(token)

    def test_empty_secret_is_refused(self):
        with pytest.raises(ValueError):
            TokenService("")


class TestPasswordHasher:
    @pytest.mark.asyncio
    async def test_hash_password(self, hasher):
        password = "test123"
        hashed = await hasher.hash_password(password)
        assert hashed != password
        assert await hasher.verify_password(password, hashed)
        assert not await hasher.verify_password("wrong-password", hashed)

    @pytest.mark.asyncio
    async def test_same_password_gets_different_salts(self, hasher):
        first = await hasher.hash_password("test123")
        second = await hasher.hash_password("test123")
        assert first != second

    @pytest.mark.asyncio
    async def test_verify_against_garbage_hash_is_false(self):
        assert not await PasswordHasher(rounds=4).verify_password("test123", "not-a-bcrypt-hash")
