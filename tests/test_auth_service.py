"""
Tests for registration and login
"""

import pytest

from projecthub.exceptions import AlreadyExists, InvalidCredentials, ValidationError


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_returns_token_for_new_user(self, auth_service, memory_db, token_service):
        result = await auth_service.register("alice@example.com", "secret123")

        assert result.email == "alice@example.com"
        assert token_service.validate(result.token, "alice@example.com")

        user = await memory_db.get_user_by_email("alice@example.com")
        assert user is not None
        assert user.password_hash != "secret123"

    @pytest.mark.asyncio
    async def test_register_normalizes_email(self, auth_service, memory_db):
        result = await auth_service.register("  Alice@Example.com ", "secret123")

        assert result.email == "alice@example.com"
        assert await memory_db.get_user_by_email("alice@example.com") is not None

    @pytest.mark.asyncio
    async def test_duplicate_email_is_conflict(self, auth_service):
        await auth_service.register("alice@example.com", "secret123")

        with pytest.raises(AlreadyExists) as exc_info:
            await auth_service.register("ALICE@example.com", "another-password")

        assert exc_info.value.status_code == 409
        assert exc_info.value.message == "User with email alice@example.com already exists"

    @pytest.mark.asyncio
    async def test_short_password_is_rejected(self, auth_service, memory_db):
        with pytest.raises(ValidationError) as exc_info:
            await auth_service.register("alice@example.com", "123")

        assert exc_info.value.errors == {"password": "Password must be at least 6 characters long"}
        assert await memory_db.get_user_by_email("alice@example.com") is None


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_success(self, auth_service, token_service):
        await auth_service.register("alice@example.com", "secret123")

        result = await auth_service.login("Alice@example.com", "secret123")

        assert result.email == "alice@example.com"
        assert token_service.validate(result.token, "alice@example.com")

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(self, auth_service):
        await auth_service.register("alice@example.com", "secret123")

        with pytest.raises(InvalidCredentials) as wrong_password:
            await auth_service.login("alice@example.com", "wrong-password")
        with pytest.raises(InvalidCredentials) as unknown_email:
            await auth_service.login("nobody@example.com", "secret123")

        assert wrong_password.value.status_code == unknown_email.value.status_code == 401
        assert wrong_password.value.message == unknown_email.value.message == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_missing_fields(self, auth_service):
        with pytest.raises(ValidationError) as exc_info:
            await auth_service.login(None, None)

        assert set(exc_info.value.errors) == {"email", "password"}
