"""
Authentication Service
User registration and login business logic
"""

import structlog

from projecthub.exceptions import AlreadyExists, InvalidCredentials, ValidationError
from projecthub.models.auth import AuthResponse
from projecthub.utils.security import PasswordHasher, TokenService
from projecthub.utils.validators import normalize_email, validate_login, validate_registration

logger = structlog.get_logger(__name__)


class AuthService:
    """Registers users and exchanges credentials for bearer tokens"""

    def __init__(self, db, hasher: PasswordHasher, tokens: TokenService):
        self.db = db
        self.hasher = hasher
        self.tokens = tokens

    async def register(self, email: str, password: str) -> AuthResponse:
        """
        Register a new user and log them in

        Args:
            email: User email
            password: Plain text password

        Returns:
            AuthResponse: Token issued for the new identity

        Raises:
            ValidationError: If email or password are invalid
            AlreadyExists: If the email is already registered
        """
        errors = validate_registration(email, password)
        if errors:
            raise ValidationError(errors)

        email = normalize_email(email)
        if await self.db.get_user_by_email(email):
            logger.info("Registration rejected, email in use", email=email)
            raise AlreadyExists(f"User with email {email} already exists")

        password_hash = await self.hasher.hash_password(password)
        user = await self.db.create_user(email, password_hash)

        logger.info("User registered", user_id=user.id, email=user.email)
        return AuthResponse(token=self.tokens.issue(user.email), email=user.email)

    async def login(self, email: str, password: str) -> AuthResponse:
        """
        Authenticate a user

        Unknown email and wrong password produce the same error.

        Raises:
            ValidationError: If email or password are missing or malformed
            InvalidCredentials: If the credentials do not match
        """
        errors = validate_login(email, password)
        if errors:
            raise ValidationError(errors)

        email = normalize_email(email)
        user = await self.db.get_user_by_email(email)
        if not user or not await self.hasher.verify_password(password, user.password_hash):
            logger.info("Login failed", email=email)
            raise InvalidCredentials()

        logger.info("User logged in", user_id=user.id)
        return AuthResponse(token=self.tokens.issue(user.email), email=user.email)
