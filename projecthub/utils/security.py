"""
Security utilities for the project service

Provides password hashing (bcrypt) and signed bearer tokens (JWT).
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt
import structlog

logger = structlog.get_logger(__name__)


class PasswordHasher:
    """bcrypt password hashing with a per-record salt"""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def _sync_hash(self, password: str) -> str:
        """Synchronous bcrypt hash (CPU-bound)"""
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
        return hashed.decode('utf-8')

    def _sync_verify(self, password: str, hashed_password: str) -> bool:
        """Synchronous bcrypt verify (CPU-bound)"""
        try:
            return bcrypt.checkpw(password.encode('utf-8'), hashed_password.encode('utf-8'))
        except ValueError as e:
            logger.warning("Password verification failed", error=str(e))
            return False

    async def hash_password(self, password: str) -> str:
        """Hash password using bcrypt in thread pool to avoid blocking"""
        return await asyncio.to_thread(self._sync_hash, password)

    async def verify_password(self, password: str, hashed_password: str) -> bool:
        """Verify password against hash in thread pool to avoid blocking"""
        return await asyncio.to_thread(self._sync_verify, password, hashed_password)


class TokenService:
    """Issues and checks HMAC-signed, time-limited bearer tokens"""

    def __init__(self, secret: str, algorithm: str = "HS256", expires_minutes: int = 1440):
        if not secret:
            raise ValueError("TokenService requires a non-empty secret")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    def issue(self, identity: str, expires_in: Optional[int] = None) -> str:
        """
        Generate a token whose subject is ``identity``

        Args:
            identity: User email to embed as the subject
            expires_in: Lifetime in minutes, defaults to the configured one

        Returns:
            JWT token string
        """
        if expires_in is None:
            expires_in = self.expires_minutes

        now = datetime.now(timezone.utc)
        payload = {
            "sub": identity,
            "iat": now,
            "exp": now + timedelta(minutes=expires_in),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def _decode(self, token: str, verify_exp: bool = True) -> Dict[str, Any]:
        return jwt.decode(
            token,
            self._secret,
            algorithms=[self.algorithm],
            options={"verify_exp": verify_exp, "require": ["sub", "exp"]},
        )

    def extract_identity(self, token: str) -> str:
        """
        Read the subject of a token without checking its expiration

        The signature is still verified.

        Raises:
            jwt.InvalidTokenError: If the token is malformed or tampered with
        """
        payload = self._decode(token, verify_exp=False)
        subject = payload.get("sub")
        if not subject:
            raise jwt.InvalidTokenError("Token has no subject")
        return subject

    def validate(self, token: str, expected_identity: str) -> bool:
        """
        Check signature, expiration and subject

        Returns:
            True only if the token is intact, unexpired and issued for
            ``expected_identity``
        """
        try:
            payload = self._decode(token)
        except jwt.ExpiredSignatureError:
            logger.warning("Token has expired")
            return False
        except jwt.InvalidTokenError as e:
            logger.warning("Invalid token", error=str(e))
            return False
        return payload.get("sub") == expected_identity
