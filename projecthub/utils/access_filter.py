"""
Access filter
Resolves the bearer token of every request into a trusted identity
"""

from typing import Callable, Optional

import jwt
import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from projecthub.utils.security import TokenService

logger = structlog.get_logger(__name__)

AUTH_HEADER = "Authorization"
BEARER_PREFIX = "Bearer "


def get_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Token part of an ``Authorization: Bearer <token>`` header, if well formed"""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


async def resolve_identity(tokens: TokenService, db, token: str) -> Optional[str]:
    """
    Turn a bearer token into a trusted identity

    Returns:
        str: The user's email when the user exists and the token's signature,
        expiration and subject all check out; None otherwise. Never raises.
    """
    try:
        email = tokens.extract_identity(token)
        user = await db.get_user_by_email(email)
        if user is None:
            logger.warning("Token subject is not a known user", email=email)
            return None
        if tokens.validate(token, user.email):
            return user.email
        logger.warning("Token rejected", email=email)
    except jwt.InvalidTokenError as e:
        logger.warning("Invalid token", error=str(e))
    except Exception as e:
        logger.error("Cannot set user authentication", error=str(e), exc_info=True)
    return None


class AccessFilterMiddleware(BaseHTTPMiddleware):
    """Installs ``request.state.identity`` (None when unauthenticated)"""

    async def dispatch(self, request: Request, call_next: Callable):
        request.state.identity = None

        token = get_bearer_token(request.headers.get(AUTH_HEADER))
        if token:
            state = request.app.state
            request.state.identity = await resolve_identity(state.token_service, state.db, token)

        return await call_next(request)
