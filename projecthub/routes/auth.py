"""
Authentication Routes
User registration and login
"""

from fastapi import APIRouter, status
from fastapi.responses import PlainTextResponse
import structlog

from projecthub.models.auth import AuthResponse, LoginRequest, RegisterRequest
from projecthub.utils.dependencies import AuthServiceDep, CurrentUser

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(register_data: RegisterRequest, auth_service: AuthServiceDep):
    """
    Register a new user

    Creates the account and returns a token, so registration doubles as login
    """
    return await auth_service.register(register_data.email, register_data.password)


@router.post("/login", response_model=AuthResponse)
async def login(login_data: LoginRequest, auth_service: AuthServiceDep):
    """Exchange email and password for a bearer token"""
    return await auth_service.login(login_data.email, login_data.password)


@router.get("/test", response_class=PlainTextResponse)
async def test_authentication(current_user: CurrentUser):
    """Confirm that the presented token is accepted"""
    logger.info("Authentication check", email=current_user)
    return "Authentication is working! You are authenticated."
