"""
ProjectHub Service - Main Application
Users, their projects, and the tasks inside them
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from projecthub.config import (
    AppConfig, DatabaseConfig, SecurityConfig,
    get_app_config, get_db_config, get_security_config,
)
from projecthub.exceptions import AuthenticationRequired, ProjectHubError
from projecthub.routes import auth, health, projects, tasks
from projecthub.services import AuthService, ProjectService, TaskService
from projecthub.utils.access_filter import AccessFilterMiddleware
from projecthub.utils.database import ProjectHubDatabase
from projecthub.utils.logger import configure_logging
from projecthub.utils.memory_store import InMemoryDatabase
from projecthub.utils.security import PasswordHasher, TokenService

logger = structlog.get_logger(__name__)


def build_database(app_config: AppConfig, db_config: DatabaseConfig):
    """Storage selected by APP_STORAGE_BACKEND"""
    if app_config.storage_backend == "memory":
        return InMemoryDatabase()
    return ProjectHubDatabase(db_config)


def _validation_errors(exc: RequestValidationError) -> dict:
    """Flatten framework validation errors into a field -> message map"""
    errors = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        field = loc[-1] if loc and error.get("type") != "json_invalid" else "error"
        errors.setdefault(field, error.get("msg", "Invalid value"))
    return errors


def create_app(
    app_config: Optional[AppConfig] = None,
    db_config: Optional[DatabaseConfig] = None,
    security_config: Optional[SecurityConfig] = None,
    database=None,
) -> FastAPI:
    """
    Build the application

    Args:
        app_config: Application settings, read from the environment if omitted
        db_config: PostgreSQL settings, read from the environment if omitted
        security_config: Token and hashing settings, read from the environment if omitted
        database: Ready-made storage; replaces the configured backend

    Returns:
        FastAPI: Application whose services are wired in the lifespan
    """
    app_config = app_config or get_app_config()
    db_config = db_config or get_db_config()
    security_config = security_config or get_security_config()

    configure_logging(app_config.log_level, app_config.log_json)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan events"""
        logger.info("Starting ProjectHub Service")
        app_config.log_config()
        security_config.log_config()

        db = database
        if db is None:
            db = build_database(app_config, db_config)
            if app_config.storage_backend == "postgres":
                db_config.log_config()
        try:
            await db.initialize()
        except Exception as e:
            logger.error("Failed to initialize storage", error=str(e))
            raise

        token_service = TokenService(
            security_config.jwt_secret_key,
            algorithm=security_config.jwt_algorithm,
            expires_minutes=security_config.jwt_access_token_expire_minutes,
        )
        hasher = PasswordHasher(rounds=security_config.bcrypt_rounds)

        app.state.db = db
        app.state.token_service = token_service
        app.state.auth_service = AuthService(db, hasher, token_service)
        app.state.project_service = ProjectService(db)
        app.state.task_service = TaskService(db)
        logger.info("ProjectHub Service startup complete", storage=app_config.storage_backend)

        yield

        await db.close()
        logger.info("ProjectHub Service shutdown complete")

    app = FastAPI(
        title="ProjectHub Service",
        description="Project and task tracking with per-user ownership",
        version=app_config.service_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.app_config = app_config

    # Innermost first: the access filter runs after logging and CORS
    app.add_middleware(AccessFilterMiddleware)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all incoming requests"""
        logger.info("Request received", method=request.method, path=request.url.path)
        response = await call_next(request)
        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
        )
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[app_config.cors_origin],
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Requested-With"],
        expose_headers=["Authorization"],
        max_age=3600,
    )

    @app.exception_handler(ProjectHubError)
    async def projecthub_exception_handler(request: Request, exc: ProjectHubError):
        """Render domain errors as {"error": ...} or a field map"""
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationRequired) else None
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed bodies and path parameters are plain validation errors"""
        return JSONResponse(status_code=400, content=_validation_errors(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Custom HTTP exception handler"""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler"""
        logger.error(
            "Unhandled exception",
            error=str(exc),
            method=request.method,
            path=request.url.path,
            exc_info=True,
        )
        return JSONResponse(status_code=500, content={"error": f"An error occurred: {exc}"})

    # Register routes
    app.include_router(health.router, tags=["Health"])
    app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
    app.include_router(projects.router, prefix="/api/projects", tags=["Projects"])
    app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"])

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "service": app_config.service_name,
            "version": app_config.service_version,
            "status": "running",
            "docs": "/docs",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "projecthub.main:app",
        host="0.0.0.0",
        port=8000,
        log_level="info",
    )
