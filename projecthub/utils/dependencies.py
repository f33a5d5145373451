"""
FastAPI Dependencies
Service lookups and the authenticated-identity requirement
"""

from typing import Annotated

from fastapi import Depends, Path, Request

from projecthub.exceptions import AuthenticationRequired
from projecthub.services import AuthService, ProjectService, TaskService


def get_database(request: Request):
    """Dependency to get the storage instance"""
    return request.app.state.db


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_project_service(request: Request) -> ProjectService:
    return request.app.state.project_service


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


def get_current_user(request: Request) -> str:
    """
    Email of the authenticated caller

    Raises:
        AuthenticationRequired: If the access filter did not trust a token
    """
    identity = getattr(request.state, "identity", None)
    if not identity:
        raise AuthenticationRequired()
    return identity


# ids are BIGSERIAL; anything outside that range can never match a row
MAX_ID = 2**63 - 1

# Type aliases for cleaner dependency injection
DatabaseDep = Annotated[object, Depends(get_database)]
CurrentUser = Annotated[str, Depends(get_current_user)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
ProjectId = Annotated[int, Path(ge=1, le=MAX_ID, description="Project ID")]
TaskId = Annotated[int, Path(ge=1, le=MAX_ID, description="Task ID")]
