"""
Project service business logic
"""

from typing import List

import structlog

from projecthub.exceptions import Forbidden, NotFound, ValidationError
from projecthub.models.project import Project, ProjectRequest, ProjectResponse
from projecthub.models.user import User
from projecthub.utils.mappers import to_project_response
from projecthub.utils.validators import validate_project

logger = structlog.get_logger(__name__)


async def get_owned_project(db, identity: str, project_id: int, action: str = "access") -> Project:
    """
    Load a project the caller owns

    Existence is checked before ownership, so a missing project is NotFound
    and somebody else's project is Forbidden.
    """
    project = await db.get_project(project_id)
    if project is None:
        raise NotFound("Project not found")
    if project.owner_email != identity:
        logger.warning("Project access denied", project_id=project_id, identity=identity, action=action)
        raise Forbidden(f"You are not authorized to {action} this project")
    return project


class ProjectService:
    """Project CRUD scoped to the authenticated identity"""

    def __init__(self, db):
        self.db = db

    async def _get_user(self, identity: str) -> User:
        user = await self.db.get_user_by_email(identity)
        if user is None:
            raise NotFound("User not found")
        return user

    async def create_project(self, identity: str, data: ProjectRequest) -> ProjectResponse:
        errors = validate_project(data.title)
        if errors:
            raise ValidationError(errors)

        user = await self._get_user(identity)
        project = await self.db.create_project(user.id, data.title.strip(), data.description)
        logger.info("Project created for user", project_id=project.id, user_id=user.id)
        return to_project_response(project)

    async def list_projects(self, identity: str) -> List[ProjectResponse]:
        user = await self._get_user(identity)
        projects = await self.db.list_projects_by_user(user.id)
        return [to_project_response(p) for p in projects]

    async def get_project(self, identity: str, project_id: int) -> ProjectResponse:
        project = await get_owned_project(self.db, identity, project_id, "view")
        return to_project_response(project)

    async def update_project(self, identity: str, project_id: int, data: ProjectRequest) -> ProjectResponse:
        errors = validate_project(data.title)
        if errors:
            raise ValidationError(errors)

        await get_owned_project(self.db, identity, project_id, "update")
        project = await self.db.update_project(project_id, data.title.strip(), data.description)
        if project is None:
            # deleted between the ownership check and the update
            raise NotFound("Project not found")
        return to_project_response(project)

    async def delete_project(self, identity: str, project_id: int) -> None:
        await get_owned_project(self.db, identity, project_id, "delete")
        if not await self.db.delete_project(project_id):
            raise NotFound("Project not found")
        logger.info("Project and its tasks deleted", project_id=project_id)
