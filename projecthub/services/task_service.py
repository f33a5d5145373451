"""
Task service business logic
"""

from typing import List

import structlog

from projecthub.exceptions import NotFound, ValidationError
from projecthub.models.task import Task, TaskRequest, TaskResponse, TaskStatus
from projecthub.services.project_service import get_owned_project
from projecthub.utils.mappers import to_task_response
from projecthub.utils.validators import parse_due_date, validate_task

logger = structlog.get_logger(__name__)


class TaskService:
    """Task operations; a task belongs to whoever owns its project"""

    def __init__(self, db):
        self.db = db

    async def _get_owned_task(self, identity: str, task_id: int) -> Task:
        task = await self.db.get_task(task_id)
        if task is None:
            raise NotFound("Task not found")
        await get_owned_project(self.db, identity, task.project_id)
        return task

    async def create_task(self, identity: str, project_id: int, data: TaskRequest) -> TaskResponse:
        errors = validate_task(data.title, data.due_date)
        if errors:
            raise ValidationError(errors)

        await get_owned_project(self.db, identity, project_id)
        task = await self.db.create_task(
            project_id,
            data.title.strip(),
            data.description,
            parse_due_date(data.due_date),
        )
        logger.info("Task created in project", task_id=task.id, project_id=project_id)
        return to_task_response(task)

    async def list_tasks(self, identity: str, project_id: int) -> List[TaskResponse]:
        await get_owned_project(self.db, identity, project_id)
        tasks = await self.db.list_tasks_by_project(project_id)
        return [to_task_response(t) for t in tasks]

    async def complete_task(self, identity: str, task_id: int) -> TaskResponse:
        await self._get_owned_task(identity, task_id)
        task = await self.db.update_task_status(task_id, TaskStatus.COMPLETED)
        if task is None:
            raise NotFound("Task not found")
        return to_task_response(task)

    async def delete_task(self, identity: str, task_id: int) -> None:
        await self._get_owned_task(identity, task_id)
        if not await self.db.delete_task(task_id):
            raise NotFound("Task not found")
        logger.info("Task deleted", task_id=task_id)
