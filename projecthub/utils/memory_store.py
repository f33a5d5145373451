"""
In-process storage with the same interface as ProjectHubDatabase

Used for local development (APP_STORAGE_BACKEND=memory) and tests.
Rows live in dictionaries keyed by id; nothing survives a restart.
"""

import itertools
from datetime import date, datetime, timezone
from typing import Dict, List, Optional

import structlog

from projecthub.exceptions import AlreadyExists
from projecthub.models.project import Project
from projecthub.models.task import Task, TaskStatus
from projecthub.models.user import User

logger = structlog.get_logger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryDatabase:
    """Dictionary-backed users, projects and tasks"""

    def __init__(self):
        self._users: Dict[int, User] = {}
        self._users_by_email: Dict[str, int] = {}
        self._projects: Dict[int, dict] = {}
        self._tasks: Dict[int, Task] = {}
        self._user_ids = itertools.count(1)
        self._project_ids = itertools.count(1)
        self._task_ids = itertools.count(1)

    async def initialize(self):
        logger.info("In-memory storage ready")

    async def close(self):
        pass

    async def ping(self) -> bool:
        return True

    # ===== USER OPERATIONS =====

    async def create_user(self, email: str, password_hash: str) -> User:
        if email in self._users_by_email:
            raise AlreadyExists(f"User with email {email} already exists")
        user = User(id=next(self._user_ids), email=email, password_hash=password_hash, created_at=_now())
        self._users[user.id] = user
        self._users_by_email[email] = user.id
        return user

    async def get_user_by_email(self, email: str) -> Optional[User]:
        user_id = self._users_by_email.get(email)
        return self._users.get(user_id) if user_id is not None else None

    # ===== PROJECT OPERATIONS =====

    def _to_project(self, row: dict) -> Project:
        tasks = [t for t in self._tasks.values() if t.project_id == row["id"]]
        return Project(
            **row,
            owner_email=self._users[row["user_id"]].email,
            total_tasks=len(tasks),
            completed_tasks=sum(1 for t in tasks if t.status == TaskStatus.COMPLETED),
        )

    async def create_project(self, user_id: int, title: str, description: Optional[str]) -> Project:
        now = _now()
        row = {
            "id": next(self._project_ids),
            "title": title,
            "description": description,
            "user_id": user_id,
            "created_at": now,
            "updated_at": now,
        }
        self._projects[row["id"]] = row
        return self._to_project(row)

    async def get_project(self, project_id: int) -> Optional[Project]:
        row = self._projects.get(project_id)
        return self._to_project(row) if row else None

    async def list_projects_by_user(self, user_id: int) -> List[Project]:
        return [
            self._to_project(row)
            for project_id, row in sorted(self._projects.items())
            if row["user_id"] == user_id
        ]

    async def update_project(self, project_id: int, title: str, description: Optional[str]) -> Optional[Project]:
        row = self._projects.get(project_id)
        if row is None:
            return None
        row.update(title=title, description=description, updated_at=_now())
        return self._to_project(row)

    async def delete_project(self, project_id: int) -> bool:
        if project_id not in self._projects:
            return False
        for task_id in [t.id for t in self._tasks.values() if t.project_id == project_id]:
            del self._tasks[task_id]
        del self._projects[project_id]
        return True

    # ===== TASK OPERATIONS =====

    async def create_task(
        self,
        project_id: int,
        title: str,
        description: Optional[str],
        due_date: Optional[date],
    ) -> Task:
        if project_id not in self._projects:
            # mirrors the foreign key on tasks.project_id
            raise ValueError(f"Project {project_id} does not exist")
        now = _now()
        task = Task(
            id=next(self._task_ids),
            title=title,
            description=description,
            due_date=due_date,
            status=TaskStatus.PENDING,
            project_id=project_id,
            created_at=now,
            updated_at=now,
        )
        self._tasks[task.id] = task
        return task

    async def get_task(self, task_id: int) -> Optional[Task]:
        return self._tasks.get(task_id)

    async def list_tasks_by_project(self, project_id: int) -> List[Task]:
        return [t for task_id, t in sorted(self._tasks.items()) if t.project_id == project_id]

    async def update_task_status(self, task_id: int, status: TaskStatus) -> Optional[Task]:
        task = self._tasks.get(task_id)
        if task is None:
            return None
        updated = task.model_copy(update={"status": status, "updated_at": _now()})
        self._tasks[task_id] = updated
        return updated

    async def delete_task(self, task_id: int) -> bool:
        return self._tasks.pop(task_id, None) is not None

    async def count_tasks(self, project_id: int) -> int:
        """Task rows still referencing ``project_id``"""
        return sum(1 for t in self._tasks.values() if t.project_id == project_id)
