"""
Database utilities for project service
Users, projects and tasks stored in PostgreSQL through an asyncpg pool
"""

from datetime import date
from typing import List, Optional

import asyncpg
import structlog
from asyncpg import Pool

from projecthub.config import DatabaseConfig
from projecthub.exceptions import AlreadyExists
from projecthub.models.project import Project
from projecthub.models.task import Task, TaskStatus
from projecthub.models.user import User

logger = structlog.get_logger(__name__)


SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id BIGSERIAL PRIMARY KEY,
        email VARCHAR(255) NOT NULL UNIQUE,
        password_hash VARCHAR(255) NOT NULL,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS projects (
        id BIGSERIAL PRIMARY KEY,
        title VARCHAR(255) NOT NULL,
        description TEXT,
        user_id BIGINT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS tasks (
        id BIGSERIAL PRIMARY KEY,
        title VARCHAR(255) NOT NULL,
        description TEXT,
        due_date DATE,
        status VARCHAR(20) NOT NULL DEFAULT 'PENDING'
            CHECK (status IN ('PENDING', 'COMPLETED')),
        project_id BIGINT NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_projects_user_id ON projects(user_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_project_id ON tasks(project_id)",
)

# Project rows carry the owner's email and task counts for the progress metric
PROJECT_SELECT = """
    SELECT p.id, p.title, p.description, p.user_id, u.email AS owner_email,
           p.created_at, p.updated_at,
           COUNT(t.id) AS total_tasks,
           COUNT(t.id) FILTER (WHERE t.status = 'COMPLETED') AS completed_tasks
    FROM projects p
    JOIN users u ON u.id = p.user_id
    LEFT JOIN tasks t ON t.project_id = p.id
"""

TASK_COLUMNS = "id, title, description, due_date, status, project_id, created_at, updated_at"


class ProjectHubDatabase:
    """Database connection and operations for project service"""

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self.pool: Optional[Pool] = None

    async def initialize(self):
        """Initialize database connection pool and create tables"""
        try:
            self.pool = await asyncpg.create_pool(
                self.config.get_database_url(),
                min_size=self.config.db_pool_min_size,
                max_size=self.config.db_pool_max_size,
                command_timeout=self.config.db_command_timeout,
            )
            logger.info("Database pool created", database=self.config.postgres_db)
            await self.create_schema()
        except Exception as e:
            logger.error("Failed to initialize database", error=str(e))
            raise

    async def create_schema(self):
        """Create tables and indexes if they do not exist"""
        async with self.pool.acquire() as conn:
            async with conn.transaction():
                for statement in SCHEMA_STATEMENTS:
                    await conn.execute(statement)
        logger.info("Database schema ready")

    async def close(self):
        """Close database connection pool"""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("Database pool closed")

    async def ping(self) -> bool:
        """Run a trivial query to confirm connectivity"""
        async with self.pool.acquire() as conn:
            return await conn.fetchval("SELECT 1") == 1

    # ===== USER OPERATIONS =====

    async def create_user(self, email: str, password_hash: str) -> User:
        """Insert a new user; a duplicate email raises AlreadyExists"""
        async with self.pool.acquire() as conn:
            try:
                row = await conn.fetchrow(
                    """
                    INSERT INTO users (email, password_hash)
                    VALUES ($1, $2)
                    RETURNING id, email, password_hash, created_at
                    """,
                    email,
                    password_hash,
                )
            except asyncpg.UniqueViolationError:
                raise AlreadyExists(f"User with email {email} already exists")
            except Exception as e:
                logger.error("Failed to create user", email=email, error=str(e))
                raise

        logger.info("User created", user_id=row["id"])
        return User(**dict(row))

    async def get_user_by_email(self, email: str) -> Optional[User]:
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT id, email, password_hash, created_at FROM users WHERE email = $1",
                email,
            )
        return User(**dict(row)) if row else None

    # ===== PROJECT OPERATIONS =====

    async def create_project(self, user_id: int, title: str, description: Optional[str]) -> Project:
        """Create a new project and return it with its (zero) task counts"""
        async with self.pool.acquire() as conn:
            try:
                project_id = await conn.fetchval(
                    """
                    INSERT INTO projects (title, description, user_id)
                    VALUES ($1, $2, $3)
                    RETURNING id
                    """,
                    title,
                    description,
                    user_id,
                )
            except Exception as e:
                logger.error("Failed to create project", user_id=user_id, error=str(e))
                raise

        logger.info("Project created", project_id=project_id, user_id=user_id)
        return await self.get_project(project_id)

    async def get_project(self, project_id: int) -> Optional[Project]:
        """Get project by ID"""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                PROJECT_SELECT + " WHERE p.id = $1 GROUP BY p.id, u.email",
                project_id,
            )
        return Project(**dict(row)) if row else None

    async def list_projects_by_user(self, user_id: int) -> List[Project]:
        """All projects owned by a user, oldest first"""
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(
                PROJECT_SELECT + " WHERE p.user_id = $1 GROUP BY p.id, u.email ORDER BY p.id",
                user_id,
            )
        return [Project(**dict(row)) for row in rows]

    async def update_project(self, project_id: int, title: str, description: Optional[str]) -> Optional[Project]:
        """Replace title and description"""
        async with self.pool.acquire() as conn:
            try:
                result = await conn.fetchval(
                    """
                    UPDATE projects
                    SET title = $1, description = $2, updated_at = now()
                    WHERE id = $3
                    RETURNING id
                    """,
                    title,
                    description,
                    project_id,
                )
            except Exception as e:
                logger.error("Failed to update project", project_id=project_id, error=str(e))
                raise

        if result is None:
            return None
        logger.info("Project updated", project_id=project_id)
        return await self.get_project(project_id)

    async def delete_project(self, project_id: int) -> bool:
        """Delete a project and all of its tasks in one transaction"""
        async with self.pool.acquire() as conn:
            try:
                async with conn.transaction():
                    await conn.execute("DELETE FROM tasks WHERE project_id = $1", project_id)
                    result = await conn.execute("DELETE FROM projects WHERE id = $1", project_id)
            except Exception as e:
                logger.error("Failed to delete project", project_id=project_id, error=str(e))
                raise

        deleted = result == "DELETE 1"
        if deleted:
            logger.info("Project deleted", project_id=project_id)
        return deleted

    # ===== TASK OPERATIONS =====

    async def create_task(
        self,
        project_id: int,
        title: str,
        description: Optional[str],
        due_date: Optional[date],
    ) -> Task:
        """Create a PENDING task under a project"""
        async with self.pool.acquire() as conn:
            try:
                row = await conn.fetchrow(
                    f"""
                    INSERT INTO tasks (title, description, due_date, status, project_id)
                    VALUES ($1, $2, $3, $4, $5)
                    RETURNING {TASK_COLUMNS}
                    """,
                    title,
                    description,
                    due_date,
                    TaskStatus.PENDING.value,
                    project_id,
                )
            except Exception as e:
                logger.error("Failed to create task", project_id=project_id, error=str(e))
                raise

        logger.info("Task created", task_id=row["id"], project_id=project_id)
        return Task(**dict(row))

    async def get_task(self, task_id: int) -> Optional[Task]:
        """Get task by ID"""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(f"SELECT {TASK_COLUMNS} FROM tasks WHERE id = $1", task_id)
        return Task(**dict(row)) if row else None

    async def list_tasks_by_project(self, project_id: int) -> List[Task]:
        """All tasks of a project, oldest first"""
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(
                f"SELECT {TASK_COLUMNS} FROM tasks WHERE project_id = $1 ORDER BY id",
                project_id,
            )
        return [Task(**dict(row)) for row in rows]

    async def count_tasks(self, project_id: int) -> int:
        """Task rows still referencing ``project_id``"""
        async with self.pool.acquire() as conn:
            return await conn.fetchval("SELECT COUNT(*) FROM tasks WHERE project_id = $1", project_id)

    async def update_task_status(self, task_id: int, status: TaskStatus) -> Optional[Task]:
        async with self.pool.acquire() as conn:
            try:
                row = await conn.fetchrow(
                    f"""
                    UPDATE tasks
                    SET status = $1, updated_at = now()
                    WHERE id = $2
                    RETURNING {TASK_COLUMNS}
                    """,
                    status.value,
                    task_id,
                )
            except Exception as e:
                logger.error("Failed to update task", task_id=task_id, error=str(e))
                raise

        if row is None:
            return None
        logger.info("Task status updated", task_id=task_id, status=status.value)
        return Task(**dict(row))

    async def delete_task(self, task_id: int) -> bool:
        async with self.pool.acquire() as conn:
            try:
                result = await conn.execute("DELETE FROM tasks WHERE id = $1", task_id)
            except Exception as e:
                logger.error("Failed to delete task", task_id=task_id, error=str(e))
                raise

        deleted = result == "DELETE 1"
        if deleted:
            logger.info("Task deleted", task_id=task_id)
        return deleted
