"""
Business logic services for project service
"""

from .auth_service import AuthService
from .project_service import ProjectService
from .task_service import TaskService

__all__ = ["AuthService", "ProjectService", "TaskService"]
