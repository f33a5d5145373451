"""
Data models for project service
"""

from .user import User
from .project import Project, ProjectRequest, ProjectResponse
from .task import Task, TaskRequest, TaskResponse, TaskStatus
from .auth import RegisterRequest, LoginRequest, AuthResponse

__all__ = [
    "User",
    "Project",
    "ProjectRequest",
    "ProjectResponse",
    "Task",
    "TaskRequest",
    "TaskResponse",
    "TaskStatus",
    "RegisterRequest",
    "LoginRequest",
    "AuthResponse",
]
