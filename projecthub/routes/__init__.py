"""
API routes for project service
"""

from . import auth, health, projects, tasks

__all__ = ["auth", "health", "projects", "tasks"]
