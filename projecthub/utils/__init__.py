"""
Utility modules for project service
"""

from .database import ProjectHubDatabase
from .memory_store import InMemoryDatabase
from .security import PasswordHasher, TokenService

__all__ = [
    "ProjectHubDatabase",
    "InMemoryDatabase",
    "PasswordHasher",
    "TokenService",
]
