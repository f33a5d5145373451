"""
User Models
Database model definitions for user credentials
"""

from datetime import datetime
from dataclasses import dataclass


@dataclass
class User:
    """User database model; the password is only ever held as a bcrypt hash"""
    id: int
    email: str
    password_hash: str
    created_at: datetime
