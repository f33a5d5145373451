"""
Task data models and schemas
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TaskStatus(str, Enum):
    """Task status enumeration"""
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


# Full task model (database representation)
class Task(BaseModel):
    """Task row; its owner is the owner of ``project_id``"""
    id: int = Field(..., description="Task ID")
    title: str = Field(..., description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    due_date: Optional[date] = Field(None, description="Due date")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Current status")
    project_id: int = Field(..., description="Parent project ID")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    class Config:
        """Pydantic configuration"""
        from_attributes = True


# Create task schema (for API requests)
class TaskRequest(BaseModel):
    """Schema for creating a task; dueDate is YYYY-MM-DD"""
    title: Optional[str] = Field(None, description="Task title (required)")
    description: Optional[str] = Field(None, description="Optional task description")
    due_date: Optional[str] = Field(None, alias="dueDate", description="Optional due date")

    class Config:
        """Pydantic configuration"""
        populate_by_name = True


# Response schema (for API responses)
class TaskResponse(BaseModel):
    """Schema for task API responses"""
    id: int
    title: str
    description: Optional[str] = None
    due_date: Optional[date] = Field(None, alias="dueDate")
    status: TaskStatus
    created_at: datetime = Field(..., alias="createdAt")

    class Config:
        """Pydantic configuration"""
        populate_by_name = True
