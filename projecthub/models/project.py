"""
Project data models and schemas
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# Full project model (database representation)
class Project(BaseModel):
    """Project row joined with its owner's email and task counts"""
    id: int = Field(..., description="Project ID")
    title: str = Field(..., description="Project title")
    description: Optional[str] = Field(None, description="Project description")
    user_id: int = Field(..., description="Owning user ID")
    owner_email: str = Field(..., description="Owning user's email")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
    total_tasks: int = Field(default=0, description="Number of tasks in the project")
    completed_tasks: int = Field(default=0, description="Number of completed tasks")

    class Config:
        """Pydantic configuration"""
        from_attributes = True


# Create/update project schema (for API requests)
class ProjectRequest(BaseModel):
    """Schema for creating or updating a project"""
    title: Optional[str] = Field(None, description="Project title (required)")
    description: Optional[str] = Field(None, description="Optional project description")


# Response schema (for API responses)
class ProjectResponse(BaseModel):
    """Schema for project API responses, including derived progress"""
    id: int
    title: str
    description: Optional[str] = None
    created_at: datetime = Field(..., alias="createdAt")
    total_tasks: int = Field(..., alias="totalTasks")
    completed_tasks: int = Field(..., alias="completedTasks")
    progress_percentage: float = Field(..., alias="progressPercentage")

    class Config:
        """Pydantic configuration"""
        populate_by_name = True
