"""
Project management routes
"""

from typing import List

from fastapi import APIRouter, Response, status
import structlog

from projecthub.models.project import ProjectRequest, ProjectResponse
from projecthub.models.task import TaskRequest, TaskResponse
from projecthub.utils.dependencies import CurrentUser, ProjectId, ProjectServiceDep, TaskServiceDep

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(project_data: ProjectRequest, current_user: CurrentUser, projects: ProjectServiceDep):
    """Create a new project for the authenticated user"""
    return await projects.create_project(current_user, project_data)


@router.get("", response_model=List[ProjectResponse])
async def list_projects(current_user: CurrentUser, projects: ProjectServiceDep):
    """List the authenticated user's projects with their progress"""
    return await projects.list_projects(current_user)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(project_id: ProjectId, current_user: CurrentUser, projects: ProjectServiceDep):
    """Get project details"""
    return await projects.get_project(current_user, project_id)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: ProjectId,
    project_data: ProjectRequest,
    current_user: CurrentUser,
    projects: ProjectServiceDep,
):
    """Replace a project's title and description"""
    return await projects.update_project(current_user, project_id, project_data)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(project_id: ProjectId, current_user: CurrentUser, projects: ProjectServiceDep):
    """Delete a project together with all of its tasks"""
    await projects.delete_project(current_user, project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{project_id}/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    project_id: ProjectId,
    task_data: TaskRequest,
    current_user: CurrentUser,
    tasks: TaskServiceDep,
):
    """Add a PENDING task to a project"""
    return await tasks.create_task(current_user, project_id, task_data)


@router.get("/{project_id}/tasks", response_model=List[TaskResponse])
async def list_tasks(project_id: ProjectId, current_user: CurrentUser, tasks: TaskServiceDep):
    """List the tasks of a project"""
    return await tasks.list_tasks(current_user, project_id)
