"""
Entity to response mapping
"""

import math

from projecthub.models.project import Project, ProjectResponse
from projecthub.models.task import Task, TaskResponse


def calculate_progress(completed_tasks: int, total_tasks: int) -> float:
    """Percentage of completed tasks, rounded half-up to 2 decimals; 0.0 for an empty project"""
    if total_tasks <= 0:
        return 0.0
    percentage = completed_tasks / total_tasks * 100
    return math.floor(percentage * 100 + 0.5) / 100


def to_project_response(project: Project) -> ProjectResponse:
    return ProjectResponse(
        id=project.id,
        title=project.title,
        description=project.description,
        created_at=project.created_at,
        total_tasks=project.total_tasks,
        completed_tasks=project.completed_tasks,
        progress_percentage=calculate_progress(project.completed_tasks, project.total_tasks),
    )


def to_task_response(task: Task) -> TaskResponse:
    return TaskResponse(
        id=task.id,
        title=task.title,
        description=task.description,
        due_date=task.due_date,
        status=task.status,
        created_at=task.created_at,
    )
