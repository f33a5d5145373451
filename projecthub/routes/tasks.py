"""
Task routes addressed by task id
"""

from fastapi import APIRouter, Response, status

from projecthub.models.task import TaskResponse
from projecthub.utils.dependencies import CurrentUser, TaskId, TaskServiceDep

router = APIRouter()


@router.patch("/{task_id}/complete", response_model=TaskResponse)
async def complete_task(task_id: TaskId, current_user: CurrentUser, tasks: TaskServiceDep):
    """Mark a task as COMPLETED"""
    return await tasks.complete_task(current_user, task_id)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: TaskId, current_user: CurrentUser, tasks: TaskServiceDep):
    """Delete a task"""
    await tasks.delete_task(current_user, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
