"""
Tests for project ownership and CRUD
"""

import pytest
import pytest_asyncio

from projecthub.exceptions import Forbidden, NotFound, ValidationError
from projecthub.models.project import ProjectRequest
from projecthub.models.task import TaskRequest

ALICE = "alice@example.com"
BOB = "bob@example.com"


@pytest_asyncio.fixture
async def users(memory_db):
    """Two registered users; hashes are irrelevant here"""
    await memory_db.create_user(ALICE, "hash")
    await memory_db.create_user(BOB, "hash")


class TestProjectCrud:
    @pytest.mark.asyncio
    async def test_create_and_get(self, project_service, users):
        created = await project_service.create_project(ALICE, ProjectRequest(title="  Launch  ", description="v1"))

        assert created.title == "Launch"
        assert created.description == "v1"
        assert created.total_tasks == 0
        assert created.progress_percentage == 0.0

        fetched = await project_service.get_project(ALICE, created.id)
        assert fetched.id == created.id

    @pytest.mark.asyncio
    async def test_list_only_returns_own_projects(self, project_service, users):
        first = await project_service.create_project(ALICE, ProjectRequest(title="One"))
        await project_service.create_project(BOB, ProjectRequest(title="Bob's"))
        second = await project_service.create_project(ALICE, ProjectRequest(title="Two"))

        projects = await project_service.list_projects(ALICE)

        assert [p.id for p in projects] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_list_for_unknown_identity(self, project_service):
        with pytest.raises(NotFound):
            await project_service.list_projects("ghost@example.com")

    @pytest.mark.asyncio
    async def test_blank_title_is_rejected(self, project_service, users):
        with pytest.raises(ValidationError) as exc_info:
            await project_service.create_project(ALICE, ProjectRequest(title=" "))
        assert exc_info.value.errors == {"title": "Title is required"}

    @pytest.mark.asyncio
    async def test_update_replaces_fields(self, project_service, users):
        created = await project_service.create_project(ALICE, ProjectRequest(title="Old", description="old"))

        updated = await project_service.update_project(ALICE, created.id, ProjectRequest(title="New"))

        assert updated.title == "New"
        assert updated.description is None

    @pytest.mark.asyncio
    async def test_progress_reflects_completed_tasks(self, project_service, task_service, users):
        project = await project_service.create_project(ALICE, ProjectRequest(title="Launch"))
        tasks = [
            await task_service.create_task(ALICE, project.id, TaskRequest(title=f"Task {i}"))
            for i in range(3)
        ]
        await task_service.complete_task(ALICE, tasks[0].id)

        fetched = await project_service.get_project(ALICE, project.id)

        assert fetched.total_tasks == 3
        assert fetched.completed_tasks == 1
        assert fetched.progress_percentage == 33.33

    @pytest.mark.asyncio
    async def test_delete_removes_tasks(self, project_service, task_service, memory_db, users):
        project = await project_service.create_project(ALICE, ProjectRequest(title="Launch"))
        await task_service.create_task(ALICE, project.id, TaskRequest(title="Task"))
        await task_service.create_task(ALICE, project.id, TaskRequest(title="Task"))

        await project_service.delete_project(ALICE, project.id)

        assert await memory_db.count_tasks(project.id) == 0
        with pytest.raises(NotFound):
            await project_service.get_project(ALICE, project.id)
        with pytest.raises(NotFound):
            await task_service.list_tasks(ALICE, project.id)


class TestOwnership:
    @pytest.mark.asyncio
    async def test_missing_project_is_not_found(self, project_service, users):
        with pytest.raises(NotFound) as exc_info:
            await project_service.get_project(ALICE, 999)
        assert exc_info.value.message == "Project not found"

    @pytest.mark.asyncio
    async def test_update_missing_project_is_not_found(self, project_service, users):
        with pytest.raises(NotFound) as exc_info:
            await project_service.update_project(BOB, 999, ProjectRequest(title="Anything"))
        assert exc_info.value.message == "Project not found"

    @pytest.mark.asyncio
    async def test_delete_missing_project_is_not_found(self, project_service, users):
        with pytest.raises(NotFound) as exc_info:
            await project_service.delete_project(BOB, 999)
        assert exc_info.value.message == "Project not found"

    @pytest.mark.asyncio
    async def test_overlong_title_is_rejected(self, project_service, users):
        with pytest.raises(ValidationError) as exc_info:
            await project_service.create_project(ALICE, ProjectRequest(title="x" * 256))
        assert "title" in exc_info.value.errors
        assert await project_service.list_projects(ALICE) == []

    @pytest.mark.asyncio
    async def test_other_users_project_is_forbidden(self, project_service, users):
        project = await project_service.create_project(ALICE, ProjectRequest(title="Private"))

        with pytest.raises(Forbidden) as view:
            await project_service.get_project(BOB, project.id)
        with pytest.raises(Forbidden) as update:
            await project_service.update_project(BOB, project.id, ProjectRequest(title="Mine now"))
        with pytest.raises(Forbidden) as delete:
            await project_service.delete_project(BOB, project.id)

        assert view.value.message == "You are not authorized to view this project"
        assert update.value.message == "You are not authorized to update this project"
        assert delete.value.message == "You are not authorized to delete this project"

        # nothing changed
        fetched = await project_service.get_project(ALICE, project.id)
        assert fetched.title == "Private"

    @pytest.mark.asyncio
    async def test_validation_runs_before_ownership(self, project_service, users):
        project = await project_service.create_project(ALICE, ProjectRequest(title="Private"))

        with pytest.raises(ValidationError):
            await project_service.update_project(BOB, project.id, ProjectRequest(title=""))
