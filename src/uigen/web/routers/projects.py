from typing import Any
from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel, Field

from uigen.core.modules.project.models import ProjectSummary, ProjectView
from uigen.web.deps import AppDep, SessionDep
from uigen.web.openapi import ErrorResponse

router = APIRouter(tags=["projects"])


class CreateProjectRequest(BaseModel):
    """Request to create a new project."""

    name: str = Field(..., min_length=1, description="Project name")
    messages: list[dict[str, Any]] = Field(default_factory=list, description="Initial chat history")
    data: dict[str, Any] = Field(default_factory=dict, description="Initial virtual file system keyed by path")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Design from 10:30:00 AM",
                    "messages": [{"id": "1", "role": "user", "content": "A pricing card"}],
                    "data": {"/App.jsx": {"type": "file", "content": "export default function App() {}"}},
                }
            ]
        }
    }


@router.get(
    "/projects",
    summary="List projects",
    description="Projects of the current user, most recently updated first.",
    operation_id="listProjects",
    responses={
        200: {"description": "List of projects"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def list_projects(app: AppDep, session: SessionDep) -> list[ProjectSummary]:
    return await app.get_projects(session)


@router.post(
    "/projects",
    summary="Create project",
    description="Create a project owned by the current user.",
    operation_id="createProject",
    status_code=201,
    responses={
        201: {"description": "Project created"},
        400: {"model": ErrorResponse, "description": "Invalid request data"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def create_project(req: CreateProjectRequest, app: AppDep, session: SessionDep) -> ProjectView:
    return await app.create_project(session, req.name, req.messages, req.data)


@router.get(
    "/projects/{project_id}",
    summary="Get project",
    description="Get a project of the current user with its chat history and files.",
    operation_id="getProject",
    responses={
        200: {"description": "Project details"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Project not found"},
    },
)
async def get_project(project_id: UUID, app: AppDep, session: SessionDep) -> ProjectView:
    return await app.get_project(session, project_id)
