import json
from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from uigen.core.core import Service
from uigen.core.modules.project.models import ChatMessage, FileSystemData, Project
from uigen.errors import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class ProjectService(Service):
    """Stores projects per user, most recently updated first."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("projects")

    async def on_start(self) -> None:
        """Create index for per-user listing by recency."""
        await self._collection.create_index([("user_id", 1), ("updated_at", -1)])

    async def list_projects_by_user(self, user_id: UUID) -> list[Project]:
        cursor = self._collection.find({"user_id": user_id}).sort("updated_at", -1)
        return await Project.list_cursor(cursor)

    async def create_project(
        self, user_id: UUID, name: str, messages: list[ChatMessage], data: FileSystemData
    ) -> Project:
        if not name.strip():
            raise ValidationError("Project name cannot be empty")

        project = Project(name=name, user_id=user_id, messages=json.dumps(messages), data=json.dumps(data))
        await self._collection.insert_one(project.to_mongo())
        logger.debug("project_created", project_id=str(project.id), user_id=str(user_id))
        return project

    async def get_project(self, project_id: UUID, user_id: UUID) -> Project:
        """Get a project owned by the user. Other users' projects look missing."""
        project = await self._collection.find_one({"_id": project_id, "user_id": user_id})
        if project is None:
            raise NotFoundError(f"Project '{project_id}' not found")
        return Project.model_validate(project)
