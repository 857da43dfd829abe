"""Project models for generated designs."""

import json
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from uigen.core.db import MongoModel
from uigen.utils import now

ChatMessage = dict[str, Any]
FileSystemData = dict[str, Any]


class Project(MongoModel):
    """Stored project. Messages and file system are kept as JSON strings."""

    name: str
    user_id: UUID
    messages: str = "[]"
    data: str = "{}"
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)

    def decoded_messages(self) -> list[ChatMessage]:
        return list(json.loads(self.messages))

    def decoded_data(self) -> FileSystemData:
        return dict(json.loads(self.data))


class ProjectSummary(BaseModel):
    """Project list entry (API representation)."""

    id: UUID = Field(..., description="Project ID")
    name: str = Field(..., description="Project name")
    created_at: datetime = Field(..., description="Creation time")
    updated_at: datetime = Field(..., description="Last modification time")

    @classmethod
    def from_domain(cls, project: Project) -> "ProjectSummary":
        return cls(id=project.id, name=project.name, created_at=project.created_at, updated_at=project.updated_at)


class ProjectView(ProjectSummary):
    """Full project with decoded chat history and file system (API representation)."""

    messages: list[ChatMessage] = Field(..., description="Chat history")
    data: FileSystemData = Field(..., description="Virtual file system keyed by path")

    @classmethod
    def from_domain(cls, project: Project) -> "ProjectView":
        return cls(
            id=project.id,
            name=project.name,
            created_at=project.created_at,
            updated_at=project.updated_at,
            messages=project.decoded_messages(),
            data=project.decoded_data(),
        )
