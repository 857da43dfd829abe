"""Tracks work done before sign-in so it can be claimed afterwards."""

from collections.abc import MutableMapping

import structlog
from pydantic import BaseModel, Field

from uigen.core.modules.project.models import ChatMessage, FileSystemData

logger = structlog.get_logger(__name__)

HAS_ANON_WORK_KEY = "uigen_has_anon_work"
ANON_DATA_KEY = "uigen_anon_data"


class AnonWork(BaseModel):
    """Chat history and virtual file system produced while signed out."""

    messages: list[ChatMessage] = Field(default_factory=list)
    file_system_data: FileSystemData = Field(default_factory=dict, alias="fileSystemData")

    model_config = {"populate_by_name": True}

    @property
    def is_present(self) -> bool:
        """An anonymous session without messages counts as no work."""
        return bool(self.messages)


class AnonWorkTracker:
    """Anonymous work kept in a string key/value storage, like browser sessionStorage."""

    def __init__(self, storage: MutableMapping[str, str] | None = None) -> None:
        self._storage: MutableMapping[str, str] = storage if storage is not None else {}

    def set_has_anon_work(self, messages: list[ChatMessage], file_system_data: FileSystemData) -> None:
        # A file system holding only the root directory is empty
        has_files = len(file_system_data) > 1 or any(path != "/" for path in file_system_data)
        if not messages and not has_files:
            return
        work = AnonWork(messages=messages, file_system_data=file_system_data)
        self._storage[HAS_ANON_WORK_KEY] = "true"
        self._storage[ANON_DATA_KEY] = work.model_dump_json(by_alias=True)

    def get_has_anon_work(self) -> bool:
        return self._storage.get(HAS_ANON_WORK_KEY) == "true"

    def get_anon_work_data(self) -> AnonWork | None:
        raw = self._storage.get(ANON_DATA_KEY)
        if raw is None:
            return None
        try:
            return AnonWork.model_validate_json(raw)
        except ValueError:
            logger.warning("anon_work_unreadable")
            return None

    def clear_anon_work(self) -> None:
        self._storage.pop(HAS_ANON_WORK_KEY, None)
        self._storage.pop(ANON_DATA_KEY, None)
