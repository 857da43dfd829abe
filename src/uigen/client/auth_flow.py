"""Sign-in and sign-up followed by choosing the project the user lands on."""

import asyncio
import random
from collections.abc import Awaitable, Callable, Sequence
from typing import Protocol
from uuid import UUID

import structlog

from uigen.client.anon_work import AnonWork
from uigen.core.modules.auth.models import AuthResult
from uigen.core.modules.project.models import ChatMessage, FileSystemData
from uigen.utils import local_time_label

logger = structlog.get_logger(__name__)

CredentialAction = Callable[[str, str], Awaitable[AuthResult]]
LoadingListener = Callable[[bool], None]


class HasId(Protocol):
    @property
    def id(self) -> UUID | str: ...


class CredentialActions(Protocol):
    async def sign_in(self, email: str, password: str) -> AuthResult: ...

    async def sign_up(self, email: str, password: str) -> AuthResult: ...


class AnonWorkStore(Protocol):
    def get_anon_work_data(self) -> AnonWork | None: ...

    def clear_anon_work(self) -> None: ...


class ProjectStore(Protocol):
    async def get_projects(self) -> Sequence[HasId]: ...

    async def create_project(self, name: str, messages: list[ChatMessage], data: FileSystemData) -> HasId: ...


class Navigator(Protocol):
    def push(self, path: str) -> None: ...


class AuthFlow:
    """Runs a credential action and, on success, routes the user to a project.

    After authentication the landing project is, in order: a new project holding
    the anonymous work (which is then cleared), the first of the user's existing
    projects, or a new empty project. Credential failures are returned as-is and
    trigger nothing else; exceptions from any collaborator propagate.

    Overlapping calls are allowed. `is_loading` stays true until the last one
    settles, and the reconciliation step runs one call at a time so anonymous
    work is claimed at most once.
    """

    def __init__(
        self,
        actions: CredentialActions,
        anon_work: AnonWorkStore,
        projects: ProjectStore,
        navigator: Navigator,
    ) -> None:
        self._actions = actions
        self._anon_work = anon_work
        self._projects = projects
        self._navigator = navigator
        self._in_flight = 0
        self._listeners: list[LoadingListener] = []
        self._reconcile_lock = asyncio.Lock()

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    def add_listener(self, listener: LoadingListener) -> Callable[[], None]:
        """Call `listener(is_loading)` whenever loading starts or stops.

        Listeners run inline while a call enters or leaves, including from its
        `finally`, and must not raise: an exception from a listener would replace
        the call's own result or error.

        Returns an unsubscribe function; calling it more than once is a no-op.
        """
        self._listeners.append(listener)
        subscribed = True

        def unsubscribe() -> None:
            nonlocal subscribed
            if subscribed:
                subscribed = False
                self._listeners.remove(listener)

        return unsubscribe

    async def sign_in(self, email: str, password: str) -> AuthResult:
        return await self._authenticate(self._actions.sign_in, email, password)

    async def sign_up(self, email: str, password: str) -> AuthResult:
        return await self._authenticate(self._actions.sign_up, email, password)

    async def _authenticate(self, action: CredentialAction, email: str, password: str) -> AuthResult:
        self._enter()
        try:
            result = await action(email, password)
            if not result.success:
                return result
            async with self._reconcile_lock:
                await self._reconcile()
            return AuthResult.ok()
        finally:
            self._leave()

    async def _reconcile(self) -> None:
        anon_work = self._anon_work.get_anon_work_data()
        if anon_work is not None and anon_work.is_present:
            project = await self._projects.create_project(
                name=f"Design from {local_time_label()}",
                messages=anon_work.messages,
                data=anon_work.file_system_data,
            )
            self._anon_work.clear_anon_work()
            logger.info("reconciled_anon_work", project_id=str(project.id), message_count=len(anon_work.messages))
            self._navigator.push(f"/{project.id}")
            return

        projects = await self._projects.get_projects()
        if projects:
            self._navigator.push(f"/{projects[0].id}")
            return

        project = await self._projects.create_project(
            name=f"New Design #{random.randrange(100000)}",
            messages=[],
            data={},
        )
        logger.info("created_first_project", project_id=str(project.id))
        self._navigator.push(f"/{project.id}")

    def _enter(self) -> None:
        self._in_flight += 1
        if self._in_flight == 1:
            self._notify()

    def _leave(self) -> None:
        self._in_flight -= 1
        if self._in_flight == 0:
            self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.is_loading)
