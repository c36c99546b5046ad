import logging
from typing import Protocol, runtime_checkable

from github_repo_hooks.feature_connection.errors import ArgumentInvalidError
from github_repo_hooks.feature_connection.models import ApiOptions
from github_repo_hooks.feature_connection.services import (
    ApiConnection,
    ensure_not_null,
    ensure_not_null_or_empty,
)
from github_repo_hooks.feature_connection.urls import ApiUrls

from .models import EditRepositoryHook, NewRepositoryHook, RepositoryHook

logger = logging.getLogger(__name__)


@runtime_checkable
class RepositoryHooksCapability(Protocol):
    """Operations of GitHub's Repository Webhooks API."""

    async def get_all(
        self, owner: str, name: str, options: ApiOptions | None = None
    ) -> list[RepositoryHook]: ...

    async def get(self, owner: str, name: str, hook_id: int) -> RepositoryHook: ...

    async def create(
        self, owner: str, name: str, hook: NewRepositoryHook
    ) -> RepositoryHook: ...

    async def edit(
        self, owner: str, name: str, hook_id: int, hook: EditRepositoryHook
    ) -> RepositoryHook: ...

    async def test(self, owner: str, name: str, hook_id: int) -> None: ...

    async def ping(self, owner: str, name: str, hook_id: int) -> None: ...

    async def delete(self, owner: str, name: str, hook_id: int) -> None: ...


def _ensure_repository(owner: str, name: str) -> None:
    ensure_not_null_or_empty(owner, "owner")
    ensure_not_null_or_empty(name, "name")


class RepositoryHooksClient:
    """
    Client for a repository's webhooks.

    Arguments are checked before anything is sent; remote failures surface
    as ApiError subclasses raised by the connection.
    """

    def __init__(self, connection: ApiConnection):
        self.connection = connection

    async def get_all(
        self, owner: str, name: str, options: ApiOptions | None = None
    ) -> list[RepositoryHook]:
        """
        Lists the hooks of a repository in server order.

        Without options every page is fetched.
        """
        _ensure_repository(owner, name)
        if options is None:
            options = ApiOptions()
        elif not isinstance(options, ApiOptions):
            raise ArgumentInvalidError("options", "Expected an ApiOptions instance")

        logger.debug("Listing hooks for %s/%s", owner, name)
        return await self.connection.get_all(
            ApiUrls.repository_hooks(owner, name), RepositoryHook, options
        )

    async def get(self, owner: str, name: str, hook_id: int) -> RepositoryHook:
        _ensure_repository(owner, name)
        return await self.connection.get(
            ApiUrls.repository_hook_by_id(owner, name, hook_id), RepositoryHook
        )

    async def create(
        self, owner: str, name: str, hook: NewRepositoryHook
    ) -> RepositoryHook:
        _ensure_repository(owner, name)
        ensure_not_null(hook, "hook")

        logger.debug("Creating %s hook on %s/%s", hook.name, owner, name)
        return await self.connection.post(
            ApiUrls.repository_hooks(owner, name), RepositoryHook, hook.to_request()
        )

    async def edit(
        self, owner: str, name: str, hook_id: int, hook: EditRepositoryHook
    ) -> RepositoryHook:
        _ensure_repository(owner, name)
        ensure_not_null(hook, "hook")

        logger.debug("Editing hook %s on %s/%s", hook_id, owner, name)
        return await self.connection.patch(
            ApiUrls.repository_hook_by_id(owner, name, hook_id),
            RepositoryHook,
            hook.to_request(),
        )

    async def test(self, owner: str, name: str, hook_id: int) -> None:
        """
        Replays the latest push to the hook.

        If the hook is not subscribed to push events the server still accepts
        the request but nothing is delivered.
        """
        _ensure_repository(owner, name)
        await self.connection.post(ApiUrls.repository_hook_test(owner, name, hook_id))

    async def ping(self, owner: str, name: str, hook_id: int) -> None:
        """Sends a ping event to the hook."""
        _ensure_repository(owner, name)
        await self.connection.post(ApiUrls.repository_hook_ping(owner, name, hook_id))

    async def delete(self, owner: str, name: str, hook_id: int) -> None:
        _ensure_repository(owner, name)

        logger.debug("Deleting hook %s on %s/%s", hook_id, owner, name)
        await self.connection.delete(
            ApiUrls.repository_hook_by_id(owner, name, hook_id)
        )
