import logging
from typing import Any

import httpx

from github_repo_hooks.config import Settings, settings
from github_repo_hooks.feature_connection.services import ApiConnection
from github_repo_hooks.feature_repository_hooks.services import (
    RepositoryHooksCapability,
    RepositoryHooksClient,
)

logger = logging.getLogger(__name__)


class GitHubClient:
    """
    Entry point wiring a single ApiConnection into the resource clients.

    Use as an async context manager so the underlying HTTP client is closed:

        async with GitHubClient() as github:
            hooks = await github.repository_hooks.get_all("octokit", "octokit.net")
    """

    def __init__(
        self,
        config: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or settings
        self.connection = ApiConnection(config=self.config, transport=transport)
        self.repository_hooks: RepositoryHooksCapability = RepositoryHooksClient(
            self.connection
        )
        logger.debug("GitHub client created for %s", self.config.GITHUB_API_URL)

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.connection.aclose()
