import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel

from github_repo_hooks.config import Settings, settings

from .errors import ArgumentInvalidError, raise_for_response
from .models import ApiOptions

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def ensure_not_null_or_empty(value: Any, argument: str) -> None:
    """Raises ArgumentInvalidError unless value is a non-blank string."""
    if value is None:
        raise ArgumentInvalidError(argument, "Value cannot be None")
    if not isinstance(value, str):
        raise ArgumentInvalidError(argument, "Value must be a string")
    if not value.strip():
        raise ArgumentInvalidError(argument, "String cannot be empty")


def ensure_not_null(value: Any, argument: str) -> None:
    if value is None:
        raise ArgumentInvalidError(argument, "Value cannot be None")


class ApiConnection:
    """
    Thin JSON layer over a shared httpx.AsyncClient.

    Paths are relative to Settings.GITHUB_API_URL. Every non-2xx response is
    raised as an ApiError subclass; transport errors propagate unchanged.
    """

    def __init__(
        self,
        config: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or settings
        self._client = httpx.AsyncClient(
            base_url=self.config.GITHUB_API_URL,
            headers=self._default_headers(),
            timeout=self.config.GITHUB_TIMEOUT,
            transport=transport,
        )

    def _default_headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": self.config.GITHUB_USER_AGENT,
            "X-GitHub-Api-Version": self.config.GITHUB_API_VERSION,
        }
        if self.config.GITHUB_TOKEN:
            headers["Authorization"] = f"Bearer {self.config.GITHUB_TOKEN}"
        return headers

    async def __aenter__(self) -> "ApiConnection":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        body: Any = None,
    ) -> httpx.Response:
        logger.debug("Sending %s %s params=%s", method, url, params)
        response = await self._client.request(method, url, params=params, json=body)
        logger.debug("Received %s for %s %s", response.status_code, method, url)
        raise_for_response(response)
        return response

    async def get(
        self, path: str, model: type[ModelT], params: dict[str, Any] | None = None
    ) -> ModelT:
        response = await self._request("GET", path, params=params)
        return model.model_validate(response.json())

    async def get_all(
        self, path: str, model: type[ModelT], options: ApiOptions | None = None
    ) -> list[ModelT]:
        """
        Fetches a list resource, following `Link: rel="next"` headers.

        Stops when the server reports no next page or when
        `options.page_count` pages have been read.
        """
        options = options or ApiOptions()
        url: str | None = path
        params: dict[str, Any] | None = options.to_params() or None
        items: list[ModelT] = []
        pages = 0

        while url is not None:
            response = await self._request("GET", url, params=params)
            items.extend(model.model_validate(item) for item in response.json())
            pages += 1
            if options.page_count is not None and pages >= options.page_count:
                break
            next_link = response.links.get("next")
            url = next_link.get("url") if next_link else None
            # The next link already carries the paging query string.
            params = None

        logger.debug("Fetched %d item(s) from %s in %d page(s)", len(items), path, pages)
        return items

    async def post(
        self, path: str, model: type[ModelT] | None = None, body: Any = None
    ) -> ModelT | None:
        """POSTs body; returns the decoded response, or None when no model is given."""
        response = await self._request("POST", path, body=body)
        if model is None:
            return None
        return model.model_validate(response.json())

    async def patch(self, path: str, model: type[ModelT], body: Any) -> ModelT:
        response = await self._request("PATCH", path, body=body)
        return model.model_validate(response.json())

    async def delete(self, path: str) -> None:
        await self._request("DELETE", path)
