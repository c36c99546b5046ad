import logging
from datetime import datetime, timezone
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class ArgumentInvalidError(ValueError):
    """Raised locally, before any request is sent, for a bad argument."""

    def __init__(self, argument: str, message: str):
        super().__init__(f"{message} (parameter '{argument}')")
        self.argument = argument


class RepositoryWebHookConfigError(ValueError):
    """Raised when a web hook's config duplicates one of its typed settings."""

    def __init__(self, duplicate_keys: list[str]):
        keys = ", ".join(sorted(duplicate_keys))
        super().__init__(
            f"Duplicate webhook config values found - these values: {keys} "
            "should not be passed in as part of the config values. "
            "Use the properties on the NewRepositoryWebHook class instead."
        )
        self.duplicate_keys = sorted(duplicate_keys)


class ApiError(Exception):
    """Base class for every non-success response returned by the API."""

    def __init__(
        self,
        message: str,
        status_code: int,
        response: httpx.Response | None = None,
        documentation_url: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response
        self.documentation_url = documentation_url
        self.errors = errors or []

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"


class AuthorizationError(ApiError):
    """401 - missing or bad credentials."""


class ForbiddenError(ApiError):
    """403 - authenticated but not allowed."""


class RateLimitExceededError(ForbiddenError):
    """The request was refused because the rate limit has been used up."""

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        headers = self.response.headers if self.response is not None else {}
        self.limit = _int_header(headers, "x-ratelimit-limit")
        self.remaining = _int_header(headers, "x-ratelimit-remaining")
        reset = _int_header(headers, "x-ratelimit-reset")
        self.reset = (
            datetime.fromtimestamp(reset, tz=timezone.utc) if reset is not None else None
        )


class NotFoundError(ApiError):
    """404 - the resource does not exist or is hidden from the caller."""


class ApiValidationError(ApiError):
    """422 - the server rejected the request payload."""


class ServerError(ApiError):
    """5xx - the server failed to handle the request."""


def _int_header(headers: Any, name: str) -> int | None:
    value = headers.get(name)
    try:
        return int(value) if value is not None else None
    except ValueError:
        return None


def _is_rate_limited(response: httpx.Response) -> bool:
    return response.headers.get("x-ratelimit-remaining") == "0"


def raise_for_response(response: httpx.Response) -> None:
    """
    Converts a non-success response into the matching ApiError subclass.

    Success responses (2xx) pass through untouched.
    """
    if response.is_success:
        return

    status_code = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = {}

    message = body.get("message") or response.reason_phrase or "Unknown error"
    kwargs = {
        "response": response,
        "documentation_url": body.get("documentation_url"),
        "errors": body.get("errors"),
    }

    if status_code == 429 or (status_code == 403 and _is_rate_limited(response)):
        error_cls: type[ApiError] = RateLimitExceededError
    elif status_code == 401:
        error_cls = AuthorizationError
    elif status_code == 403:
        error_cls = ForbiddenError
    elif status_code == 404:
        error_cls = NotFoundError
    elif status_code == 422:
        error_cls = ApiValidationError
    elif status_code >= 500:
        error_cls = ServerError
    else:
        error_cls = ApiError

    logger.warning(
        "API request failed: %s %s -> %s %s",
        response.request.method,
        response.request.url,
        status_code,
        message,
    )
    raise error_cls(message, status_code, **kwargs)
