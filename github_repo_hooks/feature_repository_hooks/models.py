from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from github_repo_hooks.feature_connection.errors import RepositoryWebHookConfigError


class WebHookContentType(str, Enum):
    """Media type used by GitHub to deliver a web hook payload."""

    FORM = "form"
    JSON = "json"


class RepositoryHookLastResponse(BaseModel):
    """Outcome of the most recent delivery attempt."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    code: int | None = None
    status: str | None = None
    message: str | None = None


class RepositoryHook(BaseModel):
    """A webhook configured on a repository, as returned by the API."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    name: str
    events: list[str] = Field(default_factory=list)
    active: bool = True
    config: dict[str, Any] = Field(default_factory=dict)
    type: str | None = None
    url: str | None = None
    test_url: str | None = None
    ping_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_response: RepositoryHookLastResponse | None = None


class NewRepositoryHook(BaseModel):
    """
    Payload for creating a repository hook.

    `name` is the service name; "web" is the only value GitHub still accepts
    for new hooks. When `events` is left unset the server subscribes the hook
    to "push" only.
    """

    name: str
    config: dict[str, str] = Field(default_factory=dict)
    events: list[str] | None = None
    active: bool = True

    def to_request(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "name": self.name,
            "config": dict(self.config),
            "active": self.active,
        }
        if self.events is not None:
            body["events"] = list(self.events)
        return body


class NewRepositoryWebHook(NewRepositoryHook):
    """
    A "web" hook whose delivery settings are typed fields instead of raw
    config entries. They are merged into `config` by `to_request`.
    """

    RESERVED_CONFIG_KEYS: ClassVar[tuple[str, ...]] = (
        "url",
        "content_type",
        "secret",
        "insecure_ssl",
    )

    name: str = "web"
    url: str
    content_type: WebHookContentType = WebHookContentType.FORM
    secret: str | None = None
    insecure_ssl: bool = False

    def to_request(self) -> dict[str, Any]:
        duplicates = [key for key in self.RESERVED_CONFIG_KEYS if key in self.config]
        if duplicates:
            raise RepositoryWebHookConfigError(duplicates)

        body = super().to_request()
        body["config"]["url"] = self.url
        body["config"]["content_type"] = self.content_type.value
        if self.secret:
            body["config"]["secret"] = self.secret
        body["config"]["insecure_ssl"] = "1" if self.insecure_ssl else "0"
        return body


class EditRepositoryHook(BaseModel):
    """Changes to apply to an existing hook. Unset fields are left alone."""

    config: dict[str, str] | None = None
    events: list[str] | None = None
    add_events: list[str] | None = None
    remove_events: list[str] | None = None
    active: bool | None = None

    def to_request(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
