from pydantic import BaseModel, ConfigDict, Field


class ApiOptions(BaseModel):
    """Paging window for list endpoints. Unset fields mean "no restriction"."""

    model_config = ConfigDict(frozen=True)

    start_page: int | None = Field(default=None, ge=1)
    page_count: int | None = Field(default=None, ge=1)
    page_size: int | None = Field(default=None, ge=1)

    def to_params(self) -> dict[str, int]:
        """Query parameters for the first page request."""
        params: dict[str, int] = {}
        if self.start_page is not None:
            params["page"] = self.start_page
        if self.page_size is not None:
            params["per_page"] = self.page_size
        return params
