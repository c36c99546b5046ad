from urllib.parse import quote


def _segment(value: str | int) -> str:
    return quote(str(value), safe="")


class ApiUrls:
    """Relative resource paths for the repository hooks endpoints."""

    @staticmethod
    def repository_hooks(owner: str, name: str) -> str:
        return f"repos/{_segment(owner)}/{_segment(name)}/hooks"

    @staticmethod
    def repository_hook_by_id(owner: str, name: str, hook_id: int) -> str:
        return f"{ApiUrls.repository_hooks(owner, name)}/{_segment(hook_id)}"

    @staticmethod
    def repository_hook_test(owner: str, name: str, hook_id: int) -> str:
        return f"{ApiUrls.repository_hook_by_id(owner, name, hook_id)}/tests"

    @staticmethod
    def repository_hook_ping(owner: str, name: str, hook_id: int) -> str:
        return f"{ApiUrls.repository_hook_by_id(owner, name, hook_id)}/pings"
