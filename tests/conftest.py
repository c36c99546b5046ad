from datetime import datetime, timezone
from typing import Any

import pytest
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

from github_repo_hooks.config import Settings

TEST_TOKEN = "test-token"
DOCS_URL = "https://docs.github.com/rest/repos/webhooks"


class FakeGitHub:
    """In-memory stand-in for the repository webhooks endpoints."""

    def __init__(self, token: str = TEST_TOKEN):
        self.token = token
        self.hooks: dict[tuple[str, str], dict[int, dict[str, Any]]] = {}
        self.requests: list[tuple[str, str]] = []
        self.deliveries: list[tuple[int, str]] = []
        self._next_id = 1
        self.app = self._build_app()

    def add_hook(self, owner: str, repo: str, **fields: Any) -> dict[str, Any]:
        hook_id = self._next_id
        self._next_id += 1
        now = datetime.now(timezone.utc).isoformat()
        base = f"http://test/repos/{owner}/{repo}/hooks/{hook_id}"
        hook = {
            "id": hook_id,
            "type": "Repository",
            "name": fields.get("name", "web"),
            "active": fields.get("active", True),
            "events": fields.get("events") or ["push"],
            "config": fields.get("config", {}),
            "url": base,
            "test_url": f"{base}/tests",
            "ping_url": f"{base}/pings",
            "created_at": now,
            "updated_at": now,
            "last_response": {"code": None, "status": "unused", "message": None},
        }
        self.hooks.setdefault((owner, repo), {})[hook_id] = hook
        return hook

    def _find(self, owner: str, repo: str, hook_id: int) -> dict[str, Any] | None:
        return self.hooks.get((owner, repo), {}).get(hook_id)

    def _build_app(self) -> FastAPI:
        app = FastAPI()

        def not_found() -> JSONResponse:
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={"message": "Not Found", "documentation_url": DOCS_URL},
            )

        @app.middleware("http")
        async def record_and_authenticate(request: Request, call_next):
            self.requests.append((request.method, request.url.path))
            if request.headers.get("authorization") != f"Bearer {self.token}":
                return JSONResponse(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    content={"message": "Bad credentials", "documentation_url": DOCS_URL},
                )
            return await call_next(request)

        @app.get("/repos/{owner}/{repo}/hooks")
        async def list_hooks(
            request: Request, owner: str, repo: str, page: int = 1, per_page: int = 30
        ):
            hooks = list(self.hooks.get((owner, repo), {}).values())
            start = (page - 1) * per_page
            headers = {}
            if start + per_page < len(hooks):
                next_url = request.url.include_query_params(
                    page=page + 1, per_page=per_page
                )
                headers["Link"] = f'<{next_url}>; rel="next"'
            return JSONResponse(content=hooks[start : start + per_page], headers=headers)

        @app.get("/repos/{owner}/{repo}/hooks/{hook_id}")
        async def get_hook(owner: str, repo: str, hook_id: int):
            hook = self._find(owner, repo, hook_id)
            return hook if hook is not None else not_found()

        @app.post("/repos/{owner}/{repo}/hooks", status_code=status.HTTP_201_CREATED)
        async def create_hook(owner: str, repo: str, payload: dict[str, Any]):
            if "url" not in payload.get("config", {}):
                return JSONResponse(
                    status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                    content={
                        "message": "Validation Failed",
                        "errors": [
                            {
                                "resource": "Hook",
                                "code": "custom",
                                "message": "Config must have url",
                            }
                        ],
                        "documentation_url": DOCS_URL,
                    },
                )
            return self.add_hook(owner, repo, **payload)

        @app.patch("/repos/{owner}/{repo}/hooks/{hook_id}")
        async def edit_hook(owner: str, repo: str, hook_id: int, payload: dict[str, Any]):
            hook = self._find(owner, repo, hook_id)
            if hook is None:
                return not_found()
            if "config" in payload:
                hook["config"] = payload["config"]
            if "events" in payload:
                hook["events"] = payload["events"]
            for event in payload.get("add_events", []):
                if event not in hook["events"]:
                    hook["events"].append(event)
            hook["events"] = [
                event
                for event in hook["events"]
                if event not in payload.get("remove_events", [])
            ]
            if "active" in payload:
                hook["active"] = payload["active"]
            hook["updated_at"] = datetime.now(timezone.utc).isoformat()
            return hook

        @app.post("/repos/{owner}/{repo}/hooks/{hook_id}/tests")
        async def test_hook(owner: str, repo: str, hook_id: int):
            hook = self._find(owner, repo, hook_id)
            if hook is None:
                return not_found()
            if "push" in hook["events"]:
                self.deliveries.append((hook_id, "push"))
            return Response(status_code=status.HTTP_204_NO_CONTENT)

        @app.post("/repos/{owner}/{repo}/hooks/{hook_id}/pings")
        async def ping_hook(owner: str, repo: str, hook_id: int):
            if self._find(owner, repo, hook_id) is None:
                return not_found()
            self.deliveries.append((hook_id, "ping"))
            return Response(status_code=status.HTTP_204_NO_CONTENT)

        @app.delete("/repos/{owner}/{repo}/hooks/{hook_id}")
        async def delete_hook(owner: str, repo: str, hook_id: int):
            if self._find(owner, repo, hook_id) is None:
                return not_found()
            del self.hooks[(owner, repo)][hook_id]
            return Response(status_code=status.HTTP_204_NO_CONTENT)

        return app


@pytest.fixture
def fake_github() -> FakeGitHub:
    """Fresh fake API per test."""
    return FakeGitHub()


@pytest.fixture
def test_settings() -> Settings:
    """Settings pointing at the fake API host with a valid token."""
    return Settings(GITHUB_API_URL="http://test", GITHUB_TOKEN=TEST_TOKEN)
