"""Pytest fixtures and configuration."""

import base64
import logging
from dataclasses import dataclass, field

import httpx
import pytest

from owners_audit.config import Settings
from owners_audit.github.connector import GitHubConnector

API_URL = "https://api.github.com"


@dataclass
class FakeGitHub:
    """In-memory stand-in for the GitHub REST API.

    ``files`` maps ``(repo, path)`` to file text, to an int to answer with
    that HTTP status instead, or to a canned ``httpx.Response``.
    """

    org: str = "openshift"
    members: list[str] = field(default_factory=list)
    repos: list[str] = field(default_factory=list)
    files: dict[tuple[str, str], str | int | httpx.Response] = field(default_factory=dict)
    page_size: int = 100
    members_status: int = 200
    requests: list[httpx.Request] = field(default_factory=list)

    def _page(self, request: httpx.Request, items: list[dict]) -> httpx.Response:
        page = int(request.url.params.get("page", "1"))
        start = (page - 1) * self.page_size
        headers = {}
        if start + self.page_size < len(items):
            next_url = request.url.copy_merge_params({"page": str(page + 1)})
            headers["link"] = f'<{next_url}>; rel="next"'
        return httpx.Response(200, json=items[start : start + self.page_size], headers=headers)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == f"/orgs/{self.org}/members":
            if self.members_status != 200:
                return httpx.Response(self.members_status, json={"message": "boom"})
            return self._page(request, [{"login": m, "id": i} for i, m in enumerate(self.members)])

        if path == f"/orgs/{self.org}/repos":
            return self._page(request, [{"name": r, "full_name": f"{self.org}/{r}"} for r in self.repos])

        prefix = f"/repos/{self.org}/"
        if path.startswith(prefix):
            repo, _, file_path = path[len(prefix):].partition("/contents/")
            value = self.files.get((repo, file_path))
            if value is None:
                return httpx.Response(404, json={"message": "Not Found"})
            if isinstance(value, httpx.Response):
                return value
            if isinstance(value, int):
                return httpx.Response(value, json={"message": "error"})
            return httpx.Response(
                200,
                json={
                    "name": file_path.rsplit("/", 1)[-1],
                    "path": file_path,
                    "type": "file",
                    "size": len(value),
                    "encoding": "base64",
                    "content": base64.b64encode(value.encode()).decode(),
                },
            )

        return httpx.Response(404, json={"message": "Not Found"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def connector(self, token: str = "test-token") -> GitHubConnector:
        return GitHubConnector(token=token, base_url=API_URL, transport=self.transport)


@pytest.fixture
def test_settings() -> Settings:
    """Override settings for testing."""
    return Settings(
        github_token="test-token",
        github_org="openshift",
        github_api_url=API_URL,
        audit_concurrency=4,
        log_level="DEBUG",
    )


@pytest.fixture
def fake_github() -> FakeGitHub:
    """Fake GitHub API with no members, repos or files."""
    return FakeGitHub()


@pytest.fixture
def owners_content() -> str:
    return "- team-a\n- carol\n"


@pytest.fixture
def aliases_content() -> str:
    return "team-a:\n- alice\n- bob # note\n"


@pytest.fixture(autouse=True)
def reset_log_handler():
    """Detach the CLI log handler so it never outlives captured streams."""
    yield
    from owners_audit import main as cli

    if cli._log_handler is not None:
        logging.getLogger().removeHandler(cli._log_handler)
        cli._log_handler = None
