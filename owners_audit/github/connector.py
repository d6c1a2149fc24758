"""GitHub connector implementation."""

import base64
from collections.abc import AsyncIterator
from typing import Any

import httpx
import structlog

from owners_audit.config import Settings
from owners_audit.exceptions import ConfigurationError, ContentNotFoundError, RetrievalError
from owners_audit.github.base import BaseConnector
from owners_audit.github.schemas import GitHubContent, GitHubRepository, GitHubUser

logger = structlog.get_logger()


class GitHubConnector(BaseConnector):
    """Connector for the GitHub REST API.

    Provides:
    - Organization member listing
    - Organization repository listing
    - File content retrieval

    Listings are paginated lazily by following ``Link: rel="next"`` headers.
    """

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__("github")
        self._token = token
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "GitHubConnector":
        """Build a connector from application settings."""
        return cls(
            token=settings.github_token.get_secret_value(),
            base_url=settings.github_api_url,
            timeout=settings.github_timeout,
            **kwargs,
        )

    async def connect(self) -> None:
        """Connect to GitHub API."""
        if not self._token:
            raise ConfigurationError("GitHub token not configured, set GITHUB_TOKEN")

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={
                "Accept": "application/vnd.github.v3+json",
                "Authorization": f"Bearer {self._token}",
            },
            timeout=self._timeout,
            transport=self._transport,
        )
        self._connected = True
        logger.info("GitHub connector connected", base_url=self._base_url)

    async def disconnect(self) -> None:
        """Disconnect from GitHub API."""
        if self._client:
            await self._client.aclose()
            self._client = None
        self._connected = False

    async def health_check(self) -> bool:
        """Check GitHub API health."""
        if not self._client:
            return False
        try:
            response = await self._client.get("/user")
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    @property
    def client(self) -> httpx.AsyncClient:
        if not self._client:
            raise RuntimeError("GitHub connector is not connected")
        return self._client

    async def _get(self, url: str, params: dict[str, Any] | None = None) -> httpx.Response:
        """GET a URL, translating failures into retrieval errors."""
        try:
            response = await self.client.get(url, params=params)
        except httpx.HTTPError as e:
            raise RetrievalError(f"Request to GitHub failed: {e}", url=url) from e

        if response.status_code == 404:
            raise ContentNotFoundError(
                "Not found",
                status_code=404,
                url=str(response.url),
            )
        if response.is_error:
            raise RetrievalError(
                f"GitHub API returned {response.status_code}",
                status_code=response.status_code,
                url=str(response.url),
            )
        return response

    async def _paginate(
        self,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> AsyncIterator[dict[str, Any]]:
        """Yield items from every page of a list endpoint."""
        next_url: str | None = url
        page = 1
        while next_url:
            response = await self._get(next_url, params=params)
            try:
                items = response.json()
            except ValueError as e:
                raise RetrievalError(f"Malformed list response: {e}", url=str(response.url)) from e
            logger.debug("Fetched page", url=url, page=page, items=len(items))

            for item in items:
                yield item

            next_url = response.links.get("next", {}).get("url")
            # The next link already carries the query string
            params = None
            page += 1

    async def iter_org_members(
        self,
        org: str,
        per_page: int = 100,
    ) -> AsyncIterator[GitHubUser]:
        """Iterate over members of an organization."""
        async for data in self._paginate(f"/orgs/{org}/members", params={"per_page": per_page}):
            try:
                user = GitHubUser.model_validate(data)
            except ValueError as e:
                raise RetrievalError(f"Malformed member entry: {e}", url=f"/orgs/{org}/members") from e
            yield user

    async def get_org_members(self, org: str, per_page: int = 100) -> set[str]:
        """Get the logins of all organization members."""
        members = {user.login async for user in self.iter_org_members(org, per_page=per_page)}
        logger.info("Loaded organization members", org=org, count=len(members))
        return members

    async def iter_org_repositories(
        self,
        org: str,
        repo_type: str = "sources",
        per_page: int = 100,
    ) -> AsyncIterator[GitHubRepository]:
        """Iterate over repositories of an organization."""
        params = {"type": repo_type, "per_page": per_page}
        async for data in self._paginate(f"/orgs/{org}/repos", params=params):
            try:
                repository = GitHubRepository.model_validate(data)
            except ValueError as e:
                raise RetrievalError(f"Malformed repository entry: {e}", url=f"/orgs/{org}/repos") from e
            yield repository

    async def list_org_repositories(
        self,
        org: str,
        repo_type: str = "sources",
        per_page: int = 100,
    ) -> list[str]:
        """List repository names of an organization in API order."""
        names = [
            repo.name
            async for repo in self.iter_org_repositories(org, repo_type=repo_type, per_page=per_page)
        ]
        logger.info("Loaded organization repositories", org=org, count=len(names))
        return names

    async def get_file_content(
        self,
        org: str,
        repo: str,
        path: str,
        ref: str | None = None,
    ) -> str:
        """Get the decoded content of a file.

        Raises:
            ContentNotFoundError: If the file does not exist or is not a file
            RetrievalError: On any other API failure
        """
        path = path.lstrip("/")
        url = f"/repos/{org}/{repo}/contents/{path}"
        response = await self._get(url, params={"ref": ref} if ref else None)

        try:
            data = response.json()

            # A directory listing comes back as a JSON array
            if isinstance(data, list):
                raise ContentNotFoundError(f"{path} is a directory", url=str(response.url))

            content = GitHubContent.model_validate(data)
            if content.type != "file":
                raise ContentNotFoundError(f"{path} is a {content.type}", url=str(response.url))

            if content.encoding == "base64" and content.content is not None:
                return base64.b64decode(content.content).decode("utf-8", errors="replace")
        except ValueError as e:
            raise RetrievalError(
                f"Malformed contents response: {e}",
                url=str(response.url),
            ) from e

        # Files over 1 MB come back without inline content
        if content.download_url:
            raw = await self._get(content.download_url)
            return raw.text

        return content.content or ""
