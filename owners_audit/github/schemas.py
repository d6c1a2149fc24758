"""GitHub data schemas."""

from pydantic import BaseModel


class GitHubUser(BaseModel):
    """GitHub user schema."""

    login: str
    id: int | None = None
    type: str | None = None


class GitHubRepository(BaseModel):
    """GitHub repository schema."""

    name: str
    full_name: str | None = None
    archived: bool = False
    fork: bool = False
    default_branch: str | None = None


class GitHubContent(BaseModel):
    """File entry returned by the contents API."""

    name: str
    path: str
    type: str = "file"  # "file", "dir", "symlink", "submodule"
    size: int = 0
    encoding: str | None = None  # "base64", or "none" for files over 1 MB
    content: str | None = None
    download_url: str | None = None
