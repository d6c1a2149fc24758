"""
Ownership Auditor - Checks OWNERS files against organization membership.

Processes, per repository:
- OWNERS: literal owner entries and alias references
- OWNERS_ALIASES: alias group definitions and their members
- Organization members: the logins allowed to appear as owners
"""

import asyncio
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

import structlog

from owners_audit.exceptions import ContentNotFoundError, RetrievalError
from owners_audit.github.connector import GitHubConnector
from owners_audit.ownership.resolver import RepoOwnership

logger = structlog.get_logger()


class AuditStatus(str, Enum):
    """Outcome of auditing a single repository."""

    CLEAN = "clean"
    INVALID_USERS = "invalid_users"
    SKIPPED = "skipped"  # No OWNERS file
    ERROR = "error"


@dataclass
class RepoAuditResult:
    """Result of auditing one repository."""

    repo: str
    status: AuditStatus
    invalid_users: list[str] = field(default_factory=list)
    error: str | None = None
    alias_error: str | None = None

    @property
    def has_invalid_users(self) -> bool:
        return self.status == AuditStatus.INVALID_USERS

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "repo": self.repo,
            "status": self.status.value,
            "invalid_users": list(self.invalid_users),
            "error": self.error,
            "alias_error": self.alias_error,
        }


@dataclass
class AuditReport:
    """Aggregated result of an audit run."""

    org: str
    started_at: datetime
    completed_at: datetime | None = None
    results: list[RepoAuditResult] = field(default_factory=list)

    @property
    def duration_seconds(self) -> float:
        """Calculate duration in seconds."""
        if not self.completed_at:
            return 0
        return (self.completed_at - self.started_at).total_seconds()

    @property
    def repos_with_invalid_users(self) -> list[RepoAuditResult]:
        return [r for r in self.results if r.has_invalid_users]

    @property
    def invalid_repo_count(self) -> int:
        return len(self.repos_with_invalid_users)

    @property
    def invalid_reference_count(self) -> int:
        return sum(len(r.invalid_users) for r in self.results)

    def count(self, status: AuditStatus) -> int:
        return sum(1 for r in self.results if r.status == status)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "org": self.org,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration_seconds": self.duration_seconds,
            "repos_audited": len(self.results),
            "repos_with_invalid_users": self.invalid_repo_count,
            "invalid_references": self.invalid_reference_count,
            "repos_skipped": self.count(AuditStatus.SKIPPED),
            "repos_errored": self.count(AuditStatus.ERROR),
            "results": [r.to_dict() for r in self.results],
        }


class OwnershipAuditor:
    """Audits OWNERS files across an organization's repositories.

    The connector is passed in already configured; the auditor never
    creates clients of its own. Per-repository failures are recorded on the
    result, while failures loading members or repositories propagate since
    nothing can be audited without them.
    """

    def __init__(
        self,
        connector: GitHubConnector,
        org: str,
        owners_file: str = "OWNERS",
        aliases_file: str = "OWNERS_ALIASES",
        concurrency: int = 8,
        repo_type: str = "sources",
        members_per_page: int = 100,
        repos_per_page: int = 100,
    ):
        self.connector = connector
        self.org = org
        self.owners_file = owners_file
        self.aliases_file = aliases_file
        self.concurrency = max(1, concurrency)
        self.repo_type = repo_type
        self.members_per_page = members_per_page
        self.repos_per_page = repos_per_page

    async def load_members(self) -> frozenset[str]:
        """Load the organization membership set."""
        members = await self.connector.get_org_members(self.org, per_page=self.members_per_page)
        return frozenset(members)

    async def list_repositories(self, only: Iterable[str] | None = None) -> list[str]:
        """List repositories to audit, optionally restricted to ``only``."""
        repos = await self.connector.list_org_repositories(
            self.org,
            repo_type=self.repo_type,
            per_page=self.repos_per_page,
        )
        if only is None:
            return repos

        wanted = set(only)
        missing = wanted.difference(repos)
        if missing:
            logger.warning("Requested repositories not found", org=self.org, repos=sorted(missing))
        return [repo for repo in repos if repo in wanted]

    async def audit_repository(self, repo: str, members: Iterable[str]) -> RepoAuditResult:
        """Audit a single repository."""
        try:
            owners_content = await self.connector.get_file_content(self.org, repo, self.owners_file)
        except ContentNotFoundError:
            logger.debug("No owners file, skipping", repo=repo, path=self.owners_file)
            return RepoAuditResult(repo=repo, status=AuditStatus.SKIPPED)
        except RetrievalError as e:
            logger.warning(
                "Failed to read owners file",
                repo=repo,
                path=self.owners_file,
                error=e.to_dict(),
            )
            return RepoAuditResult(repo=repo, status=AuditStatus.ERROR, error=e.message)

        aliases_content = ""
        alias_error = None
        try:
            aliases_content = await self.connector.get_file_content(self.org, repo, self.aliases_file)
        except ContentNotFoundError:
            logger.debug("No aliases file", repo=repo, path=self.aliases_file)
        except RetrievalError as e:
            alias_error = e.message
            logger.warning(
                "Failed to read aliases file, auditing without aliases",
                repo=repo,
                path=self.aliases_file,
                error=e.to_dict(),
            )

        ownership = RepoOwnership.from_content(owners_content, aliases_content)
        invalid = ownership.invalid_users(members)

        if invalid:
            logger.info("Invalid users found", repo=repo, users=invalid)
            status = AuditStatus.INVALID_USERS
        else:
            status = AuditStatus.CLEAN

        return RepoAuditResult(
            repo=repo,
            status=status,
            invalid_users=invalid,
            alias_error=alias_error,
        )

    async def run(self, repos: Iterable[str] | None = None) -> AuditReport:
        """Audit every repository of the organization.

        Args:
            repos: Restrict the audit to these repository names

        Returns:
            AuditReport with results in repository listing order
        """
        report = AuditReport(org=self.org, started_at=datetime.now(timezone.utc))
        logger.info("Starting ownership audit", org=self.org)

        members = await self.load_members()
        repo_names = await self.list_repositories(only=repos)

        semaphore = asyncio.Semaphore(self.concurrency)

        async def _audit(name: str) -> RepoAuditResult:
            async with semaphore:
                return await self.audit_repository(name, members)

        report.results = list(await asyncio.gather(*(_audit(name) for name in repo_names)))
        report.completed_at = datetime.now(timezone.utc)

        logger.info(
            "Ownership audit complete",
            org=self.org,
            repos=len(report.results),
            repos_with_invalid_users=report.invalid_repo_count,
            duration_seconds=report.duration_seconds,
        )
        return report
