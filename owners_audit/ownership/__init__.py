"""
Ownership audit module.

Parses OWNERS / OWNERS_ALIASES files to determine:
- Which users own a repository once aliases are resolved
- Which of those users are not members of the organization
"""

from owners_audit.ownership.analyzer import AuditReport, AuditStatus, OwnershipAuditor, RepoAuditResult
from owners_audit.ownership.parser import extract_alias_groups, extract_entries
from owners_audit.ownership.resolver import (
    RepoOwnership,
    effective_owners,
    find_invalid_owners,
    invalid_users,
    merge_names,
    remove_names,
)

__all__ = [
    "AuditReport",
    "AuditStatus",
    "OwnershipAuditor",
    "RepoAuditResult",
    "RepoOwnership",
    "effective_owners",
    "extract_alias_groups",
    "extract_entries",
    "find_invalid_owners",
    "invalid_users",
    "merge_names",
    "remove_names",
]
