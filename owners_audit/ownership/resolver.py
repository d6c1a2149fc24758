"""Alias resolution and membership checks for parsed ownership files."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from owners_audit.ownership.parser import extract_alias_groups, extract_entries


def remove_names(names: Iterable[str], remove: Iterable[str]) -> set[str]:
    """Return a new set of ``names`` without anything in ``remove``."""
    return set(names).difference(remove)


def merge_names(*groups: Iterable[str]) -> set[str]:
    """Return a new set holding the union of all ``groups``."""
    merged: set[str] = set()
    for group in groups:
        merged.update(group)
    return merged


def effective_owners(
    owner_entries: Iterable[str],
    alias_entries: Iterable[str],
    alias_groups: Iterable[str],
) -> set[str]:
    """Resolve the flat set of users owning a repository.

    Alias names referenced in OWNERS are dropped, and every member listed
    anywhere in OWNERS_ALIASES is added. Group scoping is not tracked.

    Args:
        owner_entries: Entries extracted from OWNERS
        alias_entries: Entries extracted from OWNERS_ALIASES
        alias_groups: Group names defined in OWNERS_ALIASES

    Returns:
        Effective owners; never contains a name from ``alias_groups``
    """
    return merge_names(remove_names(owner_entries, alias_groups), alias_entries)


def invalid_users(owners: Iterable[str], members: Iterable[str]) -> list[str]:
    """List owners that are not organization members, sorted."""
    return sorted(set(owners).difference(members))


@dataclass(frozen=True)
class RepoOwnership:
    """Parsed ownership data for a single repository."""

    owner_entries: frozenset[str] = field(default_factory=frozenset)
    alias_entries: frozenset[str] = field(default_factory=frozenset)
    alias_groups: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_content(
        cls,
        owners_content: str | None,
        aliases_content: str | None = None,
    ) -> "RepoOwnership":
        """Parse raw OWNERS and OWNERS_ALIASES text."""
        return cls(
            owner_entries=frozenset(extract_entries(owners_content)),
            alias_entries=frozenset(extract_entries(aliases_content)),
            alias_groups=frozenset(extract_alias_groups(aliases_content)),
        )

    @property
    def effective_owners(self) -> set[str]:
        """Owners after alias substitution."""
        return effective_owners(
            self.owner_entries,
            self.alias_entries,
            self.alias_groups,
        )

    def invalid_users(self, members: Iterable[str]) -> list[str]:
        """Effective owners missing from ``members``."""
        return invalid_users(self.effective_owners, members)


def find_invalid_owners(
    owners_content: str | None,
    aliases_content: str | None,
    members: Iterable[str],
) -> list[str]:
    """Run the whole parse/resolve/check pipeline on raw file content."""
    return RepoOwnership.from_content(owners_content, aliases_content).invalid_users(members)
