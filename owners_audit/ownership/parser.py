"""
Line-oriented scanners for OWNERS and OWNERS_ALIASES files.

Both files are YAML-shaped, but only two constructs matter here:
- ``- name`` entries (owner logins, or alias names inside OWNERS)
- ``group-name:`` definitions inside OWNERS_ALIASES

Nothing is parsed as YAML. Malformed input simply yields fewer names.
"""

from collections.abc import Iterator

COMMENT_MARKER = "#"
ENTRY_MARKER = "-"
GROUP_MARKER = ":"


def _clean_lines(content: str | None) -> Iterator[str]:
    """Yield each line with comments removed and whitespace trimmed."""
    if not content:
        return
    # strip() also drops a trailing \r
    for line in content.split("\n"):
        yield line.split(COMMENT_MARKER, 1)[0].strip()


def extract_entries(content: str | None) -> set[str]:
    """Extract every ``-``-prefixed entry from OWNERS or OWNERS_ALIASES text.

    Args:
        content: Raw file content

    Returns:
        Set of entry names (owner logins or alias names)
    """
    entries: set[str] = set()
    for line in _clean_lines(content):
        if not line.startswith(ENTRY_MARKER):
            continue
        name = line[len(ENTRY_MARKER):].strip()
        if name:
            entries.add(name)
    return entries


def extract_alias_groups(content: str | None) -> set[str]:
    """Extract the group names defined in OWNERS_ALIASES text.

    A definition is any line ending in ``:`` once comments are removed,
    e.g. ``sig-auth-approvers:``.

    Args:
        content: Raw OWNERS_ALIASES content

    Returns:
        Set of alias group names
    """
    groups: set[str] = set()
    for line in _clean_lines(content):
        if not line.endswith(GROUP_MARKER):
            continue
        name = line[: -len(GROUP_MARKER)].strip()
        if name:
            groups.add(name)
    return groups
