"""
Git Remote - Resolve ``owner/name`` from a remote URL.
"""

import re
from typing import Optional

# git@github.com:owner/name.git, https://github.com/owner/name,
# ssh://git@github.com/owner/name.git
_REMOTE_PATTERN = re.compile(
    r"^(?:[\w+.-]+://)?(?:[^@/]+@)?[^:/]+[:/](?P<owner>[^/]+)/(?P<name>[^/]+?)(?:\.git)?/?$"
)


def repository_from_remote(url: str) -> Optional[str]:
    """Return ``owner/name`` for a remote URL, or None if it is not recognized."""
    match = _REMOTE_PATTERN.match(url.strip())
    if not match:
        return None
    return f"{match.group('owner')}/{match.group('name')}"
