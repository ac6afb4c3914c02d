"""Membership provider backed by a JSON document.

File layout:

    {
        "groups": [
            {"id": "g1", "name": "Office", "timeWindows": [...]}
        ],
        "memberships": {"user-1": ["g1"]}
    }
"""

import json
from pathlib import Path
from typing import Any

from promptgate.core.exceptions import MembershipLookupError
from promptgate.core.logging import get_logger
from promptgate.domain.entities import Group
from promptgate.infrastructure.api.schemas import normalize_groups

logger = get_logger(__name__)


def load_document(path: str | Path) -> dict[str, Any]:
    """Read and decode a membership document.

    Raises:
        MembershipLookupError: If the file cannot be read or is not a JSON object.
    """
    try:
        document = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise MembershipLookupError(f"Cannot load membership file {path}: {e}") from e
    if not isinstance(document, dict):
        raise MembershipLookupError(f"Membership file {path} must contain a JSON object")
    return document


class JsonFileMembershipProvider:
    """Resolves group membership from a JSON file.

    The file is read on every lookup so edits are picked up without restarts.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    async def get_user_groups(self, user_id: str) -> list[Group]:
        """Get the groups the user belongs to, normalized from their documents."""
        document = load_document(self.path)
        group_ids = document.get("memberships", {}).get(user_id, [])
        groups_by_id = {
            str(g.get("id")): g for g in document.get("groups", []) if isinstance(g, dict)
        }

        missing = [gid for gid in group_ids if str(gid) not in groups_by_id]
        if missing:
            logger.warning("Membership references unknown groups", user_id=user_id, group_ids=missing)

        return normalize_groups(
            groups_by_id[str(gid)] for gid in group_ids if str(gid) in groups_by_id
        )
