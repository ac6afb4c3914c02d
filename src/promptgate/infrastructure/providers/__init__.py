"""Membership providers that do not need a database."""

from promptgate.infrastructure.providers.json_file_provider import (
    JsonFileMembershipProvider,
    load_document,
)

__all__ = ["JsonFileMembershipProvider", "load_document"]
