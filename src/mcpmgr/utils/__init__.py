# ABOUTME: Utility modules for mcp-manager
# ABOUTME: Exports backup, validation and polling helpers

from mcpmgr.utils.backup import DEFAULT_BACKUP_KEEP, create_backup, list_backups, prune_backups
from mcpmgr.utils.validation import (
    DEFAULT_RUNNER,
    ValidationError,
    find_runner,
    validate_command_exists,
    validate_descriptor,
)
from mcpmgr.utils.wait import wait_until

__all__ = [
    "DEFAULT_BACKUP_KEEP",
    "create_backup",
    "list_backups",
    "prune_backups",
    "DEFAULT_RUNNER",
    "ValidationError",
    "find_runner",
    "validate_command_exists",
    "validate_descriptor",
    "wait_until",
]
