# ABOUTME: Backup utilities for the Claude Desktop config file.
# ABOUTME: Handles timestamped sibling backups with retention cleanup (keep newest 5).
import logging
import shutil
from datetime import datetime, timedelta, timezone
from pathlib import Path

from mcpmgr.errors import NoConfigToBackupError
from mcpmgr.paths import backup_path_for, backup_prefix

logger = logging.getLogger(__name__)

# ABOUTME: Number of backups kept after each new backup
DEFAULT_BACKUP_KEEP = 5


def create_backup(
    source_path: Path,
    keep: int | None = DEFAULT_BACKUP_KEEP,
    moment: datetime | None = None,
) -> Path:
    """Create a timestamped backup next to source_path.

    ABOUTME: Backup format: {stem}.backup.{YYYY-MM-DDTHH-MM-SS-mmmZ}.json
    ABOUTME: Plain byte copy so the backup's mtime is its creation time
    ABOUTME: Prunes to the newest `keep` backups afterwards (None disables)

    Args:
        source_path: Config file to back up
        keep: Backups to retain after copying, or None to skip pruning
        moment: Timestamp for the backup name; defaults to now

    Returns:
        Path to created backup file

    Raises:
        NoConfigToBackupError: If source_path doesn't exist
        OSError: If the copy fails
    """
    if not source_path.exists():
        raise NoConfigToBackupError(f"No config file to back up: {source_path}")

    moment = moment or datetime.now(timezone.utc)
    backup_path = backup_path_for(source_path, moment)

    # Names carry millisecond precision; step forward until unused
    while backup_path.exists():
        moment += timedelta(milliseconds=1)
        backup_path = backup_path_for(source_path, moment)

    shutil.copyfile(source_path, backup_path)
    logger.debug(f"Created backup: {backup_path}")

    if keep is not None:
        prune_backups(source_path, keep)

    return backup_path


def list_backups(config_path: Path) -> list[Path]:
    """List backups of config_path, newest first.

    ABOUTME: Orders by modification time, ties broken by the timestamped name
    ABOUTME: Returns empty list if the config directory doesn't exist
    """
    backup_dir = config_path.parent
    if not backup_dir.exists():
        return []

    prefix = backup_prefix(config_path)
    backups: list[tuple[float, str, Path]] = []

    for file_path in backup_dir.iterdir():
        if not file_path.name.startswith(prefix) or file_path.suffix != ".json":
            continue
        if not file_path.is_file():
            continue
        try:
            mtime = file_path.stat().st_mtime
        except OSError:
            # Removed between iterdir() and stat()
            continue
        backups.append((mtime, file_path.name, file_path))

    backups.sort(key=lambda item: (item[0], item[1]), reverse=True)
    return [file_path for _mtime, _name, file_path in backups]


def prune_backups(config_path: Path, keep: int = DEFAULT_BACKUP_KEEP) -> list[Path]:
    """Delete all but the newest `keep` backups of config_path.

    ABOUTME: Logs warnings on deletion errors but does not raise
    ABOUTME: so one locked file cannot block cleanup of the rest

    Args:
        config_path: Host config whose backups are pruned
        keep: Number of newest backups to keep

    Returns:
        List of paths that were deleted
    """
    if keep < 0:
        raise ValueError(f"keep must be non-negative, got {keep}")

    deleted_files: list[Path] = []

    for file_path in list_backups(config_path)[keep:]:
        try:
            file_path.unlink()
            deleted_files.append(file_path)
            logger.debug(f"Deleted old backup: {file_path}")
        except OSError as e:
            logger.warning(f"Failed to delete old backup {file_path}: {e}")

    return deleted_files
