# OS-specific file locations for mcp-manager
import os
import platform
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

# ABOUTME: File names shared by every OS variant
HOST_CONFIG_NAME = "claude_desktop_config.json"
SETTINGS_DIR_NAME = "mcp-manager"
SETTINGS_FILE_NAME = "config.json"


@dataclass(frozen=True)
class ManagerPaths:
    """Resolved locations used by every config store operation.

    ABOUTME: Passed explicitly so tests can point everything at tmp_path
    """
    host_config: Path
    settings_file: Path

    @property
    def backup_dir(self) -> Path:
        """Backups live next to the host config."""
        return self.host_config.parent

    @property
    def settings_dir(self) -> Path:
        return self.settings_file.parent


def _appdata(home: Path, environ: Mapping[str, str]) -> Path:
    appdata = environ.get("APPDATA")
    return Path(appdata) if appdata else home / "AppData" / "Roaming"


def get_host_config_path(
    system: str | None = None,
    home: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Return the Claude Desktop config path for an OS.

    ABOUTME: macOS uses ~/Library/Application Support, Windows %APPDATA%
    ABOUTME: Any other system falls back to ~/.config like Linux

    Args:
        system: platform.system() value; defaults to the running OS
        home: Home directory; defaults to Path.home()
        environ: Environment mapping; defaults to os.environ

    Returns:
        Absolute path to claude_desktop_config.json (may not exist)
    """
    system = system or platform.system()
    home = home or Path.home()
    environ = os.environ if environ is None else environ

    if system == "Darwin":
        return home / "Library" / "Application Support" / "Claude" / HOST_CONFIG_NAME
    elif system == "Windows":
        return _appdata(home, environ) / "Claude" / HOST_CONFIG_NAME
    else:
        return home / ".config" / "Claude" / HOST_CONFIG_NAME


def get_settings_dir(
    system: str | None = None,
    home: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Return the directory holding mcp-manager's own settings."""
    system = system or platform.system()
    home = home or Path.home()
    environ = os.environ if environ is None else environ

    if system == "Windows":
        return _appdata(home, environ) / SETTINGS_DIR_NAME
    return home / ".config" / SETTINGS_DIR_NAME


def get_settings_path(
    system: str | None = None,
    home: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    return get_settings_dir(system, home, environ) / SETTINGS_FILE_NAME


def resolve_paths(
    system: str | None = None,
    home: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ManagerPaths:
    """Resolve every location for the given (or current) OS."""
    return ManagerPaths(
        host_config=get_host_config_path(system, home, environ),
        settings_file=get_settings_path(system, home, environ),
    )


def format_backup_timestamp(moment: datetime) -> str:
    """Format a UTC ISO-8601 timestamp with ':' and '.' replaced by '-'.

    Examples:
        >>> format_backup_timestamp(datetime(2026, 1, 8, 14, 30, 22, 123000, tzinfo=timezone.utc))
        '2026-01-08T14-30-22-123Z'
    """
    moment = moment.astimezone(timezone.utc)
    return f"{moment:%Y-%m-%dT%H-%M-%S}-{moment.microsecond // 1000:03d}Z"


def backup_prefix(config_path: Path) -> str:
    """Filename prefix shared by all backups of config_path."""
    return f"{config_path.stem}.backup."


def backup_path_for(config_path: Path, moment: datetime | None = None) -> Path:
    """Build the backup file path for config_path at a given moment.

    ABOUTME: Format: {stem}.backup.{YYYY-MM-DDTHH-MM-SS-mmmZ}.json
    ABOUTME: Sorts lexically in creation order; no I/O performed

    Args:
        config_path: Host config file being backed up
        moment: Timestamp to embed; defaults to now (UTC)

    Returns:
        Sibling path of config_path
    """
    moment = moment or datetime.now(timezone.utc)
    name = f"{backup_prefix(config_path)}{format_backup_timestamp(moment)}.json"
    return config_path.parent / name
