# Config store: host config, project descriptors and manager settings
import json
import logging
from pathlib import Path
from typing import Any

from mcpmgr.errors import (
    ConfigReadError,
    ConfigWriteError,
    InvalidDescriptorError,
    MissingDescriptorError,
    NotConfiguredError,
    PathNotFoundError,
)
from mcpmgr.models import HostAppConfig, ManagerSettings, ProjectDescriptor, ServerEntry
from mcpmgr.utils import DEFAULT_BACKUP_KEEP, create_backup, validate_descriptor

logger = logging.getLogger(__name__)

# ABOUTME: Per-project descriptor file name
DESCRIPTOR_FILE = ".mcp-config.json"

SET_PATH_HINT = "Set it with: mcp-manager set-path <path>"


def _read_json(path: Path) -> Any:
    """Read a JSON file, wrapping I/O and parse errors in ConfigReadError."""
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigReadError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise ConfigReadError(f"Failed to read {path}: {e}") from e


def _write_json(path: Path, data: dict[str, Any]) -> None:
    """Write JSON with 2-space indentation, creating parent directories.

    ABOUTME: Key order is preserved (no sort_keys) so output stays stable
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
    except OSError as e:
        raise ConfigWriteError(f"Failed to write {path}: {e}") from e


def read_host_config(path: Path) -> HostAppConfig:
    """Load Claude Desktop's config.

    ABOUTME: Missing file is the first-run case and yields an empty config
    ABOUTME: Missing mcpServers key is treated as an empty map

    Args:
        path: Path to claude_desktop_config.json

    Returns:
        Parsed HostAppConfig

    Raises:
        ConfigReadError: If the file exists but is not a valid config
    """
    if not path.exists():
        return HostAppConfig()

    data = _read_json(path)
    if not isinstance(data, dict):
        raise ConfigReadError(f"Config root must be an object: {path}")

    try:
        return HostAppConfig.from_dict(data)
    except ValueError as e:
        raise ConfigReadError(f"Invalid config {path}: {e}") from e


def write_host_config(path: Path, config: HostAppConfig) -> None:
    """Save Claude Desktop's config, creating parent directories as needed.

    Raises:
        ConfigWriteError: If the file cannot be written
    """
    _write_json(path, config.to_dict())
    logger.debug(f"Wrote {len(config.servers)} server(s) to {path}")


def backup_host_config(path: Path, keep: int | None = DEFAULT_BACKUP_KEEP) -> Path:
    """Back up the host config and prune old backups.

    Raises:
        NoConfigToBackupError: If the host config doesn't exist yet
    """
    return create_backup(path, keep=keep)


def read_project_descriptor(project_dir: Path) -> ProjectDescriptor:
    """Load and validate a project's .mcp-config.json.

    ABOUTME: Required fields: name, config.command, config.args
    ABOUTME: Reports every missing field in one error message

    Args:
        project_dir: Project root directory

    Returns:
        Parsed ProjectDescriptor

    Raises:
        MissingDescriptorError: If .mcp-config.json is absent
        InvalidDescriptorError: If it is unparseable or incomplete
    """
    descriptor_path = project_dir / DESCRIPTOR_FILE
    if not descriptor_path.is_file():
        raise MissingDescriptorError(f"{DESCRIPTOR_FILE} not found in {project_dir}")

    try:
        data = _read_json(descriptor_path)
    except ConfigReadError as e:
        raise InvalidDescriptorError(str(e)) from e

    errors = [err for err in validate_descriptor(data) if err.severity == "error"]
    if errors:
        details = "; ".join(err.message for err in errors)
        raise InvalidDescriptorError(f"Invalid {descriptor_path}: {details}")

    return ProjectDescriptor(name=data["name"], config=ServerEntry.from_dict(data["config"]))


def write_project_descriptor(project_dir: Path, descriptor: ProjectDescriptor) -> Path:
    """Write .mcp-config.json into project_dir and return its path."""
    descriptor_path = project_dir / DESCRIPTOR_FILE
    _write_json(descriptor_path, descriptor.to_dict())
    return descriptor_path


def normalize_path(value: str | Path) -> Path:
    """Expand a leading ~ and return the absolute, canonical path.

    ABOUTME: Does not check that the path exists

    Examples:
        >>> normalize_path("~/projects/demo")
        PosixPath('/Users/user/projects/demo')
    """
    return Path(value).expanduser().resolve()


def read_manager_settings(path: Path) -> ManagerSettings | None:
    """Load mcp-manager's settings, or None if never written.

    Raises:
        ConfigReadError: If the file exists but is not a JSON object
    """
    if not path.exists():
        return None

    data = _read_json(path)
    if not isinstance(data, dict):
        raise ConfigReadError(f"Settings root must be an object: {path}")
    return ManagerSettings.from_dict(data)


def write_manager_settings(path: Path, settings: ManagerSettings) -> None:
    """Save mcp-manager's settings, creating the settings directory if needed."""
    _write_json(path, settings.to_dict())


def ensure_server_path_configured(settings: ManagerSettings | None) -> Path:
    """Return the configured shared MCP server path.

    Args:
        settings: Loaded settings, or None if no settings file exists

    Returns:
        Path to the shared MCP server script

    Raises:
        NotConfiguredError: If no path has been set
        PathNotFoundError: If the configured path no longer exists
    """
    if settings is None or not settings.mcp_server_path:
        raise NotConfiguredError(f"MCP server path is not configured. {SET_PATH_HINT}")

    server_path = Path(settings.mcp_server_path)
    if not server_path.exists():
        raise PathNotFoundError(f"MCP server not found: {server_path}. {SET_PATH_HINT}")

    return server_path
