# Workflow operations behind the mcp-manager commands
import logging
from dataclasses import dataclass, field
from pathlib import Path

from mcpmgr.config import (
    DESCRIPTOR_FILE,
    backup_host_config,
    ensure_server_path_configured,
    normalize_path,
    read_host_config,
    read_manager_settings,
    read_project_descriptor,
    write_host_config,
    write_manager_settings,
    write_project_descriptor,
)
from mcpmgr.errors import McpManagerError, PathNotFoundError
from mcpmgr.models import ManagerSettings, ProcessController, ProjectDescriptor, ServerEntry
from mcpmgr.paths import ManagerPaths, resolve_paths
from mcpmgr.restart import RestartReport, restart_host_app
from mcpmgr.utils import DEFAULT_RUNNER, find_runner

logger = logging.getLogger(__name__)

# ABOUTME: Transport marker written into new project descriptors
MCP_MODE = "stdio"


@dataclass
class ChangeReport:
    """Result of add, remove or clear.

    ABOUTME: changed is False for the idempotent no-op paths
    ABOUTME: (already registered, not registered, nothing to clear)
    """
    changed: bool
    name: str | None = None
    project_path: Path | None = None
    removed: int = 0
    backup_path: Path | None = None
    backup_skipped: str | None = None
    restart: RestartReport | None = None


@dataclass
class InitReport:
    """Result of init_project."""
    descriptor_path: Path
    created: bool
    descriptor: ProjectDescriptor | None = None


@dataclass
class SettingsReport:
    """Current manager settings as shown by show_settings."""
    settings_file: Path
    server_path: str | None = None
    exists: bool = False


@dataclass
class StatusReport:
    """Registered server names, in config order."""
    names: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.names)


def _restart(restart: bool, controller: ProcessController | None) -> RestartReport | None:
    if not restart:
        return None
    return restart_host_app(controller)


def add_project(
    project_path: str | Path,
    restart: bool = False,
    paths: ManagerPaths | None = None,
    controller: ProcessController | None = None,
) -> ChangeReport:
    """Register a project's server entry in Claude Desktop's config.

    ABOUTME: No-op (not an error) when the name is already registered
    ABOUTME: Backup failure is non-fatal: on first run there is nothing to back up

    Args:
        project_path: Project directory containing .mcp-config.json
        restart: Restart Claude Desktop after writing
        paths: Resolved locations; defaults to the current OS
        controller: Process controller used for the restart

    Returns:
        ChangeReport for the operation

    Raises:
        MissingDescriptorError: If the project has no .mcp-config.json
        InvalidDescriptorError: If .mcp-config.json is malformed
        ConfigReadError: If the host config cannot be parsed
        ConfigWriteError: If the host config cannot be written
    """
    paths = paths or resolve_paths()
    project_dir = normalize_path(project_path)

    descriptor = read_project_descriptor(project_dir)
    config = read_host_config(paths.host_config)

    report = ChangeReport(changed=False, name=descriptor.name, project_path=project_dir)
    if descriptor.name in config.servers:
        logger.info(f"'{descriptor.name}' is already registered")
        return report

    try:
        report.backup_path = backup_host_config(paths.host_config)
    except (McpManagerError, OSError) as e:
        logger.info(f"Backup skipped: {e}")
        report.backup_skipped = str(e)

    config.servers[descriptor.name] = descriptor.config
    write_host_config(paths.host_config, config)
    report.changed = True

    report.restart = _restart(restart, controller)
    return report


def remove_project(
    project_path: str | Path,
    restart: bool = False,
    paths: ManagerPaths | None = None,
    controller: ProcessController | None = None,
) -> ChangeReport:
    """Unregister a project's server entry.

    ABOUTME: No-op (not an error) when the name is not registered
    ABOUTME: Backup failure is fatal here: the entry exists, so the file should too

    Raises:
        MissingDescriptorError: If the project has no .mcp-config.json
        InvalidDescriptorError: If .mcp-config.json is malformed
        NoConfigToBackupError: If the backup cannot be taken
        ConfigReadError: If the host config cannot be parsed
        ConfigWriteError: If the host config cannot be written
    """
    paths = paths or resolve_paths()
    project_dir = normalize_path(project_path)

    descriptor = read_project_descriptor(project_dir)
    config = read_host_config(paths.host_config)

    report = ChangeReport(changed=False, name=descriptor.name, project_path=project_dir)
    if descriptor.name not in config.servers:
        logger.info(f"'{descriptor.name}' is not registered")
        return report

    report.backup_path = backup_host_config(paths.host_config)

    del config.servers[descriptor.name]
    write_host_config(paths.host_config, config)
    report.changed = True
    report.removed = 1

    report.restart = _restart(restart, controller)
    return report


def list_servers(paths: ManagerPaths | None = None) -> dict[str, ServerEntry]:
    """Return registered servers keyed by name."""
    paths = paths or resolve_paths()
    return read_host_config(paths.host_config).servers


def clear_servers(
    restart: bool = False,
    paths: ManagerPaths | None = None,
    controller: ProcessController | None = None,
) -> ChangeReport:
    """Remove every registered server.

    ABOUTME: Empty registry is a no-op and takes no backup
    ABOUTME: Otherwise backs up first (fatal on failure), then empties mcpServers
    """
    paths = paths or resolve_paths()
    config = read_host_config(paths.host_config)

    count = len(config.servers)
    if count == 0:
        return ChangeReport(changed=False)

    report = ChangeReport(changed=True, removed=count)
    report.backup_path = backup_host_config(paths.host_config)

    config.servers = {}
    write_host_config(paths.host_config, config)

    report.restart = _restart(restart, controller)
    return report


def server_status(paths: ManagerPaths | None = None) -> StatusReport:
    paths = paths or resolve_paths()
    return StatusReport(names=list(read_host_config(paths.host_config).servers))


def init_project(
    project_dir: str | Path | None = None,
    runner: str = DEFAULT_RUNNER,
    paths: ManagerPaths | None = None,
) -> InitReport:
    """Create .mcp-config.json for a project.

    ABOUTME: Never overwrites an existing descriptor
    ABOUTME: Entry runs the shared MCP server with the local runner
    ABOUTME: env carries SERVER_ROOT, MCP_MODE and PROJECT_ID

    Args:
        project_dir: Project root; defaults to the current directory
        runner: Script runner looked up on PATH
        paths: Resolved locations; defaults to the current OS

    Returns:
        InitReport; created is False if a descriptor already existed

    Raises:
        RunnerNotFoundError: If runner is not on PATH
        NotConfiguredError: If no shared server path is set
        PathNotFoundError: If the shared server path is stale
    """
    paths = paths or resolve_paths()
    project_dir = normalize_path(project_dir or Path.cwd())
    descriptor_path = project_dir / DESCRIPTOR_FILE

    if descriptor_path.exists():
        return InitReport(descriptor_path=descriptor_path, created=False)

    runner_path = find_runner(runner)
    server_path = ensure_server_path_configured(read_manager_settings(paths.settings_file))

    project_name = project_dir.name
    descriptor = ProjectDescriptor(
        name=project_name,
        config=ServerEntry(
            command=runner_path,
            args=[str(server_path)],
            env={
                "SERVER_ROOT": str(project_dir),
                "MCP_MODE": MCP_MODE,
                "PROJECT_ID": project_name,
            },
        ),
    )
    write_project_descriptor(project_dir, descriptor)

    return InitReport(descriptor_path=descriptor_path, created=True, descriptor=descriptor)


def set_server_path(server_path: str | Path, paths: ManagerPaths | None = None) -> Path:
    """Store the shared MCP server path in manager settings.

    Raises:
        PathNotFoundError: If server_path does not exist
    """
    paths = paths or resolve_paths()
    normalized = normalize_path(server_path)

    if not normalized.exists():
        raise PathNotFoundError(f"Path does not exist: {normalized}")

    settings = read_manager_settings(paths.settings_file) or ManagerSettings()
    settings.mcp_server_path = str(normalized)
    write_manager_settings(paths.settings_file, settings)

    return normalized


def show_settings(paths: ManagerPaths | None = None) -> SettingsReport:
    paths = paths or resolve_paths()
    settings = read_manager_settings(paths.settings_file)

    report = SettingsReport(settings_file=paths.settings_file)
    if settings and settings.mcp_server_path:
        report.server_path = settings.mcp_server_path
        report.exists = Path(settings.mcp_server_path).exists()
    return report
