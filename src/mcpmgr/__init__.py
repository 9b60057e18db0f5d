# mcp-manager - per-project MCP server entries for Claude Desktop
# ABOUTME: Version information
__version__ = "1.0.0"

# ABOUTME: Export core data models and errors
from mcpmgr.errors import (
    ConfigReadError,
    ConfigWriteError,
    InvalidDescriptorError,
    McpManagerError,
    MissingDescriptorError,
    NoConfigToBackupError,
    NotConfiguredError,
    PathNotFoundError,
    RunnerNotFoundError,
)
from mcpmgr.models import (
    HostAppConfig,
    ManagerSettings,
    ProcessController,
    ProjectDescriptor,
    ServerEntry,
)

# ABOUTME: Export path resolution and config store functions
from mcpmgr.paths import ManagerPaths, resolve_paths
from mcpmgr.config import (
    backup_host_config,
    ensure_server_path_configured,
    normalize_path,
    read_host_config,
    read_manager_settings,
    read_project_descriptor,
    write_host_config,
    write_manager_settings,
)

__all__ = [
    "__version__",
    "McpManagerError",
    "ConfigReadError",
    "ConfigWriteError",
    "NoConfigToBackupError",
    "MissingDescriptorError",
    "InvalidDescriptorError",
    "NotConfiguredError",
    "PathNotFoundError",
    "RunnerNotFoundError",
    "HostAppConfig",
    "ManagerSettings",
    "ProcessController",
    "ProjectDescriptor",
    "ServerEntry",
    "ManagerPaths",
    "resolve_paths",
    "backup_host_config",
    "ensure_server_path_configured",
    "normalize_path",
    "read_host_config",
    "read_manager_settings",
    "read_project_descriptor",
    "write_host_config",
    "write_manager_settings",
]
