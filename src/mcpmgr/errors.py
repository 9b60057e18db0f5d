# ABOUTME: Error kinds surfaced by mcp-manager operations.
# ABOUTME: Each subclasses the matching builtin so plain OSError/ValueError handlers still work.


class McpManagerError(Exception):
    """Base class for every failure the command surface reports."""


class ConfigReadError(McpManagerError, ValueError):
    """Host config or manager settings exist but cannot be read or parsed."""


class ConfigWriteError(McpManagerError, OSError):
    """Host config or manager settings could not be written."""


class NoConfigToBackupError(McpManagerError, FileNotFoundError):
    """Backup requested but the host config file does not exist."""


class MissingDescriptorError(McpManagerError, FileNotFoundError):
    """No .mcp-config.json in the project directory."""


class InvalidDescriptorError(McpManagerError, ValueError):
    """.mcp-config.json is unparseable or lacks required fields."""


class NotConfiguredError(McpManagerError):
    """The shared MCP server path has not been set."""


class PathNotFoundError(McpManagerError, FileNotFoundError):
    """A configured or supplied path does not exist on disk."""


class RunnerNotFoundError(McpManagerError):
    """The script runner (node by default) is not on the search path."""
