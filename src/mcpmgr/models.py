# Core data models for mcp-manager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class ServerEntry:
    """Launch specification for one MCP server process.

    ABOUTME: Frozen dataclass; entries are replaced wholesale, never field-merged
    ABOUTME: command, args or env is None when the source JSON lacked that key
    ABOUTME: extra carries unknown keys, and known keys of the wrong type, verbatim
    """
    command: str | None
    args: list[str] | None = field(default_factory=list)
    env: dict[str, str] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialize in Claude Desktop's mcpServers entry format."""
        result: dict[str, Any] = {}
        if self.command is not None:
            result["command"] = self.command
        if self.args is not None:
            result["args"] = list(self.args)
        if self.env is not None:
            result["env"] = dict(self.env)
        result.update(self.extra)
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServerEntry":
        """Build an entry from JSON data without validating it.

        ABOUTME: Permissive on purpose: host config entries written by other
        ABOUTME: tools are kept as-is. Descriptor validation lives in utils.validation

        Args:
            data: One value of the mcpServers object

        Returns:
            ServerEntry whose to_dict() reproduces data
        """
        command = None
        args = None
        env = None
        extra: dict[str, Any] = {}

        for key, value in data.items():
            if key == "command" and isinstance(value, str):
                command = value
            elif key == "args" and isinstance(value, list):
                args = list(value)
            elif key == "env" and isinstance(value, dict):
                env = dict(value)
            else:
                extra[key] = value

        return cls(command=command, args=args, env=env, extra=extra)


@dataclass
class HostAppConfig:
    """Claude Desktop's claude_desktop_config.json.

    ABOUTME: servers maps unique names to entries; order is not significant
    ABOUTME: other holds the remaining top-level keys (globalShortcut etc.)
    """
    servers: dict[str, ServerEntry] = field(default_factory=dict)
    other: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "mcpServers": {name: entry.to_dict() for name, entry in self.servers.items()}
        }
        result.update(self.other)
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HostAppConfig":
        servers_data = data.get("mcpServers") or {}
        if not isinstance(servers_data, dict):
            raise ValueError("'mcpServers' must be an object")

        servers = {}
        for name, entry_data in servers_data.items():
            if not isinstance(entry_data, dict):
                raise ValueError(f"Server '{name}' must be an object")
            servers[name] = ServerEntry.from_dict(entry_data)

        other = {k: v for k, v in data.items() if k != "mcpServers"}
        return cls(servers=servers, other=other)


@dataclass(frozen=True)
class ProjectDescriptor:
    """Contents of a project's .mcp-config.json."""
    name: str
    config: ServerEntry

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "config": self.config.to_dict()}


@dataclass
class ManagerSettings:
    """mcp-manager's own global settings.

    ABOUTME: mcp_server_path is the shared MCP server script used by init
    ABOUTME: other keeps unknown keys so a set-path merge does not drop them
    """
    mcp_server_path: str = ""
    other: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"mcpServerPath": self.mcp_server_path}
        result.update(self.other)
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ManagerSettings":
        path = data.get("mcpServerPath") or ""
        return cls(
            mcp_server_path=str(path),
            other={k: v for k, v in data.items() if k != "mcpServerPath"},
        )


@runtime_checkable
class ProcessController(Protocol):
    """Protocol for OS-specific control of the Claude Desktop process.

    ABOUTME: One implementation per supported OS family
    ABOUTME: Uses @runtime_checkable for isinstance() support
    """

    @property
    def name(self) -> str:
        """Human-readable OS family name."""
        ...

    @property
    def supported(self) -> bool:
        """Whether automatic restart works on this OS."""
        ...

    @property
    def app_path(self) -> Path | None:
        """Where the application is installed, if known."""
        ...

    def is_running(self) -> bool:
        """Check whether the application process is alive."""
        ...

    def stop(self, force: bool = False) -> None:
        """Ask the application to exit; force kills it outright."""
        ...

    def launch(self) -> None:
        """Start the application. Raises OSError or CalledProcessError on failure."""
        ...
