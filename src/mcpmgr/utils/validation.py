# ABOUTME: Validation utilities for project descriptors and local commands
# ABOUTME: Descriptor checks collect every problem instead of stopping at the first
import shutil
from dataclasses import dataclass
from typing import Any

from mcpmgr.errors import RunnerNotFoundError

# ABOUTME: Runner used to execute the shared MCP server script
DEFAULT_RUNNER = "node"


@dataclass(frozen=True)
class ValidationError:
    """Represents a validation error or warning.

    ABOUTME: Uses frozen dataclass for immutability
    ABOUTME: Severity level distinguishes between blocking errors and warnings
    """
    field: str
    message: str
    severity: str  # 'error' or 'warning'


def validate_command_exists(command: str) -> ValidationError | None:
    """Validate that a command exists on the system.

    ABOUTME: Uses shutil.which() for cross-platform command lookup
    ABOUTME: Returns None if command found, ValidationError otherwise

    Examples:
        >>> validate_command_exists("node")
        None
        >>> validate_command_exists("nonexistent_cmd")
        ValidationError(field='command', message='Command not found: nonexistent_cmd', severity='error')
    """
    if shutil.which(command) is None:
        return ValidationError(
            field="command",
            message=f"Command not found: {command}",
            severity="error"
        )
    return None


def find_runner(runner: str = DEFAULT_RUNNER) -> str:
    """Return the absolute path of the script runner.

    Raises:
        RunnerNotFoundError: If runner is not on PATH
    """
    error = validate_command_exists(runner)
    if error:
        raise RunnerNotFoundError(
            f"{error.message}. Make sure {runner} is installed and on your PATH."
        )
    return shutil.which(runner) or runner


def validate_descriptor(data: Any) -> list[ValidationError]:
    """Validate raw .mcp-config.json data.

    ABOUTME: Required: name, config.command, config.args
    ABOUTME: env is optional but must map strings to strings when present
    ABOUTME: Returns list of all validation errors (empty if valid)

    Args:
        data: Parsed JSON value

    Returns:
        List of ValidationError instances
    """
    if not isinstance(data, dict):
        return [ValidationError("", "Descriptor must be a JSON object", "error")]

    errors: list[ValidationError] = []

    name = data.get("name")
    if not isinstance(name, str) or not name:
        errors.append(ValidationError("name", "Missing required field 'name'", "error"))

    config = data.get("config")
    if not isinstance(config, dict):
        errors.append(ValidationError("config", "Missing required field 'config'", "error"))
        return errors

    command = config.get("command")
    if not isinstance(command, str) or not command:
        errors.append(ValidationError(
            "config.command", "Missing required field 'config.command'", "error"
        ))

    args = config.get("args")
    if args is None:
        errors.append(ValidationError(
            "config.args", "Missing required field 'config.args'", "error"
        ))
    elif not isinstance(args, list) or not all(isinstance(arg, str) for arg in args):
        errors.append(ValidationError(
            "config.args", "'config.args' must be a list of strings", "error"
        ))

    env = config.get("env")
    if env is not None and (
        not isinstance(env, dict)
        or not all(isinstance(k, str) and isinstance(v, str) for k, v in env.items())
    ):
        errors.append(ValidationError(
            "config.env", "'config.env' must map strings to strings", "error"
        ))

    return errors
