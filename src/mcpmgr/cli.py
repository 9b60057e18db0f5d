# CLI interface for mcp-manager
import argparse
import logging
import sys

from mcpmgr import __version__
from mcpmgr.errors import McpManagerError
from mcpmgr.manager import (
    ChangeReport,
    add_project,
    clear_servers,
    init_project,
    list_servers,
    remove_project,
    server_status,
    set_server_path,
    show_settings,
)
from mcpmgr.paths import resolve_paths
from mcpmgr.restart import RestartReport, restart_host_app
from mcpmgr.utils import DEFAULT_BACKUP_KEEP, DEFAULT_RUNNER, list_backups, prune_backups

# ABOUTME: Exit codes
# 0 = success, 2 = reported mcp-manager error, 3 = unexpected failure
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 2
EXIT_FATAL = 3


def print_restart(report: RestartReport) -> None:
    """Print the outcome of a restart attempt."""
    if not report.supported:
        print(f"Automatic restart is not supported on {report.platform}.")
        print("Please restart Claude Desktop manually.")
        return

    if report.stop_failed:
        print(f"Failed to stop Claude Desktop: {report.error}")
        print("Please restart Claude Desktop manually.")
        return

    if report.was_running:
        print("  Stopped Claude Desktop" + (" (forced)" if report.forced else ""))

    if report.launched:
        print("Claude Desktop restarted.")
    else:
        print(f"Failed to launch Claude Desktop: {report.error}")
        print("Please start Claude Desktop manually (/Applications/Claude.app).")


def _print_change_footer(report: ChangeReport, command: str) -> None:
    if report.restart is not None:
        print()
        print("Restarting Claude Desktop...")
        print_restart(report.restart)
    else:
        print("Restart Claude Desktop to apply the change.")
        print(f"Or restart automatically with: mcp-manager {command} --restart")


def cmd_set_path(args: argparse.Namespace) -> int:
    path = set_server_path(args.path, paths=resolve_paths())
    print("MCP server path saved.")
    print(f"  {path}")
    return EXIT_SUCCESS


def cmd_show_settings(args: argparse.Namespace) -> int:
    report = show_settings(paths=resolve_paths())

    print(f"mcp-manager settings ({report.settings_file})")
    print()

    if report.server_path is None:
        print("MCP server path is not set.")
        print("Set it with: mcp-manager set-path <path>")
        return EXIT_SUCCESS

    print(f"MCP server path: {report.server_path}")
    if report.exists:
        print("  Path exists.")
    else:
        print("  Warning: path does not exist.")
    return EXIT_SUCCESS


def cmd_init(args: argparse.Namespace) -> int:
    report = init_project(runner=args.runner, paths=resolve_paths())

    descriptor = report.descriptor
    if not report.created or descriptor is None:
        print(".mcp-config.json already exists.")
        print(f"  {report.descriptor_path}")
        return EXIT_SUCCESS

    print(f"Runner: {descriptor.config.command}")
    print(f"MCP server: {' '.join(descriptor.config.args or [])}")
    print(f"Created {report.descriptor_path}")
    print(f"  Project: {descriptor.name}")
    print()
    print("Register it with:")
    print(f"  mcp-manager add .{' --restart' if args.restart else ''}")
    return EXIT_SUCCESS


def cmd_add(args: argparse.Namespace) -> int:
    report = add_project(args.project_path, restart=args.restart, paths=resolve_paths())

    print(f"Project: {report.project_path}")
    if not report.changed:
        print(f"'{report.name}' is already registered.")
        return EXIT_SUCCESS

    if report.backup_path:
        print(f"Backup: {report.backup_path.name}")
    else:
        print("Backup skipped (no existing config).")
    print(f"Added '{report.name}'.")
    _print_change_footer(report, "add .")
    return EXIT_SUCCESS


def cmd_remove(args: argparse.Namespace) -> int:
    report = remove_project(args.project_path, restart=args.restart, paths=resolve_paths())

    print(f"Project: {report.project_path}")
    if not report.changed:
        print(f"'{report.name}' is not registered.")
        return EXIT_SUCCESS

    if report.backup_path:
        print(f"Backup: {report.backup_path.name}")
    print(f"Removed '{report.name}'.")
    _print_change_footer(report, "remove .")
    return EXIT_SUCCESS


def cmd_list(args: argparse.Namespace) -> int:
    servers = list_servers(paths=resolve_paths())

    if not servers:
        print("No MCP servers registered.")
        return EXIT_SUCCESS

    print("Registered MCP servers:")
    for index, (name, entry) in enumerate(servers.items(), start=1):
        print()
        print(f"{index}. {name}")
        if entry.command is not None:
            print(f"   command: {entry.command}")
        if entry.args is not None:
            print(f"   args: {' '.join(str(arg) for arg in entry.args)}")
        if entry.env is not None:
            print(f"   env: {len(entry.env)} variable(s)")
    return EXIT_SUCCESS


def cmd_clear(args: argparse.Namespace) -> int:
    report = clear_servers(restart=args.restart, paths=resolve_paths())

    if not report.changed:
        print("No MCP servers to remove.")
        return EXIT_SUCCESS

    if report.backup_path:
        print(f"Backup: {report.backup_path.name}")
    print(f"Removed all {report.removed} MCP server(s).")
    _print_change_footer(report, "clear")
    return EXIT_SUCCESS


def cmd_status(args: argparse.Namespace) -> int:
    report = server_status(paths=resolve_paths())

    print("MCP status")
    print()
    print(f"Registered: {report.count}")

    if report.count:
        print()
        print("Servers:")
        for index, name in enumerate(report.names, start=1):
            print(f"  {index}. {name}")
    return EXIT_SUCCESS


def cmd_restart(args: argparse.Namespace) -> int:
    print("Restarting Claude Desktop...")
    print_restart(restart_host_app())
    return EXIT_SUCCESS


def cmd_backup_list(args: argparse.Namespace) -> int:
    paths = resolve_paths()
    backups = list_backups(paths.host_config)

    if not backups:
        print("No backups found.")
        return EXIT_SUCCESS

    print(f"Backups in {paths.backup_dir} (newest first):")
    for index, backup in enumerate(backups, start=1):
        print(f"  {index}. {backup.name}")
    return EXIT_SUCCESS


def cmd_backup_clean(args: argparse.Namespace) -> int:
    paths = resolve_paths()
    deleted = prune_backups(paths.host_config, keep=args.keep)

    if not deleted:
        print(f"Nothing to clean ({args.keep} newest backups are kept).")
    else:
        print(f"Deleted {len(deleted)} old backup(s), kept the newest {args.keep}.")
    return EXIT_SUCCESS


COMMANDS = {
    "set-path": cmd_set_path,
    "show-settings": cmd_show_settings,
    "init": cmd_init,
    "add": cmd_add,
    "remove": cmd_remove,
    "list": cmd_list,
    "clear": cmd_clear,
    "status": cmd_status,
    "restart": cmd_restart,
    "backup-list": cmd_backup_list,
    "backup-clean": cmd_backup_clean,
}


def _non_negative(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError("must be zero or greater")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcp-manager",
        description="Manage Claude Desktop MCP server entries per project"
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"mcp-manager v{__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    set_path_parser = subparsers.add_parser(
        "set-path",
        help="Set the shared MCP server path used by init"
    )
    set_path_parser.add_argument("path", help="Path to the MCP server script")

    subparsers.add_parser(
        "show-settings",
        help="Show mcp-manager settings"
    )

    init_parser = subparsers.add_parser(
        "init",
        help="Create .mcp-config.json in the current directory"
    )
    init_parser.add_argument(
        "--runner",
        default=DEFAULT_RUNNER,
        help=f"Script runner to look up on PATH (default: {DEFAULT_RUNNER})"
    )
    init_parser.add_argument(
        "--restart",
        action="store_true",
        help="Suggest the --restart flag in the follow-up hint"
    )

    for name, help_text in (
        ("add", "Register a project's MCP server"),
        ("remove", "Unregister a project's MCP server"),
    ):
        project_parser = subparsers.add_parser(name, help=help_text)
        project_parser.add_argument(
            "project_path",
            help="Project directory containing .mcp-config.json"
        )
        project_parser.add_argument(
            "--restart",
            action="store_true",
            help="Restart Claude Desktop afterwards"
        )

    subparsers.add_parser(
        "list",
        help="List registered MCP servers"
    )

    clear_parser = subparsers.add_parser(
        "clear",
        help="Remove all registered MCP servers"
    )
    clear_parser.add_argument(
        "--restart",
        action="store_true",
        help="Restart Claude Desktop afterwards"
    )

    subparsers.add_parser(
        "status",
        help="Show how many MCP servers are registered"
    )

    subparsers.add_parser(
        "restart",
        help="Restart Claude Desktop"
    )

    subparsers.add_parser(
        "backup-list",
        help="List config backups, newest first"
    )

    backup_clean_parser = subparsers.add_parser(
        "backup-clean",
        help="Delete old config backups"
    )
    backup_clean_parser.add_argument(
        "--keep",
        type=_non_negative,
        default=DEFAULT_BACKUP_KEEP,
        help=f"Number of newest backups to keep (default: {DEFAULT_BACKUP_KEEP})"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    ABOUTME: Parses args and dispatches to appropriate command
    ABOUTME: Turns McpManagerError into a one-line message and exit code 2
    ABOUTME: Returns exit code for sys.exit()
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handler = COMMANDS.get(args.command)
    if handler is None:
        # No command specified, show help
        parser.print_help()
        return EXIT_SUCCESS

    try:
        return handler(args)
    except McpManagerError as e:
        print(f"Error: {e}")
        return EXIT_CONFIG_ERROR
    except Exception as e:
        print(f"Fatal error: {e}")
        return EXIT_FATAL


if __name__ == "__main__":
    sys.exit(main())
