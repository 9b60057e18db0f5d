# ABOUTME: Tests for the mcp-manager command surface
# ABOUTME: resolve_paths is patched so commands operate on tmp_path
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from mcpmgr import __version__
from mcpmgr.cli import EXIT_CONFIG_ERROR, EXIT_FATAL, EXIT_SUCCESS, main
from mcpmgr.config import DESCRIPTOR_FILE
from mcpmgr.paths import ManagerPaths
from mcpmgr.restart import RestartReport


@pytest.fixture
def paths(tmp_path: Path):
    resolved = ManagerPaths(
        host_config=tmp_path / "Claude" / "claude_desktop_config.json",
        settings_file=tmp_path / "mcp-manager" / "config.json",
    )
    with patch("mcpmgr.cli.resolve_paths", return_value=resolved):
        yield resolved


@pytest.fixture
def project(tmp_path: Path) -> Path:
    project_dir = tmp_path / "proj1"
    project_dir.mkdir()
    (project_dir / DESCRIPTOR_FILE).write_text(json.dumps({
        "name": "proj1",
        "config": {"command": "/usr/bin/node", "args": ["/srv/mcp.js"], "env": {"A": "1"}},
    }))
    return project_dir


def test_no_command_shows_help(capsys):
    assert main([]) == EXIT_SUCCESS
    assert "usage" in capsys.readouterr().out.lower()


def test_version(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0
    assert f"mcp-manager v{__version__}" in capsys.readouterr().out


class TestAddRemove:
    """Tests for the add and remove commands."""

    def test_add(self, paths, project, capsys):
        assert main(["add", str(project)]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "Added 'proj1'" in out
        assert "Backup skipped" in out
        assert "mcp-manager add . --restart" in out
        assert "proj1" in json.loads(paths.host_config.read_text())["mcpServers"]

    def test_add_already_registered(self, paths, project, capsys):
        main(["add", str(project)])
        capsys.readouterr()

        assert main(["add", str(project)]) == EXIT_SUCCESS
        assert "already registered" in capsys.readouterr().out

    def test_add_with_restart(self, paths, project, capsys):
        restarted = RestartReport(platform="macOS", supported=True, was_running=True, launched=True)

        with patch("mcpmgr.manager.restart_host_app", return_value=restarted) as mock_restart:
            assert main(["add", str(project), "--restart"]) == EXIT_SUCCESS

        mock_restart.assert_called_once()
        out = capsys.readouterr().out
        assert "Claude Desktop restarted." in out
        assert "--restart" not in out

    def test_add_missing_descriptor(self, paths, tmp_path, capsys):
        assert main(["add", str(tmp_path)]) == EXIT_CONFIG_ERROR
        assert capsys.readouterr().out.startswith("Error:")

    def test_remove(self, paths, project, capsys):
        main(["add", str(project)])
        capsys.readouterr()

        assert main(["remove", str(project)]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "Removed 'proj1'" in out
        assert "Backup: claude_desktop_config.backup." in out

    def test_remove_not_registered(self, paths, project, capsys):
        assert main(["remove", str(project)]) == EXIT_SUCCESS
        assert "not registered" in capsys.readouterr().out


class TestReadCommands:
    """Tests for list and status."""

    def test_list_empty(self, paths, capsys):
        assert main(["list"]) == EXIT_SUCCESS
        assert "No MCP servers registered." in capsys.readouterr().out

    def test_list_entries(self, paths, project, capsys):
        main(["add", str(project)])
        capsys.readouterr()

        assert main(["list"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "1. proj1" in out
        assert "command: /usr/bin/node" in out
        assert "args: /srv/mcp.js" in out
        assert "env: 1 variable(s)" in out

    def test_list_foreign_entries(self, paths, capsys):
        paths.host_config.parent.mkdir(parents=True)
        paths.host_config.write_text(json.dumps({
            "mcpServers": {
                "remote": {"url": "https://example.com/mcp"},
                "legacy": {"command": "x", "args": None},
            }
        }))

        assert main(["list"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "1. remote" in out
        assert "2. legacy" in out
        assert "command: x" in out
        assert "args:" not in out

    def test_status(self, paths, project, capsys):
        main(["add", str(project)])
        capsys.readouterr()

        assert main(["status"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "Registered: 1" in out
        assert "1. proj1" in out

    def test_invalid_host_config(self, paths, capsys):
        paths.host_config.parent.mkdir(parents=True)
        paths.host_config.write_text("{ broken")

        assert main(["list"]) == EXIT_CONFIG_ERROR
        assert "Invalid JSON" in capsys.readouterr().out

    def test_unexpected_error_is_fatal(self, paths, capsys):
        with patch("mcpmgr.cli.list_servers", side_effect=RuntimeError("boom")):
            assert main(["list"]) == EXIT_FATAL
        assert "Fatal error: boom" in capsys.readouterr().out


class TestClear:
    """Tests for the clear command."""

    def test_clear_empty(self, paths, capsys):
        assert main(["clear"]) == EXIT_SUCCESS
        assert "No MCP servers to remove." in capsys.readouterr().out

    def test_clear(self, paths, project, capsys):
        main(["add", str(project)])
        capsys.readouterr()

        assert main(["clear"]) == EXIT_SUCCESS

        assert "Removed all 1 MCP server(s)." in capsys.readouterr().out
        assert json.loads(paths.host_config.read_text()) == {"mcpServers": {}}


class TestSettingsCommands:
    """Tests for set-path, show-settings and init."""

    def test_show_settings_unset(self, paths, capsys):
        assert main(["show-settings"]) == EXIT_SUCCESS
        assert "not set" in capsys.readouterr().out

    def test_set_path_missing(self, paths, tmp_path, capsys):
        assert main(["set-path", str(tmp_path / "missing.js")]) == EXIT_CONFIG_ERROR
        assert "Error: Path does not exist" in capsys.readouterr().out

    def test_set_then_show(self, paths, tmp_path, capsys):
        script = tmp_path / "mcp.js"
        script.write_text("")

        assert main(["set-path", str(script)]) == EXIT_SUCCESS
        assert main(["show-settings"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert f"MCP server path: {script.resolve()}" in out
        assert "Path exists." in out

    def test_init(self, paths, tmp_path, monkeypatch, capsys):
        script = tmp_path / "mcp.js"
        script.write_text("")
        main(["set-path", str(script)])
        project_dir = tmp_path / "fresh"
        project_dir.mkdir()
        monkeypatch.chdir(project_dir)
        capsys.readouterr()

        with patch("mcpmgr.utils.validation.shutil.which", return_value="/usr/bin/node"):
            assert main(["init", "--restart"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "Project: fresh" in out
        assert "mcp-manager add . --restart" in out
        assert (project_dir / DESCRIPTOR_FILE).exists()

    def test_init_existing_descriptor(self, paths, project, monkeypatch, capsys):
        monkeypatch.chdir(project)
        before = (project / DESCRIPTOR_FILE).read_text()

        assert main(["init"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert ".mcp-config.json already exists." in out
        assert "Register it with:" not in out
        assert (project / DESCRIPTOR_FILE).read_text() == before

    def test_init_not_configured(self, paths, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)

        with patch("mcpmgr.utils.validation.shutil.which", return_value="/usr/bin/node"):
            assert main(["init"]) == EXIT_CONFIG_ERROR
        assert "set-path" in capsys.readouterr().out


class TestRestartAndBackups:
    """Tests for restart, backup-list and backup-clean."""

    def test_restart_unsupported(self, capsys):
        unsupported = RestartReport(platform="Linux", supported=False)

        with patch("mcpmgr.cli.restart_host_app", return_value=unsupported):
            assert main(["restart"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "not supported on Linux" in out
        assert "manually" in out

    def test_restart_launch_failure(self, capsys):
        failed = RestartReport(platform="macOS", supported=True, error="open failed")

        with patch("mcpmgr.cli.restart_host_app", return_value=failed):
            assert main(["restart"]) == EXIT_SUCCESS

        assert "Failed to launch Claude Desktop: open failed" in capsys.readouterr().out

    def test_restart_stop_failure(self, capsys):
        failed = RestartReport(platform="macOS", supported=True, stop_failed=True, error="denied")

        with patch("mcpmgr.cli.restart_host_app", return_value=failed):
            assert main(["restart"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "Failed to stop Claude Desktop: denied" in out
        assert "Failed to launch" not in out

    def test_backup_list_empty(self, paths, capsys):
        assert main(["backup-list"]) == EXIT_SUCCESS
        assert "No backups found." in capsys.readouterr().out

    def test_backup_list_and_clean(self, paths, project, capsys):
        paths.host_config.parent.mkdir(parents=True)
        paths.host_config.write_text('{"mcpServers": {}}')
        main(["add", str(project)])
        main(["remove", str(project)])
        main(["add", str(project)])
        capsys.readouterr()

        assert main(["backup-list"]) == EXIT_SUCCESS
        assert "3. claude_desktop_config.backup." in capsys.readouterr().out

        assert main(["backup-clean", "--keep", "1"]) == EXIT_SUCCESS
        assert "Deleted 2 old backup(s)" in capsys.readouterr().out

    def test_backup_clean_rejects_negative(self, paths):
        with pytest.raises(SystemExit) as exc_info:
            main(["backup-clean", "--keep", "-1"])
        assert exc_info.value.code == 2
