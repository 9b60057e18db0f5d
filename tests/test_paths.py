# ABOUTME: Tests for OS-specific path resolution.
# ABOUTME: Pure functions, so every OS variant is tested on any host.
from datetime import datetime, timedelta, timezone
from pathlib import Path

from mcpmgr.paths import (
    ManagerPaths,
    backup_path_for,
    format_backup_timestamp,
    get_host_config_path,
    get_settings_path,
    resolve_paths,
)

HOME = Path("/home/alice")


class TestHostConfigPath:
    """Tests for get_host_config_path function."""

    def test_macos(self):
        path = get_host_config_path("Darwin", home=HOME, environ={})
        assert path == HOME / "Library" / "Application Support" / "Claude" / "claude_desktop_config.json"

    def test_windows_uses_appdata(self):
        appdata = "/c/Users/alice/AppData/Roaming"
        path = get_host_config_path("Windows", home=HOME, environ={"APPDATA": appdata})
        assert path == Path(appdata) / "Claude" / "claude_desktop_config.json"

    def test_windows_without_appdata(self):
        """Test fallback to ~/AppData/Roaming when APPDATA is unset."""
        path = get_host_config_path("Windows", home=HOME, environ={})
        assert path == HOME / "AppData" / "Roaming" / "Claude" / "claude_desktop_config.json"

    def test_linux(self):
        path = get_host_config_path("Linux", home=HOME, environ={})
        assert path == HOME / ".config" / "Claude" / "claude_desktop_config.json"

    def test_unknown_os_falls_back_to_unix_layout(self):
        assert get_host_config_path("FreeBSD", home=HOME, environ={}) == get_host_config_path(
            "Linux", home=HOME, environ={}
        )


class TestSettingsPath:
    """Tests for manager settings location."""

    def test_unix_settings(self):
        assert get_settings_path("Darwin", home=HOME, environ={}) == (
            HOME / ".config" / "mcp-manager" / "config.json"
        )

    def test_windows_settings(self):
        path = get_settings_path("Windows", home=HOME, environ={"APPDATA": "/appdata"})
        assert path == Path("/appdata") / "mcp-manager" / "config.json"

    def test_resolve_paths_bundles_locations(self):
        paths = resolve_paths("Linux", home=HOME, environ={})
        assert isinstance(paths, ManagerPaths)
        assert paths.backup_dir == HOME / ".config" / "Claude"
        assert paths.settings_dir == HOME / ".config" / "mcp-manager"


class TestBackupNaming:
    """Tests for backup file naming."""

    def test_timestamp_format(self):
        moment = datetime(2026, 1, 8, 14, 30, 22, 123456, tzinfo=timezone.utc)
        assert format_backup_timestamp(moment) == "2026-01-08T14-30-22-123Z"

    def test_timestamp_converted_to_utc(self):
        moment = datetime(2026, 1, 8, 23, 0, 0, tzinfo=timezone(timedelta(hours=9)))
        assert format_backup_timestamp(moment) == "2026-01-08T14-00-00-000Z"

    def test_backup_is_sibling_of_config(self):
        config = HOME / ".config" / "Claude" / "claude_desktop_config.json"
        moment = datetime(2026, 1, 8, 14, 30, 22, 5000, tzinfo=timezone.utc)

        backup = backup_path_for(config, moment)

        assert backup.parent == config.parent
        assert backup.name == "claude_desktop_config.backup.2026-01-08T14-30-22-005Z.json"

    def test_names_sort_in_creation_order(self):
        config = HOME / "claude_desktop_config.json"
        start = datetime(2026, 1, 8, 9, 59, 59, 999000, tzinfo=timezone.utc)
        moments = [start + timedelta(milliseconds=step) for step in (0, 1, 1500, 3_600_000)]

        names = [backup_path_for(config, m).name for m in moments]

        assert names == sorted(names)
