# macOS process controller for Claude Desktop
import logging
import subprocess
from pathlib import Path

import psutil

from mcpmgr.models import ProcessController

logger = logging.getLogger(__name__)

# ABOUTME: Process name and bundle location of the desktop app
APP_NAME = "Claude"
APP_BUNDLE = Path("/Applications/Claude.app")


class MacOSController(ProcessController):
    """Controls Claude Desktop on macOS.

    ABOUTME: Finds processes with psutil by exact name match
    ABOUTME: Launches through `open`, preferring the /Applications bundle
    ABOUTME: Vanished or protected processes are skipped, never raised
    """

    def __init__(self, app_name: str = APP_NAME, app_bundle: Path = APP_BUNDLE) -> None:
        self._app_name = app_name
        self._app_bundle = app_bundle

    @property
    def name(self) -> str:
        return "macOS"

    @property
    def supported(self) -> bool:
        return True

    @property
    def app_path(self) -> Path | None:
        return self._app_bundle

    def _find_processes(self) -> list[psutil.Process]:
        matches: list[psutil.Process] = []
        for proc in psutil.process_iter(["name"]):
            try:
                if proc.info["name"] == self._app_name:
                    matches.append(proc)
            except (psutil.NoSuchProcess, psutil.AccessDenied):
                continue
        return matches

    def is_running(self) -> bool:
        return bool(self._find_processes())

    def stop(self, force: bool = False) -> None:
        """Send SIGTERM (or SIGKILL when force) to every matching process."""
        for proc in self._find_processes():
            try:
                if force:
                    proc.kill()
                else:
                    proc.terminate()
            except psutil.NoSuchProcess:
                # Already gone
                continue
            except psutil.AccessDenied as e:
                logger.warning(f"Cannot signal {self._app_name} (pid {proc.pid}): {e}")

    def launch(self) -> None:
        """Open the app bundle, or fall back to launching by name.

        Raises:
            subprocess.CalledProcessError: If `open` exits non-zero
            OSError: If `open` cannot be executed
        """
        if self._app_bundle.exists():
            command = ["open", str(self._app_bundle)]
        else:
            command = ["open", "-a", self._app_name]

        logger.debug(f"Launching: {' '.join(command)}")
        subprocess.run(command, check=True, capture_output=True)
