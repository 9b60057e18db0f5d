# Fallback process controller for OS families without auto-restart
from pathlib import Path

from mcpmgr.models import ProcessController


class UnsupportedController(ProcessController):
    """Controller for OS families where Claude Desktop cannot be restarted.

    ABOUTME: supported is False; the restarter returns before touching it
    ABOUTME: Every action is a no-op so accidental calls stay harmless
    """

    def __init__(self, system: str = "unknown") -> None:
        self._system = system

    @property
    def name(self) -> str:
        return self._system

    @property
    def supported(self) -> bool:
        return False

    @property
    def app_path(self) -> Path | None:
        return None

    def is_running(self) -> bool:
        return False

    def stop(self, force: bool = False) -> None:
        return None

    def launch(self) -> None:
        return None
