# Process controller registry
import platform

from mcpmgr.models import ProcessController
from mcpmgr.platforms.base import UnsupportedController
from mcpmgr.platforms.macos import MacOSController

# Registry of OS families with automatic restart support
CONTROLLERS: dict[str, type[ProcessController]] = {
    "Darwin": MacOSController,
}

__all__ = [
    "ProcessController",
    "MacOSController",
    "UnsupportedController",
    "CONTROLLERS",
    "get_controller",
]


def get_controller(system: str | None = None) -> ProcessController:
    """Instantiate the controller for an OS family.

    ABOUTME: Unregistered systems get an UnsupportedController
    """
    system = system or platform.system()
    controller_cls = CONTROLLERS.get(system)
    if controller_cls is None:
        return UnsupportedController(system)
    return controller_cls()
