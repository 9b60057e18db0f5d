# Claude Desktop restart orchestration
import logging
import subprocess
import time
from collections.abc import Callable
from dataclasses import dataclass

import psutil

from mcpmgr.models import ProcessController
from mcpmgr.platforms import get_controller
from mcpmgr.utils import wait_until

logger = logging.getLogger(__name__)

# ABOUTME: Restart timings in seconds
GRACEFUL_STOP_TIMEOUT = 10.0
FORCED_STOP_TIMEOUT = 5.0
SETTLE_DELAY = 1.0


@dataclass
class RestartReport:
    """Outcome of a restart attempt.

    ABOUTME: Restart problems are reported here, never raised, because the
    ABOUTME: config change that triggered the restart is already on disk
    """
    platform: str
    supported: bool
    was_running: bool = False
    forced: bool = False
    launched: bool = False
    stop_failed: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.supported and self.launched


def restart_host_app(
    controller: ProcessController | None = None,
    graceful_timeout: float = GRACEFUL_STOP_TIMEOUT,
    forced_timeout: float = FORCED_STOP_TIMEOUT,
    settle_delay: float = SETTLE_DELAY,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> RestartReport:
    """Stop Claude Desktop if it is running, then launch it again.

    ABOUTME: Graceful stop, wait up to graceful_timeout, then force and wait again
    ABOUTME: Settles briefly before launch so the new config is on disk
    ABOUTME: Unsupported OS families return immediately with supported=False
    ABOUTME: A psutil or OS error while detecting or stopping skips the launch

    Args:
        controller: OS-specific controller; defaults to the current OS
        graceful_timeout: Seconds to wait after the graceful stop
        forced_timeout: Seconds to wait after the forced stop
        settle_delay: Seconds to pause between stop and launch
        clock: Time source for the polling deadline
        sleep: Sleep function used for polling and settling

    Returns:
        RestartReport describing what happened
    """
    controller = controller or get_controller()
    report = RestartReport(platform=controller.name, supported=controller.supported)

    if not controller.supported:
        logger.info(f"Automatic restart is not supported on {controller.name}")
        return report

    def exited() -> bool:
        return not controller.is_running()

    try:
        report.was_running = controller.is_running()

        if report.was_running:
            controller.stop(force=False)

            if not wait_until(exited, graceful_timeout, clock=clock, sleep=sleep):
                logger.info("Graceful stop timed out, forcing")
                report.forced = True
                controller.stop(force=True)
                if not wait_until(exited, forced_timeout, clock=clock, sleep=sleep):
                    logger.warning("Application still running after forced stop")
    except (psutil.Error, OSError) as e:
        logger.warning(f"Failed to stop application: {e}")
        report.stop_failed = True
        report.error = str(e)
        return report

    if report.was_running:
        sleep(settle_delay)

    try:
        controller.launch()
        report.launched = True
    except (OSError, subprocess.CalledProcessError) as e:
        logger.warning(f"Failed to launch application: {e}")
        report.error = str(e)

    return report
