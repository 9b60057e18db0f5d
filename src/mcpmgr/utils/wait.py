# Bounded polling primitive
import time
from collections.abc import Callable

# ABOUTME: Default gap between liveness checks (seconds)
POLL_INTERVAL = 0.5


def wait_until(
    predicate: Callable[[], bool],
    timeout: float,
    interval: float = POLL_INTERVAL,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """Poll predicate until it returns True or timeout elapses.

    ABOUTME: Checks first, then sleeps a fixed interval between checks
    ABOUTME: clock and sleep are injectable so tests never block

    Args:
        predicate: Condition to wait for
        timeout: Deadline in seconds, measured with clock
        interval: Seconds to sleep between checks
        clock: Monotonic time source
        sleep: Sleep function

    Returns:
        True as soon as predicate holds, False once the deadline passes
    """
    deadline = clock() + timeout
    while clock() < deadline:
        if predicate():
            return True
        sleep(interval)
    return False
