"""Progress reporting with cooperative yields.

Trainers are long-running coroutines. At each progress point they call the
host's callback with the 1-based iteration number and then give control back
to the event loop once, so a UI sharing the loop stays responsive.
"""

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]

# Linear and logistic regression report every PROGRESS_STRIDE iterations.
PROGRESS_STRIDE = 5


class ProgressReporter:
    """Wraps an ``on_progress`` callback and enforces strictly increasing calls.

    Parameters
    ----------
    callback : callable, optional
        Receives the iteration number. Must not block. ``None`` disables
        reporting but the reporter still yields to the event loop.
    """

    def __init__(self, callback: Optional[ProgressCallback] = None):
        self.callback = callback
        self.last_reported = 0

    def should_report(self, iteration: int, total: int, stride: int = PROGRESS_STRIDE) -> bool:
        """True when ``iteration`` (1-based) lands on the stride or is the last one."""
        return (iteration - 1) % stride == 0 or iteration == total

    async def report(self, iteration: int) -> None:
        if iteration <= self.last_reported:
            logger.debug("Dropping out-of-order progress %d (last %d)", iteration, self.last_reported)
            return
        self.last_reported = iteration
        if self.callback is not None:
            self.callback(iteration)
        await asyncio.sleep(0)
