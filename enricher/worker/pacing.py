import time
from collections.abc import Callable


class PacingPolicy:
    """Fixed courtesy delay between remote calls. No backoff, no jitter."""

    def __init__(
        self,
        delay_seconds: float,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.delay_seconds = delay_seconds
        self._sleep = sleep

    def wait(self) -> None:
        if self.delay_seconds > 0:
            self._sleep(self.delay_seconds)
