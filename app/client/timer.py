import threading
from typing import Callable, Protocol


class Timer(Protocol):
    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> None:
        ...


class ImmediateTimer:
    """Runs callbacks right away; used by the CLI where there is nothing to animate."""

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> None:
        callback()


class ThreadingTimer:
    """Fires callbacks after delay_ms on a background thread. No cancellation."""

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> None:
        t = threading.Timer(delay_ms / 1000, callback)
        t.daemon = True
        t.start()
