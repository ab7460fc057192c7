"""Progress reporting for long-running branch operations"""
from threading import Lock
from typing import Optional, Protocol

from rich.console import Console
from rich.status import Status

from branch_axe.constants import SYMBOL_ERROR, SYMBOL_SUCCESS


class ProgressReporter(Protocol):
    """Observer notified as an operation moves through its phases."""

    def start(self, msg: str) -> None:
        ...

    def update(self, msg: str) -> None:
        ...

    def stop(self, msg: str) -> None:
        ...

    def stop_with_error(self, msg: str) -> None:
        ...


class SilentReporter:
    """Reporter that discards every notification."""

    def start(self, msg: str) -> None:
        pass

    def update(self, msg: str) -> None:
        pass

    def stop(self, msg: str) -> None:
        pass

    def stop_with_error(self, msg: str) -> None:
        pass


class RichProgressReporter:
    """Reporter that shows a spinner while a phase runs and a result line when it ends.

    update() is called from worker threads, so spinner state is guarded
    by a lock.
    """

    def __init__(self, console: Optional[Console] = None, no_color: bool = False):
        self.console = console or Console(stderr=True, no_color=no_color, highlight=False)
        self.no_color = no_color
        self._status: Optional[Status] = None
        self._lock = Lock()

    def start(self, msg: str) -> None:
        with self._lock:
            if self._status is not None:
                self._status.stop()
            self._status = self.console.status(msg, spinner="dots")
            self._status.start()

    def update(self, msg: str) -> None:
        with self._lock:
            if self._status is not None:
                self._status.update(msg)

    def stop(self, msg: str) -> None:
        self._finish(SYMBOL_SUCCESS, "green", msg)

    def stop_with_error(self, msg: str) -> None:
        self._finish(SYMBOL_ERROR, "red", msg)

    def _finish(self, symbol: str, color: str, msg: str) -> None:
        with self._lock:
            if self._status is not None:
                self._status.stop()
                self._status = None
        if self.no_color:
            self.console.print(f"{symbol} {msg}", markup=False)
        else:
            self.console.print(f"[{color}]{symbol}[/{color}] {msg}")
