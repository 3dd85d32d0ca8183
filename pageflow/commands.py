"""
Command Queue

Every browser or network action issued by a page object or API helper is
enqueued here and executed in strict FIFO order.

In autoflush mode (the default) each command runs as soon as it is
enqueued, which is what the Playwright sync API expects. With
``autoflush=False`` commands collect until ``flush()`` is called, which
lets unit tests inspect ordering without touching a browser.
"""
import logging
from collections import deque
from typing import Any, Callable, Deque, List

logger = logging.getLogger(__name__)

_PENDING = object()


class Command:
    """A queued action."""

    def __init__(self, name: str, fn: Callable, args: tuple = (), kwargs: dict = None):
        self.name = name
        self.fn = fn
        self.args = args
        self.kwargs = kwargs or {}
        self._result = _PENDING

    @property
    def done(self) -> bool:
        return self._result is not _PENDING

    @property
    def result(self) -> Any:
        if not self.done:
            raise RuntimeError(f"Command '{self.name}' has not run yet")
        return self._result

    def run(self) -> Any:
        self._result = self.fn(*self.args, **self.kwargs)
        return self._result

    def __repr__(self) -> str:
        return f"Command({self.name!r}, done={self.done})"


class CommandQueue:
    """FIFO queue of browser and network commands."""

    def __init__(self, autoflush: bool = True):
        self.autoflush = autoflush
        self._pending: Deque[Command] = deque()
        self.history: List[str] = []

    def __len__(self) -> int:
        return len(self._pending)

    def enqueue(self, name: str, fn: Callable, *args, **kwargs) -> Any:
        """
        Add a command to the queue.

        Returns the command's result in autoflush mode, otherwise the
        pending ``Command``.
        """
        command = Command(name, fn, args, kwargs)
        self._pending.append(command)

        if self.autoflush:
            self.flush()
            return command.result
        return command

    def flush(self) -> List[Command]:
        """
        Run every pending command in order.

        A failing command clears the rest of the queue and re-raises.
        """
        executed = []
        while self._pending:
            command = self._pending.popleft()
            logger.debug(f"Running command: {command.name}")
            try:
                command.run()
            except Exception:
                dropped = len(self._pending)
                self._pending.clear()
                if dropped:
                    logger.debug(f"Aborted {dropped} queued command(s) after '{command.name}' failed")
                raise
            self.history.append(command.name)
            executed.append(command)
        return executed

    def clear(self) -> None:
        """Drop pending commands without running them."""
        self._pending.clear()
