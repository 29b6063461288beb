"""
Auto-Save Module

Background tasks that simulate a delayed save of finance data. Tasks never
touch the ledger; they run on their own threads and report progress through
logging and their own state. Cancellation during the save delay is recorded
as INTERRUPTED and never escapes the task thread.
"""

from enum import Enum
from typing import List, Optional
import threading

from .logging_config import get_logger, log_action


class AutoSaveState(Enum):
    """Auto-save task lifecycle states"""
    PENDING = "pending"          # Created, not started
    RUNNING = "running"          # Simulated save in progress
    COMPLETED = "completed"      # Save delay elapsed
    INTERRUPTED = "interrupted"  # Cancelled during the save delay


TERMINAL_STATES = {AutoSaveState.COMPLETED, AutoSaveState.INTERRUPTED}


class AutoSaveTask:
    """Fire-and-forget simulated save"""

    def __init__(self, name: str, delay_seconds: float = 1.0, daemon: bool = False):
        self.name = name
        self.delay_seconds = delay_seconds
        self.daemon = daemon
        self._state = AutoSaveState.PENDING
        self._lock = threading.Lock()
        self._cancelled = threading.Event()
        self._finished = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.logger = get_logger("finance.autosave")

    @property
    def state(self) -> AutoSaveState:
        with self._lock:
            return self._state

    @property
    def is_finished(self) -> bool:
        return self._finished.is_set()

    def _transition(self, expected: AutoSaveState, new_state: AutoSaveState) -> None:
        with self._lock:
            if self._state != expected:
                raise RuntimeError(
                    f"{self.name}: cannot move from {self._state.value} to {new_state.value}"
                )
            self._state = new_state

    def run(self) -> None:
        """Run the simulated save on the calling thread"""
        self._transition(AutoSaveState.PENDING, AutoSaveState.RUNNING)
        log_action(self.logger, "info", f"{self.name} is auto-saving finance data...",
                   action="autosave.start", resource=self.name)

        try:
            if self._cancelled.wait(self.delay_seconds):
                self._transition(AutoSaveState.RUNNING, AutoSaveState.INTERRUPTED)
                log_action(self.logger, "warning", f"{self.name} was interrupted before finishing.",
                           action="autosave.interrupted", resource=self.name)
            else:
                self._transition(AutoSaveState.RUNNING, AutoSaveState.COMPLETED)
                log_action(self.logger, "info", f"{self.name} finished auto-saving.",
                           action="autosave.complete", resource=self.name)
        finally:
            self._finished.set()

    def start(self) -> threading.Thread:
        """Run the task on its own thread and return without waiting"""
        with self._lock:
            if self._thread is not None:
                raise RuntimeError(f"{self.name} has already been started")
            self._thread = threading.Thread(target=self.run, name=self.name, daemon=self.daemon)
        self._thread.start()
        return self._thread

    def cancel(self) -> None:
        """Interrupt the task if it is still waiting out its save delay"""
        self._cancelled.set()

    def wait(self, timeout: Optional[float] = None) -> AutoSaveState:
        """Block until the task reaches a terminal state or timeout elapses"""
        self._finished.wait(timeout)
        return self.state


def start_autosave_tasks(count: int, delay_seconds: float = 1.0,
                         prefix: str = "AutoSave", daemon: bool = False) -> List[AutoSaveTask]:
    """
    Spawn count auto-save tasks named <prefix>-1..<prefix>-N

    Returns the started tasks; nothing waits on them.
    """
    tasks = [
        AutoSaveTask(f"{prefix}-{i}", delay_seconds=delay_seconds, daemon=daemon)
        for i in range(1, count + 1)
    ]
    for task in tasks:
        task.start()
    return tasks
