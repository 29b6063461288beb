"""
Finance Server Module

A single-shot TCP listener: it waits up to a fixed deadline for one client,
greets it with a fixed line and closes. If nobody connects in time it shuts
down quietly. The listening socket is released on every outcome.
"""

from enum import Enum
from typing import List, Optional, Tuple
import os
import socket
import threading

from .exceptions import BindError
from .logging_config import get_logger, log_action


class ListenerState(Enum):
    """Finance server lifecycle states"""
    IDLE = "idle"              # Not yet bound
    LISTENING = "listening"    # Bound, waiting for a client
    CONNECTED = "connected"    # Client accepted before the deadline
    TIMED_OUT = "timed_out"    # Deadline elapsed with no client
    CLOSED = "closed"          # All sockets released


VALID_TRANSITIONS = {
    ListenerState.IDLE: {ListenerState.LISTENING, ListenerState.CLOSED},
    ListenerState.LISTENING: {ListenerState.CONNECTED, ListenerState.TIMED_OUT, ListenerState.CLOSED},
    ListenerState.CONNECTED: {ListenerState.CLOSED},
    ListenerState.TIMED_OUT: {ListenerState.CLOSED},
    ListenerState.CLOSED: set(),
}


def _check_deadline(deadline: float) -> float:
    if deadline is None or deadline < 0:
        raise ValueError(f"Listener deadline must be zero or positive, got {deadline}")
    return deadline


class BoundedListener:
    """
    Accepts at most one connection within a deadline

    Usage:
        listener = BoundedListener(port=5678, deadline=5.0)
        listener.launch()   # returns immediately
    """

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 5678,
        deadline: float = 5.0,
        greeting: str = "Connected to Finance Server",
        daemon: bool = False
    ):
        self.host = host
        self.port = port
        self.deadline = _check_deadline(deadline)
        self.greeting = greeting
        self.daemon = daemon
        self.history: List[ListenerState] = [ListenerState.IDLE]
        self.address: Optional[Tuple[str, int]] = None
        self.error: Optional[Exception] = None
        self._sock: Optional[socket.socket] = None
        self._lock = threading.Lock()
        self._settled = threading.Event()  # bind succeeded or failed
        self._closed = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.logger = get_logger("finance.listener")

    @property
    def state(self) -> ListenerState:
        with self._lock:
            return self.history[-1]

    def _transition(self, new_state: ListenerState) -> None:
        with self._lock:
            current = self.history[-1]
            if new_state not in VALID_TRANSITIONS[current]:
                raise RuntimeError(f"Invalid listener transition {current.value} -> {new_state.value}")
            self.history.append(new_state)
        if new_state == ListenerState.CLOSED:
            self._closed.set()

    def bind(self) -> Tuple[str, int]:
        """
        Bind and listen on the configured address

        Returns:
            The bound (host, port); useful when port is 0

        Raises:
            BindError: If the port cannot be acquired
        """
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            if os.name != "nt":
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self.host, self.port))
            sock.listen(1)
        except OSError as e:
            sock.close()
            error = BindError(self.host, self.port, str(e))
            self.error = error
            log_action(self.logger, "error", str(error),
                       action="listener.bind_failed", resource=f"{self.host}:{self.port}")
            self._transition(ListenerState.CLOSED)
            self._settled.set()
            raise error from e

        self._sock = sock
        self.address = sock.getsockname()[:2]
        self._transition(ListenerState.LISTENING)
        self._settled.set()
        log_action(self.logger, "info", f"Finance Server started on port {self.address[1]}",
                   action="listener.start", resource=f"{self.address[0]}:{self.address[1]}",
                   extra={"deadline_seconds": self.deadline})
        return self.address

    def serve(self) -> ListenerState:
        """
        Wait up to the deadline for one client, greet it, then close

        Returns:
            The outcome state (CONNECTED or TIMED_OUT) before closing
        """
        sock = self._sock
        if sock is None:
            raise RuntimeError("Listener must be bound before serving")

        outcome = None
        try:
            self.logger.info(f"Waiting for client connection for up to {self.deadline} seconds...")
            # A zero deadline makes the socket non-blocking: accept only an
            # already queued client
            sock.settimeout(self.deadline)
            try:
                client, peer = sock.accept()
            except (socket.timeout, BlockingIOError):
                outcome = ListenerState.TIMED_OUT
                self._transition(outcome)
                log_action(self.logger, "info", "No client connected. Closing server.",
                           action="listener.timeout")
                return outcome

            client.setblocking(True)
            with client:
                outcome = ListenerState.CONNECTED
                self._transition(outcome)
                log_action(self.logger, "info", f"Client connected from {peer[0]}:{peer[1]}",
                           action="listener.connected", resource=f"{peer[0]}:{peer[1]}")
                client.sendall(f"{self.greeting}\n".encode("utf-8"))
            return outcome
        finally:
            sock.close()
            self._sock = None
            self._transition(ListenerState.CLOSED)
            self.logger.info("Finance Server closed")

    def start(self, deadline: Optional[float] = None) -> ListenerState:
        """
        Bind and serve on the calling thread; blocks for up to the deadline

        Raises:
            BindError: If the port cannot be acquired
        """
        if deadline is not None:
            self.deadline = _check_deadline(deadline)
        self.bind()
        return self.serve()

    def _run(self) -> None:
        try:
            self.start()
        except BindError:
            # Already recorded and logged by bind(); ends this thread only
            pass
        except OSError as e:
            self.error = e
            self.logger.exception("Finance Server failed while serving")

    def launch(self) -> threading.Thread:
        """Run start() on a dedicated thread and return without waiting"""
        with self._lock:
            if self._thread is not None:
                raise RuntimeError("Listener has already been launched")
            self._thread = threading.Thread(target=self._run, name="FinanceServer", daemon=self.daemon)
        self._thread.start()
        return self._thread

    def wait_until_listening(self, timeout: Optional[float] = None) -> bool:
        """Block until bind has been attempted; True if the listener is accepting"""
        self._settled.wait(timeout)
        return self.address is not None

    def wait(self, timeout: Optional[float] = None) -> ListenerState:
        """Block until the listener is closed or timeout elapses"""
        self._closed.wait(timeout)
        return self.state

    @property
    def outcome(self) -> Optional[ListenerState]:
        """CONNECTED or TIMED_OUT once decided, otherwise None"""
        with self._lock:
            for state in (ListenerState.CONNECTED, ListenerState.TIMED_OUT):
                if state in self.history:
                    return state
        return None
